"""Local task tracker: JSON-backed task store with short-id prefix resolution."""

__version__ = "1.1.0"
