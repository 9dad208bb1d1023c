# src/todo_cli/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, dispatches one command, exits.
One invocation applies at most one mutation (and therefore one save).
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..cli.commands import registry as command_registry
from ..config import get_settings
from ..labels import label
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    log_dir = settings.data_dir if settings.log_file_enabled else None
    setup_logging(log_dir=log_dir, console_level=console_level)

    logger.debug("Starting %s argv=%s", settings.app_name, argv)

    state = create_initial_state(settings=settings)

    try:
        reply = command_registry.handle(state, argv)
    except (EOFError, KeyboardInterrupt):
        logger.info("Input closed, aborting.")
        print()
        return 130
    except Exception:
        logger.exception("Command handler crashed.")
        print(label("general.internalError"))
        return 1

    if reply.text:
        print(reply.text)
    return 0 if reply.ok else 1


if __name__ == "__main__":
    sys.exit(main())
