# src/todo_cli/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from .. import __version__
from ..core.state import AppState
from ..labels import label
from ..tasks.task_models import MergedTask, TaskError
from ..tasks.task_service import LIST_ALL, STATUS_DONE, STATUS_IN_PROGRESS
from .prompts import DEFAULT_PRIORITY_IDS, Ask, Emit, confirm_delete, prompt_new_task, prompt_task_updates

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Reply:
    text: str
    ok: bool = True


CommandHandler = Callable[[AppState, list[str], Ask, Emit], Reply]


class CommandRegistry:
    """Flag-style command registry used by the `todo` entry point (-a, --list, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        self._aliases: dict[str, list[str]] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._handlers[f"--{key}"] = handler
        self._help[key] = help_text
        self._aliases[key] = aliases
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        argv: list[str],
        ask: Ask = input,
        emit: Emit = print,
    ) -> Reply:
        """
        Handle an argument vector like ["--detail", "abc1"].
        No arguments shows the usage text.
        """
        if not argv:
            return Reply(self.build_help())

        name = argv[0].lower()
        args = argv[1:]

        handler = self._handlers.get(name)
        if not handler:
            logger.debug("Unknown command %r", argv[0])
            return Reply(f"Unknown command: {argv[0]}\n{self.build_help()}", ok=False)

        logger.debug("Dispatching %s args=%s", name, args)
        return handler(state, args, ask, emit)

    def build_help(self) -> str:
        lines = ["Usage: todo <command> [args]", "Commands:"]
        for name, help_text in self._help.items():
            flags = " | ".join([*self._aliases.get(name, []), f"--{name}"])
            lines.append(f"  {flags:<22} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def format_date(value: datetime) -> str:
    """Render like 'Jan 5 2025 3:04 PM' in local time."""
    local = value.astimezone() if value.tzinfo is not None else value
    hour = local.hour % 12 or 12
    return f"{local:%b} {local.day} {local.year} {hour}:{local:%M} {local:%p}"


def _error_text(state: AppState, error: TaskError | None, *, prefix: object = "", status: str = "") -> str:
    if error is TaskError.IO_ERROR:
        value: object = getattr(state.settings, "tasks_path", "")
    elif error is TaskError.UNKNOWN_STATUS:
        value = status
    else:
        value = prefix
    return label((error or TaskError.NOT_FOUND).message_key, value=value)


def _priority_ids(state: AppState) -> tuple[int, ...]:
    ids = tuple(p.id for p in state.service.priorities.get_all())
    return ids or DEFAULT_PRIORITY_IDS


def _missing_id(usage: str) -> Reply:
    return Reply(label("general.missingId", value=usage), ok=False)


def render_detail(merged: MergedTask) -> str:
    task = merged.task
    na = label("detail.notAvailable")
    status = f"{merged.status.icon} {merged.status.label}" if merged.status else na
    priority = f"{merged.priority.icon} {merged.priority.label}" if merged.priority else na
    lines = [
        label("detail.header"),
        label("detail.id", value=task.id),
        label("detail.title", value=task.title),
        label("detail.description", value=task.description),
        label("detail.createdAt", value=format_date(task.created_at)),
        label("detail.updatedAt", value=format_date(task.updated_at)),
        label("detail.due", value=format_date(task.due)),
        label("detail.status", value=status),
        label("detail.priority", value=priority),
        label("detail.footer"),
    ]
    return "\n".join(lines)


def render_list_line(merged: MergedTask) -> str:
    status_icon = merged.status.icon if merged.status else ""
    priority_icon = merged.priority.icon if merged.priority else ""
    return f"[{status_icon}] {merged.id} - {merged.title} [{priority_icon}]"


def cmd_help(state: AppState, args: list[str], ask: Ask, emit: Emit) -> Reply:
    return Reply(registry.build_help())


def cmd_version(state: AppState, args: list[str], ask: Ask, emit: Emit) -> Reply:
    return Reply(label("version", value=__version__))


def cmd_add(state: AppState, args: list[str], ask: Ask, emit: Emit) -> Reply:
    fields = prompt_new_task(ask, emit, priority_ids=_priority_ids(state))
    if fields is None:
        return Reply("", ok=False)

    res = state.service.create(fields)
    if not res.ok:
        return Reply(_error_text(state, res.error), ok=False)
    return Reply(label("create.success"))


def cmd_update(state: AppState, args: list[str], ask: Ask, emit: Emit) -> Reply:
    prefix = args[0] if args else ask(label("update.id")).strip()

    current = state.service.detail(prefix)
    if current.value is None:
        return Reply(_error_text(state, current.error, prefix=prefix), ok=False)

    fields = prompt_task_updates(ask, emit, current.value, priority_ids=_priority_ids(state))
    res = state.service.update(prefix, fields)
    if not res.ok:
        return Reply(_error_text(state, res.error, prefix=prefix), ok=False)
    return Reply(label("update.success"))


def cmd_delete(state: AppState, args: list[str], ask: Ask, emit: Emit) -> Reply:
    if not args:
        return _missing_id("todo --delete <id>")
    prefix = args[0]

    current = state.service.detail(prefix)
    if current.value is None:
        return Reply(_error_text(state, current.error, prefix=prefix), ok=False)

    if not confirm_delete(ask, current.value):
        return Reply(label("delete.canceled"))

    res = state.service.delete(prefix)
    if not res.ok:
        return Reply(_error_text(state, res.error, prefix=prefix), ok=False)
    return Reply(label("delete.success"))


def cmd_finish(state: AppState, args: list[str], ask: Ask, emit: Emit) -> Reply:
    if not args:
        return _missing_id("todo --finish <id>")
    res = state.service.finish(args[0])
    if not res.ok:
        return Reply(_error_text(state, res.error, prefix=args[0], status=STATUS_DONE), ok=False)
    return Reply(label("finish", value=args[0]))


def cmd_start(state: AppState, args: list[str], ask: Ask, emit: Emit) -> Reply:
    if not args:
        return _missing_id("todo --start <id>")
    res = state.service.start(args[0])
    if not res.ok:
        return Reply(
            _error_text(state, res.error, prefix=args[0], status=STATUS_IN_PROGRESS), ok=False
        )
    return Reply(label("start", value=args[0]))


def cmd_list(state: AppState, args: list[str], ask: Ask, emit: Emit) -> Reply:
    status_filter = args[0] if args else LIST_ALL
    tasks = state.service.list(status_filter)
    if not tasks:
        return Reply(label("general.taskEmpty"))
    return Reply("\n".join(render_list_line(t) for t in tasks))


def cmd_detail(state: AppState, args: list[str], ask: Ask, emit: Emit) -> Reply:
    if not args:
        return _missing_id("todo --detail <id>")
    res = state.service.detail(args[0])
    if res.value is None:
        return Reply(_error_text(state, res.error, prefix=args[0]), ok=False)
    return Reply(render_detail(res.value))


registry.register("add", cmd_add, help_text="Add a new task", aliases=["-a"])
registry.register("update", cmd_update, help_text="Update an existing task", aliases=["-u"])
registry.register("delete", cmd_delete, help_text="Delete a task by ID", aliases=["-d"])
registry.register("finish", cmd_finish, help_text="Mark a task as done by ID", aliases=["-f"])
registry.register("list", cmd_list, help_text="List tasks (all, todo, in-progress, done)", aliases=["-l"])
registry.register("start", cmd_start, help_text="Start working on a task", aliases=["-s"])
registry.register("detail", cmd_detail, help_text="View task details", aliases=["-e"])
registry.register("version", cmd_version, help_text="View version number", aliases=["-v"])
registry.register("help", cmd_help, help_text="Show this help", aliases=["-h"])
