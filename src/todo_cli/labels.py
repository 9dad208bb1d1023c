# src/todo_cli/labels.py

"""User-facing message table with {{placeholder}} substitution."""

from __future__ import annotations

TABLES: dict[str, str] = {
    "create.title": "Enter task title: ",
    "create.description": "Enter task description: ",
    "create.dueDate": "Enter task due date (YYYY-MM-DD) [Default: {{value}}]: ",
    "create.dueTime": "Enter task due time (HH:MM) [Default: {{value}}]: ",
    "create.invalidDateTime": (
        "Invalid date or time format. Please use YYYY-MM-DD for date and HH:MM for time."
    ),
    "create.priority": "Enter task priority (1: Low, 2: Medium, 3: High) [Default: 1]: ",
    "create.invalidPriority": "Invalid priority. Default to Low (1)",
    "create.success": "Task added successfully!",
    "create.duplicate": "A task with this ID already exists.",
    "update.id": "Enter task ID to update: ",
    "update.title": "Update title (current: {{value}}):\n\t",
    "update.description": "Update description (current: {{value}}):\n\t",
    "update.dueDate": "Update due date (YYYY-MM-DD HH:MM, current: {{value}}):\n\t",
    "update.priority": "Update priority (1: Low, 2: Medium, 3: High, current: {{value}})\n\t",
    "update.invalidDate": "Invalid date, keeping the current due date.",
    "update.skipField": "Press Enter to skip updating a field.",
    "update.success": "Task updated successfully.",
    "delete.confirm": (
        "\t⚠️ WARNING: This action is irreversible.\n"
        '\tAre you sure you want to permanently delete the task "{{title}}" (ID: {{id}})? (y/N): '
    ),
    "delete.success": "\tTask deleted successfully.",
    "delete.canceled": "\tDelete operation canceled.",
    "general.taskNotFound": "No task found with the id starting with {{value}}",
    "general.ambiguousId": "Multiple tasks found with the id starting with {{value}}; use a longer prefix.",
    "general.invalidId": "Provided ID prefix must be a string.",
    "general.ioError": "Could not save tasks. Check permissions of {{value}}.",
    "general.unknownStatus": "The status catalog has no '{{value}}' status.",
    "general.invalidField": "Invalid field value for task {{value}}.",
    "general.taskEmpty": "No tasks found",
    "general.missingId": "Missing task ID. Usage: {{value}}",
    "general.internalError": "Internal error while handling the command.",
    "start": "Starting on task {{value}}",
    "finish": "Finished task {{value}}",
    "version": "TODO python CLI, version {{value}}",
    "detail.header": "\nTask Details:\n-------------",
    "detail.id": "ID         : {{value}}",
    "detail.title": "Title      : {{value}}",
    "detail.description": "Description: {{value}}",
    "detail.createdAt": "Created at : {{value}}",
    "detail.updatedAt": "Updated at : {{value}}",
    "detail.due": "Due        : {{value}}",
    "detail.status": "Status     : {{value}}",
    "detail.priority": "Priority   : {{value}}",
    "detail.notAvailable": "Not available",
    "detail.footer": "-------------\n",
}


def label(key: str, **values: object) -> str:
    """Look up `key` (falling back to the key itself) and fill {{name}} placeholders."""
    text = TABLES.get(key, key)
    for name, value in values.items():
        text = text.replace("{{" + name + "}}", str(value))
    return text
