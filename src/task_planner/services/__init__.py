"""Business logic services."""

from .nl_parser import (
    extract_due_date,
    extract_priority,
    extract_reminders,
    extract_time,
    extract_time_estimate,
    parse_natural_language_task,
    split_title_description,
)
from .task_store import TaskNotFoundError, TaskStore, TaskValidationError, get_task_store

__all__ = [
    "parse_natural_language_task",
    "split_title_description",
    "extract_priority",
    "extract_due_date",
    "extract_time_estimate",
    "extract_time",
    "extract_reminders",
    "TaskStore",
    "TaskValidationError",
    "TaskNotFoundError",
    "get_task_store",
]
