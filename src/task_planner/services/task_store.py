"""In-memory task storage with validation and audit logs."""

import logging
import threading
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any

from ..models.task import Priority, Task, TaskCreateRequest, TaskLog, TaskStatus, TaskUpdateRequest

logger = logging.getLogger(__name__)


class TaskValidationError(ValueError):
    """Raised when task input fails validation."""


class TaskNotFoundError(LookupError):
    """Raised when a task does not exist for the requesting user."""


class TaskStore:
    """Process-local task storage.

    Tasks are scoped by user id. Nothing survives a restart.
    """

    # Fields recorded as {"from": ..., "to": ...} in update logs
    LOGGED_FIELDS = ("title", "description", "priority", "status")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tasks: dict[int, Task] = {}
        self._logs: dict[int, list[TaskLog]] = {}
        self._next_task_id = 1
        self._next_log_id = 1

    @staticmethod
    def _validate(data: TaskCreateRequest | TaskUpdateRequest) -> None:
        if data.priority is not None and not Priority.NONE <= data.priority <= Priority.HIGH:
            raise TaskValidationError("Priority must be between 0 and 3")
        if data.estimate is not None and data.estimate < 0:
            raise TaskValidationError("Estimate must be a positive number")
        if data.actual_time is not None and data.actual_time < 0:
            raise TaskValidationError("Actual time must be a positive number")

    def _append_log(self, task_id: int, action: str, changes: dict[str, Any] | None) -> TaskLog:
        # Caller holds the lock
        entry = TaskLog(
            id=self._next_log_id,
            task_id=task_id,
            action=action,
            changes=changes,
            created_at=datetime.now(timezone.utc),
        )
        self._next_log_id += 1
        self._logs.setdefault(task_id, []).append(entry)
        return entry

    def _owned_task(self, task_id: int, user_id: int) -> Task:
        # Caller holds the lock
        task = self._tasks.get(task_id)
        if task is None or task.user_id != user_id:
            raise TaskNotFoundError(f"Task {task_id} not found")
        return task

    def create_task(self, user_id: int, data: TaskCreateRequest) -> Task:
        """
        Validate and store a new task.

        Args:
            user_id: Owner of the task
            data: Task fields; priority defaults to 0 and status to pending

        Returns:
            The stored task with id and timestamps

        Raises:
            TaskValidationError: If title, priority, estimate or actual_time is invalid
        """
        if not data.title or not data.title.strip():
            raise TaskValidationError("Task title is required")
        self._validate(data)

        with self._lock:
            now = datetime.now(timezone.utc)
            task = Task(
                id=self._next_task_id,
                user_id=user_id,
                list_id=data.list_id,
                title=data.title.strip(),
                description=data.description,
                due_date=data.due_date,
                deadline=data.deadline,
                reminders=data.reminders or [],
                estimate=data.estimate,
                actual_time=data.actual_time,
                priority=data.priority or Priority.NONE,
                recurring=data.recurring,
                status=data.status or TaskStatus.PENDING,
                created_at=now,
                updated_at=now,
            )
            self._next_task_id += 1
            self._tasks[task.id] = task
            self._append_log(
                task.id,
                "create",
                {
                    "title": task.title,
                    "description": task.description,
                    "priority": task.priority,
                    "status": task.status,
                },
            )

        logger.info(f"Created task {task.id} for user {user_id}: {task.title}")
        return task

    def get_task(self, task_id: int, user_id: int) -> Task:
        """Return a task owned by user_id, or raise TaskNotFoundError."""
        with self._lock:
            return self._owned_task(task_id, user_id)

    def list_tasks(
        self,
        user_id: int,
        list_id: int | None = None,
        priority: int | None = None,
        status: TaskStatus | None = None,
    ) -> list[Task]:
        """Return the user's tasks in creation order, optionally filtered."""
        with self._lock:
            tasks = [task for task in self._tasks.values() if task.user_id == user_id]

        if list_id is not None:
            tasks = [task for task in tasks if task.list_id == list_id]
        if priority is not None:
            tasks = [task for task in tasks if task.priority == priority]
        if status is not None:
            tasks = [task for task in tasks if task.status == status]
        return tasks

    def delete_task(self, task_id: int, user_id: int) -> None:
        """Remove a task and its logs."""
        with self._lock:
            self._owned_task(task_id, user_id)
            del self._tasks[task_id]
            self._logs.pop(task_id, None)

        logger.info(f"Deleted task {task_id} for user {user_id}")

    def count(self) -> int:
        """Total number of stored tasks across all users."""
        with self._lock:
            return len(self._tasks)

    def update_task(self, task_id: int, user_id: int, data: TaskUpdateRequest) -> Task:
        """
        Apply the fields set in data to an existing task.

        An "update" log entry is written only when a logged field changes.

        Raises:
            TaskNotFoundError: If the task does not exist for user_id
            TaskValidationError: If title, priority, estimate or actual_time is invalid
        """
        updates = data.model_dump(exclude_unset=True)
        # These fields cannot be cleared, an explicit null leaves them alone
        for field in ("priority", "status", "reminders"):
            if field in updates and updates[field] is None:
                del updates[field]
        if "title" in updates:
            if not updates["title"] or not updates["title"].strip():
                raise TaskValidationError("Task title cannot be empty")
            updates["title"] = updates["title"].strip()
        self._validate(data)

        with self._lock:
            current = self._owned_task(task_id, user_id)
            changes = {
                field: {"from": getattr(current, field), "to": updates[field]}
                for field in self.LOGGED_FIELDS
                if field in updates and updates[field] != getattr(current, field)
            }
            updates["updated_at"] = datetime.now(timezone.utc)
            task = current.model_copy(update=updates)
            self._tasks[task_id] = task
            if changes:
                self._append_log(task_id, "update", changes)

        logger.info(f"Updated task {task_id} for user {user_id}: {sorted(changes)}")
        return task

    def get_task_logs(self, task_id: int, user_id: int) -> list[TaskLog]:
        """Return the audit entries for a task, oldest first."""
        with self._lock:
            self._owned_task(task_id, user_id)
            return list(self._logs.get(task_id, []))


@lru_cache(maxsize=1)
def get_task_store() -> TaskStore:
    """Get or create the TaskStore singleton."""
    return TaskStore()
