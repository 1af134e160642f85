"""Task-related Pydantic models."""

from datetime import date, datetime
from enum import Enum, IntEnum
from typing import Any

from pydantic import BaseModel, Field

from ..config import settings


class Priority(IntEnum):
    """Task priority levels."""

    NONE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3


class TaskStatus(str, Enum):
    """Lifecycle states of a task."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ARCHIVED = "archived"


class ExtractedTask(BaseModel):
    """Task fields extracted from free text, before persistence."""

    title: str = Field(..., description="First sentence or clause of the input")
    description: str | None = Field(None, description="Remaining text after the title")
    priority: int = Field(Priority.NONE, ge=0, le=3, description="0=None, 1=Low, 2=Medium, 3=High")
    due_date: date | None = Field(None, description="Due date referenced in the text")
    estimate: int | None = Field(None, description="Time estimate in minutes")
    reminders: list[str] = Field(default_factory=list, description="Reminder times as HH:MM")
    status: str = Field(TaskStatus.PENDING.value, description="Initial task status")
    list_id: int | None = Field(None, description="Target list, passed through unchanged")


class TaskParseRequest(BaseModel):
    """Request to preview extraction without creating a task."""

    text: str = Field(
        ...,
        description="Raw text input like 'Buy milk tomorrow - urgent'",
        min_length=1,
        max_length=settings.max_input_length,
    )


class NaturalLanguageTaskRequest(BaseModel):
    """Request to create a task from natural language input."""

    # Blank input is reported as 400 by the route, so no min_length here
    natural_language_input: str = Field(
        ...,
        description="Free text like 'Finish the report by tomorrow - urgent, 2 hours'",
        max_length=settings.max_input_length,
    )
    list_id: int | None = Field(None, description="List to create the task in")


class TaskCreateRequest(BaseModel):
    """Request to create a task from explicit fields."""

    list_id: int | None = Field(None, description="List the task belongs to")
    title: str = Field(..., description="Task title")
    description: str | None = Field(None, description="Task description")
    due_date: date | None = Field(None, description="Due date in YYYY-MM-DD format")
    deadline: date | None = Field(None, description="Hard deadline in YYYY-MM-DD format")
    reminders: list[str] | None = Field(None, description="Reminder times as HH:MM")
    estimate: int | None = Field(None, description="Estimated time in minutes")
    actual_time: int | None = Field(None, description="Actual time spent in minutes")
    priority: int | None = Field(None, description="0=None, 1=Low, 2=Medium, 3=High")
    recurring: str | None = Field(None, description="Recurrence pattern (daily, weekly, ...)")
    status: TaskStatus | None = Field(None, description="Initial status, defaults to pending")


class TaskUpdateRequest(BaseModel):
    """Partial update of a task; only fields sent in the request change."""

    list_id: int | None = Field(None, description="List the task belongs to")
    title: str | None = Field(None, description="Task title")
    description: str | None = Field(None, description="Task description")
    due_date: date | None = Field(None, description="Due date in YYYY-MM-DD format")
    deadline: date | None = Field(None, description="Hard deadline in YYYY-MM-DD format")
    reminders: list[str] | None = Field(None, description="Reminder times as HH:MM")
    estimate: int | None = Field(None, description="Estimated time in minutes")
    actual_time: int | None = Field(None, description="Actual time spent in minutes")
    priority: int | None = Field(None, description="0=None, 1=Low, 2=Medium, 3=High")
    recurring: str | None = Field(None, description="Recurrence pattern (daily, weekly, ...)")
    status: TaskStatus | None = Field(None, description="New status")


class Task(BaseModel):
    """A stored task."""

    id: int
    user_id: int
    list_id: int | None = None
    title: str
    description: str | None = None
    due_date: date | None = None
    deadline: date | None = None
    reminders: list[str] = Field(default_factory=list)
    estimate: int | None = None
    actual_time: int | None = None
    priority: int = Priority.NONE
    recurring: str | None = None
    status: TaskStatus = TaskStatus.PENDING
    created_at: datetime
    updated_at: datetime


class TaskLog(BaseModel):
    """Audit entry recorded against a task."""

    id: int
    task_id: int
    action: str = Field(..., description="create or update")
    changes: dict[str, Any] | None = None
    created_at: datetime


class NaturalLanguageTaskResponse(BaseModel):
    """Response from natural language task creation."""

    success: bool
    task: Task
    parsed_data: ExtractedTask
