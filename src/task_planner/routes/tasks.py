"""Task parsing and creation endpoints."""

import logging

from fastapi import APIRouter, HTTPException, Response

from ..config import settings
from ..models.task import (
    ExtractedTask,
    NaturalLanguageTaskRequest,
    NaturalLanguageTaskResponse,
    Task,
    TaskCreateRequest,
    TaskLog,
    TaskParseRequest,
    TaskStatus,
    TaskUpdateRequest,
)
from ..services.nl_parser import parse_natural_language_task
from ..services.task_store import TaskValidationError, get_task_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tasks"])


@router.post("/parse", response_model=ExtractedTask, response_model_exclude_none=True)
async def parse_task(request: TaskParseRequest) -> ExtractedTask:
    """
    Preview the fields extracted from natural language input.

    Nothing is stored. Extracts:
    - Title and description
    - Priority (urgent, soon, later, ...)
    - Due date (today, friday, 3/15/2025, March 15th, ...)
    - Time estimate (2 hours, 30 mins)
    - Reminder (remind me at 9am)
    """
    if not request.text.strip():
        raise HTTPException(status_code=400, detail="Text is required")

    return parse_natural_language_task(request.text)


@router.post(
    "/natural-language",
    response_model=NaturalLanguageTaskResponse,
    response_model_exclude_none=True,
    status_code=201,
)
async def create_task_from_natural_language(
    request: NaturalLanguageTaskRequest,
) -> NaturalLanguageTaskResponse:
    """
    Parse natural language input and create a task from it.

    Example input: "Finish the report by tomorrow - urgent, should take 2 hours"
    """
    if not request.natural_language_input.strip():
        raise HTTPException(status_code=400, detail="Natural language input is required")

    parsed = parse_natural_language_task(request.natural_language_input, list_id=request.list_id)
    if not parsed.title.strip():
        raise HTTPException(status_code=400, detail="Could not extract task title from input")

    create_request = TaskCreateRequest(
        list_id=parsed.list_id,
        title=parsed.title,
        description=parsed.description,
        due_date=parsed.due_date,
        priority=parsed.priority,
        estimate=parsed.estimate,
        reminders=parsed.reminders,
        status=parsed.status,
    )

    try:
        task = get_task_store().create_task(settings.default_user_id, create_request)
    except TaskValidationError:
        raise
    except Exception as e:
        logger.exception("Error creating task from natural language")
        raise HTTPException(status_code=500, detail=f"Failed to create task: {e}")

    return NaturalLanguageTaskResponse(success=True, task=task, parsed_data=parsed)


@router.post("", response_model=Task, status_code=201)
async def create_task(request: TaskCreateRequest) -> Task:
    """Create a task from explicit fields."""
    return get_task_store().create_task(settings.default_user_id, request)


@router.get("", response_model=list[Task])
async def list_tasks(
    list_id: int | None = None,
    priority: int | None = None,
    status: TaskStatus | None = None,
) -> list[Task]:
    """List tasks, optionally filtered by list, priority or status."""
    return get_task_store().list_tasks(
        settings.default_user_id, list_id=list_id, priority=priority, status=status
    )


@router.get("/{task_id}", response_model=Task)
async def get_task(task_id: int) -> Task:
    """Get a single task."""
    return get_task_store().get_task(task_id, settings.default_user_id)


@router.patch("/{task_id}", response_model=Task)
async def update_task(task_id: int, request: TaskUpdateRequest) -> Task:
    """
    Update the fields sent in the request body.

    Changes to title, description, priority or status are recorded in the
    task's log.
    """
    return get_task_store().update_task(task_id, settings.default_user_id, request)


@router.delete("/{task_id}", status_code=204)
async def delete_task(task_id: int) -> Response:
    """Delete a task and its history."""
    get_task_store().delete_task(task_id, settings.default_user_id)
    return Response(status_code=204)


@router.get("/{task_id}/logs", response_model=list[TaskLog])
async def get_task_logs(task_id: int) -> list[TaskLog]:
    """Get the audit history of a task."""
    return get_task_store().get_task_logs(task_id, settings.default_user_id)
