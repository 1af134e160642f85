"""Pydantic models for request/response schemas and parser configuration."""

from .parser import DEFAULT_PARSER_CONFIG, ParserConfig, PriorityTier
from .task import (
    ExtractedTask,
    NaturalLanguageTaskRequest,
    NaturalLanguageTaskResponse,
    Priority,
    Task,
    TaskCreateRequest,
    TaskLog,
    TaskParseRequest,
    TaskStatus,
    TaskUpdateRequest,
)

__all__ = [
    "ExtractedTask",
    "NaturalLanguageTaskRequest",
    "NaturalLanguageTaskResponse",
    "Priority",
    "Task",
    "TaskCreateRequest",
    "TaskLog",
    "TaskParseRequest",
    "TaskStatus",
    "TaskUpdateRequest",
    "ParserConfig",
    "PriorityTier",
    "DEFAULT_PARSER_CONFIG",
]
