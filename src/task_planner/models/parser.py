"""Vocabulary and pattern configuration for the natural language parser."""

from pydantic import BaseModel, ConfigDict, Field

from .task import Priority


class PriorityTier(BaseModel):
    """Keywords that map text to one priority level."""

    model_config = ConfigDict(frozen=True)

    level: Priority
    keywords: tuple[str, ...]


class ParserConfig(BaseModel):
    """Keyword tables and patterns used by the extractor.

    Tiers and relative days are evaluated in the order given; the first hit
    wins. The model is frozen so compiled matchers can be cached per config.
    """

    model_config = ConfigDict(frozen=True)

    priority_tiers: tuple[PriorityTier, ...] = (
        PriorityTier(
            level=Priority.HIGH,
            keywords=("urgent", "important", "critical", "asap", "priority", "immediately", "high"),
        ),
        PriorityTier(
            level=Priority.MEDIUM,
            keywords=("soon", "moderate", "medium", "significant"),
        ),
        PriorityTier(
            level=Priority.LOW,
            keywords=("eventually", "later", "whenever", "low", "optional", "task"),
        ),
    )
    default_priority: Priority = Priority.NONE

    # (word, offset in days from today)
    relative_days: tuple[tuple[str, int], ...] = (
        ("today", 0),
        ("tomorrow", 1),
        ("yesterday", -1),
    )
    weekday_names: tuple[str, ...] = Field(
        ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"),
        min_length=7,
        max_length=7,
    )
    month_names: tuple[str, ...] = Field(
        (
            "january", "february", "march", "april", "may", "june",
            "july", "august", "september", "october", "november", "december",
        ),
        min_length=12,
        max_length=12,
    )

    # Numeric dates: groups are (month, day, year) and (year, month, day)
    slash_date_pattern: str = r"(\d{1,2})/(\d{1,2})/(\d{2,4})"
    iso_date_pattern: str = r"(\d{4})-(\d{1,2})-(\d{1,2})"

    # Title splitting
    separator_pattern: str = r"\s*[-:–—]\s*"
    sentence_end_chars: str = ".!?"

    # Estimates: group 1 is the amount, group 2 the unit
    estimate_pattern: str = r"(\d+)\s*(hours?|hrs?|minutes?|mins?)"
    hour_units: tuple[str, ...] = ("hour", "hr")

    # Reminders: group 1 is the text handed to the time parser
    reminder_pattern: str = r"remind(?:er)?\s+(?:me|at)\s+([\w\s:]+)"


DEFAULT_PARSER_CONFIG = ParserConfig()
