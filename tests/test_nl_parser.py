"""Tests for natural language task extraction."""

from datetime import date

import pytest

from src.task_planner.models.parser import DEFAULT_PARSER_CONFIG, ParserConfig, PriorityTier
from src.task_planner.models.task import Priority
from src.task_planner.services.nl_parser import (
    build_date_rules,
    extract_due_date,
    extract_priority,
    extract_reminders,
    extract_time,
    extract_time_estimate,
    parse_natural_language_task,
    split_title_description,
)


# --- Title / description ---


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Buy milk - also get eggs and bread", ("Buy milk", "also get eggs and bread")),
        ("Groceries: milk, eggs", ("Groceries", "milk, eggs")),
        ("Call mom — about dinner", ("Call mom", "about dinner")),
        ("Call mom – about dinner", ("Call mom", "about dinner")),
        ("Plan trip - book flights\nand hotel", ("Plan trip", "book flights and hotel")),
        ("Plan trip -\nbook flights", ("Plan trip", "book flights")),
        ("Call the bank. Ask about the fee", ("Call the bank", "Ask about the fee")),
        ("Can we ship it? Check with QA", ("Can we ship it", "Check with QA")),
        ("Ship it!", ("Ship it", None)),
        ("Pack bags\nsocks\nshirts", ("Pack bags", "socks\nshirts")),
        ("  water plants  ", ("water plants", None)),
        ("- buy milk", ("- buy milk", None)),
    ],
)
def test_split_title_description(text: str, expected: tuple[str, str | None]) -> None:
    """Test the three splitting rules in order."""
    assert split_title_description(text) == expected


def test_split_separator_without_description() -> None:
    """Test that a trailing separator leaves no description."""
    assert split_title_description("Buy milk -") == ("Buy milk", None)


# --- Priority ---


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("urgent task", 3),
        ("ASAP please", 3),
        ("finish soon", 2),
        ("Whenever, medium effort", 2),
        ("do it eventually", 1),
        ("optional cleanup", 1),
        ("just a note", 0),
    ],
)
def test_extract_priority(text: str, expected: int) -> None:
    """Test keyword tiers, checked high then medium then low."""
    assert extract_priority(text) == expected


def test_extract_priority_alternate_vocabulary() -> None:
    """Test that keyword tiers come from the injected config."""
    config = ParserConfig(priority_tiers=(PriorityTier(level=Priority.HIGH, keywords=("fire",)),))

    assert extract_priority("house on fire", config) == 3
    assert extract_priority("urgent", config) == 0


def test_extract_priority_configured_default() -> None:
    """Test that the fallback priority is configurable."""
    config = ParserConfig(default_priority=Priority.MEDIUM)
    assert extract_priority("just a note", config) == 2


# --- Due date ---


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("call today", date(2024, 1, 10)),
        ("call tomorrow", date(2024, 1, 11)),
        ("that was yesterday", date(2024, 1, 9)),
        ("today or tomorrow", date(2024, 1, 10)),
        ("submit by friday", date(2024, 1, 12)),
        ("standup monday", date(2024, 1, 15)),
        ("review on Wednesday", date(2024, 1, 17)),
        ("Due 3/15/2025", date(2025, 3, 15)),
        ("Due 3/15/25", date(2025, 3, 15)),
        ("Due 2024-02-29", date(2024, 2, 29)),
        ("Party on March 5th", date(2024, 3, 5)),
        ("party on january 3", date(2024, 1, 3)),
        ("Friday 3/15/2025", date(2024, 1, 12)),
        ("13/45/2024 or 2024-02-01", date(2024, 2, 1)),
    ],
)
def test_extract_due_date(text: str, expected: date, wednesday: date) -> None:
    """Test due date rules against a frozen Wednesday."""
    assert extract_due_date(text, today=wednesday) == expected


def test_weekday_never_resolves_to_today() -> None:
    """Test that naming today's weekday means one week out."""
    monday = date(2024, 1, 8)
    assert extract_due_date("let's meet monday", today=monday) == date(2024, 1, 15)


def test_extract_due_date_no_match(wednesday: date) -> None:
    """Test that text without a date yields None."""
    assert extract_due_date("just a note", today=wednesday) is None
    assert extract_due_date("February 30th", today=wednesday) is None


def test_extract_due_date_alternate_relative_words(wednesday: date) -> None:
    """Test that relative words come from the injected config."""
    config = ParserConfig(relative_days=(("today", 0), ("next week", 7)))
    assert extract_due_date("ship next week", today=wednesday, config=config) == date(2024, 1, 17)


def test_date_rules_are_ordered() -> None:
    """Test that relative words come before weekdays and numeric dates."""
    names = [rule.name for rule in build_date_rules(DEFAULT_PARSER_CONFIG)]
    assert names[:4] == ["today", "tomorrow", "yesterday", "monday"]
    assert names[-3:] == ["slash_date", "iso_date", "month_day"]


# --- Estimate ---


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("review doc - 2 hours", 120),
        ("quick note - 15 minutes", 15),
        ("1 hr call", 60),
        ("3hrs of work", 180),
        ("45 mins", 45),
        ("20min walk", 20),
        ("2 hours then 30 minutes", 120),
        ("no estimate here", None),
    ],
)
def test_extract_time_estimate(text: str, expected: int | None) -> None:
    """Test estimate conversion to minutes."""
    assert extract_time_estimate(text) == expected


# --- Time and reminders ---


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("9:30", "09:30"),
        ("9:30pm", "21:30"),
        ("12:15 am", "00:15"),
        ("12pm", "12:00"),
        ("at 7 am", "07:00"),
        ("noon", None),
        ("25:99", None),
        ("24:00", None),
        ("9:75am", None),
    ],
)
def test_extract_time(text: str, expected: str | None) -> None:
    """Test normalization to 24-hour HH:MM."""
    assert extract_time(text) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Call dentist, remind me at 9am", ["09:00"]),
        ("reminder at 5:30 pm", ["17:30"]),
        ("remind me tomorrow", []),
        ("remind me at 9am and remind me at 5pm", ["09:00"]),
        ("nothing to see", []),
        ("remind me at 25:99", []),
    ],
)
def test_extract_reminders(text: str, expected: list[str]) -> None:
    """Test that at most one reminder is extracted."""
    assert extract_reminders(text) == expected


# --- Full extraction ---


def test_parse_end_to_end(wednesday: date) -> None:
    """Test that every field is extracted from one input."""
    task = parse_natural_language_task(
        "Finish the report by tomorrow - urgent, should take 2 hours", today=wednesday
    )

    assert task.title == "Finish the report by tomorrow"
    assert task.description == "urgent, should take 2 hours"
    assert task.priority == 3
    assert task.due_date == date(2024, 1, 11)
    assert task.estimate == 120
    assert task.reminders == []
    assert task.status == "pending"


def test_parse_no_matches(wednesday: date) -> None:
    """Test that plain text leaves optional fields absent."""
    task = parse_natural_language_task("just a note", today=wednesday)

    assert task.title == "just a note"
    assert task.priority == 0
    assert task.due_date is None
    assert task.estimate is None
    assert task.reminders == []
    assert task.model_dump(exclude_none=True) == {
        "title": "just a note",
        "priority": 0,
        "reminders": [],
        "status": "pending",
    }


def test_parse_passes_list_id_through(wednesday: date) -> None:
    """Test that list_id is carried unchanged."""
    task = parse_natural_language_task("Buy milk", list_id=7, today=wednesday)
    assert task.list_id == 7


def test_parse_with_reminder(wednesday: date) -> None:
    """Test reminder extraction through the full parser."""
    task = parse_natural_language_task("Pay rent friday, remind me at 8:15am", today=wednesday)

    assert task.due_date == date(2024, 1, 12)
    assert task.reminders == ["08:15"]


@pytest.mark.parametrize(
    "text",
    [
        "Buy milk",
        "urgent!!!",
        "- leading dash",
        ".",
        "a\n\n\nb",
        "Fix bug: crash on save. Also check logs",
        "  tomorrow 3/4/24 remind me at 6pm for 2 hrs  ",
    ],
)
def test_parse_invariants(text: str, wednesday: date) -> None:
    """Test that title is non-empty and trimmed, priority in range, output deterministic."""
    first = parse_natural_language_task(text, today=wednesday)
    second = parse_natural_language_task(text, today=wednesday)

    assert first.title
    assert first.title == first.title.strip()
    assert first.priority in {0, 1, 2, 3}
    assert first == second
