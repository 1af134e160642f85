"""Rule-based extraction of task fields from natural language input.

Every matcher is a plain function of its input text (plus an injected
``today`` for dates), so the same input always yields the same task.
"""

import logging
import re
from collections.abc import Callable
from datetime import date, timedelta
from functools import lru_cache

from ..models.parser import DEFAULT_PARSER_CONFIG, ParserConfig
from ..models.task import ExtractedTask

logger = logging.getLogger(__name__)

# Shared time parsing: "9:30", "9:30pm", "9 am"
_CLOCK_TIME = re.compile(r"(\d{1,2}):(\d{2})\s*(am|pm)?", re.IGNORECASE)
_HOUR_TIME = re.compile(r"(\d{1,2})\s*(am|pm)", re.IGNORECASE)

DateResolver = Callable[[re.Match[str], date], date | None]


class DateRule:
    """A single due-date matcher."""

    def __init__(self, name: str, pattern: str, resolve: DateResolver, case_sensitive: bool = False):
        self.name = name
        self.pattern = pattern
        self.resolve = resolve
        flags = 0 if case_sensitive else re.IGNORECASE
        self._compiled = re.compile(pattern, flags)

    def apply(self, text: str, today: date) -> date | None:
        """Return the date this rule finds in text, or None."""
        match = self._compiled.search(text)
        if match is None:
            return None
        return self.resolve(match, today)


def _calendar_date(year: int, month: int, day: int) -> date | None:
    try:
        return date(year, month, day)
    except ValueError:
        # e.g. 13/45/2024 - not a real date, let later rules try
        return None


def _offset_resolver(days: int) -> DateResolver:
    def resolve(match: re.Match[str], today: date) -> date | None:
        return today + timedelta(days=days)

    return resolve


def _weekday_resolver(weekday: int) -> DateResolver:
    def resolve(match: re.Match[str], today: date) -> date | None:
        # Never today: the same weekday means one week out
        days_ahead = (weekday - today.weekday()) % 7 or 7
        return today + timedelta(days=days_ahead)

    return resolve


def _resolve_slash_date(match: re.Match[str], today: date) -> date | None:
    month, day, year = (int(group) for group in match.groups())
    if year < 100:
        year += 2000
    return _calendar_date(year, month, day)


def _resolve_iso_date(match: re.Match[str], today: date) -> date | None:
    year, month, day = (int(group) for group in match.groups())
    return _calendar_date(year, month, day)


def _month_day_resolver(month_names: tuple[str, ...]) -> DateResolver:
    lowered = [name.lower() for name in month_names]

    def resolve(match: re.Match[str], today: date) -> date | None:
        month = lowered.index(match.group(1).lower()) + 1
        # Always the current year, even if the date has already passed
        return _calendar_date(today.year, month, int(match.group(2)))

    return resolve


@lru_cache(maxsize=8)
def build_date_rules(config: ParserConfig = DEFAULT_PARSER_CONFIG) -> tuple[DateRule, ...]:
    """Build the ordered due-date rule table for a parser config.

    Order: relative words, weekday names, slash dates, ISO dates, then
    "<month> <day>". The first rule that yields a date wins.
    """
    rules = [
        DateRule(name=word, pattern=re.escape(word), resolve=_offset_resolver(days))
        for word, days in config.relative_days
    ]
    rules += [
        DateRule(name=name, pattern=re.escape(name), resolve=_weekday_resolver(index))
        for index, name in enumerate(config.weekday_names)
    ]
    months = "|".join(re.escape(name) for name in config.month_names)
    rules += [
        DateRule(name="slash_date", pattern=config.slash_date_pattern, resolve=_resolve_slash_date),
        DateRule(name="iso_date", pattern=config.iso_date_pattern, resolve=_resolve_iso_date),
        DateRule(
            name="month_day",
            pattern=rf"({months})\s+(\d{{1,2}})(?:st|nd|rd|th)?",
            resolve=_month_day_resolver(config.month_names),
        ),
    ]
    return tuple(rules)


def split_title_description(
    text: str, config: ParserConfig = DEFAULT_PARSER_CONFIG
) -> tuple[str, str | None]:
    """
    Split input into a short title and an optional description.

    Rules, in order:
    1. A separator (-, :, en/em dash) on the first line splits title from
       description; later lines are appended to the description.
    2. Otherwise the first sentence on the first line (ending in . ! or ?)
       is the title and everything after it the description.
    3. Otherwise the first line is the title and later lines the description.

    Args:
        text: Raw user input

    Returns:
        (title, description) with description None when nothing remains
    """
    text = text.strip()
    first_line, _, rest = text.partition("\n")
    first_line = first_line.strip()
    rest = rest.strip()

    separated = re.match(rf"(.*?){config.separator_pattern}(.*)", first_line)
    if separated and separated.group(1).strip():
        parts = [part for part in (separated.group(2).strip(), rest) if part]
        return separated.group(1).strip(), " ".join(parts) or None

    marks = re.escape(config.sentence_end_chars)
    sentence = re.match(rf"[^{marks}\n]+[{marks}]", text)
    if sentence:
        title = sentence.group(0)[:-1].strip()
        remaining = text[sentence.end():].strip()
        return title, remaining or None

    return first_line, rest or None


def extract_priority(text: str, config: ParserConfig = DEFAULT_PARSER_CONFIG) -> int:
    """Return the first priority tier with a keyword in text, else the default."""
    lowered = text.lower()
    for tier in config.priority_tiers:
        if any(keyword.lower() in lowered for keyword in tier.keywords):
            return int(tier.level)
    return int(config.default_priority)


def extract_due_date(
    text: str, today: date | None = None, config: ParserConfig = DEFAULT_PARSER_CONFIG
) -> date | None:
    """Return the due date referenced in text, or None."""
    if today is None:
        today = date.today()

    for rule in build_date_rules(config):
        due_date = rule.apply(text, today)
        if due_date is not None:
            logger.debug(f"Due date {due_date} matched by rule '{rule.name}'")
            return due_date
    return None


def extract_time_estimate(text: str, config: ParserConfig = DEFAULT_PARSER_CONFIG) -> int | None:
    """Return the first time estimate in text, in minutes."""
    match = re.search(config.estimate_pattern, text, re.IGNORECASE)
    if not match:
        return None

    amount = int(match.group(1))
    unit = match.group(2).lower()
    if any(hour_unit in unit for hour_unit in config.hour_units):
        return amount * 60
    return amount


def _to_24_hour(hours: int, period: str | None) -> int:
    period = (period or "").lower()
    if period == "pm" and hours < 12:
        return hours + 12
    if period == "am" and hours == 12:
        return 0
    return hours


def extract_time(text: str) -> str | None:
    """Normalize the first time of day in text to 24-hour HH:MM."""
    match = _CLOCK_TIME.search(text)
    if match:
        hours, minutes, period = int(match.group(1)), int(match.group(2)), match.group(3)
    else:
        match = _HOUR_TIME.search(text)
        if not match:
            return None
        hours, minutes, period = int(match.group(1)), 0, match.group(2)

    hours = _to_24_hour(hours, period)
    if hours > 23 or minutes > 59:
        return None
    return f"{hours:02d}:{minutes:02d}"


def extract_reminders(text: str, config: ParserConfig = DEFAULT_PARSER_CONFIG) -> list[str]:
    """Return the reminder time from the first "remind me ..." phrase.

    Only one reminder is ever returned, even if several phrases appear.
    """
    match = re.search(config.reminder_pattern, text, re.IGNORECASE)
    if not match:
        return []

    reminder = extract_time(match.group(1))
    return [reminder] if reminder else []


def parse_natural_language_task(
    text: str,
    list_id: int | None = None,
    today: date | None = None,
    config: ParserConfig | None = None,
) -> ExtractedTask:
    """
    Extract structured task fields from natural language.

    Args:
        text: Raw input like "Finish the report by tomorrow - urgent, 2 hours"
        list_id: Target list, passed through untouched
        today: Reference date for relative dates (default: local today)
        config: Alternate vocabulary (default: DEFAULT_PARSER_CONFIG)

    Returns:
        ExtractedTask. The title is not validated; callers must reject
        an empty one.
    """
    config = config or DEFAULT_PARSER_CONFIG
    title, description = split_title_description(text, config)

    task = ExtractedTask(
        title=title,
        description=description,
        priority=extract_priority(text, config),
        due_date=extract_due_date(text, today, config),
        estimate=extract_time_estimate(text, config),
        reminders=extract_reminders(text, config),
        list_id=list_id,
    )

    logger.debug(
        f"Parsed task '{task.title}' (priority={task.priority}, due={task.due_date}, "
        f"estimate={task.estimate}, reminders={task.reminders})"
    )
    return task
