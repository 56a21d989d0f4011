"""Parsing of the ``from``/``to`` query parameters."""

from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Optional

from ..errors import InvalidRange


@dataclass(frozen=True)
class DateRange:
    """Inclusive interval of naive UTC datetimes, matching how timestamps are stored."""

    start: datetime
    end: datetime


def _parse_day(value: Optional[str], label: str) -> date:
    if not value or not value.strip():
        raise InvalidRange(f'Missing "{label}" date.')
    value = value.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    # Full timestamps are accepted and truncated to their UTC calendar day.
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise InvalidRange(f'Invalid "{label}" date: {value}')
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date()


def parse_date_range(from_value: Optional[str], to_value: Optional[str]) -> DateRange:
    """Start of the ``from`` day to the last microsecond of the ``to`` day, UTC."""
    start_day = _parse_day(from_value, "from")
    end_day = _parse_day(to_value, "to")
    if start_day > end_day:
        raise InvalidRange('"from" must not be after "to".')
    return DateRange(
        start=datetime.combine(start_day, time.min),
        end=datetime.combine(end_day, time.max),
    )
