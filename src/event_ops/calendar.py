"""Layer 1: calendar-day arithmetic shared by both query components.

Everything here works on whole calendar days. Time of day is not modelled;
the string boundary is ``YYYY-MM-DD`` with no time-zone component.
"""

from __future__ import annotations

import calendar as _stdlib_calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterator, Union

from event_ops.types import InvalidInterval

DayLike = Union[date, datetime, str]

MONDAY_TO_FRIDAY: frozenset[int] = frozenset(range(5))


def parse_day(value: DayLike) -> date:
    """Convert a day value at the boundary into a ``date``.

    Accepts a ``date``, a naive ``datetime`` (its date part is kept) or a
    ``YYYY-MM-DD`` string. Strings with a trailing time part
    (``2024-06-01T00:00:00``) are cut to the date, as the record store
    sometimes returns them that way.

    Raises TypeError for timezone-aware datetimes and unsupported types.
    Raises ValueError for strings that are not calendar days, including
    strings whose time part carries a zone (``Z`` or an offset).
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            raise TypeError(
                f"day must be a naive datetime (no tzinfo), "
                f"got tzinfo={value.tzinfo!r}. "
                f"All day values are calendar days without a time zone."
            )
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text, _, time_part = value.strip().partition("T")
        if time_part.endswith("Z") or "+" in time_part or "-" in time_part:
            raise ValueError(
                f"Invalid day {value!r}: carries a time zone "
                f"(day values are local calendar days)"
            )
        try:
            return date.fromisoformat(text)
        except ValueError:
            raise ValueError(f"Invalid day {value!r} (expected YYYY-MM-DD)") from None
    raise TypeError(f"Unsupported day value {value!r} ({type(value).__name__})")


@dataclass(frozen=True)
class DateInterval:
    """Inclusive calendar-day interval ``[start, end]``.

    A one-day interval has ``start == end``. Construction with
    ``start > end`` raises InvalidInterval.
    """

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvalidInterval(self.start, self.end)

    @classmethod
    def parse(cls, start: DayLike, end: DayLike) -> DateInterval:
        return cls(parse_day(start), parse_day(end))

    @classmethod
    def single(cls, day: DayLike) -> DateInterval:
        d = parse_day(day)
        return cls(d, d)

    @property
    def length(self) -> int:
        """Number of days covered, both ends included."""
        return (self.end - self.start).days + 1

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def days(self) -> Iterator[date]:
        current = self.start
        while current <= self.end:
            yield current
            current += timedelta(days=1)

    def __str__(self) -> str:
        return f"{self.start.isoformat()}..{self.end.isoformat()}"


def as_interval(value: DateInterval | tuple[DayLike, DayLike]) -> DateInterval:
    """Accept either a DateInterval or a ``(start, end)`` pair."""
    if isinstance(value, DateInterval):
        return value
    start, end = value
    return DateInterval.parse(start, end)


def overlaps(a: DateInterval, b: DateInterval) -> bool:
    """Inclusive overlap test: ``a.start <= b.end and a.end >= b.start``.

    Intervals sharing a single boundary day overlap. Comparison is on
    parsed dates, never on the text form.
    """
    return a.start <= b.end and a.end >= b.start


def month_interval(year: int, month: int) -> DateInterval:
    """The whole calendar month. ``month`` is 1-12."""
    if not 1 <= month <= 12:
        raise ValueError(f"month must be within [1, 12], got {month}")
    last = _stdlib_calendar.monthrange(year, month)[1]
    return DateInterval(date(year, month, 1), date(year, month, last))


def month_days(year: int, month: int) -> list[date]:
    return list(month_interval(year, month).days())


def iso_week(day: date) -> int:
    """ISO-8601 week number; the week containing the day's Thursday decides.

    2024-12-30 is in week 1 (of 2025); 2021-01-01 is in week 53 (of 2020).
    """
    return day.isocalendar()[1]


def is_weekday(day: date, working_weekdays: frozenset[int] = MONDAY_TO_FRIDAY) -> bool:
    """True if ``day.weekday()`` (Monday=0) is one of ``working_weekdays``."""
    return day.weekday() in working_weekdays
