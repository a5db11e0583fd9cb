"""Shared types: closed enumerations, query results and engine errors."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping

if TYPE_CHECKING:
    from event_ops.calendar import DateInterval


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------
class ResourceCategory(str, Enum):
    AUDIO = "AUDIO"
    VIDEO = "VIDEO"
    LIGHTS = "LIGHTS"
    CABLES = "CABLES"
    STRUCTURES = "STRUCTURES"
    OTHER = "OTHER"


class CommitmentSource(str, Enum):
    """Which kind of record a commitment was derived from."""

    JOB = "JOB"
    RENTAL = "RENTAL"


class ActivitySource(str, Enum):
    """Why a day counts as worked. Declaration order is precedence order."""

    JOB_ASSIGNMENT = "JOB_ASSIGNMENT"
    MANUAL_TASK = "MANUAL_TASK"
    DEFAULT_WAREHOUSE_DAY = "DEFAULT_WAREHOUSE_DAY"


class JobStatus(str, Enum):
    DRAFT = "DRAFT"
    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class RentalStatus(str, Enum):
    DRAFT = "DRAFT"
    CONFIRMED = "CONFIRMED"
    OUT = "OUT"
    RETURNED = "RETURNED"
    CANCELLED = "CANCELLED"


class ApprovalStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    COMPLETED = "COMPLETED"

    @property
    def is_approved(self) -> bool:
        return self in (ApprovalStatus.APPROVED, ApprovalStatus.COMPLETED)


class AbsenceKind(str, Enum):
    HOLIDAY = "HOLIDAY"
    PERMIT = "PERMIT"
    SICK = "SICK"


class CrewType(str, Enum):
    INTERNAL = "INTERNAL"
    FREELANCE = "FREELANCE"


# ---------------------------------------------------------------------------
# Availability results
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Conflict:
    """One commitment that overlaps the queried window."""

    source_name: str
    quantity: int
    source_kind: CommitmentSource
    source_id: str
    interval: DateInterval


@dataclass(frozen=True)
class AvailabilityResult:
    """Remaining stock for a window, with the commitments that consume it.

    Invariants:
        - available == max(0, total_quantity_owned - used)
        - used == sum(c.quantity for c in conflicts)
        - conflicts keep the order the commitments were supplied in
    """

    resource_id: str
    total_quantity_owned: int
    used: int
    available: int
    conflicts: tuple[Conflict, ...] = ()

    @property
    def overcommitted(self) -> bool:
        """More claimed than owned (stock reduced after commitments were made)."""
        return self.used > self.total_quantity_owned

    @property
    def conflict_names(self) -> list[str]:
        return [c.source_name for c in self.conflicts]


@dataclass(frozen=True)
class AdditionCheck:
    """Outcome of adding ``requested`` units to a draft already holding some.

    ``remaining`` may go negative so the caller can show by how much the
    draft exceeds stock. The engine never blocks the addition.
    """

    available: int
    draft_quantity: int
    requested: int
    remaining: int
    needs_override: bool


# ---------------------------------------------------------------------------
# Compliance results
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class WorkActivity:
    """A single worked day for one crew member."""

    day: date
    source: ActivitySource
    link_id: str | None = None


@dataclass(frozen=True)
class RestAnalysis:
    """Worked days and missed rest for one crew member over one month.

    Invariants:
        - total_worked == len(activities) == sum(per_week.values())
        - missed_rest == sum(max(0, n - max_per_week) for n in per_week.values())
        - each day appears at most once across activities, rest_days
          and absent_days

    ``per_week`` is stored as a read-only view over a private copy.
    """

    crew_member_id: str
    year: int
    month: int
    total_worked: int
    missed_rest: int
    per_week: Mapping[int, int]
    max_worked_days_per_week: int
    activities: tuple[WorkActivity, ...] = ()
    rest_days: tuple[date, ...] = ()
    absent_days: tuple[date, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "per_week", MappingProxyType(dict(self.per_week)))

    @property
    def is_compliant(self) -> bool:
        return self.missed_rest == 0

    def weekly_surplus(self) -> dict[int, int]:
        """Week number -> worked days beyond the weekly cap (only weeks over it)."""
        cap = self.max_worked_days_per_week
        return {week: n - cap for week, n in self.per_week.items() if n > cap}

    def activity_for(self, day: date) -> WorkActivity | None:
        for activity in self.activities:
            if activity.day == day:
                return activity
        return None


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
class EngineError(Exception):
    """Base class for errors raised by the allocation and compliance engine."""


class ResourceNotFound(EngineError, LookupError):
    """Raised when availability is requested for an id with no Resource."""

    def __init__(self, resource_id: str) -> None:
        self.resource_id = resource_id
        super().__init__(f"Resource not found: {resource_id!r}")


class InvalidInterval(EngineError, ValueError):
    """Raised when an interval has start > end."""

    def __init__(self, start: date, end: date) -> None:
        self.start = start
        self.end = end
        super().__init__(
            f"Invalid interval: start {start.isoformat()} is after "
            f"end {end.isoformat()}"
        )
