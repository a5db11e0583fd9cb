"""Read-only record snapshots handed to the engine by the record store."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from event_ops.calendar import DateInterval
from event_ops.types import (
    AbsenceKind,
    ApprovalStatus,
    CommitmentSource,
    CrewType,
    JobStatus,
    RentalStatus,
    ResourceCategory,
)


def is_count(value: Any) -> bool:
    """True for a plain int; bool is an int subclass and is refused."""
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class Resource:
    """A fungible physical item of the rental/inventory catalog."""

    id: str
    name: str
    category: ResourceCategory
    total_quantity_owned: int

    def __post_init__(self) -> None:
        if not is_count(self.total_quantity_owned) or self.total_quantity_owned < 0:
            raise ValueError(
                f"Resource {self.id!r}: total_quantity_owned must be an integer >= 0, "
                f"got {self.total_quantity_owned!r}"
            )


@dataclass(frozen=True)
class Commitment:
    """A claim on a resource's quantity for an inclusive date interval.

    Derived from job material lists and rental item lists; never stored.
    """

    resource_id: str
    quantity: int
    interval: DateInterval
    source_kind: CommitmentSource
    source_id: str
    source_name: str
    cancelled: bool = False

    def __post_init__(self) -> None:
        if not is_count(self.quantity) or self.quantity <= 0:
            raise ValueError(
                f"Commitment from {self.source_id!r}: quantity must be a positive "
                f"integer, got {self.quantity!r}"
            )


@dataclass(frozen=True)
class MaterialLine:
    """One line of a job material list or a rental item list.

    Lines without an ``inventory_id`` are external hires and claim no stock.
    """

    name: str
    quantity: int
    inventory_id: str | None = None


@dataclass(frozen=True)
class Job:
    id: str
    title: str
    interval: DateInterval
    status: JobStatus = JobStatus.CONFIRMED
    assigned_crew: tuple[str, ...] = ()
    material_list: tuple[MaterialLine, ...] = ()

    @property
    def cancelled(self) -> bool:
        return self.status is JobStatus.CANCELLED


@dataclass(frozen=True)
class Rental:
    """A rental agreement; its interval runs from pickup to return."""

    id: str
    client: str
    interval: DateInterval
    status: RentalStatus = RentalStatus.CONFIRMED
    items: tuple[MaterialLine, ...] = ()

    @property
    def cancelled(self) -> bool:
        return self.status is RentalStatus.CANCELLED


@dataclass(frozen=True)
class ManualTask:
    """An ad-hoc planning entry (warehouse work, vehicle check) for one day.

    Tasks embedded in a CrewMember record leave ``crew_member_id`` unset.
    """

    id: str
    day: date
    description: str = ""
    crew_member_id: str | None = None
    job_id: str | None = None


@dataclass(frozen=True)
class Absence:
    """A leave, permit or sick interval. Only approved ones are neutral days."""

    id: str
    interval: DateInterval
    kind: AbsenceKind = AbsenceKind.HOLIDAY
    status: ApprovalStatus = ApprovalStatus.APPROVED
    crew_member_id: str | None = None

    @property
    def approved(self) -> bool:
        return self.status.is_approved


@dataclass(frozen=True)
class CrewMember:
    id: str
    name: str
    crew_type: CrewType = CrewType.INTERNAL
    tasks: tuple[ManualTask, ...] = field(default_factory=tuple)
    absences: tuple[Absence, ...] = field(default_factory=tuple)
