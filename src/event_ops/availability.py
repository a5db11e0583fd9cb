"""Layer 2a: Availability Resolver, remaining stock for a date window.

Provides commitment derivation (job material lists and rental item lists
flattened per resource), the resolver itself, a lookup variant that raises
ResourceNotFound, and the zero-availability fallback callers use to keep
rendering.

Nothing here is stored between calls; every call recomputes from its inputs.
"""

from __future__ import annotations

import logging
from typing import Iterable, Union

from event_ops.calendar import DateInterval, DayLike, as_interval, overlaps
from event_ops.records import Commitment, Job, MaterialLine, Rental, Resource
from event_ops.types import (
    AdditionCheck,
    AvailabilityResult,
    CommitmentSource,
    Conflict,
    ResourceNotFound,
)

logger = logging.getLogger(__name__)

Window = Union[DateInterval, tuple[DayLike, DayLike]]


# ---------------------------------------------------------------------------
# Commitment derivation
# ---------------------------------------------------------------------------
def _claimed_per_resource(lines: Iterable[MaterialLine]) -> dict[str, int]:
    """Sum line quantities per inventory id, keeping first-seen order."""
    claimed: dict[str, int] = {}
    for line in lines:
        if line.inventory_id is None or line.quantity <= 0:
            continue
        claimed[line.inventory_id] = claimed.get(line.inventory_id, 0) + line.quantity
    return claimed


def commitments_from_job(job: Job) -> list[Commitment]:
    """One commitment per resource listed in the job's material list."""
    return [
        Commitment(
            resource_id=resource_id,
            quantity=quantity,
            interval=job.interval,
            source_kind=CommitmentSource.JOB,
            source_id=job.id,
            source_name=job.title,
            cancelled=job.cancelled,
        )
        for resource_id, quantity in _claimed_per_resource(job.material_list).items()
    ]


def commitments_from_rental(rental: Rental) -> list[Commitment]:
    """One commitment per resource listed in the rental's items."""
    return [
        Commitment(
            resource_id=resource_id,
            quantity=quantity,
            interval=rental.interval,
            source_kind=CommitmentSource.RENTAL,
            source_id=rental.id,
            source_name=rental.client,
            cancelled=rental.cancelled,
        )
        for resource_id, quantity in _claimed_per_resource(rental.items).items()
    ]


def collect_commitments(
    jobs: Iterable[Job],
    rentals: Iterable[Rental],
    resource_id: str | None = None,
) -> list[Commitment]:
    """Flatten jobs then rentals into commitments, in input order.

    Pass ``resource_id`` to keep only the commitments on that resource.
    """
    commitments: list[Commitment] = []
    for job in jobs:
        commitments.extend(commitments_from_job(job))
    for rental in rentals:
        commitments.extend(commitments_from_rental(rental))
    if resource_id is not None:
        commitments = [c for c in commitments if c.resource_id == resource_id]
    return commitments


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------
def _counts_against(
    commitment: Commitment,
    resource_id: str,
    window: DateInterval,
    exclude_source_id: str | None,
) -> bool:
    if commitment.cancelled:
        return False
    if commitment.resource_id != resource_id:
        return False
    if exclude_source_id is not None and commitment.source_id == exclude_source_id:
        return False
    return overlaps(commitment.interval, window)


def resolve_availability(
    resource: Resource,
    commitments: Iterable[Commitment],
    window: Window,
    exclude_source_id: str | None = None,
) -> AvailabilityResult:
    """Remaining quantity of ``resource`` over ``window`` and what consumes it.

    A commitment counts when it is not cancelled, is on this resource, does
    not belong to ``exclude_source_id`` (the record being edited) and its
    interval overlaps the window, shared boundary days included.

    ``available`` floors at zero; the full conflict list is kept so an
    overcommitment stays visible. Read-only and advisory: nothing is
    rejected here.

    Raises InvalidInterval if ``window`` is given as a pair with start > end.
    """
    window = as_interval(window)

    used = 0
    conflicts: list[Conflict] = []
    for commitment in commitments:
        if not _counts_against(commitment, resource.id, window, exclude_source_id):
            continue
        used += commitment.quantity
        conflicts.append(
            Conflict(
                source_name=commitment.source_name,
                quantity=commitment.quantity,
                source_kind=commitment.source_kind,
                source_id=commitment.source_id,
                interval=commitment.interval,
            )
        )

    available = max(0, resource.total_quantity_owned - used)
    logger.debug(
        "resource %s over %s: owned=%d used=%d available=%d conflicts=%d",
        resource.id, window, resource.total_quantity_owned,
        used, available, len(conflicts),
    )
    return AvailabilityResult(
        resource_id=resource.id,
        total_quantity_owned=resource.total_quantity_owned,
        used=used,
        available=available,
        conflicts=tuple(conflicts),
    )


def find_resource(inventory: Iterable[Resource], resource_id: str) -> Resource:
    """Return the resource with ``resource_id``. Raises ResourceNotFound."""
    for resource in inventory:
        if resource.id == resource_id:
            return resource
    raise ResourceNotFound(resource_id)


def check_availability(
    inventory: Iterable[Resource],
    commitments: Iterable[Commitment],
    resource_id: str,
    window: Window,
    exclude_source_id: str | None = None,
) -> AvailabilityResult:
    """Look the resource up by id, then resolve. Raises ResourceNotFound."""
    resource = find_resource(inventory, resource_id)
    return resolve_availability(resource, commitments, window, exclude_source_id)


def availability_or_zero(
    inventory: Iterable[Resource],
    commitments: Iterable[Commitment],
    resource_id: str,
    window: Window,
    exclude_source_id: str | None = None,
) -> AvailabilityResult:
    """Like check_availability, but an unknown resource reads as zero stock.

    Used where the screen must still render; the miss is logged as a warning.
    """
    try:
        return check_availability(
            inventory, commitments, resource_id, window, exclude_source_id
        )
    except ResourceNotFound as exc:
        logger.warning("%s; assuming zero availability", exc)
        return AvailabilityResult(
            resource_id=resource_id,
            total_quantity_owned=0,
            used=0,
            available=0,
        )


# ---------------------------------------------------------------------------
# Draft editing
# ---------------------------------------------------------------------------
def assess_addition(
    result: AvailabilityResult,
    draft_quantity: int = 0,
    requested: int = 1,
) -> AdditionCheck:
    """Would adding ``requested`` units to a draft exceed what is left?

    ``draft_quantity`` is what the record being edited already holds for
    this resource. The result should come from a resolver call that
    excluded that same record.
    """
    if draft_quantity < 0 or requested < 0:
        raise ValueError(
            f"draft_quantity and requested must be >= 0, "
            f"got {draft_quantity} and {requested}"
        )
    remaining = result.available - draft_quantity
    return AdditionCheck(
        available=result.available,
        draft_quantity=draft_quantity,
        requested=requested,
        remaining=remaining,
        needs_override=remaining < requested,
    )
