"""Reference composition of the engine over a record repository.

These are the calls the presentation layer makes: one availability query per
candidate item while a job or rental is edited, one compliance analysis per
crew member per displayed month. Each call lists the records again, so the
answer always reflects the repository as it is at call time.
"""

from __future__ import annotations

from event_ops.availability import Window, collect_commitments, resolve_availability
from event_ops.compliance import FIVE_PLUS_TWO, RestPolicy, analyze_crew_member
from event_ops.records import CrewMember
from event_ops.repository import Repository
from event_ops.types import AvailabilityResult, CrewType, RestAnalysis


def availability_for(
    repo: Repository,
    resource_id: str,
    window: Window,
    exclude_source_id: str | None = None,
) -> AvailabilityResult:
    """Availability of one resource against every job and rental.

    Raises:
        ResourceNotFound: If the inventory has no such resource.
    """
    resource = repo.get_resource(resource_id)
    commitments = collect_commitments(
        repo.list_jobs(), repo.list_rentals(), resource_id=resource_id
    )
    return resolve_availability(resource, commitments, window, exclude_source_id)


def inventory_availability(
    repo: Repository,
    window: Window,
    exclude_source_id: str | None = None,
) -> list[AvailabilityResult]:
    """Availability of every resource, in inventory order.

    Used by the item picker, which shows remaining stock next to each entry.
    """
    commitments = collect_commitments(repo.list_jobs(), repo.list_rentals())
    return [
        resolve_availability(resource, commitments, window, exclude_source_id)
        for resource in repo.list_inventory()
    ]


def crew_compliance(
    repo: Repository,
    crew_member_id: str,
    year: int,
    month: int,
    policy: RestPolicy = FIVE_PLUS_TWO,
) -> RestAnalysis:
    """Rest analysis for one crew member. Raises KeyError for an unknown id."""
    member = repo.get_crew_member(crew_member_id)
    return analyze_crew_member(member, year, month, repo.list_jobs(), policy)


def roster_compliance(
    repo: Repository,
    year: int,
    month: int,
    crew_type: CrewType | None = CrewType.INTERNAL,
    policy: RestPolicy = FIVE_PLUS_TWO,
) -> list[tuple[CrewMember, RestAnalysis]]:
    """One row per crew member of ``crew_type`` (None = everyone).

    Freelancers are excluded by default: the rule applies to staff.
    """
    jobs = repo.list_jobs()
    return [
        (member, analyze_crew_member(member, year, month, jobs, policy))
        for member in repo.list_crew()
        if crew_type is None or member.crew_type is crew_type
    ]
