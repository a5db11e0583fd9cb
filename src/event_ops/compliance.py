"""Layer 2b: Rest-Compliance Analyzer for the 5 working / 2 rest days rule.

Every day of the queried month is classified exactly once, first match wins:

    1. approved absence      -> neutral (neither worked nor rest)
    2. non-cancelled job     -> worked, JOB_ASSIGNMENT
    3. manual task that day  -> worked, MANUAL_TASK
    4. working weekday       -> worked, DEFAULT_WAREHOUSE_DAY
    5. anything else         -> rest

Worked days are bucketed by ISO week. Only days inside the queried month are
counted, so a week straddling two months is split between them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable

from event_ops.calendar import MONDAY_TO_FRIDAY, is_weekday, iso_week, month_interval
from event_ops.records import Absence, CrewMember, Job, ManualTask
from event_ops.types import ActivitySource, RestAnalysis, WorkActivity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RestPolicy:
    """Weekly cap on worked days and which weekdays default to in-house duty.

    Weekdays use ``date.weekday()`` numbering: Monday=0 .. Sunday=6.
    """

    max_worked_days_per_week: int = 5
    working_weekdays: frozenset[int] = field(default=MONDAY_TO_FRIDAY)

    def __post_init__(self) -> None:
        if not 0 <= self.max_worked_days_per_week <= 7:
            raise ValueError(
                f"max_worked_days_per_week must be within [0, 7], "
                f"got {self.max_worked_days_per_week}"
            )
        bad = sorted(d for d in self.working_weekdays if not 0 <= d <= 6)
        if bad:
            raise ValueError(f"Invalid weekday(s) {bad} (must be 0-6)")


FIVE_PLUS_TWO = RestPolicy()


def _member_jobs(jobs: Iterable[Job], crew_member_id: str) -> list[Job]:
    return [
        job for job in jobs
        if not job.cancelled and crew_member_id in job.assigned_crew
    ]


def _belongs_to(owner_id: str | None, crew_member_id: str) -> bool:
    # Records embedded in a crew record carry no owner.
    return owner_id is None or owner_id == crew_member_id


def _classify_day(
    day: date,
    jobs: list[Job],
    tasks_by_day: dict[date, list[str]],
    policy: RestPolicy,
) -> WorkActivity | None:
    """Worked-day activity for a non-absent day, or None for a rest day."""
    covering = [job.id for job in jobs if job.interval.contains(day)]
    if covering:
        return WorkActivity(day, ActivitySource.JOB_ASSIGNMENT, min(covering))

    task_ids = tasks_by_day.get(day)
    if task_ids:
        return WorkActivity(day, ActivitySource.MANUAL_TASK, min(task_ids))

    if is_weekday(day, policy.working_weekdays):
        return WorkActivity(day, ActivitySource.DEFAULT_WAREHOUSE_DAY)

    return None


def analyze_rest_compliance(
    crew_member_id: str,
    year: int,
    month: int,
    jobs: Iterable[Job],
    manual_tasks: Iterable[ManualTask] = (),
    absences: Iterable[Absence] = (),
    policy: RestPolicy = FIVE_PLUS_TWO,
) -> RestAnalysis:
    """Worked days and missed rest for one crew member over one month.

    ``month`` is 1-12. ``jobs`` may be the whole job list: only
    non-cancelled jobs listing the member in ``assigned_crew`` count. Tasks
    and absences with a ``crew_member_id`` of someone else are ignored;
    pending and rejected absences are ignored.

    ``missed_rest`` is the sum over ISO weeks of worked days beyond
    ``policy.max_worked_days_per_week``. Pure: the result depends only on the
    arguments, not on their order.
    """
    month_span = month_interval(year, month)
    member_jobs = _member_jobs(jobs, crew_member_id)

    tasks_by_day: dict[date, list[str]] = {}
    for task in manual_tasks:
        if _belongs_to(task.crew_member_id, crew_member_id):
            tasks_by_day.setdefault(task.day, []).append(task.id)

    leave = [
        absence.interval for absence in absences
        if absence.approved and _belongs_to(absence.crew_member_id, crew_member_id)
    ]

    activities: list[WorkActivity] = []
    rest_days: list[date] = []
    absent_days: list[date] = []
    per_week: dict[int, int] = {}

    for day in month_span.days():
        if any(interval.contains(day) for interval in leave):
            absent_days.append(day)
            continue

        activity = _classify_day(day, member_jobs, tasks_by_day, policy)
        if activity is None:
            rest_days.append(day)
            continue

        activities.append(activity)
        week = iso_week(day)
        per_week[week] = per_week.get(week, 0) + 1

    cap = policy.max_worked_days_per_week
    missed_rest = sum(n - cap for n in per_week.values() if n > cap)

    logger.debug(
        "crew %s %04d-%02d: worked=%d missed_rest=%d absent=%d per_week=%s",
        crew_member_id, year, month, len(activities), missed_rest,
        len(absent_days), per_week,
    )
    return RestAnalysis(
        crew_member_id=crew_member_id,
        year=year,
        month=month,
        total_worked=len(activities),
        missed_rest=missed_rest,
        per_week=per_week,
        max_worked_days_per_week=cap,
        activities=tuple(activities),
        rest_days=tuple(rest_days),
        absent_days=tuple(absent_days),
    )


def analyze_crew_member(
    member: CrewMember,
    year: int,
    month: int,
    jobs: Iterable[Job],
    policy: RestPolicy = FIVE_PLUS_TWO,
) -> RestAnalysis:
    """Analyze using the tasks and absences embedded in the crew record."""
    return analyze_rest_compliance(
        member.id, year, month, jobs, member.tasks, member.absences, policy
    )
