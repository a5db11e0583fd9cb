"""ASCII views for development-time verification.

This module is dev-only and not imported by production code.
"""

from __future__ import annotations

from datetime import timedelta

from event_ops.calendar import iso_week, month_interval
from event_ops.types import ActivitySource, AvailabilityResult, RestAnalysis

_SOURCE_MARKS = {
    ActivitySource.JOB_ASSIGNMENT: "J",
    ActivitySource.MANUAL_TASK: "T",
    ActivitySource.DEFAULT_WAREHOUSE_DAY: "W",
}


def show_month(analysis: RestAnalysis) -> str:
    """Print an ASCII month grid for a rest analysis.

    One row per ISO week, one column per weekday (Mon..Sun).
    Legend: J = job, T = manual task, W = warehouse day, A = absence,
    '.' = rest, blank = outside the month.
    Returns the string and also prints to stdout.
    """
    lines: list[str] = []
    day_names = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

    marks = {a.day: _SOURCE_MARKS[a.source] for a in analysis.activities}
    marks.update({d: "A" for d in analysis.absent_days})
    marks.update({d: "." for d in analysis.rest_days})

    span = month_interval(analysis.year, analysis.month)
    surplus = analysis.weekly_surplus()

    lines.append(
        f"{analysis.crew_member_id}  {analysis.year:04d}-{analysis.month:02d}"
    )
    lines.append(f"{'Wk':>4s}  " + " ".join(day_names) + "  Days  Over")

    monday = span.start - timedelta(days=span.start.weekday())
    while monday <= span.end:
        week = iso_week(monday)
        cells = []
        for i in range(7):
            d = monday + timedelta(days=i)
            cells.append(f"{marks.get(d, ' ') if span.contains(d) else ' ':^3s}")
        worked = analysis.per_week.get(week, 0)
        over = f"+{surplus[week]}" if week in surplus else ""
        lines.append(f"{week:>4d}  " + " ".join(cells) + f"  {worked:>4d}  {over:>4s}")
        monday += timedelta(days=7)

    lines.append(
        f"worked={analysis.total_worked} missed_rest={analysis.missed_rest}"
    )
    lines.append("Legend: J = job, T = task, W = warehouse, A = absence, . = rest")

    result = "\n".join(lines)
    print(result)
    return result


def show_availability(result: AvailabilityResult, name: str | None = None) -> str:
    """Print a one-line stock summary followed by the conflicting commitments.

    Returns the string and also prints to stdout.
    """
    label = name or result.resource_id
    flag = "  OVERCOMMITTED" if result.overcommitted else ""
    lines = [
        f"{label}: {result.available}/{result.total_quantity_owned} available "
        f"(used {result.used}){flag}"
    ]
    for conflict in result.conflicts:
        lines.append(
            f"  - {conflict.source_kind.value:<6s} {conflict.source_name} "
            f"x{conflict.quantity}  [{conflict.interval}]"
        )

    result_str = "\n".join(lines)
    print(result_str)
    return result_str
