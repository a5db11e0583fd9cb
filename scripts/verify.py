#!/usr/bin/env python
"""Visual verification report for event-ops-engine.

Run:  python scripts/verify.py

Produces a formatted report over the June 2024 fixture snapshot:
  1. Reference data (inventory, jobs, rentals, crew as tables)
  2. Layer 1 checks (overlap and ISO week tables from the scenarios)
  3. Layer 2a availability (per-resource table + conflict detail)
  4. Layer 2b rest compliance (roster table + ASCII month per crew member)
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths and data loading
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
FIXTURES = ROOT / "data" / "fixtures"
SCENARIOS = FIXTURES / "scenarios"
SNAPSHOT = FIXTURES / "snapshot.json"

sys.path.insert(0, str(ROOT / "src"))

from event_ops.calendar import DateInterval, iso_week, overlaps, parse_day
from event_ops.debug import show_availability, show_month
from event_ops.loaders import load_snapshot_json
from event_ops.queries import availability_for, inventory_availability, roster_compliance


def _load(path: Path):
    with open(path) as f:
        return json.load(f)


REPO = load_snapshot_json(SNAPSHOT)
YEAR, MONTH = 2024, 6
DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------
WIDTH = 90


def banner(title: str):
    print()
    print("=" * WIDTH)
    print(f"  {title}")
    print("=" * WIDTH)


def heading(title: str):
    print()
    print(f"  {title}")
    print(f"  {'-' * (len(title) + 2)}")


def table(headers: list[str], rows: list[list[str]], indent: int = 4):
    """Print a formatted table with auto-sized columns."""
    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            col_widths[i] = max(col_widths[i], len(cell))

    pad = " " * indent
    fmt = pad + "  ".join(f"{{:<{w}}}" for w in col_widths)
    sep = pad + "  ".join("-" * w for w in col_widths)

    print(fmt.format(*headers))
    print(sep)
    for row in rows:
        padded = row + [""] * (len(headers) - len(row))
        print(fmt.format(*padded))


def _fmt_interval(interval: DateInterval) -> str:
    """'Sat 01 Jun - Mon 03 Jun'."""
    def one(d):
        return f"{DAY_NAMES[d.weekday()]} {d.strftime('%d %b')}"
    return f"{one(interval.start)} - {one(interval.end)}"


# ---------------------------------------------------------------------------
# Section 1: Reference Data
# ---------------------------------------------------------------------------
def section_reference():
    banner("REFERENCE DATA")

    heading("Inventory")
    rows = [
        [r.id, r.name, r.category.value, str(r.total_quantity_owned)]
        for r in REPO.list_inventory()
    ]
    table(["Id", "Name", "Category", "Owned"], rows)

    heading("Jobs")
    rows = []
    for job in REPO.list_jobs():
        lines = ", ".join(
            f"{line.inventory_id or line.name} x{line.quantity}"
            for line in job.material_list
        )
        rows.append([
            job.id, job.title, job.status.value,
            _fmt_interval(job.interval), ",".join(job.assigned_crew), lines,
        ])
    table(["Id", "Title", "Status", "Dates", "Crew", "Material"], rows)

    heading("Rentals")
    rows = []
    for rental in REPO.list_rentals():
        items = ", ".join(f"{i.inventory_id} x{i.quantity}" for i in rental.items)
        rows.append([
            rental.id, rental.client, rental.status.value,
            _fmt_interval(rental.interval), items,
        ])
    table(["Id", "Client", "Status", "Dates", "Items"], rows)

    heading("Crew")
    rows = []
    for member in REPO.list_crew():
        tasks = ", ".join(t.day.isoformat() for t in member.tasks)
        absences = ", ".join(
            f"{a.kind.value} {a.interval} ({a.status.value})" for a in member.absences
        )
        rows.append([member.id, member.crew_type.value, tasks, absences])
    table(["Id", "Type", "Tasks", "Absences"], rows)


# ---------------------------------------------------------------------------
# Section 2: Layer 1
# ---------------------------------------------------------------------------
def section_calendar():
    banner("LAYER 1: CALENDAR DAYS")
    data = _load(SCENARIOS / "calendar.json")

    heading("Inclusive overlap")
    rows = []
    for spec in data["overlaps"]:
        a = DateInterval.parse(*spec["a"])
        b = DateInterval.parse(*spec["b"])
        got = overlaps(a, b)
        ok = "OK" if got is spec["expected"] else "FAIL"
        rows.append([spec["id"], str(a), str(b), str(got), ok])
    table(["Case", "A", "B", "Overlap", "Check"], rows)

    heading("ISO week numbers")
    rows = []
    for spec in data["iso_week"]:
        day = parse_day(spec["date"])
        got = iso_week(day)
        ok = "OK" if got == spec["expected"] else "FAIL"
        rows.append([spec["date"], DAY_NAMES[day.weekday()], str(got), ok, spec["notes"]])
    table(["Date", "Day", "Week", "Check", "Notes"], rows)


# ---------------------------------------------------------------------------
# Section 3: Layer 2a
# ---------------------------------------------------------------------------
def section_availability():
    banner("LAYER 2a: AVAILABILITY")

    windows = [("2024-06-02", "2024-06-04"), ("2024-06-12", "2024-06-14")]
    for window in windows:
        heading(f"Inventory over {window[0]}..{window[1]}")
        rows = []
        for result in inventory_availability(REPO, window):
            rows.append([
                result.resource_id,
                str(result.total_quantity_owned),
                str(result.used),
                str(result.available),
                "OVER" if result.overcommitted else "",
                ", ".join(result.conflict_names),
            ])
        table(["Resource", "Owned", "Used", "Avail", "Flag", "Conflicts"], rows)

    heading("Editing rent-1: sm58 with and without self-exclusion")
    print()
    show_availability(availability_for(REPO, "sm58", windows[0]), "sm58 (all)")
    show_availability(
        availability_for(REPO, "sm58", windows[0], exclude_source_id="rent-1"),
        "sm58 (excluding rent-1)",
    )


# ---------------------------------------------------------------------------
# Section 4: Layer 2b
# ---------------------------------------------------------------------------
def section_compliance():
    banner("LAYER 2b: REST COMPLIANCE (5 + 2)")

    rows_with_analysis = roster_compliance(REPO, YEAR, MONTH, crew_type=None)

    heading(f"Roster {YEAR:04d}-{MONTH:02d}")
    rows = []
    for member, analysis in rows_with_analysis:
        weeks = " ".join(f"w{w}={n}" for w, n in sorted(analysis.per_week.items()))
        rows.append([
            member.id, member.crew_type.value,
            str(analysis.total_worked), str(analysis.missed_rest),
            "yes" if analysis.is_compliant else "no", weeks,
        ])
    table(["Crew", "Type", "Worked", "Missed", "OK?", "Per week"], rows)

    for member, analysis in rows_with_analysis:
        heading(f"Month grid: {member.name}")
        print()
        show_month(analysis)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------
def main():
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    banner("EVENT-OPS-ENGINE   --  VISUAL VERIFICATION REPORT")
    print(f"    Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}")
    print(f"    Fixture data: {FIXTURES.relative_to(ROOT)}/")

    section_reference()
    section_calendar()
    section_availability()
    section_compliance()

    banner("END OF REPORT")
    print()


if __name__ == "__main__":
    main()
