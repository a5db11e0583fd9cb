"""Data loading for record-store snapshots exported as JSON."""

from __future__ import annotations

import json
from pathlib import Path

from event_ops.calendar import DateInterval, parse_day
from event_ops.records import (
    Absence,
    CrewMember,
    Job,
    ManualTask,
    MaterialLine,
    Rental,
    Resource,
)
from event_ops.repository import InMemoryRepository
from event_ops.schema import (
    validate_crew_member,
    validate_job,
    validate_rental,
    validate_resource,
)
from event_ops.types import (
    AbsenceKind,
    ApprovalStatus,
    CrewType,
    JobStatus,
    RentalStatus,
    ResourceCategory,
)


def _lines(raw: list[dict]) -> tuple[MaterialLine, ...]:
    return tuple(
        MaterialLine(
            name=line.get("name", ""),
            quantity=line["quantity"],
            inventory_id=line.get("inventory_id"),
        )
        for line in raw
    )


def _resource(raw: dict) -> Resource:
    return Resource(
        id=raw["id"],
        name=raw.get("name", raw["id"]),
        category=ResourceCategory(raw.get("category", "OTHER")),
        total_quantity_owned=raw["total_quantity_owned"],
    )


def _job(raw: dict) -> Job:
    return Job(
        id=raw["id"],
        title=raw.get("title", raw["id"]),
        interval=DateInterval.parse(raw["start"], raw["end"]),
        status=JobStatus(raw.get("status", "CONFIRMED")),
        assigned_crew=tuple(raw.get("assigned_crew", [])),
        material_list=_lines(raw.get("material_list", [])),
    )


def _rental(raw: dict) -> Rental:
    return Rental(
        id=raw["id"],
        client=raw.get("client", raw["id"]),
        interval=DateInterval.parse(raw["pickup"], raw["return"]),
        status=RentalStatus(raw.get("status", "CONFIRMED")),
        items=_lines(raw.get("items", [])),
    )


def _crew_member(raw: dict) -> CrewMember:
    tasks = tuple(
        ManualTask(
            id=t["id"],
            day=parse_day(t["date"]),
            description=t.get("description", ""),
            job_id=t.get("job_id"),
        )
        for t in raw.get("tasks", [])
    )
    absences = tuple(
        Absence(
            id=a["id"],
            interval=DateInterval.parse(a["start"], a["end"]),
            kind=AbsenceKind(a.get("kind", "HOLIDAY")),
            status=ApprovalStatus(a.get("status", "APPROVED")),
        )
        for a in raw.get("absences", [])
    )
    return CrewMember(
        id=raw["id"],
        name=raw.get("name", raw["id"]),
        crew_type=CrewType(raw.get("crew_type", "INTERNAL")),
        tasks=tasks,
        absences=absences,
    )


def snapshot_from_dict(data: dict, source: str = "snapshot") -> InMemoryRepository:
    """Build an InMemoryRepository from a snapshot dict.

    The dict has the record-store export format:
    {
        "inventory": [ {"id": ..., "total_quantity_owned": ...}, ... ],
        "jobs":      [ {"id": ..., "start": "YYYY-MM-DD", "end": ...}, ... ],
        "rentals":   [ {"id": ..., "pickup": ..., "return": ...}, ... ],
        "crew":      [ {"id": ..., "tasks": [...], "absences": [...]}, ... ]
    }

    Every record is validated before any is built. Raises ValueError
    listing all problems if validation fails.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Validation errors in {source}:\n  - expected an object")

    errors: list[str] = []
    sections: dict[str, list] = {}
    for key in ("inventory", "jobs", "rentals", "crew"):
        section = data.get(key, [])
        if not isinstance(section, list):
            errors.append(f"'{key}' must be a list")
            section = []
        sections[key] = section
    inventory, jobs = sections["inventory"], sections["jobs"]
    rentals, crew = sections["rentals"], sections["crew"]

    for record in inventory:
        errors.extend(validate_resource(record))
    for record in jobs:
        errors.extend(validate_job(record))
    for record in rentals:
        errors.extend(validate_rental(record))
    for record in crew:
        errors.extend(validate_crew_member(record))
    if errors:
        raise ValueError(
            f"Validation errors in {source}:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )

    return InMemoryRepository(
        jobs=tuple(_job(r) for r in jobs),
        rentals=tuple(_rental(r) for r in rentals),
        inventory=tuple(_resource(r) for r in inventory),
        crew=tuple(_crew_member(r) for r in crew),
    )


def load_snapshot_json(path: str | Path) -> InMemoryRepository:
    """Load a record-store snapshot from a JSON file. Raises ValueError."""
    path = Path(path)
    with open(path) as f:
        data = json.load(f)
    return snapshot_from_dict(data, source=path.name)
