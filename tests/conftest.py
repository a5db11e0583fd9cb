"""Shared test fixtures and data loading for event-ops-engine.

All test data lives in data/fixtures/ as JSON files.  This module loads
that data and exposes helper functions + pytest fixtures for the tests.

Reference month: June 2024.  Saturday 2024-06-01 is in ISO week 22;
Mondays 06-03, 06-10, 06-17 and 06-24 open weeks 23 to 26.
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
FIXTURES_DIR = Path(__file__).resolve().parent.parent / "data" / "fixtures"
SCENARIOS_DIR = FIXTURES_DIR / "scenarios"
SNAPSHOT_PATH = FIXTURES_DIR / "snapshot.json"


# ---------------------------------------------------------------------------
# Data loaders
# ---------------------------------------------------------------------------
def _load_json(path: Path):
    with open(path) as f:
        return json.load(f)


def load_scenarios(name: str):
    """Load a scenario file from data/fixtures/scenarios/{name}.json."""
    return _load_json(SCENARIOS_DIR / f"{name}.json")


def load_snapshot_dict() -> dict:
    return _load_json(SNAPSHOT_PATH)


# ---------------------------------------------------------------------------
# Convenience helpers (importable by test modules)
# ---------------------------------------------------------------------------
def d(text: str) -> date:
    """date from 'YYYY-MM-DD'."""
    return date.fromisoformat(text)


def interval(start: str, end: str):
    from event_ops.calendar import DateInterval

    return DateInterval(d(start), d(end))


def make_resource(spec: dict):
    from event_ops.records import Resource
    from event_ops.types import ResourceCategory

    return Resource(
        id=spec["id"],
        name=spec.get("name", spec["id"]),
        category=ResourceCategory(spec.get("category", "OTHER")),
        total_quantity_owned=spec["total_quantity_owned"],
    )


def make_commitment(spec: dict, resource_id: str = "sm58"):
    """Build a Commitment from a scenario spec dict."""
    from event_ops.records import Commitment
    from event_ops.types import CommitmentSource

    return Commitment(
        resource_id=spec.get("resource_id", resource_id),
        quantity=spec["quantity"],
        interval=interval(spec["start"], spec["end"]),
        source_kind=CommitmentSource(spec["source_kind"]),
        source_id=spec["source_id"],
        source_name=spec["source_name"],
        cancelled=spec.get("cancelled", False),
    )


def make_job(spec: dict):
    from event_ops.records import Job, MaterialLine
    from event_ops.types import JobStatus

    return Job(
        id=spec["id"],
        title=spec.get("title", spec["id"]),
        interval=interval(spec["start"], spec["end"]),
        status=JobStatus(spec.get("status", "CONFIRMED")),
        assigned_crew=tuple(spec.get("assigned_crew", ())),
        material_list=tuple(
            MaterialLine(
                name=line.get("name", ""),
                quantity=line["quantity"],
                inventory_id=line.get("inventory_id"),
            )
            for line in spec.get("material_list", ())
        ),
    )


def make_task(spec: dict):
    from event_ops.records import ManualTask

    return ManualTask(
        id=spec["id"],
        day=d(spec["date"]),
        crew_member_id=spec.get("crew_member_id"),
    )


def make_absence(spec: dict):
    from event_ops.records import Absence
    from event_ops.types import AbsenceKind, ApprovalStatus

    return Absence(
        id=spec["id"],
        interval=interval(spec["start"], spec["end"]),
        kind=AbsenceKind(spec.get("kind", "HOLIDAY")),
        status=ApprovalStatus(spec.get("status", "APPROVED")),
        crew_member_id=spec.get("crew_member_id"),
    )


def june_weekdays() -> list[date]:
    return [
        date(2024, 6, day) for day in range(1, 31)
        if date(2024, 6, day).weekday() < 5
    ]


# ---------------------------------------------------------------------------
# pytest fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def sm58():
    """Shure SM58, 10 owned."""
    return make_resource(
        {"id": "sm58", "name": "Shure SM58", "category": "AUDIO",
         "total_quantity_owned": 10}
    )


@pytest.fixture
def snapshot_repo():
    """InMemoryRepository built from data/fixtures/snapshot.json."""
    from event_ops.loaders import load_snapshot_json

    return load_snapshot_json(SNAPSHOT_PATH)


@pytest.fixture
def snapshot_dict() -> dict:
    return load_snapshot_dict()
