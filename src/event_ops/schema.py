"""Input validation for raw record dicts from the record store.

Each validator returns a list of error messages (empty = valid) so a loader
can report every problem in a snapshot at once.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable

from event_ops.calendar import parse_day
from event_ops.records import is_count
from event_ops.types import (
    AbsenceKind,
    ApprovalStatus,
    CrewType,
    JobStatus,
    RentalStatus,
    ResourceCategory,
)


def _check_id(record: dict, label: str, key: str = "id") -> list[str]:
    value = record.get(key)
    if not isinstance(value, str) or not value:
        return [f"{label}: missing or empty '{key}'"]
    return []


def _check_enum(
    record: dict, label: str, key: str, enum_cls: type[Enum], required: bool = False
) -> list[str]:
    if key not in record:
        return [f"{label}: missing '{key}'"] if required else []
    allowed = [member.value for member in enum_cls]
    if record[key] not in allowed:
        return [f"{label}: invalid {key} {record[key]!r} (expected one of {allowed})"]
    return []


def _check_day(record: dict, label: str, key: str) -> list[str]:
    if key not in record:
        return [f"{label}: missing '{key}'"]
    try:
        parse_day(record[key])
    except (TypeError, ValueError) as e:
        return [f"{label}: invalid {key} - {e}"]
    return []


def _check_interval(record: dict, label: str, start_key: str, end_key: str) -> list[str]:
    errors = _check_day(record, label, start_key) + _check_day(record, label, end_key)
    if errors:
        return errors
    start, end = parse_day(record[start_key]), parse_day(record[end_key])
    if start > end:
        return [
            f"{label}: {start_key} {start.isoformat()} is after "
            f"{end_key} {end.isoformat()}"
        ]
    return []


def _check_quantity(value: Any, label: str, key: str, minimum: int) -> list[str]:
    if not is_count(value):
        return [f"{label}: '{key}' must be an integer, got {value!r}"]
    if value < minimum:
        return [f"{label}: '{key}' must be >= {minimum}, got {value}"]
    return []


def _check_lines(lines: Any, label: str) -> list[str]:
    if not isinstance(lines, list):
        return [f"{label}: lines must be a list"]
    errors: list[str] = []
    for i, line in enumerate(lines):
        line_label = f"{label}, line {i}"
        if not isinstance(line, dict):
            errors.append(f"{line_label}: expected an object, got {line!r}")
            continue
        errors.extend(_check_quantity(line.get("quantity"), line_label, "quantity", 0))
        inventory_id = line.get("inventory_id")
        if inventory_id is not None and not isinstance(inventory_id, str):
            errors.append(f"{line_label}: 'inventory_id' must be a string")
    return errors


def _not_an_object(record: Any, kind: str) -> list[str]:
    return [f"{kind}: expected an object, got {record!r}"]


def _check_entries(
    record: dict, label: str, key: str, check: Callable[[dict, str], list[str]]
) -> list[str]:
    """Run ``check`` on each object of the embedded list ``record[key]``."""
    entries = record.get(key, [])
    if not isinstance(entries, list):
        return [f"{label}: '{key}' must be a list"]
    errors: list[str] = []
    for i, entry in enumerate(entries):
        entry_label = f"{label}, {key[:-1]} {i}"
        if not isinstance(entry, dict):
            errors.append(f"{entry_label}: expected an object, got {entry!r}")
            continue
        errors.extend(check(entry, entry_label))
    return errors


def _check_task(task: dict, label: str) -> list[str]:
    return _check_id(task, label) + _check_day(task, label, "date")


def _check_absence(absence: dict, label: str) -> list[str]:
    errors = _check_id(absence, label)
    errors.extend(_check_interval(absence, label, "start", "end"))
    errors.extend(_check_enum(absence, label, "kind", AbsenceKind))
    errors.extend(_check_enum(absence, label, "status", ApprovalStatus))
    return errors


def validate_resource(record: dict) -> list[str]:
    """Validate an inventory record.

    Checks:
    - id is a non-empty string
    - category is a known ResourceCategory (if present)
    - total_quantity_owned is an integer >= 0
    """
    if not isinstance(record, dict):
        return _not_an_object(record, "Resource")
    label = f"Resource {record.get('id', '?')}"
    errors = _check_id(record, label)
    errors.extend(_check_enum(record, label, "category", ResourceCategory))
    errors.extend(
        _check_quantity(
            record.get("total_quantity_owned"), label, "total_quantity_owned", 0
        )
    )
    return errors


def validate_job(record: dict) -> list[str]:
    """Validate a job record: id, start <= end, status, crew list, material list."""
    if not isinstance(record, dict):
        return _not_an_object(record, "Job")
    label = f"Job {record.get('id', '?')}"
    errors = _check_id(record, label)
    errors.extend(_check_interval(record, label, "start", "end"))
    errors.extend(_check_enum(record, label, "status", JobStatus))

    crew = record.get("assigned_crew", [])
    if not isinstance(crew, list) or not all(isinstance(c, str) for c in crew):
        errors.append(f"{label}: 'assigned_crew' must be a list of crew ids")

    errors.extend(_check_lines(record.get("material_list", []), label))
    return errors


def validate_rental(record: dict) -> list[str]:
    """Validate a rental record: id, pickup <= return, status, items."""
    if not isinstance(record, dict):
        return _not_an_object(record, "Rental")
    label = f"Rental {record.get('id', '?')}"
    errors = _check_id(record, label)
    errors.extend(_check_interval(record, label, "pickup", "return"))
    errors.extend(_check_enum(record, label, "status", RentalStatus))
    errors.extend(_check_lines(record.get("items", []), label))
    return errors


def validate_crew_member(record: dict) -> list[str]:
    """Validate a crew record with its embedded tasks and absences.

    Checks:
    - id is a non-empty string, crew_type is known (if present)
    - each task has an id and a valid date
    - each absence has an id, start <= end, known kind and status
    """
    if not isinstance(record, dict):
        return _not_an_object(record, "Crew")
    label = f"Crew {record.get('id', '?')}"
    errors = _check_id(record, label)
    errors.extend(_check_enum(record, label, "crew_type", CrewType))

    errors.extend(_check_entries(record, label, "tasks", _check_task))
    errors.extend(_check_entries(record, label, "absences", _check_absence))
    return errors
