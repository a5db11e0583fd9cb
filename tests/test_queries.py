"""Tests for repository-backed queries over the June 2024 snapshot.

Snapshot: data/fixtures/snapshot.json
"""

from __future__ import annotations

import dataclasses

import pytest


# ---------------------------------------------------------------------------
# Availability
# ---------------------------------------------------------------------------
class TestAvailabilityFor:

    def test_overcommitted_window(self, snapshot_repo):
        """sm58: job-1 6 + job-2 (2+1) + rent-1 2 = 11 against 10 owned."""
        from event_ops.queries import availability_for

        result = availability_for(snapshot_repo, "sm58", ("2024-06-02", "2024-06-04"))
        assert result.used == 11
        assert result.available == 0
        assert result.overcommitted
        assert [(c.source_name, c.quantity) for c in result.conflicts] == [
            ("Convention Milano", 6), ("Gala Dinner", 3), ("Studio Rossi", 2),
        ]

    def test_editing_rental_excludes_itself(self, snapshot_repo):
        from event_ops.queries import availability_for

        result = availability_for(
            snapshot_repo, "sm58", ("2024-06-02", "2024-06-04"), exclude_source_id="rent-1"
        )
        assert result.available == 1
        assert "Studio Rossi" not in result.conflict_names

    @pytest.mark.parametrize(
        "resource_id, window, expected",
        [
            ("parled", ("2024-06-12", "2024-06-14"), 0),
            ("parled", ("2024-06-16", "2024-06-20"), 14),
            ("parled", ("2024-06-21", "2024-06-30"), 20),
            ("ql1", ("2024-06-01", "2024-06-02"), 1),
            ("truss2m", ("2024-06-15", "2024-06-15"), 4),
        ],
        ids=["job_and_rental", "rental_return_with_time", "after_return",
             "cancelled_rental", "last_day_of_job"],
    )
    def test_windows(self, snapshot_repo, resource_id, window, expected):
        from event_ops.queries import availability_for

        assert availability_for(snapshot_repo, resource_id, window).available == expected

    def test_unknown_resource(self, snapshot_repo):
        from event_ops.queries import availability_for
        from event_ops.types import ResourceNotFound

        with pytest.raises(ResourceNotFound):
            availability_for(snapshot_repo, "mic-x", ("2024-06-01", "2024-06-02"))

    def test_reflects_repository_at_call_time(self, snapshot_repo):
        from event_ops.queries import availability_for
        from event_ops.types import JobStatus

        window = ("2024-06-05", "2024-06-06")
        before = availability_for(snapshot_repo, "sm58", window)

        revived = tuple(
            dataclasses.replace(job, status=JobStatus.CONFIRMED) if job.id == "job-3" else job
            for job in snapshot_repo.jobs
        )
        after = availability_for(
            dataclasses.replace(snapshot_repo, jobs=revived), "sm58", window
        )
        assert before.available == 7
        assert after.available == 0
        assert after.overcommitted


class TestInventoryAvailability:

    def test_every_resource_in_inventory_order(self, snapshot_repo):
        from event_ops.queries import inventory_availability

        results = inventory_availability(snapshot_repo, ("2024-06-02", "2024-06-04"))
        assert [(r.resource_id, r.available) for r in results] == [
            ("sm58", 0), ("ql1", 1), ("ptz", 2),
            ("xlr10", 30), ("parled", 12), ("truss2m", 12),
        ]

    def test_matches_single_queries(self, snapshot_repo):
        from event_ops.queries import availability_for, inventory_availability

        window = ("2024-06-10", "2024-06-16")
        for result in inventory_availability(snapshot_repo, window, "job-4"):
            single = availability_for(snapshot_repo, result.resource_id, window, "job-4")
            assert result == single


# ---------------------------------------------------------------------------
# Compliance
# ---------------------------------------------------------------------------
JUNE_EXPECTED = {
    "c-anna": (19, 2, {22: 2, 23: 6, 24: 6, 25: 5}),
    "c-marco": (22, 0, {22: 2, 23: 5, 24: 5, 25: 5, 26: 5}),
    "c-luca": (22, 2, {23: 7, 24: 5, 25: 5, 26: 5}),
    "c-giulia": (21, 1, {23: 5, 24: 6, 25: 5, 26: 5}),
}


class TestCrewCompliance:

    @pytest.mark.parametrize("crew_id", list(JUNE_EXPECTED))
    def test_june(self, snapshot_repo, crew_id):
        from event_ops.queries import crew_compliance

        total, missed, per_week = JUNE_EXPECTED[crew_id]
        analysis = crew_compliance(snapshot_repo, crew_id, 2024, 6)
        assert analysis.total_worked == total
        assert analysis.missed_rest == missed
        assert analysis.per_week == per_week

    def test_unknown_crew_member(self, snapshot_repo):
        from event_ops.queries import crew_compliance

        with pytest.raises(KeyError):
            crew_compliance(snapshot_repo, "c-nobody", 2024, 6)


class TestRosterCompliance:

    def test_internal_staff_by_default(self, snapshot_repo):
        from event_ops.queries import roster_compliance

        rows = roster_compliance(snapshot_repo, 2024, 6)
        assert [member.id for member, _ in rows] == ["c-anna", "c-marco", "c-luca"]
        assert [a.missed_rest for _, a in rows] == [2, 0, 2]

    def test_everyone(self, snapshot_repo):
        from event_ops.queries import roster_compliance

        rows = roster_compliance(snapshot_repo, 2024, 6, crew_type=None)
        assert [member.id for member, _ in rows] == [
            "c-anna", "c-marco", "c-luca", "c-giulia",
        ]

    def test_freelance_only(self, snapshot_repo):
        from event_ops.queries import roster_compliance
        from event_ops.types import CrewType

        rows = roster_compliance(snapshot_repo, 2024, 6, crew_type=CrewType.FREELANCE)
        [(member, analysis)] = rows
        assert member.id == "c-giulia"
        assert analysis.missed_rest == 1


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------
class TestInMemoryRepository:

    def test_get_resource(self, snapshot_repo):
        assert snapshot_repo.get_resource("ptz").total_quantity_owned == 4

    def test_get_resource_unknown(self, snapshot_repo):
        from event_ops.types import ResourceNotFound

        with pytest.raises(ResourceNotFound):
            snapshot_repo.get_resource("mic-x")

    def test_get_crew_member_unknown(self, snapshot_repo):
        with pytest.raises(KeyError):
            snapshot_repo.get_crew_member("c-nobody")

    def test_satisfies_protocol(self, snapshot_repo):
        from event_ops.repository import Repository

        def count_jobs(repo: Repository) -> int:
            return len(repo.list_jobs())

        assert count_jobs(snapshot_repo) == 4

    def test_empty_repository(self):
        from event_ops.queries import inventory_availability, roster_compliance
        from event_ops.repository import InMemoryRepository

        repo = InMemoryRepository()
        assert inventory_availability(repo, ("2024-06-01", "2024-06-30")) == []
        assert roster_compliance(repo, 2024, 6) == []
