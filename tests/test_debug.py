"""Tests for the ASCII month grid and availability summary."""

from __future__ import annotations


class TestShowMonth:

    def test_anna_june(self, snapshot_repo, capsys):
        from event_ops.debug import show_month
        from event_ops.queries import crew_compliance

        out = show_month(crew_compliance(snapshot_repo, "c-anna", 2024, 6))
        lines = out.splitlines()

        assert lines[0] == "c-anna  2024-06"
        assert lines[1].split() == ["Wk", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun",
                                    "Days", "Over"]
        # Mon 05-27 .. Fri 05-31 are outside the month.
        assert lines[2].split() == ["22", "J", "J", "2"]
        assert lines[3].split() == ["23", "J", "W", "W", "W", "W", "T", ".", "6", "+1"]
        assert lines[4].split() == ["24", "J", "J", "J", "J", "J", "J", ".", "6", "+1"]
        assert lines[5].split() == ["25", "W", "W", "W", "W", "W", ".", ".", "5"]
        assert lines[6].split() == ["26", "A", "A", "A", "A", "A", ".", ".", "0"]
        assert lines[7] == "worked=19 missed_rest=2"
        assert len(lines) == 9

        assert capsys.readouterr().out.rstrip("\n") == out


class TestShowAvailability:

    def test_overcommitted(self, snapshot_repo, capsys):
        from event_ops.debug import show_availability
        from event_ops.queries import availability_for

        result = availability_for(snapshot_repo, "sm58", ("2024-06-02", "2024-06-04"))
        out = show_availability(result, "Shure SM58")
        lines = out.splitlines()

        assert lines[0] == "Shure SM58: 0/10 available (used 11)  OVERCOMMITTED"
        assert lines[1] == "  - JOB    Convention Milano x6  [2024-06-01..2024-06-03]"
        assert lines[2] == "  - JOB    Gala Dinner x3  [2024-06-03..2024-06-09]"
        assert lines[3] == "  - RENTAL Studio Rossi x2  [2024-06-02..2024-06-04]"
        assert capsys.readouterr().out.rstrip("\n") == out

    def test_free_resource_uses_id(self, snapshot_repo, capsys):
        from event_ops.debug import show_availability
        from event_ops.queries import availability_for

        result = availability_for(snapshot_repo, "truss2m", ("2024-06-20", "2024-06-21"))
        assert show_availability(result) == "truss2m: 12/12 available (used 0)"
