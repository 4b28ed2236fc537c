"""Tests for half-open overlap between slots and external busy intervals."""
from datetime import datetime, timedelta, timezone

from plantomeet.services.scheduling import BusyInterval, Cell, TimeSlot, conflicting_slot_ids, has_conflict, is_cell_busy
from plantomeet.services.scheduling.conflicts import overlaps

DAY = "2025-06-10"
SLOT = TimeSlot("s1", DAY, 540, 600)  # 09:00-10:00


def at(hour, minute=0, tzinfo=None):
    return datetime(2025, 6, 10, hour, minute, tzinfo=tzinfo)


class TestHasConflict:
    def test_busy_ending_at_slot_start_is_not_a_conflict(self):
        assert not has_conflict(SLOT, [BusyInterval(at(8), at(9))])

    def test_busy_starting_at_slot_end_is_not_a_conflict(self):
        assert not has_conflict(SLOT, [BusyInterval(at(10), at(11))])

    def test_busy_inside_slot_is_a_conflict(self):
        assert has_conflict(SLOT, [BusyInterval(at(9, 15), at(9, 45))])

    def test_busy_covering_slot_is_a_conflict(self):
        assert has_conflict(SLOT, [BusyInterval(at(8), at(12))])

    def test_partial_overlap_is_a_conflict(self):
        assert has_conflict(SLOT, [BusyInterval(at(9, 59), at(10, 30))])

    def test_other_day_is_not_a_conflict(self):
        assert not has_conflict(SLOT, [BusyInterval(datetime(2025, 6, 11, 9), datetime(2025, 6, 11, 10))])

    def test_no_busy_intervals(self):
        assert not has_conflict(SLOT, [])

    def test_plain_tuples_are_accepted(self):
        assert has_conflict(SLOT, [(at(9), at(10))])

    def test_aware_interval_is_compared_in_its_own_zone(self):
        """Slot wall-clock 09:00-10:00 read in the event's zone."""
        tz = timezone(timedelta(hours=-4))

        assert has_conflict(SLOT, [BusyInterval(at(9, 30, tz), at(10, 30, tz))])
        assert not has_conflict(SLOT, [BusyInterval(at(10, 0, tz), at(11, 0, tz))])


class TestCellAndBatch:
    def test_cell_busy_uses_same_rule(self):
        busy = [BusyInterval(at(9, 30), at(10))]

        assert is_cell_busy(Cell(DAY, 540), 60, busy)
        assert not is_cell_busy(Cell(DAY, 600), 60, busy)

    def test_conflicting_slot_ids(self):
        slots = [SLOT, TimeSlot("s2", DAY, 600, 660), TimeSlot("s3", DAY, 660, 720)]
        busy = [BusyInterval(at(10, 30), at(11, 30))]

        assert conflicting_slot_ids(slots, busy) == {"s2", "s3"}

    def test_overlaps_is_symmetric_at_boundaries(self):
        busy = BusyInterval(at(10), at(11))

        assert not overlaps(at(9), at(10), busy)
        assert not overlaps(at(11), at(12), busy)
        assert overlaps(at(10), at(11), busy)
