"""Tests for expanding availability blocks into fixed-duration slots."""
import pytest

from plantomeet.core.errors import ValidationError
from plantomeet.services.scheduling import AvailabilityBlock, generate_slots, group_slots_by_day
from plantomeet.services.scheduling.slots import cells_from_slots

DAY = "2025-06-10"
NEXT_DAY = "2025-06-11"


def windows(slots):
    return [(s.day, s.start_minute, s.end_minute) for s in slots]


class TestGenerateSlots:
    def test_block_tiles_from_its_start(self):
        slots = generate_slots([AvailabilityBlock("b", DAY, 540, 720)], 60)

        assert windows(slots) == [(DAY, 540, 600), (DAY, 600, 660), (DAY, 660, 720)]

    def test_partial_tail_is_dropped(self):
        """90 minutes of availability and a 60-minute meeting: one slot, the leftover 30 is unused."""
        slots = generate_slots([AvailabilityBlock("b", DAY, 540, 630)], 60)

        assert windows(slots) == [(DAY, 540, 600)]

    def test_block_shorter_than_duration_yields_nothing(self):
        assert generate_slots([AvailabilityBlock("b", DAY, 540, 570)], 60) == []

    def test_every_slot_has_exactly_the_duration(self):
        blocks = [
            AvailabilityBlock("a", DAY, 480, 735),
            AvailabilityBlock("b", NEXT_DAY, 0, 1440),
        ]

        slots = generate_slots(blocks, 45)

        assert slots
        assert all(s.end_minute - s.start_minute == 45 for s in slots)

    def test_slots_stay_inside_their_block(self):
        block = AvailabilityBlock("a", DAY, 500, 800)

        for slot in generate_slots([block], 30):
            assert block.start_minute <= slot.start_minute
            assert slot.end_minute <= block.end_minute

    def test_result_is_sorted_by_day_then_start(self):
        blocks = [
            AvailabilityBlock("late", NEXT_DAY, 600, 660),
            AvailabilityBlock("pm", DAY, 840, 900),
            AvailabilityBlock("am", DAY, 540, 600),
        ]

        assert windows(generate_slots(blocks, 60)) == [
            (DAY, 540, 600),
            (DAY, 840, 900),
            (NEXT_DAY, 600, 660),
        ]

    def test_poll_id_is_stamped_on_slots(self):
        slots = generate_slots([AvailabilityBlock("b", DAY, 540, 600)], 60, poll_id="poll-1")

        assert slots[0].poll_id == "poll-1"

    def test_slot_ids_are_unique(self):
        slots = generate_slots([AvailabilityBlock("b", DAY, 0, 600)], 30)

        assert len({s.id for s in slots}) == len(slots)

    def test_no_blocks_no_slots(self):
        assert generate_slots([], 60) == []

    @pytest.mark.parametrize("duration", [0, -15])
    def test_non_positive_duration_is_rejected(self, duration):
        with pytest.raises(ValidationError):
            generate_slots([AvailabilityBlock("b", DAY, 540, 600)], duration)

    def test_slot_labels(self):
        slot = generate_slots([AvailabilityBlock("b", DAY, 570, 630)], 60)[0]

        assert slot.start_time == "09:30"
        assert slot.end_time == "10:30"


class TestSlotHelpers:
    def test_group_by_day_keeps_order(self):
        slots = generate_slots(
            [AvailabilityBlock("a", DAY, 540, 660), AvailabilityBlock("b", NEXT_DAY, 600, 660)], 60
        )

        grouped = group_slots_by_day(slots)

        assert list(grouped) == [DAY, NEXT_DAY]
        assert [s.start_minute for s in grouped[DAY]] == [540, 600]

    def test_cells_from_slots_marks_each_slot_start(self):
        slots = generate_slots([AvailabilityBlock("a", DAY, 540, 660)], 60)

        assert cells_from_slots(slots) == {(DAY, 540), (DAY, 600)}
