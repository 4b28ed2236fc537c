"""Availability blocks -> fixed-duration time slots."""
import uuid
from collections import defaultdict
from typing import Iterable

from plantomeet.core.errors import ValidationError
from plantomeet.services.scheduling.types import AvailabilityBlock, Cell, DayKey, TimeSlot


def slot_sort_key(slot: TimeSlot) -> tuple[str, int]:
    return (slot.day, slot.start_minute)


def is_block_valid_for_duration(block: AvailabilityBlock, duration_minutes: int) -> bool:
    return block.duration_minutes >= duration_minutes


def generate_slots(
    blocks: Iterable[AvailabilityBlock],
    duration_minutes: int,
    poll_id: str | None = None,
) -> list[TimeSlot]:
    """
    Emit a slot every duration_minutes from each block's start while start + duration <= block end.
    Blocks shorter than the duration yield nothing (dropped, not an error).
    Sorted by (day, start).
    """
    if duration_minutes <= 0:
        raise ValidationError(f"Duration must be positive, got {duration_minutes}")

    slots: list[TimeSlot] = []
    for block in blocks:
        if not is_block_valid_for_duration(block, duration_minutes):
            continue
        start = block.start_minute
        while start + duration_minutes <= block.end_minute:
            slots.append(
                TimeSlot(
                    id=str(uuid.uuid4()),
                    day=block.date,
                    start_minute=start,
                    end_minute=start + duration_minutes,
                    poll_id=poll_id,
                )
            )
            start += duration_minutes
    slots.sort(key=slot_sort_key)
    return slots


def cells_from_slots(slots: Iterable[TimeSlot]) -> set[Cell]:
    """Each slot's start as a grid cell (granularity = slot duration)."""
    return {Cell(s.day, s.start_minute) for s in slots}


def group_slots_by_day(slots: Iterable[TimeSlot]) -> dict[DayKey, list[TimeSlot]]:
    """{day: slots} keeping input order within each day."""
    groups: dict[DayKey, list[TimeSlot]] = defaultdict(list)
    for slot in slots:
        groups[slot.day].append(slot)
    return dict(groups)
