"""
Conflict detection against external busy intervals (e.g. the user's calendar).

Half-open overlap: conflict iff slot_start < busy_end and slot_end > busy_start.
A busy interval ending exactly at the slot start, or starting exactly at the slot end, is NOT a conflict.
Slot times are wall-clock on their day; a timezone-aware busy interval is compared with the slot
read as wall-clock in that interval's zone.
"""
from datetime import datetime
from typing import Iterable

from plantomeet.services.scheduling.time_math import slot_instants
from plantomeet.services.scheduling.types import BusyInterval, Cell, TimeSlot


def _in_zone_of(wall_clock: datetime, other: datetime) -> datetime:
    if other.tzinfo is not None and wall_clock.tzinfo is None:
        return wall_clock.replace(tzinfo=other.tzinfo)
    return wall_clock


def overlaps(start: datetime, end: datetime, busy: BusyInterval) -> bool:
    busy_start, busy_end = busy
    return _in_zone_of(start, busy_end) < busy_end and _in_zone_of(end, busy_start) > busy_start


def has_conflict(slot: TimeSlot, busy_intervals: Iterable[BusyInterval]) -> bool:
    start, end = slot_instants(slot.day, slot.start_minute, slot.end_minute)
    return any(overlaps(start, end, BusyInterval(*b)) for b in busy_intervals)


def is_cell_busy(cell: Cell, granularity_minutes: int, busy_intervals: Iterable[BusyInterval]) -> bool:
    """Same rule for one grid cell; used to shade busy cells while editing, before merging."""
    start, end = slot_instants(cell.day, cell.minute, cell.minute + granularity_minutes)
    return any(overlaps(start, end, BusyInterval(*b)) for b in busy_intervals)


def conflicting_slot_ids(slots: Iterable[TimeSlot], busy_intervals: Iterable[BusyInterval]) -> set[str]:
    busy = [BusyInterval(*b) for b in busy_intervals]
    return {s.id for s in slots if has_conflict(s, busy)}
