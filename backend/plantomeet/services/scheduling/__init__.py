"""
Scheduling engine: pure, synchronous, reentrant.
cells -> blocks (blocks) -> slots (slots) -> conflicts (conflicts) -> tallies and ranking (scoring).
Every repository/backend goes through these functions; none reimplements them.
"""
from plantomeet.services.scheduling.blocks import (
    cells_from_block,
    cells_from_blocks,
    flatten_blocks,
    merge_cells,
    normalize_blocks,
)
from plantomeet.services.scheduling.conflicts import conflicting_slot_ids, has_conflict, is_cell_busy
from plantomeet.services.scheduling.scoring import aggregate, best_slot, rank_slots, stats_by_slot
from plantomeet.services.scheduling.slots import cells_from_slots, generate_slots, group_slots_by_day
from plantomeet.services.scheduling.types import (
    AVAILABILITY_VALUES,
    Availability,
    AvailabilityBlock,
    BusyInterval,
    Cell,
    Response,
    SlotStats,
    TimeSlot,
)

__all__ = [
    "AVAILABILITY_VALUES",
    "Availability",
    "AvailabilityBlock",
    "BusyInterval",
    "Cell",
    "Response",
    "SlotStats",
    "TimeSlot",
    "aggregate",
    "best_slot",
    "cells_from_block",
    "cells_from_blocks",
    "cells_from_slots",
    "conflicting_slot_ids",
    "flatten_blocks",
    "generate_slots",
    "group_slots_by_day",
    "has_conflict",
    "is_cell_busy",
    "merge_cells",
    "normalize_blocks",
    "rank_slots",
    "stats_by_slot",
]
