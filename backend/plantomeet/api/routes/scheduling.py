"""
Scheduling previews: merge grid cells into blocks and expand them into slots, with calendar conflicts.
Nothing here is persisted; the creator edits freely until the poll is created.
"""
import uuid
from datetime import datetime
from typing import Any

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from plantomeet.config import settings
from plantomeet.core.constants import MINUTES_PER_DAY, MINUTES_PER_HOUR
from plantomeet.core.errors import ValidationError
from plantomeet.services.scheduling import (
    AvailabilityBlock,
    BusyInterval,
    Cell,
    conflicting_slot_ids,
    flatten_blocks,
    generate_slots,
    group_slots_by_day,
    merge_cells,
    normalize_blocks,
)
from plantomeet.services.scheduling.time_math import (
    days_in_range,
    format_day,
    format_minute_range,
    format_slot_time,
    parse_time_label,
    time_label,
)

router = APIRouter()


class CellIn(BaseModel):
    day: str = Field(..., description="YYYY-MM-DD")
    minute: int = Field(..., ge=0, le=1439, description="Minute of day the cell starts at")


class BlockIn(BaseModel):
    date: str = Field(..., description="YYYY-MM-DD")
    start_time: str = Field(..., description="HH:MM")
    end_time: str = Field(..., description="HH:MM")


class BusyIn(BaseModel):
    start: datetime
    end: datetime


class MergeRequest(BaseModel):
    cells: list[CellIn] = Field(default_factory=list)
    granularity_minutes: int


class PreviewRequest(BaseModel):
    duration_minutes: int
    cells: list[CellIn] = Field(default_factory=list)
    blocks: list[BlockIn] = Field(default_factory=list)
    busy: list[BusyIn] = Field(default_factory=list, description="Already-fetched calendar events")


def blocks_from_request(cells: list[CellIn], blocks: list[BlockIn], granularity_minutes: int) -> list[AvailabilityBlock]:
    """Explicit blocks plus blocks merged from cells (cell width = granularity), unioned per day."""
    out = [
        AvailabilityBlock(str(uuid.uuid4()), b.date, parse_time_label(b.start_time), parse_time_label(b.end_time))
        for b in blocks
    ]
    if cells:
        out.extend(flatten_blocks(merge_cells((Cell(c.day, c.minute) for c in cells), granularity_minutes)))
    return normalize_blocks(out)


def block_to_dict(block: AvailabilityBlock) -> dict[str, Any]:
    return {
        "id": block.id,
        "date": block.date,
        "start_time": time_label(block.start_minute),
        "end_time": time_label(block.end_minute),
        "label": format_slot_time(block),
    }


@router.get("/grid")
def grid(
    start: str = Query(..., description="YYYY-MM-DD"),
    end: str = Query(..., description="YYYY-MM-DD, inclusive"),
    granularity_minutes: int = Query(60, gt=0, le=MINUTES_PER_DAY),
) -> dict[str, Any]:
    """Empty availability grid: one column per day, one row per cell between the configured hours."""
    days = days_in_range(start, end)
    if len(days) > settings.max_range_days:
        raise ValidationError(f"Date range spans {len(days)} days; the limit is {settings.max_range_days}")
    first = settings.grid_start_hour * MINUTES_PER_HOUR
    last = settings.grid_end_hour * MINUTES_PER_HOUR
    rows = list(range(first, last - granularity_minutes + 1, granularity_minutes))
    return {
        "days": [{"day": d, "label": format_day(d)} for d in days],
        "rows": [
            {"minute": m, "time": time_label(m), "label": format_minute_range(m, m + granularity_minutes)}
            for m in rows
        ],
        "granularity_minutes": granularity_minutes,
    }


@router.post("/merge")
def merge(body: MergeRequest) -> dict[str, Any]:
    """Selected cells -> minimal blocks per day."""
    by_day = merge_cells((Cell(c.day, c.minute) for c in body.cells), body.granularity_minutes)
    return {
        "blocks": {day: [block_to_dict(b) for b in blocks] for day, blocks in by_day.items()},
        "days_with_availability": len(by_day),
    }


@router.post("/slots/preview")
def preview_slots(body: PreviewRequest) -> dict[str, Any]:
    """
    Slots the poll would get, grouped by day, each flagged if it overlaps a busy interval.
    Blocks shorter than the duration silently contribute nothing.
    """
    blocks = blocks_from_request(body.cells, body.blocks, body.duration_minutes)
    slots = generate_slots(blocks, body.duration_minutes)
    busy_ids = conflicting_slot_ids(slots, [BusyInterval(b.start, b.end) for b in body.busy])
    return {
        "slot_count": len(slots),
        "days": {
            day: [
                {
                    "day": s.day,
                    "start_time": s.start_time,
                    "end_time": s.end_time,
                    "label": format_slot_time(s),
                    "has_conflict": s.id in busy_ids,
                }
                for s in day_slots
            ]
            for day, day_slots in group_slots_by_day(slots).items()
        },
    }
