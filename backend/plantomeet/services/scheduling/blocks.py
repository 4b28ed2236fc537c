"""
Selected grid cells -> minimal contiguous availability blocks, and back.

- Each cell is granularity_minutes wide, so cell (d, m) covers [m, m + g) on day d.
- Per day: sort by minute, one scan; extend while next.minute == current end (exact adjacency,
  no gap tolerance), otherwise close the block. Duplicates collapse.
- A day with no cells gets no entry (never a zero-length block). Block ids are fresh uuid4s.
- Day keys must be YYYY-MM-DD.
"""
import uuid
from collections import defaultdict
from typing import Iterable

from plantomeet.core.constants import MINUTES_PER_DAY
from plantomeet.core.errors import ValidationError
from plantomeet.services.scheduling.time_math import parse_day_key
from plantomeet.services.scheduling.types import AvailabilityBlock, Cell, DayKey


def _check_granularity(granularity_minutes: int) -> None:
    if granularity_minutes <= 0:
        raise ValidationError(f"Grid granularity must be positive, got {granularity_minutes}")


def merge_cells(cells: Iterable[Cell | tuple[str, int]], granularity_minutes: int) -> dict[DayKey, list[AvailabilityBlock]]:
    """Group by day and merge adjacent cells. Returns {day: [blocks ascending by start]}."""
    _check_granularity(granularity_minutes)

    minutes_by_day: dict[DayKey, set[int]] = defaultdict(set)
    for raw in cells:
        cell = Cell(*raw)
        if cell.day not in minutes_by_day:
            parse_day_key(cell.day)
        if cell.minute < 0 or cell.minute + granularity_minutes > MINUTES_PER_DAY:
            raise ValidationError(f"Cell {cell.day} @ {cell.minute} does not fit in the day")
        minutes_by_day[cell.day].add(cell.minute)

    out: dict[DayKey, list[AvailabilityBlock]] = {}
    for day in sorted(minutes_by_day):
        blocks: list[AvailabilityBlock] = []
        block_start: int | None = None
        block_end = 0
        for minute in sorted(minutes_by_day[day]):
            if block_start is not None and minute == block_end:
                block_end = minute + granularity_minutes
                continue
            if block_start is not None:
                blocks.append(AvailabilityBlock(str(uuid.uuid4()), day, block_start, block_end))
            block_start, block_end = minute, minute + granularity_minutes
        if block_start is not None:
            blocks.append(AvailabilityBlock(str(uuid.uuid4()), day, block_start, block_end))
        out[day] = blocks
    return out


def flatten_blocks(blocks_by_day: dict[DayKey, list[AvailabilityBlock]]) -> list[AvailabilityBlock]:
    """All blocks, ordered by (day, start)."""
    flat = [b for blocks in blocks_by_day.values() for b in blocks]
    flat.sort(key=lambda b: (b.date, b.start_minute))
    return flat


def cells_from_block(block: AvailabilityBlock, granularity_minutes: int) -> list[Cell]:
    """One cell per granularity step inside the block. Rebuilds grid selection state when editing."""
    _check_granularity(granularity_minutes)
    return [Cell(block.date, m) for m in range(block.start_minute, block.end_minute, granularity_minutes)]


def cells_from_blocks(blocks: Iterable[AvailabilityBlock], granularity_minutes: int) -> set[Cell]:
    cells: set[Cell] = set()
    for block in blocks:
        cells.update(cells_from_block(block, granularity_minutes))
    return cells


def normalize_blocks(blocks: Iterable[AvailabilityBlock]) -> list[AvailabilityBlock]:
    """
    Union of the given blocks per day: overlapping or touching blocks become one.
    A block that grows by absorbing others gets a fresh id; the rest keep theirs.
    Ordered by (day, start).
    """
    out: list[AvailabilityBlock] = []
    for block in sorted(blocks, key=lambda b: (b.date, b.start_minute, b.end_minute)):
        parse_day_key(block.date)
        last = out[-1] if out else None
        if last is not None and last.date == block.date and block.start_minute <= last.end_minute:
            if block.end_minute > last.end_minute:
                out[-1] = AvailabilityBlock(str(uuid.uuid4()), last.date, last.start_minute, block.end_minute)
            continue
        out.append(block)
    return out
