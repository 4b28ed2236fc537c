"""
Vote tallies, slot score and best-first ranking.

score = 2 * yes + maybe - no. Ties on score go to the earliest (day, start) slot, so the
"best slot" does not depend on the order votes arrived in. No responses at all -> no best slot.
"""
from typing import Iterable, Sequence

from plantomeet.core.constants import (
    AVAILABILITY_MAYBE,
    AVAILABILITY_NO,
    AVAILABILITY_YES,
    SCORE_MAYBE,
    SCORE_NO,
    SCORE_YES,
)
from plantomeet.services.scheduling.slots import slot_sort_key
from plantomeet.services.scheduling.types import Response, SlotStats, TimeSlot


def aggregate(responses: Iterable[Response], slot_id: str) -> SlotStats:
    """Tally one slot. Responses for other slots are ignored. Pure; safe to call on every render."""
    yes = maybe = no = 0
    for r in responses:
        if r.slot_id != slot_id:
            continue
        if r.availability == AVAILABILITY_YES:
            yes += 1
        elif r.availability == AVAILABILITY_MAYBE:
            maybe += 1
        elif r.availability == AVAILABILITY_NO:
            no += 1
    return SlotStats(
        yes=yes,
        maybe=maybe,
        no=no,
        total=yes + maybe + no,
        score=yes * SCORE_YES + maybe * SCORE_MAYBE + no * SCORE_NO,
    )


def stats_by_slot(slots: Iterable[TimeSlot], responses: Sequence[Response]) -> dict[str, SlotStats]:
    return {s.id: aggregate(responses, s.id) for s in slots}


def rank_slots(slots: Iterable[TimeSlot], responses: Sequence[Response]) -> list[TimeSlot]:
    """Best first: score descending, then earliest (day, start)."""
    slots = list(slots)
    stats = stats_by_slot(slots, responses)
    return sorted(slots, key=lambda s: (-stats[s.id].score, *slot_sort_key(s)))


def best_slot(slots: Iterable[TimeSlot], responses: Sequence[Response]) -> TimeSlot | None:
    """Top of rank_slots, or None when nobody has responded yet."""
    if not responses:
        return None
    ranked = rank_slots(slots, responses)
    return ranked[0] if ranked else None
