"""
Polls API: create, read (with live ranking), respond, finalize, delete, clone, participants, reactions, .ics.

Participants are identified by an opaque participant_id (the client's session id); no auth here.
Domain errors are mapped to HTTP statuses by the app-level handler (core.errors.ERROR_RULES).
"""
import logging
from typing import Any, Literal

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response as HttpResponse
from pydantic import BaseModel, Field

from plantomeet.api.deps import get_lifecycle
from plantomeet.api.routes.scheduling import BlockIn, CellIn, blocks_from_request
from plantomeet.core.errors import UnknownSlotError, ValidationError
from plantomeet.services.calendar_export import build_ics
from plantomeet.services.polls import PollLifecycle

router = APIRouter()
logger = logging.getLogger(__name__)


class CreatePollRequest(BaseModel):
    title: str
    duration_minutes: int
    date_range_start: str = Field(..., description="YYYY-MM-DD")
    date_range_end: str = Field(..., description="YYYY-MM-DD, inclusive")
    cells: list[CellIn] = Field(default_factory=list, description="Selected grid cells, width = duration")
    blocks: list[BlockIn] = Field(default_factory=list)
    creator_id: str | None = None


class RespondRequest(BaseModel):
    slot_id: str
    participant_id: str = Field(..., min_length=1, max_length=64)
    availability: Literal["yes", "maybe", "no"]


class FinalizeRequest(BaseModel):
    slot_id: str


class CloneRequest(BaseModel):
    date_range_start: str
    date_range_end: str
    creator_id: str | None = None


class JoinRequest(BaseModel):
    participant_id: str = Field(..., min_length=1, max_length=64)
    display_name: str | None = Field(None, max_length=100)


class ReactionRequest(BaseModel):
    participant_id: str = Field(..., min_length=1, max_length=64)
    emoji: str = Field(..., min_length=1, max_length=16)
    comment: str | None = Field(None, max_length=500)


# --- Create / read / delete ---


@router.post("", status_code=201)
def create_poll(body: CreatePollRequest, lifecycle: PollLifecycle = Depends(get_lifecycle)) -> dict[str, Any]:
    """Create a poll and its frozen slot set from cells and/or blocks."""
    blocks = blocks_from_request(body.cells, body.blocks, body.duration_minutes)
    poll_id = lifecycle.create_poll(
        title=body.title,
        duration_minutes=body.duration_minutes,
        date_range_start=body.date_range_start,
        date_range_end=body.date_range_end,
        blocks=blocks,
        creator_id=body.creator_id,
    )
    return {"id": poll_id}


@router.get("")
def list_polls(
    creator_id: str | None = Query(None, max_length=64),
    participant_id: str | None = Query(None, max_length=64),
    lifecycle: PollLifecycle = Depends(get_lifecycle),
) -> dict[str, Any]:
    """Polls created by creator_id, and polls participant_id voted on but did not create. Newest first."""
    lists = lifecycle.list_polls(creator_id=creator_id, participant_id=participant_id)
    return {key: [p.to_dict() for p in polls] for key, polls in lists.items()}


@router.get("/{poll_id}")
def get_poll(poll_id: str, lifecycle: PollLifecycle = Depends(get_lifecycle)) -> dict[str, Any]:
    """Poll with slots, per-slot tallies, best-first ranking and the recommended slot."""
    return lifecycle.get_poll_summary(poll_id)


@router.delete("/{poll_id}")
def delete_poll(poll_id: str, lifecycle: PollLifecycle = Depends(get_lifecycle)) -> dict[str, Any]:
    lifecycle.delete_poll(poll_id)
    return {"ok": True}


# --- Respond / finalize ---


@router.post("/{poll_id}/responses")
def respond(poll_id: str, body: RespondRequest, lifecycle: PollLifecycle = Depends(get_lifecycle)) -> dict[str, Any]:
    """Vote on one slot. Voting again on the same slot replaces the earlier vote."""
    lifecycle.respond(poll_id, body.slot_id, body.participant_id, body.availability)
    return {"ok": True}


@router.post("/{poll_id}/finalize")
def finalize(poll_id: str, body: FinalizeRequest, lifecycle: PollLifecycle = Depends(get_lifecycle)) -> dict[str, Any]:
    """Commit the poll to one slot. Repeating with the same slot is a no-op."""
    lifecycle.finalize(poll_id, body.slot_id)
    return {"ok": True, "finalized_slot_id": body.slot_id}


@router.post("/{poll_id}/finalize-best")
def finalize_best(poll_id: str, lifecycle: PollLifecycle = Depends(get_lifecycle)) -> dict[str, Any]:
    """Finalize the top-ranked slot (score, then earliest)."""
    slot = lifecycle.finalize_best(poll_id)
    return {"ok": True, "finalized_slot_id": slot.id}


# --- Clone ---


@router.post("/{poll_id}/clone", status_code=201)
def clone_poll(poll_id: str, body: CloneRequest, lifecycle: PollLifecycle = Depends(get_lifecycle)) -> dict[str, Any]:
    """Same title, duration and time windows, offered on a new date range."""
    new_id = lifecycle.clone_poll(poll_id, body.date_range_start, body.date_range_end, creator_id=body.creator_id)
    return {"id": new_id, "parent_poll_id": poll_id}


# --- Participants / reactions ---


@router.post("/{poll_id}/participants")
def join_poll(poll_id: str, body: JoinRequest, lifecycle: PollLifecycle = Depends(get_lifecycle)) -> dict[str, Any]:
    participant = lifecycle.join_poll(poll_id, body.participant_id, body.display_name)
    return {"participant_id": participant.participant_id, "display_name": participant.display_name}


@router.get("/{poll_id}/reactions")
def list_reactions(poll_id: str, lifecycle: PollLifecycle = Depends(get_lifecycle)) -> dict[str, Any]:
    reactions = lifecycle.list_reactions(poll_id)
    return {"reactions": [r.to_dict() for r in reactions], "count": len(reactions)}


@router.post("/{poll_id}/reactions")
def react(poll_id: str, body: ReactionRequest, lifecycle: PollLifecycle = Depends(get_lifecycle)) -> dict[str, Any]:
    """One reaction per participant, finalized polls only. Reacting again replaces it."""
    return lifecycle.react(poll_id, body.participant_id, body.emoji, body.comment).to_dict()


# --- Calendar export ---


@router.get("/{poll_id}/calendar.ics")
def calendar_ics(poll_id: str, lifecycle: PollLifecycle = Depends(get_lifecycle)) -> HttpResponse:
    """Download the finalized time as an .ics event."""
    poll = lifecycle.get_poll(poll_id)
    if not poll.is_finalized:
        raise ValidationError("Poll is not finalized yet")
    slot = next((s for s in lifecycle.list_slots(poll_id) if s.id == poll.finalized_slot_id), None)
    if slot is None:
        raise UnknownSlotError(poll_id, poll.finalized_slot_id)
    content = build_ics(poll.title, slot, description=f"Scheduled with PlanToMeet ({poll.duration_minutes} min)")
    logger.info("Exported calendar for poll %s", poll_id)
    return HttpResponse(
        content=content,
        media_type="text/calendar",
        headers={"Content-Disposition": f'attachment; filename="{poll_id}.ics"'},
    )
