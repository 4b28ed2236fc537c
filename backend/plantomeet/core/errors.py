"""
Centralized error handling for scheduling/poll failures.
Domain exceptions plus a rule table mapping each to an HTTP status and a user-facing message,
so routes stay thin and new error types are easy to add.
"""
from __future__ import annotations

from fastapi import HTTPException

# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------


class SchedulingError(Exception):
    """Base class for every error raised by the engine and the poll lifecycle."""


class ValidationError(SchedulingError):
    """Bad input shape: duration <= 0, inverted date range, empty slot set, malformed labels."""


class UnknownPollError(SchedulingError):
    def __init__(self, poll_id: str):
        super().__init__(f"Poll not found: {poll_id}")
        self.poll_id = poll_id


class UnknownSlotError(SchedulingError):
    def __init__(self, poll_id: str, slot_id: str):
        super().__init__(f"Slot {slot_id} does not belong to poll {poll_id}")
        self.poll_id = poll_id
        self.slot_id = slot_id


class PollFinalizedError(SchedulingError):
    """Poll is already decided; the caller should refresh. Benign, not fatal."""

    def __init__(self, poll_id: str):
        super().__init__(f"Poll {poll_id} is already finalized")
        self.poll_id = poll_id


class AlreadyFinalizedError(SchedulingError):
    """Finalize called with a different slot after the poll was finalized."""

    def __init__(self, poll_id: str, finalized_slot_id: str, requested_slot_id: str):
        super().__init__(
            f"Poll {poll_id} is already finalized with slot {finalized_slot_id}, not {requested_slot_id}"
        )
        self.poll_id = poll_id
        self.finalized_slot_id = finalized_slot_id
        self.requested_slot_id = requested_slot_id


# ---------------------------------------------------------------------------
# Constants: status codes and user-facing messages
# ---------------------------------------------------------------------------

STATUS_NOT_FOUND = 404
STATUS_CONFLICT = 409
STATUS_UNPROCESSABLE = 422

MSG_POLL_DECIDED = "This poll has already been decided. Refresh to see the final time."
MSG_ALREADY_FINALIZED = "This poll was already finalized with a different time."


# ---------------------------------------------------------------------------
# Error rules: (exception type, status_code, detail_message or None to use str(exc))
# Add new rules here instead of scattering checks in routes. First match wins.
# ---------------------------------------------------------------------------

ERROR_RULES: list[tuple[type[SchedulingError], int, str | None]] = [
    (ValidationError, STATUS_UNPROCESSABLE, None),
    (UnknownPollError, STATUS_NOT_FOUND, None),
    (UnknownSlotError, STATUS_NOT_FOUND, None),
    (PollFinalizedError, STATUS_CONFLICT, MSG_POLL_DECIDED),
    (AlreadyFinalizedError, STATUS_CONFLICT, MSG_ALREADY_FINALIZED),
]


def scheduling_error_to_http(exc: SchedulingError) -> HTTPException:
    """
    Map a domain exception into an HTTPException.
    Uses ERROR_RULES for known types; anything else is a 400 with the exception message.
    """
    for exc_type, status_code, detail in ERROR_RULES:
        if isinstance(exc, exc_type):
            return HTTPException(status_code=status_code, detail=detail or str(exc))
    return HTTPException(status_code=400, detail=str(exc))
