"""
Optimistic votes for one participant in one poll.

The local view changes before the write is acknowledged. If the write fails, the slot goes back to
the last server-confirmed value for that (slot, participant), not to blank, and the error propagates.
"""
import logging
from typing import Callable, Iterable

from plantomeet.services.scheduling.types import Response

logger = logging.getLogger(__name__)


class PendingVotes:
    def __init__(self, poll_id: str, participant_id: str, confirmed: dict[str, str] | None = None):
        self.poll_id = poll_id
        self.participant_id = participant_id
        self.confirmed: dict[str, str] = dict(confirmed or {})
        self.local: dict[str, str] = dict(self.confirmed)

    @classmethod
    def from_responses(cls, poll_id: str, participant_id: str, responses: Iterable[Response]) -> "PendingVotes":
        """Seed confirmed state from the server's responses for this participant."""
        confirmed = {
            r.slot_id: r.availability
            for r in responses
            if r.poll_id == poll_id and r.participant_id == participant_id
        }
        return cls(poll_id, participant_id, confirmed)

    def submit(self, slot_id: str, availability: str, write: Callable[[str, str, str, str], None]) -> None:
        """
        Apply locally, then write(poll_id, slot_id, participant_id, availability).
        PollLifecycle.respond fits write as-is.
        """
        self.local[slot_id] = availability
        try:
            write(self.poll_id, slot_id, self.participant_id, availability)
        except Exception:
            self._rollback(slot_id)
            raise
        self.confirmed[slot_id] = availability

    def _rollback(self, slot_id: str) -> None:
        previous = self.confirmed.get(slot_id)
        if previous is None:
            self.local.pop(slot_id, None)
        else:
            self.local[slot_id] = previous
        logger.info("Vote on slot %s rolled back to %s", slot_id, previous)

    def is_pending(self, slot_id: str) -> bool:
        return self.local.get(slot_id) != self.confirmed.get(slot_id)
