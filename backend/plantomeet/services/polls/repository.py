"""Protocol for poll persistence. SQL and in-memory adapters honor the same contract; only storage differs."""
from datetime import datetime
from typing import Protocol

from plantomeet.services.polls.types import Participant, PollRecord, Reaction
from plantomeet.services.scheduling.types import Response, TimeSlot


class PollRepository(Protocol):
    """
    Storage collaborator for PollLifecycle.

    - insert_poll_with_slots is all-or-nothing: never a poll without its slots.
    - insert_slots_if_absent is the single-writer guard: a poll that already has slots keeps them.
    - upsert_response / upsert_participant / upsert_reaction are keyed upserts (last write wins).
    - mark_finalized only transitions an open poll; returns False if the poll was not open.
    - delete_poll cascades to slots, responses, participants and reactions.
    """

    def get_poll(self, poll_id: str) -> PollRecord | None:
        ...

    def insert_poll_with_slots(self, poll: PollRecord, slots: list[TimeSlot]) -> None:
        ...

    def list_polls_by_creator(self, creator_id: str) -> list[PollRecord]:
        """Newest first."""
        ...

    def list_polls_for_participant(self, participant_id: str) -> list[PollRecord]:
        """Polls the participant has voted on and did not create. Newest first."""
        ...

    def list_slots(self, poll_id: str) -> list[TimeSlot]:
        """Ordered by (day, start)."""
        ...

    def insert_slots_if_absent(self, poll_id: str, slots: list[TimeSlot]) -> list[TimeSlot]:
        """Insert only if the poll has no slots yet. Returns the slots persisted for the poll afterwards."""
        ...

    def list_responses(self, poll_id: str) -> list[Response]:
        ...

    def get_response(self, poll_id: str, slot_id: str, participant_id: str) -> Response | None:
        ...

    def upsert_response(self, response: Response) -> None:
        ...

    def mark_finalized(self, poll_id: str, slot_id: str, finalized_at: datetime) -> bool:
        ...

    def delete_poll(self, poll_id: str) -> bool:
        """False if there was no such poll."""
        ...

    def upsert_participant(self, participant: Participant) -> None:
        ...

    def list_participants(self, poll_id: str) -> list[Participant]:
        ...

    def upsert_reaction(self, reaction: Reaction) -> Reaction:
        """Keyed on (poll_id, participant_id); keeps the original id and created_at on update."""
        ...

    def list_reactions(self, poll_id: str) -> list[Reaction]:
        ...
