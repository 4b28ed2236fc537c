"""In-memory PollRepository for local runs and tests. A lock makes check-then-act writes atomic."""
import threading
from dataclasses import replace
from datetime import datetime

from plantomeet.services.polls.types import Participant, PollRecord, Reaction
from plantomeet.services.scheduling.slots import slot_sort_key
from plantomeet.services.scheduling.types import Response, TimeSlot


def _newest_first(polls) -> list[PollRecord]:
    return sorted(sorted(polls, key=lambda p: p.id), key=lambda p: p.created_at, reverse=True)


class InMemoryPollRepository:
    def __init__(self):
        self._lock = threading.Lock()
        self._polls: dict[str, PollRecord] = {}
        self._slots: dict[str, list[TimeSlot]] = {}
        # poll_id -> {(slot_id, participant_id): Response}
        self._responses: dict[str, dict[tuple[str, str], Response]] = {}
        self._participants: dict[str, dict[str, Participant]] = {}
        self._reactions: dict[str, dict[str, Reaction]] = {}

    def get_poll(self, poll_id: str) -> PollRecord | None:
        return self._polls.get(poll_id)

    def insert_poll_with_slots(self, poll: PollRecord, slots: list[TimeSlot]) -> None:
        with self._lock:
            if poll.id in self._polls:
                raise KeyError(f"Poll already exists: {poll.id}")
            self._polls[poll.id] = poll
            self._slots[poll.id] = sorted((replace(s, poll_id=poll.id) for s in slots), key=slot_sort_key)

    def list_polls_by_creator(self, creator_id: str) -> list[PollRecord]:
        return _newest_first(p for p in self._polls.values() if p.creator_id == creator_id)

    def list_polls_for_participant(self, participant_id: str) -> list[PollRecord]:
        voted = {
            poll_id
            for poll_id, by_key in self._responses.items()
            if any(pid == participant_id for _, pid in by_key)
        }
        return _newest_first(
            p for p in self._polls.values() if p.id in voted and p.creator_id != participant_id
        )

    def list_slots(self, poll_id: str) -> list[TimeSlot]:
        return list(self._slots.get(poll_id, []))

    def insert_slots_if_absent(self, poll_id: str, slots: list[TimeSlot]) -> list[TimeSlot]:
        with self._lock:
            if not self._slots.get(poll_id):
                self._slots[poll_id] = sorted((replace(s, poll_id=poll_id) for s in slots), key=slot_sort_key)
            return list(self._slots[poll_id])

    def list_responses(self, poll_id: str) -> list[Response]:
        return list(self._responses.get(poll_id, {}).values())

    def get_response(self, poll_id: str, slot_id: str, participant_id: str) -> Response | None:
        return self._responses.get(poll_id, {}).get((slot_id, participant_id))

    def upsert_response(self, response: Response) -> None:
        with self._lock:
            by_key = self._responses.setdefault(response.poll_id, {})
            by_key[(response.slot_id, response.participant_id)] = response

    def mark_finalized(self, poll_id: str, slot_id: str, finalized_at: datetime) -> bool:
        with self._lock:
            poll = self._polls.get(poll_id)
            if poll is None or poll.is_finalized:
                return False
            self._polls[poll_id] = poll.finalized(slot_id, finalized_at)
            return True

    def delete_poll(self, poll_id: str) -> bool:
        with self._lock:
            if self._polls.pop(poll_id, None) is None:
                return False
            for table in (self._slots, self._responses, self._participants, self._reactions):
                table.pop(poll_id, None)
            for pid, poll in self._polls.items():
                if poll.parent_poll_id == poll_id:
                    self._polls[pid] = replace(poll, parent_poll_id=None)
            return True

    def upsert_participant(self, participant: Participant) -> None:
        with self._lock:
            self._participants.setdefault(participant.poll_id, {})[participant.participant_id] = participant

    def list_participants(self, poll_id: str) -> list[Participant]:
        return list(self._participants.get(poll_id, {}).values())

    def upsert_reaction(self, reaction: Reaction) -> Reaction:
        with self._lock:
            by_participant = self._reactions.setdefault(reaction.poll_id, {})
            existing = by_participant.get(reaction.participant_id)
            if existing:
                reaction = replace(existing, emoji=reaction.emoji, comment=reaction.comment)
            by_participant[reaction.participant_id] = reaction
            return reaction

    def list_reactions(self, poll_id: str) -> list[Reaction]:
        return sorted(self._reactions.get(poll_id, {}).values(), key=lambda r: r.created_at)
