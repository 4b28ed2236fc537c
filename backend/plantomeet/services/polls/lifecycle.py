"""
Poll lifecycle: open -> finalized (terminal), over any PollRepository.

- create: validate everything, then write poll + slots in one repository call (never a poll with zero slots).
- create_slots: at most once per poll; a second attempt returns the original set.
- respond: only while open; upsert keyed by (slot_id, participant_id); slot must belong to the poll.
- finalize: only with one of the poll's slots; same slot again is a no-op, a different slot fails.
- delete: any state; cascades.
- list: created by a user, or voted on by them without creating; newest first.
All validation and referential checks run before any write.
"""
import logging
import uuid
from typing import Iterable

from plantomeet.config import settings
from plantomeet.core.constants import (
    MAX_DURATION_MINUTES,
    REACTION_COMMENT_MAX_LENGTH,
    REACTION_EMOJI_MAX_LENGTH,
    TITLE_MAX_LENGTH,
)
from plantomeet.core.errors import (
    AlreadyFinalizedError,
    PollFinalizedError,
    UnknownPollError,
    UnknownSlotError,
    ValidationError,
)
from plantomeet.services.polls.repository import PollRepository
from plantomeet.services.polls.types import Participant, PollRecord, Reaction, utcnow
from plantomeet.services.scheduling.scoring import best_slot, rank_slots, stats_by_slot
from plantomeet.services.scheduling.blocks import normalize_blocks
from plantomeet.services.scheduling.slots import generate_slots, slot_sort_key
from plantomeet.services.scheduling.time_math import days_in_range
from plantomeet.services.scheduling.types import AVAILABILITY_VALUES, AvailabilityBlock, Response, TimeSlot

logger = logging.getLogger(__name__)


class PollLifecycle:
    """Enforces poll invariants. One instance per repository (per request for SQL)."""

    def __init__(self, repository: PollRepository, max_range_days: int | None = None):
        self.repo = repository
        self.max_range_days = max_range_days if max_range_days is not None else settings.max_range_days

    # --- Validation helpers ---

    def _validate_title(self, title: str) -> str:
        title = (title or "").strip()
        if not title:
            raise ValidationError("Title is required")
        if len(title) > TITLE_MAX_LENGTH:
            raise ValidationError(f"Title is longer than {TITLE_MAX_LENGTH} characters")
        return title

    def _validate_duration(self, duration_minutes: int) -> None:
        if not isinstance(duration_minutes, int) or isinstance(duration_minutes, bool):
            raise ValidationError(f"Duration must be an integer number of minutes, got {duration_minutes!r}")
        if duration_minutes <= 0 or duration_minutes > MAX_DURATION_MINUTES:
            raise ValidationError(f"Duration must be between 1 and {MAX_DURATION_MINUTES} minutes")

    def _validate_range(self, start: str, end: str) -> list[str]:
        days = days_in_range(start, end)
        if len(days) > self.max_range_days:
            raise ValidationError(f"Date range spans {len(days)} days; the limit is {self.max_range_days}")
        return days

    def _require_poll(self, poll_id: str) -> PollRecord:
        poll = self.repo.get_poll(poll_id)
        if poll is None:
            raise UnknownPollError(poll_id)
        return poll

    def _require_slot(self, poll_id: str, slot_id: str) -> TimeSlot:
        for slot in self.repo.list_slots(poll_id):
            if slot.id == slot_id:
                return slot
        raise UnknownSlotError(poll_id, slot_id)

    # --- Create ---

    def create_poll(
        self,
        title: str,
        duration_minutes: int,
        date_range_start: str,
        date_range_end: str,
        blocks: Iterable[AvailabilityBlock],
        creator_id: str | None = None,
    ) -> str:
        """Validate, expand blocks into slots, persist poll + slots together. Returns the poll id."""
        title = self._validate_title(title)
        self._validate_duration(duration_minutes)
        days = set(self._validate_range(date_range_start, date_range_end))

        blocks = normalize_blocks(blocks)
        outside = sorted({b.date for b in blocks if b.date not in days})
        if outside:
            raise ValidationError(f"Availability outside the date range: {', '.join(outside)}")

        poll_id = str(uuid.uuid4())
        slots = generate_slots(blocks, duration_minutes, poll_id=poll_id)
        if not slots:
            raise ValidationError("Availability does not fit a single meeting of this duration")

        poll = PollRecord(
            id=poll_id,
            title=title,
            duration_minutes=duration_minutes,
            date_range_start=date_range_start,
            date_range_end=date_range_end,
            creator_id=creator_id,
        )
        self.repo.insert_poll_with_slots(poll, slots)
        logger.info("Created poll %s with %s slots (%s min)", poll_id, len(slots), duration_minutes)
        return poll_id

    def create_slots(self, poll_id: str, slots: Iterable[TimeSlot]) -> list[TimeSlot]:
        """Insert slots only if the poll has none. Returns the persisted set either way."""
        poll = self._require_poll(poll_id)
        slots = list(slots)
        if not slots:
            raise ValidationError("Slot list is empty")
        if any(s.duration_minutes != poll.duration_minutes for s in slots):
            raise ValidationError(f"Slots do not match the poll duration of {poll.duration_minutes} minutes")
        if len({(s.day, s.start_minute) for s in slots}) != len(slots):
            raise ValidationError("Slot list repeats the same time")
        return self.repo.insert_slots_if_absent(poll_id, slots)

    # --- Respond ---

    def respond(self, poll_id: str, slot_id: str, participant_id: str, availability: str) -> None:
        poll = self._require_poll(poll_id)
        if poll.is_finalized:
            logger.info("Rejected late response to finalized poll %s from %s", poll_id, participant_id)
            raise PollFinalizedError(poll_id)
        if availability not in AVAILABILITY_VALUES:
            raise ValidationError(f"Availability must be one of {', '.join(AVAILABILITY_VALUES)}")
        participant_id = (participant_id or "").strip()
        if not participant_id:
            raise ValidationError("Participant id is required")
        self._require_slot(poll_id, slot_id)
        self.repo.upsert_response(Response(poll_id, slot_id, participant_id, availability))

    # --- Finalize ---

    def _check_refinalize(self, poll: PollRecord, slot_id: str) -> None:
        if poll.finalized_slot_id != slot_id:
            raise AlreadyFinalizedError(poll.id, poll.finalized_slot_id, slot_id)
        logger.info("Poll %s already finalized with slot %s; no-op", poll.id, slot_id)

    def finalize(self, poll_id: str, slot_id: str) -> None:
        poll = self._require_poll(poll_id)
        self._require_slot(poll_id, slot_id)
        if poll.is_finalized:
            self._check_refinalize(poll, slot_id)
            return
        if not self.repo.mark_finalized(poll_id, slot_id, utcnow()):
            # Lost a race with another finalize; apply the same rules to whatever won
            self._check_refinalize(self._require_poll(poll_id), slot_id)
            return
        logger.info("Finalized poll %s with slot %s", poll_id, slot_id)

    def finalize_best(self, poll_id: str) -> TimeSlot:
        """Finalize the top-ranked slot. Fails if nobody has responded yet."""
        self._require_poll(poll_id)
        slot = best_slot(self.repo.list_slots(poll_id), self.repo.list_responses(poll_id))
        if slot is None:
            raise ValidationError("No responses yet; there is no best time to finalize")
        self.finalize(poll_id, slot.id)
        return slot

    # --- Delete ---

    def delete_poll(self, poll_id: str) -> None:
        if not self.repo.delete_poll(poll_id):
            raise UnknownPollError(poll_id)
        logger.info("Deleted poll %s", poll_id)

    # --- Read ---

    def get_poll(self, poll_id: str) -> PollRecord:
        return self._require_poll(poll_id)

    def list_slots(self, poll_id: str) -> list[TimeSlot]:
        self._require_poll(poll_id)
        return self.repo.list_slots(poll_id)

    def list_polls(
        self, creator_id: str | None = None, participant_id: str | None = None
    ) -> dict[str, list[PollRecord]]:
        """
        Home screen lists: polls this user created, and polls they voted on without creating.
        A list is empty when its id is not given.
        """
        creator_id = (creator_id or "").strip()
        participant_id = (participant_id or "").strip()
        if not creator_id and not participant_id:
            raise ValidationError("Pass creator_id and/or participant_id")
        return {
            "created": self.repo.list_polls_by_creator(creator_id) if creator_id else [],
            "responded": self.repo.list_polls_for_participant(participant_id) if participant_id else [],
        }

    def get_poll_summary(self, poll_id: str) -> dict:
        """Poll, slots with live tallies, best-first ranking and the recommended slot."""
        poll = self._require_poll(poll_id)
        slots = self.repo.list_slots(poll_id)
        responses = self.repo.list_responses(poll_id)
        stats = stats_by_slot(slots, responses)
        best = best_slot(slots, responses)
        return {
            **poll.to_dict(),
            "time_slots": [{**s.to_dict(), "stats": stats[s.id]._asdict()} for s in slots],
            "ranking": [s.id for s in rank_slots(slots, responses)],
            "best_slot_id": best.id if best else None,
            "response_count": len(responses),
            "participants": [
                {"participant_id": p.participant_id, "display_name": p.display_name}
                for p in self.repo.list_participants(poll_id)
            ],
        }

    # --- Clone onto new dates ---

    def clone_poll(self, source_poll_id: str, date_range_start: str, date_range_end: str, creator_id: str | None = None) -> str:
        """
        New open poll with the source's title and duration; every distinct time window of the
        source is offered on every day of the new range. Responses are not copied.
        """
        source = self._require_poll(source_poll_id)
        days = self._validate_range(date_range_start, date_range_end)
        windows = sorted({(s.start_minute, s.end_minute) for s in self.repo.list_slots(source_poll_id)})
        if not windows:
            raise ValidationError(f"Poll {source_poll_id} has no time slots to copy")

        poll_id = str(uuid.uuid4())
        slots = sorted(
            (TimeSlot(str(uuid.uuid4()), day, start, end, poll_id=poll_id) for day in days for start, end in windows),
            key=slot_sort_key,
        )
        poll = PollRecord(
            id=poll_id,
            title=source.title,
            duration_minutes=source.duration_minutes,
            date_range_start=date_range_start,
            date_range_end=date_range_end,
            creator_id=creator_id,
            parent_poll_id=source_poll_id,
        )
        self.repo.insert_poll_with_slots(poll, slots)
        logger.info("Cloned poll %s into %s with %s slots", source_poll_id, poll_id, len(slots))
        return poll_id

    # --- Participants and reactions ---

    def join_poll(self, poll_id: str, participant_id: str, display_name: str | None = None) -> Participant:
        self._require_poll(poll_id)
        participant_id = (participant_id or "").strip()
        if not participant_id:
            raise ValidationError("Participant id is required")
        participant = Participant(poll_id, participant_id, (display_name or "").strip() or None)
        self.repo.upsert_participant(participant)
        return participant

    def react(self, poll_id: str, participant_id: str, emoji: str, comment: str | None = None) -> Reaction:
        """One reaction per participant on a finalized poll; reacting again replaces it."""
        poll = self._require_poll(poll_id)
        if not poll.is_finalized:
            raise ValidationError("Reactions open once the poll is finalized")
        emoji = (emoji or "").strip()
        if not emoji or len(emoji) > REACTION_EMOJI_MAX_LENGTH:
            raise ValidationError("Reaction emoji is required")
        comment = (comment or "").strip() or None
        if comment and len(comment) > REACTION_COMMENT_MAX_LENGTH:
            raise ValidationError(f"Comment is longer than {REACTION_COMMENT_MAX_LENGTH} characters")
        participant_id = (participant_id or "").strip()
        if not participant_id:
            raise ValidationError("Participant id is required")
        return self.repo.upsert_reaction(
            Reaction(id=str(uuid.uuid4()), poll_id=poll_id, participant_id=participant_id, emoji=emoji, comment=comment)
        )

    def list_reactions(self, poll_id: str) -> list[Reaction]:
        self._require_poll(poll_id)
        return self.repo.list_reactions(poll_id)
