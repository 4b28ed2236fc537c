"""
PollRepository on SQLAlchemy (Postgres in production, SQLite for local runs and tests).

Slots are stored as day + HH:MM labels; responses are unique on (poll_id, slot_id, participant_id).
Every write method commits (or rolls back) its own transaction.
"""
import logging
from datetime import datetime

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from plantomeet.core.constants import POLL_STATUS_FINALIZED, POLL_STATUS_OPEN
from plantomeet.models import Poll, PollParticipant, PollReaction, PollResponse, PollTimeSlot
from plantomeet.services.polls.types import Participant, PollRecord, Reaction
from plantomeet.services.scheduling.types import Response, TimeSlot

logger = logging.getLogger(__name__)


def _to_poll_record(row: Poll) -> PollRecord:
    return PollRecord(
        id=row.id,
        title=row.title,
        duration_minutes=row.duration_minutes,
        date_range_start=row.date_range_start,
        date_range_end=row.date_range_end,
        status=row.status,
        finalized_slot_id=row.finalized_slot_id,
        finalized_at=row.finalized_at,
        creator_id=row.creator_id,
        created_at=row.created_at,
        parent_poll_id=row.parent_poll_id,
    )


def _to_time_slot(row: PollTimeSlot) -> TimeSlot:
    return TimeSlot.from_labels(row.id, row.day, row.start_time, row.end_time, poll_id=row.poll_id)


def _to_response(row: PollResponse) -> Response:
    return Response(
        poll_id=row.poll_id,
        slot_id=row.slot_id,
        participant_id=row.participant_id,
        availability=row.availability,
    )


def _to_reaction(row: PollReaction) -> Reaction:
    return Reaction(
        id=row.id,
        poll_id=row.poll_id,
        participant_id=row.participant_id,
        emoji=row.emoji,
        comment=row.comment,
        created_at=row.created_at,
    )


def _slot_row(poll_id: str, slot: TimeSlot) -> PollTimeSlot:
    return PollTimeSlot(
        id=slot.id,
        poll_id=poll_id,
        day=slot.day,
        start_time=slot.start_time,
        end_time=slot.end_time,
    )


class SqlAlchemyPollRepository:
    """PollRepository backed by a SQLAlchemy session (one per request)."""

    def __init__(self, db: Session):
        self.db = db

    # --- Polls and slots ---

    def get_poll(self, poll_id: str) -> PollRecord | None:
        row = self.db.query(Poll).filter(Poll.id == poll_id).first()
        return _to_poll_record(row) if row else None

    def insert_poll_with_slots(self, poll: PollRecord, slots: list[TimeSlot]) -> None:
        self.db.add(
            Poll(
                id=poll.id,
                title=poll.title,
                duration_minutes=poll.duration_minutes,
                status=poll.status,
                finalized_slot_id=poll.finalized_slot_id,
                finalized_at=poll.finalized_at,
                date_range_start=poll.date_range_start,
                date_range_end=poll.date_range_end,
                creator_id=poll.creator_id,
                created_at=poll.created_at,
                parent_poll_id=poll.parent_poll_id,
            )
        )
        # Flush the poll first so slot FKs resolve on backends that enforce them immediately
        try:
            self.db.flush()
            self.db.add_all([_slot_row(poll.id, s) for s in slots])
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def list_polls_by_creator(self, creator_id: str) -> list[PollRecord]:
        rows = (
            self.db.query(Poll)
            .filter(Poll.creator_id == creator_id)
            .order_by(Poll.created_at.desc(), Poll.id)
            .all()
        )
        return [_to_poll_record(r) for r in rows]

    def list_polls_for_participant(self, participant_id: str) -> list[PollRecord]:
        voted = select(PollResponse.poll_id).where(PollResponse.participant_id == participant_id).distinct()
        rows = (
            self.db.query(Poll)
            .filter(
                Poll.id.in_(voted),
                or_(Poll.creator_id.is_(None), Poll.creator_id != participant_id),
            )
            .order_by(Poll.created_at.desc(), Poll.id)
            .all()
        )
        return [_to_poll_record(r) for r in rows]

    def list_slots(self, poll_id: str) -> list[TimeSlot]:
        rows = (
            self.db.query(PollTimeSlot)
            .filter(PollTimeSlot.poll_id == poll_id)
            .order_by(PollTimeSlot.day.asc(), PollTimeSlot.start_time.asc())
            .all()
        )
        return [_to_time_slot(r) for r in rows]

    def insert_slots_if_absent(self, poll_id: str, slots: list[TimeSlot]) -> list[TimeSlot]:
        existing = (
            self.db.query(func.count(PollTimeSlot.id)).filter(PollTimeSlot.poll_id == poll_id).scalar()
        )
        if existing:
            logger.info("Poll %s already has %s slots; skipping insert", poll_id, existing)
            return self.list_slots(poll_id)
        try:
            self.db.add_all([_slot_row(poll_id, s) for s in slots])
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return self.list_slots(poll_id)

    def mark_finalized(self, poll_id: str, slot_id: str, finalized_at: datetime) -> bool:
        updated = (
            self.db.query(Poll)
            .filter(Poll.id == poll_id, Poll.status == POLL_STATUS_OPEN)
            .update(
                {
                    Poll.status: POLL_STATUS_FINALIZED,
                    Poll.finalized_slot_id: slot_id,
                    Poll.finalized_at: finalized_at,
                },
                synchronize_session=False,
            )
        )
        self.db.commit()
        self.db.expire_all()
        return updated == 1

    def delete_poll(self, poll_id: str) -> bool:
        row = self.db.query(Poll).filter(Poll.id == poll_id).first()
        if not row:
            return False
        # Clones outlive their source; SQLite does not apply ON DELETE SET NULL without the FK pragma
        self.db.query(Poll).filter(Poll.parent_poll_id == poll_id).update(
            {Poll.parent_poll_id: None}, synchronize_session=False
        )
        self.db.delete(row)
        self.db.commit()
        return True

    # --- Responses ---

    def list_responses(self, poll_id: str) -> list[Response]:
        rows = self.db.query(PollResponse).filter(PollResponse.poll_id == poll_id).order_by(PollResponse.id).all()
        return [_to_response(r) for r in rows]

    def _response_row(self, poll_id: str, slot_id: str, participant_id: str) -> PollResponse | None:
        return (
            self.db.query(PollResponse)
            .filter(
                PollResponse.poll_id == poll_id,
                PollResponse.slot_id == slot_id,
                PollResponse.participant_id == participant_id,
            )
            .first()
        )

    def get_response(self, poll_id: str, slot_id: str, participant_id: str) -> Response | None:
        row = self._response_row(poll_id, slot_id, participant_id)
        return _to_response(row) if row else None

    def upsert_response(self, response: Response) -> None:
        row = self._response_row(response.poll_id, response.slot_id, response.participant_id)
        if row:
            row.availability = response.availability
        else:
            self.db.add(
                PollResponse(
                    poll_id=response.poll_id,
                    slot_id=response.slot_id,
                    participant_id=response.participant_id,
                    availability=response.availability,
                )
            )
        try:
            self.db.commit()
        except IntegrityError:
            # Same participant voted concurrently and won the insert; last write wins
            self.db.rollback()
            row = self._response_row(response.poll_id, response.slot_id, response.participant_id)
            if row is None:
                raise
            row.availability = response.availability
            self.db.commit()

    # --- Participants and reactions ---

    def upsert_participant(self, participant: Participant) -> None:
        row = (
            self.db.query(PollParticipant)
            .filter(
                PollParticipant.poll_id == participant.poll_id,
                PollParticipant.participant_id == participant.participant_id,
            )
            .first()
        )
        if row:
            row.display_name = participant.display_name
        else:
            self.db.add(
                PollParticipant(
                    poll_id=participant.poll_id,
                    participant_id=participant.participant_id,
                    display_name=participant.display_name,
                )
            )
        self.db.commit()

    def list_participants(self, poll_id: str) -> list[Participant]:
        rows = (
            self.db.query(PollParticipant)
            .filter(PollParticipant.poll_id == poll_id)
            .order_by(PollParticipant.created_at.asc())
            .all()
        )
        return [Participant(r.poll_id, r.participant_id, r.display_name) for r in rows]

    def upsert_reaction(self, reaction: Reaction) -> Reaction:
        row = (
            self.db.query(PollReaction)
            .filter(
                PollReaction.poll_id == reaction.poll_id,
                PollReaction.participant_id == reaction.participant_id,
            )
            .first()
        )
        if row:
            row.emoji = reaction.emoji
            row.comment = reaction.comment
        else:
            row = PollReaction(
                id=reaction.id,
                poll_id=reaction.poll_id,
                participant_id=reaction.participant_id,
                emoji=reaction.emoji,
                comment=reaction.comment,
                created_at=reaction.created_at,
            )
            self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return _to_reaction(row)

    def list_reactions(self, poll_id: str) -> list[Reaction]:
        rows = (
            self.db.query(PollReaction)
            .filter(PollReaction.poll_id == poll_id)
            .order_by(PollReaction.created_at.asc())
            .all()
        )
        return [_to_reaction(r) for r in rows]
