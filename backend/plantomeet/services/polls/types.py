"""Records passed between PollLifecycle and any PollRepository. Same shape for SQL and in-memory."""
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

from plantomeet.core.constants import POLL_STATUS_FINALIZED, POLL_STATUS_OPEN


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class PollRecord:
    id: str
    title: str
    duration_minutes: int
    date_range_start: str
    date_range_end: str
    status: str = POLL_STATUS_OPEN
    finalized_slot_id: str | None = None
    finalized_at: datetime | None = None
    creator_id: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    parent_poll_id: str | None = None

    @property
    def is_finalized(self) -> bool:
        return self.status == POLL_STATUS_FINALIZED

    def finalized(self, slot_id: str, at: datetime) -> "PollRecord":
        return replace(self, status=POLL_STATUS_FINALIZED, finalized_slot_id=slot_id, finalized_at=at)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "duration_minutes": self.duration_minutes,
            "date_range_start": self.date_range_start,
            "date_range_end": self.date_range_end,
            "status": self.status,
            "finalized_slot_id": self.finalized_slot_id,
            "finalized_at": self.finalized_at.isoformat() if self.finalized_at else None,
            "creator_id": self.creator_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "parent_poll_id": self.parent_poll_id,
        }


@dataclass(frozen=True)
class Participant:
    poll_id: str
    participant_id: str
    display_name: str | None = None


@dataclass(frozen=True)
class Reaction:
    id: str
    poll_id: str
    participant_id: str
    emoji: str
    comment: str | None = None
    created_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "poll_id": self.poll_id,
            "participant_id": self.participant_id,
            "emoji": self.emoji,
            "comment": self.comment,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
