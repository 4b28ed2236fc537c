"""Value types for the scheduling engine. Same shape regardless of which repository persisted them."""
from dataclasses import dataclass
from datetime import datetime
from typing import Literal, NamedTuple

from plantomeet.core.constants import AVAILABILITY_MAYBE, AVAILABILITY_NO, AVAILABILITY_YES
from plantomeet.core.errors import ValidationError
from plantomeet.services.scheduling.time_math import parse_time_label, time_label

Availability = Literal["yes", "maybe", "no"]
AVAILABILITY_VALUES: tuple[str, ...] = (AVAILABILITY_YES, AVAILABILITY_MAYBE, AVAILABILITY_NO)

DayKey = str  # YYYY-MM-DD


class Cell(NamedTuple):
    """One selected grid cell. Its width is the grid granularity (the meeting duration)."""

    day: DayKey
    minute: int


class BusyInterval(NamedTuple):
    """External conflict source (e.g. a calendar event). Read-only; supplied per check."""

    start: datetime
    end: datetime


@dataclass(frozen=True)
class AvailabilityBlock:
    """Contiguous free time on one day, [start_minute, end_minute)."""

    id: str
    date: DayKey
    start_minute: int
    end_minute: int

    def __post_init__(self):
        if self.start_minute >= self.end_minute:
            raise ValidationError(
                f"Block on {self.date} must start before it ends ({self.start_minute} >= {self.end_minute})"
            )

    @property
    def duration_minutes(self) -> int:
        return self.end_minute - self.start_minute

    def span(self) -> tuple[DayKey, int, int]:
        """(date, start, end) without the id, for comparing blocks across merges."""
        return (self.date, self.start_minute, self.end_minute)


@dataclass(frozen=True)
class TimeSlot:
    """A votable option. end_minute - start_minute == poll duration, always."""

    id: str
    day: DayKey
    start_minute: int
    end_minute: int
    poll_id: str | None = None

    @property
    def start_time(self) -> str:
        return time_label(self.start_minute)

    @property
    def end_time(self) -> str:
        return time_label(self.end_minute)

    @property
    def duration_minutes(self) -> int:
        return self.end_minute - self.start_minute

    @classmethod
    def from_labels(cls, id: str, day: DayKey, start_time: str, end_time: str, poll_id: str | None = None) -> "TimeSlot":
        """Build from the persisted shape (day + HH:MM labels)."""
        return cls(
            id=id,
            day=day,
            start_minute=parse_time_label(start_time),
            end_minute=parse_time_label(end_time),
            poll_id=poll_id,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "poll_id": self.poll_id,
            "day": self.day,
            "start_time": self.start_time,
            "end_time": self.end_time,
        }


@dataclass(frozen=True)
class Response:
    poll_id: str
    slot_id: str
    participant_id: str
    availability: Availability


class SlotStats(NamedTuple):
    yes: int
    maybe: int
    no: int
    total: int
    score: int
