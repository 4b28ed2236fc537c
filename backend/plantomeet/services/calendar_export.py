"""
Calendar export: .ics (iCalendar) for a finalized poll's slot.

Times are written as floating local times (no Z, no TZID) since slots are wall-clock on their day.
"""
import uuid
from datetime import datetime, timezone

from plantomeet.core.constants import ICS_PRODID, ICS_UID_DOMAIN
from plantomeet.services.scheduling.time_math import slot_instants
from plantomeet.services.scheduling.types import TimeSlot


def _escape(text: str) -> str:
    return (
        text.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\r\n", "\\n")
        .replace("\n", "\\n")
    )


def _local_stamp(dt: datetime) -> str:
    return dt.strftime("%Y%m%dT%H%M%S")


def build_ics(title: str, slot: TimeSlot, description: str | None = None, now: datetime | None = None) -> str:
    """Single-event VCALENDAR with CRLF line endings."""
    start, end = slot_instants(slot.day, slot.start_minute, slot.end_minute)
    stamp = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{ICS_PRODID}",
        "BEGIN:VEVENT",
        f"UID:{uuid.uuid4()}@{ICS_UID_DOMAIN}",
        f"DTSTAMP:{stamp.strftime('%Y%m%dT%H%M%SZ')}",
        f"DTSTART:{_local_stamp(start)}",
        f"DTEND:{_local_stamp(end)}",
        f"SUMMARY:{_escape(title)}",
    ]
    if description:
        lines.append(f"DESCRIPTION:{_escape(description)}")
    lines += ["END:VEVENT", "END:VCALENDAR"]
    return "\r\n".join(lines) + "\r\n"
