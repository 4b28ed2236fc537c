"""Tests for the .ics export of a finalized slot."""
from datetime import datetime, timezone

from plantomeet.services.calendar_export import build_ics
from plantomeet.services.scheduling import TimeSlot

SLOT = TimeSlot("s1", "2025-06-10", 540, 600)
NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def test_event_fields():
    ics = build_ics("Team sync", SLOT, now=NOW)

    lines = ics.split("\r\n")
    assert lines[0] == "BEGIN:VCALENDAR"
    assert "DTSTART:20250610T090000" in lines
    assert "DTEND:20250610T100000" in lines
    assert "DTSTAMP:20250601T120000Z" in lines
    assert "SUMMARY:Team sync" in lines
    assert ics.endswith("END:VCALENDAR\r\n")


def test_text_is_escaped():
    ics = build_ics("Plan; review, retro", SLOT, description="line one\nline two", now=NOW)

    assert "SUMMARY:Plan\\; review\\, retro" in ics
    assert "DESCRIPTION:line one\\nline two" in ics


def test_description_is_optional():
    assert "DESCRIPTION" not in build_ics("Team sync", SLOT, now=NOW)


def test_end_of_day_slot_ends_at_midnight():
    ics = build_ics("Late", TimeSlot("s2", "2025-06-10", 1380, 1440), now=NOW)

    assert "DTEND:20250611T000000" in ics
