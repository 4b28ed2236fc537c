"""Tests for the database-level guards on the ORM models (SQLite, tables from metadata)."""
import pytest
from sqlalchemy.exc import IntegrityError

from plantomeet.models import Poll, PollResponse, PollTimeSlot

DAY = "2025-06-10"


def add_poll(db_session, **overrides):
    fields = {
        "id": "p1",
        "title": "Team sync",
        "duration_minutes": 60,
        "date_range_start": DAY,
        "date_range_end": DAY,
    }
    fields.update(overrides)
    db_session.add(Poll(**fields))
    db_session.commit()


class TestPollConstraints:
    def test_open_poll_is_accepted(self, db_session):
        add_poll(db_session)

        assert db_session.query(Poll).one().status == "open"

    def test_non_positive_duration_is_rejected(self, db_session):
        with pytest.raises(IntegrityError):
            add_poll(db_session, duration_minutes=0)
        db_session.rollback()

    def test_finalized_without_slot_is_rejected(self, db_session):
        with pytest.raises(IntegrityError):
            add_poll(db_session, status="finalized")
        db_session.rollback()

    def test_slot_on_open_poll_is_rejected(self, db_session):
        with pytest.raises(IntegrityError):
            add_poll(db_session, finalized_slot_id="s1")
        db_session.rollback()


class TestResponseConstraints:
    def test_unknown_availability_is_rejected(self, db_session):
        add_poll(db_session)
        db_session.add(PollTimeSlot(id="s1", poll_id="p1", day=DAY, start_time="09:00", end_time="10:00"))
        db_session.commit()

        db_session.add(PollResponse(poll_id="p1", slot_id="s1", participant_id="a", availability="perhaps"))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

        assert db_session.query(PollResponse).count() == 0
