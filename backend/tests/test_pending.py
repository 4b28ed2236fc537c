"""Tests for optimistic votes with rollback to the last confirmed value."""
import pytest

from plantomeet.core.errors import PollFinalizedError
from plantomeet.services.polls import PendingVotes
from plantomeet.services.scheduling import AvailabilityBlock, Response


def failing_write(*args):
    raise PollFinalizedError("p1")


class RecordingWrite:
    def __init__(self):
        self.calls = []

    def __call__(self, poll_id, slot_id, participant_id, availability):
        self.calls.append((poll_id, slot_id, participant_id, availability))


class TestPendingVotes:
    def test_successful_write_is_confirmed(self):
        votes = PendingVotes("p1", "alice")
        write = RecordingWrite()

        votes.submit("s1", "yes", write)

        assert write.calls == [("p1", "s1", "alice", "yes")]
        assert votes.local["s1"] == "yes"
        assert votes.confirmed["s1"] == "yes"
        assert not votes.is_pending("s1")

    def test_failure_reverts_to_last_confirmed_value(self):
        votes = PendingVotes("p1", "alice", confirmed={"s1": "maybe"})

        with pytest.raises(PollFinalizedError):
            votes.submit("s1", "yes", failing_write)

        assert votes.local["s1"] == "maybe"

    def test_failure_without_prior_vote_clears_slot(self):
        votes = PendingVotes("p1", "alice")

        with pytest.raises(PollFinalizedError):
            votes.submit("s1", "no", failing_write)

        assert "s1" not in votes.local

    def test_local_value_is_visible_during_write(self):
        votes = PendingVotes("p1", "alice")
        seen = []

        def write(poll_id, slot_id, participant_id, availability):
            seen.append((votes.local.get(slot_id), votes.is_pending(slot_id)))

        votes.submit("s1", "maybe", write)

        assert seen == [("maybe", True)]

    def test_from_responses_keeps_only_this_participant(self):
        responses = [
            Response("p1", "s1", "alice", "yes"),
            Response("p1", "s2", "bob", "no"),
            Response("p2", "s3", "alice", "maybe"),
        ]

        votes = PendingVotes.from_responses("p1", "alice", responses)

        assert votes.confirmed == {"s1": "yes"}


class TestPendingVotesWithLifecycle:
    def test_vote_on_finalized_poll_rolls_back(self, lifecycle):
        poll_id = lifecycle.create_poll(
            "Standup", 60, "2025-06-10", "2025-06-10", [AvailabilityBlock("b", "2025-06-10", 540, 660)]
        )
        first, second = lifecycle.list_slots(poll_id)
        votes = PendingVotes(poll_id, "alice")
        votes.submit(first.id, "yes", lifecycle.respond)
        lifecycle.finalize(poll_id, second.id)

        with pytest.raises(PollFinalizedError):
            votes.submit(first.id, "no", lifecycle.respond)

        assert votes.local[first.id] == "yes"
