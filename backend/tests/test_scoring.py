"""Tests for vote tallies, scores and best-slot ranking."""
from plantomeet.services.scheduling import Response, SlotStats, TimeSlot, aggregate, best_slot, rank_slots, stats_by_slot

POLL = "p1"
DAY = "2025-06-10"
S1 = TimeSlot("s1", DAY, 540, 600, poll_id=POLL)
S2 = TimeSlot("s2", DAY, 600, 660, poll_id=POLL)
S3 = TimeSlot("s3", "2025-06-11", 540, 600, poll_id=POLL)


def votes(slot_id, *availabilities):
    return [Response(POLL, slot_id, f"user-{i}", a) for i, a in enumerate(availabilities)]


class TestAggregate:
    def test_score_weights(self):
        """One of each: 2*1 + 1 - 1."""
        stats = aggregate(votes("s1", "yes", "maybe", "no"), "s1")

        assert stats == SlotStats(yes=1, maybe=1, no=1, total=3, score=2)

    def test_two_yes_one_maybe_one_no(self):
        assert aggregate(votes("s1", "yes", "yes", "maybe", "no"), "s1").score == 4

    def test_two_yes_one_no(self):
        stats = aggregate(votes("s1", "yes", "yes", "no"), "s1")

        assert stats.score == 3
        assert stats.total == 3

    def test_other_slots_are_ignored(self):
        responses = votes("s1", "yes") + votes("s2", "no", "no")

        assert aggregate(responses, "s1") == SlotStats(1, 0, 0, 1, 2)

    def test_unvoted_slot_is_all_zero(self):
        assert aggregate([], "s1") == SlotStats(0, 0, 0, 0, 0)

    def test_total_is_sum_of_counts(self):
        stats = aggregate(votes("s1", "yes", "no", "no", "maybe", "yes"), "s1")

        assert stats.total == stats.yes + stats.maybe + stats.no

    def test_stats_by_slot_covers_every_slot(self):
        stats = stats_by_slot([S1, S2, S3], votes("s2", "maybe"))

        assert set(stats) == {"s1", "s2", "s3"}
        assert stats["s2"].score == 1


class TestRanking:
    def test_higher_score_first(self):
        responses = votes("s1", "maybe") + votes("s2", "yes")

        assert [s.id for s in rank_slots([S1, S2], responses)] == ["s2", "s1"]

    def test_tie_goes_to_earliest_slot(self):
        """Two yes (4) against four maybe (4): the earlier slot wins regardless of input order."""
        responses = votes("s2", "yes", "yes") + votes("s1", "maybe", "maybe", "maybe", "maybe")

        assert best_slot([S2, S1], responses).id == "s1"
        assert best_slot([S1, S2], list(reversed(responses))).id == "s1"

    def test_tie_across_days_goes_to_earlier_day(self):
        responses = votes("s3", "yes") + votes("s2", "yes")

        assert best_slot([S3, S2], responses).id == "s2"

    def test_no_responses_means_no_best_slot(self):
        assert best_slot([S1, S2], []) is None

    def test_no_slots_means_no_best_slot(self):
        assert best_slot([], votes("s1", "yes")) is None

    def test_negative_scores_still_rank(self):
        responses = votes("s1", "no", "no") + votes("s2", "no")

        assert best_slot([S1, S2], responses).id == "s2"

    def test_ranking_without_votes_is_chronological(self):
        assert [s.id for s in rank_slots([S3, S2, S1], [])] == ["s1", "s2", "s3"]
