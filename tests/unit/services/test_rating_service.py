"""
Unit Tests for the rating aggregate
"""
from types import SimpleNamespace

from syllabus_hub.services.rating_service import apply_summary, summarize_ratings


class TestSummarizeRatings:

    def test_no_ratings(self):
        summary = summarize_ratings([])

        assert summary.average == 0.0
        assert summary.total == 0
        assert summary.distribution == {"1": 0, "2": 0, "3": 0, "4": 0, "5": 0}

    def test_average_rounded_to_one_decimal(self):
        summary = summarize_ratings([5, 4, 4])

        assert summary.average == 4.3
        assert summary.total == 3

    def test_distribution_counts_each_star(self):
        summary = summarize_ratings([5, 5, 1, 3])

        assert summary.distribution == {"1": 1, "2": 0, "3": 1, "4": 0, "5": 2}
        assert sum(summary.distribution.values()) == summary.total

    def test_fresh_distribution_per_summary(self):
        first = summarize_ratings([5])
        second = summarize_ratings([])

        assert first.distribution["5"] == 1
        assert second.distribution["5"] == 0


class TestApplySummary:

    def test_copies_onto_resource(self):
        resource = SimpleNamespace(average_rating=None, total_ratings=None, rating_distribution=None)

        apply_summary(resource, summarize_ratings([2, 4]))

        assert resource.average_rating == 3.0
        assert resource.total_ratings == 2
        assert resource.rating_distribution["2"] == 1
