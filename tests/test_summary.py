"""Tests for review/summary.py - progress, accuracy and breakdown shaping."""

import pytest

from lingoreview.review.models import ReviewRating, ReviewSessionSummary, ReviewStats
from lingoreview.review.summary import (
    CompletionReport,
    accuracy_percent,
    estimated_minutes,
    format_average,
    progress_percent,
    rating_breakdown,
)


def make_summary(**overrides) -> ReviewSessionSummary:
    values = {
        "session_id": "s-1",
        "user_id": "u-1",
        "total_cards": 4,
        "average_rating": 3.25,
        "ratings_breakdown": {"3": 2, "5": 1, "0": 1},
        "reviewed_at": "2024-05-01T10:00:00Z",
    }
    values.update(overrides)
    return ReviewSessionSummary(**values)


class TestProgress:
    """Tests for progress_percent."""

    @pytest.mark.parametrize(
        "cursor, total, expected",
        [
            (0, 3, 0),
            (1, 3, 33),
            (2, 3, 67),
            (3, 3, 100),
            (1, 8, 13),
            (0, 0, 0),
        ],
    )
    def test_progress(self, cursor, total, expected):
        """Progress rounds half up and is 0 for an empty queue."""
        assert progress_percent(cursor, total) == expected


class TestAccuracy:
    """Tests for accuracy_percent."""

    def test_zero_reviewed(self):
        """No reviews means 0% rather than a division error."""
        assert accuracy_percent(0, 0) == 0

    def test_all_wrong(self):
        """Reviews with nothing correct are 0%."""
        assert accuracy_percent(0, 4) == 0

    def test_rounding(self):
        """Two of three correct rounds to 67%."""
        assert accuracy_percent(2, 3) == 67

    def test_perfect(self):
        assert accuracy_percent(5, 5) == 100


class TestFormatting:
    """Tests for small display helpers."""

    def test_average_one_decimal(self):
        assert format_average(2.6667) == "2.7"
        assert format_average(3) == "3.0"

    def test_estimated_minutes_rounds_up(self):
        assert estimated_minutes(0) == 0
        assert estimated_minutes(1) == 1
        assert estimated_minutes(3) == 2
        assert estimated_minutes(10) == 5


class TestBreakdown:
    """Tests for rating_breakdown."""

    def test_rows_cover_every_rating(self):
        """One row per rating, highest first, sized by total cards."""
        rows = rating_breakdown(make_summary())

        assert [row.rating for row in rows] == sorted(ReviewRating, reverse=True)
        by_rating = {row.rating: row for row in rows}
        assert by_rating[ReviewRating.GOOD].count == 2
        assert by_rating[ReviewRating.GOOD].fraction == 0.5
        assert by_rating[ReviewRating.PERFECT].fraction == 0.25
        assert by_rating[ReviewRating.EASY].count == 0
        assert by_rating[ReviewRating.EASY].fraction == 0.0

    def test_zero_total(self):
        """An empty session has zero-width bars."""
        rows = rating_breakdown(make_summary(total_cards=0, ratings_breakdown={}))

        assert all(row.fraction == 0.0 for row in rows)

    def test_unknown_keys_ignored(self):
        """Keys that are not ratings are skipped."""
        rows = rating_breakdown(
            make_summary(ratings_breakdown={"3": 1, "9": 4, "abc": 2})
        )

        assert sum(row.count for row in rows) == 1

    def test_row_label(self):
        rows = rating_breakdown(make_summary())
        assert rows[0].label == "Perfect"


class TestCompletionReport:
    """Tests for CompletionReport.build."""

    def test_without_summary(self):
        """Local tallies are enough to build the report."""
        stats = ReviewStats(cards_reviewed=3, correct=2, wrong=1, remaining=0)

        report = CompletionReport.build(stats)

        assert report.cards_reviewed == 3
        assert report.accuracy == 67
        assert report.has_summary is False
        assert report.breakdown == []

    def test_with_summary(self):
        """Summary values are formatted for display."""
        stats = ReviewStats(cards_reviewed=4, correct=3, wrong=1, remaining=0)

        report = CompletionReport.build(stats, make_summary())

        assert report.has_summary is True
        assert report.average_rating == "3.2"
        assert report.total_cards == 4
        assert len(report.breakdown) == len(ReviewRating)

    def test_zero_reviewed(self):
        """A session completed only by resets has 0% accuracy."""
        report = CompletionReport.build(ReviewStats(remaining=2))
        assert report.accuracy == 0
