"""Tests for review/models.py - parsing and tally rules."""

import pytest

from lingoreview.review.models import (
    ReviewCard,
    ReviewRating,
    ReviewSessionSummary,
    ReviewStats,
)


class TestReviewRating:
    def test_values(self):
        assert [int(r) for r in ReviewRating] == [0, 1, 2, 3, 4, 5]

    def test_correct_threshold(self):
        """GOOD and above count as remembered."""
        assert not ReviewRating.DIFFICULT.is_correct
        assert ReviewRating.GOOD.is_correct
        assert ReviewRating.PERFECT.is_correct

    def test_label(self):
        assert ReviewRating.FAILED.label == "Failed"


class TestReviewCard:
    def test_optional_fields_default_to_none(self):
        card = ReviewCard.from_dict({"id": 7, "word": "Hund", "translation": "dog"})
        assert card.id == "7"
        assert card.phonetic is None
        assert card.example is None
        assert card.notes is None
        assert card.pos == ""
        assert card.source_lang == ""

    def test_empty_strings_become_none(self):
        card = ReviewCard.from_dict(
            {"id": "a", "word": "w", "translation": "t", "notes": "", "example": None}
        )
        assert card.notes is None
        assert card.example is None

    def test_missing_required(self):
        with pytest.raises(KeyError):
            ReviewCard.from_dict({"id": "a", "word": "w"})


class TestReviewStats:
    def test_record(self):
        stats = ReviewStats(remaining=2)
        stats.record(ReviewRating.EASY)
        stats.record(ReviewRating.BAD)
        assert stats == ReviewStats(cards_reviewed=2, correct=1, wrong=1, remaining=0)


class TestReviewSessionSummary:
    def test_from_dict_coerces_types(self):
        summary = ReviewSessionSummary.from_dict(
            {
                "session_id": 12,
                "user_id": "u",
                "total_cards": "3",
                "average_rating": 4,
                "ratings_breakdown": {3: 1, "5": "2"},
                "reviewed_at": "2024-05-01T10:00:00Z",
            }
        )
        assert summary.session_id == "12"
        assert summary.total_cards == 3
        assert summary.average_rating == 4.0
        assert summary.ratings_breakdown == {"3": 1, "5": 2}

    def test_missing_breakdown(self):
        summary = ReviewSessionSummary.from_dict(
            {"session_id": "s", "total_cards": 0, "average_rating": 0}
        )
        assert summary.ratings_breakdown == {}
        assert summary.user_id == ""
