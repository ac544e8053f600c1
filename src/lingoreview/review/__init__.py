"""Review session management for Lingoreview."""

from .controller import ReviewSessionController
from .models import ReviewCard, ReviewRating, ReviewSessionSummary, ReviewStats, ReviewStatus
from .summary import CompletionReport

__all__ = [
    "CompletionReport",
    "ReviewCard",
    "ReviewRating",
    "ReviewSessionController",
    "ReviewSessionSummary",
    "ReviewStats",
    "ReviewStatus",
]
