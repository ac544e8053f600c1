"""Progress and completion statistics shaped for display."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .models import ReviewRating, ReviewSessionSummary, ReviewStats

# Minutes per card used for the "estimated time" hint before a session.
MINUTES_PER_CARD = 0.5


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def progress_percent(cursor: int, total: int) -> int:
    """Percentage of the card queue passed by the cursor."""
    if total <= 0:
        return 0
    return _round_half_up(cursor / total * 100)


def accuracy_percent(correct: int, reviewed: int) -> int:
    """Share of reviewed cards rated as remembered, 0 when none reviewed."""
    if reviewed <= 0:
        return 0
    return _round_half_up(correct / reviewed * 100)


def format_average(value: float) -> str:
    """Format an average rating to one decimal place."""
    return f"{value:.1f}"


def estimated_minutes(card_count: int) -> int:
    """Rough time needed to review ``card_count`` cards."""
    return math.ceil(card_count * MINUTES_PER_CARD)


@dataclass(frozen=True)
class BreakdownRow:
    """One bar of the rating breakdown chart."""

    rating: ReviewRating
    count: int
    fraction: float

    @property
    def label(self) -> str:
        return self.rating.label


def rating_breakdown(summary: ReviewSessionSummary) -> list[BreakdownRow]:
    """Build breakdown rows, highest rating first.

    Each row's fraction is ``count / total_cards``. Keys that are not a
    valid rating value are ignored.
    """
    counts: dict[ReviewRating, int] = {rating: 0 for rating in ReviewRating}
    for key, count in summary.ratings_breakdown.items():
        try:
            rating = ReviewRating(int(key))
        except ValueError:
            continue
        counts[rating] += count

    total = summary.total_cards
    rows = []
    for rating in sorted(ReviewRating, reverse=True):
        count = counts[rating]
        fraction = count / total if total > 0 else 0.0
        rows.append(BreakdownRow(rating=rating, count=count, fraction=fraction))
    return rows


@dataclass(frozen=True)
class CompletionReport:
    """Everything the completion screen shows."""

    cards_reviewed: int
    correct: int
    wrong: int
    remaining: int
    accuracy: int
    average_rating: str | None = None
    total_cards: int | None = None
    breakdown: list[BreakdownRow] = field(default_factory=list)

    @property
    def has_summary(self) -> bool:
        return self.average_rating is not None

    @classmethod
    def build(
        cls, stats: ReviewStats, summary: ReviewSessionSummary | None = None
    ) -> CompletionReport:
        """Combine the local tally with the server summary, if any."""
        accuracy = accuracy_percent(stats.correct, stats.cards_reviewed)
        if summary is None:
            return cls(
                cards_reviewed=stats.cards_reviewed,
                correct=stats.correct,
                wrong=stats.wrong,
                remaining=stats.remaining,
                accuracy=accuracy,
            )
        return cls(
            cards_reviewed=stats.cards_reviewed,
            correct=stats.correct,
            wrong=stats.wrong,
            remaining=stats.remaining,
            accuracy=accuracy,
            average_rating=format_average(summary.average_rating),
            total_cards=summary.total_cards,
            breakdown=rating_breakdown(summary),
        )
