"""Data types shared by the review controller, gateway and TUI."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum, auto
from typing import Any


class ReviewStatus(Enum):
    """States of a review session as seen by the user."""

    LOADING = auto()
    READY = auto()
    IN_PROGRESS = auto()
    FLIPPED = auto()
    COMPLETE = auto()
    ERROR = auto()
    EMPTY = auto()


class ReviewRating(IntEnum):
    """Recall quality submitted for a card (0-5)."""

    FAILED = 0
    BAD = 1
    DIFFICULT = 2
    GOOD = 3
    EASY = 4
    PERFECT = 5

    @property
    def is_correct(self) -> bool:
        """Whether this rating counts as remembered in the local tally."""
        return self >= ReviewRating.GOOD

    @property
    def label(self) -> str:
        """Human-readable name, e.g. ``Difficult``."""
        return self.name.capitalize()


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text else None


@dataclass(frozen=True)
class ReviewCard:
    """A flashcard due for review."""

    id: str
    word: str
    translation: str
    pos: str = ""
    phonetic: str | None = None
    example: str | None = None
    notes: str | None = None
    source_lang: str = ""
    target_lang: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ReviewCard:
        """Build a card from an API flashcard object.

        Raises:
            KeyError: If ``id``, ``word`` or ``translation`` is missing.
        """
        return cls(
            id=str(data["id"]),
            word=str(data["word"]),
            translation=str(data["translation"]),
            pos=str(data.get("pos") or ""),
            phonetic=_optional_text(data.get("phonetic")),
            example=_optional_text(data.get("example")),
            notes=_optional_text(data.get("notes")),
            source_lang=str(data.get("source_lang") or ""),
            target_lang=str(data.get("target_lang") or ""),
        )


@dataclass
class ReviewStats:
    """Local tally for the current session."""

    cards_reviewed: int = 0
    correct: int = 0
    wrong: int = 0
    remaining: int = 0

    def record(self, rating: ReviewRating) -> None:
        """Apply one confirmed rating to the tally."""
        self.cards_reviewed += 1
        if rating.is_correct:
            self.correct += 1
        else:
            self.wrong += 1
        self.remaining -= 1


@dataclass(frozen=True)
class ReviewSessionSummary:
    """Server-computed aggregate for a completed session."""

    session_id: str
    user_id: str
    total_cards: int
    average_rating: float
    ratings_breakdown: dict[str, int] = field(default_factory=dict)
    reviewed_at: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ReviewSessionSummary:
        """Build a summary from the API response body.

        Raises:
            KeyError: If a required field is missing.
            ValueError: If a numeric field cannot be converted.
        """
        breakdown = data.get("ratings_breakdown") or {}
        return cls(
            session_id=str(data["session_id"]),
            user_id=str(data.get("user_id") or ""),
            total_cards=int(data["total_cards"]),
            average_rating=float(data["average_rating"]),
            ratings_breakdown={str(key): int(value) for key, value in breakdown.items()},
            reviewed_at=str(data.get("reviewed_at") or ""),
        )
