"""Shared fixtures: an in-memory stand-in for the remote review gateway."""

from __future__ import annotations

import asyncio

import pytest

from lingoreview.review.models import ReviewCard, ReviewRating, ReviewSessionSummary


class FakeGateway:
    """Async gateway double that records calls and can be told to fail.

    Set ``errors[operation]`` to an exception to make that operation raise.
    Set ``submit_gate`` or ``summary_gate`` to an asyncio.Event to hold
    rating submissions or the summary request until the event is set.
    """

    def __init__(self, cards: list[ReviewCard], session_id: str = "sess-1") -> None:
        self.cards = cards
        self.session_id = session_id
        self.errors: dict[str, Exception] = {}
        self.calls: list[tuple] = []
        self.submit_gate: asyncio.Event | None = None
        self.summary_gate: asyncio.Event | None = None
        self.summary = ReviewSessionSummary(
            session_id=session_id,
            user_id="user-1",
            total_cards=len(cards),
            average_rating=2.6667,
            ratings_breakdown={"3": 1, "0": 1, "5": 1},
            reviewed_at="2024-05-01T10:00:00Z",
        )

    def _maybe_fail(self, operation: str) -> None:
        error = self.errors.get(operation)
        if error is not None:
            raise error

    def count(self, operation: str) -> int:
        return sum(1 for call in self.calls if call[0] == operation)

    def close(self) -> None:
        self.calls.append(("close",))

    async def list_due_cards(self) -> list[ReviewCard]:
        self.calls.append(("list_due_cards",))
        self._maybe_fail("list_due_cards")
        return list(self.cards)

    async def start_session(self) -> str:
        self.calls.append(("start_session",))
        self._maybe_fail("start_session")
        return self.session_id

    async def submit_card_rating(
        self, session_id: str, card_id: str, rating: ReviewRating
    ) -> None:
        self.calls.append(("submit_card_rating", session_id, card_id, rating))
        if self.submit_gate is not None:
            await self.submit_gate.wait()
        self._maybe_fail("submit_card_rating")

    async def get_session_summary(self, session_id: str) -> ReviewSessionSummary:
        self.calls.append(("get_session_summary", session_id))
        if self.summary_gate is not None:
            await self.summary_gate.wait()
        self._maybe_fail("get_session_summary")
        return self.summary

    async def reset_card_progress(self, session_id: str, card_id: str) -> None:
        self.calls.append(("reset_card_progress", session_id, card_id))
        self._maybe_fail("reset_card_progress")


def make_card(index: int) -> ReviewCard:
    return ReviewCard(
        id=f"card-{index}",
        word=f"mot{index}",
        translation=f"word{index}",
        pos="NOUN",
        phonetic=f"/mo{index}/",
        source_lang="fr",
        target_lang="en",
    )


@pytest.fixture
def cards() -> list[ReviewCard]:
    return [make_card(i) for i in range(3)]


@pytest.fixture
def gateway(cards) -> FakeGateway:
    return FakeGateway(cards)


@pytest.fixture
def notifications() -> list[tuple[str, str]]:
    return []


@pytest.fixture
def notify(notifications):
    def record(message: str, severity: str) -> None:
        notifications.append((message, severity))

    return record
