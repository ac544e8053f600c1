"""Review session state machine.

ReviewSessionController owns one study session: the due-card queue, the
cursor, the flip flag, the local tally and the server-issued session id.
All remote calls go through a RemoteReviewGateway; the controller decides
what state the user sees before, during and after each call.

Flow:
- LOADING: due cards are fetched (ERROR on failure, EMPTY if none)
- READY: waiting for the user to start; a session is created remotely
- IN_PROGRESS / FLIPPED: card-by-card flip and rating
- COMPLETE: last card handled; the completion view fetches the summary

Actions that cannot apply in the current state are ignored and return a
falsy value. While a rating or reset is in flight every card action is
ignored, so a slow network or double key press never scores a card twice.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Callable

from ..gateway.errors import GatewayError, NotFoundError
from .models import ReviewCard, ReviewRating, ReviewSessionSummary, ReviewStats, ReviewStatus
from .summary import progress_percent

if TYPE_CHECKING:
    from ..gateway.client import RemoteReviewGateway

logger = logging.getLogger(__name__)

Notifier = Callable[[str, str], None]


def _ignore_notification(message: str, severity: str) -> None:
    return None


class ReviewSessionController:
    """Drives one review session against the remote review service."""

    def __init__(
        self,
        gateway: RemoteReviewGateway,
        session_id: str | None = None,
        notify: Notifier | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            gateway: Remote review API client.
            session_id: Existing session to resume (e.g. from a deep link).
                When given, a successful fetch skips the READY step.
            notify: Callback ``(message, severity)`` used to surface
                errors and confirmations to the user.
        """
        self._gateway = gateway
        self._session_id = session_id
        self._notify = notify or _ignore_notification

        self._status = ReviewStatus.LOADING
        self._cards: list[ReviewCard] = []
        self._cursor = 0
        self._flipped = False
        self._stats = ReviewStats()
        self._rated_positions: set[int] = set()

        self._fetching = False
        self._starting = False
        self._submitting = False
        self._summary_loading = False
        self._summary_requested = False

        self._summary: ReviewSessionSummary | None = None
        self._summary_error: GatewayError | None = None
        self.last_error: GatewayError | None = None

    # -- read-only views ---------------------------------------------------

    @property
    def status(self) -> ReviewStatus:
        return self._status

    @property
    def cards(self) -> list[ReviewCard]:
        return list(self._cards)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def is_flipped(self) -> bool:
        return self._flipped

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    @property
    def is_starting(self) -> bool:
        return self._starting

    @property
    def session_id(self) -> str | None:
        return self._session_id

    @property
    def stats(self) -> ReviewStats:
        """A copy of the local tally."""
        return replace(self._stats)

    @property
    def current_card(self) -> ReviewCard | None:
        """The card at the cursor, or None once the queue is exhausted."""
        if 0 <= self._cursor < len(self._cards):
            return self._cards[self._cursor]
        return None

    @property
    def is_first_card(self) -> bool:
        return self._cursor == 0

    @property
    def is_last_card(self) -> bool:
        return self._cursor == len(self._cards) - 1

    @property
    def progress(self) -> int:
        """Percentage of the queue the cursor has passed."""
        return progress_percent(self._cursor, len(self._cards))

    @property
    def summary(self) -> ReviewSessionSummary | None:
        return self._summary

    @property
    def summary_error(self) -> GatewayError | None:
        return self._summary_error

    @property
    def summary_loading(self) -> bool:
        return self._summary_loading

    @property
    def summary_pending(self) -> bool:
        """True once COMPLETE until the first summary request is made."""
        return self._status is ReviewStatus.COMPLETE and not self._summary_requested

    # -- loading -----------------------------------------------------------

    async def fetch_due_cards(self, auto_start: bool | None = None) -> list[ReviewCard]:
        """Load the due cards and move to READY, IN_PROGRESS, EMPTY or ERROR.

        Args:
            auto_start: Enter IN_PROGRESS directly instead of READY. Defaults
                to whether a resumable session id was supplied. Ignored when
                there is no session id to resume.

        Returns:
            The fetched cards (empty on failure).
        """
        if self._fetching:
            return list(self._cards)
        if self._status not in (ReviewStatus.LOADING, ReviewStatus.ERROR, ReviewStatus.EMPTY):
            logger.debug("Ignoring fetch in state %s", self._status.name)
            return list(self._cards)

        if auto_start is None:
            auto_start = self._session_id is not None
        elif auto_start and self._session_id is None:
            logger.warning("auto_start requested without a session id; waiting for start")
            auto_start = False

        self._reset_session_state()
        self._set_status(ReviewStatus.LOADING)
        self._fetching = True
        try:
            cards = await self._gateway.list_due_cards()
        except GatewayError as exc:
            self._cards = []
            self._set_status(ReviewStatus.ERROR)
            self._report(exc, "Failed to load review cards. Please try again.")
            return []
        finally:
            self._fetching = False

        self._cards = list(cards)
        if not self._cards:
            self._set_status(ReviewStatus.EMPTY)
            return []

        self._stats = ReviewStats(remaining=len(self._cards))
        if auto_start:
            self._enter_card(0)
        else:
            self._set_status(ReviewStatus.READY)
        return list(self._cards)

    async def retry(self) -> None:
        """Re-run the due-card fetch after an error (or an empty result)."""
        if self._status not in (ReviewStatus.ERROR, ReviewStatus.EMPTY):
            return
        self._set_status(ReviewStatus.LOADING)
        await self.fetch_due_cards()

    async def start_session(self) -> str | None:
        """Create a remote session and enter IN_PROGRESS at the first card.

        Returns:
            The new session id, or None if not started.
        """
        if self._status is not ReviewStatus.READY or not self._cards or self._starting:
            return None

        self._starting = True
        try:
            session_id = await self._gateway.start_session()
        except GatewayError as exc:
            self._report(exc, "Failed to start review session. Please try again.")
            return None
        finally:
            self._starting = False

        self._session_id = session_id
        logger.info("Started review session %s with %d cards", session_id, len(self._cards))
        self._enter_card(0)
        return session_id

    # -- card actions ------------------------------------------------------

    def flip(self) -> bool:
        """Reveal the answer side of the current card."""
        if self._submitting or self._status is not ReviewStatus.IN_PROGRESS:
            return False
        if self.current_card is None:
            return False
        self._flipped = True
        self._set_status(ReviewStatus.FLIPPED)
        return True

    async def submit_rating(
        self, rating: ReviewRating | int, card: ReviewCard | None = None
    ) -> bool:
        """Submit a rating for the current card and advance.

        Args:
            rating: Recall quality.
            card: The card being rated; must be the card at the cursor.
                Defaults to the current card.

        Returns:
            True if the rating was recorded by the server.
        """
        current = self._card_for_action(card)
        if current is None:
            return False
        position = self._cursor
        if position in self._rated_positions:
            logger.debug("Card at position %d already rated", position)
            self._notify("This card was already rated; skip or reset it.", "information")
            return False

        rating = ReviewRating(rating)
        session_id = self._session_id
        assert session_id is not None

        self._submitting = True
        try:
            await self._gateway.submit_card_rating(session_id, current.id, rating)
        except GatewayError as exc:
            self._report(exc, "Failed to save review result. Please try again.")
            return False
        finally:
            self._submitting = False

        self._rated_positions.add(position)
        self._stats.record(rating)
        logger.debug("Rated card %s as %s", current.id, rating.name)
        self._advance()
        return True

    async def reset_card_progress(self, card: ReviewCard | None = None) -> bool:
        """Clear the current card's scheduling progress and advance.

        No rating is recorded and the tally is left alone.

        Returns:
            True if the server confirmed the reset.
        """
        current = self._card_for_action(card)
        if current is None:
            return False

        session_id = self._session_id
        assert session_id is not None

        self._submitting = True
        try:
            await self._gateway.reset_card_progress(session_id, current.id)
        except GatewayError as exc:
            self._report(exc, "Failed to reset card progress.")
            return False
        finally:
            self._submitting = False

        self._notify("Card review progress reset", "information")
        self._advance()
        return True

    def previous(self) -> bool:
        """Go back one card, unflipped."""
        if self._submitting:
            return False
        if self._status not in (ReviewStatus.IN_PROGRESS, ReviewStatus.FLIPPED):
            return False
        if self._cursor == 0:
            return False
        self._enter_card(self._cursor - 1)
        return True

    def skip(self) -> bool:
        """Move to the next card without rating the current one.

        Purely local: no request is sent and the tally is unchanged.
        Not available on the last card.
        """
        if self._submitting or self._status is not ReviewStatus.FLIPPED:
            return False
        if self._cursor >= len(self._cards) - 1:
            return False
        self._enter_card(self._cursor + 1)
        return True

    # -- completion --------------------------------------------------------

    async def fetch_session_summary(self) -> ReviewSessionSummary | None:
        """Fetch the server summary for the completed session.

        Completing a session does not wait for this call; the completion
        view makes the first request. Failure leaves the session COMPLETE
        and the completion view falls back to the local tally.
        """
        if self._status is not ReviewStatus.COMPLETE or self._session_id is None:
            return None
        if self._summary_loading:
            return self._summary

        self._summary_requested = True
        self._summary_loading = True
        try:
            summary = await self._gateway.get_session_summary(self._session_id)
        except GatewayError as exc:
            self._summary_error = exc
            self._report(exc, "Session summary is unavailable.", severity="warning")
            return None
        finally:
            self._summary_loading = False

        self._summary = summary
        self._summary_error = None
        return summary

    # -- internals ---------------------------------------------------------

    def _card_for_action(self, card: ReviewCard | None) -> ReviewCard | None:
        """Return the current card if a submit/reset may proceed."""
        if self._submitting:
            logger.debug("Ignoring action while a submission is in flight")
            return None
        if self._status is not ReviewStatus.FLIPPED or self._session_id is None:
            return None
        current = self.current_card
        if current is None:
            return None
        if card is not None and card.id != current.id:
            logger.debug("Card %s is not at the cursor", card.id)
            return None
        return current

    def _advance(self) -> None:
        """Move past the current card, completing on the last one."""
        if self._cursor < len(self._cards) - 1:
            self._enter_card(self._cursor + 1)
            return

        self._cursor = len(self._cards)
        self._flipped = False
        self._set_status(ReviewStatus.COMPLETE)
        logger.info(
            "Review session %s complete: %d reviewed, %d correct",
            self._session_id,
            self._stats.cards_reviewed,
            self._stats.correct,
        )

    def _enter_card(self, index: int) -> None:
        self._cursor = index
        self._flipped = False
        self._set_status(ReviewStatus.IN_PROGRESS)

    def _reset_session_state(self) -> None:
        self._cards = []
        self._cursor = 0
        self._flipped = False
        self._stats = ReviewStats()
        self._rated_positions = set()
        self._summary = None
        self._summary_error = None
        self._summary_requested = False
        self.last_error = None

    def _set_status(self, status: ReviewStatus) -> None:
        if status is not self._status:
            logger.debug("Review status %s -> %s", self._status.name, status.name)
        self._status = status

    def _report(self, exc: GatewayError, message: str, severity: str = "error") -> None:
        """Record a gateway failure and surface it to the user."""
        self.last_error = exc
        logger.warning("%s (%s)", message, exc)
        if isinstance(exc, NotFoundError):
            message = f"{message} The review session was not found; start a new review."
        self._notify(message, severity)
