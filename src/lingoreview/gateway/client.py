"""HTTP gateway to the remote flashcard review API.

Every public method:
- resolves a fresh bearer token from the credential provider right before
  the request (tokens are short-lived and may expire between actions)
- runs the blocking ``requests`` call in a worker thread
- translates failures into AuthError / NotFoundError / TransportError

Calls are single-shot; retrying is left to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

import requests

from ..review.models import ReviewCard, ReviewRating, ReviewSessionSummary
from .errors import AuthError, GatewayError, NotFoundError, TransportError

logger = logging.getLogger(__name__)

CredentialProvider = Callable[[], "str | None"]

DEFAULT_TIMEOUT = 10.0


class RemoteReviewGateway:
    """Client for the review endpoints of the flashcard API."""

    def __init__(
        self,
        base_url: str,
        credentials: CredentialProvider,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            base_url: API root, e.g. ``https://api.example.com``.
            credentials: Callable returning the current bearer token.
            timeout: Per-request timeout in seconds.
            session: Optional pre-configured requests session.
        """
        self.base_url = base_url.rstrip("/")
        self._credentials = credentials
        self._timeout = timeout
        self._session = session or requests.Session()

    def __enter__(self) -> RemoteReviewGateway:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    # -- public operations -------------------------------------------------

    async def list_due_cards(self) -> list[ReviewCard]:
        """Fetch the cards currently due for review."""
        data = await self._call("GET", "/flashcards/review")
        if not isinstance(data, list):
            raise TransportError("Expected a list of flashcards")
        try:
            return [ReviewCard.from_dict(item) for item in data]
        except (KeyError, TypeError, AttributeError) as exc:
            raise TransportError(f"Malformed flashcard in response: {exc}") from exc

    async def start_session(self) -> str:
        """Create a review session and return its identifier."""
        data = await self._call("POST", "/review-sessions/start")
        if not isinstance(data, dict) or not data.get("session_id"):
            raise TransportError("Response did not contain a session_id")
        return str(data["session_id"])

    async def submit_card_rating(
        self, session_id: str, card_id: str, rating: ReviewRating
    ) -> None:
        """Record a rating for one card in a session."""
        await self._call(
            "POST",
            f"/review-sessions/{session_id}/review",
            json={"flashcard_id": card_id, "quality": int(rating)},
            expect_body=False,
        )

    async def get_session_summary(self, session_id: str) -> ReviewSessionSummary:
        """Fetch the aggregate for a finished session."""
        data = await self._call("GET", f"/review-sessions/{session_id}/summary")
        if not isinstance(data, dict):
            raise TransportError("Expected a session summary object")
        try:
            return ReviewSessionSummary.from_dict(data)
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise TransportError(f"Malformed session summary: {exc}") from exc

    async def reset_card_progress(self, session_id: str, card_id: str) -> None:
        """Clear a card's scheduling progress without recording a rating."""
        await self._call(
            "POST",
            f"/flashcards/{card_id}/reset",
            json={"session_id": session_id},
            expect_body=False,
        )

    # -- transport ---------------------------------------------------------

    def _resolve_token(self) -> str:
        """Get a bearer token from the provider, or raise AuthError."""
        try:
            token = self._credentials()
        except AuthError:
            raise
        except Exception as exc:
            raise AuthError(f"Could not obtain credentials: {exc}") from exc
        if not token:
            raise AuthError("Not signed in: no access token available")
        return token

    async def _call(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        expect_body: bool = True,
    ) -> Any:
        return await asyncio.to_thread(self._request, method, path, json, expect_body)

    def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None,
        expect_body: bool,
    ) -> Any:
        """Resolve a token, perform one blocking HTTP request and decode it.

        Runs in a worker thread; the credential provider may read files.
        """
        token = self._resolve_token()
        url = f"{self.base_url}{path}"
        headers = {"Authorization": f"Bearer {token}"}
        logger.debug("%s %s", method, url)

        try:
            response = self._session.request(
                method,
                url,
                headers=headers,
                json=json,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise TransportError(f"Network error: {exc}") from exc

        if not response.ok:
            error = _error_for_status(method, path, response)
            logger.warning("%s %s returned %s", method, url, response.status_code)
            raise error

        if not expect_body:
            return None

        try:
            return response.json()
        except ValueError as exc:
            logger.warning("%s %s returned invalid JSON", method, url)
            raise TransportError("Invalid JSON in response", response.status_code) from exc


def _error_for_status(method: str, path: str, response: requests.Response) -> GatewayError:
    """Map a non-2xx response to the matching gateway error."""
    status = response.status_code
    message = f"{method} {path} failed: {status}"
    if status in (401, 403):
        return AuthError(message, status)
    if status == 404:
        return NotFoundError(message, status)
    return TransportError(message, status)
