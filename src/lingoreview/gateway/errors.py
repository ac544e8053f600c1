"""Errors raised by the remote review gateway."""

from __future__ import annotations


class GatewayError(Exception):
    """Base class for failures talking to the flashcard API."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthError(GatewayError):
    """Credential missing, expired or rejected."""


class TransportError(GatewayError):
    """Network failure, unexpected status or malformed response."""


class NotFoundError(GatewayError):
    """Unknown session or card."""
