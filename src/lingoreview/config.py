"""Runtime configuration resolution for Lingoreview."""

from __future__ import annotations

import os
from urllib.parse import parse_qs, urlparse

from .config_store import Config

API_URL_ENV = "LINGOREVIEW_API_URL"


class ConfigError(ValueError):
    """Raised when required configuration is missing or invalid."""


def resolve_api_url(cli_value: str | None, config: Config) -> str:
    """Determine the API base URL.

    Precedence: command line, ``LINGOREVIEW_API_URL``, saved settings.

    Raises:
        ConfigError: If no URL is configured or it is not http(s).
    """
    url = cli_value or os.environ.get(API_URL_ENV) or config.api_url
    if not url:
        raise ConfigError(
            f"No API URL configured. Pass --api-url or set {API_URL_ENV}."
        )
    return validate_api_url(url)


def validate_api_url(url: str) -> str:
    """Check that ``url`` is an http(s) URL and strip any trailing slash."""
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigError(f"Invalid API URL: {url}")
    return url.rstrip("/")


def session_id_from_url(url: str) -> str | None:
    """Extract the ``session`` query parameter from a review page URL.

    Returns:
        The session id, or None if the URL carries none.
    """
    query = parse_qs(urlparse(url).query)
    values = query.get("session")
    if not values:
        return None
    session_id = values[0].strip()
    return session_id or None
