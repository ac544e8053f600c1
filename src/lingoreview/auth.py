"""Credential providers for the review API.

Access tokens are short-lived, so providers are called immediately before
each request instead of caching a token at startup.
"""

from __future__ import annotations

import os
from pathlib import Path

from .config_store import Config
from .gateway.client import CredentialProvider
from .gateway.errors import AuthError

TOKEN_ENV = "LINGOREVIEW_TOKEN"


def env_token_provider(var: str = TOKEN_ENV) -> CredentialProvider:
    """Provider reading the token from an environment variable at call time."""

    def provider() -> str | None:
        value = os.environ.get(var, "").strip()
        return value or None

    return provider


class TokenFileProvider:
    """Reads the token from a file on every call.

    An external login helper can rotate the file while a session runs.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def __call__(self) -> str | None:
        try:
            token = self.path.read_text(encoding="utf-8").strip()
        except FileNotFoundError as exc:
            raise AuthError(f"Token file not found: {self.path}") from exc
        except OSError as exc:
            raise AuthError(f"Cannot read token file {self.path}: {exc}") from exc
        return token or None


def _missing_credentials() -> str | None:
    raise AuthError(
        f"Not signed in. Set {TOKEN_ENV} or pass --token-file."
    )


def resolve_credential_provider(
    config: Config, token_file: Path | None = None
) -> CredentialProvider:
    """Pick a credential provider.

    Precedence: explicit token file, ``LINGOREVIEW_TOKEN``, the token file
    from saved settings. Without any source the returned provider always
    raises AuthError, so the failure surfaces on the first request.
    """
    if token_file is not None:
        return TokenFileProvider(token_file)
    if os.environ.get(TOKEN_ENV):
        return env_token_provider()
    if config.token_file:
        return TokenFileProvider(Path(config.token_file).expanduser())
    return _missing_credentials
