"""Tests for auth.py - credential providers."""

import pytest

from lingoreview.auth import (
    TokenFileProvider,
    env_token_provider,
    resolve_credential_provider,
)
from lingoreview.config_store import Config
from lingoreview.gateway.errors import AuthError


def test_env_provider_reads_at_call_time(monkeypatch):
    """The variable is read on each call, not when the provider is built."""
    monkeypatch.delenv("LINGOREVIEW_TOKEN", raising=False)
    provider = env_token_provider()
    assert provider() is None

    monkeypatch.setenv("LINGOREVIEW_TOKEN", " tok ")
    assert provider() == "tok"


def test_token_file_is_reread(tmp_path):
    """A rotated token file is picked up on the next call."""
    token_file = tmp_path / "token"
    token_file.write_text("one\n")
    provider = TokenFileProvider(token_file)
    assert provider() == "one"

    token_file.write_text("two\n")
    assert provider() == "two"


def test_token_file_missing(tmp_path):
    provider = TokenFileProvider(tmp_path / "missing")
    with pytest.raises(AuthError):
        provider()


def test_token_file_empty(tmp_path):
    token_file = tmp_path / "token"
    token_file.write_text("   ")
    assert TokenFileProvider(token_file)() is None


class TestResolveCredentialProvider:
    """Tests for provider precedence."""

    def test_explicit_file_first(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LINGOREVIEW_TOKEN", "env")
        token_file = tmp_path / "token"
        token_file.write_text("file")

        provider = resolve_credential_provider(Config(), token_file=token_file)
        assert provider() == "file"

    def test_env_before_config(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LINGOREVIEW_TOKEN", "env")
        token_file = tmp_path / "token"
        token_file.write_text("file")

        provider = resolve_credential_provider(Config(token_file=str(token_file)))
        assert provider() == "env"

    def test_config_file(self, monkeypatch, tmp_path):
        monkeypatch.delenv("LINGOREVIEW_TOKEN", raising=False)
        token_file = tmp_path / "token"
        token_file.write_text("cfg")

        provider = resolve_credential_provider(Config(token_file=str(token_file)))
        assert provider() == "cfg"

    def test_no_source_raises_on_call(self, monkeypatch):
        monkeypatch.delenv("LINGOREVIEW_TOKEN", raising=False)

        provider = resolve_credential_provider(Config())
        with pytest.raises(AuthError):
            provider()
