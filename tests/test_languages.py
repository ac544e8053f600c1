"""Tests for languages.py - display names."""

from lingoreview.languages import language_name, pos_description


def test_known_language():
    assert language_name("fr") == "French"
    assert language_name("zh") == "Mandarin"


def test_unknown_language_returns_code():
    assert language_name("nl") == "nl"


def test_missing_language():
    assert language_name("") == "Unknown"
    assert language_name(None) == "Unknown"


def test_pos_description():
    assert pos_description("ADP") == "Preposition"
    assert pos_description("FOO") == "FOO"
    assert pos_description("") == ""
