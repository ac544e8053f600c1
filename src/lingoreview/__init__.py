"""Lingoreview - terminal review client for a remote flashcard service."""

__version__ = "0.1.0"
