"""Textual TUI for Lingoreview."""

from .app import LingoReviewApp, run_tui

__all__ = ["LingoReviewApp", "run_tui"]
