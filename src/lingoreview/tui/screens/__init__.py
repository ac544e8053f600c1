"""TUI screens for Lingoreview."""

from .done import DoneScreen
from .review import ReviewScreen

__all__ = ["DoneScreen", "ReviewScreen"]
