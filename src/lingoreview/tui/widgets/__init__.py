"""TUI widgets for Lingoreview."""

from .card_view import CardViewWidget
from .stats_bar import StatsBar

__all__ = ["CardViewWidget", "StatsBar"]
