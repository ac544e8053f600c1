"""Stats bar widget for displaying session progress and tally."""

from __future__ import annotations

from textual.widgets import Static

from ...review.models import ReviewStats
from ...render import progress_bar, progress_line


class StatsBar(Static):
    """Widget displaying card position, progress and the local tally."""

    DEFAULT_CSS = """
    StatsBar {
        height: 2;
        background: $surface-darken-1;
        padding: 0 1;
    }
    """

    def __init__(self, id: str | None = None) -> None:
        super().__init__(id=id)
        self._cursor = 0
        self._total = 0
        self._percent = 0
        self._stats = ReviewStats()

    def update_progress(self, cursor: int, total: int, percent: int) -> None:
        """Update the position within the card queue."""
        self._cursor = cursor
        self._total = total
        self._percent = percent
        self._refresh_display()

    def update_stats(self, stats: ReviewStats) -> None:
        """Update the session tally."""
        self._stats = stats
        self._refresh_display()

    def _refresh_display(self) -> None:
        """Refresh the displayed statistics."""
        if self._total == 0:
            self.update("")
            return
        text = (
            f"{progress_line(self._cursor, self._total, self._percent)}  "
            f"[blue]{progress_bar(self._percent)}[/blue]\n"
            f"Reviewed: {self._stats.cards_reviewed}  "
            f"[bold green]{self._stats.correct}[/bold green] remembered  "
            f"[bold red]{self._stats.wrong}[/bold red] forgot  "
            f"[dim]|[/dim]  Remaining: {self._stats.remaining}"
        )
        self.update(text)
