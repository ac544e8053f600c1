"""Review screen for Lingoreview TUI.

This screen renders every session state except COMPLETE:
- Loading, error and empty messages (r reloads from either)
- Ready prompt with card count and estimated time
- Card front, then back on space; 1-4 rate, x resets progress
- Left/right move to the previous card or skip the current one

Remote calls run in workers so key presses keep flowing to the
controller, which ignores them while a submission is in flight.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Awaitable

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import Static

from ...review import ReviewSessionController, ReviewStatus
from ...render import RATING_CHOICES, rating_for_key, ready_text
from ..widgets.card_view import CardViewWidget
from ..widgets.stats_bar import StatsBar

if TYPE_CHECKING:
    from ..app import LingoReviewApp

_STATUS_MESSAGES = {
    ReviewStatus.LOADING: "[dim]Loading cards for review...[/dim]",
    ReviewStatus.ERROR: (
        "[bold red]Error Loading Cards[/bold red]\n\n"
        "There was a problem loading your review cards.\n\n"
        "[dim]r[/dim] try again"
    ),
    ReviewStatus.EMPTY: (
        "[bold]No Cards Due for Review[/bold]\n\n"
        "You don't have any flashcards due for review right now.\n"
        "Great job keeping up with your reviews! Check back later.\n\n"
        "[dim]r[/dim] check again"
    ),
}


class ReviewScreen(Screen[None]):
    """Screen for reviewing due cards."""

    BINDINGS = [
        Binding("q", "app.quit", "Quit"),
        Binding("space", "space_action", "Flip", show=True),
        Binding("enter", "start", "Start", show=False),
        Binding("r", "retry", "Retry", show=False),
        Binding("1", "rate('1')", "Again", show=False),
        Binding("2", "rate('2')", "Hard", show=False),
        Binding("3", "rate('3')", "Good", show=False),
        Binding("4", "rate('4')", "Easy", show=False),
        Binding("x", "reset_card", "Reset progress", show=False),
        Binding("left", "previous", "Previous", show=False),
        Binding("right", "skip", "Skip", show=False),
    ]

    def __init__(self, controller: ReviewSessionController) -> None:
        super().__init__()
        self._controller = controller

    @property
    def lingo_app(self) -> "LingoReviewApp":
        """Get the typed app instance."""
        from ..app import LingoReviewApp

        assert isinstance(self.app, LingoReviewApp)
        return self.app

    def compose(self) -> ComposeResult:
        yield Vertical(
            Static("[bold]Flashcard Review[/bold]", id="review-title", markup=True),
            StatsBar(id="stats-bar"),
            VerticalScroll(
                Static("", id="status-message", markup=True),
                CardViewWidget(
                    id="card-view",
                    show_phonetic=self.lingo_app.state.show_phonetic,
                ),
            ),
            Static("", id="help-bar", classes="help-text", markup=True),
        )

    async def on_mount(self) -> None:
        """Fetch due cards when the screen mounts."""
        self._refresh()
        self._run(self._controller.fetch_due_cards())

    def _get_help_text(self) -> str:
        """Get context-appropriate help text."""
        status = self._controller.status
        if status is ReviewStatus.READY:
            return "[dim]Enter[/dim] start  [dim]q[/dim] quit"
        if status in (ReviewStatus.ERROR, ReviewStatus.EMPTY):
            return "[dim]r[/dim] retry  [dim]q[/dim] quit"

        controller = self._controller
        previous = "" if controller.is_first_card else "  [dim]←[/dim] previous"
        if status is ReviewStatus.IN_PROGRESS:
            return f"[dim]Space[/dim] flip{previous}  [dim]q[/dim] quit"
        if status is ReviewStatus.FLIPPED:
            choices = "  ".join(
                f"[dim]{choice.key}[/dim] {choice.label}" for choice in RATING_CHOICES
            )
            skip = "" if controller.is_last_card else "  [dim]→[/dim] skip"
            return f"{choices}  [dim]x[/dim] reset{previous}{skip}"
        return "[dim]q[/dim] quit"

    def _refresh(self) -> None:
        """Redraw the screen from the controller state."""
        controller = self._controller
        status = controller.status

        if status is ReviewStatus.COMPLETE:
            from .done import DoneScreen

            self.app.switch_screen(DoneScreen(controller))
            return

        message = self.query_one("#status-message", Static)
        card_view = self.query_one("#card-view", CardViewWidget)
        stats_bar = self.query_one("#stats-bar", StatsBar)

        if status in (ReviewStatus.IN_PROGRESS, ReviewStatus.FLIPPED):
            message.update("[dim]Saving...[/dim]" if controller.is_submitting else "")
            card_view.show_card(controller.current_card, flipped=controller.is_flipped)
            stats_bar.update_progress(
                controller.cursor, len(controller.cards), controller.progress
            )
            stats_bar.update_stats(controller.stats)
        else:
            if status is ReviewStatus.READY:
                text = ready_text(len(controller.cards))
                if controller.is_starting:
                    text += "\n\n[dim]Starting...[/dim]"
                message.update(text)
            else:
                message.update(_STATUS_MESSAGES.get(status, ""))
            card_view.clear()
            stats_bar.update_progress(0, 0, 0)

        self.query_one("#help-bar", Static).update(self._get_help_text())

    def _run(self, action: Awaitable[object]) -> None:
        """Run a controller coroutine in a worker, then redraw."""

        async def runner() -> None:
            await action
            self._refresh()

        self.run_worker(runner())
        self._refresh()

    async def action_space_action(self) -> None:
        """Handle space - start when ready, otherwise flip the card."""
        if self._controller.status is ReviewStatus.READY:
            await self.action_start()
        elif self._controller.flip():
            self._refresh()

    async def action_start(self) -> None:
        """Start the review session."""
        if self._controller.status is ReviewStatus.READY and not self._controller.is_starting:
            self._run(self._controller.start_session())

    async def action_retry(self) -> None:
        """Reload due cards after an error or an empty result."""
        if self._controller.status in (ReviewStatus.ERROR, ReviewStatus.EMPTY):
            self._run(self._controller.retry())

    async def action_rate(self, key: str) -> None:
        """Submit the rating bound to ``key``."""
        rating = rating_for_key(key)
        controller = self._controller
        if rating is None or controller.status is not ReviewStatus.FLIPPED:
            return
        if controller.is_submitting:
            return
        self._run(controller.submit_rating(rating))

    async def action_reset_card(self) -> None:
        """Reset the current card's progress."""
        controller = self._controller
        if controller.status is ReviewStatus.FLIPPED and not controller.is_submitting:
            self._run(controller.reset_card_progress())

    async def action_previous(self) -> None:
        """Go back to the previous card."""
        if self._controller.previous():
            self._refresh()

    async def action_skip(self) -> None:
        """Skip to the next card without rating."""
        if self._controller.skip():
            self._refresh()
