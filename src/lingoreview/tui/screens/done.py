"""Done screen for Lingoreview TUI.

This screen displays the local tally and the server session summary after
completing a review, and allows starting a new review.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Center, Vertical
from textual.screen import Screen
from textual.widgets import Button, Static

from ...review import CompletionReport, ReviewSessionController
from ...render import completion_lines

if TYPE_CHECKING:
    from ..app import LingoReviewApp


class DoneScreen(Screen[None]):
    """Screen displayed when a review session is complete."""

    BINDINGS = [
        Binding("n", "new_review", "New review"),
        Binding("enter", "new_review", "Continue", show=False),
        Binding("s", "reload_summary", "Reload summary", show=False),
        Binding("q", "app.quit", "Quit"),
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
        yield Center(
            Vertical(
                Static(
                    "[bold green]Review Complete![/bold green]",
                    id="done-title",
                    markup=True,
                ),
                Static(""),
                Static("", id="done-body", markup=True),
                Static(""),
                Button("New Review", id="new-button", variant="primary"),
                classes="done-stats",
            ),
            classes="done-container",
        )
        yield Static(
            "[dim]n[/dim] new review  [dim]s[/dim] reload summary  [dim]q[/dim] quit",
            classes="help-text",
            markup=True,
        )

    def on_mount(self) -> None:
        """Show the tally at once and fetch the server summary behind it."""
        if self._controller.summary_pending:
            self._load_summary()
        self._refresh()

    def _refresh(self) -> None:
        controller = self._controller
        report = CompletionReport.build(controller.stats, controller.summary)
        loading = controller.summary_loading or controller.summary_pending
        lines = completion_lines(report, summary_loading=loading)
        self.query_one("#done-body", Static).update("\n".join(lines))

    def _load_summary(self) -> None:
        async def load() -> None:
            await self._controller.fetch_session_summary()
            self._refresh()

        self.run_worker(load())

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button press."""
        if event.button.id == "new-button":
            await self.action_new_review()

    async def action_reload_summary(self) -> None:
        """Fetch the session summary again if it failed."""
        if self._controller.summary is not None or self._controller.summary_loading:
            return
        self._load_summary()
        self._refresh()

    async def action_new_review(self) -> None:
        """Discard this session and load due cards again."""
        await self.lingo_app.start_new_review()
