"""Textual TUI application for Lingoreview.

This module provides the main Textual App that manages:
- Gateway lifecycle (closed on exit)
- The review controller for the active session
- Screen navigation (review, done)
"""

from __future__ import annotations

from dataclasses import dataclass

from textual.app import App

from ..gateway import RemoteReviewGateway
from ..review import ReviewSessionController


@dataclass
class AppState:
    """Shared application state."""

    gateway: RemoteReviewGateway
    session_id: str | None = None
    show_phonetic: bool = True
    controller: ReviewSessionController | None = None


class LingoReviewApp(App[None]):
    """Main Textual application for Lingoreview."""

    TITLE = "Lingoreview"
    CSS = """
    Screen {
        background: $surface;
    }

    #status-message {
        padding: 1 2;
        height: auto;
    }

    .done-container {
        align: center middle;
        height: 1fr;
    }

    .done-stats {
        width: 60;
        height: auto;
        border: solid $success;
        padding: 2;
    }

    .help-text {
        dock: bottom;
        height: 1;
        background: $surface-darken-1;
        color: $text-muted;
        text-align: center;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        gateway: RemoteReviewGateway,
        session_id: str | None = None,
        show_phonetic: bool = True,
    ) -> None:
        """Initialize the app.

        Args:
            gateway: Client for the remote review API.
            session_id: Session to resume instead of starting a new one.
            show_phonetic: Whether to show phonetic transcriptions.
        """
        super().__init__()
        self._state = AppState(
            gateway=gateway,
            session_id=session_id,
            show_phonetic=show_phonetic,
        )

    @property
    def state(self) -> AppState:
        """Get the shared application state."""
        return self._state

    def new_controller(self) -> ReviewSessionController:
        """Replace the active session with a fresh controller.

        The resumable session id is used only by the first controller.
        """
        controller = ReviewSessionController(
            self._state.gateway,
            session_id=self._state.session_id,
            notify=self._notify_user,
        )
        self._state.session_id = None
        self._state.controller = controller
        return controller

    def _notify_user(self, message: str, severity: str) -> None:
        self.notify(message, severity=severity)  # type: ignore[arg-type]

    async def on_mount(self) -> None:
        """Push the review screen on mount."""
        from .screens.review import ReviewScreen

        await self.push_screen(ReviewScreen(self.new_controller()))

    async def start_new_review(self) -> None:
        """Discard the current session and load due cards again."""
        from .screens.review import ReviewScreen

        await self.switch_screen(ReviewScreen(self.new_controller()))

    async def action_quit(self) -> None:
        """Quit the application."""
        self.exit()

    def on_unmount(self) -> None:
        """Close the HTTP session on exit."""
        self._state.gateway.close()


def run_tui(
    gateway: RemoteReviewGateway,
    session_id: str | None = None,
    show_phonetic: bool = True,
) -> None:
    """Run the Lingoreview TUI.

    Args:
        gateway: Client for the remote review API.
        session_id: Session to resume instead of starting a new one.
        show_phonetic: Whether to show phonetic transcriptions.
    """
    app = LingoReviewApp(
        gateway=gateway,
        session_id=session_id,
        show_phonetic=show_phonetic,
    )
    app.run()
