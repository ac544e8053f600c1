"""Card view widget for displaying the front and back of a flashcard."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Static

from ...review.models import ReviewCard
from ...render import card_back_text, card_front_text


class CardViewWidget(Static):
    """Widget for displaying a card, with the answer side once flipped."""

    DEFAULT_CSS = """
    CardViewWidget {
        height: auto;
        padding: 1 2;
    }

    CardViewWidget .front-section {
        border: solid $primary;
        padding: 1 2;
        margin-bottom: 1;
        height: auto;
        content-align: center middle;
    }

    CardViewWidget .back-section {
        border: solid $success;
        padding: 1 2;
        height: auto;
    }
    """

    def __init__(self, id: str | None = None, show_phonetic: bool = True) -> None:
        super().__init__(id=id)
        self._card: ReviewCard | None = None
        self._flipped = False
        self._show_phonetic = show_phonetic

    def compose(self) -> ComposeResult:
        yield Vertical(id="card-content")

    def show_card(self, card: ReviewCard | None, flipped: bool = False) -> None:
        """Display a card, front only unless ``flipped``."""
        self._card = card
        self._flipped = flipped
        self._refresh_content()

    def clear(self) -> None:
        """Remove any displayed card."""
        self.show_card(None)

    def _refresh_content(self) -> None:
        container = self.query_one("#card-content", Vertical)
        container.remove_children()
        if self._card is None:
            return

        front = card_front_text(self._card, show_phonetic=self._show_phonetic)
        if not self._flipped:
            front.append("\n\n")
            front.append("Space to flip", style="dim")
        container.mount(Static(front, classes="front-section"))

        if self._flipped:
            container.mount(Static(card_back_text(self._card), classes="back-section"))
