"""Terminal rendering helpers shared by the TUI and plain mode.

Builds Rich text for card faces, the progress line and the rating
breakdown bars so that widgets stay thin and the layout can be tested
without running the app.
"""

from __future__ import annotations

from dataclasses import dataclass

from rich.text import Text

from .languages import language_name, pos_description
from .review.models import ReviewCard, ReviewRating
from .review.summary import BreakdownRow, CompletionReport, estimated_minutes

BAR_WIDTH = 24
BAR_FULL = "█"
BAR_EMPTY = "░"


@dataclass(frozen=True)
class RatingChoice:
    """A rating button offered after the card is flipped."""

    key: str
    label: str
    hint: str
    rating: ReviewRating


# Four answer buttons; each maps to a rating on the 0-5 scale.
RATING_CHOICES: tuple[RatingChoice, ...] = (
    RatingChoice("1", "Again", "Soon", ReviewRating.DIFFICULT),
    RatingChoice("2", "Hard", "Later today", ReviewRating.GOOD),
    RatingChoice("3", "Good", "Tomorrow", ReviewRating.EASY),
    RatingChoice("4", "Easy", "3+ days", ReviewRating.PERFECT),
)


def rating_for_key(key: str) -> ReviewRating | None:
    """Look up the rating bound to a number key."""
    for choice in RATING_CHOICES:
        if choice.key == key:
            return choice.rating
    return None


def card_front_text(card: ReviewCard, show_phonetic: bool = True) -> Text:
    """Question side: source language, word and phonetic transcription."""
    text = Text()
    text.append(language_name(card.source_lang), style="dim")
    text.append("\n\n")
    text.append(card.word, style="bold")
    if show_phonetic and card.phonetic:
        text.append("\n")
        text.append(card.phonetic, style="italic dim")
    return text


def card_back_text(card: ReviewCard) -> Text:
    """Answer side: translation plus whichever details the card has."""
    text = Text()
    text.append(language_name(card.target_lang), style="dim")
    text.append("\n")
    text.append(card.translation, style="bold")

    if card.pos:
        text.append("\n\nPart of speech\n", style="dim")
        text.append(pos_description(card.pos))
    if card.example:
        text.append("\n\nExample\n", style="dim")
        text.append(f"“{card.example}”", style="italic")
    if card.notes:
        text.append("\n\nNotes\n", style="dim")
        text.append(card.notes)
    return text


def progress_bar(percent: int, width: int = BAR_WIDTH) -> str:
    """Render a percentage as a block bar."""
    percent = max(0, min(100, percent))
    filled = round(percent / 100 * width)
    return BAR_FULL * filled + BAR_EMPTY * (width - filled)


def progress_line(cursor: int, total: int, percent: int) -> str:
    """Position and completion, e.g. ``2 of 5  40% complete``."""
    position = min(cursor + 1, total)
    return f"{position} of {total}  {percent}% complete"


def ready_text(card_count: int, show_hint: bool = True) -> str:
    """Markup shown before a session is started."""
    plural = "s" if card_count != 1 else ""
    text = (
        f"[bold]Ready to Review[/bold]\n\n"
        f"You have [bold]{card_count}[/bold] card{plural} due for review.\n"
        f"Estimated time: [bold]{estimated_minutes(card_count)} min[/bold]\n\n"
        "Try to recall each word before flipping the card."
    )
    if show_hint:
        text += "\n\n[dim]Enter[/dim] start review"
    return text


def breakdown_lines(rows: list[BreakdownRow], width: int = BAR_WIDTH) -> list[str]:
    """One markup line per rating with a bar sized by its share of cards."""
    lines = []
    for row in rows:
        filled = round(row.fraction * width)
        bar = BAR_FULL * filled + BAR_EMPTY * (width - filled)
        lines.append(f"  {row.label:<10} [cyan]{bar}[/cyan] {row.count}")
    return lines


def completion_lines(report: CompletionReport, summary_loading: bool = False) -> list[str]:
    """Markup lines for the completion screen.

    While the server summary is being fetched a loading line takes its
    place; without a summary the local tally stands alone.
    """
    lines = [
        f"Cards reviewed: [bold]{report.cards_reviewed}[/bold]",
        f"Remembered:     [bold green]{report.correct}[/bold green]",
        f"Forgot:         [bold red]{report.wrong}[/bold red]",
        f"Accuracy:       [bold]{report.accuracy}%[/bold]",
    ]
    if report.remaining:
        lines.append(f"Not rated:      [bold]{report.remaining}[/bold]")

    lines.append("")
    if report.has_summary:
        lines.append(
            f"[dim]Session summary ({report.total_cards} cards)[/dim]"
        )
        lines.append(f"Average rating: [bold]{report.average_rating}[/bold]")
        lines.extend(breakdown_lines(report.breakdown))
    elif summary_loading:
        lines.append("[dim]Loading summary...[/dim]")
    else:
        lines.append("[dim]Summary unavailable[/dim]")
    return lines
