"""CLI command routing for Lingoreview.

This module provides the command-line interface with support for:
- TUI mode (default, with fallback to plain if unavailable)
- Plain terminal mode
- Resuming a session by id or by a review page URL
- Showing and changing saved settings (`config`)
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import replace
from pathlib import Path

from rich.console import Console

from . import __version__
from .auth import resolve_credential_provider
from .config import ConfigError, resolve_api_url, session_id_from_url, validate_api_url
from .config_store import Config, load_config, save_config
from .gateway import RemoteReviewGateway
from .render import (
    RATING_CHOICES,
    card_back_text,
    card_front_text,
    completion_lines,
    progress_line,
    rating_for_key,
    ready_text,
)
from .review import CompletionReport, ReviewSessionController, ReviewStatus

logger = logging.getLogger(__name__)


def _check_tui_available() -> bool:
    """Check if TUI dependencies are available."""
    try:
        import textual  # noqa: F401

        return True
    except ImportError:
        return False


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _resolve_session_id(args: argparse.Namespace) -> str | None:
    """Session to resume, from --session or the ``session`` URL parameter."""
    if args.session:
        return args.session
    if args.url:
        return session_id_from_url(args.url)
    return None


def _build_gateway(args: argparse.Namespace, config: Config) -> RemoteReviewGateway:
    api_url = resolve_api_url(args.api_url, config)
    credentials = resolve_credential_provider(config, token_file=args.token_file)
    return RemoteReviewGateway(
        api_url,
        credentials,
        timeout=config.request_timeout,
    )


def _prompt(console: Console, message: str) -> str:
    """Read one command; EOF and Ctrl-C count as quit."""
    try:
        return console.input(message).strip().lower()
    except (EOFError, KeyboardInterrupt):
        console.print()
        return "q"


async def _plain_review(
    console: Console,
    gateway: RemoteReviewGateway,
    session_id: str | None,
    show_phonetic: bool,
) -> int:
    """Run a review session with line-based prompts."""
    def notify(message: str, severity: str) -> None:
        style = "red" if severity == "error" else "yellow" if severity == "warning" else "green"
        console.print(f"[{style}]{message}[/{style}]")

    controller = ReviewSessionController(gateway, session_id=session_id, notify=notify)

    console.print("Loading cards for review...")
    await controller.fetch_due_cards()
    while controller.status is ReviewStatus.ERROR:
        if _prompt(console, "Try again? (y/N) ") != "y":
            return 1
        await controller.retry()

    if controller.status is ReviewStatus.EMPTY:
        console.print("No cards due for review. Check back later.")
        return 0

    if controller.status is ReviewStatus.READY:
        console.print(ready_text(len(controller.cards), show_hint=False))
        while controller.status is ReviewStatus.READY:
            if _prompt(console, "Press Enter to start review (q to quit)... ") == "q":
                return 0
            await controller.start_session()

    rating_help = "  ".join(f"({c.key}) {c.label}" for c in RATING_CHOICES)
    while controller.status in (ReviewStatus.IN_PROGRESS, ReviewStatus.FLIPPED):
        card = controller.current_card
        if card is None:
            break
        total = len(controller.cards)

        console.print("-" * 40)
        console.print(progress_line(controller.cursor, total, controller.progress))
        console.print("-" * 40)
        console.print(card_front_text(card, show_phonetic=show_phonetic))

        if controller.status is ReviewStatus.IN_PROGRESS:
            choice = _prompt(console, "\nEnter flip  (p) previous  (q) quit > ")
            if choice == "q":
                console.print("Exiting review.")
                return 0
            if choice == "p":
                if not controller.previous():
                    console.print("Already at the first card.")
                continue
            controller.flip()
            continue

        console.print()
        console.print(card_back_text(card))
        console.print(f"\nRate: {rating_help}  (x) Reset  (s) Skip  (p) Previous  (q) Quit")
        choice = _prompt(console, "> ")
        if choice == "q":
            console.print("Exiting review.")
            return 0
        if choice == "p":
            if not controller.previous():
                console.print("Already at the first card.")
        elif choice == "s":
            if not controller.skip():
                console.print("Cannot skip the last card.")
        elif choice == "x":
            await controller.reset_card_progress(card)
        else:
            rating = rating_for_key(choice)
            if rating is None:
                console.print("Invalid choice. Use 1-4, x, s, p, or q.")
            else:
                await controller.submit_rating(rating, card)

    console.print("-" * 40)
    console.print("[bold green]Review Complete![/bold green]")
    if controller.summary_pending:
        console.print("[dim]Loading summary...[/dim]")
        await controller.fetch_session_summary()
    report = CompletionReport.build(controller.stats, controller.summary)
    for line in completion_lines(report):
        console.print(line)
    return 0


def _run_review(args: argparse.Namespace) -> int:
    """Load configuration and run the TUI or the plain review loop."""
    config = load_config()
    try:
        gateway = _build_gateway(args, config)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    session_id = _resolve_session_id(args)
    if session_id:
        logger.info("Resuming review session %s", session_id)

    use_plain = args.plain
    if not use_plain and _check_tui_available():
        from .tui import run_tui

        try:
            run_tui(
                gateway=gateway,
                session_id=session_id,
                show_phonetic=config.show_phonetic,
            )
        except Exception as exc:
            print(f"Unexpected error: {exc}", file=sys.stderr)
            return 1
        return 0

    console = Console()
    with gateway:
        try:
            return asyncio.run(
                _plain_review(console, gateway, session_id, config.show_phonetic)
            )
        except KeyboardInterrupt:
            console.print("\nExiting review.")
            return 0


def _run_config(args: argparse.Namespace) -> int:
    """Update saved settings from the given options, then print them."""
    config = replace(load_config())
    changed = False

    if args.api_url is not None:
        try:
            config.api_url = validate_api_url(args.api_url)
        except ConfigError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        changed = True
    if args.token_file is not None:
        config.token_file = str(args.token_file.expanduser())
        changed = True
    if args.timeout is not None:
        if args.timeout <= 0:
            print("Error: --timeout must be positive", file=sys.stderr)
            return 1
        config.request_timeout = args.timeout
        changed = True
    if args.show_phonetic is not None:
        config.show_phonetic = args.show_phonetic
        changed = True

    if changed:
        save_config(config)
        logger.info("Saved settings")

    print(f"api_url:         {config.api_url or '(not set)'}")
    print(f"token_file:      {config.token_file or '(not set)'}")
    print(f"request_timeout: {config.request_timeout}")
    print(f"show_phonetic:   {config.show_phonetic}")
    return 0


def _add_review_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--plain",
        action="store_true",
        help="Force plain terminal mode (no TUI)",
    )
    parser.add_argument(
        "--api-url",
        help="Base URL of the flashcard API",
    )
    parser.add_argument(
        "--token-file",
        type=Path,
        help="File holding the access token (re-read before every request)",
    )
    resume = parser.add_mutually_exclusive_group()
    resume.add_argument(
        "--session",
        help="Resume an existing review session by id",
    )
    resume.add_argument(
        "--url",
        help="Review page URL; its 'session' parameter resumes that session",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="lingoreview",
        description="Terminal review client for language flashcards",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    _add_review_options(parser)

    subparsers = parser.add_subparsers(dest="command")

    review_parser = subparsers.add_parser(
        "review",
        help="Review the flashcards that are due now",
    )
    _add_review_options(review_parser)
    review_parser.set_defaults(func=_run_review)

    config_parser = subparsers.add_parser(
        "config",
        help="Show or change saved settings",
    )
    config_parser.add_argument("--api-url", help="Base URL of the flashcard API")
    config_parser.add_argument(
        "--token-file",
        type=Path,
        help="File holding the access token",
    )
    config_parser.add_argument(
        "--timeout",
        type=float,
        help="Request timeout in seconds",
    )
    phonetic = config_parser.add_mutually_exclusive_group()
    phonetic.add_argument(
        "--show-phonetic",
        dest="show_phonetic",
        action="store_true",
        default=None,
        help="Show phonetic transcriptions on cards",
    )
    phonetic.add_argument(
        "--hide-phonetic",
        dest="show_phonetic",
        action="store_false",
        help="Hide phonetic transcriptions on cards",
    )
    config_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    config_parser.set_defaults(func=_run_config)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entrypoint.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command is None:
        return _run_review(args)

    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
