"""Tests for the Textual app - driving a one-card session with key presses."""

import asyncio

from lingoreview.review import ReviewStatus
from lingoreview.tui.app import LingoReviewApp
from lingoreview.tui.screens.done import DoneScreen
from lingoreview.tui.screens.review import ReviewScreen


async def settle(app, pilot):
    await app.workers.wait_for_complete()
    await pilot.pause()


def test_review_to_done(gateway):
    """Enter starts, space flips, 3 rates and the done screen appears."""
    gateway.cards = gateway.cards[:1]

    async def scenario():
        app = LingoReviewApp(gateway=gateway)
        async with app.run_test() as pilot:
            await settle(app, pilot)
            controller = app.state.controller
            assert isinstance(app.screen, ReviewScreen)
            assert controller.status is ReviewStatus.READY

            await pilot.press("enter")
            await settle(app, pilot)
            assert controller.status is ReviewStatus.IN_PROGRESS

            await pilot.press("space")
            await settle(app, pilot)
            assert controller.status is ReviewStatus.FLIPPED

            await pilot.press("3")
            await settle(app, pilot)
            assert controller.status is ReviewStatus.COMPLETE
            assert isinstance(app.screen, DoneScreen)

    asyncio.run(scenario())
    assert gateway.count("submit_card_rating") == 1


def test_resume_session_id_used_once(gateway):
    """Only the first controller resumes the deep-linked session."""
    app = LingoReviewApp(gateway=gateway, session_id="s-5")

    first = app.new_controller()
    second = app.new_controller()

    assert first.session_id == "s-5"
    assert second.session_id is None
    assert app.state.controller is second


def test_done_screen_shown_while_summary_loads(gateway):
    """The done screen appears before the summary request returns."""
    gateway.cards = gateway.cards[:1]

    async def scenario():
        gateway.summary_gate = asyncio.Event()
        app = LingoReviewApp(gateway=gateway)
        async with app.run_test() as pilot:
            await settle(app, pilot)
            await pilot.press("enter")
            await settle(app, pilot)
            await pilot.press("space")
            await pilot.pause()

            await pilot.press("3")
            for _ in range(20):
                await pilot.pause()
                if isinstance(app.screen, DoneScreen):
                    break

            controller = app.state.controller
            assert controller.status is ReviewStatus.COMPLETE
            assert isinstance(app.screen, DoneScreen)
            for _ in range(20):
                if gateway.count("get_session_summary"):
                    break
                await pilot.pause()
            assert gateway.count("get_session_summary") == 1
            assert controller.summary is None
            assert controller.summary_loading is True

            gateway.summary_gate.set()
            await settle(app, pilot)
            assert controller.summary == gateway.summary
            assert isinstance(app.screen, DoneScreen)

    asyncio.run(scenario())
    assert gateway.count("get_session_summary") == 1


def test_help_bar_follows_position(gateway):
    """Previous is offered after the first card and skip before the last."""
    gateway.cards = gateway.cards[:2]

    async def scenario():
        app = LingoReviewApp(gateway=gateway)
        async with app.run_test() as pilot:
            await settle(app, pilot)
            await pilot.press("enter")
            await settle(app, pilot)
            screen = app.screen

            help_text = screen._get_help_text()
            assert "previous" not in help_text

            await pilot.press("space")
            await pilot.pause()
            help_text = screen._get_help_text()
            assert "skip" in help_text
            assert "previous" not in help_text

            await pilot.press("right")
            await pilot.press("space")
            await pilot.pause()
            help_text = screen._get_help_text()
            assert "previous" in help_text
            assert "skip" not in help_text

    asyncio.run(scenario())


def test_retry_from_empty(gateway, cards):
    """r reloads when no cards were due."""
    gateway.cards = []

    async def scenario():
        app = LingoReviewApp(gateway=gateway)
        async with app.run_test() as pilot:
            await settle(app, pilot)
            controller = app.state.controller
            assert controller.status is ReviewStatus.EMPTY

            gateway.cards = cards
            await pilot.press("r")
            await settle(app, pilot)
            assert controller.status is ReviewStatus.READY

    asyncio.run(scenario())
    assert gateway.count("list_due_cards") == 2
