import asyncio

import pytest

from deckpractice.controllers.feedback_timer import FeedbackTimer
from deckpractice.controllers.practice_controller import PracticeController, PracticeScreen
from deckpractice.domain.value_objects import PracticePhase

from .conftest import DECK_ID

DELAY = 0.05
DEBOUNCE = 0.01


@pytest.fixture
def controller(engine):
    ctrl = PracticeController(
        engine,
        DECK_ID,
        timer=FeedbackTimer(delay_seconds=DELAY, debounce_seconds=DEBOUNCE),
    )
    yield ctrl
    ctrl.close()


async def _wait_feedback():
    await asyncio.sleep(DELAY * 3)


def test_screens_follow_session(controller, engine):
    assert controller.screen == PracticeScreen.START

    assert controller.start([]) is None
    assert controller.screen == PracticeScreen.START

    controller.start(["c1"])
    assert controller.screen == PracticeScreen.PRACTICE
    assert controller.current_card_id == "c1"

    controller.end()
    assert controller.screen == PracticeScreen.COMPLETE


@pytest.mark.asyncio
async def test_correct_answer_shows_feedback_then_advances(controller, engine):
    controller.start(["c1", "c2"])

    result = controller.submit("Hello")

    assert result.is_correct
    assert controller.state.showing_feedback
    assert controller.feedback_pending
    assert engine.get_session(DECK_ID).index == 0

    await _wait_feedback()

    session = engine.get_session(DECK_ID)
    assert session.index == 1
    assert session.results_by_card_id["c1"].correct == 1
    assert controller.current_card_id == "c2"
    assert controller.state.answer == ""


@pytest.mark.asyncio
async def test_wrong_then_retry_records_single_wrong(controller, engine):
    controller.start(["c1", "c2"])

    assert controller.submit("nope").is_correct is False
    assert controller.state.penalized
    assert controller.state.awaiting_retry_choice
    assert not controller.feedback_pending

    assert controller.retry()
    assert controller.submit("hello").is_correct
    assert controller.state.showing_feedback

    await _wait_feedback()

    session = engine.get_session(DECK_ID)
    assert session.current_card_id == "c2"
    assert session.results_by_card_id["c1"].to_dict() == {"correct": 0, "wrong": 1}
    assert session.missed_order == ("c1",)


@pytest.mark.asyncio
async def test_wrong_then_skip_advances_immediately(controller, engine):
    controller.start(["c1", "c2"])
    controller.submit("nope")

    assert controller.skip()

    assert controller.current_card_id == "c2"
    assert engine.get_session(DECK_ID).results_by_card_id["c1"].wrong == 1


def test_skip_and_retry_need_wrong_attempt(controller):
    controller.start(["c1"])

    assert controller.skip() is False
    assert controller.retry() is False


@pytest.mark.asyncio
async def test_duplicate_and_blank_submissions_ignored(controller, engine):
    controller.start(["c1", "c2"])

    assert controller.submit("   ") is None
    controller.submit("nope")
    assert controller.submit("hello") is None

    assert engine.get_session(DECK_ID).results_by_card_id["c1"].wrong == 1


@pytest.mark.asyncio
async def test_continue_key_respects_debounce(controller, engine):
    controller.start(["c1", "c2"])
    controller.submit("hello")

    assert controller.press_continue() is False
    assert engine.get_session(DECK_ID).index == 0

    await asyncio.sleep(DEBOUNCE * 2)
    assert controller.press_continue() is True
    assert engine.get_session(DECK_ID).index == 1

    await _wait_feedback()
    assert engine.get_session(DECK_ID).index == 1


@pytest.mark.asyncio
async def test_last_card_runs_completion_check(controller, engine):
    controller.start(["c1"])
    controller.submit("hello")

    await _wait_feedback()

    assert engine.get_session(DECK_ID).phase == PracticePhase.DONE
    assert controller.screen == PracticeScreen.COMPLETE


@pytest.mark.asyncio
async def test_missed_card_leads_to_summary_and_missed_round(controller, engine):
    controller.start(["c1"])
    controller.submit("nope")
    controller.skip()

    assert controller.screen == PracticeScreen.SUMMARY

    assert controller.continue_round() == PracticePhase.MISSED
    assert controller.screen == PracticeScreen.PRACTICE
    assert controller.current_card_id == "c1"


@pytest.mark.asyncio
async def test_card_removed_during_feedback_cancels_timer(store, engine, sync, controller):
    controller.start(store.get_card_ids(DECK_ID))
    controller.submit("hello")
    assert controller.feedback_pending

    store.delete_card("c1")

    assert not controller.feedback_pending
    assert controller.current_card_id == "c2"
    assert not controller.state.showing_feedback

    await _wait_feedback()

    session = engine.get_session(DECK_ID)
    assert session.index == 0
    assert session.results_by_card_id == {}


@pytest.mark.asyncio
async def test_end_drops_pending_feedback(controller, engine):
    controller.start(["c1", "c2"])
    controller.submit("hello")

    controller.end()
    await _wait_feedback()

    session = engine.get_session(DECK_ID)
    assert session.phase == PracticePhase.DONE
    assert session.results_by_card_id == {}


def test_practice_again_starts_fresh(controller, engine):
    controller.start(["c1"])
    first_id = engine.get_session(DECK_ID).session_id
    controller.end()

    controller.practice_again(["c1", "c2"])

    assert controller.screen == PracticeScreen.PRACTICE
    assert engine.get_session(DECK_ID).session_id != first_id
    assert engine.get_progress(DECK_ID).total == 2


@pytest.mark.asyncio
async def test_answer_edit_during_feedback_keeps_correct_result(store, engine, sync, controller):
    controller.start(store.get_card_ids(DECK_ID))
    assert controller.submit("hello").is_correct

    store.update_card("c1", back="hi")
    assert controller.feedback_pending

    await _wait_feedback()

    session = engine.get_session(DECK_ID)
    assert session.current_card_id == "c2"
    assert session.results_by_card_id["c1"].to_dict() == {"correct": 1, "wrong": 0}
    assert session.missed_order == ()
