import asyncio

import pytest

from deckpractice.controllers.feedback_timer import FeedbackTimer

DELAY = 0.05
DEBOUNCE = 0.01


@pytest.fixture
def timer():
    t = FeedbackTimer(delay_seconds=DELAY, debounce_seconds=DEBOUNCE)
    yield t
    t.cancel()


@pytest.mark.asyncio
async def test_fires_once_after_delay(timer):
    calls = []
    timer.start(lambda: calls.append("fired"))

    assert timer.is_pending
    await asyncio.sleep(DELAY * 3)

    assert calls == ["fired"]
    assert not timer.is_pending


@pytest.mark.asyncio
async def test_cancelled_callback_never_fires(timer):
    calls = []
    timer.start(lambda: calls.append("fired"))
    timer.cancel()

    await asyncio.sleep(DELAY * 3)

    assert calls == []
    assert not timer.is_pending


@pytest.mark.asyncio
async def test_restart_replaces_pending_callback(timer):
    calls = []
    timer.start(lambda: calls.append("first"))
    timer.start(lambda: calls.append("second"))

    await asyncio.sleep(DELAY * 3)

    assert calls == ["second"]


@pytest.mark.asyncio
async def test_skip_ignored_during_debounce(timer):
    calls = []
    timer.start(lambda: calls.append("fired"))

    assert timer.skip() is False
    assert calls == []
    assert timer.is_pending


@pytest.mark.asyncio
async def test_skip_runs_now_and_suppresses_timer(timer):
    calls = []
    timer.start(lambda: calls.append("fired"))
    await asyncio.sleep(DEBOUNCE * 2)

    assert timer.can_skip
    assert timer.skip() is True
    assert calls == ["fired"]

    await asyncio.sleep(DELAY * 3)
    assert calls == ["fired"]


@pytest.mark.asyncio
async def test_skip_without_pending_callback(timer):
    assert timer.skip() is False


def test_start_requires_running_loop(timer):
    with pytest.raises(RuntimeError):
        timer.start(lambda: None)
