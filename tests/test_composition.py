import json

import pytest

from deckpractice.composition import (
    create_deck_store,
    create_feedback_timer,
    create_practice_controller,
    create_practice_engine,
    create_practice_sync,
)
from deckpractice.controllers.practice_controller import PracticeScreen
from deckpractice.domain.constants import FEEDBACK_DELAY_MS, SKIP_DEBOUNCE_MS


@pytest.fixture
def seed_file(tmp_path):
    path = tmp_path / "decks.json"
    path.write_text(
        json.dumps(
            {
                "decks": [{"id": "d", "name": "D", "card_ids": ["x", "y"]}],
                "cards": [
                    {"id": "x", "front": "un", "back": "one"},
                    {"id": "y", "front": "deux", "back": "two"},
                ],
            }
        ),
        encoding="utf-8",
    )
    return path


def test_feedback_timer_defaults(monkeypatch):
    monkeypatch.delenv("FEEDBACK_DELAY_SECONDS", raising=False)
    monkeypatch.delenv("SKIP_DEBOUNCE_SECONDS", raising=False)

    timer = create_feedback_timer()

    assert timer.delay_seconds == FEEDBACK_DELAY_MS / 1000
    assert timer.debounce_seconds == SKIP_DEBOUNCE_MS / 1000


def test_practice_controller_uses_configured_timing(monkeypatch, seed_file):
    monkeypatch.setenv("DECK_DATA_PATH", str(seed_file))
    monkeypatch.setenv("PRACTICE_SHUFFLE", "false")
    monkeypatch.setenv("FEEDBACK_DELAY_SECONDS", "0.5")
    monkeypatch.setenv("SKIP_DEBOUNCE_SECONDS", "0.02")

    store = create_deck_store()
    engine = create_practice_engine(store)
    controller = create_practice_controller(engine, "d")

    assert controller._timer.delay_seconds == 0.5
    assert controller._timer.debounce_seconds == 0.02

    controller.start(store.get_card_ids("d"))
    assert controller.screen == PracticeScreen.PRACTICE
    assert engine.get_session("d").queue == ("x", "y")
    controller.close()


def test_practice_sync_is_attached(monkeypatch, seed_file):
    monkeypatch.setenv("DECK_DATA_PATH", str(seed_file))
    monkeypatch.setenv("PRACTICE_SHUFFLE", "false")

    store = create_deck_store()
    engine = create_practice_engine(store)
    sync = create_practice_sync(store, engine)
    engine.start_session("d", store.get_card_ids("d"))

    store.delete_card("x")

    assert sync.is_attached
    assert engine.get_session("d").queue == ("y",)
    sync.detach()
