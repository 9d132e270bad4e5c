from deckpractice.domain.value_objects import PracticePhase

from .conftest import DECK_ID


def test_delete_current_card_shifts_session(store, engine, sync):
    engine.start_session(DECK_ID, store.get_card_ids(DECK_ID))

    store.delete_card("c1")

    session = engine.get_session(DECK_ID)
    assert session.queue == ("c2", "c3")
    assert session.current_card_id == "c2"


def test_edit_without_shape_change_keeps_session(store, engine, sync):
    engine.start_session(DECK_ID, store.get_card_ids(DECK_ID))
    before = engine.get_session(DECK_ID)

    store.update_card("c1", back="hi")

    assert engine.get_session(DECK_ID) is before
    assert engine.submit_answer(DECK_ID, "hi").is_correct


def test_deleting_last_unanswered_card_completes_round(store, engine, sync):
    engine.start_session(DECK_ID, store.get_card_ids(DECK_ID))
    engine.submit_answer(DECK_ID, "wrong")
    engine.submit_answer(DECK_ID, "thank you")

    store.delete_card("c3")

    assert engine.get_session(DECK_ID).phase == PracticePhase.SUMMARY


def test_deleting_every_card_ends_session(store, engine, sync):
    engine.start_session(DECK_ID, store.get_card_ids(DECK_ID))
    engine.submit_answer(DECK_ID, "wrong")

    for card_id in ["c1", "c2", "c3"]:
        store.delete_card(card_id)

    session = engine.get_session(DECK_ID)
    assert session.queue == ()
    assert session.phase == PracticePhase.DONE


def test_other_decks_untouched(store, engine, sync):
    engine.start_session("deck_es", ["c4"])
    before = engine.get_session("deck_es")

    store.delete_card("c1")

    assert engine.get_session("deck_es") is before
    assert engine.get_session(DECK_ID) is None


def test_detach_stops_rehydration(store, engine, sync):
    engine.start_session(DECK_ID, store.get_card_ids(DECK_ID))
    sync.detach()

    store.delete_card("c1")

    assert not sync.is_attached
    assert engine.get_session(DECK_ID).queue == ("c1", "c2", "c3")
