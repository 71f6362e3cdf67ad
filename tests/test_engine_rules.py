from __future__ import annotations

from frogmatch.engine.actions import FlipCardAction, ResolveAction
from frogmatch.engine.game import GameState, step
from frogmatch.engine.session import SessionTracker
from frogmatch.engine.store import CardStore
from frogmatch.engine.types import DEFAULT_TOKENS, Card, DifficultyConfig, GameConfig


def _fixed_state(types: list[str], generation: int = 0) -> GameState:
    """Session whose deck is laid out exactly as given (id == position)."""
    cfg = GameConfig()
    pairs = len(types) // 2
    return GameState(
        difficulty=DifficultyConfig(name="easy", pair_count=pairs, grid_columns=4),
        config=cfg,
        tokens=DEFAULT_TOKENS,
        seed=0,
        generation=generation,
        store=CardStore(Card(id=i, type=t) for i, t in enumerate(types)),
        session=SessionTracker(pair_count=pairs, config=cfg),
    )


def _abab() -> GameState:
    return _fixed_state(["tree", "poison", "tree", "poison"])


def _check_invariants(state: GameState) -> None:
    assert len(state.selection) <= 2
    for c in state.store.cards:
        if c.matched:
            assert c.face_up


def test_full_happy_path() -> None:
    state = _abab()

    res = step(state, FlipCardAction(card_id=0), 0)
    assert res.ok
    assert res.scheduled is None
    assert state.selection == [0]
    assert state.phase == "one_selected"
    assert state.session.started

    res = step(state, FlipCardAction(card_id=2), 100)
    assert res.ok
    assert state.selection == [0, 2]
    assert state.session.moves == 1
    assert state.phase == "resolving"
    assert res.scheduled == ResolveAction(generation=0, first_id=0, second_id=2, outcome="match")
    assert res.delay_ms == 500

    res = step(state, res.scheduled, 600)
    assert res.ok
    assert state.session.matched_pairs == 1
    assert state.selection == []
    assert state.phase == "idle"
    _check_invariants(state)

    step(state, FlipCardAction(card_id=1), 700)
    assert state.selection == [1]
    res = step(state, FlipCardAction(card_id=3), 800)
    assert state.selection == [1, 3]
    assert state.session.moves == 2
    assert res.scheduled is not None

    res = step(state, res.scheduled, 1300)
    assert state.session.matched_pairs == 2
    assert state.won
    assert state.session.moves == 2
    assert state.session.score == 1000 - 2 * 10 - 1
    assert [e["type"] for e in res.events] == ["PAIR_MATCHED", "GAME_WON"]
    assert all(c.matched and c.face_up for c in state.store.cards)


def test_mismatch_recovery() -> None:
    state = _abab()
    step(state, FlipCardAction(card_id=0), 0)
    res = step(state, FlipCardAction(card_id=1), 50)
    assert state.session.moves == 1
    assert res.scheduled is not None
    assert res.scheduled.outcome == "mismatch"
    assert res.delay_ms == 1000

    step(state, res.scheduled, 1050)
    assert state.selection == []
    assert all(not c.face_up for c in state.store.cards)
    assert state.session.matched_pairs == 0

    res = step(state, FlipCardAction(card_id=0), 1100)
    assert res.ok
    assert state.selection == [0]


def test_third_click_rejected_while_resolving() -> None:
    state = _abab()
    step(state, FlipCardAction(card_id=0), 0)
    step(state, FlipCardAction(card_id=1), 10)
    cards_before = state.store.cards

    res = step(state, FlipCardAction(card_id=2), 20)
    assert not res.ok
    assert res.error == "Selection full."
    assert state.selection == [0, 1]
    assert state.store.cards is cards_before
    assert state.session.moves == 1


def test_invalid_clicks_are_noops() -> None:
    state = _abab()
    res = step(state, FlipCardAction(card_id=99), 0)
    assert not res.ok and res.error == "Unknown card."
    assert not state.session.started

    step(state, FlipCardAction(card_id=0), 10)
    res = step(state, FlipCardAction(card_id=0), 20)
    assert not res.ok and res.error == "Card already face up."
    assert state.selection == [0]

    res = step(state, FlipCardAction(card_id=2), 30)
    assert res.scheduled is not None
    step(state, res.scheduled, 530)
    res = step(state, FlipCardAction(card_id=2), 600)
    assert not res.ok and res.error == "Card already matched."
    assert state.selection == []
    _check_invariants(state)


def test_start_time_comes_from_first_accepted_click() -> None:
    state = _abab()
    step(state, FlipCardAction(card_id=1), 2_000)
    assert state.session.start_ms == 2_000
    step(state, FlipCardAction(card_id=3), 2_500)
    assert state.session.start_ms == 2_000


def test_resolution_from_other_generation_is_ignored() -> None:
    state = _fixed_state(["tree", "poison", "tree", "poison"], generation=3)
    step(state, FlipCardAction(card_id=0), 0)
    step(state, FlipCardAction(card_id=2), 10)

    stale = ResolveAction(generation=2, first_id=0, second_id=2, outcome="match")
    res = step(state, stale, 600)
    assert not res.ok
    assert res.error == "Stale resolution."
    assert state.selection == [0, 2]
    assert state.session.matched_pairs == 0


def test_won_session_ignores_further_resolutions() -> None:
    state = _fixed_state(["tree", "tree"])
    step(state, FlipCardAction(card_id=0), 0)
    res = step(state, FlipCardAction(card_id=1), 10)
    assert res.scheduled is not None
    step(state, res.scheduled, 510)
    assert state.won
    score = state.session.score

    again = step(state, res.scheduled, 9_000)
    assert not again.ok
    assert state.session.score == score
    assert state.session.matched_pairs == 1
