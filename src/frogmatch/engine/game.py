from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Iterable, Literal

from .actions import Action, FlipCardAction, ResolveAction
from .deck import build_deck
from .session import SessionTracker
from .store import CardStore
from .types import (
    DEFAULT_DIFFICULTY,
    DEFAULT_TOKENS,
    DifficultyConfig,
    GameConfig,
    TokenSet,
    get_difficulty,
)

logger = logging.getLogger(__name__)

Event = dict[str, object]
TurnPhase = Literal["idle", "one_selected", "resolving"]


@dataclass
class StepResult:
    ok: bool
    events: list[Event]
    error: str | None = None
    # Set when a pair was just formed; the caller runs it after `delay_ms`.
    scheduled: ResolveAction | None = None
    delay_ms: int = 0


@dataclass
class GameState:
    """Everything one session owns. A new game builds a new GameState."""

    difficulty: DifficultyConfig
    config: GameConfig
    tokens: TokenSet
    seed: int
    generation: int
    store: CardStore
    session: SessionTracker
    selection: list[int] = field(default_factory=list)
    action_log: list[tuple[int, Action]] = field(default_factory=list)
    event_log: list[Event] = field(default_factory=list)

    @property
    def phase(self) -> TurnPhase:
        if len(self.selection) == 2:
            return "resolving"
        if len(self.selection) == 1:
            return "one_selected"
        return "idle"

    @property
    def won(self) -> bool:
        return self.session.won


def _reject(error: str) -> StepResult:
    return StepResult(ok=False, events=[], error=error)


def _flip(state: GameState, action: FlipCardAction, now_ms: int) -> StepResult:
    card = state.store.lookup(action.card_id)
    if card is None:
        return _reject("Unknown card.")
    if card.matched:
        return _reject("Card already matched.")
    if card.face_up:
        return _reject("Card already face up.")
    if len(state.selection) >= 2:
        return _reject("Selection full.")

    before = len(state.event_log)
    if state.session.start(now_ms):
        state.event_log.append({"type": "GAME_STARTED", "at_ms": now_ms})

    state.store.apply_flip(card.id)
    state.selection.append(card.id)
    state.event_log.append({"type": "CARD_FLIPPED", "card_id": card.id, "card_type": card.type})

    if len(state.selection) < 2:
        return StepResult(ok=True, events=state.event_log[before:])

    # A move counts when the pair is formed, not when it resolves.
    state.session.on_move()
    first_id, second_id = state.selection
    first = state.store.lookup(first_id)
    second = state.store.lookup(second_id)
    assert first is not None and second is not None
    if first.type == second.type:
        outcome, delay = "match", state.config.match_delay_ms
    else:
        outcome, delay = "mismatch", state.config.mismatch_delay_ms
    state.event_log.append(
        {
            "type": "PAIR_SELECTED",
            "ids": [first_id, second_id],
            "outcome": outcome,
            "moves": state.session.moves,
        }
    )
    pending = ResolveAction(
        generation=state.generation,
        first_id=first_id,
        second_id=second_id,
        outcome=outcome,
    )
    return StepResult(ok=True, events=state.event_log[before:], scheduled=pending, delay_ms=delay)


def _resolve(state: GameState, action: ResolveAction, now_ms: int) -> StepResult:
    if action.generation != state.generation:
        logger.debug(
            "Dropping resolution from generation %d (current %d)",
            action.generation,
            state.generation,
        )
        return _reject("Stale resolution.")
    if state.selection != list(action.ids):
        return _reject("Resolution does not match the current selection.")

    before = len(state.event_log)
    if action.outcome == "match":
        state.store.apply_match(action.ids)
        state.event_log.append({"type": "PAIR_MATCHED", "ids": list(action.ids)})
        if state.session.on_match(now_ms):
            state.event_log.append(
                {
                    "type": "GAME_WON",
                    "moves": state.session.moves,
                    "elapsed_ms": state.session.elapsed_ms,
                    "score": state.session.score,
                }
            )
    else:
        state.store.apply_unflip(action.ids)
        state.event_log.append({"type": "PAIR_HIDDEN", "ids": list(action.ids)})
    state.selection = []
    return StepResult(ok=True, events=state.event_log[before:])


def step(state: GameState, action: Action, now_ms: int) -> StepResult:
    """Apply one action to the session.

    Mutates `state` in place; deterministic for a given
    (seed, difficulty, timed action sequence).
    """
    state.action_log.append((now_ms, action))

    if isinstance(action, FlipCardAction):
        return _flip(state, action, now_ms)
    if isinstance(action, ResolveAction):
        return _resolve(state, action, now_ms)
    return _reject("Unknown action.")


def tick(state: GameState, now_ms: int) -> None:
    state.session.tick(now_ms)


def new_game(
    difficulty: str | DifficultyConfig = DEFAULT_DIFFICULTY,
    seed: int | None = None,
    generation: int = 0,
    config: GameConfig | None = None,
    tokens: TokenSet = DEFAULT_TOKENS,
) -> GameState:
    cfg = config or GameConfig()
    diff = get_difficulty(difficulty) if isinstance(difficulty, str) else difficulty
    if seed is None:
        seed = random.randrange(1, 2**31 - 1)
    rng = random.Random(seed)
    cards = build_deck(diff.pair_count, rng, tokens)
    pair_count = len(cards) // 2
    return GameState(
        difficulty=diff,
        config=cfg,
        tokens=tokens,
        seed=seed,
        generation=generation,
        store=CardStore(cards),
        session=SessionTracker(pair_count=pair_count, config=cfg),
    )


def replay(
    difficulty: str | DifficultyConfig,
    seed: int,
    actions: Iterable[tuple[int, Action]],
    generation: int = 0,
    config: GameConfig | None = None,
    tokens: TokenSet = DEFAULT_TOKENS,
) -> GameState:
    state = new_game(difficulty, seed=seed, generation=generation, config=config, tokens=tokens)
    for now_ms, a in actions:
        step(state, a, now_ms)
    return state
