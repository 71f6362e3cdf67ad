from __future__ import annotations

import logging
from typing import Callable

from .actions import FlipCardAction
from .game import Event, GameState, StepResult, new_game, step
from .timers import Scheduler
from .types import DEFAULT_TOKENS, DifficultyConfig, GameConfig, TokenSet

logger = logging.getLogger(__name__)

CompletionHook = Callable[[GameState], None]


class MemoryGame:
    """Owns the active session plus the scheduler for its delayed resolutions.

    `new_game()` replaces the session and bumps the generation, so any
    resolution still queued for the old session is dropped when it comes due.
    """

    def __init__(
        self,
        difficulty: str | DifficultyConfig,
        config: GameConfig | None = None,
        tokens: TokenSet = DEFAULT_TOKENS,
        seed: int | None = None,
        on_complete: CompletionHook | None = None,
    ) -> None:
        self.config = config or GameConfig()
        self.tokens = tokens
        self.scheduler = Scheduler()
        self.on_complete = on_complete
        self._generation = 0
        self.state: GameState = new_game(
            difficulty, seed=seed, generation=0, config=self.config, tokens=tokens
        )

    @property
    def generation(self) -> int:
        return self._generation

    def new_game(self, seed: int | None = None) -> GameState:
        self._generation += 1
        self.state = new_game(
            self.state.difficulty,
            seed=seed,
            generation=self._generation,
            config=self.config,
            tokens=self.tokens,
        )
        logger.info(
            "New %s game (generation %d, seed %d)",
            self.state.difficulty.name,
            self._generation,
            self.state.seed,
        )
        return self.state

    def click(self, card_id: int, now_ms: int) -> StepResult:
        res = step(self.state, FlipCardAction(card_id=card_id), now_ms)
        if res.scheduled is not None:
            self.scheduler.schedule(now_ms, res.delay_ms, res.scheduled)
        return res

    def tick(self, now_ms: int) -> list[Event]:
        """Run resolutions that are due, then refresh the elapsed time."""
        events: list[Event] = []
        for task in self.scheduler.pop_due(now_ms):
            state = self.state
            if task.action.generation != state.generation:
                logger.debug("Discarding resolution queued by generation %d", task.action.generation)
                continue
            # run at the due time so elapsed time does not depend on frame rate
            res = step(state, task.action, task.due_ms)
            if not res.ok:
                continue
            events.extend(res.events)
            if any(ev.get("type") == "GAME_WON" for ev in res.events):
                self._complete(state)
        self.state.session.tick(now_ms)
        return events

    def _complete(self, state: GameState) -> None:
        if self.on_complete is not None:
            self.on_complete(state)
