from __future__ import annotations

from dataclasses import dataclass

from .types import GameConfig


def compute_score(moves: int, elapsed_ms: int, config: GameConfig | None = None) -> int:
    """Base score minus per-move and per-second penalties, floored at the minimum."""
    cfg = config or GameConfig()
    raw = cfg.base_score - moves * cfg.move_penalty - (elapsed_ms // 1000) * cfg.second_penalty
    return max(raw, cfg.min_score)


@dataclass
class SessionTracker:
    pair_count: int
    config: GameConfig
    moves: int = 0
    matched_pairs: int = 0
    started: bool = False
    won: bool = False
    start_ms: int = 0
    elapsed_ms: int = 0
    score: int | None = None

    def start(self, now_ms: int) -> bool:
        """Marks the session started; returns False if it already was."""
        if self.started:
            return False
        self.started = True
        self.start_ms = now_ms
        return True

    def on_move(self) -> None:
        self.moves += 1

    def tick(self, now_ms: int) -> None:
        if self.started and not self.won:
            self.elapsed_ms = max(0, now_ms - self.start_ms)

    def on_match(self, now_ms: int | None = None) -> bool:
        """Counts a matched pair. Returns True only on the call that wins the game."""
        if self.won:
            return False
        if now_ms is not None:
            self.tick(now_ms)
        self.matched_pairs = min(self.pair_count, self.matched_pairs + 1)
        if self.matched_pairs == self.pair_count:
            self.won = True
            self.score = compute_score(self.moves, self.elapsed_ms, self.config)
            return True
        return False

    def current_score(self) -> int:
        if self.score is not None:
            return self.score
        return compute_score(self.moves, self.elapsed_ms, self.config)


def format_elapsed(ms: int) -> str:
    """M:SS, as shown on the timer and the win banner."""
    seconds = max(0, ms) // 1000
    return f"{seconds // 60}:{seconds % 60:02d}"
