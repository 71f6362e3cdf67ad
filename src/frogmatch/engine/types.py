from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Literal

Difficulty = Literal["easy", "medium", "hard"]
Color = tuple[int, int, int]


class ConfigError(RuntimeError):
    pass


@dataclass(frozen=True)
class TokenType:
    type: str
    glyph: str
    color: Color

    @property
    def display_name(self) -> str:
        return self.type[:1].upper() + self.type[1:] + " Frog"


@dataclass(frozen=True)
class Card:
    id: int
    type: str
    face_up: bool = False
    matched: bool = False

    def flipped(self) -> "Card":
        return replace(self, face_up=True)

    def hidden(self) -> "Card":
        return replace(self, face_up=False)

    def locked(self) -> "Card":
        # matched cards are always shown face up
        return replace(self, face_up=True, matched=True)


@dataclass(frozen=True)
class DifficultyConfig:
    name: str
    pair_count: int
    grid_columns: int


@dataclass(frozen=True)
class GameConfig:
    match_delay_ms: int = 500
    mismatch_delay_ms: int = 1000
    tick_interval_ms: int = 100
    base_score: int = 1000
    move_penalty: int = 10
    second_penalty: int = 1
    min_score: int = 100
    max_score: int = 1000
    content_id: str = "68532f6d157dfa0de308d1e4"


FROG_TOKENS: tuple[TokenType, ...] = (
    TokenType(type="tree", glyph="🐸", color=(76, 175, 80)),
    TokenType(type="poison", glyph="🐸", color=(156, 39, 176)),
    TokenType(type="bull", glyph="🐸", color=(121, 85, 72)),
    TokenType(type="glass", glyph="🐸", color=(3, 218, 198)),
    TokenType(type="fire", glyph="🐸", color=(255, 87, 34)),
    TokenType(type="ice", glyph="🐸", color=(3, 169, 244)),
    TokenType(type="golden", glyph="🐸", color=(255, 215, 0)),
    TokenType(type="spotted", glyph="🐸", color=(139, 195, 74)),
)

DIFFICULTIES: dict[str, DifficultyConfig] = {
    "easy": DifficultyConfig(name="easy", pair_count=6, grid_columns=4),
    "medium": DifficultyConfig(name="medium", pair_count=8, grid_columns=4),
    "hard": DifficultyConfig(name="hard", pair_count=8, grid_columns=4),
}

DEFAULT_DIFFICULTY = "medium"


def get_difficulty(
    name: str, table: dict[str, DifficultyConfig] | None = None
) -> DifficultyConfig:
    options = table if table is not None else DIFFICULTIES
    try:
        return options[name]
    except KeyError:
        raise ConfigError(
            f"Unknown difficulty {name!r} (expected one of: {', '.join(sorted(options))})"
        ) from None


@dataclass(frozen=True)
class TokenSet:
    """Fixed, ordered set of token types a deck is drawn from."""

    tokens: tuple[TokenType, ...]

    def __len__(self) -> int:
        return len(self.tokens)

    def get(self, token_type: str) -> TokenType:
        for t in self.tokens:
            if t.type == token_type:
                return t
        raise KeyError(token_type)

    def first(self, count: int) -> Sequence[TokenType]:
        return self.tokens[:count]


DEFAULT_TOKENS = TokenSet(tokens=FROG_TOKENS)
