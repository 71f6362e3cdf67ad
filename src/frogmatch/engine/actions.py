from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Outcome = Literal["match", "mismatch"]


@dataclass(frozen=True)
class FlipCardAction:
    card_id: int


@dataclass(frozen=True)
class ResolveAction:
    """Delayed outcome of a two-card turn, tagged with the session generation."""

    generation: int
    first_id: int
    second_id: int
    outcome: Outcome

    @property
    def ids(self) -> tuple[int, int]:
        return (self.first_id, self.second_id)


Action = FlipCardAction | ResolveAction
