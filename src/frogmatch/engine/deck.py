from __future__ import annotations

import logging
import random
from typing import MutableSequence, TypeVar

from .types import DEFAULT_TOKENS, Card, ConfigError, TokenSet

logger = logging.getLogger(__name__)

T = TypeVar("T")


def fisher_yates(rng: random.Random, items: MutableSequence[T]) -> None:
    """Shuffle `items` in place; every permutation is equally likely."""
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]


def clamp_pair_count(pair_count: int, tokens: TokenSet = DEFAULT_TOKENS) -> int:
    if pair_count < 1:
        raise ConfigError(f"pair_count must be at least 1, got {pair_count}")
    available = len(tokens)
    if pair_count > available:
        logger.warning(
            "Requested %d pairs but only %d token types exist; clamping to %d",
            pair_count,
            available,
            available,
        )
        return available
    return pair_count


def build_deck(
    pair_count: int,
    rng: random.Random,
    tokens: TokenSet = DEFAULT_TOKENS,
) -> list[Card]:
    pair_count = clamp_pair_count(pair_count, tokens)
    cards: list[Card] = []
    for index, token in enumerate(tokens.first(pair_count)):
        cards.append(Card(id=index * 2, type=token.type))
        cards.append(Card(id=index * 2 + 1, type=token.type))
    fisher_yates(rng, cards)
    return cards
