from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

from .types import Card


class CardStore:
    """Authoritative card collection for one session.

    Every update builds a new tuple and swaps it in with a single assignment,
    so readers of `cards` only ever see a whole state.

    Rep invariant: ids are unique; matched => face_up.
    """

    def __init__(self, cards: Iterable[Card]) -> None:
        self._cards: tuple[Card, ...] = tuple(cards)
        self._index: dict[int, int] = {c.id: i for i, c in enumerate(self._cards)}
        if len(self._index) != len(self._cards):
            raise ValueError("card ids must be unique")
        self._check_rep()

    @property
    def cards(self) -> tuple[Card, ...]:
        return self._cards

    def __len__(self) -> int:
        return len(self._cards)

    def _check_rep(self) -> None:
        for c in self._cards:
            if c.matched:
                assert c.face_up

    def lookup(self, card_id: int) -> Card | None:
        pos = self._index.get(card_id)
        if pos is None:
            return None
        return self._cards[pos]

    def _replace(self, ids: Sequence[int], change: Callable[[Card], Card]) -> None:
        for card_id in ids:
            if card_id not in self._index:
                raise ValueError(f"unknown card id {card_id}")
        targets = set(ids)
        self._cards = tuple(change(c) if c.id in targets else c for c in self._cards)
        self._check_rep()

    def apply_flip(self, card_id: int) -> None:
        self._replace([card_id], Card.flipped)

    def apply_match(self, ids: Sequence[int]) -> None:
        if len(ids) != 2:
            raise ValueError("apply_match needs exactly two ids")
        self._replace(ids, Card.locked)

    def apply_unflip(self, ids: Sequence[int]) -> None:
        if len(ids) != 2:
            raise ValueError("apply_unflip needs exactly two ids")
        for card_id in ids:
            card = self.lookup(card_id)
            if card is not None and card.matched:
                raise ValueError("cannot flip down a matched card")
        self._replace(ids, Card.hidden)

    def matched_count(self) -> int:
        return sum(1 for c in self._cards if c.matched)
