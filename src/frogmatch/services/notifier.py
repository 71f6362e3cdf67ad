from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping, Protocol

from frogmatch.engine.game import GameState
from frogmatch.engine.serialize import completion_event

from .content import validate_json

logger = logging.getLogger(__name__)


class EventSink(Protocol):
    def post(self, event: Mapping[str, object]) -> None: ...


@dataclass
class RecordingSink:
    """In-memory sink; handy as the "self" scope when no host is attached."""

    events: list[dict[str, object]] = field(default_factory=list)

    def post(self, event: Mapping[str, object]) -> None:
        self.events.append(dict(event))


class CompletionNotifier:
    """Sends the completion event once per session, to both delivery scopes.

    Either scope may be the one the host listens on, so the same event goes
    to `self_sink` and then to `parent_sink` when there is one.
    """

    def __init__(
        self,
        self_sink: EventSink,
        parent_sink: EventSink | None = None,
        schema: object | None = None,
    ) -> None:
        self.self_sink = self_sink
        self.parent_sink = parent_sink
        self.schema = schema
        self._fired: set[int] = set()

    def has_fired(self, generation: int) -> bool:
        return generation in self._fired

    def __call__(self, state: GameState) -> dict[str, object] | None:
        return self.notify(state)

    def notify(self, state: GameState) -> dict[str, object] | None:
        """Returns the event if it was sent now, None if nothing was sent."""
        if not state.session.won:
            return None
        if state.generation in self._fired:
            return None

        event = completion_event(state)
        if self.schema is not None:
            validate_json(event, self.schema, context="completion event")

        self._fired.add(state.generation)
        logger.info(
            "Session %d complete: score=%s moves=%s time=%sms",
            state.generation,
            event["score"],
            state.session.moves,
            event["timeSpent"],
        )
        self.self_sink.post(event)
        if self.parent_sink is not None:
            self.parent_sink.post(event)
        return event
