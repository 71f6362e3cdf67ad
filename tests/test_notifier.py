from __future__ import annotations

import pytest

from frogmatch.engine.actions import FlipCardAction
from frogmatch.engine.game import GameState, new_game, step
from frogmatch.engine.serialize import completion_event
from frogmatch.paths import get_paths
from frogmatch.services.content import ContentError, ContentService
from frogmatch.services.notifier import CompletionNotifier, RecordingSink
from frogmatch.services.telemetry import TelemetryService, TelemetrySink


def _won_state(difficulty: str = "easy", seed: int = 5) -> GameState:
    """Plays a perfect game: every pair found on the first try."""
    state = new_game(difficulty, seed=seed)
    by_type: dict[str, list[int]] = {}
    for c in state.store.cards:
        by_type.setdefault(c.type, []).append(c.id)
    now = 0
    for first, second in by_type.values():
        step(state, FlipCardAction(card_id=first), now)
        res = step(state, FlipCardAction(card_id=second), now + 100)
        assert res.scheduled is not None
        now += 100 + res.delay_ms
        step(state, res.scheduled, now)
    assert state.won
    return state


def _schema() -> object:
    paths = get_paths()
    return ContentService(paths.data_dir, paths.schema_dir).load_completion_schema()


def test_completion_payload() -> None:
    state = _won_state()
    event = completion_event(state)
    assert event["type"] == "BLOCK_COMPLETION"
    assert event["blockId"] == "68532f6d157dfa0de308d1e4"
    assert event["completed"] is True
    assert event["maxScore"] == 1000
    assert event["data"] == {"moves": 6, "pairs": 6, "difficulty": "easy"}
    assert event["timeSpent"] == state.session.elapsed_ms
    assert event["score"] == 1000 - 60 - state.session.elapsed_ms // 1000


def test_completion_event_needs_won_session() -> None:
    with pytest.raises(ValueError):
        completion_event(new_game("easy", seed=1))


def test_notifier_fires_once_to_both_scopes() -> None:
    own, parent = RecordingSink(), RecordingSink()
    notifier = CompletionNotifier(self_sink=own, parent_sink=parent, schema=_schema())
    state = _won_state()

    assert notifier.notify(state) is not None
    assert notifier.notify(state) is None
    assert notifier(state) is None
    assert len(own.events) == 1
    assert len(parent.events) == 1
    assert notifier.has_fired(state.generation)


def test_notifier_ignores_unfinished_session() -> None:
    own = RecordingSink()
    notifier = CompletionNotifier(self_sink=own)
    assert notifier.notify(new_game("easy", seed=2)) is None
    assert own.events == []


def test_schema_rejects_bad_event() -> None:
    own = RecordingSink()
    notifier = CompletionNotifier(self_sink=own, schema={"type": "object", "required": ["nope"]})
    with pytest.raises(ContentError):
        notifier.notify(_won_state())
    assert own.events == []


def test_telemetry_sink_writes_jsonl(tmp_path) -> None:
    telemetry = TelemetryService(tmp_path / "logs" / "events.jsonl")
    notifier = CompletionNotifier(
        self_sink=TelemetrySink(telemetry, scope="self"),
        parent_sink=TelemetrySink(telemetry, scope="parent"),
    )
    notifier.notify(_won_state("medium", seed=9))

    records = telemetry.read_all()
    assert [r["payload"]["scope"] for r in records] == ["self", "parent"]
    assert all(r["type"] == "completion" for r in records)
    assert records[0]["payload"]["event"]["data"]["pairs"] == 8
