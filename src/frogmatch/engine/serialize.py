from __future__ import annotations

from .actions import Action, FlipCardAction, ResolveAction
from .game import GameState
from .types import Card


def action_to_dict(a: Action) -> dict[str, object]:
    if isinstance(a, FlipCardAction):
        return {"type": "flip", "card_id": a.card_id}
    if isinstance(a, ResolveAction):
        return {
            "type": "resolve",
            "generation": a.generation,
            "ids": [a.first_id, a.second_id],
            "outcome": a.outcome,
        }
    # should be unreachable
    return {"type": "unknown"}


def _card_to_dict(c: Card) -> dict[str, object]:
    return {"id": c.id, "type": c.type, "face_up": c.face_up, "matched": c.matched}


def snapshot(state: GameState) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of the current session."""
    s = state.session
    return {
        "seed": state.seed,
        "generation": state.generation,
        "difficulty": state.difficulty.name,
        "cards": [_card_to_dict(c) for c in state.store.cards],
        "selection": list(state.selection),
        "phase": state.phase,
        "session": {
            "moves": s.moves,
            "matched_pairs": s.matched_pairs,
            "pair_count": s.pair_count,
            "started": s.started,
            "won": s.won,
            "elapsed_ms": s.elapsed_ms,
            "score": s.score,
        },
        "action_log": [{"at_ms": t, **action_to_dict(a)} for t, a in state.action_log],
    }


def completion_event(state: GameState) -> dict[str, object]:
    """Build the outbound completion payload for a won session."""
    s = state.session
    if not s.won or s.score is None:
        raise ValueError("completion event requires a won session")
    return {
        "type": "BLOCK_COMPLETION",
        "blockId": state.config.content_id,
        "completed": True,
        "score": s.score,
        "maxScore": state.config.max_score,
        "timeSpent": s.elapsed_ms,
        "data": {
            "moves": s.moves,
            "pairs": s.pair_count,
            "difficulty": state.difficulty.name,
        },
    }
