"""Deterministic, headless engine for the frog memory-matching game.

IMPORTANT: This package must never import pygame.
"""

from .actions import FlipCardAction, ResolveAction
from .deck import build_deck
from .game import GameState, StepResult, new_game, step
from .runtime import MemoryGame
from .session import compute_score
from .store import CardStore
from .types import Card, ConfigError, DifficultyConfig, GameConfig, TokenType

__all__ = [
    "Card",
    "CardStore",
    "ConfigError",
    "DifficultyConfig",
    "FlipCardAction",
    "GameConfig",
    "GameState",
    "MemoryGame",
    "ResolveAction",
    "StepResult",
    "TokenType",
    "build_deck",
    "compute_score",
    "new_game",
    "step",
]
