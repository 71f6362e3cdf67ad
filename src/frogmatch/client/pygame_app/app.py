from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import pygame  # type: ignore[import-not-found]

from frogmatch.engine.types import GameConfig, TokenSet
from frogmatch.paths import Paths
from frogmatch.services.content import ContentService, DifficultyCatalog
from frogmatch.services.notifier import EventSink
from frogmatch.services.telemetry import TelemetryService

from .asset_manager import AssetManager
from .scene_base import Scene


@dataclass
class GameContext:
    screen: pygame.Surface
    clock: pygame.time.Clock
    paths: Paths
    assets: AssetManager
    content: ContentService
    telemetry: TelemetryService
    config: GameConfig = field(default_factory=GameConfig)
    seed: Optional[int] = None
    requested_difficulty: Optional[str] = None
    # Completion event delivery scopes (self, enclosing host)
    self_sink: Optional[EventSink] = None
    parent_sink: Optional[EventSink] = None

    # Loaded at boot
    tokens: Optional[TokenSet] = None
    difficulties: Optional[DifficultyCatalog] = None
    completion_schema: Optional[object] = None


class App:
    def __init__(self, ctx: GameContext, initial_scene: Scene) -> None:
        self.ctx = ctx
        self.scene: Scene = initial_scene
        self.running = True

    def run(self) -> int:
        while self.running:
            dt = self.ctx.clock.tick(60) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                    break
                self.scene.handle_event(event)

            tr = self.scene.update(dt)
            if tr is not None:
                self.scene = tr.next_scene

            self.scene.render(self.ctx.screen)
            pygame.display.flip()

        return 0
