from __future__ import annotations

import traceback

import pygame  # type: ignore[import-not-found]

from frogmatch.engine.types import ConfigError
from frogmatch.services.content import ContentError

from ..app import GameContext
from ..scene_base import SceneTransition
from ..ui import Button, draw_text
from .board import BoardScene
from .main_menu import MainMenuScene


class BootScene:
    def __init__(self, ctx: GameContext) -> None:
        self.ctx = ctx
        self._did_boot = False
        self._error: str | None = None
        self._quit_button: Button | None = None

    def handle_event(self, event: pygame.event.Event) -> None:
        if self._quit_button is not None:
            self._quit_button.handle_event(event)

    def update(self, dt: float) -> SceneTransition | None:
        if self._did_boot:
            return None
        self._did_boot = True
        try:
            self.ctx.content.validate_all()
            self.ctx.tokens = self.ctx.content.load_tokens()
            self.ctx.difficulties = self.ctx.content.load_difficulties(self.ctx.tokens)
            self.ctx.completion_schema = self.ctx.content.load_completion_schema()
            self.ctx.telemetry.log("boot", {"ok": True})

            if self.ctx.requested_difficulty is not None:
                difficulty = self.ctx.difficulties.get(self.ctx.requested_difficulty)
                return SceneTransition(BoardScene(self.ctx, difficulty))
            return SceneTransition(MainMenuScene(self.ctx))
        except (ContentError, ConfigError) as e:
            tb = traceback.format_exc(limit=8)
            self._error = f"{e}\n\n{tb}"
            self.ctx.telemetry.log("boot", {"ok": False, "error": str(e)})
            self._quit_button = Button(
                rect=pygame.Rect(20, 820, 140, 44),
                text="Quit",
                on_click=lambda: pygame.event.post(pygame.event.Event(pygame.QUIT)),
            )
            return None

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((10, 30, 12))
        fonts = self.ctx.assets.fonts
        draw_text(screen, fonts.big, "Frog Memory Game", (20, 20))

        if self._error is None:
            draw_text(screen, fonts.ui, "Loading frogs...", (20, 80))
        else:
            draw_text(screen, fonts.ui, "BOOT ERROR", (20, 80), color=(240, 80, 80))
            y = 120
            for line in self._error.splitlines()[:30]:
                draw_text(screen, fonts.small, line[:110], (20, y), color=(230, 230, 230))
                y += 18
            if self._quit_button is not None:
                self._quit_button.draw(screen, fonts.ui)
