from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from frogmatch.engine.types import DifficultyConfig

from ..app import GameContext
from ..scene_base import SceneTransition
from ..ui import BACKGROUND, Button, draw_text, draw_text_centered
from .board import BoardScene


class MainMenuScene:
    def __init__(self, ctx: GameContext) -> None:
        self.ctx = ctx
        self._next: SceneTransition | None = None
        self._buttons: list[Button] = []
        self._build_ui()

    def _build_ui(self) -> None:
        assert self.ctx.difficulties is not None
        w, h, gap = 320, 56, 14
        x = (self.ctx.screen.get_width() - w) // 2
        y = 220

        for i, diff in enumerate(self.ctx.difficulties.options.values()):
            self._buttons.append(
                Button(
                    rect=pygame.Rect(x, y + (h + gap) * i, w, h),
                    text=f"{diff.name.title()} ({diff.pair_count} pairs)",
                    on_click=lambda d=diff: self._start(d),
                )
            )
        self._buttons.append(
            Button(
                rect=pygame.Rect(x, y + (h + gap) * len(self._buttons), w, h),
                text="Quit",
                on_click=lambda: pygame.event.post(pygame.event.Event(pygame.QUIT)),
                color=(90, 90, 90),
            )
        )

    def _start(self, difficulty: DifficultyConfig) -> None:
        self._next = SceneTransition(BoardScene(self.ctx, difficulty))

    def handle_event(self, event: pygame.event.Event) -> None:
        for b in self._buttons:
            if b.handle_event(event):
                return

    def update(self, dt: float) -> SceneTransition | None:
        return self._next

    def render(self, screen: pygame.Surface) -> None:
        screen.fill(BACKGROUND)
        fonts = self.ctx.assets.fonts
        draw_text_centered(screen, fonts.big, "Frog Memory Game", (screen.get_width() // 2, 90))
        draw_text_centered(screen, fonts.ui, "Pick a difficulty", (screen.get_width() // 2, 160))
        for b in self._buttons:
            b.draw(screen, fonts.ui)
        draw_text(
            screen,
            fonts.small,
            "Find matching pairs of frogs in as few moves as possible.",
            (40, screen.get_height() - 40),
        )
