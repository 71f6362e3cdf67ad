from __future__ import annotations

from dataclasses import dataclass

import pygame  # type: ignore[import-not-found]


@dataclass
class Fonts:
    ui: pygame.font.Font
    small: pygame.font.Font
    big: pygame.font.Font
    card: pygame.font.Font


class AssetManager:
    def __init__(self) -> None:
        pygame.font.init()
        self.fonts = Fonts(
            ui=pygame.font.SysFont(None, 26),
            small=pygame.font.SysFont(None, 18),
            big=pygame.font.SysFont(None, 48),
            card=pygame.font.SysFont(None, 64),
        )
