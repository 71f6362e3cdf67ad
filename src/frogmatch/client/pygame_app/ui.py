from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import pygame  # type: ignore[import-not-found]


Color = tuple[int, int, int]

BACKGROUND: Color = (46, 125, 50)
CARD_BACK: Color = (27, 94, 32)
TEXT: Color = (255, 255, 255)
ACCENT: Color = (255, 107, 53)
GOLD: Color = (255, 215, 0)


def draw_text(
    screen: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    pos: tuple[int, int],
    color: Color = TEXT,
) -> None:
    img = font.render(text, True, color)
    screen.blit(img, pos)


def draw_text_centered(
    screen: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    center: tuple[int, int],
    color: Color = TEXT,
) -> None:
    img = font.render(text, True, color)
    screen.blit(img, img.get_rect(center=center).topleft)


@dataclass
class Button:
    rect: pygame.Rect
    text: str
    on_click: Callable[[], None]
    enabled: bool = True
    color: Color = ACCENT

    def handle_event(self, event: pygame.event.Event) -> bool:
        if not self.enabled:
            return False
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.on_click()
                return True
        return False

    def draw(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        bg = self.color if self.enabled else (90, 90, 90)
        pygame.draw.rect(screen, bg, self.rect, border_radius=25)
        draw_text_centered(screen, font, self.text, self.rect.center)


@dataclass
class StatBox:
    rect: pygame.Rect

    def draw(self, screen: pygame.Surface, font: pygame.font.Font, text: str) -> None:
        panel = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        panel.fill((255, 255, 255, 50))
        screen.blit(panel, self.rect.topleft)
        draw_text_centered(screen, font, text, self.rect.center)
