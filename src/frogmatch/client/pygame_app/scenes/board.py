from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from frogmatch.engine.runtime import MemoryGame
from frogmatch.engine.session import format_elapsed
from frogmatch.engine.types import DEFAULT_TOKENS, Card, DifficultyConfig
from frogmatch.services.notifier import CompletionNotifier, RecordingSink

from ..app import GameContext
from ..scene_base import Scene, SceneTransition
from ..ui import (
    BACKGROUND,
    CARD_BACK,
    GOLD,
    Button,
    StatBox,
    draw_text_centered,
)

CARD_SIZE = 120
CARD_GAP = 15
GRID_TOP = 160


class BoardScene:
    def __init__(self, ctx: GameContext, difficulty: DifficultyConfig) -> None:
        self.ctx = ctx
        self.difficulty = difficulty
        self._next: SceneTransition | None = None
        self._since_tick_ms = 0.0

        self.notifier = CompletionNotifier(
            self_sink=ctx.self_sink or RecordingSink(),
            parent_sink=ctx.parent_sink,
            schema=ctx.completion_schema,
        )
        self.game = MemoryGame(
            difficulty,
            config=ctx.config,
            tokens=ctx.tokens or DEFAULT_TOKENS,
            seed=ctx.seed,
            on_complete=self.notifier,
        )
        self._log_new_game()

        width = ctx.screen.get_width()
        self.btn_new = Button(
            rect=pygame.Rect(width // 2 - 190, ctx.screen.get_height() - 80, 180, 50),
            text="New Game",
            on_click=self._on_new_game,
        )
        self.btn_menu = Button(
            rect=pygame.Rect(width // 2 + 10, ctx.screen.get_height() - 80, 180, 50),
            text="Menu",
            on_click=self._on_menu,
            color=(90, 90, 90),
        )
        box_w = 180
        left = (width - 3 * box_w - 2 * 20) // 2
        self.stat_boxes = [
            StatBox(pygame.Rect(left + i * (box_w + 20), 80, box_w, 44)) for i in range(3)
        ]

    def _go(self, scene: Scene) -> None:
        self._next = SceneTransition(scene)

    def _on_menu(self) -> None:
        from .main_menu import MainMenuScene

        self._go(MainMenuScene(self.ctx))

    def _on_new_game(self) -> None:
        self.game.new_game(seed=None)
        self._log_new_game()

    def _log_new_game(self) -> None:
        state = self.game.state
        self.ctx.telemetry.log(
            "new_game",
            {
                "difficulty": state.difficulty.name,
                "pairs": state.session.pair_count,
                "seed": state.seed,
                "generation": state.generation,
            },
        )

    def _card_rect(self, index: int) -> pygame.Rect:
        cols = self.difficulty.grid_columns
        grid_w = cols * CARD_SIZE + (cols - 1) * CARD_GAP
        left = (self.ctx.screen.get_width() - grid_w) // 2
        row, col = divmod(index, cols)
        return pygame.Rect(
            left + col * (CARD_SIZE + CARD_GAP),
            GRID_TOP + row * (CARD_SIZE + CARD_GAP),
            CARD_SIZE,
            CARD_SIZE,
        )

    def _hit_test_card(self, pos: tuple[int, int]) -> int | None:
        for i, card in enumerate(self.game.state.store.cards):
            if self._card_rect(i).collidepoint(pos):
                return card.id
        return None

    def handle_event(self, event: pygame.event.Event) -> None:
        if self.btn_new.handle_event(event) or self.btn_menu.handle_event(event):
            return
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            card_id = self._hit_test_card(event.pos)
            if card_id is not None:
                self.game.click(card_id, pygame.time.get_ticks())

    def update(self, dt: float) -> SceneTransition | None:
        self._since_tick_ms += dt * 1000.0
        if self._since_tick_ms >= self.ctx.config.tick_interval_ms:
            self._since_tick_ms = 0.0
            self.game.tick(pygame.time.get_ticks())
        return self._next

    def render(self, screen: pygame.Surface) -> None:
        screen.fill(BACKGROUND)
        fonts = self.ctx.assets.fonts
        state = self.game.state
        session = state.session

        draw_text_centered(screen, fonts.big, "Frog Memory Game", (screen.get_width() // 2, 40))
        labels = (
            f"Moves: {session.moves}",
            f"Matches: {session.matched_pairs}/{session.pair_count}",
            f"Time: {format_elapsed(session.elapsed_ms)}",
        )
        for box, label in zip(self.stat_boxes, labels):
            box.draw(screen, fonts.ui, label)

        for i, card in enumerate(state.store.cards):
            self._draw_card(screen, self._card_rect(i), card)

        if session.won:
            self._draw_win_banner(screen)

        self.btn_new.draw(screen, fonts.ui)
        self.btn_menu.draw(screen, fonts.ui)

    def _draw_card(self, screen: pygame.Surface, rect: pygame.Rect, card: Card) -> None:
        fonts = self.ctx.assets.fonts
        if not card.face_up:
            pygame.draw.rect(screen, CARD_BACK, rect, border_radius=15)
            pygame.draw.rect(screen, (120, 170, 120), rect, width=3, border_radius=15)
            draw_text_centered(screen, fonts.card, "?", rect.center, color=(150, 190, 150))
            return

        token = self.game.tokens.get(card.type)
        pygame.draw.rect(screen, token.color, rect, border_radius=15)
        pygame.draw.rect(screen, (220, 240, 220), rect, width=3, border_radius=15)
        draw_text_centered(screen, fonts.small, token.display_name.upper(), (rect.centerx, rect.bottom - 20))
        pygame.draw.circle(screen, (30, 60, 30), (rect.centerx, rect.centery - 10), 26)
        pygame.draw.circle(screen, token.color, (rect.centerx, rect.centery - 10), 20)
        if card.matched:
            badge = (rect.right - 15, rect.top + 15)
            pygame.draw.circle(screen, (76, 175, 80), badge, 10)
            draw_text_centered(screen, fonts.small, "OK", badge)

    def _draw_win_banner(self, screen: pygame.Surface) -> None:
        fonts = self.ctx.assets.fonts
        session = self.game.state.session
        rect = pygame.Rect(60, screen.get_height() - 250, screen.get_width() - 120, 150)
        pygame.draw.rect(screen, GOLD, rect, border_radius=15)
        dark = (46, 125, 50)
        draw_text_centered(screen, fonts.big, "Congratulations!", (rect.centerx, rect.y + 35), color=dark)
        draw_text_centered(
            screen,
            fonts.ui,
            f"You completed the game in {session.moves} moves and {format_elapsed(session.elapsed_ms)}!",
            (rect.centerx, rect.y + 85),
            color=dark,
        )
        draw_text_centered(
            screen, fonts.ui, f"Score: {session.current_score()} points", (rect.centerx, rect.y + 120), color=dark
        )
