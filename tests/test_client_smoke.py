from __future__ import annotations

import os

# Allow headless runs (CI, terminals without a display)
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame  # type: ignore[import-not-found]  # noqa: E402
import pytest  # noqa: E402

from frogmatch.client.pygame_app.app import GameContext  # noqa: E402
from frogmatch.client.pygame_app.asset_manager import AssetManager  # noqa: E402
from frogmatch.client.pygame_app.scenes.board import BoardScene  # noqa: E402
from frogmatch.client.pygame_app.scenes.boot import BootScene  # noqa: E402
from frogmatch.client.pygame_app.scenes.main_menu import MainMenuScene  # noqa: E402
from frogmatch.paths import get_paths  # noqa: E402
from frogmatch.services.content import ContentService  # noqa: E402
from frogmatch.services.notifier import RecordingSink  # noqa: E402
from frogmatch.services.telemetry import TelemetryService  # noqa: E402


@pytest.fixture
def ctx(tmp_path):
    pygame.init()
    screen = pygame.display.set_mode((720, 900))
    paths = get_paths()
    context = GameContext(
        screen=screen,
        clock=pygame.time.Clock(),
        paths=paths,
        assets=AssetManager(),
        content=ContentService(paths.data_dir, paths.schema_dir),
        telemetry=TelemetryService(tmp_path / "events.jsonl"),
        seed=1234,
        self_sink=RecordingSink(),
    )
    yield context
    pygame.quit()


def _click(pos: tuple[int, int]) -> pygame.event.Event:
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=pos)


def test_boot_goes_to_menu(ctx: GameContext) -> None:
    tr = BootScene(ctx).update(0.0)
    assert tr is not None
    assert isinstance(tr.next_scene, MainMenuScene)
    assert ctx.difficulties is not None
    tr.next_scene.render(ctx.screen)


def test_boot_with_requested_difficulty(ctx: GameContext) -> None:
    ctx.requested_difficulty = "easy"
    tr = BootScene(ctx).update(0.0)
    assert tr is not None
    assert isinstance(tr.next_scene, BoardScene)
    assert len(tr.next_scene.game.state.store) == 12


def test_board_click_flips_card(ctx: GameContext) -> None:
    BootScene(ctx).update(0.0)
    assert ctx.difficulties is not None
    scene = BoardScene(ctx, ctx.difficulties.get("easy"))

    scene.handle_event(_click(scene._card_rect(0).center))
    first = scene.game.state.store.cards[0]
    assert first.face_up
    assert scene.game.state.selection == [first.id]

    scene.update(0.2)
    scene.render(ctx.screen)

    scene.handle_event(_click(scene.btn_new.rect.center))
    assert scene.game.generation == 1
    assert scene.game.state.selection == []
    records = ctx.telemetry.read_all()
    assert [r["type"] for r in records].count("new_game") == 2
