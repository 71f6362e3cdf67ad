from __future__ import annotations

import argparse
import logging
from pathlib import Path

import pygame  # type: ignore[import-not-found]

from frogmatch.paths import get_paths
from frogmatch.services.content import ContentService
from frogmatch.services.notifier import RecordingSink
from frogmatch.services.telemetry import TelemetryService, TelemetrySink

from .app import App, GameContext
from .asset_manager import AssetManager
from .scenes.boot import BootScene

logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(prog="frogmatch")
    parser.add_argument("--width", type=int, default=720)
    parser.add_argument("--height", type=int, default=900)
    parser.add_argument("--difficulty", default=None, help="skip the menu and start this difficulty")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--events-log", type=Path, default=None, help="JSONL file for telemetry and completion events")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    pygame.init()
    screen = pygame.display.set_mode((args.width, args.height))
    pygame.display.set_caption("Frog Memory Game")

    clock = pygame.time.Clock()
    paths = get_paths()

    telemetry = TelemetryService(args.events_log or paths.userdata_dir / "events.jsonl")
    ctx = GameContext(
        screen=screen,
        clock=clock,
        paths=paths,
        assets=AssetManager(),
        content=ContentService(data_dir=paths.data_dir, schema_dir=paths.schema_dir),
        telemetry=telemetry,
        seed=args.seed,
        requested_difficulty=args.difficulty,
        self_sink=RecordingSink(),
        parent_sink=TelemetrySink(telemetry, scope="parent"),
    )

    logger.info("Starting frogmatch (events -> %s)", telemetry.path)
    app = App(ctx, BootScene(ctx))
    return app.run()


if __name__ == "__main__":
    raise SystemExit(main())
