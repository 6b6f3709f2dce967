from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional
import pygame

from flashlight.api.config import EngineConfig
from flashlight.app.context import Context
from flashlight.app.loader import STAGES_DIR, load_stage_manifest, load_stage_module
from flashlight.render.shapes import draw_text

logger = logging.getLogger(__name__)


def run_stage(
    stage_id: str,
    screen_size: tuple[int, int],
    pixel_density: float = 1.0,
    fps: int = 60,
    debug: bool = False,
    stages_dir: Optional[Path] = None,
) -> int:
    """Runs one stage until it finishes or the window closes. Returns an exit code."""
    stage_root = (stages_dir or STAGES_DIR) / stage_id
    manifest = load_stage_manifest(stage_root)
    module = load_stage_module(stage_root)
    stage = module.get_stage()
    logger.info("loaded stage %s (%s)", stage_id, manifest.get("name", stage_id))

    pygame.init()
    try:
        pygame.display.set_caption(manifest.get("name", stage_id))
        screen = pygame.display.set_mode(screen_size)
    except pygame.error as exc:
        logger.error("could not open a display: %s", exc)
        pygame.quit()
        return 1
    clock = pygame.time.Clock()

    cfg = EngineConfig(
        screen_size=screen_size,
        pixel_density=pixel_density,
        fps=fps,
        debug=debug,
    )
    ctx = Context(
        screen=screen,
        clock=clock,
        cfg=cfg,
        resources={},
        screen_size=screen_size,
    )

    stage.on_load(ctx, manifest)

    running = True
    try:
        while running and not stage.finished:
            # one display frame: at most one coalesced reveal update runs in on_update
            dt = clock.tick(fps)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                stage.on_event(event)

            stage.on_update(dt)
            stage.on_draw(screen)
            if debug:
                draw_text(screen, f"{clock.get_fps():.0f} fps", (8, 8), size=20)

            pygame.display.flip()
    finally:
        stage.on_unload()
        pygame.quit()

    if ctx.resources.get("degraded"):
        return 2
    return 0
