from __future__ import annotations
import pygame

from flashlight.api import RevealConfig, Stage
from flashlight.render.backdrop import NoiseBackdrop
from flashlight.render.cursor import set_flashlight_cursor
from flashlight.render.shapes import draw_button, draw_text
from flashlight.reveal import FlashlightReveal

CONTINUE_FADE_MS = 500
HUD_COLOR = (230, 230, 230)


class FlashlightRevealStage(Stage):
    def on_load(self, ctx, manifest):
        self.ctx = ctx
        self.manifest = manifest
        self.finished = False

        self.cfg = RevealConfig.from_options(manifest.get("options"))
        message = str(manifest.get("message", ""))

        self._continue_ms = 0.0
        self._show_continue = False
        self._button: pygame.Rect | None = None
        # screen-sized copy of the canvas, rebuilt only after a reveal update
        self._frame: pygame.Surface | None = None

        self.widget = FlashlightReveal(message, self._on_revealed, self.cfg,
                                       on_degraded=self._on_degraded)
        self.widget.mount(ctx.screen_size, ctx.cfg.pixel_density,
                          viewport_size=ctx.screen_size)

        self.backdrop = NoiseBackdrop(ctx.screen_size, self.cfg)
        # the message stays readable outside the canvas
        pygame.display.set_caption(message)
        set_flashlight_cursor(self.cfg.cursor_hotspot, self.cfg.cursor_image)

    # ------------- widget callbacks -------------
    def _on_revealed(self):
        self._show_continue = True

    def _on_degraded(self, reason: str):
        self.ctx.resources["degraded"] = reason
        # nothing to uncover, don't trap the user here
        self._show_continue = True

    # ------------- loop hooks -------------
    def on_event(self, event: pygame.event.Event) -> None:
        if self._show_continue:
            if event.type == pygame.MOUSEBUTTONUP and self._button and self._button.collidepoint(event.pos):
                self.finished = True
            elif event.type == pygame.KEYDOWN and event.key in (pygame.K_RETURN, pygame.K_SPACE):
                self.finished = True
            return
        self.widget.handle_event(event)

    def on_update(self, dt_ms: float) -> None:
        if self.widget.tick():
            self._frame = None
        if self._show_continue:
            self._continue_ms = min(CONTINUE_FADE_MS, self._continue_ms + dt_ms)

    def on_draw(self, surface: pygame.Surface) -> None:
        surface.fill(self.cfg.background_color)
        self.backdrop.draw(surface)

        w, h = self.ctx.screen_size
        if self.widget.canvas is not None:
            if self._frame is None:
                frame = self.widget.canvas.to_pygame()
                if frame.get_size() != (w, h):
                    frame = pygame.transform.smoothscale(frame, (w, h))
                self._frame = frame
            surface.blit(self._frame, (0, 0))
        elif self.widget.degraded:
            draw_text(surface, self.widget.message, (20, h // 2), self.cfg.text_color, size=32)

        if self.ctx.cfg.debug:
            progress = self.widget.progress()
            pct = "n/a" if progress is None else f"{progress * 100:.1f}%"
            draw_text(surface, f"revealed {pct}", (8, 30), HUD_COLOR, size=20)

        if self._show_continue:
            self._button = draw_button(surface, "Continue", (w // 2, h - 56),
                                       opacity=self._continue_ms / CONTINUE_FADE_MS)

    def on_unload(self) -> None:
        self.widget.unmount()


def get_stage():
    return FlashlightRevealStage()
