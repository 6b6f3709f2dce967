from __future__ import annotations
import random
from typing import List, Optional, Tuple

import pygame

from flashlight.api.config import RevealConfig


def noise_layout(count: int, chars: Tuple[str, ...],
                 rng: Optional[random.Random] = None) -> List[Tuple[str, float, float]]:
    """
    (char, left, top) with left/top as fractions of the screen. Positions are
    a fixed scatter pattern; only the characters are random.
    """
    rng = rng or random.Random()
    out = []
    for i in range(count):
        left = ((i * 7 + i % 17) % 100) / 100
        top = ((i * 11 + i % 23) % 100) / 100
        out.append((rng.choice(chars), left, top))
    return out


class NoiseBackdrop:
    """Faint scattered characters behind the canvas; rendered once, blitted every frame."""

    def __init__(self, screen_size: Tuple[int, int], cfg: RevealConfig,
                 rng: Optional[random.Random] = None):
        w, h = screen_size
        self.surface = pygame.Surface((w, h), pygame.SRCALPHA)
        if not cfg.noise_chars or cfg.noise_count <= 0:
            return

        # clamp(10px, 2vw, 16px)
        size = int(max(10, min(16, w * 0.02)))
        font = pygame.font.SysFont(None, size)
        glyphs = {c: font.render(c, True, cfg.noise_color) for c in cfg.noise_chars}
        pad = 8  # keep the right/bottom-most glyphs on screen
        for char, left, top in noise_layout(cfg.noise_count, cfg.noise_chars, rng):
            self.surface.blit(glyphs[char], (pad + left * (w - 2 * pad), pad + top * (h - 2 * pad)))
        self.surface.set_alpha(int(255 * cfg.noise_opacity))

    def draw(self, surface: pygame.Surface) -> None:
        surface.blit(self.surface, (0, 0))
