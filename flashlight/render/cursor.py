from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional, Tuple

import pygame

logger = logging.getLogger(__name__)


def flashlight_icon(size: int = 32) -> pygame.Surface:
    """Small flashlight pointing up-left: the lens sits near the hotspot."""
    icon = pygame.Surface((size, size), pygame.SRCALPHA)
    c = size // 2
    # beam
    pygame.draw.circle(icon, (255, 244, 200, 90), (c, c), size // 3)
    # lens
    pygame.draw.circle(icon, (250, 250, 250), (c, c), size // 6)
    pygame.draw.circle(icon, (60, 60, 70), (c, c), size // 6, width=2)
    # handle
    pygame.draw.line(icon, (60, 60, 70), (c + size // 8, c + size // 8),
                     (size - 3, size - 3), width=max(3, size // 6))
    return icon


def set_flashlight_cursor(hotspot: Tuple[int, int], image: Optional[str] = None) -> bool:
    """Purely cosmetic; returns False if the host cannot set a color cursor."""
    try:
        if image and Path(image).is_file():
            icon = pygame.image.load(image)
        else:
            icon = flashlight_icon()
        pygame.mouse.set_cursor(pygame.cursors.Cursor(hotspot, icon))
    except pygame.error as exc:
        logger.debug("custom cursor unavailable: %s", exc)
        return False
    return True
