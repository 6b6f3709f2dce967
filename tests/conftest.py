import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "hide"

import numpy as np
import pygame
import pytest

from flashlight.reveal import RevealAccumulator, TextMask


@pytest.fixture(scope="session", autouse=True)
def pygame_fonts():
    pygame.font.init()
    yield
    pygame.font.quit()


@pytest.fixture
def block_mask() -> TextMask:
    """40x20 canvas with a solid 20x10 'glyph' in the middle."""
    alpha = np.zeros((20, 40), dtype=np.uint8)
    alpha[5:15, 10:30] = 255
    return TextMask(alpha)


@pytest.fixture
def accumulator(block_mask) -> RevealAccumulator:
    return RevealAccumulator(block_mask, alpha_threshold=20)
