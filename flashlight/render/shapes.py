import pygame
from typing import Tuple


def draw_text(surface: pygame.Surface, text: str, pos: Tuple[int, int], color=(230, 230, 230), size=24):
    font = pygame.font.SysFont(None, size)
    surface.blit(font.render(text, True, color), pos)


def draw_button(surface: pygame.Surface, label: str, center: Tuple[int, int], opacity: float = 1.0,
                fill=(236, 72, 153), color=(255, 255, 255), size=28) -> pygame.Rect:
    """Rounded pill button; returns its rect for hit testing."""
    font = pygame.font.SysFont(None, size, bold=True)
    text = font.render(label, True, color)
    rect = text.get_rect(center=center).inflate(48, 24)

    button = pygame.Surface(rect.size, pygame.SRCALPHA)
    pygame.draw.rect(button, fill, button.get_rect(), border_radius=8)
    button.blit(text, text.get_rect(center=button.get_rect().center))
    button.set_alpha(int(255 * max(0.0, min(1.0, opacity))))
    surface.blit(button, rect)
    return rect
