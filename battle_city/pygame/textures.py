"""Texture loading with procedural fallbacks for the pygame client."""

from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import Callable, Tuple

import pygame

logger = logging.getLogger(__name__)


def generate_noise_texture(
    size: int,
    *,
    alpha: int = 28,
    seed: int = 0,
    brightness: Tuple[int, int] = (215, 255),
) -> pygame.Surface:
    """Create a tileable grayscale noise texture."""

    rng = random.Random(seed)
    small_size = max(8, size // 4)
    small = pygame.Surface((small_size, small_size), pygame.SRCALPHA)
    min_b, max_b = brightness
    for y in range(small_size):
        for x in range(small_size):
            tone = rng.randint(min_b, max_b)
            small.set_at((x, y), (tone, tone, tone, alpha))

    return pygame.transform.smoothscale(small, (size, size))


def generate_brick_texture(
    size: int,
    *,
    base: Tuple[int, int, int] = (150, 75, 0),
    mortar: Tuple[int, int, int] = (92, 50, 12),
    rows: int = 4,
    seed: int = 0,
) -> pygame.Surface:
    """Draw a square of staggered bricks, one course per ``size // rows`` pixels."""

    rng = random.Random(seed)
    surface = pygame.Surface((size, size))
    surface.fill(mortar)
    course = max(2, size // rows)
    brick_width = max(4, size // 2)
    for row in range(rows):
        top = row * course
        offset = 0 if row % 2 == 0 else -brick_width // 2
        left = offset
        while left < size:
            shade = rng.uniform(0.85, 1.1)
            color = tuple(max(0, min(255, int(c * shade))) for c in base)
            brick = pygame.Rect(left + 1, top + 1, brick_width - 2, course - 2)
            pygame.draw.rect(surface, color, brick.clip(surface.get_rect()))
            left += brick_width
    return surface


def load_texture(
    path: Path,
    size: int,
    fallback: Callable[[int], pygame.Surface],
) -> pygame.Surface:
    """Load an image scaled to ``size`` or build one with ``fallback``."""

    path = Path(path)
    if path.is_file():
        try:
            image = pygame.image.load(path.as_posix())
        except pygame.error as exc:
            logger.warning("Could not load texture %s: %s", path, exc)
        else:
            return pygame.transform.smoothscale(image, (size, size))
    else:
        logger.debug("Texture %s not found, generating one", path.name)
    return fallback(size)


__all__ = ["generate_brick_texture", "generate_noise_texture", "load_texture"]
