"""Rendering helpers for the pygame front-end."""

from battle_city.pygame.renderer.scene import (
    draw_background,
    draw_bullets,
    draw_scene,
    draw_tanks,
    draw_walls,
)

__all__ = [
    "draw_background",
    "draw_bullets",
    "draw_scene",
    "draw_tanks",
    "draw_walls",
]
