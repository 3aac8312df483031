"""Rendering helpers for the Battle City pygame client."""

from __future__ import annotations

from typing import Iterable

import pygame

from battle_city.core.arena import Rect
from battle_city.core.session import RenderSnapshot
from battle_city.core.tank import Direction


def _scale_color(color: pygame.Color, factor: float) -> pygame.Color:
    return pygame.Color(
        max(0, min(255, int(color.r * factor))),
        max(0, min(255, int(color.g * factor))),
        max(0, min(255, int(color.b * factor))),
    )


def _to_pygame(rect: Rect) -> pygame.Rect:
    return pygame.Rect(rect.as_tuple())


def draw_background(app, snapshot: RenderSnapshot) -> None:
    surface = app.screen
    surface.fill(app.border_color)
    floor = app.textures.get("floor")
    for tile in snapshot.background_tiles:
        target = _to_pygame(tile)
        if floor is not None:
            surface.blit(floor, target)
        else:
            pygame.draw.rect(surface, app.floor_color, target)


def draw_walls(app, snapshot: RenderSnapshot) -> None:
    surface = app.screen
    texture = app.textures.get("wall")
    for wall in snapshot.walls:
        target = _to_pygame(wall)
        if texture is not None:
            surface.blit(texture, target)
        else:
            pygame.draw.rect(surface, app.wall_color, target)


def _draw_tank(
    surface: pygame.Surface,
    rect: Rect,
    facing: Direction,
    base_color: pygame.Color,
) -> None:
    body = _to_pygame(rect)
    size = body.width
    track_color = _scale_color(base_color, 0.45)
    hull_color = base_color
    turret_color = _scale_color(base_color, 1.15)
    dark_grey = pygame.Color(32, 36, 42)

    # Tracks run along the direction of travel
    track = max(2, size // 5)
    dx, dy = facing
    if dx == 0:
        tracks = [
            pygame.Rect(body.left, body.top, track, body.height),
            pygame.Rect(body.right - track, body.top, track, body.height),
        ]
    else:
        tracks = [
            pygame.Rect(body.left, body.top, body.width, track),
            pygame.Rect(body.left, body.bottom - track, body.width, track),
        ]
    for tread in tracks:
        pygame.draw.rect(surface, track_color, tread, border_radius=max(1, track // 3))

    hull = body.inflate(-track * 2, -track * 2)
    pygame.draw.rect(surface, hull_color, hull, border_radius=max(1, size // 8))

    center = body.center
    turret_radius = max(2, size // 5)
    barrel_length = size // 2 + size // 8
    barrel_width = max(2, size // 8)
    end = (center[0] + dx * barrel_length, center[1] + dy * barrel_length)
    pygame.draw.line(surface, turret_color, center, end, barrel_width)
    pygame.draw.circle(surface, turret_color, center, turret_radius)
    pygame.draw.circle(surface, dark_grey, center, max(1, turret_radius // 2))


def draw_tanks(app, snapshot: RenderSnapshot) -> None:
    surface = app.screen
    for enemy in snapshot.enemies:
        _draw_tank(surface, enemy.rect, enemy.facing, app.tank_colors["enemy"])
    _draw_tank(surface, snapshot.player, snapshot.player_facing, app.tank_colors["player"])


def _draw_bullet_group(surface: pygame.Surface, bullets: Iterable[Rect], color: pygame.Color) -> None:
    for bullet in bullets:
        pygame.draw.rect(surface, color, _to_pygame(bullet))


def draw_bullets(app, snapshot: RenderSnapshot) -> None:
    surface = app.screen
    _draw_bullet_group(surface, snapshot.player_bullets, app.bullet_colors["player"])
    for enemy in snapshot.enemies:
        _draw_bullet_group(surface, enemy.bullets, app.bullet_colors["enemy"])


def draw_scene(app, snapshot: RenderSnapshot) -> None:
    """Paint one frame of the arena, back to front."""
    draw_background(app, snapshot)
    draw_walls(app, snapshot)
    draw_tanks(app, snapshot)
    draw_bullets(app, snapshot)


__all__ = [
    "draw_background",
    "draw_bullets",
    "draw_scene",
    "draw_tanks",
    "draw_walls",
]
