"""Rejection sampling of enemy start positions."""

from __future__ import annotations

import logging
import random
from typing import Iterable, List, Optional

from battle_city.core.arena import Arena, Point, Rect, Wall, blocked_by_wall

logger = logging.getLogger(__name__)


class SpawnPlacementError(RuntimeError):
    """Raised when the arena is too crowded to place every enemy."""


def place_enemies(
    count: int,
    arena: Arena,
    walls: Iterable[Wall],
    player_rect: Rect,
    *,
    rng: Optional[random.Random] = None,
    margin_tiles: int = 2,
    max_attempts: int = 1000,
) -> List[Point]:
    """Return ``count`` tile-aligned positions clear of walls, the player and each other.

    Candidates are drawn uniformly from the tiles at least ``margin_tiles``
    away from every edge. Each enemy gets ``max_attempts`` draws before the
    placement is abandoned with :class:`SpawnPlacementError`.
    """

    rng = rng or random.Random()
    walls = list(walls)
    first_column = margin_tiles
    last_column = arena.width_tiles - 1 - margin_tiles
    first_row = margin_tiles
    last_row = arena.height_tiles - 1 - margin_tiles
    if count > 0 and (first_column > last_column or first_row > last_row):
        raise SpawnPlacementError(
            f"Arena {arena.width_tiles}x{arena.height_tiles} leaves no spawn tiles "
            f"with a {margin_tiles}-tile margin"
        )

    placed: List[Point] = []
    placed_rects: List[Rect] = []
    for index in range(count):
        for attempt in range(1, max_attempts + 1):
            column = rng.randint(first_column, last_column)
            row = rng.randint(first_row, last_row)
            x, y = arena.tile_origin(column, row)
            candidate = arena.footprint(x, y)
            if candidate.intersects(player_rect):
                continue
            if blocked_by_wall(candidate, walls):
                continue
            if any(candidate.intersects(other) for other in placed_rects):
                continue
            placed.append((x, y))
            placed_rects.append(candidate)
            logger.debug(
                "Enemy %d placed at tile (%d, %d) after %d draw(s)",
                index + 1,
                column,
                row,
                attempt,
            )
            break
        else:
            logger.error(
                "Gave up placing enemy %d of %d after %d draws", index + 1, count, max_attempts
            )
            raise SpawnPlacementError(
                f"Failed to find a free spawn tile for enemy {index + 1} of {count} "
                f"within {max_attempts} attempts"
            )
    return placed


__all__ = ["SpawnPlacementError", "place_enemies"]
