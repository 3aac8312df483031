"""Arena geometry, tile-sized walls and bounding-box helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Tuple

from battle_city.core.settings import SessionSettings

Point = Tuple[int, int]


@dataclass(frozen=True)
class Rect:
    """Axis-aligned box in top-left screen coordinates."""

    left: int
    top: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.left + self.width

    @property
    def bottom(self) -> int:
        return self.top + self.height

    @property
    def center(self) -> Point:
        return (self.left + self.width // 2, self.top + self.height // 2)

    def intersects(self, other: "Rect") -> bool:
        # Boxes that only share an edge do not overlap.
        return not (
            self.right <= other.left
            or self.left >= other.right
            or self.bottom <= other.top
            or self.top >= other.bottom
        )

    def contains_point(self, point: Point) -> bool:
        x, y = point
        return self.left <= x < self.right and self.top <= y < self.bottom

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.left, self.top, self.width, self.height)


@dataclass(frozen=True)
class Arena:
    """Immutable tile grid the session plays on."""

    tile_size: int = 40
    width_tiles: int = 20
    height_tiles: int = 15

    @classmethod
    def from_settings(cls, settings: SessionSettings) -> "Arena":
        return cls(settings.tile_size, settings.width_tiles, settings.height_tiles)

    @property
    def width(self) -> int:
        return self.width_tiles * self.tile_size

    @property
    def height(self) -> int:
        return self.height_tiles * self.tile_size

    # ------------------------------------------------------------------
    # Bounds
    @property
    def min_x(self) -> int:
        return self.tile_size

    @property
    def min_y(self) -> int:
        return self.tile_size

    @property
    def max_x(self) -> int:
        return self.width - self.tile_size * 2

    @property
    def max_y(self) -> int:
        return self.height - self.tile_size * 2

    def in_playable_bounds(self, x: int, y: int) -> bool:
        """Return whether a tank anchored at (x, y) keeps its footprint inside."""
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def in_outer_bounds(self, x: int, y: int) -> bool:
        """Return whether a projectile anchored at (x, y) is still in flight."""
        return (
            self.tile_size <= x <= self.width - self.tile_size
            and self.tile_size <= y <= self.height - self.tile_size
        )

    # ------------------------------------------------------------------
    # Tiles
    def tile_origin(self, column: int, row: int) -> Point:
        return (column * self.tile_size, row * self.tile_size)

    def tile_rect(self, column: int, row: int) -> Rect:
        x, y = self.tile_origin(column, row)
        return Rect(x, y, self.tile_size, self.tile_size)

    def footprint(self, x: int, y: int) -> Rect:
        """Bounding box of a one-tile entity anchored at (x, y)."""
        return Rect(x, y, self.tile_size, self.tile_size)

    def background_tiles(self) -> Iterator[Rect]:
        for row in range(1, self.height_tiles - 1):
            for column in range(1, self.width_tiles - 1):
                yield self.tile_rect(column, row)

    @property
    def start_tile(self) -> Point:
        """Canonical player tile, bottom-centre of the field."""
        return ((self.width_tiles - 1) // 2, self.height_tiles - 2)

    @property
    def start_position(self) -> Point:
        return self.tile_origin(*self.start_tile)


@dataclass
class Wall:
    """Destructible one-tile obstacle."""

    x: int
    y: int
    size: int
    active: bool = True
    rect: Rect = field(init=False)

    def __post_init__(self) -> None:
        self.rect = Rect(self.x, self.y, self.size, self.size)

    def destroy(self) -> None:
        self.active = False


def generate_walls(arena: Arena) -> List[Wall]:
    """Lay walls on every second tile, leaving a clear ring near the edges."""

    walls: List[Wall] = []
    for row in range(3, arena.height_tiles - 3, 2):
        for column in range(3, arena.width_tiles - 3, 2):
            x, y = arena.tile_origin(column, row)
            walls.append(Wall(x, y, arena.tile_size))
    return walls


def active_walls(walls: Iterable[Wall]) -> Iterator[Wall]:
    return (wall for wall in walls if wall.active)


def blocked_by_wall(rect: Rect, walls: Iterable[Wall]) -> bool:
    return any(rect.intersects(wall.rect) for wall in active_walls(walls))


__all__ = [
    "Arena",
    "Point",
    "Rect",
    "Wall",
    "active_walls",
    "blocked_by_wall",
    "generate_walls",
]
