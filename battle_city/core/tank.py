"""Tank and projectile entities shared by the player and enemies."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from battle_city.core.arena import Arena, Rect, Wall, blocked_by_wall

Direction = Tuple[int, int]

UP: Direction = (0, -1)
DOWN: Direction = (0, 1)
LEFT: Direction = (-1, 0)
RIGHT: Direction = (1, 0)
CARDINAL_DIRECTIONS: Tuple[Direction, ...] = (UP, DOWN, LEFT, RIGHT)

PLAYER = "player"
ENEMY = "enemy"


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


@dataclass
class Bullet:
    """Single projectile travelling along a cardinal direction."""

    x: int
    y: int
    dx: int
    dy: int
    size: int = 10
    active: bool = True

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.size, self.size)

    def advance(self, arena: Arena) -> None:
        self.x += self.dx
        self.y += self.dy
        if not arena.in_outer_bounds(self.x, self.y):
            self.active = False

    def deactivate(self) -> None:
        self.active = False


class TankController:
    """Policy deciding when a tank may fire; the human policy never waits."""

    def allow_shot(self) -> bool:
        return True

    def update(self, tank: "Tank", walls: Iterable[Wall]) -> Optional["Bullet"]:
        """Autonomous per-tick behaviour; human-driven tanks have none."""
        return None

    def reset(self) -> None:
        pass


@dataclass
class Tank:
    """A mobile, armed entity occupying one tile."""

    arena: Arena
    x: int
    y: int
    kind: str = PLAYER
    facing: Direction = UP
    controller: TankController = field(default_factory=TankController)
    bullet_speed: int = 5
    bullet_size: int = 10
    active: bool = True
    bullets: List[Bullet] = field(default_factory=list)

    @property
    def rect(self) -> Rect:
        return self.arena.footprint(self.x, self.y)

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def move(self, dx: int, dy: int, walls: Iterable[Wall]) -> bool:
        """Try to shift the tank by (dx, dy); facing follows the request either way."""

        if dx == 0 and dy == 0:
            return False
        self.facing = (_sign(dx), _sign(dy))
        new_x = self.x + dx
        new_y = self.y + dy
        if blocked_by_wall(self.arena.footprint(new_x, new_y), walls):
            return False
        if not self.arena.in_playable_bounds(new_x, new_y):
            return False
        self.x = new_x
        self.y = new_y
        return True

    def shoot(self, *, bypass_cooldown: bool = False) -> Optional[Bullet]:
        if not bypass_cooldown and not self.controller.allow_shot():
            return None
        center_x, center_y = self.rect.center
        half = self.bullet_size // 2
        dir_x, dir_y = self.facing
        bullet = Bullet(
            center_x - half,
            center_y - half,
            dir_x * self.bullet_speed,
            dir_y * self.bullet_speed,
            size=self.bullet_size,
        )
        self.bullets.append(bullet)
        return bullet

    def update_bullets(self) -> None:
        # Bullets stopped by a collision last tick stay visible for that tick
        # and are dropped here; bullets leaving the field are dropped at once.
        self.bullets = [bullet for bullet in self.bullets if bullet.active]
        for bullet in self.bullets:
            bullet.advance(self.arena)
        self.bullets = [bullet for bullet in self.bullets if bullet.active]

    def active_bullets(self) -> List[Bullet]:
        return [bullet for bullet in self.bullets if bullet.active]

    def place(self, x: int, y: int, facing: Direction = UP) -> None:
        """Reposition for a fresh round, dropping every bullet in flight."""
        self.x = x
        self.y = y
        self.facing = facing
        self.bullets = []
        self.active = True
        self.controller.reset()

    def destroy(self) -> None:
        self.active = False


__all__ = [
    "Bullet",
    "CARDINAL_DIRECTIONS",
    "DOWN",
    "Direction",
    "ENEMY",
    "LEFT",
    "PLAYER",
    "RIGHT",
    "Tank",
    "TankController",
    "UP",
]
