"""Timer-driven decision policy for enemy tanks."""

from __future__ import annotations

import logging
import random
from typing import Iterable, Optional, Sequence

from battle_city.core.arena import Wall
from battle_city.core.tank import CARDINAL_DIRECTIONS, Bullet, Direction, Tank, TankController

logger = logging.getLogger(__name__)


class AIController(TankController):
    """Two decoupled countdowns: one picks a new heading, one pulls the trigger.

    A move that the walls or the arena bounds veto is not retried; the tank
    simply waits for the next expiry of the move timer.
    """

    def __init__(
        self,
        *,
        move_cooldown: int = 15,
        shoot_cooldown: int = 60,
        step: int = 5,
        rng: Optional[random.Random] = None,
        headings: Sequence[Direction] = CARDINAL_DIRECTIONS,
    ) -> None:
        self.move_cooldown = max(1, move_cooldown)
        self.shoot_cooldown = max(1, shoot_cooldown)
        self.step = step
        self.headings = tuple(headings)
        self._rng = rng or random.Random()
        self.move_timer = self.move_cooldown
        self.shoot_timer = self.shoot_cooldown

    # ------------------------------------------------------------------
    def reset(self) -> None:
        self.move_timer = self.move_cooldown
        self.shoot_timer = self.shoot_cooldown

    def allow_shot(self) -> bool:
        self.shoot_timer -= 1
        if self.shoot_timer > 0:
            return False
        self.shoot_timer = self.shoot_cooldown
        return True

    def choose_heading(self) -> Direction:
        return self._rng.choice(self.headings)

    def update(self, tank: Tank, walls: Iterable[Wall]) -> Optional[Bullet]:
        """Run one tick of the decision loop; return the bullet fired, if any."""
        self.advance_movement(tank, walls)
        return tank.shoot()

    def advance_movement(self, tank: Tank, walls: Iterable[Wall]) -> bool:
        self.move_timer -= 1
        if self.move_timer > 0:
            return False
        self.move_timer = self.move_cooldown
        dir_x, dir_y = self.choose_heading()
        moved = tank.move(dir_x * self.step, dir_y * self.step, walls)
        if not moved:
            logger.debug(
                "Enemy at (%d, %d) stays put facing %s", tank.x, tank.y, tank.facing
            )
        return moved


__all__ = ["AIController"]
