"""Per-tick hit resolution between bullets, walls and tanks.

The scan order is part of the rules: player bullets meet walls before
enemies, and enemy fire is checked against walls before the player. A bullet
stopped by one step is skipped by every later step of the same tick.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from battle_city.core.arena import Wall, active_walls
from battle_city.core.tank import Tank

logger = logging.getLogger(__name__)


@dataclass
class CollisionReport:
    """Outcome of one resolution pass."""

    enemies_before: int = 0
    enemies_after: int = 0
    walls_destroyed: List[Wall] = field(default_factory=list)
    enemies_destroyed: List[Tank] = field(default_factory=list)
    enemy_bullets_blocked: int = 0
    player_hit: bool = False

    @property
    def victory(self) -> bool:
        return self.enemies_after == 0 and not self.player_hit


def resolve_collisions(
    player: Tank, enemies: List[Tank], walls: Sequence[Wall]
) -> CollisionReport:
    """Resolve every hit of the tick and prune destroyed enemies in place."""

    report = CollisionReport(enemies_before=len(enemies))
    _player_bullets_vs_walls(player, walls, report)
    _player_bullets_vs_enemies(player, enemies, report)
    _enemy_bullets_vs_walls(enemies, walls, report)
    _enemy_bullets_vs_player(enemies, player, report)

    enemies[:] = [enemy for enemy in enemies if enemy.active]
    report.enemies_after = len(enemies)
    if report.walls_destroyed or report.enemies_destroyed:
        logger.debug(
            "Collisions: %d wall(s) and %d enemy tank(s) destroyed, %d left",
            len(report.walls_destroyed),
            len(report.enemies_destroyed),
            report.enemies_after,
        )
    return report


def _player_bullets_vs_walls(
    player: Tank, walls: Sequence[Wall], report: CollisionReport
) -> None:
    for bullet in player.active_bullets():
        box = bullet.rect
        for wall in active_walls(walls):
            if box.intersects(wall.rect):
                wall.destroy()
                bullet.deactivate()
                report.walls_destroyed.append(wall)
                break


def _player_bullets_vs_enemies(
    player: Tank, enemies: Sequence[Tank], report: CollisionReport
) -> None:
    for bullet in player.active_bullets():
        box = bullet.rect
        for enemy in enemies:
            if enemy.active and box.intersects(enemy.rect):
                enemy.destroy()
                bullet.deactivate()
                report.enemies_destroyed.append(enemy)
                break


def _enemy_bullets_vs_walls(
    enemies: Sequence[Tank], walls: Sequence[Wall], report: CollisionReport
) -> None:
    # Enemy fire is absorbed by walls without damaging them.
    for enemy in enemies:
        if not enemy.active:
            continue
        for bullet in enemy.active_bullets():
            box = bullet.rect
            if any(box.intersects(wall.rect) for wall in active_walls(walls)):
                bullet.deactivate()
                report.enemy_bullets_blocked += 1


def _enemy_bullets_vs_player(
    enemies: Sequence[Tank], player: Tank, report: CollisionReport
) -> None:
    target = player.rect
    for enemy in enemies:
        if not enemy.active:
            continue
        for bullet in enemy.active_bullets():
            if bullet.rect.intersects(target):
                report.player_hit = True
                return


__all__ = ["CollisionReport", "resolve_collisions"]
