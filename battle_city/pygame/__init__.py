"""Pygame front-end for Battle City."""

from battle_city.pygame.app import PygameBattleCity, run_pygame

__all__ = ["PygameBattleCity", "run_pygame"]
