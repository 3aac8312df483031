"""Core simulation for Battle City, independent of rendering."""

from battle_city.core.ai import AIController
from battle_city.core.arena import Arena, Rect, Wall, generate_walls
from battle_city.core.collision import CollisionReport, resolve_collisions
from battle_city.core.menu import MenuController, MenuDefinition, MenuOption
from battle_city.core.session import (
    GameSession,
    RenderSnapshot,
    TickInput,
    TickReport,
)
from battle_city.core.settings import SessionSettings
from battle_city.core.spawn import SpawnPlacementError, place_enemies
from battle_city.core.tank import Bullet, Tank, TankController

__all__ = [
    "AIController",
    "Arena",
    "Bullet",
    "CollisionReport",
    "GameSession",
    "MenuController",
    "MenuDefinition",
    "MenuOption",
    "Rect",
    "RenderSnapshot",
    "SessionSettings",
    "SpawnPlacementError",
    "Tank",
    "TankController",
    "TickInput",
    "TickReport",
    "Wall",
    "generate_walls",
    "place_enemies",
    "resolve_collisions",
]
