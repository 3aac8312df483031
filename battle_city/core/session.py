"""Session state machine driving the fixed-tick simulation."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from battle_city.core.ai import AIController
from battle_city.core.arena import Arena, Point, Rect, Wall, generate_walls
from battle_city.core.collision import CollisionReport, resolve_collisions
from battle_city.core.menu import MenuController, MenuDefinition, MenuOption
from battle_city.core.settings import SessionSettings
from battle_city.core.spawn import place_enemies
from battle_city.core.tank import DOWN, ENEMY, PLAYER, UP, Direction, Tank

logger = logging.getLogger(__name__)

MENU = "menu"
PLAYING = "playing"
VICTORY = "victory"
DEFEAT = "defeat"
TERMINATED = "terminated"
TERMINAL_PHASES = frozenset({VICTORY, DEFEAT})

PLAYER_FIRED = "player_fired"
ENEMY_FIRED = "enemy_fired"
WALL_DESTROYED = "wall_destroyed"
ENEMY_DESTROYED = "enemy_destroyed"

EventListener = Callable[[str], None]


@dataclass
class TickInput:
    """Everything the player did during one tick."""

    moves: List[Direction] = field(default_factory=list)
    fire: bool = False
    quit: bool = False
    clicks: List[Point] = field(default_factory=list)
    menu_delta: int = 0
    confirm: bool = False


@dataclass
class TickReport:
    """What happened during one tick, in emission order."""

    phase: str
    events: List[str] = field(default_factory=list)
    collisions: Optional[CollisionReport] = None


@dataclass(frozen=True)
class EnemyView:
    rect: Rect
    facing: Direction
    bullets: Tuple[Rect, ...]


@dataclass(frozen=True)
class RenderSnapshot:
    """Read-only picture of the session handed to the renderer."""

    phase: str
    background_tiles: Tuple[Rect, ...]
    walls: Tuple[Rect, ...]
    player: Rect
    player_facing: Direction
    player_bullets: Tuple[Rect, ...]
    enemies: Tuple[EnemyView, ...]
    round: int
    victories: int
    defeats: int
    menu_title: Optional[str] = None
    menu_message: Optional[str] = None
    menu_options: Tuple[Tuple[str, Rect], ...] = ()
    menu_selection: int = 0

    @property
    def enemies_remaining(self) -> int:
        return len(self.enemies)


class GameSession:
    """Own the arena, the tanks and the phase of one play-through and its replays."""

    def __init__(
        self,
        settings: Optional[SessionSettings] = None,
        *,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.settings = settings or SessionSettings()
        self.arena = Arena.from_settings(self.settings)
        self.rng = rng or random.Random(self.settings.seed)
        self.clock = clock

        self.phase = MENU
        self.walls: List[Wall] = []
        self.enemies: List[Tank] = []
        start_x, start_y = self.arena.start_position
        self.player = Tank(
            self.arena,
            start_x,
            start_y,
            kind=PLAYER,
            facing=UP,
            bullet_speed=self.settings.bullet_speed,
            bullet_size=self.settings.bullet_size,
        )

        self.round = 0
        self.victories = 0
        self.defeats = 0
        self.tick_count = 0
        self._terminal_since: Optional[float] = None
        self._listeners: List[EventListener] = []
        self._events: List[str] = []

        self.menu = MenuController(area=Rect(0, 0, self.arena.width, self.arena.height))
        self._register_menus()
        self.menu.activate(MENU)

    # ------------------------------------------------------------------
    # Properties
    @property
    def running(self) -> bool:
        return self.phase != TERMINATED

    @property
    def dwell_remaining(self) -> float:
        if self._terminal_since is None:
            return 0.0
        elapsed = self.clock() - self._terminal_since
        return max(0.0, self.settings.dwell_seconds - elapsed)

    def add_listener(self, listener: EventListener) -> None:
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Transitions
    def start(self) -> bool:
        if self.phase != MENU:
            return False
        self._begin_round()
        return True

    def replay(self) -> bool:
        if self.phase not in TERMINAL_PHASES:
            return False
        self._begin_round()
        return True

    def exit(self) -> bool:
        if self.phase not in {MENU, VICTORY, DEFEAT}:
            return False
        self._set_phase(TERMINATED)
        return True

    def request_quit(self) -> None:
        if self.phase != TERMINATED:
            self._set_phase(TERMINATED)

    def handle_click(self, point: Point) -> bool:
        if self.phase not in {MENU, VICTORY, DEFEAT}:
            return False
        return self.menu.click(point)

    # ------------------------------------------------------------------
    # Loop
    def tick(self, tick_input: Optional[TickInput] = None) -> TickReport:
        """Advance the machine by one fixed step."""

        tick_input = tick_input or TickInput()
        self._events = []
        report = TickReport(phase=self.phase, events=self._events)
        if self.phase == TERMINATED:
            return report

        was_playing = self.phase == PLAYING
        if tick_input.quit:
            self.request_quit()
        elif not was_playing:
            self._process_menu_input(tick_input)

        if was_playing:
            report.collisions = self._advance_round(tick_input)
        elif self.phase in TERMINAL_PHASES and self.dwell_remaining <= 0.0:
            logger.info("Dwell elapsed after %s; starting a new round", self.phase)
            self.replay()

        report.phase = self.phase
        return report

    def snapshot(self) -> RenderSnapshot:
        enemies = tuple(
            EnemyView(
                rect=enemy.rect,
                facing=enemy.facing,
                bullets=tuple(bullet.rect for bullet in enemy.bullets),
            )
            for enemy in self.enemies
            if enemy.active
        )
        menu_visible = self.menu.state is not None
        return RenderSnapshot(
            phase=self.phase,
            background_tiles=tuple(self.arena.background_tiles()),
            walls=tuple(wall.rect for wall in self.walls if wall.active),
            player=self.player.rect,
            player_facing=self.player.facing,
            player_bullets=tuple(bullet.rect for bullet in self.player.bullets),
            enemies=enemies,
            round=self.round,
            victories=self.victories,
            defeats=self.defeats,
            menu_title=self.menu.title if menu_visible else None,
            menu_message=self.menu.message if menu_visible else None,
            menu_options=tuple(
                (option.label, option.rect)
                for option in self.menu.options
                if option.rect is not None
            ),
            menu_selection=self.menu.selection,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    def _register_menus(self) -> None:
        self.menu.register(
            MENU,
            MenuDefinition(
                title="Battle City",
                build_options=lambda: [
                    MenuOption("Start Game", self.start),
                    MenuOption("Exit Game", self.exit),
                ],
                default_message=lambda: "Click or use Up/Down and Enter to choose.",
            ),
        )
        self.menu.register(
            VICTORY,
            MenuDefinition(
                title="Victory!",
                build_options=self._post_round_options,
                default_message=lambda: "Every enemy tank destroyed.",
            ),
        )
        self.menu.register(
            DEFEAT,
            MenuDefinition(
                title="Defeat",
                build_options=self._post_round_options,
                default_message=lambda: "Your tank was hit.",
            ),
        )

    def _post_round_options(self) -> List[MenuOption]:
        return [
            MenuOption("Play Again", self.replay),
            MenuOption("Exit Game", self.exit),
        ]

    def _process_menu_input(self, tick_input: TickInput) -> None:
        for point in tick_input.clicks:
            if self.handle_click(point):
                return
        if tick_input.menu_delta:
            self.menu.change_selection(tick_input.menu_delta)
        if tick_input.confirm:
            self.menu.execute_current()

    def _begin_round(self) -> None:
        settings = self.settings
        walls = generate_walls(self.arena)
        start_x, start_y = self.arena.start_position
        player_rect = self.arena.footprint(start_x, start_y)
        positions = place_enemies(
            settings.enemy_count,
            self.arena,
            walls,
            player_rect,
            rng=self.rng,
            margin_tiles=settings.spawn_margin_tiles,
            max_attempts=settings.spawn_attempts,
        )

        self.walls = walls
        self.player.place(start_x, start_y, UP)
        self.enemies = [self._create_enemy(x, y) for x, y in positions]
        self.round += 1
        self.tick_count = 0
        self._terminal_since = None
        self.menu.close()
        self._set_phase(PLAYING)
        logger.info(
            "Round %d: %d walls, %d enemies, player at (%d, %d)",
            self.round,
            len(self.walls),
            len(self.enemies),
            start_x,
            start_y,
        )

    def _create_enemy(self, x: int, y: int) -> Tank:
        settings = self.settings
        controller = AIController(
            move_cooldown=settings.move_cooldown,
            shoot_cooldown=settings.shoot_cooldown,
            step=settings.move_step,
            rng=self.rng,
        )
        return Tank(
            self.arena,
            x,
            y,
            kind=ENEMY,
            facing=DOWN,
            controller=controller,
            bullet_speed=settings.bullet_speed,
            bullet_size=settings.bullet_size,
        )

    def _advance_round(self, tick_input: TickInput) -> CollisionReport:
        settings = self.settings
        step = settings.move_step
        player = self.player
        self.tick_count += 1

        for dir_x, dir_y in tick_input.moves:
            player.move(dir_x * step, dir_y * step, self.walls)
        if tick_input.fire and player.shoot() is not None:
            self._emit(PLAYER_FIRED)
        player.update_bullets()

        for enemy in self.enemies:
            if not enemy.active:
                continue
            if enemy.controller.update(enemy, self.walls) is not None:
                self._emit(ENEMY_FIRED)
            enemy.update_bullets()
            if self.rng.random() < settings.extra_shot_chance:
                enemy.shoot(bypass_cooldown=True)
                self._emit(ENEMY_FIRED)

        collisions = resolve_collisions(player, self.enemies, self.walls)
        for _ in collisions.walls_destroyed:
            self._emit(WALL_DESTROYED)
        for _ in collisions.enemies_destroyed:
            self._emit(ENEMY_DESTROYED)

        if self.phase == PLAYING:
            if collisions.player_hit:
                self.defeats += 1
                self._finish_round(DEFEAT)
            elif collisions.victory:
                self.victories += 1
                self._finish_round(VICTORY)
        return collisions

    def _finish_round(self, phase: str) -> None:
        self._terminal_since = self.clock()
        self._set_phase(phase)
        self.menu.activate(phase)
        self._emit(phase)

    def _set_phase(self, phase: str) -> None:
        if phase == self.phase:
            return
        logger.info("Session phase %s -> %s", self.phase, phase)
        self.phase = phase

    def _emit(self, event: str) -> None:
        self._events.append(event)
        for listener in self._listeners:
            listener(event)


__all__ = [
    "DEFEAT",
    "ENEMY_DESTROYED",
    "ENEMY_FIRED",
    "EnemyView",
    "GameSession",
    "MENU",
    "PLAYER_FIRED",
    "PLAYING",
    "RenderSnapshot",
    "TERMINAL_PHASES",
    "TERMINATED",
    "TickInput",
    "TickReport",
    "VICTORY",
    "WALL_DESTROYED",
]
