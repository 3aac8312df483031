"""Pygame-powered presentation layer for the Battle City session."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

try:
    import pygame
except ImportError as exc:  # pragma: no cover - depends on runtime environment
    raise RuntimeError(
        "The pygame package is required to run the graphical version of Battle City."
    ) from exc

from battle_city.core.arena import Point
from battle_city.core.session import (
    DEFEAT,
    ENEMY_DESTROYED,
    ENEMY_FIRED,
    PLAYER_FIRED,
    VICTORY,
    WALL_DESTROYED,
    GameSession,
    TickReport,
)
from battle_city.core.settings import SessionSettings
from battle_city.pygame.config import (
    load_user_settings,
    save_user_settings,
    session_settings_from,
)
from battle_city.pygame.input import InputHandler
from battle_city.pygame.keybindings import KeybindingManager
from battle_city.pygame.menus import draw_hud, draw_menu_overlay
from battle_city.pygame.renderer import draw_scene
from battle_city.pygame.soundscape import Soundscape
from battle_city.pygame.textures import (
    generate_brick_texture,
    generate_noise_texture,
    load_texture,
)

logger = logging.getLogger(__name__)

_ASSET_PATH = Path(__file__).resolve().parent / "assets"


class PygameBattleCity:
    """Graphical Battle City client built on top of :class:`GameSession`."""

    def __init__(
        self,
        settings: Optional[SessionSettings] = None,
        *,
        seed: Optional[int] = None,
        enemies: Optional[int] = None,
        mute: bool = False,
    ) -> None:
        pygame.init()
        pygame.font.init()

        self._user_settings = load_user_settings()

        settings = session_settings_from(self._user_settings, settings)
        overrides: Dict[str, object] = {}
        if seed is not None:
            overrides["seed"] = seed
        if enemies is not None:
            overrides["enemy_count"] = enemies
        if overrides:
            settings = settings.with_overrides(overrides)
        self.session = GameSession(settings)
        arena = self.session.arena

        self.screen = pygame.display.set_mode((arena.width, arena.height))
        pygame.display.set_caption("Battle City")

        self.font_small = pygame.font.SysFont("consolas", 16)
        self.font_regular = pygame.font.SysFont("consolas", 20)
        self.font_large = pygame.font.SysFont(None, 56)

        self.clock = pygame.time.Clock()
        self.fps = settings.ticks_per_second

        self.border_color = pygame.Color(128, 128, 128)
        self.floor_color = pygame.Color(0, 0, 0)
        self.wall_color = pygame.Color(150, 75, 0)
        self.tank_colors = {
            "player": pygame.Color(255, 255, 0),
            "enemy": pygame.Color(255, 0, 0),
        }
        self.bullet_colors = {
            "player": pygame.Color(255, 255, 255),
            "enemy": pygame.Color(255, 200, 200),
        }
        self.textures = self._load_textures(arena.tile_size)

        self.keybindings = KeybindingManager()
        stored_keybindings = self._user_settings.get("keybindings")
        if isinstance(stored_keybindings, list):
            self.keybindings.load_from_config(stored_keybindings)

        self._volume_settings = {"master": 1.0, "effects": 1.0, "ui": 0.8}
        stored_volume = self._user_settings.get("volume")
        if isinstance(stored_volume, dict):
            for key in self._volume_settings:
                value = stored_volume.get(key)
                if isinstance(value, (int, float)) and not isinstance(value, bool):
                    self._volume_settings[key] = max(0.0, min(1.0, float(value)))

        self.soundscape = Soundscape(_ASSET_PATH / "audio")
        for category, value in self._volume_settings.items():
            self.soundscape.set_volume(category, value)
        self.soundscape.set_muted(mute or bool(self._user_settings.get("muted", False)))
        self._register_audio_banks()
        self.session.add_listener(self._on_session_event)

        self.input = InputHandler(self, self.keybindings)
        logger.debug(
            "Window %dx%d, %d enemies, seed=%s",
            arena.width,
            arena.height,
            settings.enemy_count,
            settings.seed,
        )

    # ------------------------------------------------------------------
    # Properties
    @property
    def running(self) -> bool:
        return self.session.running

    # ------------------------------------------------------------------
    # Setup helpers
    def _load_textures(self, tile_size: int) -> Dict[str, pygame.Surface]:
        def floor(size: int) -> pygame.Surface:
            surface = pygame.Surface((size, size))
            surface.fill(self.floor_color)
            surface.blit(
                generate_noise_texture(size, alpha=18, brightness=(40, 90)), (0, 0)
            )
            return surface

        return {
            "floor": load_texture(_ASSET_PATH / "textures" / "floor.png", tile_size, floor),
            "wall": load_texture(
                _ASSET_PATH / "textures" / "wall.png",
                tile_size,
                lambda size: generate_brick_texture(size, base=tuple(self.wall_color)[:3]),
            ),
        }

    def _register_audio_banks(self) -> None:
        if not self.soundscape.enabled:
            return
        banks = [
            (PLAYER_FIRED, "effects/player_fired.wav", "effects"),
            (ENEMY_FIRED, "effects/enemy_fired.wav", "effects"),
            (WALL_DESTROYED, "effects/wall_destroyed.wav", "effects"),
            (ENEMY_DESTROYED, "effects/enemy_destroyed.wav", "effects"),
            (VICTORY, "effects/victory.wav", "effects"),
            (DEFEAT, "effects/defeat.wav", "effects"),
            ("menu_move", "ui/menu_move.wav", "ui"),
            ("menu_select", "ui/menu_select.wav", "ui"),
        ]
        for key, filename, category in banks:
            self.soundscape.load(key, filename, category=category)

    def _save_user_settings(self) -> None:
        data = dict(self._user_settings)
        data["keybindings"] = self.keybindings.to_config()
        data["volume"] = {k: float(v) for k, v in self._volume_settings.items()}
        data["muted"] = bool(self.soundscape.muted)
        save_user_settings(data)
        self._user_settings = data

    def _on_session_event(self, event: str) -> None:
        self.soundscape.play(event)

    # ------------------------------------------------------------------
    # Hooks used by the input handler
    def to_arena_point(self, pos) -> Point:
        """Map a window position onto arena pixels."""
        arena = self.session.arena
        width, height = self.screen.get_size()
        x = int(pos[0] * arena.width / max(1, width))
        y = int(pos[1] * arena.height / max(1, height))
        return (x, y)

    def toggle_mute(self) -> None:
        self.soundscape.set_muted(not self.soundscape.muted)
        logger.info("Sound %s", "muted" if self.soundscape.muted else "unmuted")
        self._save_user_settings()

    # ------------------------------------------------------------------
    # Game Loop helpers
    def run(self) -> None:
        """Main pygame loop."""

        try:
            while self.running:
                self.clock.tick(self.fps)
                self.step()
        finally:
            self._save_user_settings()
            pygame.quit()

    def step(self) -> TickReport:
        """Run one frame: gather input, advance the session, draw."""
        self._handle_events()
        tick_input = self.input.collect()
        if tick_input.menu_delta:
            self.soundscape.play("menu_move")
        if tick_input.confirm or tick_input.clicks:
            self.soundscape.play("menu_select")
        report = self.session.tick(tick_input)
        if self.running:
            self._draw()
        return report

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            self.input.process_event(event)

    def _draw(self) -> None:
        snapshot = self.session.snapshot()
        draw_scene(self, snapshot)
        draw_hud(self, snapshot)
        draw_menu_overlay(self, snapshot)
        pygame.display.flip()


def run_pygame(**kwargs: object) -> None:
    """Convenience helper for launching the pygame client."""

    app = PygameBattleCity(**kwargs)
    app.run()


__all__ = ["PygameBattleCity", "run_pygame"]
