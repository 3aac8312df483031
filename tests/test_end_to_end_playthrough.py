import logging
import os

import pytest

from battle_city.core.session import MENU, PLAYING, TERMINATED, VICTORY
from battle_city.core.settings import SessionSettings

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


class AutoPilot:
    """Drive the pygame client through key and mouse events, one frame at a time."""

    def __init__(self, app, pygame_module, logger: logging.Logger) -> None:
        self.app = app
        self.pg = pygame_module
        self.logger = logger
        self.frames = 0

    def press(self, key: int) -> None:
        self.app.input.process_event(self.pg.event.Event(self.pg.KEYDOWN, key=key))
        self.frame()

    def click(self, pos) -> None:
        self.app.input.process_event(
            self.pg.event.Event(self.pg.MOUSEBUTTONDOWN, button=1, pos=pos)
        )
        self.frame()

    def frame(self) -> None:
        self.app.step()
        self.frames += 1

    def click_option(self, label: str) -> None:
        for option_label, region in self.app.session.snapshot().menu_options:
            if option_label == label:
                self.logger.info("Clicking menu option: %s", label)
                self.click(region.center)
                return
        raise AssertionError(f"Menu option '{label}' not on screen")

    def line_up_with(self, target_x: int) -> None:
        player = self.app.session.player
        while player.x != target_x:
            key = self.pg.K_LEFT if player.x > target_x else self.pg.K_RIGHT
            before = player.x
            self.press(key)
            assert player.x != before, "Bottom row should be free of walls"

    def fire_until(self, phase: str, *, max_frames: int = 2_000) -> None:
        for _ in range(max_frames):
            self.press(self.pg.K_SPACE)
            if self.app.session.phase == phase:
                return
        raise AssertionError(f"Session never reached '{phase}'")


@pytest.mark.e2e
def test_automatic_playthrough_wins_and_replays(monkeypatch, tmp_path) -> None:
    import pygame
    from battle_city import PygameBattleCity
    from battle_city.pygame import config

    logger = logging.getLogger("battle_city.e2e")
    logger.setLevel(logging.INFO)

    monkeypatch.setattr(config, "_SETTINGS_PATH", tmp_path / "user_settings.json", raising=False)

    settings = SessionSettings(
        enemy_count=1,
        move_cooldown=100_000,
        shoot_cooldown=100_000,
        extra_shot_chance=0.0,
        dwell_seconds=600.0,
        seed=2024,
    )

    try:
        app = PygameBattleCity(settings, mute=True)
        pilot = AutoPilot(app, pygame, logger)
        session = app.session
        assert session.phase == MENU

        pilot.click_option("Start Game")
        assert session.phase == PLAYING

        enemy = session.enemies[0]
        logger.info("Enemy spawned at %s, player at %s", enemy.position, session.player.position)
        pilot.line_up_with(enemy.x)
        pilot.press(pygame.K_UP)
        assert session.player.facing == (0, -1)

        walls_before = sum(wall.active for wall in session.walls)
        pilot.fire_until(VICTORY)
        walls_after = sum(wall.active for wall in session.walls)
        logger.info(
            "Victory after %d frames, %d wall(s) cleared on the way",
            pilot.frames,
            walls_before - walls_after,
        )
        assert session.victories == 1
        assert session.enemies == []
        assert [label for label, _ in session.snapshot().menu_options] == [
            "Play Again",
            "Exit Game",
        ]

        pilot.press(pygame.K_RETURN)
        assert session.phase == PLAYING
        assert session.round == 2
        assert len(session.enemies) == 1
        assert sum(wall.active for wall in session.walls) == 35
        assert session.player.position == session.arena.start_position

        pilot.press(pygame.K_ESCAPE)
        assert session.phase == TERMINATED
        assert not app.running
    finally:
        pygame.quit()
