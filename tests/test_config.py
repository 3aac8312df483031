import logging

import pygame

from battle_city.core.settings import SessionSettings
from battle_city.core.tank import DOWN, LEFT, UP
from battle_city.pygame import config
from battle_city.pygame.keybindings import KeybindingManager


def test_user_settings_round_trip(monkeypatch, tmp_path) -> None:
    monkeypatch.setattr(config, "_SETTINGS_PATH", tmp_path / "nested" / "user_settings.json")

    assert config.load_user_settings() == {}
    config.save_user_settings({"muted": True, "volume": {"master": 0.4}})

    assert config.load_user_settings() == {"muted": True, "volume": {"master": 0.4}}


def test_malformed_settings_file_is_ignored(monkeypatch, tmp_path, caplog) -> None:
    path = tmp_path / "user_settings.json"
    path.write_text("{not json")
    monkeypatch.setattr(config, "_SETTINGS_PATH", path)

    with caplog.at_level(logging.WARNING, logger="battle_city.pygame.config"):
        assert config.load_user_settings() == {}

    assert "malformed" in caplog.text


def test_session_overrides_skip_invalid_fields() -> None:
    user_settings = {
        "session": {
            "enemy_count": 0,
            "move_cooldown": -3,
            "shoot_cooldown": 30,
            "extra_shot_chance": "often",
            "dwell_seconds": 5,
            "tile_size": True,
            "seed": 42,
            "unknown": 1,
        }
    }

    settings = config.session_settings_from(user_settings)

    assert settings.enemy_count == 0
    assert settings.move_cooldown == 15
    assert settings.shoot_cooldown == 30
    assert settings.extra_shot_chance == 0.02
    assert settings.dwell_seconds == 5.0
    assert settings.tile_size == 40
    assert settings.seed == 42


def test_missing_session_section_keeps_base() -> None:
    base = SessionSettings(enemy_count=4)

    assert config.session_settings_from({"session": []}, base) is base


def test_default_keybindings_cover_arrows_and_wasd() -> None:
    manager = KeybindingManager()

    assert manager.direction_for(pygame.K_UP) == UP
    assert manager.direction_for(pygame.K_a) == LEFT
    assert manager.direction_for(pygame.K_q) is None
    assert manager.is_fire(pygame.K_SPACE)
    assert manager.is_fire(pygame.K_f)
    assert not manager.is_fire(pygame.K_RETURN)


def test_keybindings_restore_from_config() -> None:
    manager = KeybindingManager()
    stored = manager.to_config()
    stored[0]["move_down"] = pygame.K_j
    stored[0]["fire"] = "broken"

    restored = KeybindingManager()
    restored.load_from_config(stored[:1])

    assert restored.direction_for(pygame.K_j) == DOWN
    assert restored.is_fire(pygame.K_SPACE)
    assert restored.direction_for(pygame.K_w) == UP

    restored.reset_to_defaults()
    assert restored.direction_for(pygame.K_j) is None


def test_configure_logging_sets_root_level() -> None:
    from battle_city.logging_utils import configure_logging

    root = logging.getLogger()
    previous = root.level
    try:
        configure_logging("debug")
        assert root.level == logging.DEBUG
        configure_logging("nonsense")
        assert root.level == logging.INFO
    finally:
        root.setLevel(previous)
