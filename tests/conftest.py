import os
import random

import pytest

from battle_city.core.arena import Arena
from battle_city.core.session import GameSession
from battle_city.core.settings import SessionSettings

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


class FakeClock:
    """Manually advanced stand-in for ``time.monotonic``."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def arena() -> Arena:
    return Arena()


@pytest.fixture
def quiet_settings() -> SessionSettings:
    """Enemies that never move or fire on their own, for scripted scenarios."""

    return SessionSettings(
        enemy_count=3,
        move_cooldown=100_000,
        shoot_cooldown=100_000,
        extra_shot_chance=0.0,
        seed=1234,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def quiet_session(quiet_settings: SessionSettings, clock: FakeClock) -> GameSession:
    return GameSession(quiet_settings, rng=random.Random(1234), clock=clock)
