"""Top-level package for the Battle City arcade tank game."""

__version__ = "1.0.0"

from battle_city.core import (
    Arena,
    GameSession,
    RenderSnapshot,
    SessionSettings,
    SpawnPlacementError,
    Tank,
    TickInput,
)

try:
    from battle_city.pygame import PygameBattleCity, run_pygame  # type: ignore[misc]
except (ImportError, RuntimeError):
    # The simulation core stays importable on machines without pygame.
    PygameBattleCity = None

    def run_pygame(*_args, **_kwargs):  # type: ignore[override]
        raise RuntimeError(
            "Battle City needs pygame for its window and sound. "
            "Install it with `pip install pygame` to play."
        )


__all__ = [
    "Arena",
    "GameSession",
    "PygameBattleCity",
    "RenderSnapshot",
    "SessionSettings",
    "SpawnPlacementError",
    "Tank",
    "TickInput",
    "__version__",
    "run_pygame",
]
