"""Session constants for the Battle City simulation."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional


@dataclass
class SessionSettings:
    """Configuration options for a play session."""

    tile_size: int = 40
    width_tiles: int = 20
    height_tiles: int = 15
    enemy_count: int = 10
    move_step: int = 5
    bullet_speed: int = 5
    bullet_size: int = 10
    move_cooldown: int = 15  # ticks between enemy heading changes
    shoot_cooldown: int = 60  # ticks between scheduled enemy shots
    extra_shot_chance: float = 0.02
    dwell_seconds: float = 3.0
    spawn_attempts: int = 1000
    spawn_margin_tiles: int = 2
    ticks_per_second: int = 60
    seed: Optional[int] = None

    def with_overrides(self, overrides: Dict[str, Any]) -> "SessionSettings":
        """Return a copy with every valid override applied.

        Unknown keys and values of the wrong type are skipped one by one so a
        partially broken settings file still applies what it can.
        """

        values = dict(vars(self))
        for field_def in fields(self):
            if field_def.name not in overrides:
                continue
            raw = overrides[field_def.name]
            current = values[field_def.name]
            if field_def.name == "seed":
                if raw is None or (isinstance(raw, int) and not isinstance(raw, bool)):
                    values["seed"] = raw
                continue
            if isinstance(current, bool) or isinstance(raw, bool):
                continue
            if isinstance(current, int) and isinstance(raw, int):
                if raw > 0 or (raw == 0 and field_def.name == "enemy_count"):
                    values[field_def.name] = raw
            elif isinstance(current, float) and isinstance(raw, (int, float)):
                if raw >= 0:
                    values[field_def.name] = float(raw)
        return SessionSettings(**values)


__all__ = ["SessionSettings"]
