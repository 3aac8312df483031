"""Key sets that steer the player tank."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, List, Optional, Tuple

import pygame

from battle_city.core.tank import DOWN, LEFT, RIGHT, UP, Direction

_MOVE_FIELDS: Tuple[Tuple[str, Direction], ...] = (
    ("move_up", UP),
    ("move_down", DOWN),
    ("move_left", LEFT),
    ("move_right", RIGHT),
)


@dataclass(frozen=True)
class KeyBindings:
    move_up: int
    move_down: int
    move_left: int
    move_right: int
    fire: int

    @classmethod
    def from_mapping(cls, entry: Dict[str, Any], fallback: "KeyBindings") -> "KeyBindings":
        """Read key codes from ``entry``; anything unusable keeps ``fallback``'s key."""
        changes: Dict[str, int] = {}
        for field in fields(cls):
            raw = entry.get(field.name)
            if isinstance(raw, int) and not isinstance(raw, bool):
                changes[field.name] = raw
        return replace(fallback, **changes)


ARROW_KEYS = KeyBindings(
    move_up=pygame.K_UP,
    move_down=pygame.K_DOWN,
    move_left=pygame.K_LEFT,
    move_right=pygame.K_RIGHT,
    fire=pygame.K_SPACE,
)
WASD_KEYS = KeyBindings(
    move_up=pygame.K_w,
    move_down=pygame.K_s,
    move_left=pygame.K_a,
    move_right=pygame.K_d,
    fire=pygame.K_f,
)
DEFAULT_BINDINGS: Tuple[KeyBindings, ...] = (ARROW_KEYS, WASD_KEYS)


class KeybindingManager:
    """Primary and alternate key sets for the single player."""

    def __init__(self) -> None:
        self.bindings: List[KeyBindings] = list(DEFAULT_BINDINGS)
        self._directions = self._build_direction_map()

    def to_config(self) -> List[Dict[str, int]]:
        return [asdict(binding) for binding in self.bindings]

    def load_from_config(self, data: Any) -> None:
        """Restore the key sets saved by :meth:`to_config`; malformed entries are skipped."""
        if not isinstance(data, list):
            return
        entries = [entry for entry in data if isinstance(entry, dict)]
        if not entries:
            return
        self.bindings = [
            KeyBindings.from_mapping(entries[slot], default) if slot < len(entries) else default
            for slot, default in enumerate(DEFAULT_BINDINGS)
        ]
        self._directions = self._build_direction_map()

    def reset_to_defaults(self) -> None:
        self.bindings = list(DEFAULT_BINDINGS)
        self._directions = self._build_direction_map()

    def direction_for(self, key: int) -> Optional[Direction]:
        return self._directions.get(key)

    def is_fire(self, key: int) -> bool:
        return any(binding.fire == key for binding in self.bindings)

    def _build_direction_map(self) -> Dict[int, Direction]:
        # Earlier key sets win when two sets share a key.
        mapping: Dict[int, Direction] = {}
        for binding in self.bindings:
            for name, direction in _MOVE_FIELDS:
                mapping.setdefault(getattr(binding, name), direction)
        return mapping


__all__ = ["ARROW_KEYS", "DEFAULT_BINDINGS", "KeyBindings", "KeybindingManager", "WASD_KEYS"]
