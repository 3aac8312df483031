"""Input handling for the pygame client."""

from __future__ import annotations

from typing import List

import pygame

from battle_city.core.session import PLAYING, TickInput
from battle_city.core.tank import Direction
from battle_city.pygame.keybindings import KeybindingManager


class InputHandler:
    """Translate pygame events into one :class:`TickInput` per frame."""

    def __init__(self, app, keybindings: KeybindingManager) -> None:
        self.app = app
        self.keybindings = keybindings
        self._moves: List[Direction] = []
        self._clicks: List[tuple[int, int]] = []
        self._fire = False
        self._quit = False
        self._menu_delta = 0
        self._confirm = False

    # ------------------------------------------------------------------
    # Event entry point
    def process_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self._quit = True
        elif event.type == pygame.KEYDOWN:
            self._handle_key(event.key)
        elif event.type == pygame.MOUSEBUTTONDOWN and getattr(event, "button", 1) == 1:
            self._clicks.append(self.app.to_arena_point(event.pos))

    def collect(self) -> TickInput:
        """Hand over everything gathered since the previous call."""
        tick_input = TickInput(
            moves=self._moves,
            fire=self._fire,
            quit=self._quit,
            clicks=self._clicks,
            menu_delta=self._menu_delta,
            confirm=self._confirm,
        )
        self._moves = []
        self._clicks = []
        self._fire = False
        self._quit = False
        self._menu_delta = 0
        self._confirm = False
        return tick_input

    # ------------------------------------------------------------------
    # Internal helpers
    def _handle_key(self, key: int) -> None:
        if key == pygame.K_ESCAPE:
            self._quit = True
            return
        if key == pygame.K_m:
            self.app.toggle_mute()
            return
        if self.app.session.phase != PLAYING:
            self._handle_menu_key(key)
            return

        direction = self.keybindings.direction_for(key)
        if direction is not None:
            self._moves.append(direction)
            return
        if self.keybindings.is_fire(key):
            self._fire = True

    def _handle_menu_key(self, key: int) -> None:
        if key in {pygame.K_UP, pygame.K_w}:
            self._menu_delta -= 1
        elif key in {pygame.K_DOWN, pygame.K_s}:
            self._menu_delta += 1
        elif key in {pygame.K_RETURN, pygame.K_SPACE, pygame.K_KP_ENTER}:
            self._confirm = True


__all__ = ["InputHandler"]
