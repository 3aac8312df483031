"""Menu state management shared by keyboard and pointer input."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, Dict, List, Optional

from battle_city.core.arena import Point, Rect


@dataclass(frozen=True)
class MenuOption:
    """Entry rendered in a menu overlay, with its clickable region."""

    label: str
    action: Callable[[], None]
    rect: Optional[Rect] = None


MessageProvider = Callable[[], Optional[str]]
OptionBuilder = Callable[[], List[MenuOption]]


@dataclass
class MenuDefinition:
    """Declarative description of a menu screen."""

    title: str
    build_options: OptionBuilder
    default_message: Optional[MessageProvider] = None


@dataclass
class MenuController:
    """Track active menu, selection, status messaging and button layout."""

    area: Rect = field(default_factory=lambda: Rect(0, 0, 800, 600))
    option_width: int = 240
    option_height: int = 48
    spacing: int = 16
    definitions: Dict[str, MenuDefinition] = field(default_factory=dict)
    state: Optional[str] = None
    title: str = "Battle City"
    message: Optional[str] = None
    selection: int = 0
    options: List[MenuOption] = field(default_factory=list)

    def register(self, name: str, definition: MenuDefinition) -> None:
        self.definitions[name] = definition

    def activate(self, name: str, *, message: Optional[str] = None) -> None:
        definition = self.definitions.get(name)
        if definition is None:
            raise KeyError(f"Unknown menu '{name}'")
        if message is None and definition.default_message is not None:
            message = definition.default_message()
        self.state = name
        self.title = definition.title
        self.message = message
        self.options = self._layout(definition.build_options())
        self.selection = 0

    def close(self) -> None:
        self.state = None
        self.options = []
        self.selection = 0
        self.title = "Battle City"
        self.message = None

    def change_selection(self, delta: int) -> None:
        if not self.options:
            return
        self.selection = (self.selection + delta) % len(self.options)

    def execute_current(self) -> None:
        if not self.options:
            return
        self.current_option.action()

    def click(self, point: Point) -> bool:
        """Invoke the option under ``point``; return whether one was hit."""
        for index, option in enumerate(self.options):
            if option.rect is not None and option.rect.contains_point(point):
                self.selection = index
                option.action()
                return True
        return False

    @property
    def current_option(self) -> MenuOption:
        return self.options[self.selection]

    # ------------------------------------------------------------------
    def _layout(self, options: List[MenuOption]) -> List[MenuOption]:
        if not options:
            return []
        total = len(options) * self.option_height + (len(options) - 1) * self.spacing
        left = self.area.left + (self.area.width - self.option_width) // 2
        top = self.area.top + self.area.height // 2 - total // 2 + self.option_height
        laid_out: List[MenuOption] = []
        for index, option in enumerate(options):
            y = top + index * (self.option_height + self.spacing)
            rect = Rect(left, y, self.option_width, self.option_height)
            laid_out.append(replace(option, rect=rect))
        return laid_out


__all__ = ["MenuController", "MenuDefinition", "MenuOption"]
