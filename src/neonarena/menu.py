"""Arena selection menu."""

from __future__ import annotations

from dataclasses import dataclass
import pygame

from .utils import BG_COLOR, CYAN, SHADOW_COLOR, TEXT_COLOR, YELLOW


@dataclass(slots=True)
class MenuItem:
    """Single selectable menu row."""

    label: str
    action: str


class Menu:
    """Vertical keyboard-driven menu with a line of hints under the entries."""

    def __init__(self, title: str, items: list[MenuItem], hint: str = "") -> None:
        self.title = title
        self.items = items
        self.hint = hint
        self.selected_index = 0

    def move(self, delta: int) -> None:
        """Move the highlight by ``delta`` rows, wrapping around."""
        self.selected_index = (self.selected_index + delta) % len(self.items)

    def current_action(self) -> str:
        return self.items[self.selected_index].action

    def render(self, surface: pygame.Surface, title_font: pygame.font.Font, body_font: pygame.font.Font) -> None:
        """Draw the menu screen."""
        surface.fill(BG_COLOR)
        center_x = surface.get_width() // 2
        title = title_font.render(self.title, True, CYAN)
        shadow = title_font.render(self.title, True, SHADOW_COLOR)
        surface.blit(shadow, (center_x - title.get_width() // 2 + 3, 85))
        surface.blit(title, (center_x - title.get_width() // 2, 82))

        start_y = 230
        for idx, item in enumerate(self.items):
            selected = idx == self.selected_index
            color = YELLOW if selected else TEXT_COLOR
            prefix = "> " if selected else "  "
            line = body_font.render(f"{prefix}{item.label}", True, color)
            surface.blit(line, (center_x - line.get_width() // 2, start_y + idx * 42))

        if self.hint:
            hint = body_font.render(self.hint, True, TEXT_COLOR)
            surface.blit(hint, (center_x - hint.get_width() // 2, start_y + len(self.items) * 42 + 40))
