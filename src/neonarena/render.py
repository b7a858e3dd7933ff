"""Frame drawing for both arenas. Functions here only read state snapshots."""

from __future__ import annotations

import pygame

from .lightcycles import LightCycleState
from .pong import PongState
from .utils import (
    BG_COLOR,
    BORDER_COLOR,
    CYAN,
    GRID_COLOR,
    MINT,
    ORANGE,
    ROSE,
    WHITE,
)

CYCLE_COLORS = {
    2: (CYAN, ORANGE),
    4: (CYAN, MINT, ORANGE, ROSE),
}
PADDLE_COLORS = (CYAN, ORANGE)


def cycle_color(state: LightCycleState, index: int) -> tuple[int, int, int]:
    """Return the colour of player ``index`` for the state's roster size."""
    palette = CYCLE_COLORS.get(len(state.players), CYCLE_COLORS[4])
    return palette[index % len(palette)]


def _dim(color: tuple[int, int, int]) -> tuple[int, int, int]:
    return (color[0] // 4, color[1] // 4, color[2] // 4)


def draw_lightcycles(surface: pygame.Surface, state: LightCycleState, show_grid: bool = True) -> None:
    """Paint the grid, every trail, and the live cycle heads."""
    cell = state.cell_size
    width = state.grid_width * cell
    height = state.grid_height * cell
    surface.fill(BG_COLOR)

    if show_grid:
        for x in range(0, width + 1, cell * 4):
            pygame.draw.line(surface, GRID_COLOR, (x, 0), (x, height), 1)
        for y in range(0, height + 1, cell * 4):
            pygame.draw.line(surface, GRID_COLOR, (0, y), (width, y), 1)
    pygame.draw.rect(surface, BORDER_COLOR, pygame.Rect(0, 0, width, height), 2)

    for idx, player in enumerate(state.players):
        color = cycle_color(state, idx)
        trail_color = color if player.alive else _dim(color)
        for x, y in player.trail:
            surface.fill(trail_color, pygame.Rect(x * cell, y * cell, cell, cell))
        if player.alive:
            head = pygame.Rect(player.position[0] * cell, player.position[1] * cell, cell, cell)
            pygame.draw.rect(surface, WHITE, head.inflate(2, 2))
            surface.fill(color, head)


def draw_pong(surface: pygame.Surface, state: PongState, font: pygame.font.Font | None = None) -> None:
    """Paint the court, both paddles, the ball, and the scores when a font is given."""
    width = int(state.width)
    height = int(state.height)
    surface.fill(BG_COLOR)

    for y in range(0, height, 20):
        pygame.draw.line(surface, GRID_COLOR, (width // 2, y), (width // 2, y + 8), 2)
    pygame.draw.rect(surface, BORDER_COLOR, pygame.Rect(0, 0, width, height), 2)

    for paddle, color in zip(state.paddles, PADDLE_COLORS):
        rect = pygame.Rect(int(paddle.x), int(paddle.y), int(paddle.width), int(paddle.height))
        pygame.draw.rect(surface, color, rect, border_radius=2)

    ball = state.ball
    pygame.draw.circle(surface, WHITE, (int(ball.x), int(ball.y)), int(ball.radius))

    if font is None:
        return
    for idx, (score, color) in enumerate(zip(state.scores, PADDLE_COLORS)):
        text = font.render(str(score), True, color)
        center_x = width // 4 if idx == 0 else 3 * width // 4
        surface.blit(text, (center_x - text.get_width() // 2, 24))
