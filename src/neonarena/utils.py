"""Shared constants, direction helpers, and JSON utilities for Neon Arena."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Tuple, Union
import json

SCREEN_WIDTH = 1200
SCREEN_HEIGHT = 760
FPS = 60
CELL_SIZE = 8
DEFAULT_TICK_RATE = 60

BG_COLOR = (6, 10, 18)
GRID_COLOR = (14, 40, 56)
BORDER_COLOR = (0, 110, 125)
TEXT_COLOR = (220, 238, 255)
SHADOW_COLOR = (15, 24, 45)
WHITE = (255, 255, 255)

CYAN = (0, 229, 255)
MINT = (0, 229, 160)
ORANGE = (255, 109, 0)
ROSE = (255, 45, 109)
YELLOW = (255, 233, 68)

TEAM_COLORS = (CYAN, ORANGE)

Direction = Tuple[int, int]
Position = Tuple[int, int]

UP: Direction = (0, -1)
DOWN: Direction = (0, 1)
LEFT: Direction = (-1, 0)
RIGHT: Direction = (1, 0)
DIRECTIONS: tuple[Direction, ...] = (UP, DOWN, LEFT, RIGHT)

DATA_DIR = Path(".neonarena")
SETTINGS_FILE = DATA_DIR / "settings.json"


@dataclass(frozen=True, slots=True)
class Victory:
    """Round or match won by a team (light cycles) or a player (pong)."""

    winner: int


@dataclass(frozen=True, slots=True)
class Draw:
    """Round ended with nobody left standing."""


DRAW = Draw()
Outcome = Union[Victory, Draw]


def ensure_data_dirs() -> None:
    """Create the data directory for the settings file."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Clamp a value into a closed interval."""
    return max(minimum, min(maximum, value))


def opposite(direction: Direction) -> Direction:
    """Return the antiparallel direction."""
    return (-direction[0], -direction[1])


def is_opposite(a: Direction, b: Direction) -> bool:
    """Return whether two directions are opposite vectors."""
    return a[0] == -b[0] and a[1] == -b[1]


def add_direction(position: Position, direction: Direction, step: int = 1) -> Position:
    """Move a grid position by direction * step cells."""
    return (position[0] + direction[0] * step, position[1] + direction[1] * step)


def reflect(position: float, velocity: float, radius: float, low: float, high: float) -> tuple[float, float]:
    """Bounce a moving circle off the [low, high] walls on one axis.

    Returns the possibly clamped position and the possibly inverted velocity.
    Touching a wall counts as crossing it.
    """
    if position - radius <= low:
        return low + radius, -velocity
    if position + radius >= high:
        return high - radius, -velocity
    return position, velocity


def load_json(path: Path, default: Any) -> Any:
    """Load JSON data, returning default when missing or malformed."""
    if not path.exists():
        return default
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except (json.JSONDecodeError, OSError):
        return default


def save_json(path: Path, payload: Any) -> None:
    """Save JSON data with deterministic formatting."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, sort_keys=True)
