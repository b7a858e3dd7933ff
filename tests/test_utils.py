from __future__ import annotations

import tempfile
from pathlib import Path

from neonarena.utils import (
    DIRECTIONS,
    DOWN,
    DRAW,
    LEFT,
    RIGHT,
    UP,
    Draw,
    Victory,
    add_direction,
    clamp,
    is_opposite,
    load_json,
    opposite,
    reflect,
    save_json,
)


def test_opposite_pairs_are_the_only_reversals() -> None:
    for direction in DIRECTIONS:
        assert is_opposite(direction, opposite(direction))
        assert not is_opposite(direction, direction)
    assert not is_opposite(UP, LEFT)
    assert not is_opposite(DOWN, RIGHT)


def test_add_direction_moves_one_cell() -> None:
    assert add_direction((5, 5), UP) == (5, 4)
    assert add_direction((5, 5), RIGHT, step=3) == (8, 5)


def test_clamp() -> None:
    assert clamp(-3, 0, 10) == 0
    assert clamp(12, 0, 10) == 10
    assert clamp(4.5, 0, 10) == 4.5


def test_reflect_clamps_to_the_crossed_wall() -> None:
    assert reflect(105.0, 4.0, 8.0, 0.0, 100.0) == (92.0, -4.0)
    assert reflect(3.0, -4.0, 8.0, 0.0, 100.0) == (8.0, 4.0)
    assert reflect(50.0, 4.0, 8.0, 0.0, 100.0) == (50.0, 4.0)


def test_outcomes_are_tagged() -> None:
    assert Victory(0) != Victory(1)
    assert Victory(0) != DRAW
    assert Draw() == DRAW


def test_json_helpers() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "nested" / "x.json"
        save_json(path, {"ok": True})
        assert load_json(path, {}) == {"ok": True}


def test_load_json_falls_back_on_garbage() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        assert load_json(path, {"default": 1}) == {"default": 1}
        assert load_json(Path(tmp) / "missing.json", []) == []
