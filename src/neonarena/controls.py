"""Keyboard to intent plumbing shared by the host loop and the engines."""

from __future__ import annotations

from collections.abc import Container
from typing import Sequence

from .lightcycles import Intent, LightCycleState, can_turn
from .settings import ControlScheme, PongControls
from .utils import Direction


class InputQueue:
    """Buffer of light-cycle turns collected between two ticks.

    Intents are filtered when pushed and handed over in arrival order by
    :meth:`drain`, which empties the queue.
    """

    def __init__(self) -> None:
        self._pending: list[Intent] = []

    def __len__(self) -> int:
        return len(self._pending)

    def push(self, state: LightCycleState, player: int, direction: Direction) -> bool:
        """Queue a turn if it is legal for the player's current heading."""
        if not 0 <= player < len(state.players):
            return False
        if not can_turn(state.players[player], direction):
            return False
        self._pending.append(Intent(player=player, direction=direction))
        return True

    def drain(self) -> list[Intent]:
        """Return every queued intent and clear the buffer."""
        pending, self._pending = self._pending, []
        return pending

    def clear(self) -> None:
        self._pending.clear()


class CycleKeymap:
    """Maps key presses onto ``(player, direction)`` pairs."""

    def __init__(self, schemes: Sequence[ControlScheme]) -> None:
        self.bindings: dict[int, tuple[int, Direction]] = {}
        for player, scheme in enumerate(schemes):
            for key, direction in scheme.mapping().items():
                self.bindings[key] = (player, direction)

    def lookup(self, key: int) -> tuple[int, Direction] | None:
        return self.bindings.get(key)

    def queue_key(self, queue: InputQueue, state: LightCycleState, key: int) -> bool:
        """Translate one key press and push it onto ``queue``."""
        binding = self.lookup(key)
        if binding is None:
            return False
        player, direction = binding
        return queue.push(state, player, direction)


def paddle_intents(controls: Sequence[PongControls], held: Container[int]) -> list[int]:
    """Read held keys into a vertical intent per paddle; up wins over down."""
    intents: list[int] = []
    for scheme in controls:
        if scheme.up in held:
            intents.append(-1)
        elif scheme.down in held:
            intents.append(1)
        else:
            intents.append(0)
    return intents
