"""Light-cycle simulation core: grid state, turn validation, and the tick rule."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable
import logging

from .utils import (
    CELL_SIZE,
    DEFAULT_TICK_RATE,
    DRAW,
    LEFT,
    RIGHT,
    Direction,
    Outcome,
    Position,
    Victory,
    add_direction,
    is_opposite,
)

logger = logging.getLogger(__name__)

TEAM_COUNT = 2


class CycleVariant(str, Enum):
    """Light-cycle player layouts."""

    DUEL = "duel"
    TEAMS = "teams"


@dataclass(frozen=True, slots=True)
class Cycle:
    """One lightcycle rider on the grid."""

    position: Position
    direction: Direction
    team: int
    trail: tuple[Position, ...] = ()
    alive: bool = True


@dataclass(frozen=True, slots=True)
class Intent:
    """A queued direction change for the player at ``player`` index."""

    player: int
    direction: Direction


@dataclass(frozen=True, slots=True)
class LightCycleState:
    """Complete snapshot of one light-cycle round."""

    grid_width: int
    grid_height: int
    players: tuple[Cycle, ...]
    variant: CycleVariant = CycleVariant.TEAMS
    cell_size: int = CELL_SIZE
    team_scores: tuple[int, int] = (0, 0)
    running: bool = False
    game_over: bool = False
    outcome: Outcome | None = None
    tick_rate: int = DEFAULT_TICK_RATE

    @property
    def winner_team(self) -> int | None:
        if isinstance(self.outcome, Victory):
            return self.outcome.winner
        return None

    @property
    def is_draw(self) -> bool:
        return self.outcome == DRAW

    def in_bounds(self, position: Position) -> bool:
        """Check if a grid cell lies inside the arena."""
        x, y = position
        return 0 <= x < self.grid_width and 0 <= y < self.grid_height


def _starting_players(variant: CycleVariant, grid_width: int, grid_height: int) -> tuple[Cycle, ...]:
    left_x = int(grid_width * 0.2)
    right_x = int(grid_width * 0.8)
    if variant == CycleVariant.DUEL:
        mid_y = int(grid_height * 0.5)
        return (
            Cycle(position=(left_x, mid_y), direction=RIGHT, team=0),
            Cycle(position=(right_x, mid_y), direction=LEFT, team=1),
        )
    top_y = int(grid_height * 0.35)
    bottom_y = int(grid_height * 0.65)
    return (
        Cycle(position=(left_x, top_y), direction=RIGHT, team=0),
        Cycle(position=(left_x, bottom_y), direction=RIGHT, team=0),
        Cycle(position=(right_x, top_y), direction=LEFT, team=1),
        Cycle(position=(right_x, bottom_y), direction=LEFT, team=1),
    )


def create_state(
    width: int,
    height: int,
    variant: CycleVariant = CycleVariant.TEAMS,
    tick_rate: int = DEFAULT_TICK_RATE,
) -> LightCycleState:
    """Build a fresh, paused round sized to a ``width`` x ``height`` pixel surface."""
    grid_width = width // CELL_SIZE
    grid_height = height // CELL_SIZE
    return LightCycleState(
        grid_width=grid_width,
        grid_height=grid_height,
        players=_starting_players(variant, grid_width, grid_height),
        variant=variant,
        tick_rate=tick_rate,
    )


def can_turn(player: Cycle, direction: Direction) -> bool:
    """Return whether ``player`` may switch to ``direction``.

    Same-direction and perpendicular turns are legal; reversals and any turn by
    a crashed cycle are not.
    """
    return player.alive and not is_opposite(direction, player.direction)


def apply_intents(state: LightCycleState, intents: Iterable[Intent]) -> LightCycleState:
    """Apply queued turns in order, dropping any that are no longer legal.

    Each intent is checked against the direction left by the intents before it.
    """
    players = list(state.players)
    changed = False
    for intent in intents:
        if not 0 <= intent.player < len(players):
            continue
        player = players[intent.player]
        if not can_turn(player, intent.direction):
            continue
        if intent.direction != player.direction:
            players[intent.player] = replace(player, direction=intent.direction)
            changed = True
    if not changed:
        return state
    return replace(state, players=tuple(players))


def _advance(player: Cycle) -> Cycle:
    if not player.alive:
        return player
    return replace(
        player,
        trail=player.trail + (player.position,),
        position=add_direction(player.position, player.direction),
    )


def tick(state: LightCycleState) -> LightCycleState:
    """Advance the round by one grid step.

    Returns ``state`` itself when the round is paused or finished.
    """
    if not state.running or state.game_over:
        return state

    moved = [_advance(player) for player in state.players]

    walls: set[Position] = set()
    for player in moved:
        walls.update(player.trail)

    crashed: set[int] = set()
    for idx, player in enumerate(moved):
        if not player.alive:
            continue
        if not state.in_bounds(player.position):
            crashed.add(idx)
            continue
        if player.position in walls:
            crashed.add(idx)

    survivors = [idx for idx, player in enumerate(moved) if player.alive and idx not in crashed]
    for i, first in enumerate(survivors):
        for second in survivors[i + 1 :]:
            if moved[first].position == moved[second].position:
                crashed.add(first)
                crashed.add(second)

    players = tuple(
        replace(player, alive=False) if idx in crashed else player for idx, player in enumerate(moved)
    )
    if crashed:
        logger.debug("Cycles %s crashed", sorted(crashed))

    teams_alive = [any(p.alive and p.team == team for p in players) for team in range(TEAM_COUNT)]
    if all(teams_alive):
        return replace(state, players=players)

    scores = list(state.team_scores)
    outcome: Outcome
    if any(teams_alive):
        winner = teams_alive.index(True)
        scores[winner] += 1
        outcome = Victory(winner)
        logger.debug("Team %d wins the round", winner)
    else:
        outcome = DRAW
        logger.debug("Round ended in a draw")

    return replace(
        state,
        players=players,
        game_over=True,
        outcome=outcome,
        team_scores=(scores[0], scores[1]),
    )


def start(state: LightCycleState) -> LightCycleState:
    """Start or resume a round."""
    if state.running or state.game_over:
        return state
    return replace(state, running=True)


def pause(state: LightCycleState) -> LightCycleState:
    """Pause a running round."""
    if not state.running:
        return state
    return replace(state, running=False)


def reset(state: LightCycleState, width: int, height: int, keep_scores: bool = True) -> LightCycleState:
    """Set up a new round for the same variant, optionally carrying scores over."""
    fresh = create_state(width, height, variant=state.variant, tick_rate=state.tick_rate)
    if keep_scores:
        fresh = replace(fresh, team_scores=state.team_scores)
    return fresh

