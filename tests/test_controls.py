from __future__ import annotations

from dataclasses import replace

import pygame

from neonarena import lightcycles
from neonarena.controls import CycleKeymap, InputQueue, paddle_intents
from neonarena.lightcycles import CycleVariant
from neonarena.settings import GameSettings
from neonarena.utils import DOWN, LEFT, RIGHT, UP


def _duel() -> lightcycles.LightCycleState:
    return lightcycles.start(lightcycles.create_state(400, 400, variant=CycleVariant.DUEL))


def test_queue_rejects_reversals_on_push() -> None:
    state = _duel()
    queue = InputQueue()
    assert not queue.push(state, 0, LEFT)
    assert not queue.push(state, 1, RIGHT)
    assert queue.push(state, 0, UP)
    assert len(queue) == 1


def test_queue_rejects_dead_and_unknown_players() -> None:
    state = _duel()
    dead = replace(state.players[0], alive=False)
    state = replace(state, players=(dead, state.players[1]))
    queue = InputQueue()
    assert not queue.push(state, 0, UP)
    assert not queue.push(state, 5, UP)
    assert len(queue) == 0


def test_drain_returns_arrival_order_once() -> None:
    state = _duel()
    queue = InputQueue()
    queue.push(state, 1, DOWN)
    queue.push(state, 0, UP)
    queue.push(state, 0, RIGHT)
    drained = queue.drain()
    assert [(i.player, i.direction) for i in drained] == [(1, DOWN), (0, UP), (0, RIGHT)]
    assert queue.drain() == []

    steered = lightcycles.apply_intents(state, drained)
    assert steered.players[0].direction == RIGHT
    assert steered.players[1].direction == DOWN


def test_keymap_routes_keys_to_players() -> None:
    settings = GameSettings()
    keymap = CycleKeymap(settings.controls_for(CycleVariant.TEAMS))
    assert keymap.lookup(pygame.K_w) == (0, UP)
    assert keymap.lookup(pygame.K_j) == (1, LEFT)
    assert keymap.lookup(pygame.K_DOWN) == (2, DOWN)
    assert keymap.lookup(pygame.K_KP6) == (3, RIGHT)
    assert keymap.lookup(pygame.K_z) is None


def test_duel_keymap_uses_wasd_and_arrows() -> None:
    settings = GameSettings()
    keymap = CycleKeymap(settings.controls_for(CycleVariant.DUEL))
    assert keymap.lookup(pygame.K_s) == (0, DOWN)
    assert keymap.lookup(pygame.K_UP) == (1, UP)
    assert keymap.lookup(pygame.K_i) is None

    queue = InputQueue()
    state = _duel()
    assert keymap.queue_key(queue, state, pygame.K_UP)
    assert not keymap.queue_key(queue, state, pygame.K_RIGHT)
    assert not keymap.queue_key(queue, state, pygame.K_z)
    assert len(queue) == 1


def test_paddle_intents_from_held_keys() -> None:
    controls = GameSettings().pong_controls
    assert paddle_intents(controls, set()) == [0, 0]
    assert paddle_intents(controls, {pygame.K_w, pygame.K_DOWN}) == [-1, 1]
    assert paddle_intents(controls, {pygame.K_UP, pygame.K_DOWN}) == [0, -1]
