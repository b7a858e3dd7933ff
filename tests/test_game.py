from __future__ import annotations

from dataclasses import replace
from typing import Iterator

import pygame
import pytest

from neonarena.game import ArenaApp, Scene, StepTimer
from neonarena.lightcycles import CycleVariant
from neonarena.utils import LEFT, UP, Victory


def test_step_timer_releases_whole_steps() -> None:
    timer = StepTimer(rate=50)
    assert timer.interval_ms == 20
    timer.add(45)
    assert timer.consume()
    assert timer.consume()
    assert not timer.consume()
    assert timer.accumulator_ms == pytest.approx(5)
    timer.reset()
    assert timer.accumulator_ms == 0


@pytest.fixture
def app() -> Iterator[ArenaApp]:
    arena = ArenaApp()
    yield arena
    pygame.quit()


def test_lightcycles_round_through_the_host(app: ArenaApp) -> None:
    app.start_lightcycles(CycleVariant.DUEL)
    assert app.scene == Scene.LIGHT_CYCLES
    assert app.settings.cycle_variant == CycleVariant.DUEL
    interval = app.step_timer.interval_ms

    app.update(interval * 5)
    assert app.cycle_state.players[0].trail == ()

    app._handle_cycle_input(pygame.K_SPACE)
    assert app.cycle_state.running
    app.update(interval * 3 + 1)
    assert len(app.cycle_state.players[0].trail) == 3

    app._handle_cycle_input(pygame.K_w)
    app._handle_cycle_input(pygame.K_RIGHT)
    assert len(app.input_queue) == 1
    app.update(interval)
    assert app.cycle_state.players[0].direction == UP
    assert len(app.input_queue) == 0
    app._render()

    first, second = app.cycle_state.players
    app.cycle_state = replace(app.cycle_state, players=(replace(first, position=(0, 5), direction=LEFT), second))
    app.update(interval)
    assert app.cycle_state.game_over
    assert app.cycle_state.outcome == Victory(1)
    assert app.cycle_state.team_scores == (0, 1)
    app._render()

    app._handle_cycle_input(pygame.K_SPACE)
    assert app.cycle_state.running
    assert not app.cycle_state.game_over
    assert app.cycle_state.team_scores == (0, 1)

    app._handle_cycle_input(pygame.K_ESCAPE)
    assert not app.cycle_state.running
    app._handle_cycle_input(pygame.K_ESCAPE)
    assert app.scene == Scene.MAIN_MENU


def test_pong_match_through_the_host(app: ArenaApp) -> None:
    app.start_pong()
    assert app.scene == Scene.PONG
    start_x = app.pong_state.ball.x

    app.update(16)
    assert app.pong_state.ball.x == start_x

    app._handle_pong_input(pygame.K_SPACE)
    app.held_keys.add(pygame.K_s)
    app.update(16)
    assert app.pong_state.ball.x == start_x + 5
    assert app.pong_state.paddles[0].dy == 1
    app._render()

    ball = replace(app.pong_state.ball, x=app.pong_state.width - 2, y=40, vx=5, vy=0)
    app.pong_state = replace(app.pong_state, ball=ball, scores=(app.pong_state.win_score - 1, 0))
    app.update(16)
    assert app.pong_state.game_over
    assert app.pong_state.winner == 0
    app._render()

    app._handle_pong_input(pygame.K_SPACE)
    assert app.pong_state.running
    assert app.pong_state.scores == (0, 0)


def test_menu_navigation_starts_games(app: ArenaApp) -> None:
    app.main_menu.selected_index = 0
    app._handle_menu_input(pygame.K_DOWN)
    app._handle_menu_input(pygame.K_DOWN)
    assert app.main_menu.current_action() == "pong"
    assert app._handle_menu_input(pygame.K_RETURN)
    assert app.scene == Scene.PONG

    app.scene = Scene.MAIN_MENU
    rate = app.settings.tick_rate
    app._handle_menu_input(pygame.K_RIGHTBRACKET)
    assert app.settings.tick_rate == rate + 5
    assert str(rate + 5) in app.main_menu.hint

    app.main_menu.selected_index = 3
    assert not app._handle_menu_input(pygame.K_RETURN)
