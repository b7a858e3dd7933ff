"""Pong simulation core: paddle motion, ball reflection, and scoring."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence
import logging
import random

from .utils import Victory, clamp, reflect

logger = logging.getLogger(__name__)

PADDLE_SPEED = 7
BALL_SPEED = 5
PADDLE_WIDTH = 12
PADDLE_HEIGHT = 80
PADDLE_INSET = 30
BALL_RADIUS = 8
SPIN_FACTOR = 1.5
HIT_ACCELERATION = 1.03
WIN_SCORE = 7
MAX_BALL_SPEED = 15.0


@dataclass(frozen=True, slots=True)
class Ball:
    x: float
    y: float
    vx: float
    vy: float
    radius: float = BALL_RADIUS


@dataclass(frozen=True, slots=True)
class Paddle:
    x: float
    y: float
    width: float = PADDLE_WIDTH
    height: float = PADDLE_HEIGHT
    dy: int = 0

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2


@dataclass(frozen=True, slots=True)
class PongState:
    """Complete snapshot of a pong match."""

    ball: Ball
    paddles: tuple[Paddle, Paddle]
    width: float
    height: float
    scores: tuple[int, int] = (0, 0)
    running: bool = False
    game_over: bool = False
    outcome: Victory | None = None
    win_score: int = WIN_SCORE
    max_ball_speed: float | None = MAX_BALL_SPEED

    @property
    def winner(self) -> int | None:
        return self.outcome.winner if self.outcome is not None else None


def create_state(
    width: float,
    height: float,
    win_score: int = WIN_SCORE,
    max_ball_speed: float | None = MAX_BALL_SPEED,
) -> PongState:
    """Build a paused match with the ball centred and both paddles at mid-height."""
    paddle_y = height / 2 - PADDLE_HEIGHT / 2
    return PongState(
        ball=Ball(x=width / 2, y=height / 2, vx=BALL_SPEED, vy=BALL_SPEED * 0.6),
        paddles=(
            Paddle(x=PADDLE_INSET, y=paddle_y),
            Paddle(x=width - PADDLE_INSET - PADDLE_WIDTH, y=paddle_y),
        ),
        width=width,
        height=height,
        win_score=win_score,
        max_ball_speed=max_ball_speed,
    )


def set_paddle_intents(state: PongState, dys: Sequence[int]) -> PongState:
    """Set each paddle's vertical intent, clamped to -1, 0 or 1."""
    paddles = tuple(
        replace(paddle, dy=int(clamp(dy, -1, 1))) for paddle, dy in zip(state.paddles, dys)
    )
    if paddles == state.paddles:
        return state
    return replace(state, paddles=(paddles[0], paddles[1]))


def _move_paddle(paddle: Paddle, height: float) -> Paddle:
    y = clamp(paddle.y + paddle.dy * PADDLE_SPEED, 0, height - paddle.height)
    return replace(paddle, y=y)


def _hits(ball: Ball, paddle: Paddle) -> bool:
    return (
        ball.x - ball.radius <= paddle.x + paddle.width
        and ball.x + ball.radius >= paddle.x
        and paddle.y <= ball.y <= paddle.y + paddle.height
    )


def _bounce(ball: Ball, paddle: Paddle, side: int, max_speed: float | None) -> Ball:
    """Send the ball back from the paddle on ``side`` (0 left, 1 right)."""
    away = 1 if side == 0 else -1
    hit_offset = (ball.y - paddle.y) / paddle.height - 0.5
    speed = abs(ball.vx) * HIT_ACCELERATION
    if max_speed is not None:
        speed = min(speed, max_speed)
    if side == 0:
        x = paddle.x + paddle.width + ball.radius
    else:
        x = paddle.x - ball.radius
    return replace(ball, x=x, vx=speed * away, vy=hit_offset * BALL_SPEED * SPIN_FACTOR)


def serve(width: float, height: float, toward: int, rng: random.Random | None = None) -> Ball:
    """Centre a new ball heading toward player ``toward`` (0 left, 1 right)."""
    source = rng if rng is not None else random
    direction = -1 if toward == 0 else 1
    return Ball(
        x=width / 2,
        y=height / 2,
        vx=BALL_SPEED * direction,
        vy=(source.random() - 0.5) * BALL_SPEED,
    )


def tick(state: PongState, rng: random.Random | None = None) -> PongState:
    """Advance the match by one frame.

    ``rng`` only feeds the vertical speed of a fresh serve after a point.
    Returns ``state`` itself when the match is paused or finished.
    """
    if not state.running or state.game_over:
        return state

    paddles = tuple(_move_paddle(paddle, state.height) for paddle in state.paddles)

    ball = state.ball
    ball = replace(ball, x=ball.x + ball.vx, y=ball.y + ball.vy)
    y, vy = reflect(ball.y, ball.vy, ball.radius, 0, state.height)
    ball = replace(ball, y=y, vy=vy)

    for side, paddle in enumerate(paddles):
        if _hits(ball, paddle):
            ball = _bounce(ball, paddle, side, state.max_ball_speed)

    scores = list(state.scores)
    if ball.x < 0:
        scores[1] += 1
        ball = serve(state.width, state.height, toward=0, rng=rng)
        logger.debug("Point to the right player, score %s", scores)
    elif ball.x > state.width:
        scores[0] += 1
        ball = serve(state.width, state.height, toward=1, rng=rng)
        logger.debug("Point to the left player, score %s", scores)

    updated = replace(
        state,
        ball=ball,
        paddles=(paddles[0], paddles[1]),
        scores=(scores[0], scores[1]),
    )
    for player, score in enumerate(scores):
        if score >= state.win_score:
            logger.debug("Player %d reached %d points", player, score)
            return replace(updated, game_over=True, running=False, outcome=Victory(player))
    return updated


def start(state: PongState) -> PongState:
    """Start or resume the match."""
    if state.running or state.game_over:
        return state
    return replace(state, running=True)


def pause(state: PongState) -> PongState:
    """Pause a running match."""
    if not state.running:
        return state
    return replace(state, running=False)


def reset(state: PongState, width: float, height: float, keep_scores: bool = False) -> PongState:
    """Set up a new match, optionally carrying the previous scores over."""
    fresh = create_state(width, height, win_score=state.win_score, max_ball_speed=state.max_ball_speed)
    if keep_scores:
        fresh = replace(fresh, scores=state.scores)
    return fresh
