"""Host loop: scene switching, time gating, input draining, and HUD."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
import logging
import pygame

from . import lightcycles, pong
from .controls import CycleKeymap, InputQueue, paddle_intents
from .lightcycles import CycleVariant, LightCycleState
from .menu import Menu, MenuItem
from .pong import PongState
from .render import PADDLE_COLORS, cycle_color, draw_lightcycles, draw_pong
from .settings import GameSettings, SettingsManager
from .utils import (
    BG_COLOR,
    CELL_SIZE,
    FPS,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    TEAM_COLORS,
    TEXT_COLOR,
    YELLOW,
    Victory,
)

logger = logging.getLogger(__name__)

HUD_HEIGHT = 64
ARENA_MARGIN = 16


class Scene(Enum):
    """Top-level screens."""

    MAIN_MENU = auto()
    LIGHT_CYCLES = auto()
    PONG = auto()


@dataclass(slots=True)
class StepTimer:
    """Accumulates frame time and releases fixed-length simulation steps."""

    rate: int
    accumulator_ms: float = 0.0

    @property
    def interval_ms(self) -> float:
        return 1000.0 / self.rate

    def add(self, dt_ms: float) -> None:
        self.accumulator_ms += dt_ms

    def consume(self) -> bool:
        """Take one step's worth of time if enough has built up."""
        if self.accumulator_ms < self.interval_ms:
            return False
        self.accumulator_ms -= self.interval_ms
        return True

    def reset(self) -> None:
        self.accumulator_ms = 0.0


class ArenaApp:
    """Runs the menu and both arenas inside one pygame window."""

    def __init__(self, settings_manager: SettingsManager | None = None) -> None:
        pygame.init()
        pygame.font.init()

        self.settings_manager = settings_manager or SettingsManager()
        self.settings: GameSettings = self.settings_manager.settings

        flags = pygame.FULLSCREEN if self.settings.display.fullscreen else 0
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT), flags)
        pygame.display.set_caption("Neon Arena")
        self.clock = pygame.time.Clock()

        self.title_font = pygame.font.SysFont("consolas", 52, bold=True)
        self.body_font = pygame.font.SysFont("consolas", 27, bold=True)
        self.small_font = pygame.font.SysFont("consolas", 18)

        self.scene = Scene.MAIN_MENU
        self.main_menu = Menu(
            title="NEON ARENA",
            items=[
                MenuItem("Light Cycles - Duel", "cycles_duel"),
                MenuItem("Light Cycles - Teams", "cycles_teams"),
                MenuItem("Pong", "pong"),
                MenuItem("Exit", "exit"),
            ],
        )
        if self.settings.cycle_variant == CycleVariant.TEAMS:
            self.main_menu.selected_index = 1
        self._refresh_menu_hint()

        self.cycle_state: LightCycleState | None = None
        self.pong_state: PongState | None = None
        self.input_queue = InputQueue()
        self.keymap = CycleKeymap([])
        self.held_keys: set[int] = set()
        self.step_timer = StepTimer(rate=self.settings.tick_rate)
        self.arena_surface = pygame.Surface(self._arena_size())

    def _arena_size(self) -> tuple[int, int]:
        width, height = self.screen.get_size()
        width -= ARENA_MARGIN * 2
        height -= HUD_HEIGHT + ARENA_MARGIN
        return width - width % CELL_SIZE, height - height % CELL_SIZE

    def _refresh_menu_hint(self) -> None:
        grid = "on" if self.settings.display.show_grid else "off"
        self.main_menu.hint = f"[ / ] cycle speed: {self.settings.tick_rate}   G grid: {grid}"

    def run(self) -> None:
        """Main event/update/render loop."""
        running = True
        while running:
            dt_ms = self.clock.tick(FPS)
            running = self._handle_events()
            if not running:
                break
            self.update(dt_ms)
            self._render()

        pygame.quit()

    # -- lifecycle ---------------------------------------------------------

    def start_lightcycles(self, variant: CycleVariant) -> None:
        """Open the light-cycle arena with a fresh, paused round."""
        self.settings_manager.set_variant(variant)
        width, height = self._arena_size()
        self.arena_surface = pygame.Surface((width, height))
        self.cycle_state = lightcycles.create_state(width, height, variant=variant, tick_rate=self.settings.tick_rate)
        self.keymap = CycleKeymap(self.settings.controls_for(variant))
        self.input_queue.clear()
        self.step_timer = StepTimer(rate=self.cycle_state.tick_rate)
        self.scene = Scene.LIGHT_CYCLES
        logger.info(
            "Light cycles (%s) on a %dx%d grid",
            variant.value,
            self.cycle_state.grid_width,
            self.cycle_state.grid_height,
        )

    def start_pong(self) -> None:
        """Open the pong court with a fresh, paused match."""
        width, height = self._arena_size()
        self.arena_surface = pygame.Surface((width, height))
        self.pong_state = pong.create_state(
            width,
            height,
            win_score=self.settings.pong_win_score,
            max_ball_speed=self.settings.pong_max_ball_speed,
        )
        self.held_keys.clear()
        self.scene = Scene.PONG
        logger.info("Pong on a %dx%d court, first to %d", width, height, self.pong_state.win_score)

    def _new_cycle_round(self) -> None:
        assert self.cycle_state is not None
        width, height = self._arena_size()
        self.cycle_state = lightcycles.start(
            lightcycles.reset(self.cycle_state, width, height, keep_scores=True)
        )
        self.input_queue.clear()
        self.step_timer.reset()

    # -- input -------------------------------------------------------------

    def _handle_events(self) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYUP:
                self.held_keys.discard(event.key)
                continue
            if event.type != pygame.KEYDOWN:
                continue

            self.held_keys.add(event.key)
            if self.scene == Scene.MAIN_MENU:
                if not self._handle_menu_input(event.key):
                    return False
            elif self.scene == Scene.LIGHT_CYCLES:
                self._handle_cycle_input(event.key)
            elif self.scene == Scene.PONG:
                self._handle_pong_input(event.key)
        return True

    def _handle_menu_input(self, key: int) -> bool:
        if key == pygame.K_ESCAPE:
            return False
        if key == pygame.K_UP:
            self.main_menu.move(-1)
            return True
        if key == pygame.K_DOWN:
            self.main_menu.move(1)
            return True
        if key == pygame.K_g:
            self.settings.display.show_grid = not self.settings.display.show_grid
            self.settings_manager.save()
            self._refresh_menu_hint()
            return True
        if key in (pygame.K_LEFTBRACKET, pygame.K_RIGHTBRACKET):
            self.settings_manager.adjust_tick_rate(-5 if key == pygame.K_LEFTBRACKET else 5)
            self._refresh_menu_hint()
            return True
        if key not in (pygame.K_RETURN, pygame.K_SPACE):
            return True

        action = self.main_menu.current_action()
        if action == "cycles_duel":
            self.start_lightcycles(CycleVariant.DUEL)
        elif action == "cycles_teams":
            self.start_lightcycles(CycleVariant.TEAMS)
        elif action == "pong":
            self.start_pong()
        elif action == "exit":
            return False
        return True

    def _handle_cycle_input(self, key: int) -> None:
        state = self.cycle_state
        if state is None:
            return
        if key == pygame.K_SPACE:
            if state.game_over:
                self._new_cycle_round()
            elif not state.running:
                self.cycle_state = lightcycles.start(state)
            return
        if key == pygame.K_ESCAPE:
            if state.running and not state.game_over:
                self.cycle_state = lightcycles.pause(state)
            else:
                self.scene = Scene.MAIN_MENU
            return
        self.keymap.queue_key(self.input_queue, state, key)

    def _handle_pong_input(self, key: int) -> None:
        state = self.pong_state
        if state is None:
            return
        if key == pygame.K_SPACE:
            if state.game_over:
                width, height = self._arena_size()
                self.pong_state = pong.start(pong.reset(state, width, height, keep_scores=False))
            elif not state.running:
                self.pong_state = pong.start(state)
        elif key == pygame.K_ESCAPE:
            if state.running:
                self.pong_state = pong.pause(state)
            else:
                self.scene = Scene.MAIN_MENU

    # -- simulation --------------------------------------------------------

    def update(self, dt_ms: float) -> None:
        """Advance whichever arena is on screen by ``dt_ms`` of wall time."""
        if self.scene == Scene.LIGHT_CYCLES:
            self._update_lightcycles(dt_ms)
        elif self.scene == Scene.PONG:
            self._update_pong()

    def _update_lightcycles(self, dt_ms: float) -> None:
        if self.cycle_state is None or not self.cycle_state.running:
            return
        self.step_timer.add(dt_ms)
        while self.step_timer.consume():
            self._step_lightcycles()
            if self.cycle_state.game_over:
                self.step_timer.reset()
                break

    def _step_lightcycles(self) -> None:
        previous = self.cycle_state
        assert previous is not None
        steered = lightcycles.apply_intents(previous, self.input_queue.drain())
        current = lightcycles.tick(steered)
        self.cycle_state = current
        if current.game_over and not previous.game_over:
            if current.winner_team is None:
                logger.info("Light cycles round drawn, scores %s", current.team_scores)
            else:
                logger.info("Team %d takes the round, scores %s", current.winner_team + 1, current.team_scores)

    def _update_pong(self) -> None:
        previous = self.pong_state
        if previous is None:
            return
        steered = pong.set_paddle_intents(previous, paddle_intents(self.settings.pong_controls, self.held_keys))
        current = pong.tick(steered)
        self.pong_state = current
        if current.scores != previous.scores:
            logger.info("Pong score %d - %d", *current.scores)
        if current.game_over and not previous.game_over and current.winner is not None:
            logger.info("Player %d wins the pong match", current.winner + 1)

    # -- rendering ---------------------------------------------------------

    def _render(self) -> None:
        if self.scene == Scene.MAIN_MENU:
            self.main_menu.render(self.screen, self.title_font, self.body_font)
        else:
            self.screen.fill(BG_COLOR)
            if self.scene == Scene.LIGHT_CYCLES and self.cycle_state is not None:
                draw_lightcycles(self.arena_surface, self.cycle_state, show_grid=self.settings.display.show_grid)
                self._render_cycle_hud(self.cycle_state)
            elif self.scene == Scene.PONG and self.pong_state is not None:
                draw_pong(self.arena_surface, self.pong_state, font=self.title_font)
                self._render_pong_hud(self.pong_state)
            self.screen.blit(self.arena_surface, (ARENA_MARGIN, HUD_HEIGHT))
            self._render_overlay()
        pygame.display.flip()

    def _render_cycle_hud(self, state: LightCycleState) -> None:
        left = self.body_font.render(f"TEAM 1  {state.team_scores[0]}", True, TEAM_COLORS[0])
        right = self.body_font.render(f"{state.team_scores[1]}  TEAM 2", True, TEAM_COLORS[1])
        title = self.body_font.render("LIGHT CYCLES", True, YELLOW)
        self.screen.blit(left, (ARENA_MARGIN, 18))
        self.screen.blit(right, (SCREEN_WIDTH - ARENA_MARGIN - right.get_width(), 18))
        self.screen.blit(title, (SCREEN_WIDTH // 2 - title.get_width() // 2, 18))
        for idx, player in enumerate(state.players):
            marker = pygame.Rect(ARENA_MARGIN + left.get_width() + 16 + idx * 18, 26, 12, 12)
            pygame.draw.rect(self.screen, cycle_color(state, idx), marker, 0 if player.alive else 1)

    def _render_pong_hud(self, state: PongState) -> None:
        left = self.body_font.render("P1 (W/S)", True, PADDLE_COLORS[0])
        right = self.body_font.render("P2 (Up/Down)", True, PADDLE_COLORS[1])
        title = self.body_font.render("PONG", True, YELLOW)
        self.screen.blit(left, (ARENA_MARGIN, 18))
        self.screen.blit(right, (SCREEN_WIDTH - ARENA_MARGIN - right.get_width(), 18))
        self.screen.blit(title, (SCREEN_WIDTH // 2 - title.get_width() // 2, 18))

    def _overlay_lines(self) -> list[str]:
        if self.scene == Scene.LIGHT_CYCLES and self.cycle_state is not None:
            state = self.cycle_state
            if state.game_over:
                headline = "DRAW!" if state.winner_team is None else f"TEAM {state.winner_team + 1} WINS!"
                return [headline, "Press Space for the next round, Esc for the menu"]
            if not state.running:
                return ["LIGHT CYCLES", "Wipe out the other team to score", "Press Space to start"]
        if self.scene == Scene.PONG and self.pong_state is not None:
            state_p = self.pong_state
            if isinstance(state_p.outcome, Victory):
                return [f"PLAYER {state_p.outcome.winner + 1} WINS!", "Press Space to play again, Esc for the menu"]
            if not state_p.running:
                return ["PONG", f"First to {state_p.win_score} points wins", "Press Space to start"]
        return []

    def _render_overlay(self) -> None:
        lines = self._overlay_lines()
        if not lines:
            return
        overlay = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)
        overlay.fill((4, 8, 16, 170))
        self.screen.blit(overlay, (0, 0))
        for idx, line in enumerate(lines):
            font = self.title_font if idx == 0 else self.small_font
            text = font.render(line, True, YELLOW if idx == 0 else TEXT_COLOR)
            y = SCREEN_HEIGHT // 2 - 80 + idx * 56
            self.screen.blit(text, (SCREEN_WIDTH // 2 - text.get_width() // 2, y))
