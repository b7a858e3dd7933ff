"""Settings persistence and runtime configuration."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import pygame

from .lightcycles import CycleVariant
from .utils import DEFAULT_TICK_RATE, SETTINGS_FILE, ensure_data_dirs, load_json, save_json


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(slots=True)
class DisplaySettings:
    """Display-related options."""

    fullscreen: bool = False
    show_grid: bool = True


@dataclass(slots=True)
class ControlScheme:
    """Directional key bindings for one light cycle."""

    up: int
    down: int
    left: int
    right: int

    def mapping(self) -> dict[int, tuple[int, int]]:
        """Return the key code to direction vector mapping."""
        return {self.up: (0, -1), self.down: (0, 1), self.left: (-1, 0), self.right: (1, 0)}


@dataclass(slots=True)
class PongControls:
    """Held-key bindings for one paddle."""

    up: int
    down: int


def _default_cycle_controls() -> list[ControlScheme]:
    return [
        ControlScheme(up=pygame.K_w, down=pygame.K_s, left=pygame.K_a, right=pygame.K_d),
        ControlScheme(up=pygame.K_i, down=pygame.K_k, left=pygame.K_j, right=pygame.K_l),
        ControlScheme(up=pygame.K_UP, down=pygame.K_DOWN, left=pygame.K_LEFT, right=pygame.K_RIGHT),
        ControlScheme(up=pygame.K_KP8, down=pygame.K_KP5, left=pygame.K_KP4, right=pygame.K_KP6),
    ]


def _default_pong_controls() -> list[PongControls]:
    return [
        PongControls(up=pygame.K_w, down=pygame.K_s),
        PongControls(up=pygame.K_UP, down=pygame.K_DOWN),
    ]


@dataclass(slots=True)
class GameSettings:
    """Persistent settings for the arena."""

    cycle_variant: CycleVariant = CycleVariant.TEAMS
    tick_rate: int = DEFAULT_TICK_RATE
    pong_win_score: int = 7
    pong_max_ball_speed: float | None = 15.0
    log_level: str = "INFO"
    display: DisplaySettings = field(default_factory=DisplaySettings)
    cycle_controls: list[ControlScheme] = field(default_factory=_default_cycle_controls)
    pong_controls: list[PongControls] = field(default_factory=_default_pong_controls)

    def controls_for(self, variant: CycleVariant) -> list[ControlScheme]:
        """Return the control schemes used by each player of a variant.

        The duel uses the team-0 lead (WASD) and the team-1 lead (arrows).
        """
        if variant == CycleVariant.DUEL:
            return [self.cycle_controls[0], self.cycle_controls[2]]
        return list(self.cycle_controls)


class SettingsManager:
    """Load, save, and mutate arena settings."""

    def __init__(self) -> None:
        ensure_data_dirs()
        self.settings = self.load()

    def load(self) -> GameSettings:
        """Load settings from disk with safe defaults."""
        raw = load_json(SETTINGS_FILE, {})
        if not isinstance(raw, dict):
            raw = {}
        settings = GameSettings()

        if raw.get("cycle_variant") in {e.value for e in CycleVariant}:
            settings.cycle_variant = CycleVariant(raw["cycle_variant"])
        settings.tick_rate = max(1, int(raw.get("tick_rate", settings.tick_rate)))
        settings.pong_win_score = max(1, int(raw.get("pong_win_score", settings.pong_win_score)))
        if "pong_max_ball_speed" in raw:
            speed = raw["pong_max_ball_speed"]
            settings.pong_max_ball_speed = None if speed is None else float(speed)
        if str(raw.get("log_level", "")).upper() in LOG_LEVELS:
            settings.log_level = str(raw["log_level"]).upper()

        display = raw.get("display", {})
        settings.display.fullscreen = bool(display.get("fullscreen", settings.display.fullscreen))
        settings.display.show_grid = bool(display.get("show_grid", settings.display.show_grid))

        cycle_payload = raw.get("cycle_controls", [])
        settings.cycle_controls = [
            self._load_controls(cycle_payload[idx] if idx < len(cycle_payload) else {}, default)
            for idx, default in enumerate(settings.cycle_controls)
        ]
        pong_payload = raw.get("pong_controls", [])
        settings.pong_controls = [
            PongControls(
                up=int((pong_payload[idx] if idx < len(pong_payload) else {}).get("up", default.up)),
                down=int((pong_payload[idx] if idx < len(pong_payload) else {}).get("down", default.down)),
            )
            for idx, default in enumerate(settings.pong_controls)
        ]
        return settings

    @staticmethod
    def _load_controls(payload: dict[str, int], defaults: ControlScheme) -> ControlScheme:
        return ControlScheme(
            up=int(payload.get("up", defaults.up)),
            down=int(payload.get("down", defaults.down)),
            left=int(payload.get("left", defaults.left)),
            right=int(payload.get("right", defaults.right)),
        )

    def save(self) -> None:
        """Persist settings to disk."""
        payload = asdict(self.settings)
        payload["cycle_variant"] = self.settings.cycle_variant.value
        save_json(SETTINGS_FILE, payload)

    def set_variant(self, variant: CycleVariant) -> None:
        """Update the light-cycle variant and persist settings."""
        self.settings.cycle_variant = variant
        self.save()

    def adjust_tick_rate(self, delta: int) -> int:
        """Nudge the light-cycle tick rate and save."""
        self.settings.tick_rate = int(max(10, min(120, self.settings.tick_rate + delta)))
        self.save()
        return self.settings.tick_rate
