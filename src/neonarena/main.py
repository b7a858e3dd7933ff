"""Executable entrypoint for Neon Arena."""

from __future__ import annotations

import logging

from .game import ArenaApp
from .settings import SettingsManager


def main() -> None:
    """Load settings, configure logging, and launch the arena."""
    manager = SettingsManager()
    logging.basicConfig(
        level=getattr(logging, manager.settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ArenaApp(settings_manager=manager).run()


if __name__ == "__main__":
    main()
