"""Shared setup logic for CLI commands."""

from __future__ import annotations

from pathlib import Path

MARGINALIA_DIR = Path.home() / ".marginalia"
CONFIG_PATH = MARGINALIA_DIR / "config.yaml"


def load_config(config_file: str | None = None):
    """Load config from ``config_file``, else ~/.marginalia/config.yaml if present."""
    from marginalia.core.config import Config

    path = config_file or (str(CONFIG_PATH) if CONFIG_PATH.exists() else None)
    return Config(config_file=path)


def configure_logging(config, verbose: bool = False) -> None:
    from marginalia.core.utils.logging import setup_logging

    level = "DEBUG" if verbose else config.get("logging.level", "WARNING")
    log_file = config.get_log_file()
    if log_file:
        config.ensure_directories()
    setup_logging(level=level, log_file=log_file)
