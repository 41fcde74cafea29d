"""Game settings loaded from YAML, with environment overrides."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

from .engine.roles import DEFAULT_CATALOG, SecretTarget
from .errors import MalformedInput

DEFAULT_CONFIG_PATH = "config/game.yaml"

# Rooms untouched for this long are evicted from memory
DEFAULT_ROOM_IDLE_TIMEOUT = 6 * 60 * 60


@dataclass
class Settings:
    """Configuration for the game service."""
    room_idle_timeout: Optional[float] = DEFAULT_ROOM_IDLE_TIMEOUT
    journal_dir: Optional[str] = None
    catalog: list[SecretTarget] = field(default_factory=lambda: list(DEFAULT_CATALOG))

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        """Build settings from a parsed config mapping."""
        game = data.get("game") or {}
        settings = cls()

        if "room_idle_timeout" in game:
            settings.room_idle_timeout = _parse_timeout(game["room_idle_timeout"])
        if game.get("journal_dir"):
            settings.journal_dir = str(game["journal_dir"])

        entries = data.get("catalog")
        if entries:
            try:
                settings.catalog = [SecretTarget(**entry) for entry in entries]
            except (TypeError, ValueError) as e:
                raise MalformedInput(f"Invalid catalog entry: {e}") from e

        return settings

    @classmethod
    def from_yaml(cls, config_path: str = DEFAULT_CONFIG_PATH) -> "Settings":
        """Load settings from a YAML file; a missing file gives defaults."""
        path = Path(config_path)
        if not path.exists():
            return cls()

        with open(path) as f:
            return cls.from_dict(yaml.safe_load(f) or {})


def _parse_timeout(value) -> Optional[float]:
    """Zero, empty or null disables idle expiry."""
    if value in (None, "", 0, "0"):
        return None
    try:
        timeout = float(value)
    except (TypeError, ValueError) as e:
        raise MalformedInput(f"Invalid room idle timeout: {value!r}") from e
    return timeout if timeout > 0 else None


def load_settings(config_path: Optional[str] = None) -> Settings:
    """Load settings from the config file and environment.

    Environment variables (also read from a .env file) take precedence:
    IMPOSTOR_CONFIG picks the file, IMPOSTOR_JOURNAL_DIR and
    IMPOSTOR_ROOM_IDLE_TIMEOUT override its values.
    """
    load_dotenv()

    path = config_path or os.getenv("IMPOSTOR_CONFIG", DEFAULT_CONFIG_PATH)
    settings = Settings.from_yaml(path)

    journal_dir = os.getenv("IMPOSTOR_JOURNAL_DIR")
    if journal_dir:
        settings.journal_dir = journal_dir

    timeout = os.getenv("IMPOSTOR_ROOM_IDLE_TIMEOUT")
    if timeout is not None:
        settings.room_idle_timeout = _parse_timeout(timeout)

    return settings
