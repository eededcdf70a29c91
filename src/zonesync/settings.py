"""Application settings — reads .env + optional settings.toml into AppConfig.

Resolution order for each key (highest first):
  1. ZONESYNC_* environment variable (.env files are loaded into the env)
  2. [zonesync] table in <config_dir>/settings.toml
  3. built-in default

Key entities:
  - AppConfig: frozen dataclass with all resolved configuration.
  - load_settings(): parse .env + settings.toml → AppConfig.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from .utils import zonesync_dir

logger = logging.getLogger(__name__)

DEFAULT_ORIGIN = "http://localhost:3000"
DEFAULT_MEET_PROVIDER = "google.com"
DEFAULT_ZONES = ("UTC", "Asia/Kolkata")

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


# ---------------------------------------------------------------------------
# AppConfig
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AppConfig:
    """Resolved configuration.

    All path attributes are pre-resolved; no further env lookups needed.
    """

    config_dir: Path = field(default_factory=zonesync_dir)

    # Share link
    origin: str = DEFAULT_ORIGIN
    meet_provider: str = DEFAULT_MEET_PROVIDER

    # Initial state when nothing was saved yet
    default_zones: tuple[str, ...] = DEFAULT_ZONES

    log_level: str = "WARNING"

    @property
    def state_file(self) -> Path:
        return self.config_dir / "state.json"

    @property
    def settings_file(self) -> Path:
        return self.config_dir / "settings.toml"


# ---------------------------------------------------------------------------
# load_settings
# ---------------------------------------------------------------------------


def load_settings(config_dir: Path | None = None) -> AppConfig:
    """Read .env + settings.toml and return an AppConfig.

    Args:
        config_dir: Override for the base config directory.
                    Defaults to ``zonesync_dir()``.

    Raises:
        ValueError: settings.toml is unreadable or holds invalid values.
    """
    if config_dir is None:
        config_dir = zonesync_dir()

    # Load .env files (local cwd first, then config_dir)
    local_env = Path(".env")
    global_env = config_dir / ".env"
    if local_env.is_file():
        load_dotenv(local_env)
    if global_env.is_file():
        load_dotenv(global_env)

    section: dict = {}
    toml_path = config_dir / "settings.toml"
    if toml_path.is_file():
        try:
            with open(toml_path, "rb") as f:
                raw = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid {toml_path}: {e}") from e
        section = raw.get("zonesync", {})
        logger.debug("Loaded settings from %s", toml_path)

    def _get(key: str, default):
        """Env var > settings.toml > default."""
        env_value = os.getenv(f"ZONESYNC_{key.upper()}", "")
        if env_value:
            return env_value
        return section.get(key, default)

    raw_zones = _get("default_zones", list(DEFAULT_ZONES))
    if isinstance(raw_zones, str):
        raw_zones = raw_zones.split(",")
    if not isinstance(raw_zones, (list, tuple)):
        raise ValueError("default_zones must be a list of zone ids")
    default_zones = tuple(str(z).strip() for z in raw_zones if str(z).strip())
    if not default_zones:
        raise ValueError("default_zones must name at least one time zone.")

    log_level = str(_get("log_level", "WARNING")).upper()
    if log_level not in _LOG_LEVELS:
        raise ValueError(f"Unknown log_level: {log_level!r}")

    return AppConfig(
        config_dir=config_dir,
        origin=str(_get("origin", DEFAULT_ORIGIN)),
        meet_provider=str(_get("meet_provider", DEFAULT_MEET_PROVIDER)),
        default_zones=default_zones,
        log_level=log_level,
    )
