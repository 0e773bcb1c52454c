# intervalbill/config.py
import configparser
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import platformdirs

from .errors import ConfigError

APP_NAME = "intervalbill"
CONFIG_FILE_NAME = "config.ini"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

logger = logging.getLogger(__name__)


@dataclass
class AppConfig:
    """Dataclass to hold all application configuration."""

    config_dir: Path

    # Holiday sources are optional and combine with each other
    holidays_file: Optional[Path] = None
    holiday_country: Optional[str] = None
    holiday_subdiv: Optional[str] = None

    log_level: str = "WARNING"

    @property
    def config_file(self) -> Path:
        """Path to the main INI config file."""
        return self.config_dir / CONFIG_FILE_NAME


def _get_default_config_dir() -> Path:
    """
    Determines the default config directory based on environment.
    """
    is_dev_env = Path.cwd().joinpath("pyproject.toml").is_file()
    if is_dev_env:
        return Path.cwd() / "config"
    return Path(platformdirs.user_config_dir(APP_NAME, appauthor=False))


def load_config(config_file: Optional[Path] = None) -> AppConfig:
    """Loads application config. A missing file gives the defaults."""
    if config_file is None:
        config_file = _get_default_config_dir() / CONFIG_FILE_NAME
    config_file = Path(config_file)

    parser = configparser.ConfigParser()
    if config_file.is_file():
        logger.info("load_config: reading %s", config_file)
        try:
            parser.read(str(config_file), encoding="utf-8")
        except (configparser.Error, UnicodeDecodeError) as e:
            raise ConfigError(f"cannot read config: {e}", str(config_file)) from e
    else:
        logger.debug("load_config: %s not found, using defaults", config_file)

    try:
        holidays_file = parser.get("holidays", "file", fallback="").strip()
        holiday_country = parser.get("holidays", "country", fallback="").strip()
        holiday_subdiv = parser.get("holidays", "subdiv", fallback="").strip()
        log_level = parser.get("logging", "level", fallback="WARNING").strip().upper()
    except configparser.Error as e:
        raise ConfigError(f"invalid config value: {e}", str(config_file)) from e
    if log_level not in LOG_LEVELS:
        raise ConfigError(
            f"unknown logging level {log_level!r}, expected one of {', '.join(LOG_LEVELS)}", str(config_file)
        )

    if holidays_file:
        # Relative paths are resolved against the config file's directory
        path = Path(holidays_file).expanduser()
        if not path.is_absolute():
            path = config_file.parent / path
        holidays_file = path

    return AppConfig(
        config_dir=config_file.parent,
        holidays_file=holidays_file or None,
        holiday_country=holiday_country or None,
        holiday_subdiv=holiday_subdiv or None,
        log_level=log_level,
    )
