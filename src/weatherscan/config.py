# runtime settings read from the environment
# in production, environment variables are injected by the scheduler or the shell

from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_PATTERN = "*.csv"
DEFAULT_HUMIDITY_THRESHOLD = 80.0
DEFAULT_LOG_LEVEL = "INFO"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    file_pattern: str = DEFAULT_PATTERN
    humidity_threshold: float = DEFAULT_HUMIDITY_THRESHOLD
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        if environ is None:
            load_dotenv()
            environ = os.environ

        raw_threshold = environ.get("WEATHER_HUMIDITY_THRESHOLD", str(DEFAULT_HUMIDITY_THRESHOLD))
        try:
            threshold = float(raw_threshold)
        except ValueError as exc:
            raise ConfigError(f"WEATHER_HUMIDITY_THRESHOLD must be a number (got {raw_threshold!r})") from exc

        level = environ.get("WEATHER_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        # getLevelName maps known names to ints and unknown ones to "Level x"
        if not isinstance(logging.getLevelName(level), int):
            raise ConfigError(f"WEATHER_LOG_LEVEL is not a logging level (got {level!r})")

        return cls(
            data_dir=Path(environ.get("WEATHER_DATA_DIR", ".")).expanduser(),
            file_pattern=environ.get("WEATHER_FILE_PATTERN", DEFAULT_PATTERN),
            humidity_threshold=threshold,
            log_level=level,
        )
