"""
Pokédex catalog configuration.

Values are read from the environment (a local ``.env`` file is loaded
first when present). Everything has a safe default so the viewer runs
against the public PokéAPI without any setup.
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


class ConfigError(Exception):
    """Configuration validation error"""
    pass


class Config:
    """Application configuration with environment variable validation"""

    POKEAPI_BASE_URL: str = "https://pokeapi.co/api/v2"
    POKEAPI_TIMEOUT: float = 10.0
    APP_LOG_LEVEL: str = "INFO"

    def __init__(self):
        self._errors = []
        self._load_optional_env_vars()
        self._validate_config()

    def _load_optional_env_vars(self) -> None:
        """Load optional environment variables with defaults"""
        self.POKEAPI_BASE_URL = os.getenv("POKEAPI_BASE_URL", self.POKEAPI_BASE_URL).strip().rstrip("/")

        raw_timeout = os.getenv("POKEAPI_TIMEOUT", str(self.POKEAPI_TIMEOUT))
        try:
            self.POKEAPI_TIMEOUT = float(raw_timeout)
        except ValueError:
            self._errors.append(f"POKEAPI_TIMEOUT must be a number, got {raw_timeout!r}")

        self.APP_LOG_LEVEL = os.getenv("APP_LOG_LEVEL", self.APP_LOG_LEVEL).strip().upper()

    def _validate_config(self) -> None:
        """Validate configuration values"""
        if not self.POKEAPI_BASE_URL.startswith(("http://", "https://")):
            self._errors.append(
                f"POKEAPI_BASE_URL must start with http:// or https://, got {self.POKEAPI_BASE_URL!r}"
            )

        if self.POKEAPI_TIMEOUT <= 0:
            self._errors.append("POKEAPI_TIMEOUT must be greater than 0")

        if not isinstance(logging.getLevelName(self.APP_LOG_LEVEL), int):
            self._errors.append(f"APP_LOG_LEVEL is not a logging level: {self.APP_LOG_LEVEL!r}")

        if self._errors:
            raise ConfigError(
                "Invalid configuration:\n"
                + "\n".join(f"  - {error}" for error in self._errors)
            )


_config: Optional[Config] = None


def get_config() -> Config:
    """Return the process configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Forget the cached configuration so the next call re-reads the environment."""
    global _config
    _config = None
