"""
Base configuration for batchcall.

Values come from the process environment, with a .env file loaded at import.
"""

import os
import logging
from typing import Optional
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

ENVIRONMENTS = ("local", "dev", "test", "staging", "production")


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""
    pass


@dataclass
class BaseConfig:
    """Environment name and log level shared by every configuration class."""

    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "local")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    def __post_init__(self):
        self._setup_logging()
        self._validate_config()

    def _setup_logging(self):
        """Configure the root logger from LOG_LEVEL."""
        level = getattr(logging, self.LOG_LEVEL.upper(), None)
        if not isinstance(level, int):
            raise ConfigError(f"Invalid log level: {self.LOG_LEVEL}")
        logging.basicConfig(
            level=level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    def _validate_config(self):
        if self.ENVIRONMENT not in ENVIRONMENTS:
            raise ConfigError(f"Invalid environment: {self.ENVIRONMENT}")

    @staticmethod
    def get_env(key: str, default: Optional[str] = None) -> Optional[str]:
        """Get environment variable, or default if it is not set."""
        return os.getenv(key, default)

    @staticmethod
    def get_env_float(key: str, default: Optional[float] = None) -> float:
        """
        Get environment variable as float.

        Raises:
            ConfigError: If the value is missing or not a number
        """
        value = BaseConfig.get_env(key, str(default) if default is not None else None)
        try:
            return float(value)
        except (ValueError, TypeError):
            raise ConfigError(f"Environment variable '{key}' must be a float, got: {value}")
