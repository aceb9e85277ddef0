"""Configuration loader for the Oceanio tracking engine."""

from functools import lru_cache
from pathlib import Path

import yaml

from src.configs.settings import get_settings

settings = get_settings()


class Config:
    """Configuration for the Oceanio tracking engine."""

    # 1. Setup Base Paths
    CONFIG_DIR = Path(__file__).parent.resolve()
    PROJECT_ROOT = settings.BASE_DIR

    # 2. Define File Paths
    TRACKING_CONFIG_PATH = settings.TRACKING_CONFIG_PATH

    @classmethod
    @lru_cache
    def load_tracking_config(cls) -> dict:
        """Load the YAML configuration for the upstream tracking endpoints."""
        if not cls.TRACKING_CONFIG_PATH.exists():
            raise FileNotFoundError(f"Missing config at {cls.TRACKING_CONFIG_PATH}")

        with open(cls.TRACKING_CONFIG_PATH, encoding="utf-8") as f:
            content = f.read()

        return yaml.safe_load(substitute_settings(content))


def substitute_settings(content: str) -> str:
    """
    Replace ${KEY} placeholders with values from settings.

    SecretStr values are unwrapped. Unknown placeholders are left untouched.
    """
    for key, value in settings.model_dump().items():
        placeholder = f"${{{key}}}"
        if placeholder in content:
            # Handle SecretStr
            val_str = (
                value.get_secret_value()
                if hasattr(value, "get_secret_value")
                else str(value)
            )
            content = content.replace(placeholder, val_str)
    return content
