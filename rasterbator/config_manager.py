"""Preset loading for the Rasterbator command line.

This module reads rasterization options from JSON preset files.
"""

import json
import logging
from pathlib import Path

from .models import ConfigurationError, RasterConfig

logger = logging.getLogger(__name__)


class ConfigManager:
    """Handles loading of rasterization presets."""

    def __init__(self, config_path: "str | Path"):
        """Initialize config manager.

        Args:
            config_path: Path to a JSON object of options, using the same
                names as RasterConfig.from_options
        """
        self.config_path = Path(config_path)

    def load_options(self) -> dict:
        """Read the raw option mapping, empty if the file does not exist.

        Raises:
            ConfigurationError: If the file is unreadable or not a JSON object
        """
        if not self.config_path.exists():
            logger.warning("Preset %s not found, using defaults", self.config_path)
            return {}

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Could not read preset {self.config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Preset {self.config_path} must contain a JSON object")

        logger.info("Loaded preset from %s", self.config_path)
        return data

    def load(self, **overrides) -> RasterConfig:
        """Load a validated config, with overrides taking precedence.

        Returns:
            RasterConfig with preset values, overrides and defaults merged
        """
        options = self.load_options()
        options.update(overrides)
        return RasterConfig.from_options(**options)
