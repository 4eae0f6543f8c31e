"""
ATR trailing stop configuration management

Loads the series and rule settings shipped alongside this package.
"""

import json
import logging
from typing import Dict, Any, Optional
from pathlib import Path

import jsonschema

from atrtrail.errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILES = {
    'series': 'series.json',
    'rules': 'rules.json',
}


class ConfigLoader:
    """Loads and manages configurations."""

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize configuration loader.

        Args:
            config_dir: Directory containing configuration files (defaults to this package)

        Raises:
            ConfigurationError: If a file is not valid JSON or violates its schema
        """
        self.config_dir = Path(config_dir) if config_dir is not None else Path(__file__).parent
        self.configs: Dict[str, Dict[str, Any]] = {}
        self._load_all_configs()

    def _load_all_configs(self) -> None:
        """Load all configuration files."""
        for config_name in CONFIG_FILES:
            self.configs[config_name] = self._load(config_name)

    def _load(self, config_name: str) -> Dict[str, Any]:
        config_path = self.config_dir / CONFIG_FILES[config_name]
        if not config_path.exists():
            logger.debug("config_missing", extra={"config": config_name, "path": str(config_path)})
            return {}

        try:
            with open(config_path, 'r') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {config_path}: {e}") from e

        # Validate with JSON Schema when a schema sits next to the file
        schema_path = self.config_dir / f"{config_name}.schema.json"
        if schema_path.exists():
            with open(schema_path, 'r') as sf:
                schema = json.load(sf)
            try:
                jsonschema.validate(instance=config, schema=schema)
            except jsonschema.ValidationError as e:
                raise ConfigurationError(f"{config_path}: {e.message}") from e

        logger.debug("config_loaded", extra={"config": config_name, "path": str(config_path)})
        return config

    def get_config(self, config_name: str) -> Dict[str, Any]:
        """
        Get configuration by name.

        Args:
            config_name: Name of configuration

        Returns:
            Configuration dictionary
        """
        return self.configs.get(config_name, {})

    def get_all_configs(self) -> Dict[str, Dict[str, Any]]:
        """
        Get all configurations.

        Returns:
            Dictionary of all configurations
        """
        return self.configs.copy()

    def reload_config(self, config_name: str) -> None:
        """
        Reload specific configuration.

        Args:
            config_name: Name of configuration to reload

        Raises:
            ConfigurationError: If the name is unknown or the file is invalid
        """
        if config_name not in CONFIG_FILES:
            raise ConfigurationError(f"Unknown configuration '{config_name}'")
        self.configs[config_name] = self._load(config_name)


# Global configuration loader instance
config_loader = ConfigLoader()
