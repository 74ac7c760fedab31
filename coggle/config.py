"""
Configuration management for the Coggle client.

This module handles loading and accessing configuration values from coggle.yaml.
Values passed explicitly to CoggleApi always win over the configuration file.
"""

import yaml
import sys
from pathlib import Path
from typing import Any, Dict, Optional
import logging


class ConfigManager:
    """
    Manages configuration loading and access for the Coggle client.
    """

    def __init__(self, config_path: str = "coggle.yaml"):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file
        """
        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if not self.config_path.exists():
            logging.debug(f"No configuration file at {self.config_path}, using defaults")
            self._config = self._get_default_config()
            return

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                self._config = yaml.safe_load(f) or {}

            logging.info(f"Configuration loaded from {self.config_path}")

        except (OSError, yaml.YAMLError) as e:
            logging.error(f"Failed to load configuration: {e}")
            # Fall back to default configuration
            self._config = self._get_default_config()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values as fallback."""
        return {
            "api": {
                "base_url": "https://coggle.it",
                "token": None,
                "timeout": 30.0
            },
            "logging": {
                "level": "WARNING",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        }

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration value (e.g., "api.base_url")
            default: Default value if key is not found

        Returns:
            The configuration value
        """
        keys = key_path.split('.')
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get an entire configuration section."""
        return self._config.get(section, {})

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    # Convenience properties for commonly used values

    @property
    def base_url(self) -> str:
        """Get the Coggle service URL."""
        return self.get("api.base_url", "https://coggle.it")

    @property
    def token(self) -> Optional[str]:
        """Get the access token, if one is configured."""
        return self.get("api.token")

    @property
    def timeout(self) -> float:
        """Get the HTTP timeout in seconds."""
        return self.get("api.timeout", 30.0)

    @property
    def log_level(self) -> str:
        return self.get("logging.level", "WARNING")

    @property
    def log_format(self) -> str:
        return self.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def setup_logging(config_manager: Optional[ConfigManager] = None) -> None:
    """
    Configure root logging from the logging section of the configuration.

    Library code never calls this; applications embedding the client may.
    """
    cfg = config_manager or get_config()
    level = getattr(logging, str(cfg.log_level).upper(), logging.WARNING)

    logging.basicConfig(
        level=level,
        format=cfg.log_format,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True
    )


# Global configuration instance
config = ConfigManager()


def get_config() -> ConfigManager:
    """
    Get the global configuration instance.

    Returns:
        The global ConfigManager instance
    """
    return config
