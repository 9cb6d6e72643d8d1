"""
Configuration loader.

Loads configuration from a YAML file and environment variables.
"""

import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from wms_preferences.utils.logger import logger, setup_logger


DEFAULT_CONFIG_FILE = "config/config.yml"
EXAMPLE_CONFIG_FILE = "config/config.example.yml"

# ${VAR_NAME} or ${VAR_NAME:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]+))?\}")


class ConfigLoader:
    """
    Configuration loader that merges YAML config with environment variables.

    Environment variables can be referenced in YAML using ${VAR_NAME} syntax.
    Supports default values with ${VAR_NAME:-default_value} syntax.
    """

    def __init__(self, config_file: str = DEFAULT_CONFIG_FILE, env_file: Optional[str] = ".env"):
        """
        Initialize config loader.

        Args:
            config_file: Path to YAML configuration file
            env_file: Path to a dotenv file, or None to skip it
        """
        self.config_file = config_file
        self.config: Dict[str, Any] = {}
        self._load_dotenv(env_file)
        self._load_yaml()
        self.config = self._resolve_dict(self.config)

    def _load_dotenv(self, env_file: Optional[str]) -> None:
        """Load environment variables from a .env file if present."""
        if env_file and Path(env_file).exists():
            load_dotenv(env_file)
            logger.info(f"Loaded environment variables from {env_file}")

    def _load_yaml(self) -> None:
        """Load configuration from YAML file."""
        config_path = Path(self.config_file)

        if not config_path.exists():
            example_path = Path(EXAMPLE_CONFIG_FILE)
            if example_path.exists():
                logger.debug(f"Config file {self.config_file} not found, using {EXAMPLE_CONFIG_FILE}")
                config_path = example_path
            else:
                logger.debug(f"Config file {self.config_file} not found, using defaults")
                return

        with open(config_path, "r") as f:
            self.config = yaml.safe_load(f) or {}
        logger.debug(f"Loaded configuration from {config_path}")

    def _resolve_dict(self, d: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively resolve env vars in dictionary."""
        result = {}
        for key, value in d.items():
            if isinstance(value, dict):
                result[key] = self._resolve_dict(value)
            elif isinstance(value, str):
                result[key] = self._resolve_string(value)
            elif isinstance(value, list):
                result[key] = [
                    self._resolve_string(item) if isinstance(item, str) else item
                    for item in value
                ]
            else:
                result[key] = value
        return result

    def _resolve_string(self, value: str) -> str:
        """
        Resolve environment variable references in a string.

        Args:
            value: String potentially containing ${VAR_NAME} references

        Returns:
            String with env vars resolved
        """

        def replacer(match):
            var_name = match.group(1)
            default_value = match.group(2)
            env_value = os.getenv(var_name)

            if env_value is not None:
                return env_value
            if default_value is not None:
                return default_value
            logger.warning(f"Environment variable {var_name} not set and no default provided")
            return match.group(0)

        return ENV_VAR_PATTERN.sub(replacer, value)

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-separated key path.

        Args:
            key_path: Dot-separated path (e.g., "database.url")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value = self.config
        for key in key_path.split("."):
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    def get_all(self) -> Dict[str, Any]:
        """Get all configuration as dictionary."""
        return self.config


config = ConfigLoader()
setup_logger(level=config.get("logging.level"))
