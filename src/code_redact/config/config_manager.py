"""
Configuration manager for loading and managing application configuration.

This module handles loading configuration from YAML files and providing
access to configuration options throughout the application.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Any, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = str(Path(__file__).parent / 'default_config.yaml')


class ConfigManager:
    """
    Manager for loading and accessing configuration.

    Configuration is loaded from multiple sources in this order:
    1. Default configuration (packaged default_config.yaml)
    2. User-provided configuration file
    3. Environment variables
    4. CLI argument overrides
    """

    def __init__(self, default_config_path: str = DEFAULT_CONFIG_PATH):
        """
        Initialize configuration manager.

        Args:
            default_config_path: Path to default configuration file
        """
        self.default_config_path = default_config_path
        self.config_data: Dict[str, Any] = {}

    @classmethod
    def load(
        cls,
        default_path: str = DEFAULT_CONFIG_PATH,
        user_path: Optional[str] = None,
        cli_overrides: Optional[Dict[str, Any]] = None
    ) -> 'ConfigManager':
        """
        Load configuration from multiple sources.

        Args:
            default_path: Path to default configuration
            user_path: Optional path to user configuration file
            cli_overrides: Optional dictionary of CLI argument overrides

        Returns:
            ConfigManager instance with loaded configuration
        """
        manager = cls(default_path)

        # Load default configuration
        manager._load_yaml(default_path)

        # Load user configuration if provided
        if user_path:
            if os.path.exists(user_path):
                manager._merge_config(manager._load_yaml_file(user_path))
            else:
                logger.warning("User configuration file not found: %s", user_path)

        manager._apply_env_overrides()

        if cli_overrides:
            manager._merge_config(cli_overrides)

        return manager

    def _load_yaml(self, path: str) -> None:
        """
        Load YAML configuration file.

        Args:
            path: Path to YAML file
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                self.config_data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.warning("Configuration file not found: %s", path)
            self.config_data = {}
        except yaml.YAMLError as e:
            logger.error("Error parsing YAML configuration %s: %s", path, e)
            self.config_data = {}

    def _load_yaml_file(self, path: str) -> Dict[str, Any]:
        """
        Load YAML file and return as dictionary.

        Args:
            path: Path to YAML file

        Returns:
            Dictionary with configuration data
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error("Error loading configuration from %s: %s", path, e)
            return {}

    def _merge_config(self, new_config: Dict[str, Any]) -> None:
        """
        Merge new configuration into existing configuration.

        Args:
            new_config: New configuration dictionary to merge
        """
        self._deep_merge(self.config_data, new_config)

    def _deep_merge(self, base: Dict, update: Dict) -> None:
        """
        Deep merge update dictionary into base dictionary.

        Args:
            base: Base dictionary to update
            update: Dictionary with updates
        """
        for key, value in update.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides to configuration."""
        env_log_level = os.getenv('CODE_REDACT_LOG_LEVEL')
        if env_log_level:
            self.config_data.setdefault('logging', {})['level'] = env_log_level

        env_seed = os.getenv('CODE_REDACT_SEED')
        if env_seed:
            try:
                self.config_data.setdefault('substitutes', {})['seed'] = int(env_seed)
            except ValueError:
                logger.warning("Ignoring non-integer CODE_REDACT_SEED: %r", env_seed)

        env_unknown_hint = os.getenv('CODE_REDACT_UNKNOWN_HINT')
        if env_unknown_hint:
            self.config_data.setdefault('grammar', {})['unknown_hint'] = env_unknown_hint

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Supports dot notation for nested keys (e.g., "grammar.unknown_hint")

        Args:
            key: Configuration key (supports dot notation)
            default: Default value if key doesn't exist

        Returns:
            Configuration value or default
        """
        keys = key.split('.')
        value = self.config_data

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def get_logging_config(self) -> Dict[str, Any]:
        return self.config_data.get('logging', {})

    def __repr__(self) -> str:
        """String representation."""
        return f"ConfigManager(loaded={len(self.config_data)} sections)"
