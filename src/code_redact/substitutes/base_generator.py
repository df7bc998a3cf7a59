"""
Base substitute generator.

This module defines the abstract base class that all substitute generators
must implement.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class BaseSubstituteGenerator(ABC):
    """
    Abstract base class for substitute name strategies.

    A generator produces a fresh replacement name on every call. It is not
    required to avoid repeats; keeping one original name mapped to one
    substitute is the job of the identifier registry.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the generator with configuration.

        Args:
            config: Configuration dictionary for the generator
        """
        self.config = config or {}
        self.name = self.__class__.__name__

    @abstractmethod
    def generate(self) -> str:
        """
        Produce a new substitute name.

        Returns:
            A non-empty string usable as an identifier
        """
        pass

    @abstractmethod
    def get_strategy_name(self) -> str:
        """
        Get the name of this substitution strategy.

        Returns:
            String representing the strategy name (e.g., "word")
        """
        pass

    def get_config_option(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration option for this generator.

        Args:
            key: Configuration key to retrieve
            default: Default value if key doesn't exist or is None

        Returns:
            Configuration value or default
        """
        value = self.config.get(key)
        return default if value is None else value

    def __repr__(self) -> str:
        """String representation of the generator."""
        return f"{self.name}(strategy={self.get_strategy_name()})"
