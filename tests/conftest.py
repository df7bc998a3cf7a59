"""Shared fixtures for code_redact tests."""

import pytest

from code_redact.config.config_manager import ConfigManager
from code_redact.redactor import CodeRedactor
from code_redact.substitutes.base_generator import BaseSubstituteGenerator


class SequenceGenerator(BaseSubstituteGenerator):
    """Deterministic generator yielding sub_1, sub_2, ..."""

    def __init__(self, prefix: str = "sub"):
        super().__init__({})
        self.prefix = prefix
        self.calls = 0

    def generate(self) -> str:
        self.calls += 1
        return f"{self.prefix}_{self.calls}"

    def get_strategy_name(self) -> str:
        return "sequence"


@pytest.fixture
def sequence_generator():
    return SequenceGenerator()


@pytest.fixture
def redactor(sequence_generator):
    return CodeRedactor(generator=sequence_generator)


@pytest.fixture
def default_config():
    """Packaged default configuration, with no user file or CLI overrides."""
    return ConfigManager.load().config_data
