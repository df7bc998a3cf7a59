"""
Faker substitute generator - builds readable names from dictionary words.

Substitutes look like ``voluptas_42``: a random lorem word, a separator and a
random integer. They are ASCII-only and always end in a digit, so they can
never collide with a reserved word.
"""

import re
from typing import Any, Dict, Optional

from faker import Faker

from code_redact.substitutes.base_generator import BaseSubstituteGenerator

_NON_LETTERS = re.compile(r'[^A-Za-z]')
_VALID_SEPARATOR = re.compile(r'^[A-Za-z0-9_$]*$')

FALLBACK_WORD = "name"


class FakerSubstituteGenerator(BaseSubstituteGenerator):
    """
    Word + number substitute generator backed by Faker.

    Examples:
        - generate() -> "dolor_17"
        - generate() -> "quia_3"

    The Faker instance is the random source. Pass one in to control it
    (a seeded instance, or any object with ``word()`` and ``random_int()``);
    otherwise one is built from the ``locale`` and ``seed`` options.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, fake: Optional[Any] = None):
        """
        Initialize the generator.

        Args:
            config: Configuration dictionary with substitute options
            fake: Optional pre-built random source
        """
        super().__init__(config)

        self.locale = self.get_config_option('locale', 'en_US')
        self.seed = self.get_config_option('seed', None)
        self.separator = str(self.get_config_option('separator', '_'))
        self.min_number = int(self.get_config_option('min_number', 1))
        self.max_number = int(self.get_config_option('max_number', 100))

        if self.min_number < 0:
            raise ValueError(f"min_number must not be negative, got {self.min_number}")
        if self.min_number > self.max_number:
            raise ValueError(
                f"min_number ({self.min_number}) must not exceed max_number ({self.max_number})"
            )
        if not _VALID_SEPARATOR.match(self.separator):
            raise ValueError(f"Separator must be identifier-safe, got {self.separator!r}")

        self.fake = fake if fake is not None else self._init_faker()

    def _init_faker(self) -> Faker:
        """Build a Faker instance, seeded when a seed is configured."""
        fake = Faker(self.locale)
        if self.seed is not None:
            fake.seed_instance(self.seed)
        return fake

    def generate(self) -> str:
        """
        Generate a substitute from a random word and number.

        Returns:
            Substitute name such as ``alias_12``
        """
        word = _NON_LETTERS.sub('', self.fake.word()) or FALLBACK_WORD
        number = self.fake.random_int(min=self.min_number, max=self.max_number)
        return f"{word}{self.separator}{number}"

    def get_strategy_name(self) -> str:
        """Return strategy name."""
        return "word"
