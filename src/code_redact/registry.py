"""
Per-request identifier registry.

Maps each distinct original identifier name to exactly one substitute.
A registry lives for one redaction request and is then discarded.
"""

from typing import Dict, List, Tuple

from code_redact.substitutes.base_generator import BaseSubstituteGenerator


class IdentifierRegistry:
    """
    Lazily built original-name -> substitute-name mapping.

    Substitutes are not required to be unique: two original names may be
    given the same substitute if the generator repeats itself. What is
    guaranteed is that one original name never gets two substitutes.
    """

    def __init__(self, generator: BaseSubstituteGenerator):
        self.generator = generator
        self._mapping: Dict[str, str] = {}

    def resolve(self, original_name: str) -> str:
        """
        Return the substitute for a name, generating it on first sight.

        Args:
            original_name: Non-empty identifier name

        Returns:
            Substitute name

        Raises:
            ValueError: If the name is empty or not a string
        """
        if not isinstance(original_name, str) or not original_name:
            raise ValueError(f"Identifier name must be a non-empty string, got {original_name!r}")

        substitute = self._mapping.get(original_name)
        if substitute is None:
            substitute = self.generator.generate()
            self._mapping[original_name] = substitute
        return substitute

    def snapshot(self) -> List[Tuple[str, str]]:
        """Return (original, substitute) pairs in first-seen order."""
        return list(self._mapping.items())

    def as_dict(self) -> Dict[str, str]:
        return dict(self._mapping)

    def __len__(self) -> int:
        return len(self._mapping)

    def __contains__(self, original_name: object) -> bool:
        return original_name in self._mapping

    def __repr__(self) -> str:
        return f"IdentifierRegistry(names={len(self._mapping)}, strategy={self.generator.get_strategy_name()})"
