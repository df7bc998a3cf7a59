"""
Redaction orchestrator.

Wires the grammar resolver, parse adapter, tree walker and a fresh identifier
registry together for one request:

    validate -> resolve profile -> parse -> walk -> print -> result

Request problems (no source, unknown hint) surface as ``BadRequestError``
subclasses. Anything that fails after that is logged in full and re-raised
as a single opaque ``RedactionFailedError``.
"""

import logging
from typing import Any, Dict, Optional

from code_redact.exceptions import EmptyInputError, ParseError, RedactionFailedError
from code_redact.models import RedactionResult
from code_redact.parsing.adapter import ParseAdapter
from code_redact.parsing.grammar import GrammarProfileResolver
from code_redact.registry import IdentifierRegistry
from code_redact.substitutes.base_generator import BaseSubstituteGenerator
from code_redact.substitutes.faker_generator import FakerSubstituteGenerator
from code_redact.walker import TreeWalker

logger = logging.getLogger(__name__)


class CodeRedactor:
    """
    Redacts identifiers in source code, one independent request at a time.

    The substitute generator (and the random source behind it) lives as long
    as the redactor. Each call to ``redact_source`` gets its own registry, so
    no mapping is shared between requests.
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        generator: Optional[BaseSubstituteGenerator] = None,
    ):
        """
        Initialize the redactor.

        Args:
            config: Configuration dictionary (``grammar``, ``substitutes``
                and ``redaction`` sections are used)
            generator: Optional substitute generator; built from the
                ``substitutes`` section when omitted
        """
        self.config = config or {}
        self.grammar_config = self.config.get('grammar', {})
        self.substitutes_config = self.config.get('substitutes', {})
        self.redaction_config = self.config.get('redaction', {})

        self.include_mapping = bool(self.redaction_config.get('include_mapping', False))

        self.generator = generator or FakerSubstituteGenerator(self.substitutes_config)
        self.resolver = GrammarProfileResolver(self.grammar_config)
        self.adapter = ParseAdapter()
        self.walker = TreeWalker()

    def redact_source(
        self,
        raw_text: Optional[str],
        language_hint: Optional[str] = None,
        include_mapping: Optional[bool] = None,
    ) -> RedactionResult:
        """
        Redact every identifier in a source document.

        Args:
            raw_text: Source code to redact
            language_hint: Optional hint selecting the grammar profile
            include_mapping: Include the original -> substitute pairs in the
                result (defaults to ``redaction.include_mapping``)

        Returns:
            RedactionResult with the redacted code

        Raises:
            EmptyInputError: If no source code was supplied
            InvalidGrammarHintError: If the hint is not recognized
            RedactionFailedError: If parsing or rewriting fails
        """
        if not isinstance(raw_text, str) or not raw_text:
            raise EmptyInputError()

        profile = self.resolver.resolve(language_hint)
        if include_mapping is None:
            include_mapping = self.include_mapping

        try:
            tree = self.adapter.parse(raw_text, profile)
            registry = IdentifierRegistry(self.generator)
            replaced = self.walker.redact(tree, registry)
            redacted_code = self.adapter.print(tree)
        except ParseError as e:
            logger.warning("Error while parsing code with '%s' profile: %s", profile.name, e)
            raise RedactionFailedError() from e
        except Exception as e:
            logger.exception("Unexpected error while redacting code with '%s' profile", profile.name)
            raise RedactionFailedError() from e

        logger.debug(
            "Redacted %d identifier occurrences (%d distinct) using '%s' profile",
            replaced, len(registry), profile.name,
        )

        return RedactionResult(
            redacted_code=redacted_code,
            profile=profile.name,
            replaced=replaced,
            mapping=registry.snapshot() if include_mapping else None,
        )

    def get_strategy_name(self) -> str:
        return self.generator.get_strategy_name()

    def __repr__(self) -> str:
        return f"CodeRedactor(generator={self.generator!r}, default_profile={self.resolver.default_name})"


_default_redactor: Optional[CodeRedactor] = None


def redact_source(
    raw_text: Optional[str],
    language_hint: Optional[str] = None,
    include_mapping: bool = False,
) -> RedactionResult:
    """
    Redact source code with a default-configured redactor.

    Args:
        raw_text: Source code to redact
        language_hint: Optional grammar hint
        include_mapping: Include the identifier mapping in the result

    Returns:
        RedactionResult with the redacted code
    """
    global _default_redactor
    if _default_redactor is None:
        _default_redactor = CodeRedactor()
    return _default_redactor.redact_source(raw_text, language_hint, include_mapping)
