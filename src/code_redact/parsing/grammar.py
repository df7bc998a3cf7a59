"""
Grammar profile resolution.

Maps an optional language hint onto a concrete ``GrammarProfile``. Profiles
come from the ``grammar.profiles`` configuration section, falling back to a
built-in table.
"""

import logging
from typing import Any, Dict, Iterable, Optional

from code_redact.exceptions import InvalidGrammarHintError
from code_redact.models import GrammarPlugin, GrammarProfile, SourceType

logger = logging.getLogger(__name__)

DEFAULT_PROFILE_NAME = "module"

BUILTIN_PROFILES: Dict[str, Dict[str, Any]] = {
    "module": {"source_type": "module", "plugins": []},
    "script": {"source_type": "script", "plugins": []},
    "javascript": {"source_type": "module", "plugins": ["typescript", "jsx"]},
}

UNKNOWN_HINT_POLICIES = ("reject", "fallback")


def build_profile(name: str, options: Optional[Dict[str, Any]]) -> GrammarProfile:
    """
    Build a profile from its configuration entry.

    Args:
        name: Profile name
        options: Mapping with optional ``source_type`` and ``plugins`` keys

    Returns:
        GrammarProfile instance

    Raises:
        ValueError: If the source type or a plugin name is unknown
    """
    options = options or {}
    source_type = SourceType(str(options.get('source_type', 'module')).lower())
    plugins = frozenset(GrammarPlugin(str(p).lower()) for p in options.get('plugins') or [])
    return GrammarProfile(name=name, source_type=source_type, plugins=plugins)


def normalize_hint(hint: Optional[str]) -> Optional[str]:
    """Return the lower-cased hint, or None when it is absent or blank."""
    if hint is None:
        return None
    hint = str(hint).strip().lower()
    return hint or None


class GrammarProfileResolver:
    """
    Resolves language hints to grammar profiles.

    An absent or blank hint always gives the default profile. What happens to
    a non-empty hint that matches no profile is a policy choice made through
    ``grammar.unknown_hint``:

    - ``reject`` (default): raise ``InvalidGrammarHintError``
    - ``fallback``: log a warning and use the default profile
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the resolver.

        Args:
            config: The ``grammar`` configuration section
        """
        config = config or {}

        profile_table = config.get('profiles') or BUILTIN_PROFILES
        self.profiles: Dict[str, GrammarProfile] = {
            name.lower(): build_profile(name.lower(), options)
            for name, options in profile_table.items()
        }

        self.default_name = str(config.get('default_profile', DEFAULT_PROFILE_NAME)).lower()
        if self.default_name not in self.profiles:
            raise ValueError(f"Default grammar profile '{self.default_name}' is not defined")

        self.unknown_hint = str(config.get('unknown_hint', 'reject')).lower()
        if self.unknown_hint not in UNKNOWN_HINT_POLICIES:
            raise ValueError(
                f"Invalid unknown_hint policy: {self.unknown_hint}. Must be one of {list(UNKNOWN_HINT_POLICIES)}"
            )

    @property
    def default_profile(self) -> GrammarProfile:
        return self.profiles[self.default_name]

    def known_hints(self) -> Iterable[str]:
        return sorted(self.profiles)

    def resolve(self, hint: Optional[str]) -> GrammarProfile:
        """
        Resolve a language hint.

        Args:
            hint: Optional language hint (e.g. "javascript")

        Returns:
            The matching or default GrammarProfile

        Raises:
            InvalidGrammarHintError: If the hint is unknown and the policy is ``reject``
        """
        normalized = normalize_hint(hint)
        if normalized is None:
            return self.default_profile

        profile = self.profiles.get(normalized)
        if profile is not None:
            return profile

        if self.unknown_hint == 'fallback':
            logger.warning("Unknown language hint %r, using '%s' profile", hint, self.default_name)
            return self.default_profile

        raise InvalidGrammarHintError(str(hint))
