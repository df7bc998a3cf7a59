"""
Unit tests for grammar profile resolution.
"""

import logging

import pytest

from code_redact.exceptions import BadRequestError, InvalidGrammarHintError
from code_redact.models import GrammarPlugin, SourceType
from code_redact.parsing.grammar import GrammarProfileResolver, build_profile


class TestGrammarProfileResolver:
    """Test hint to profile mapping."""

    @pytest.mark.parametrize("hint", [None, "", "   "])
    def test_absent_hint_uses_default(self, hint):
        """Test missing or blank hints give the plain module profile."""
        profile = GrammarProfileResolver().resolve(hint)

        assert profile.name == "module"
        assert profile.source_type is SourceType.MODULE
        assert not profile.plugins
        assert profile.grammar == "javascript"

    def test_javascript_hint_enables_extensions(self):
        """Test the javascript hint turns on TypeScript and JSX."""
        profile = GrammarProfileResolver().resolve("javascript")

        assert profile.plugins == {GrammarPlugin.TYPESCRIPT, GrammarPlugin.JSX}
        assert profile.is_extended
        assert profile.grammar == "tsx"

    def test_hint_is_case_insensitive(self):
        """Test hints are matched after trimming and lower-casing."""
        profile = GrammarProfileResolver().resolve("  JavaScript ")

        assert profile.name == "javascript"

    def test_script_hint(self):
        """Test the script profile."""
        profile = GrammarProfileResolver().resolve("script")

        assert profile.source_type is SourceType.SCRIPT
        assert not profile.is_extended

    def test_unknown_hint_rejected_by_default(self):
        """Test an unrecognized hint is a bad request."""
        with pytest.raises(InvalidGrammarHintError) as excinfo:
            GrammarProfileResolver().resolve("cobol")

        assert isinstance(excinfo.value, BadRequestError)
        assert excinfo.value.status_code == 400
        assert excinfo.value.hint == "cobol"

    def test_unknown_hint_fallback_policy(self, caplog):
        """Test the fallback policy logs and uses the default profile."""
        resolver = GrammarProfileResolver({'unknown_hint': 'fallback'})

        with caplog.at_level(logging.WARNING, logger='code_redact.parsing.grammar'):
            profile = resolver.resolve("cobol")

        assert profile.name == "module"
        assert "cobol" in caplog.text

    def test_invalid_policy(self):
        """Test unknown policies are rejected."""
        with pytest.raises(ValueError):
            GrammarProfileResolver({'unknown_hint': 'ignore'})

    def test_configured_profiles(self):
        """Test profiles come from configuration when given."""
        resolver = GrammarProfileResolver({
            'default_profile': 'plain',
            'profiles': {
                'plain': {'source_type': 'script'},
                'typescript': {'plugins': ['typescript']},
            },
        })

        assert resolver.resolve(None).name == "plain"
        assert resolver.resolve("typescript").grammar == "typescript"
        assert list(resolver.known_hints()) == ["plain", "typescript"]
        with pytest.raises(InvalidGrammarHintError):
            resolver.resolve("javascript")

    def test_missing_default_profile(self):
        """Test the default profile must be defined."""
        with pytest.raises(ValueError):
            GrammarProfileResolver({'default_profile': 'nope'})


class TestBuildProfile:
    """Test profile construction from configuration entries."""

    def test_jsx_only(self):
        """Test a JSX-only profile keeps the JavaScript grammar."""
        profile = build_profile("react", {'plugins': ['jsx']})

        assert profile.allows_jsx
        assert not profile.allows_typescript
        assert profile.grammar == "javascript"

    def test_unknown_plugin(self):
        """Test unknown plugins are rejected."""
        with pytest.raises(ValueError):
            build_profile("weird", {'plugins': ['flow']})


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
