"""
End-to-end tests for the redaction orchestrator.
"""

import logging
import re
from concurrent.futures import ThreadPoolExecutor

import pytest

from code_redact.exceptions import (
    BadRequestError,
    EmptyInputError,
    InvalidGrammarHintError,
    RedactionFailedError,
)
from code_redact.parsing.adapter import ParseAdapter
from code_redact.redactor import CodeRedactor, redact_source

SAMPLE = """\
import { readFile } from "fs";

// Load the user's settings
export async function loadSettings(path, fallback) {
  const raw = await readFile(path, "utf8");
  const { theme, size: fontSize } = JSON.parse(raw);
  outer: for (const key of Object.keys(fallback)) {
    if (!key) break outer;
  }
  return { theme, fontSize, path };
}

class Cache {
  #entries = new Map();
  lookup(key) { return this.#entries.get(key); }
}
"""


def identifiers(code, redactor, hint=None):
    profile = redactor.resolver.resolve(hint)
    return ParseAdapter().parse(code, profile)


class TestScenarios:
    """Test the documented redaction scenarios."""

    def test_let_declarations(self, redactor):
        """Test x and y get distinct substitutes used at every site."""
        result = redactor.redact_source("let x = 1; let y = x + 1;", include_mapping=True)

        assert result.redacted_code == "let sub_1 = 1; let sub_2 = sub_1 + 1;"
        assert result.mapping == [("x", "sub_1"), ("y", "sub_2")]
        assert result.replaced == 3

    def test_empty_input(self, redactor, monkeypatch):
        """Test empty input is a bad request and never reaches the parser."""
        def fail_parse(*args, **kwargs):
            raise AssertionError("parser should not run")

        monkeypatch.setattr(redactor.adapter, "parse", fail_parse)

        with pytest.raises(EmptyInputError) as excinfo:
            redactor.redact_source("")

        assert isinstance(excinfo.value, BadRequestError)
        assert excinfo.value.status_code == 400

    def test_none_input(self, redactor):
        """Test missing input is a bad request."""
        with pytest.raises(EmptyInputError):
            redactor.redact_source(None)

    def test_syntax_error_is_opaque(self, redactor):
        """Test syntax errors surface as a generic failure."""
        with pytest.raises(RedactionFailedError) as excinfo:
            redactor.redact_source("function ( { ")

        assert str(excinfo.value) == "Failed to redact source code"
        assert excinfo.value.status_code == 500

    def test_typed_parameter_with_hint(self, redactor):
        """Test annotations parse with the javascript hint and are preserved."""
        code = "function greet(name: string) { return name; }"

        result = redactor.redact_source(code, "javascript")

        assert result.redacted_code == "function sub_1(sub_2: string) { return sub_2; }"
        assert result.profile == "javascript"

    def test_typed_parameter_without_hint(self, redactor):
        """Test the default profile cannot parse annotations."""
        with pytest.raises(RedactionFailedError):
            redactor.redact_source("function greet(name: string) { return name; }")

    def test_non_ascii_identifier(self, redactor):
        """Test non-ASCII names are replaced and the output re-parses."""
        result = redactor.redact_source("let café = 2;")

        assert result.redacted_code == "let sub_1 = 2;"
        assert result.redacted_code.isascii()
        ParseAdapter().parse(result.redacted_code, redactor.resolver.default_profile)

    def test_unknown_hint(self, redactor):
        """Test an unknown hint is a bad request."""
        with pytest.raises(InvalidGrammarHintError):
            redactor.redact_source("let x = 1;", "cobol")

    def test_unknown_hint_fallback(self, sequence_generator):
        """Test the fallback policy redacts with the default profile."""
        redactor = CodeRedactor({'grammar': {'unknown_hint': 'fallback'}}, generator=sequence_generator)

        result = redactor.redact_source("let x = 1;", "cobol")

        assert result.profile == "module"
        assert result.redacted_code == "let sub_1 = 1;"


class TestProperties:
    """Test redaction invariants on a realistic module."""

    def test_stability_and_leakage(self):
        """Test each name maps to one substitute and no original survives as an identifier."""
        redactor = CodeRedactor({'substitutes': {'seed': 99}})
        result = redactor.redact_source(SAMPLE, include_mapping=True)

        mapping = result.mapping_dict()
        original = identifiers(SAMPLE, redactor)
        redacted = identifiers(result.redacted_code, redactor)

        for before, after in zip(original.identifiers(), redacted.identifiers()):
            assert after.name == mapping[before.name]

        leaked = {n.name for n in redacted.identifiers()} & (set(mapping) - set(mapping.values()))
        assert not leaked

    def test_shape_preserved(self, redactor):
        """Test the redacted output re-parses to the same tree shape."""
        result = redactor.redact_source(SAMPLE)

        before = identifiers(SAMPLE, redactor)
        after = identifiers(result.redacted_code, redactor)

        assert before.node_count() == after.node_count()
        assert [(n.kind, n.type) for n in before.iter_nodes()] == [(n.kind, n.type) for n in after.iter_nodes()]

    def test_mapping_size_is_distinct_names(self, redactor):
        """Test the mapping grows by distinct names, not occurrences."""
        result = redactor.redact_source(SAMPLE, include_mapping=True)

        names = [n.name for n in identifiers(SAMPLE, redactor).identifiers()]
        assert len(result.mapping) == len(set(names))
        assert result.replaced == len(names)

    def test_only_identifiers_change(self, redactor):
        """Test comments, strings and layout are kept verbatim."""
        result = redactor.redact_source(SAMPLE)

        assert "// Load the user's settings" in result.redacted_code
        assert '"fs"' in result.redacted_code
        assert '"utf8"' in result.redacted_code
        assert result.redacted_code.count("\n") == SAMPLE.count("\n")
        assert "this.#sub_" in result.redacted_code

    def test_scope_blind(self, redactor):
        """Test the same name in unrelated scopes gets one substitute."""
        code = "function a() { let n = 1; } function b() { let n = 2; }"

        result = redactor.redact_source(code, include_mapping=True)

        assert result.mapping == [("a", "sub_1"), ("n", "sub_2"), ("b", "sub_3")]
        assert result.redacted_code.count("sub_2") == 2

    def test_properties_share_mapping_with_variables(self, redactor):
        """Test member properties and variables with one name share a substitute."""
        result = redactor.redact_source("let log = 1; console.log(log);")

        assert result.redacted_code == "let sub_1 = 1; sub_2.sub_1(sub_1);"

    def test_jsx_names_kept(self, redactor):
        """Test JSX tag and attribute names survive redaction."""
        result = redactor.redact_source(
            "const el = <Button onClick={handle}>hi</Button>;", "javascript"
        )

        assert result.redacted_code == "const sub_1 = <Button onClick={sub_2}>hi</Button>;"


class TestMappingOption:
    """Test whether the mapping is returned."""

    def test_mapping_omitted_by_default(self, redactor):
        """Test the mapping is left out unless requested."""
        result = redactor.redact_source("let x = 1;")

        assert result.mapping is None
        assert result.to_dict() == {"redacted_code": "let sub_1 = 1;"}

    def test_mapping_from_config(self, sequence_generator):
        """Test redaction.include_mapping turns the mapping on."""
        redactor = CodeRedactor({'redaction': {'include_mapping': True}}, generator=sequence_generator)

        result = redactor.redact_source("let x = 1;")

        assert result.to_dict() == {"redacted_code": "let sub_1 = 1;", "mapping": {"x": "sub_1"}}

    def test_fresh_registry_per_request(self, redactor):
        """Test requests do not share a mapping."""
        first = redactor.redact_source("let x = 1;", include_mapping=True)
        second = redactor.redact_source("let x = 1;", include_mapping=True)

        assert first.mapping == [("x", "sub_1")]
        assert second.mapping == [("x", "sub_2")]


class TestFailures:
    """Test failure handling and diagnostics."""

    def test_parse_failure_logged_with_detail(self, redactor, caplog):
        """Test parser detail is logged but not exposed."""
        with caplog.at_level(logging.WARNING, logger='code_redact.redactor'):
            with pytest.raises(RedactionFailedError) as excinfo:
                redactor.redact_source("let = ;")

        assert "Error while parsing code" in caplog.text
        assert "let" not in str(excinfo.value)

    def test_internal_fault_collapsed(self, redactor, monkeypatch, caplog):
        """Test unexpected exceptions become RedactionFailedError."""
        def broken_print(tree):
            raise RuntimeError("printer exploded")

        monkeypatch.setattr(redactor.adapter, "print", broken_print)

        with caplog.at_level(logging.ERROR, logger='code_redact.redactor'):
            with pytest.raises(RedactionFailedError) as excinfo:
                redactor.redact_source("let x = 1;")

        assert "printer exploded" not in str(excinfo.value)
        assert "printer exploded" in caplog.text

    @pytest.mark.parametrize("code", [
        "with (a) { b; }",
        "var yield = 1; var static = 2;",
        "x = 010;",
        "return 1;",
        "break;",
        "let x = 1; let x = 2;",
    ])
    def test_strict_module_source_required(self, redactor, code):
        """Test source invalid as a strict module fails under the default profile."""
        with pytest.raises(RedactionFailedError):
            redactor.redact_source(code)

    def test_script_profile_accepts_sloppy_source(self, redactor):
        """Test the script profile still redacts sloppy-mode source."""
        result = redactor.redact_source("with (a) { b; }", "script")

        assert result.redacted_code == "with (sub_1) { sub_2; }"

    def test_undefined_kept(self, redactor):
        """Test undefined is left as written."""
        result = redactor.redact_source("let x = undefined;", include_mapping=True)

        assert result.redacted_code == "let sub_1 = undefined;"
        assert result.mapping == [("x", "sub_1")]


class TestDefaultGenerator:
    """Test redaction with real Faker substitutes."""

    def test_substitute_shape(self):
        """Test default substitutes look like word_number."""
        result = CodeRedactor().redact_source("let x = 1;", include_mapping=True)

        substitute = result.mapping_dict()["x"]
        assert re.match(r'^[A-Za-z]+_\d+$', substitute)
        assert result.redacted_code == f"let {substitute} = 1;"

    def test_module_level_helper(self):
        """Test the convenience function redacts with default settings."""
        result = redact_source("let x = 1;", include_mapping=True)

        assert list(result.mapping_dict()) == ["x"]
        assert result.redacted_code == f"let {result.mapping_dict()['x']} = 1;"

    def test_concurrent_requests(self):
        """Test independent requests on one redactor stay consistent."""
        redactor = CodeRedactor({'substitutes': {'seed': 5}})
        code = "let a = 1; let b = a + a; let c = b * a;"

        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda _: redactor.redact_source(code, include_mapping=True), range(16)))

        for result in results:
            mapping = result.mapping_dict()
            expected = f"let {mapping['a']} = 1; let {mapping['b']} = {mapping['a']} + {mapping['a']}; " \
                       f"let {mapping['c']} = {mapping['b']} * {mapping['a']};"
            assert result.redacted_code == expected


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
