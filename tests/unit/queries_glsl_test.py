"""Unit tests for the structural patterns and the query runner."""

import pytest
from tree_sitter import Parser, Query

from shader_nav.core.query import (
    FUNCTION_DEFINITIONS,
    FUNCTION_REFERENCES,
    VARIABLE_DEFINITIONS,
    compile_pattern,
    find_named,
    load_pattern,
    node_location,
)
from shader_nav.errors import QueryCompileError

SOURCE = """\
float foo(float a) { return a; }
float foobar(float a) { return a; }
float barfoo(float a) { return a; }

float total(float scale[2]) {
    float value = 1.0;
    float valueSum = value + 2.0;
    float weights[3];
    return foo(value) + foobar(valueSum) + barfoo(value);
}
"""


def _names(query: Query, parser: Parser, source: str, name: str) -> list[tuple[int, int]]:
    source_bytes = source.encode("utf-8")
    tree = parser.parse(source_bytes)
    return [node.start_point for node in find_named(query, name.encode(), tree.root_node, source_bytes)]


@pytest.mark.parametrize("language", ["glsl", "hlsl", "c"])
@pytest.mark.parametrize("kind", [FUNCTION_DEFINITIONS, FUNCTION_REFERENCES, VARIABLE_DEFINITIONS])
def test_pattern_files_compile(language: str, kind: str) -> None:
    assert isinstance(load_pattern(language, kind), Query)


def test_load_pattern_caches_compiled_queries() -> None:
    assert load_pattern("glsl", FUNCTION_DEFINITIONS) is load_pattern("glsl", FUNCTION_DEFINITIONS)


def test_missing_pattern_file_is_a_compile_error() -> None:
    with pytest.raises(QueryCompileError, match="not found"):
        load_pattern("glsl", "struct_definitions")


@pytest.mark.parametrize("pattern", ["(function_declarator", "(no_such_node) @name", "(identifier) @name (#eq?"])
def test_malformed_pattern_raises_compile_error(pattern: str) -> None:
    with pytest.raises(QueryCompileError):
        compile_pattern("glsl", pattern)


class TestFunctionDefinitions:
    def test_matches_exact_name_only(self, glsl_parser: Parser) -> None:
        query = load_pattern("glsl", FUNCTION_DEFINITIONS)
        assert _names(query, glsl_parser, SOURCE, "foo") == [(0, 6)]

    def test_prefix_and_suffix_names_are_distinct(self, glsl_parser: Parser) -> None:
        query = load_pattern("glsl", FUNCTION_DEFINITIONS)
        assert _names(query, glsl_parser, SOURCE, "foobar") == [(1, 6)]
        assert _names(query, glsl_parser, SOURCE, "barfoo") == [(2, 6)]

    def test_unknown_name_matches_nothing(self, glsl_parser: Parser) -> None:
        query = load_pattern("glsl", FUNCTION_DEFINITIONS)
        assert _names(query, glsl_parser, SOURCE, "fo") == []


class TestFunctionReferences:
    def test_matches_call_sites(self, glsl_parser: Parser) -> None:
        query = load_pattern("glsl", FUNCTION_REFERENCES)
        assert _names(query, glsl_parser, SOURCE, "foo") == [(8, 11)]
        assert _names(query, glsl_parser, SOURCE, "barfoo") == [(8, 43)]


class TestVariableDefinitions:
    def test_captures_init_declarators(self, glsl_parser: Parser) -> None:
        query = load_pattern("glsl", VARIABLE_DEFINITIONS)
        assert _names(query, glsl_parser, SOURCE, "value") == [(5, 10)]

    def test_captures_parameters(self, glsl_parser: Parser) -> None:
        query = load_pattern("glsl", VARIABLE_DEFINITIONS)
        assert _names(query, glsl_parser, SOURCE, "a") == [(0, 16), (1, 19), (2, 19)]

    def test_captures_array_declarations(self, glsl_parser: Parser) -> None:
        query = load_pattern("glsl", VARIABLE_DEFINITIONS)
        assert _names(query, glsl_parser, SOURCE, "weights") == [(7, 10)]
        assert _names(query, glsl_parser, SOURCE, "scale") == [(4, 18)]

    def test_uses_are_not_declarations(self, glsl_parser: Parser) -> None:
        query = load_pattern("glsl", VARIABLE_DEFINITIONS)
        # "valueSum" is declared once and used once
        assert _names(query, glsl_parser, SOURCE, "valueSum") == [(6, 10)]


def test_pattern_characters_in_name_are_just_text(glsl_parser: Parser) -> None:
    query = load_pattern("glsl", FUNCTION_DEFINITIONS)
    for name in ['^foo$', 'foo")', ".*", "(identifier) @name"]:
        assert _names(query, glsl_parser, SOURCE, name) == []


def test_node_location_uses_zero_based_points(glsl_parser: Parser) -> None:
    source_bytes = SOURCE.encode("utf-8")
    tree = glsl_parser.parse(source_bytes)
    (node,) = find_named(load_pattern("glsl", FUNCTION_DEFINITIONS), b"total", tree.root_node, source_bytes)
    loc = node_location(node, "file:///tmp/total.glsl")
    assert loc.uri == "file:///tmp/total.glsl"
    assert (loc.range.start.line, loc.range.start.character) == (4, 6)
    assert (loc.range.end.line, loc.range.end.character) == (4, 11)
