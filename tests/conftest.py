"""Shared fixtures and helpers for tests."""

from collections.abc import Callable
from pathlib import Path

import pytest
from tree_sitter import Parser
from tree_sitter_language_pack import get_parser

from shader_nav.core.parsing import ParseContext, ParserHandle
from shader_nav.models import Position, Range

_REPO_ROOT = Path(__file__).parent.parent

SHADER_SOURCE = """\
const float ambient = 0.1;

vec3 shade(vec3 n) {
    vec3 c = n;
    return c;
}

float intensity(vec3 normal, vec3 lightDir) {
    float x = ambient;
    {
        float x = 2.0;
        x = x * dot(normal, lightDir);
    }
    return x;
}

vec3 render(vec3 normal) {
    vec3 color = shade(normal);
    float level = intensity(normal, color) + missing;
    return shade(color) * level;
}
"""


# ---------------------------------------------------------------------------
# Auto-marker: every test under tests/unit is a unit test
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        if rel.parts and rel.parts[0] == "unit":
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Cursor helpers
# ---------------------------------------------------------------------------


def _offset_of(source: str, needle: str, nth: int) -> int:
    index = -1
    for _ in range(nth + 1):
        index = source.find(needle, index + 1)
        if index == -1:
            raise AssertionError(f"{needle!r} occurs fewer than {nth + 1} times")
    return index


def _position_at(source: str, offset: int) -> Position:
    line = source.count("\n", 0, offset)
    return Position(line=line, character=offset - (source.rfind("\n", 0, offset) + 1))


@pytest.fixture
def cursor() -> Callable[..., Position]:
    """cursor(source, needle, delta=0, nth=0): position ``delta`` chars into the nth ``needle``."""

    def _cursor(source: str, needle: str, delta: int = 0, nth: int = 0) -> Position:
        return _position_at(source, _offset_of(source, needle, nth) + delta)

    return _cursor


@pytest.fixture
def span() -> Callable[..., Range]:
    """span(source, needle, start, length, nth=0): range of ``length`` chars at ``start`` inside the nth ``needle``."""

    def _span(source: str, needle: str, start: int, length: int, nth: int = 0) -> Range:
        offset = _offset_of(source, needle, nth) + start
        return Range(start=_position_at(source, offset), end=_position_at(source, offset + length))

    return _span


# ---------------------------------------------------------------------------
# Parsing fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def glsl_parser() -> Parser:
    """Return a tree-sitter parser for GLSL."""
    return get_parser("glsl")


@pytest.fixture
def glsl_handle() -> ParserHandle:
    return ParserHandle("glsl")


@pytest.fixture
def shader_source() -> str:
    return SHADER_SOURCE


@pytest.fixture
def shader_file(tmp_path: Path) -> Path:
    path = tmp_path / "lighting.frag"
    path.write_text(SHADER_SOURCE, encoding="utf-8")
    return path


@pytest.fixture
def shader_context(glsl_handle: ParserHandle, shader_file: Path) -> ParseContext:
    return ParseContext.from_path(glsl_handle, shader_file)


@pytest.fixture
def make_context(glsl_handle: ParserHandle, tmp_path: Path) -> Callable[[str], ParseContext]:
    """Build a context for an in-memory GLSL snippet."""

    def _make(source: str) -> ParseContext:
        return ParseContext.from_source(glsl_handle, source.encode("utf-8"), tmp_path / "snippet.glsl")

    return _make
