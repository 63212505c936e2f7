import logging
from functools import lru_cache
from pathlib import Path
from typing import cast

from tree_sitter import Node, Query, QueryCursor, QueryError
from tree_sitter_language_pack import SupportedLanguage, get_language

from shader_nav.errors import ParseSetupError, QueryCompileError
from shader_nav.models import Location, Position, Range

logger = logging.getLogger(__name__)

FUNCTION_DEFINITIONS = "function_definitions"
FUNCTION_REFERENCES = "function_references"
VARIABLE_DEFINITIONS = "variable_definitions"

# Every pattern file captures the symbol name under this name.
NAME_CAPTURE = "name"

_QUERIES_DIR = Path(__file__).parent.parent / "queries"


def compile_pattern(language: str, pattern_text: str) -> Query:
    try:
        ts_language = get_language(cast(SupportedLanguage, language))
    except (LookupError, ValueError) as exc:
        raise ParseSetupError(f"Cannot load the {language} grammar: {exc}") from exc
    try:
        return Query(ts_language, pattern_text)
    except QueryError as exc:
        raise QueryCompileError(f"Invalid {language} pattern: {exc}") from exc


@lru_cache(maxsize=None)
def load_pattern(language: str, pattern_kind: str) -> Query:
    """Compile ``queries/{language}_{pattern_kind}.scm``; compiled patterns are cached."""
    query_path = _QUERIES_DIR / f"{language}_{pattern_kind}.scm"
    if not query_path.exists():
        raise QueryCompileError(f"Query file not found: {query_path}")
    return compile_pattern(language, query_path.read_text(encoding="utf-8"))


def find_named(query: Query, name: bytes, subtree_root: Node, source: bytes) -> list[Node]:
    """Run ``query`` over ``subtree_root`` and keep ``@name`` captures whose text is exactly ``name``.

    The identifier is compared as bytes instead of being spliced into the
    pattern, so no identifier text can change what the pattern means.
    """
    cursor = QueryCursor(query)
    found: list[Node] = []
    for _, captures in cursor.matches(subtree_root):
        for node in captures.get(NAME_CAPTURE, []):
            if source[node.start_byte : node.end_byte] == name:
                found.append(node)
    return found


def node_location(node: Node, uri: str) -> Location:
    start_row, start_column = node.start_point
    end_row, end_column = node.end_point
    return Location(
        uri=uri,
        range=Range(
            start=Position(line=start_row, character=start_column),
            end=Position(line=end_row, character=end_column),
        ),
    )
