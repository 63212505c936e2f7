"""Go-to-definition and find-references over a freshly parsed file."""

import logging
from pathlib import Path

from tree_sitter import Node

from shader_nav.config import Settings, load_settings
from shader_nav.core.languages import resolve_language
from shader_nav.core.locator import find_node_at
from shader_nav.core.parsing import ParseContext, ParserHandle
from shader_nav.core.query import FUNCTION_DEFINITIONS, FUNCTION_REFERENCES, node_location
from shader_nav.core.roles import DEFINITION_RULES, REFERENCE_RULES, Strategy, classify
from shader_nav.core.search import global_search, scope_climbing_search
from shader_nav.models import Location, NodeInfo, Position

logger = logging.getLogger(__name__)


def _run_strategy(
    context: ParseContext, strategy: Strategy, node: Node, filter_invisible: bool = True
) -> list[Node]:
    name = context.node_text(node)
    if strategy is Strategy.FUNCTION_DEFINITION:
        return global_search(context, FUNCTION_DEFINITIONS, name)
    if strategy is Strategy.FUNCTION_REFERENCE:
        return global_search(context, FUNCTION_REFERENCES, name)
    return scope_climbing_search(context, node, filter_invisible=filter_invisible)


def find_definitions(context: ParseContext, pos: Position, filter_invisible: bool = True) -> list[Location] | None:
    """Locations defining the symbol at ``pos``; ``None`` when the cursor is not on a navigable symbol."""
    node = find_node_at(context, pos)
    if node is None or node.parent is None:
        return None

    logger.debug("Classifying definition lookup for (%s, %s)", node.type, node.parent.type)
    strategy = classify(node, DEFINITION_RULES)
    if strategy is None:
        return None

    found = _run_strategy(context, strategy, node, filter_invisible)
    locations = [node_location(n, context.uri) for n in found]
    logger.info("Found %d definition(s) via %s", len(locations), strategy.value)
    return locations


def find_references(context: ParseContext, pos: Position) -> list[Location] | None:
    """Locations referencing the symbol at ``pos``; ``None`` when the cursor is not on a navigable symbol."""
    node = find_node_at(context, pos)
    if node is None or node.parent is None:
        return None

    logger.debug("Classifying reference lookup for (%s, %s)", node.type, node.parent.type)
    strategy = classify(node, REFERENCE_RULES)
    if strategy is None:
        return None

    found = _run_strategy(context, strategy, node)
    locations = [node_location(n, context.uri) for n in found]
    logger.info("Found %d reference(s) via %s", len(locations), strategy.value)
    return locations


def describe_node(context: ParseContext, pos: Position) -> NodeInfo | None:
    node = find_node_at(context, pos)
    if node is None:
        return None
    definition = classify(node, DEFINITION_RULES)
    reference = classify(node, REFERENCE_RULES)
    return NodeInfo(
        kind=node.type,
        text=context.node_text(node).decode("utf-8", errors="replace"),
        parent_kind=node.parent.type if node.parent is not None else None,
        range=node_location(node, context.uri).range,
        definition_strategy=definition.value if definition is not None else None,
        reference_strategy=reference.value if reference is not None else None,
    )


class Navigator:
    """Path-based entry points: every call re-reads and re-parses the file.

    Keeps one ``ParserHandle`` per language. A navigator is meant for one
    caller at a time; concurrent callers should each have their own.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or load_settings()
        self._handles: dict[str, ParserHandle] = {}

    def _handle_for(self, language: str) -> ParserHandle:
        handle = self._handles.get(language)
        if handle is None:
            handle = ParserHandle(language)
            self._handles[language] = handle
        return handle

    def open(self, path: str | Path, language: str | None = None) -> ParseContext:
        file_path = Path(path)
        resolved = resolve_language(language or self.settings.language, file_path)
        return ParseContext.from_path(self._handle_for(resolved), file_path)

    def find_definitions(
        self, path: str | Path, position: Position, language: str | None = None
    ) -> list[Location] | None:
        context = self.open(path, language)
        return find_definitions(context, position, filter_invisible=self.settings.filter_invisible)

    def find_references(
        self, path: str | Path, position: Position, language: str | None = None
    ) -> list[Location] | None:
        return find_references(self.open(path, language), position)

    def describe_node(self, path: str | Path, position: Position, language: str | None = None) -> NodeInfo | None:
        return describe_node(self.open(path, language), position)
