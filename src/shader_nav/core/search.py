import logging

from tree_sitter import Node

from shader_nav.core.parsing import ParseContext
from shader_nav.core.query import VARIABLE_DEFINITIONS, find_named, load_pattern

logger = logging.getLogger(__name__)

_SCOPE_KINDS = frozenset(
    {
        "compound_statement",
        "function_definition",
        "for_statement",
        "while_statement",
        "do_statement",
        "if_statement",
        "switch_statement",
    }
)


def global_search(context: ParseContext, pattern_kind: str, name: bytes) -> list[Node]:
    query = load_pattern(context.language, pattern_kind)
    return find_named(query, name, context.root_node, context.source)


def _encloses(outer: Node, inner: Node) -> bool:
    return outer.start_byte <= inner.start_byte and inner.end_byte <= outer.end_byte


def _opens_scope(node: Node) -> bool:
    if node.type in _SCOPE_KINDS:
        return True
    # Parameters of a bare prototype are not visible anywhere else.
    parent = node.parent
    return node.type == "function_declarator" and parent is not None and parent.type != "function_definition"


def is_visible(declaration: Node, use_site: Node, scope_root: Node) -> bool:
    """True when no scope between ``declaration`` and ``scope_root`` excludes ``use_site``."""
    current = declaration.parent
    while current is not None and current.id != scope_root.id:
        if _opens_scope(current) and not _encloses(current, use_site):
            return False
        current = current.parent
    return True


def scope_climbing_search(context: ParseContext, use_site: Node, filter_invisible: bool = True) -> list[Node]:
    """Search each ancestor of ``use_site`` in turn; the nearest one with a declaration wins.

    Returns an empty list once the root has been searched without a match.
    """
    name = context.node_text(use_site)
    query = load_pattern(context.language, VARIABLE_DEFINITIONS)

    scope = use_site.parent
    while scope is not None:
        logger.debug("Searching %s at %s for %r", scope.type, scope.start_point, name)
        found = find_named(query, name, scope, context.source)
        if filter_invisible:
            found = [node for node in found if is_visible(node, use_site, scope)]
        if found:
            if len(found) > 1:
                logger.warning(
                    "%d declarations of %r are visible in the same %s; returning all of them",
                    len(found),
                    name.decode("utf-8", errors="replace"),
                    scope.type,
                )
            return found
        scope = scope.parent

    logger.debug("No declaration of %r in any enclosing scope", name)
    return []
