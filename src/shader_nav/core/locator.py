import logging

from tree_sitter import Node

from shader_nav.core.parsing import ParseContext
from shader_nav.models import Position

logger = logging.getLogger(__name__)


def find_node_at(context: ParseContext, pos: Position) -> Node | None:
    """Return the smallest named node under the cursor, or ``None``.

    Tree-sitter needs a non-empty point range, so the byte at the cursor
    decides the direction: on a letter the range extends one column forward,
    otherwise the cursor is taken to sit just after an identifier and the
    range extends one column back.
    """
    offset = context.position_map.offset_for_position(pos)
    # bytes.isalpha is ASCII-only and False for the empty slice at end of text
    look_behind = not context.source[offset : offset + 1].isalpha()

    if look_behind:
        if pos.character == 0:
            return None
        start = (pos.line, pos.character - 1)
        end = (pos.line, pos.character)
    else:
        start = (pos.line, pos.character)
        end = (pos.line, pos.character + 1)

    node = context.root_node.named_descendant_for_point_range(start, end)
    if node is None:
        return None

    logger.debug(
        "Found %s %r for %s..%s (look_behind=%s)",
        node.type,
        context.node_text(node).decode("utf-8", errors="replace"),
        start,
        end,
        look_behind,
    )
    return node
