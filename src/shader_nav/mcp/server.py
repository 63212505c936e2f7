"""FastMCP server exposing shader-nav tools."""

from __future__ import annotations

import logging
from typing import Any

from fastmcp import FastMCP

from shader_nav.core.navigation import Navigator
from shader_nav.errors import NavigationError
from shader_nav.models import Location, Position

logger = logging.getLogger(__name__)


def _dump(locations: list[Location] | None) -> list[dict[str, Any]] | None:
    if locations is None:
        return None
    return [loc.model_dump() for loc in locations]


def create_mcp_server(navigator: Navigator) -> FastMCP:
    """Create a FastMCP server wired to the given navigator."""

    mcp = FastMCP(
        "shader-nav",
        instructions="Go to definition and find references in GLSL/HLSL shader sources.",
    )

    @mcp.tool()
    async def find_definitions(
        path: str, line: int, character: int, language: str | None = None
    ) -> list[dict[str, Any]] | None:
        """Locations defining the symbol at a zero-based cursor position, or null when there is no symbol."""
        try:
            locations = navigator.find_definitions(path, Position(line=line, character=character), language)
        except NavigationError:
            logger.exception("Definition lookup failed for %s", path)
            raise
        return _dump(locations)

    @mcp.tool()
    async def find_references(
        path: str, line: int, character: int, language: str | None = None
    ) -> list[dict[str, Any]] | None:
        """Call sites of the function declared at a zero-based cursor position, or null when there is no symbol."""
        try:
            locations = navigator.find_references(path, Position(line=line, character=character), language)
        except NavigationError:
            logger.exception("Reference lookup failed for %s", path)
            raise
        return _dump(locations)

    @mcp.tool()
    async def inspect_node(path: str, line: int, character: int, language: str | None = None) -> dict[str, Any] | None:
        """Describe the syntax node under a zero-based cursor position."""
        try:
            info = navigator.describe_node(path, Position(line=line, character=character), language)
        except NavigationError:
            logger.exception("Node inspection failed for %s", path)
            raise
        return info.model_dump() if info is not None else None

    return mcp
