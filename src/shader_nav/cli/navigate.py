from collections.abc import Callable, Sequence
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table

from shader_nav.core.navigation import Navigator
from shader_nav.errors import NavigationError
from shader_nav.models import Location, Position

console = Console()

PathArg = Annotated[str, typer.Argument(help="Path to the shader source file.")]
LineArg = Annotated[int, typer.Argument(min=0, help="Zero-based line of the cursor.")]
CharacterArg = Annotated[int, typer.Argument(min=0, help="Zero-based character of the cursor.")]
LanguageOpt = Annotated[str | None, typer.Option(help="Language (glsl, hlsl, c). Detected from the extension by default.")]


def _get_navigator() -> Navigator:
    return Navigator()


def _render_table(headers: Sequence[str], rows: Sequence[tuple[Any, ...]]) -> None:
    table = Table(show_lines=False)
    for h in headers:
        table.add_column(h)
    for row in rows:
        table.add_row(*(str(v) for v in row))
    console.print(table)
    console.print(f"({len(rows)} rows)")


def _render_locations(locations: list[Location] | None, missing: str) -> None:
    if locations is None:
        console.print(f"[yellow]{missing}[/yellow]")
        return
    rows = [
        (
            loc.uri,
            f"{loc.range.start.line}:{loc.range.start.character}",
            f"{loc.range.end.line}:{loc.range.end.character}",
        )
        for loc in locations
    ]
    _render_table(["uri", "start", "end"], rows)


def _navigate(lookup: Callable[[], list[Location] | None], missing: str) -> None:
    try:
        locations = lookup()
    except NavigationError as exc:
        console.print(f"[red]Navigation unavailable:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    _render_locations(locations, missing)


def definition(path: PathArg, line: LineArg, character: CharacterArg, language: LanguageOpt = None) -> None:
    """Find where the symbol under the cursor is defined."""
    navigator = _get_navigator()
    position = Position(line=line, character=character)
    _navigate(lambda: navigator.find_definitions(path, position, language), "No navigable symbol at the cursor.")


def references(path: PathArg, line: LineArg, character: CharacterArg, language: LanguageOpt = None) -> None:
    """Find the call sites of the function declared under the cursor."""
    navigator = _get_navigator()
    position = Position(line=line, character=character)
    _navigate(lambda: navigator.find_references(path, position, language), "No navigable symbol at the cursor.")


def node(path: PathArg, line: LineArg, character: CharacterArg, language: LanguageOpt = None) -> None:
    """Show the syntax node under the cursor and the lookups it supports."""
    navigator = _get_navigator()
    try:
        info = navigator.describe_node(path, Position(line=line, character=character), language)
    except NavigationError as exc:
        console.print(f"[red]Navigation unavailable:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    if info is None:
        console.print("[yellow]No syntax node at the cursor.[/yellow]")
        return
    start, end = info.range.start, info.range.end
    _render_table(
        ["field", "value"],
        [
            ("kind", info.kind),
            ("text", info.text),
            ("parent", info.parent_kind or "-"),
            ("range", f"{start.line}:{start.character}-{end.line}:{end.character}"),
            ("definition", info.definition_strategy or "-"),
            ("references", info.reference_strategy or "-"),
        ],
    )
