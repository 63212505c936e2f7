from typing import Annotated

import typer
from pydantic import ValidationError

from shader_nav.cli.navigate import definition, node, references
from shader_nav.cli.serve import serve_app
from shader_nav.config import Settings, load_settings
from shader_nav.logs import configure_logging

app = typer.Typer(
    name="shader-nav",
    help="Go to definition and find references in GLSL/HLSL sources.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def _setup(
    log_level: Annotated[str | None, typer.Option(help="Logging level (defaults to SHADER_NAV_LOG_LEVEL).")] = None,
) -> None:
    try:
        settings = load_settings() if log_level is None else Settings(log_level=log_level.strip().upper())
    except ValidationError as exc:
        raise typer.BadParameter(
            "expected one of DEBUG, INFO, WARNING, ERROR, CRITICAL",
            param_hint="'--log-level' / SHADER_NAV_LOG_LEVEL",
        ) from exc
    configure_logging(settings.log_level)


app.command("definition")(definition)
app.command("references")(references)
app.command("node")(node)
app.add_typer(serve_app, name="serve")


def main() -> None:
    app()
