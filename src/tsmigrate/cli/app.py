import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from tsmigrate.cli.annotate import annotate
from tsmigrate.cli.migrate import migrate
from tsmigrate.cli.serve import serve_app
from tsmigrate.config import get_settings

app = typer.Typer(
    name="tsmigrate",
    help="tsmigrate CLI — infer TypeScript annotations for JavaScript sources.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _configure_logging(verbose: int) -> None:
    if verbose >= 2:
        level = "DEBUG"
    elif verbose == 1:
        level = "INFO"
    else:
        level = get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main_callback(
    verbose: Annotated[int, typer.Option("--verbose", "-v", count=True, help="Increase log verbosity (-v, -vv).")] = 0,
) -> None:
    _configure_logging(verbose)


app.command("annotate")(annotate)
app.command("migrate")(migrate)
app.add_typer(serve_app, name="serve")


def main() -> None:
    app()
