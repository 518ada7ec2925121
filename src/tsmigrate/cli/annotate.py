from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from tsmigrate.core.languages import resolve_dialect
from tsmigrate.inference.annotate import annotate_source

console = Console(stderr=True)


def annotate(
    path: Annotated[Path | None, typer.Argument(help="JavaScript file to annotate.")] = None,
    code: Annotated[str | None, typer.Option(help="Source code string to annotate instead of a file path.")] = None,
    language: Annotated[
        str | None, typer.Option(help="Grammar to parse with (ts, tsx). Detected from the file by default.")
    ] = None,
    strict: Annotated[bool, typer.Option("--strict", help="Refuse sources with syntax errors.")] = False,
) -> None:
    """Print a file (or snippet) with inferred type annotations."""
    if code is not None:
        source, file_path = code, None
    elif path is not None:
        try:
            source, file_path = path.read_text(encoding="utf-8"), path
        except (OSError, UnicodeDecodeError) as exc:
            console.print(f"[red]Unable to read {path}: {exc}[/red]")
            raise typer.Exit(1) from exc
    else:
        console.print("[red]Provide a file path or --code.[/red]")
        raise typer.Exit(1)

    try:
        dialect = resolve_dialect(language, file_path, source) if language or file_path else "typescript"
        result = annotate_source(source, dialect, allow_errors=not strict)
    except ValueError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1) from exc

    typer.echo(result.source, nl=False)
    for diagnostic in result.diagnostics:
        location = f"{diagnostic.position.row + 1}:{diagnostic.position.column + 1}"
        console.print(f"[yellow]{location}[/yellow] {escape(diagnostic.message)}", highlight=False)
