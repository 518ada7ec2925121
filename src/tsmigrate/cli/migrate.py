from collections import Counter
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tsmigrate.config import get_settings
from tsmigrate.core.migrate import migrate_path
from tsmigrate.models import FileMigration

console = Console()

_STATUS_STYLES = {"migrated": "green", "unchanged": "cyan", "skipped": "yellow", "failed": "red"}


def _render_results(results: list[FileMigration]) -> None:
    table = Table(show_lines=False)
    for header in ("file", "target", "status", "interfaces", "diagnostics"):
        table.add_column(header)
    for result in results:
        style = _STATUS_STYLES[result.status]
        status = result.status if result.error is None else f"{result.status}: {result.error}"
        table.add_row(
            escape(result.path),
            escape(result.target_path or "-"),
            f"[{style}]{escape(status)}[/{style}]",
            ", ".join(result.interfaces) or "-",
            str(len(result.diagnostics)),
        )
    console.print(table)


def migrate(
    path: Annotated[Path, typer.Argument(help="File or directory to migrate.")],
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Report what would be written without writing.")] = False,
    remove_original: Annotated[
        bool | None,
        typer.Option("--remove-original/--keep-original", help="Delete each .js/.jsx file once its output is written."),
    ] = None,
    overwrite: Annotated[bool, typer.Option("--overwrite", help="Replace existing .ts/.tsx files.")] = False,
    keep_invalid: Annotated[
        bool, typer.Option("--keep-invalid", help="Annotate files with syntax errors instead of skipping them.")
    ] = False,
    jobs: Annotated[int | None, typer.Option("--jobs", "-j", min=1, help="Number of files processed in parallel.")] = None,
) -> None:
    """Annotate JavaScript files and write them out as TypeScript."""
    settings = get_settings()
    try:
        results = migrate_path(
            path,
            dry_run=dry_run,
            remove_original=settings.remove_original if remove_original is None else remove_original,
            overwrite=overwrite,
            skip_invalid=settings.skip_invalid and not keep_invalid,
            jobs=jobs or settings.jobs,
        )
    except FileNotFoundError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1) from exc

    if not results:
        console.print("No JavaScript files found.")
        return

    _render_results(results)
    counts = Counter(result.status for result in results)
    verb = "Would migrate" if dry_run else "Migrated"
    console.print(
        f"[green]{verb}[/green] {counts['migrated']} file(s), "
        f"unchanged {counts['unchanged']}, "
        f"skipped {counts['skipped']}, failed {counts['failed']}"
    )
    if counts["failed"]:
        raise typer.Exit(1)
