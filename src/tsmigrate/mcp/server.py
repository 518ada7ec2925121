"""FastMCP server exposing tsmigrate tools."""

from __future__ import annotations

from typing import Any

from fastmcp import FastMCP

from tsmigrate.core.languages import normalize_dialect
from tsmigrate.core.migrate import migrate_path
from tsmigrate.inference.annotate import annotate_source


def annotate_code(code: str, language: str = "typescript") -> str:
    """Return JavaScript source with inferred TypeScript annotations."""
    return annotate_source(code, normalize_dialect(language)).source


def migrate_files(path: str, dry_run: bool = True) -> list[dict[str, Any]]:
    """Migrate a JavaScript file or directory to TypeScript (dry run by default)."""
    return [result.model_dump() for result in migrate_path(path, dry_run=dry_run)]


def create_mcp_server() -> FastMCP:
    """Create a FastMCP server with the annotate and migrate tools."""

    mcp = FastMCP("tsmigrate", instructions="Infer TypeScript annotations for JavaScript sources.")
    mcp.tool(name="annotate")(annotate_code)
    mcp.tool(name="migrate")(migrate_files)
    return mcp
