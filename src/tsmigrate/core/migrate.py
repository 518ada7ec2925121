import logging
from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from pathlib import Path

from tsmigrate.core.ast import ParseFailure
from tsmigrate.core.languages import detect_dialect, is_migratable, target_path
from tsmigrate.inference.annotate import annotate_source
from tsmigrate.models import AnnotatedSource, FileMigration

logger = logging.getLogger(__name__)

_IGNORED_DIRECTORIES = frozenset({"node_modules", "bower_components", "vendor", "dist", "build", "coverage"})


def iter_source_files(path: Path) -> Iterator[Path]:
    """Yield the JavaScript files under ``path`` in a stable order."""
    if path.is_file():
        if is_migratable(path):
            yield path
        return

    try:
        entries = sorted(path.iterdir())
    except OSError as exc:
        logger.warning("Unable to read directory %s: %s", path, exc)
        return

    logger.debug("Diving into directory %s", path)
    for entry in entries:
        if entry.is_dir():
            if entry.name.startswith(".") or entry.name in _IGNORED_DIRECTORIES:
                logger.debug("Skipping directory %s", entry)
                continue
            yield from iter_source_files(entry)
        elif is_migratable(entry):
            yield entry


def annotate_with_fallback(source: str, dialect: str, allow_errors: bool) -> tuple[AnnotatedSource, str]:
    """Annotate ``source``, retrying plain JavaScript with the TSX grammar.

    Returns the annotated source together with the dialect that parsed it.
    """
    candidates = [dialect] if dialect == "tsx" else [dialect, "tsx"]
    for candidate in candidates:
        try:
            return annotate_source(source, candidate, allow_errors=False), candidate
        except ParseFailure:
            logger.debug("The %s grammar rejected the source", candidate)
    if not allow_errors:
        raise ParseFailure(f"Source contains syntax errors ({dialect})")
    return annotate_source(source, dialect, allow_errors=True), dialect


def migrate_file(
    path: Path,
    dry_run: bool = False,
    remove_original: bool = False,
    overwrite: bool = False,
    skip_invalid: bool = True,
) -> FileMigration:
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Unable to load file %s: %s", path, exc)
        return FileMigration(path=str(path), status="failed", error=str(exc))

    dialect = detect_dialect(path, source)
    logger.debug("Processing %s (%s)", path, dialect)
    try:
        result, dialect = annotate_with_fallback(source, dialect, allow_errors=not skip_invalid)
    except ParseFailure as exc:
        logger.error("Unable to parse file: %s", path)
        return FileMigration(path=str(path), language=dialect, status="skipped", error=str(exc))
    except Exception as exc:
        logger.exception("Unexpected failure while annotating %s", path)
        return FileMigration(path=str(path), language=dialect, status="failed", error=str(exc))

    target = target_path(path, dialect)
    migration = FileMigration(
        path=str(path),
        target_path=str(target),
        language=dialect,
        status="migrated" if result.source != source else "unchanged",
        interfaces=result.interfaces,
        diagnostics=result.diagnostics,
    )
    if target.exists() and not overwrite:
        logger.warning("Target %s already exists; skipping %s", target, path)
        return migration.model_copy(update={"status": "skipped", "error": f"{target.name} already exists"})
    if dry_run:
        return migration

    try:
        target.write_text(result.source, encoding="utf-8")
        logger.info("Writing new file at %s", target)
        if remove_original:
            path.unlink()
    except OSError as exc:
        logger.error("Unable to write %s: %s", target, exc)
        return migration.model_copy(update={"status": "failed", "error": str(exc)})
    return migration


def migrate_path(
    path: str | Path,
    dry_run: bool = False,
    remove_original: bool = False,
    overwrite: bool = False,
    skip_invalid: bool = True,
    jobs: int = 1,
) -> list[FileMigration]:
    """Migrate one file or every JavaScript file below a directory.

    Files are independent, so with ``jobs > 1`` they are processed on a thread
    pool; results always come back in traversal order.
    """
    root = Path(path)
    if not root.exists():
        raise FileNotFoundError(f"Path not found: {path}")

    files = list(iter_source_files(root))
    task = partial(
        migrate_file,
        dry_run=dry_run,
        remove_original=remove_original,
        overwrite=overwrite,
        skip_invalid=skip_invalid,
    )
    if jobs > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=jobs) as executor:
            return list(executor.map(task, files))
    return [task(file_path) for file_path in files]
