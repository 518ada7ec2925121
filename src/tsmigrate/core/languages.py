import re
from pathlib import Path

_DIALECT_ALIASES = {
    "javascript": "typescript",
    "js": "typescript",
    "jsx": "tsx",
    "ts": "typescript",
    "tsx": "tsx",
    "typescript": "typescript",
}

_EXTENSION_DIALECT_MAP = {
    ".js": "typescript",
    ".jsx": "tsx",
}

_DIALECT_TARGET_EXTENSIONS = {
    "tsx": ".tsx",
    "typescript": ".ts",
}

_SUPPORTED_DIALECTS = set(_DIALECT_TARGET_EXTENSIONS)

_REACT_IMPORT = re.compile(
    r"""(?:\bfrom\s*["']react["']|\bimport\s*["']react["']|\brequire\s*\(\s*["']react["']\s*\))"""
)


def normalize_dialect(dialect: str) -> str:
    normalized = dialect.strip().lower()
    resolved = _DIALECT_ALIASES.get(normalized, normalized)
    if resolved not in _SUPPORTED_DIALECTS:
        raise ValueError(f"Unsupported dialect '{dialect}'. Supported: {sorted(_SUPPORTED_DIALECTS)}")
    return resolved


def is_migratable(path: Path) -> bool:
    return path.suffix.lower() in _EXTENSION_DIALECT_MAP


def imports_react(source: str) -> bool:
    return _REACT_IMPORT.search(source) is not None


def detect_dialect(file_path: Path, source: str | None = None) -> str:
    """Pick the grammar for a JavaScript file: ``tsx`` for JSX and React modules."""
    suffix = file_path.suffix.lower()
    if suffix not in _EXTENSION_DIALECT_MAP:
        raise ValueError(f"Unsupported file extension: {suffix}")
    dialect = _EXTENSION_DIALECT_MAP[suffix]
    if dialect == "typescript" and source is not None and imports_react(source):
        return "tsx"
    return dialect


def resolve_dialect(dialect: str | None, file_path: Path | None, source: str | None = None) -> str:
    if dialect:
        return normalize_dialect(dialect)
    if file_path:
        return detect_dialect(file_path, source)
    raise ValueError("Dialect must be provided when no file path is available.")


def target_path(file_path: Path, dialect: str) -> Path:
    return file_path.with_suffix(_DIALECT_TARGET_EXTENSIONS[normalize_dialect(dialect)])
