from typing import Literal

from pydantic import BaseModel


class Position(BaseModel):
    row: int
    column: int


class Diagnostic(BaseModel):
    kind: str
    message: str
    start_byte: int
    end_byte: int
    position: Position


class AnnotatedSource(BaseModel):
    source: str
    interfaces: list[str] = []
    diagnostics: list[Diagnostic] = []


MigrationStatus = Literal["migrated", "unchanged", "skipped", "failed"]


class FileMigration(BaseModel):
    path: str
    target_path: str | None = None
    language: str | None = None
    status: MigrationStatus
    interfaces: list[str] = []
    diagnostics: list[Diagnostic] = []
    error: str | None = None
