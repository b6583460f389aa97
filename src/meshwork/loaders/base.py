"""
Source loader contract.
"""

from __future__ import annotations

from pathlib import Path
from typing import NamedTuple, Protocol

from meshwork.exceptions import NotFoundError, ParseError
from meshwork.model.description import ServiceDescription


class LoadResult(NamedTuple):
    """Descriptions produced by one loader plus the directory they are relative to."""

    descriptions: list[ServiceDescription]
    context_directory: Path


class SourceLoader(Protocol):
    """Produces service descriptions from one external input path."""

    def load(self, path: str | Path, base_dir: str | Path | None = None) -> LoadResult: ...


def resolve_input(path: str | Path, base_dir: str | Path | None = None, *, what: str = "File") -> Path:
    """
    Resolve a loader input to an absolute, existing file path.

    Args:
        path: Path as given by the caller; relative paths are joined to base_dir
        base_dir: Base directory (default: current working directory)
        what: Human readable kind of file, used in error messages

    Raises:
        NotFoundError: If the resolved path is not an existing file
    """
    base = Path(base_dir) if base_dir is not None else Path.cwd()
    full_path = (base / path).resolve()

    if not full_path.exists():
        raise NotFoundError(f"{what} not found: {full_path}", path=full_path)
    if not full_path.is_file():
        raise NotFoundError(f"{what} path is not a file: {full_path}", path=full_path)
    return full_path


def read_source_text(path: Path, encoding: str = "utf-8-sig") -> str:
    """
    Read a source file as text.

    Raises:
        ParseError: If the file is not valid text in `encoding`
    """
    try:
        return path.read_text(encoding=encoding)
    except UnicodeDecodeError as e:
        raise ParseError(f"Not valid {e.encoding} text (byte offset {e.start}): {e.reason}", path=path) from e
