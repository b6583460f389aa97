"""
Source loaders.

Each loader turns one input file into service descriptions. The caller picks
the loader by intent (``kind``); when no kind is given it is taken from the
file extension.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from meshwork.config.loader import is_config_file
from meshwork.exceptions import ConfigError, NotFoundError
from meshwork.loaders.base import LoadResult, SourceLoader, resolve_input
from meshwork.loaders.manifest import ManifestLoader, parse_manifest
from meshwork.loaders.project import ProjectLoader, describe_project
from meshwork.loaders.solution import SolutionLoader
from meshwork.model.application import Application
from meshwork.utils.logging import get_logger

logger = get_logger("meshwork.loaders")

#: Loader selector
SourceKind = Literal["manifest", "project", "solution"]

LOADERS: dict[str, SourceLoader] = {
    "manifest": ManifestLoader(),
    "project": ProjectLoader(),
    "solution": SolutionLoader(),
}

MANIFEST_EXTENSIONS = (".yaml", ".yml")
SOLUTION_EXTENSIONS = (".sln",)


def source_kind_for(path: str | Path) -> SourceKind:
    """
    Infer the loader for a file from its extension.

    Raises:
        ConfigError: If the extension does not belong to any source kind
    """
    extension = Path(path).suffix.lower()
    if extension in MANIFEST_EXTENSIONS:
        return "manifest"
    if extension in SOLUTION_EXTENSIONS:
        return "solution"
    if extension.endswith("proj"):
        return "project"
    raise ConfigError(
        f"Cannot tell what kind of source '{Path(path).name}' is\n"
        f"  Suggestion: pass a .yaml manifest, a .sln solution or a project file",
        details={"path": str(path)},
    )


def _is_kind(path: Path, kind: SourceKind) -> bool:
    extension = path.suffix.lower()
    if kind == "manifest":
        return extension in MANIFEST_EXTENSIONS and not is_config_file(path)
    if kind == "solution":
        return extension in SOLUTION_EXTENSIONS
    return extension.endswith("proj")


def find_source(directory: Path, kind: SourceKind | None = None) -> Path:
    """
    Find the single source file in a directory.

    Without `kind`, manifests win over solutions, and solutions over project
    files. meshwork.yaml and its overlays are tool configuration, never manifests.

    Raises:
        NotFoundError: If the directory contains no source (of `kind`, when given)
        ConfigError: If it contains several sources of the same kind
    """
    candidates = [p for p in sorted(directory.iterdir()) if p.is_file()]
    kinds: tuple[SourceKind, ...] = (kind,) if kind is not None else ("manifest", "solution", "project")

    for k in kinds:
        group = [p for p in candidates if _is_kind(p, k)]
        if len(group) == 1:
            return group[0]
        if len(group) > 1:
            names = ", ".join(p.name for p in group)
            raise ConfigError(
                f"Multiple sources found in {directory}: {names}\n  Suggestion: pass the file to load explicitly",
                details={"path": str(directory)},
            )

    wanted = f"{kind} file" if kind is not None else "manifest, solution or project file"
    raise NotFoundError(f"No {wanted} found in {directory}", path=directory)


def load_descriptions(
    path: str | Path, base_dir: str | Path | None = None, kind: SourceKind | None = None
) -> LoadResult:
    """Run the loader selected by `kind` (or by extension) on `path`."""
    base = Path(base_dir) if base_dir is not None else Path.cwd()
    full_path = (base / path).resolve()

    if kind is not None and kind not in LOADERS:
        raise ConfigError(f"Unknown source kind: {kind}", details={"kind": kind})
    if not full_path.exists():
        raise NotFoundError(f"Source not found: {full_path}", path=full_path)
    if full_path.is_dir():
        full_path = find_source(full_path, kind)
    if kind is None:
        kind = source_kind_for(full_path)

    return LOADERS[kind].load(full_path)


def load_application(
    path: str | Path, base_dir: str | Path | None = None, kind: SourceKind | None = None
) -> Application:
    """
    Resolve an application from one manifest, project or solution.

    Args:
        path: Source file (or a directory holding exactly one source)
        base_dir: Directory relative paths are resolved against (default: cwd)
        kind: Loader to use (default: inferred from the file extension)

    Returns:
        Application whose context directory is the directory of the loaded file
    """
    descriptions, context_directory = load_descriptions(path, base_dir=base_dir, kind=kind)
    application = Application(descriptions, context_directory=context_directory)
    logger.info(f"Resolved {len(application)} service(s) from {context_directory}")
    return application


__all__ = [
    "LOADERS",
    "LoadResult",
    "ManifestLoader",
    "ProjectLoader",
    "SolutionLoader",
    "SourceKind",
    "SourceLoader",
    "describe_project",
    "find_source",
    "load_application",
    "load_descriptions",
    "parse_manifest",
    "resolve_input",
    "source_kind_for",
]
