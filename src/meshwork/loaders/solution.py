"""
Solution (multi-project) loading.
"""

from __future__ import annotations

from pathlib import Path

from meshwork.exceptions import NotFoundError
from meshwork.loaders.base import LoadResult, read_source_text, resolve_input
from meshwork.loaders.project import describe_project
from meshwork.loaders.solution_file import ProjectType, parse_solution
from meshwork.utils.logging import get_logger

logger = get_logger("meshwork.loaders.solution")

# Only these project kinds can become services
PROJECT_EXTENSIONS = (".csproj", ".fsproj")


class SolutionLoader:
    """Loads one service description per eligible solution member."""

    def load(self, path: str | Path, base_dir: str | Path | None = None) -> LoadResult:
        full_path = resolve_input(path, base_dir, what="Solution")

        logger.debug(f"Reading solution {full_path}")
        members = parse_solution(read_source_text(full_path), full_path)

        descriptions = []
        for member in members:
            if member.project_type is not ProjectType.MSBUILD:
                logger.debug(f"Skipping {member.name}: {member.project_type.value}")
                continue
            if member.extension not in PROJECT_EXTENSIONS:
                logger.debug(f"Skipping {member.name}: unsupported extension '{member.extension}'")
                continue
            if not member.absolute_path.is_file():
                raise NotFoundError(
                    f"Project '{member.name}' referenced by {full_path.name} not found: {member.absolute_path}",
                    path=member.absolute_path,
                )

            description = describe_project(member.absolute_path)
            if description is not None:
                descriptions.append(description)

        return LoadResult(descriptions, full_path.parent)
