"""
Single build-project loading.
"""

from __future__ import annotations

from pathlib import Path

from meshwork.launch_settings import merge_launch_profile, read_launch_profile
from meshwork.loaders.base import LoadResult, resolve_input
from meshwork.model.description import ServiceDescription
from meshwork.utils.logging import get_logger

logger = get_logger("meshwork.loaders.project")


class ProjectLoader:
    """Infers a service description from one build-project file."""

    def load(self, path: str | Path, base_dir: str | Path | None = None) -> LoadResult:
        full_path = resolve_input(path, base_dir, what="Project")
        description = describe_project(full_path)
        return LoadResult([description] if description is not None else [], full_path.parent)


def describe_project(project_path: Path) -> ServiceDescription | None:
    """
    Build a description for an absolute project path.

    A project without a matching launch profile yields no description at all.
    """
    profile = read_launch_profile(project_path)
    if profile is None:
        logger.debug(f"Skipping {project_path.name}: no launch profile")
        return None

    description = ServiceDescription(name=project_path.stem.lower(), project=str(project_path))
    return merge_launch_profile(description, profile)
