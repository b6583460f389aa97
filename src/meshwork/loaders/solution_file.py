"""
Reader for the multi-project solution (``.sln``) text format.

Only what topology resolution needs is read: each member's name, path and
project type. Nested folders, configurations and global sections are ignored.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PureWindowsPath

from meshwork.exceptions import ParseError

HEADER = "Microsoft Visual Studio Solution File, Format Version"

PROJECT_LINE = re.compile(
    r'^Project\("(?P<type>\{[0-9A-Fa-f-]+\})"\)\s*=\s*"(?P<name>[^"]*)"\s*,\s*"(?P<path>[^"]*)"\s*,\s*"(?P<guid>[^"]*)"'
)

SOLUTION_FOLDER_GUID = "{2150E333-8FDC-42A3-9474-1A3956D46DE8}"
WEB_PROJECT_GUID = "{E24C65DC-7377-472B-9ABA-BC803B73C61A}"

# Project type GUIDs always written for build-tool-format projects
MSBUILD_PROJECT_GUIDS = {
    "{FAE04EC0-301F-11D3-BF4B-00C04F79EFBC}",  # C#
    "{9A19103F-16F7-4668-BE54-9A1E7A4F7556}",  # C# (SDK style)
    "{F2A71F9B-5D33-465A-A702-920D77279786}",  # F#
    "{6EC3EE1D-3C4E-46DD-8F32-0CC8E7565705}",  # F# (SDK style)
    "{F184B08F-C81C-45F6-A57F-5ABD9991F28F}",  # VB
    "{778DAE3C-4631-46EA-AA77-85C1314464D9}",  # VB (SDK style)
    "{13B669BE-BB05-4DDF-9536-439F39A36129}",  # Common project system
    "{8BC9CEB8-8B4A-11D0-8D11-00A0C91BC942}",  # C++
}


class ProjectType(str, Enum):
    MSBUILD = "msbuild"
    SOLUTION_FOLDER = "solution_folder"
    WEB_PROJECT = "web_project"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class SolutionProject:
    name: str
    relative_path: str
    absolute_path: Path
    type_guid: str
    project_type: ProjectType

    @property
    def extension(self) -> str:
        return self.absolute_path.suffix.lower()


def classify_project(type_guid: str, relative_path: str) -> ProjectType:
    """Decide whether a solution member is a build-tool-format project."""
    guid = type_guid.upper()
    if guid == SOLUTION_FOLDER_GUID:
        return ProjectType.SOLUTION_FOLDER
    if guid == WEB_PROJECT_GUID:
        return ProjectType.WEB_PROJECT

    extension = PureWindowsPath(relative_path).suffix.lower()
    # Legacy C++ projects need conversion before the build tool can read them
    if extension == ".vcproj":
        return ProjectType.UNKNOWN
    if guid in MSBUILD_PROJECT_GUIDS or extension.endswith("proj"):
        return ProjectType.MSBUILD
    return ProjectType.UNKNOWN


def parse_solution(text: str, solution_path: str | Path) -> list[SolutionProject]:
    """
    Parse solution text into its member projects, in file order.

    Args:
        text: Solution file contents
        solution_path: Absolute path of the solution; member paths are relative to its directory

    Raises:
        ParseError: If the header is missing or a project entry is malformed
    """
    solution_path = Path(solution_path)
    solution_dir = solution_path.parent
    lines = text.lstrip("\ufeff").splitlines()

    if not any(line.strip().startswith(HEADER) for line in lines[:3]):
        raise ParseError("Not a solution file (missing format header)", path=solution_path)

    projects = []
    for number, line in enumerate(lines, start=1):
        stripped = line.strip()
        if not stripped.startswith("Project("):
            continue

        match = PROJECT_LINE.match(stripped)
        if match is None:
            raise ParseError("Malformed project entry", path=solution_path, line=number)

        relative_path = match.group("path")
        # Solution files always use Windows separators
        parts = PureWindowsPath(relative_path).parts
        absolute_path = (solution_dir.joinpath(*parts)).resolve() if parts else solution_dir

        projects.append(
            SolutionProject(
                name=match.group("name"),
                relative_path=relative_path,
                absolute_path=absolute_path,
                type_guid=match.group("type"),
                project_type=classify_project(match.group("type"), relative_path),
            )
        )

    return projects
