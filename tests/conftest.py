"""
Shared fixtures for building project trees on disk.
"""

import json
from pathlib import Path

import pytest

CSHARP_GUID = "{FAE04EC0-301F-11D3-BF4B-00C04F79EFBC}"
FOLDER_GUID = "{2150E333-8FDC-42A3-9474-1A3956D46DE8}"


def write_project(root: Path, relative: str, profile: dict | None = None, profile_key: str | None = None) -> Path:
    """
    Create an (empty) project file and, when `profile` is given, its launch settings.

    The profile is stored under the project's stem unless `profile_key` overrides it.
    """
    project = root / relative
    project.parent.mkdir(parents=True, exist_ok=True)
    project.write_text('<Project Sdk="Microsoft.NET.Sdk.Web" />\n')
    if profile is not None:
        properties = project.parent / "Properties"
        properties.mkdir(exist_ok=True)
        key = profile_key or project.stem
        (properties / "launchSettings.json").write_text(json.dumps({"profiles": {key: profile}}))
    return project


def write_solution(path: Path, members: list[tuple[str, str, str]]) -> Path:
    """Write a solution file; members are (type guid, name, windows-style relative path)."""
    lines = [
        "",
        "Microsoft Visual Studio Solution File, Format Version 12.00",
        "# Visual Studio Version 16",
        "VisualStudioVersion = 16.0.29709.97",
    ]
    for i, (type_guid, name, rel) in enumerate(members):
        lines.append(f'Project("{type_guid}") = "{name}", "{rel}", "{{00000000-0000-0000-0000-00000000000{i}}}"')
        lines.append("EndProject")
    lines += ["Global", "EndGlobal", ""]
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines))
    return path


@pytest.fixture
def project_factory(tmp_path):
    def factory(relative: str, profile: dict | None = None, profile_key: str | None = None) -> Path:
        return write_project(tmp_path, relative, profile, profile_key)

    return factory
