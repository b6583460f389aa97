"""
Launch-configuration merging.

A project may carry ``Properties/launchSettings.json`` beside its project
file. The profile named after the project supplies default bindings,
environment variables and a replica count for anything the service
description does not already declare.
"""

from __future__ import annotations

import dataclasses
import json
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

from meshwork.exceptions import ConfigError, LaunchSettingsError
from meshwork.model.description import Binding, ServiceDescription
from meshwork.utils.logging import get_logger

logger = get_logger("meshwork.launch_settings")

LAUNCH_SETTINGS_DIR = "Properties"
LAUNCH_SETTINGS_FILE = "launchSettings.json"

# Ports implied by a URL scheme when the URL does not spell one out
DEFAULT_PORTS = {"http": 80, "https": 443}


def launch_settings_path(project_path: str | Path) -> Path:
    """Conventional location of the launch settings for a project file."""
    return Path(project_path).parent / LAUNCH_SETTINGS_DIR / LAUNCH_SETTINGS_FILE


def read_launch_profile(project_path: str | Path) -> dict[str, Any] | None:
    """
    Read the launch profile for a project.

    Args:
        project_path: Absolute path to the build-project file

    Returns:
        The profile whose key equals the project file name without extension,
        or None when there is no launch settings file or no such profile.

    Raises:
        LaunchSettingsError: If the launch settings file is not valid JSON or
            is not shaped as a profile document
    """
    project_path = Path(project_path)
    settings_path = launch_settings_path(project_path)

    if not settings_path.is_file():
        logger.debug(f"No launch settings for {project_path.name}")
        return None

    try:
        root = json.loads(settings_path.read_text(encoding="utf-8-sig"))
    except UnicodeDecodeError as e:
        raise LaunchSettingsError(f"Not valid {e.encoding} text (byte offset {e.start}): {e.reason}", path=settings_path) from e
    except json.JSONDecodeError as e:
        raise LaunchSettingsError(f"Invalid JSON: {e.msg}", path=settings_path, line=e.lineno) from e

    if not isinstance(root, dict):
        raise LaunchSettingsError(f"Expected a JSON object, got {type(root).__name__}", path=settings_path)

    profiles = root.get("profiles")
    if profiles is None:
        logger.debug(f"{settings_path} has no profiles")
        return None
    if not isinstance(profiles, dict):
        raise LaunchSettingsError("'profiles' must be an object", path=settings_path)

    key = project_path.stem
    profile = profiles.get(key)
    if profile is None:
        logger.debug(f"{settings_path} has no profile named '{key}'")
        return None
    if not isinstance(profile, dict):
        raise LaunchSettingsError(f"Profile '{key}' must be an object", path=settings_path)

    return profile


def parse_application_urls(value: str) -> list[Binding]:
    """
    Turn a ``;``-separated applicationUrl value into bindings.

    Each binding carries the URL's scheme as protocol and its port; host and
    name stay unset.
    """
    bindings = []
    for address in value.split(";"):
        address = address.strip()
        if not address:
            continue

        parts = urlsplit(address)
        if not parts.scheme or not parts.netloc:
            raise ConfigError(f"Malformed applicationUrl entry: '{address}'", details={"url": address})
        try:
            port = parts.port
        except ValueError as e:
            raise ConfigError(f"Malformed applicationUrl entry: '{address}' ({e})", details={"url": address}) from e

        if port is None:
            port = DEFAULT_PORTS.get(parts.scheme)
        bindings.append(Binding(protocol=parts.scheme, port=port))
    return bindings


def merge_launch_profile(description: ServiceDescription, profile: dict[str, Any]) -> ServiceDescription:
    """
    Merge a launch profile into a description without overriding authored values.

    Bindings, configuration and replicas are each merged independently, and
    only when the description leaves that field empty.
    """
    changes: dict[str, Any] = {}

    application_url = profile.get("applicationUrl")
    if not description.bindings and isinstance(application_url, str):
        changes["bindings"] = tuple(parse_application_urls(application_url))

    environment_variables = profile.get("environmentVariables")
    if not description.configuration and isinstance(environment_variables, dict):
        for key, value in environment_variables.items():
            if not isinstance(value, str):
                raise ConfigError(
                    f"environmentVariables['{key}'] for '{description.name}' must be a string, "
                    f"got {type(value).__name__}",
                    details={"service": description.name, "key": key},
                )
        changes["configuration"] = dict(environment_variables)

    replicas = profile.get("replicas")
    if description.replicas is None and replicas is not None:
        if isinstance(replicas, bool) or not isinstance(replicas, int) or replicas < 1:
            raise ConfigError(
                f"replicas for '{description.name}' must be a positive integer, got {replicas!r}",
                details={"service": description.name},
            )
        changes["replicas"] = replicas

    if not changes:
        return description

    logger.debug(f"Merged launch profile into '{description.name}': {', '.join(sorted(changes))}")
    return dataclasses.replace(description, **changes)


def apply_launch_settings(description: ServiceDescription, project_path: str | Path) -> ServiceDescription:
    """Enrich a description from its project's launch settings; unchanged when there are none."""
    profile = read_launch_profile(project_path)
    if profile is None:
        return description
    return merge_launch_profile(description, profile)
