"""
Tool configuration loading.

Reads the optional meshwork.yaml (and meshwork.{env}.yaml overlay) from a
directory. Tool configuration controls how meshwork itself runs, such as
logging; it never changes the resolved topology or its environment keys.

String values may reference the process environment as ``${VAR}`` or
``${VAR:-default}``::

    logging:
      level: ${MESHWORK_LOG_LEVEL:-INFO}
      file: ${HOME}/.meshwork/meshwork.log
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from meshwork.exceptions import ConfigError, ParseError

CONFIG_FILE = "meshwork.yaml"
OVERLAY_PATTERN = "meshwork.*.yaml"

ENV_REFERENCE = re.compile(r"\$\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?::-(?P<default>[^}]*))?\}")


class Config:
    """Meshwork configuration container."""

    def __init__(self, data: dict[str, Any]):
        self.data = data

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation."""
        value = self.data
        for k in key.split("."):
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default
        return value


def is_config_file(path: Path) -> bool:
    """True for meshwork.yaml and its meshwork.{env}.yaml overlays."""
    return path.name == CONFIG_FILE or path.match(OVERLAY_PATTERN)


def load_config(project_dir: Path | None = None, env: str | None = None) -> Config:
    """
    Load meshwork configuration.

    Args:
        project_dir: Directory holding meshwork.yaml (default: current directory)
        env: Environment name; meshwork.{env}.yaml is merged over the base file

    Returns:
        Config instance; empty when no configuration file exists

    Raises:
        ParseError: If a configuration file is not valid YAML or not a mapping
        ConfigError: If a value references an unset environment variable without a default
    """
    if project_dir is None:
        project_dir = Path.cwd()

    config_data = _read_yaml(project_dir / CONFIG_FILE)

    if env:
        _merge_dict(config_data, _read_yaml(project_dir / f"meshwork.{env}.yaml"))

    return Config(_expand_env_vars(config_data, path=""))


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except UnicodeDecodeError as e:
        raise ParseError(f"Error reading {path.name}: not valid UTF-8 ({e.reason})", path=path) from e
    except yaml.YAMLError as e:
        line = None
        if hasattr(e, "problem_mark") and e.problem_mark is not None:
            line = e.problem_mark.line + 1
        raise ParseError(
            f"Error parsing {path.name}: {e}\n  Suggestion: Check YAML syntax, ensure proper indentation and quotes",
            path=path,
            line=line,
        ) from e

    if not isinstance(data, dict):
        raise ParseError(f"Configuration must be a mapping, got {type(data).__name__}", path=path)
    return data


def _expand_env_vars(value: Any, path: str) -> Any:
    """Substitute ${VAR} / ${VAR:-default} in every string value; `path` names the key in errors."""
    if isinstance(value, dict):
        return {k: _expand_env_vars(v, f"{path}.{k}" if path else str(k)) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env_vars(item, f"{path}[{i}]") for i, item in enumerate(value)]
    if not isinstance(value, str):
        return value

    def replace(match: re.Match) -> str:
        name = match.group("name")
        resolved = os.environ.get(name, match.group("default"))
        if resolved is None:
            raise ConfigError(
                f"Configuration key '{path}' references unset environment variable '{name}'\n"
                f"  Suggestion: export {name} or write ${{{name}:-<default>}}",
                details={"key": path, "variable": name},
            )
        return resolved

    return ENV_REFERENCE.sub(replace, value)


def _merge_dict(base: dict, override: dict):
    """Recursively merge override into base."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _merge_dict(base[key], value)
        else:
            base[key] = value
