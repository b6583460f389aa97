"""
Manifest loading.

A manifest is a YAML sequence of service records with camelCase fields::

    - name: web
      project: src/Web/Web.csproj
      bindings:
        - protocol: http
          port: 5000
      configuration:
        LOG_LEVEL: debug
    - name: rabbit
      dockerImage: rabbitmq:3-management
      bindings:
        - port: 5672
          connectionString: amqp://localhost:5672
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from meshwork.exceptions import ParseError
from meshwork.launch_settings import apply_launch_settings
from meshwork.loaders.base import LoadResult, read_source_text, resolve_input
from meshwork.model.description import MAX_PORT, Binding, ServiceDescription
from meshwork.utils.logging import get_logger

logger = get_logger("meshwork.loaders.manifest")

SERVICE_FIELDS = {"name", "project", "dockerImage", "bindings", "replicas", "configuration"}
BINDING_FIELDS = {"name", "protocol", "host", "port", "connectionString"}


class ManifestLoader:
    """Loads service descriptions from a YAML manifest."""

    def load(self, path: str | Path, base_dir: str | Path | None = None) -> LoadResult:
        full_path = resolve_input(path, base_dir, what="Manifest")
        context_directory = full_path.parent

        logger.debug(f"Reading manifest {full_path}")
        descriptions = parse_manifest(read_source_text(full_path), source=full_path)

        enriched = []
        for description in descriptions:
            if description.project:
                project_path = (context_directory / description.project).resolve()
                description = apply_launch_settings(description, project_path)
            enriched.append(description)

        return LoadResult(enriched, context_directory)


def parse_manifest(text: str, source: str | Path | None = None) -> list[ServiceDescription]:
    """
    Parse manifest text into service descriptions, in document order.

    Raises:
        ParseError: If the text is not valid YAML or a record has the wrong shape
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        line = None
        if hasattr(e, "problem_mark") and e.problem_mark is not None:
            line = e.problem_mark.line + 1
        raise ParseError(f"Invalid YAML: {e}", path=source, line=line) from e

    if data is None:
        return []
    if not isinstance(data, list):
        raise ParseError(f"Manifest must be a sequence of services, got {type(data).__name__}", path=source)

    return [_parse_service(record, index, source) for index, record in enumerate(data)]


def _parse_service(record: Any, index: int, source: str | Path | None) -> ServiceDescription:
    where = f"service #{index + 1}"
    if not isinstance(record, dict):
        raise ParseError(f"{where} must be a mapping, got {type(record).__name__}", path=source)

    unknown = set(record) - SERVICE_FIELDS
    if unknown:
        raise ParseError(f"{where} has unknown field(s): {', '.join(sorted(map(str, unknown)))}", path=source)

    name = record.get("name")
    if not isinstance(name, str):
        raise ParseError(f"{where} requires a string 'name'", path=source)
    where = f"service '{name}'"

    project = _optional_str(record, "project", where, source)
    docker_image = _optional_str(record, "dockerImage", where, source)
    if project and docker_image:
        raise ParseError(f"{where} sets both 'project' and 'dockerImage'", path=source)

    bindings = record.get("bindings") or []
    if not isinstance(bindings, list):
        raise ParseError(f"{where} 'bindings' must be a sequence", path=source)

    replicas = record.get("replicas")
    if replicas is not None and (isinstance(replicas, bool) or not isinstance(replicas, int) or replicas < 1):
        raise ParseError(f"{where} 'replicas' must be a positive integer, got {replicas!r}", path=source)

    configuration = record.get("configuration") or {}
    if not isinstance(configuration, dict):
        raise ParseError(f"{where} 'configuration' must be a mapping", path=source)

    return ServiceDescription(
        name=name,
        project=project,
        docker_image=docker_image,
        bindings=tuple(_parse_binding(b, i, where, source) for i, b in enumerate(bindings)),
        replicas=replicas,
        configuration={str(k): _scalar_to_str(v, f"{where} configuration '{k}'", source) for k, v in configuration.items()},
    )


def _parse_binding(record: Any, index: int, owner: str, source: str | Path | None) -> Binding:
    where = f"{owner} binding #{index + 1}"
    if not isinstance(record, dict):
        raise ParseError(f"{where} must be a mapping, got {type(record).__name__}", path=source)

    unknown = set(record) - BINDING_FIELDS
    if unknown:
        raise ParseError(f"{where} has unknown field(s): {', '.join(sorted(map(str, unknown)))}", path=source)

    port = record.get("port")
    if port is not None and (isinstance(port, bool) or not isinstance(port, int)):
        raise ParseError(f"{where} 'port' must be an integer, got {port!r}", path=source)
    if port is not None and not 0 <= port <= MAX_PORT:
        raise ParseError(f"{where} 'port' must be between 0 and {MAX_PORT}, got {port}", path=source)

    return Binding(
        name=_optional_str(record, "name", where, source),
        protocol=_optional_str(record, "protocol", where, source),
        host=_optional_str(record, "host", where, source),
        port=port,
        connection_string=_optional_str(record, "connectionString", where, source),
    )


def _optional_str(record: dict, key: str, where: str, source: str | Path | None) -> str | None:
    value = record.get(key)
    if value is not None and not isinstance(value, str):
        raise ParseError(f"{where} '{key}' must be a string, got {type(value).__name__}", path=source)
    return value


def _scalar_to_str(value: Any, where: str, source: str | Path | None) -> str:
    """Render a YAML scalar the way it was written (booleans as true/false)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    if value is None:
        return ""
    raise ParseError(f"{where} must be a scalar value, got {type(value).__name__}", path=source)
