"""
Resolved application topology.

The Application is built once from the descriptions produced by exactly one
loader and is not mutated afterwards.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from meshwork.model.description import ServiceDescription

if TYPE_CHECKING:
    from meshwork.environment import EnvironmentSink
    from meshwork.loaders import SourceKind


@dataclass
class Service:
    """A finalized service description plus launcher-owned runtime state."""

    description: ServiceDescription
    # Reserved for the process launcher; never read during resolution
    items: dict[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.description.name


class Application:
    """Name-keyed map of every service in one run."""

    def __init__(self, services: Iterable[ServiceDescription], context_directory: str | Path | None = None):
        services_map: dict[str, Service] = {}

        # Duplicate names, empty names and malformed bindings are not rejected here
        for description in services:
            if description.replicas is None:
                description = dataclasses.replace(description, replicas=1)
            services_map[description.name] = Service(description=description)

        self._services = MappingProxyType(services_map)
        self._context_directory = Path(context_directory) if context_directory is not None else Path.cwd()

    @property
    def services(self) -> Mapping[str, Service]:
        return self._services

    @property
    def context_directory(self) -> Path:
        """Base path for relative paths referenced by service descriptions."""
        return self._context_directory

    def __getitem__(self, name: str) -> Service:
        return self._services[name]

    def __contains__(self, name: object) -> bool:
        return name in self._services

    def __iter__(self) -> Iterator[str]:
        return iter(self._services)

    def __len__(self) -> int:
        return len(self._services)

    def __repr__(self) -> str:
        return f"Application(services={list(self._services)!r}, context_directory={str(self._context_directory)!r})"

    # --- Loading -------------------------------------------------------------

    @classmethod
    def load(
        cls, path: str | Path, base_dir: str | Path | None = None, kind: SourceKind | None = None
    ) -> Application:
        """Load from a manifest, project or solution, chosen by `kind` or file extension."""
        from meshwork.loaders import load_application

        return load_application(path, base_dir=base_dir, kind=kind)

    @classmethod
    def from_manifest(cls, path: str | Path, base_dir: str | Path | None = None) -> Application:
        return cls.load(path, base_dir=base_dir, kind="manifest")

    @classmethod
    def from_project(cls, path: str | Path, base_dir: str | Path | None = None) -> Application:
        return cls.load(path, base_dir=base_dir, kind="project")

    @classmethod
    def from_solution(cls, path: str | Path, base_dir: str | Path | None = None) -> Application:
        return cls.load(path, base_dir=base_dir, kind="solution")

    # --- Environment ---------------------------------------------------------

    def populate_environment(self, service: Service | str, sink: EnvironmentSink) -> None:
        """Emit the environment `service` needs to reach every binding in this application."""
        from meshwork.environment import populate_environment

        populate_environment(self, service, sink)
