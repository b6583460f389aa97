"""
Service descriptions and bindings.

A ServiceDescription is the declarative (or inferred) record for one service
before topology resolution. Descriptions are immutable values: enrichment
produces a new description instead of mutating the old one.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Literal

DEFAULT_HOST = "localhost"
DEFAULT_PROTOCOL = "http"
MAX_PORT = 65535

#: Launch target discriminator
TargetKind = Literal["project", "image"]


@dataclass(frozen=True)
class Binding:
    """One network endpoint (or connection string) exposed by a service."""

    name: str | None = None
    protocol: str | None = None
    host: str | None = None
    port: int | None = None
    connection_string: str | None = None

    def render_url(self) -> str:
        """
        Render the binding as a URL for display.

        The protocol falls back to http here and only here; environment
        injection never defaults it.
        """
        if self.port is None and self.connection_string:
            return self.connection_string
        url = f"{self.protocol or DEFAULT_PROTOCOL}://{self.host or DEFAULT_HOST}"
        if self.port is not None:
            url += f":{self.port}"
        return url


@dataclass(frozen=True)
class LaunchTarget:
    kind: TargetKind
    reference: str


@dataclass(frozen=True)
class ServiceDescription:
    """Declarative record for one service."""

    name: str
    project: str | None = None
    docker_image: str | None = None
    bindings: tuple[Binding, ...] = ()
    replicas: int | None = None
    configuration: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze the containers so a finished description cannot be edited in place
        object.__setattr__(self, "bindings", tuple(self.bindings))
        object.__setattr__(self, "configuration", MappingProxyType(dict(self.configuration)))

    @property
    def launch_target(self) -> LaunchTarget | None:
        """The project or image this service runs, or None for an inert entry."""
        if self.project:
            return LaunchTarget("project", self.project)
        if self.docker_image:
            return LaunchTarget("image", self.docker_image)
        return None
