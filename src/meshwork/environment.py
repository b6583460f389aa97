"""
Environment injection.

Every service instance receives the same description of the topology: for
each binding of each service, its host, and (when known) its protocol, port
and connection string. Keys are emitted in two naming schemes at once::

    SERVICE__ORDERS__GRPC__PORT   hierarchical (``__`` is a configuration section separator)
    ORDERS_GRPC_SERVICE_PORT      flat

Consumers read one or the other, so both are always produced together.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from meshwork.exceptions import NotFoundError
from meshwork.model.application import Service
from meshwork.model.description import DEFAULT_HOST, Binding

if TYPE_CHECKING:
    from meshwork.model.application import Application


class EnvironmentSink(Protocol):
    """Receives one environment variable at a time."""

    def __call__(self, key: str, value: str) -> None: ...


def binding_stems(service_name: str, binding: Binding) -> tuple[str, str]:
    """Return the (hierarchical, flat) key stems for a binding of a service."""
    service_name = service_name.upper()
    if not binding.name:
        return service_name, service_name
    binding_name = binding.name.upper()
    return f"{service_name}__{binding_name}", f"{service_name}_{binding_name}"


def emit_binding(service_name: str, binding: Binding, sink: EnvironmentSink) -> None:
    config_name, env_name = binding_stems(service_name, binding)

    if binding.connection_string:
        sink(f"CONNECTIONSTRING__{config_name}", binding.connection_string)

    if binding.protocol:
        sink(f"SERVICE__{config_name}__PROTOCOL", binding.protocol)
        sink(f"{env_name}_SERVICE_PROTOCOL", binding.protocol)

    if binding.port is not None:
        sink(f"SERVICE__{config_name}__PORT", str(binding.port))
        sink(f"{env_name}_SERVICE_PORT", str(binding.port))

    host = binding.host or DEFAULT_HOST
    sink(f"SERVICE__{config_name}__HOST", host)
    sink(f"{env_name}_SERVICE_HOST", host)


def populate_environment(application: Application, service: Service | str, sink: EnvironmentSink) -> None:
    """
    Emit the environment one service instance needs.

    The target's own configuration is emitted verbatim, followed by the
    binding keys of every service in the application (the target included).

    Args:
        application: Resolved topology
        service: Target service, or its name
        sink: Called once per key/value pair

    Raises:
        NotFoundError: If `service` names a service that is not in the application
    """
    if isinstance(service, str):
        if service not in application.services:
            raise NotFoundError(f"Service '{service}' is not part of the application")
        service = application.services[service]

    for key, value in service.description.configuration.items():
        sink(key, value)

    for other in application.services.values():
        for binding in other.description.bindings:
            emit_binding(other.description.name, binding, sink)


def build_environment(application: Application, service: Service | str) -> dict[str, str]:
    """Collect the environment for a service into a dict."""
    environment: dict[str, str] = {}
    populate_environment(application, service, environment.__setitem__)
    return environment
