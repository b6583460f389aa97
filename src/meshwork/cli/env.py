"""
meshwork env - Print the environment injected into one service.
"""

from pathlib import Path

import typer

from meshwork.cli.common import resolve
from meshwork.environment import build_environment
from meshwork.exceptions import NotFoundError


def env(
    service: str = typer.Argument(..., help="Service name"),
    path: Path = typer.Argument(Path("."), help="Manifest, project or solution (or a directory holding one)"),
    kind: str | None = typer.Option(None, "--kind", "-k", help="Source kind: manifest, project or solution"),
    config_env: str | None = typer.Option(None, "--env", help="Tool configuration environment"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """
    Print KEY=VALUE lines, sorted by key.
    """
    application = resolve(path, kind, config_env, verbose)

    try:
        environment = build_environment(application, service)
    except NotFoundError as e:
        known = ", ".join(application.services) or "none"
        typer.echo(f"Error: {e} (known services: {known})", err=True)
        raise typer.Exit(1) from e

    for key in sorted(environment):
        typer.echo(f"{key}={environment[key]}")
