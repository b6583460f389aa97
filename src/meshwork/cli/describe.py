"""
meshwork describe - Show the resolved topology.
"""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from meshwork.cli.common import resolve


def describe(
    path: Path = typer.Argument(Path("."), help="Manifest, project or solution (or a directory holding one)"),
    kind: str | None = typer.Option(None, "--kind", "-k", help="Source kind: manifest, project or solution"),
    env: str | None = typer.Option(None, help="Tool configuration environment"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """
    Resolve the application and list its services.
    """
    application = resolve(path, kind, env, verbose)
    console = Console()

    if as_json:
        services = []
        for service in application.services.values():
            d = service.description
            target = d.launch_target
            services.append(
                {
                    "name": d.name,
                    "target": {"kind": target.kind, "reference": target.reference} if target else None,
                    "replicas": d.replicas,
                    "bindings": [
                        {
                            "name": b.name,
                            "protocol": b.protocol,
                            "host": b.host,
                            "port": b.port,
                            "connectionString": b.connection_string,
                        }
                        for b in d.bindings
                    ],
                    "configuration": dict(d.configuration),
                }
            )
        typer.echo(
            json.dumps({"contextDirectory": str(application.context_directory), "services": services}, indent=2)
        )
        return

    if not application.services:
        console.print("[yellow]No services found[/yellow]")
        return

    table = Table(title=f"Services ({len(application)})", show_header=True)
    table.add_column("Name", style="cyan")
    table.add_column("Target", style="green")
    table.add_column("Replicas", style="yellow", justify="right")
    table.add_column("Bindings", style="magenta")

    for service in application.services.values():
        d = service.description
        target = d.launch_target
        target_str = f"{target.kind}: {target.reference}" if target else "-"
        bindings = "\n".join(
            f"{b.name}: {b.render_url()}" if b.name else b.render_url() for b in d.bindings
        )
        table.add_row(d.name, target_str, str(d.replicas), bindings or "-")

    console.print(table)
    console.print(f"[dim]Context directory: {application.context_directory}[/dim]")
