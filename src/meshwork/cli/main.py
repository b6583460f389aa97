"""
Main CLI entry point.
"""

import typer

from meshwork import __version__
from meshwork.cli import describe, env


def version_callback(value: bool):
    """Callback to display version and exit."""
    if value:
        typer.echo(f"meshwork version {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="meshwork",
    help="Meshwork - resolve multi-service topology and the environment that connects it",
    add_completion=True,
)

app.command(name="describe", help="Show the resolved services and bindings")(describe.describe)
app.command(name="env", help="Print the environment a service receives")(env.env)


@app.callback(invoke_without_command=True)
def entrypoint(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        help="Show version and exit.",
    ),
):
    """
    Meshwork - resolve multi-service topology and the environment that connects it.

    Run 'meshwork <command> --help' for help on a specific command.
    """
    if ctx.invoked_subcommand is None:
        if not version:
            typer.echo(ctx.get_help())
            raise typer.Exit()


def main():
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
