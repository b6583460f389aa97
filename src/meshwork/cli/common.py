"""
Shared CLI helpers.
"""

from pathlib import Path

import typer

from meshwork.config.loader import load_config
from meshwork.exceptions import MeshworkError
from meshwork.loaders import load_application
from meshwork.model.application import Application
from meshwork.utils.logging import get_logger, setup_logging, setup_logging_from_config

logger = get_logger("meshwork.cli")

KINDS = ("manifest", "project", "solution")


def resolve(path: Path, kind: str | None, env: str | None, verbose: bool) -> Application:
    """Configure logging, then load the application or exit with status 1."""
    try:
        config = load_config(Path.cwd(), env=env)
        if verbose:
            setup_logging(level="DEBUG")
        else:
            setup_logging_from_config(config, project_dir=Path.cwd())

        if kind is not None and kind not in KINDS:
            typer.echo(f"Error: --kind must be one of {', '.join(KINDS)}", err=True)
            raise typer.Exit(1)

        return load_application(path, kind=kind)
    except MeshworkError as e:
        logger.debug(f"Resolution failed: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e
