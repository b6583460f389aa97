"""
Meshwork - static topology resolution for multi-service applications.

Loads services from a manifest, project or solution, merges per-project
launch settings, and derives the environment each service instance needs to
reach the others.
"""

__version__ = "0.1.0"

from meshwork.environment import EnvironmentSink, build_environment, populate_environment

# Exceptions
from meshwork.exceptions import (
    ConfigError,
    LaunchSettingsError,
    MeshworkError,
    NotFoundError,
    ParseError,
)
from meshwork.launch_settings import apply_launch_settings, merge_launch_profile, read_launch_profile
from meshwork.loaders import load_application
from meshwork.model import Application, Binding, LaunchTarget, Service, ServiceDescription

# Logging utilities
from meshwork.utils.logging import get_logger, setup_logging, setup_logging_from_config

__all__ = [
    # Model
    "Application",
    "Binding",
    "LaunchTarget",
    "Service",
    "ServiceDescription",
    # Loading
    "load_application",
    "read_launch_profile",
    "merge_launch_profile",
    "apply_launch_settings",
    # Environment
    "EnvironmentSink",
    "populate_environment",
    "build_environment",
    # Logging
    "setup_logging",
    "setup_logging_from_config",
    "get_logger",
    # Exceptions
    "MeshworkError",
    "ParseError",
    "ConfigError",
    "LaunchSettingsError",
    "NotFoundError",
]
