"""
Topology data model.
"""

from meshwork.model.application import Application, Service
from meshwork.model.description import Binding, LaunchTarget, ServiceDescription

__all__ = [
    "Application",
    "Binding",
    "LaunchTarget",
    "Service",
    "ServiceDescription",
]
