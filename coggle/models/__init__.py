"""Wire models for the Coggle REST API."""

from .resources import DiagramResource, FolderResource, NodeResource, NodeUpdateProps, Offset

__all__ = [
    "Offset",
    "DiagramResource",
    "NodeResource",
    "NodeUpdateProps",
    "FolderResource"
]
