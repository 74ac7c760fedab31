"""
coggle: A typed client for the Coggle diagramming service.

Wraps the REST API for diagrams, folders and nodes.
"""

__version__ = "0.1.0"

from .api import CoggleApi, Diagram, Node, Folder
from .models import Offset, NodeUpdateProps
from .errors import (
    CoggleError,
    ValidationError,
    TextTooLongError,
    InvalidOrganizationNameError,
    TransportError
)

__all__ = [
    "CoggleApi",
    "Diagram",
    "Node",
    "Folder",
    "Offset",
    "NodeUpdateProps",
    "CoggleError",
    "ValidationError",
    "TextTooLongError",
    "InvalidOrganizationNameError",
    "TransportError"
]
