"""Handles for the Coggle REST API."""

from .client import CoggleApi
from .diagram import Diagram
from .node import Node
from .folder import Folder

__all__ = ["CoggleApi", "Diagram", "Node", "Folder"]
