"""
Diagram handle for the Coggle client.

A Diagram scopes requests to one remote diagram id. Node trees fetched
through it are snapshots of the server state at the time of the call.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional
import logging

from ..models import DiagramResource, NodeResource
from .node import Node

if TYPE_CHECKING:
    from .client import CoggleApi


@dataclass
class Diagram:
    """
    A remote diagram bound to the client that fetched it.
    """
    api_client: "CoggleApi" = field(repr=False)
    id: str
    title: str = ""
    timestamp: Optional[str] = None
    modified: Optional[str] = None
    owner: Optional[str] = None
    my_access: List[str] = field(default_factory=list)
    folder: Optional[str] = None

    @classmethod
    def from_resource(cls, api_client: "CoggleApi", resource: DiagramResource) -> "Diagram":
        """Build a handle from a diagram returned by the server."""
        return cls(
            api_client=api_client,
            id=resource.id,
            title=resource.title,
            timestamp=resource.timestamp,
            modified=resource.modified,
            owner=resource.owner,
            my_access=list(resource.my_access),
            folder=resource.folder
        )

    def replace_id(self, url: str) -> str:
        """Substitute the first `:diagram` placeholder with this diagram's id."""
        return url.replace(":diagram", self.id, 1)

    def web_url(self) -> str:
        """URL of the diagram in the Coggle web app."""
        return self.replace_id(self.api_client.base_url + "/diagram/:diagram")

    def _build_nodes(self, resources: List[NodeResource]) -> List[Node]:
        return [Node.from_resource(self, resource) for resource in resources]

    def get_nodes(self) -> List[Node]:
        """
        Fetch the node tree of this diagram.

        Returns:
            The root node(s), each with its full subtree

        Raises:
            TransportError: If the request fails
        """
        resources = self.api_client.get(
            self.replace_id("/api/1/diagrams/:diagram/nodes"),
            response_type=List[NodeResource]
        )
        return self._build_nodes(resources)

    def arrange(self) -> List[Node]:
        """
        Ask the server to auto-layout the diagram.

        Returns:
            The node tree with the offsets computed by the server

        Raises:
            TransportError: If the request fails
        """
        resources = self.api_client.put(
            self.replace_id("/api/1/diagrams/:diagram/nodes"),
            "action=arrange",
            body={},
            response_type=List[NodeResource]
        )
        logging.info(f"Arranged diagram {self.id}")
        return self._build_nodes(resources)
