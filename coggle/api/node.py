"""
Node handle for the Coggle client.

Nodes form a tree rebuilt from the nested resource returned by the server.
Mutating calls return a new Node built from the server response; the
original handle is left untouched.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional, Union
import logging

from pydantic import ValidationError as PydanticValidationError

from ..errors import ValidationError
from ..models import NodeResource, NodeUpdateProps, Offset
from ..validation import validate_text

if TYPE_CHECKING:
    from .diagram import Diagram

NODES_ENDPOINT = "/api/1/diagrams/:diagram/nodes"
NODE_ENDPOINT = "/api/1/diagrams/:diagram/nodes/:node"


@dataclass
class Node:
    """
    One node of a diagram together with its children.
    """
    diagram: "Diagram" = field(repr=False, compare=False)
    id: str
    text: str = ""
    offset: Offset = field(default_factory=Offset)
    parent_id: Optional[str] = None
    children: List["Node"] = field(default_factory=list)

    @classmethod
    def from_resource(cls, diagram: "Diagram", resource: NodeResource,
                      parent_id: Optional[str] = None) -> "Node":
        """
        Build a node and its subtree from a server resource.

        The parent id reported by the server wins; `parent_id` is only used
        when the resource does not carry one.
        """
        return cls(
            diagram=diagram,
            id=resource.id,
            text=resource.text,
            offset=resource.offset,
            parent_id=resource.parent if resource.parent is not None else parent_id,
            children=[
                cls.from_resource(diagram, child, parent_id=resource.id)
                for child in resource.children
            ]
        )

    def walk(self) -> Iterator["Node"]:
        """Yield this node and all its descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def replace_ids(self, url: str) -> str:
        """Substitute the first `:node`, then the first `:diagram` placeholder."""
        return self.diagram.replace_id(url.replace(":node", self.id, 1))

    def add_child(self, text: str, offset: Optional[Offset] = None) -> "Node":
        """
        Create a new child node under this node.

        Args:
            text: Text of the new node
            offset: Position relative to this node; the server picks one if omitted

        Returns:
            The created node, with this node as its parent

        Raises:
            TextTooLongError: If the text is too long (no request is made)
            TransportError: If the request fails
        """
        validate_text(text)

        body: Dict[str, Any] = {"parent": self.id, "text": text}
        if offset is not None:
            body["offset"] = offset.model_dump()

        resource = self.diagram.api_client.post(
            self.replace_ids(NODES_ENDPOINT),
            body=body,
            response_type=NodeResource
        )
        logging.debug(f"Created node {resource.id} under {self.id}")

        node = Node.from_resource(self.diagram, resource)
        node.parent_id = self.id
        return node

    def update(self, properties: Union[NodeUpdateProps, Dict[str, Any], None] = None,
               **changes: Any) -> "Node":
        """
        Change some properties of this node.

        Only the given fields are sent. Accepts a NodeUpdateProps, a dict or
        keyword arguments (text, offset, parent).

        The returned node keeps this node's parent_id, or takes the new
        `parent` when the update moves it. It never becomes its own parent.

        Returns:
            The node as stored by the server after the update

        Raises:
            ValidationError: If a field is unknown or invalid, or no field is
                given (no request is made)
            TextTooLongError: If the new text is too long (no request is made)
            TransportError: If the request fails
        """
        if isinstance(properties, NodeUpdateProps):
            properties = properties.model_dump(exclude_none=True)
        try:
            properties = NodeUpdateProps(**{**(properties or {}), **changes})
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid node update: {e}") from e

        if not properties.model_dump(exclude_none=True):
            raise ValidationError("Node update has no fields to change")

        if properties.text is not None:
            validate_text(properties.text)

        resource = self.diagram.api_client.post(
            self.replace_ids(NODE_ENDPOINT),
            body=properties,
            response_type=NodeResource
        )
        logging.debug(f"Updated node {self.id}")

        node = Node.from_resource(self.diagram, resource)
        node.parent_id = properties.parent if properties.parent is not None else self.parent_id
        return node

    def set_text(self, text: str) -> "Node":
        """Replace the text of this node."""
        return self.update(NodeUpdateProps(text=text))

    def move(self, offset: Offset) -> "Node":
        """Move this node to a new offset relative to its parent."""
        return self.update(NodeUpdateProps(offset=offset))

    def remove(self) -> None:
        """
        Delete this node (and its subtree) on the server.

        Raises:
            TransportError: If the request fails
        """
        self.diagram.api_client.delete(self.replace_ids(NODE_ENDPOINT))
        logging.debug(f"Removed node {self.id}")
