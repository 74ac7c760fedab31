"""
Wire models for the Coggle REST API.

These mirror the JSON documents exchanged with the server. The server names
its primary key `_id`; every model exposes it as `id` and writes it back as
`_id` when dumped with `by_alias=True`.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

INT32_MIN = -2**31
INT32_MAX = 2**31 - 1


class Offset(BaseModel):
    """Integer placement of a node relative to its parent."""

    model_config = ConfigDict(frozen=True)

    x: int = Field(0, ge=INT32_MIN, le=INT32_MAX, description="Horizontal offset")
    y: int = Field(0, ge=INT32_MIN, le=INT32_MAX, description="Vertical offset")


class DiagramResource(BaseModel):
    """A diagram as returned by the diagram listing and creation endpoints."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(
        ...,
        alias="_id",
        description="Server-assigned diagram id"
    )

    title: str = Field(
        "",
        description="Diagram title"
    )

    timestamp: Optional[str] = Field(
        None,
        description="Creation time reported by the server"
    )

    modified: Optional[str] = Field(
        None,
        description="Last modification time reported by the server"
    )

    owner: Optional[str] = Field(
        None,
        description="Id of the owning user"
    )

    my_access: List[str] = Field(
        default_factory=list,
        alias="myAccess",
        description="Access rights the token holder has on this diagram"
    )

    folder: Optional[str] = Field(
        None,
        description="Id of the folder containing the diagram"
    )

    @field_validator("my_access", mode="before")
    @classmethod
    def null_access_as_empty(cls, value):
        return [] if value is None else value


class NodeResource(BaseModel):
    """
    A node with its full subtree.

    The nodes endpoint returns the root node(s) of a diagram with every
    descendant nested under `children`.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(..., alias="_id", description="Server-assigned node id")
    text: str = Field("", description="Node text")
    offset: Offset = Field(default_factory=Offset, description="Offset from the parent node")
    parent: Optional[str] = Field(None, description="Id of the parent node, absent for roots")
    children: List["NodeResource"] = Field(default_factory=list, description="Nested child nodes")

    @field_validator("children", mode="before")
    @classmethod
    def null_children_as_empty(cls, value):
        # leaf nodes may carry children: null
        return [] if value is None else value


class NodeUpdateProps(BaseModel):
    """
    Fields to change on an existing node.

    Only fields that are set are sent; omitted fields stay unchanged on
    the server.
    """

    model_config = ConfigDict(extra="forbid")

    text: Optional[str] = None
    offset: Optional[Offset] = None
    parent: Optional[str] = None


class FolderResource(BaseModel):
    """A folder with its nested sub-folders."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(..., alias="_id", description="Server-assigned folder id")
    name: str = Field("", description="Folder name")
    children: List["FolderResource"] = Field(default_factory=list, description="Nested folders")
    created_at: Optional[str] = Field(None, description="Creation time")
    created_by: Optional[str] = Field(None, description="Id of the creating user")
    my_access: List[str] = Field(default_factory=list, description="Access rights of the token holder")

    @field_validator("children", "my_access", mode="before")
    @classmethod
    def null_lists_as_empty(cls, value):
        return [] if value is None else value


# Enable forward references for self-referencing models
NodeResource.model_rebuild()
FolderResource.model_rebuild()
