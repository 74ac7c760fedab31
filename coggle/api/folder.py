"""Read-only folder model."""

from dataclasses import dataclass, field
from typing import List, Optional

from ..models import FolderResource


@dataclass
class Folder:
    """
    A folder grouping diagrams. Folders nest; the whole tree is built from
    one nested resource.
    """
    id: str
    name: str
    folders: List["Folder"] = field(default_factory=list)
    created_at: Optional[str] = None
    created_by: Optional[str] = None
    my_access: List[str] = field(default_factory=list)

    @classmethod
    def from_resource(cls, resource: FolderResource) -> "Folder":
        return cls(
            id=resource.id,
            name=resource.name,
            folders=[cls.from_resource(child) for child in resource.children],
            created_at=resource.created_at,
            created_by=resource.created_by,
            my_access=list(resource.my_access)
        )
