"""Scanned entry dataclass and file categories."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Category(str, Enum):
    """Coarse file-type classification."""

    DOCUMENT = "document"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    FOLDER = "folder"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class Entry:
    """Single file or folder discovered during a scan.

    ``path`` is absolute and unique within one scan. ``depth`` counts the
    path components below the canonical scan root, so direct children of
    the root have depth 1.
    """

    path: str
    name: str
    is_directory: bool
    size: int
    modified_at: str
    category: Category
    extension: str
    depth: int
    parent_path: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "name": self.name,
            "isDirectory": self.is_directory,
            "size": self.size,
            "modifiedAt": self.modified_at,
            "category": self.category.value,
            "extension": self.extension,
            "depth": self.depth,
            "parentPath": self.parent_path,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Entry:
        return cls(
            path=data["path"],
            name=data["name"],
            is_directory=data["isDirectory"],
            size=data["size"],
            modified_at=data["modifiedAt"],
            category=Category(data["category"]),
            extension=data["extension"],
            depth=data["depth"],
            parent_path=data["parentPath"],
        )
