from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .utils import UNLIMITED_BYTES, determine_file_type, format_size, parse_timestamp


@dataclass
class FileItem:
    id: str
    name: str
    type: str
    owner_id: Optional[str]
    parent_id: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    size: Optional[str] = None
    size_bytes: Optional[int] = None
    last_modified: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
    is_favorite: bool = False
    is_shared: bool = False
    is_recent: Optional[bool] = None

    @property
    def is_folder(self) -> bool:
        return self.type == "folder"

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "FileItem":
        owner = data.get("owner") or {}
        parent = data.get("parent") or {}
        is_dir = bool(data.get("isDirectory"))
        size_bytes = data.get("size")
        parent_id = parent.get("id")
        return cls(
            id=str(data["id"]),
            name=data.get("filename") or "",
            type=determine_file_type(data.get("contentType"), data.get("filename") or ""),
            owner_id=str(owner["id"]) if owner.get("id") is not None else None,
            parent_id=str(parent_id) if parent_id is not None else None,
            size=None if is_dir or size_bytes is None else format_size(int(size_bytes)),
            size_bytes=int(size_bytes) if size_bytes is not None else None,
            last_modified=parse_timestamp(data.get("lastModified")),
            created_at=parse_timestamp(data.get("createdAt")),
            updated_at=parse_timestamp(data.get("updatedAt")),
            deleted_at=parse_timestamp(data.get("deletedAt")),
            is_favorite=bool(data.get("isFavorite")),
            is_shared=bool(data.get("isShared")),
            is_recent=data.get("isRecent"),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for key, value in self.__dict__.items():
            out[key] = value.isoformat() if isinstance(value, datetime) else value
        return out


@dataclass
class BreadcrumbItem:
    name: str
    id: Optional[str] = None
    label_key: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    path: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "BreadcrumbItem":
        crumb_id = data.get("id")
        return cls(
            name=data.get("name") or "",
            id=str(crumb_id) if crumb_id is not None else None,
            label_key=data.get("labelKey"),
            icon=data.get("icon"),
            color=data.get("color"),
            path=data.get("path"),
        )


@dataclass
class FileIndex:
    files: List[FileItem] = field(default_factory=list)
    parent_id: Optional[str] = None
    breadcrumbs: List[BreadcrumbItem] = field(default_factory=list)


@dataclass
class Quota:
    total_bytes: int
    used_bytes: int

    @property
    def free_bytes(self) -> int:
        return max(self.total_bytes - self.used_bytes, 0)

    @property
    def used_percent(self) -> float:
        if self.total_bytes <= 0:
            return 0.0
        return (self.used_bytes / self.total_bytes) * 100.0

    @property
    def unlimited(self) -> bool:
        return self.total_bytes >= UNLIMITED_BYTES
