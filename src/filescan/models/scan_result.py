"""Scan result dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from filescan.models.entry import Category, Entry


class FailureReason(str, Enum):
    """Why a single scanned node or batch item could not be processed."""

    PERMISSION_DENIED = "permission_denied"
    FILE_LOCKED = "file_locked"
    PATH_NOT_FOUND = "path_not_found"
    TARGET_NOT_FOUND = "target_not_found"
    FILE_EXISTS = "file_exists"
    SAME_FOLDER = "same_folder"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class FailedEntry:
    """Path that failed during a scan or batch operation."""

    path: str
    reason: FailureReason
    error_message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "reason": self.reason.value,
            "errorMessage": self.error_message,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FailedEntry:
        return cls(
            path=data["path"],
            reason=FailureReason(data["reason"]),
            error_message=data["errorMessage"],
        )


_CATEGORY_FIELDS = {
    Category.DOCUMENT: "document_count",
    Category.IMAGE: "image_count",
    Category.VIDEO: "video_count",
    Category.AUDIO: "audio_count",
    Category.OTHER: "other_count",
}


@dataclass(slots=True)
class ScanStats:
    """Running totals for one scan.

    Folders only bump ``total_folders``, which doubles as the folder
    category count. Files bump ``total_files``, ``total_size`` and the
    counter of their category.
    """

    total_files: int = 0
    total_folders: int = 0
    total_size: int = 0
    document_count: int = 0
    image_count: int = 0
    video_count: int = 0
    audio_count: int = 0
    other_count: int = 0

    def add_entry(self, entry: Entry) -> None:
        """Account for one scanned entry."""
        if entry.is_directory:
            self.total_folders += 1
            return

        self.total_files += 1
        self.total_size += entry.size
        attr = _CATEGORY_FIELDS.get(entry.category, "other_count")
        setattr(self, attr, getattr(self, attr) + 1)

    def category_counts(self) -> dict[Category, int]:
        """Return counts keyed by category, folders included."""
        counts = {category: getattr(self, attr) for category, attr in _CATEGORY_FIELDS.items()}
        counts[Category.FOLDER] = self.total_folders
        return counts

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalFiles": self.total_files,
            "totalFolders": self.total_folders,
            "totalSize": self.total_size,
            "documentCount": self.document_count,
            "imageCount": self.image_count,
            "videoCount": self.video_count,
            "audioCount": self.audio_count,
            "otherCount": self.other_count,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScanStats:
        return cls(
            total_files=data["totalFiles"],
            total_folders=data["totalFolders"],
            total_size=data["totalSize"],
            document_count=data["documentCount"],
            image_count=data["imageCount"],
            video_count=data["videoCount"],
            audio_count=data["audioCount"],
            other_count=data["otherCount"],
        )


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Complete result of scanning one directory tree."""

    root_path: str
    entries: list[Entry] = field(default_factory=list)
    stats: ScanStats = field(default_factory=ScanStats)
    failed_entries: list[FailedEntry] = field(default_factory=list)
    completed_at: str = ""
    duration_ms: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "rootPath": self.root_path,
            "entries": [e.to_dict() for e in self.entries],
            "stats": self.stats.to_dict(),
            "failedEntries": [f.to_dict() for f in self.failed_entries],
            "completedAt": self.completed_at,
            "durationMs": self.duration_ms,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScanResult:
        return cls(
            root_path=data["rootPath"],
            entries=[Entry.from_dict(e) for e in data["entries"]],
            stats=ScanStats.from_dict(data["stats"]),
            failed_entries=[FailedEntry.from_dict(f) for f in data["failedEntries"]],
            completed_at=data["completedAt"],
            duration_ms=data["durationMs"],
        )


@dataclass(frozen=True, slots=True)
class ScanProgress:
    """Progress notification emitted while a scan is running."""

    scanned_count: int
    current_path: str
    estimated_progress: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "scannedCount": self.scanned_count,
            "currentPath": self.current_path,
            "estimatedProgress": self.estimated_progress,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScanProgress:
        return cls(
            scanned_count=data["scannedCount"],
            current_path=data["currentPath"],
            estimated_progress=data.get("estimatedProgress"),
        )
