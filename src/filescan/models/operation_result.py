"""Batch file operation result dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from filescan.models.scan_result import FailedEntry


class OperationType(str, Enum):
    DELETE = "delete"
    COPY = "copy"


@dataclass(frozen=True, slots=True)
class FileOperationResult:
    """Result of a delete or copy batch.

    ``success_count + failed_count`` always equals the number of input paths.
    """

    operation: OperationType
    success_count: int = 0
    failed_count: int = 0
    failed_files: list[FailedEntry] = field(default_factory=list)
    duration_ms: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "operation": self.operation.value,
            "successCount": self.success_count,
            "failedCount": self.failed_count,
            "failedFiles": [f.to_dict() for f in self.failed_files],
            "durationMs": self.duration_ms,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FileOperationResult:
        return cls(
            operation=OperationType(data["operation"]),
            success_count=data["successCount"],
            failed_count=data["failedCount"],
            failed_files=[FailedEntry.from_dict(f) for f in data["failedFiles"]],
            duration_ms=data["durationMs"],
        )
