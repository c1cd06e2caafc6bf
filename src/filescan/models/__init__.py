"""Filescan data models."""

from filescan.models.entry import Category, Entry
from filescan.models.scan_result import FailedEntry, FailureReason, ScanProgress, ScanResult, ScanStats
from filescan.models.operation_result import FileOperationResult, OperationType

__all__ = [
    "Category",
    "Entry",
    "FailedEntry",
    "FailureReason",
    "FileOperationResult",
    "OperationType",
    "ScanProgress",
    "ScanResult",
    "ScanStats",
]
