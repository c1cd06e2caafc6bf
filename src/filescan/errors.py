"""Exceptions raised for whole-operation failures."""

from __future__ import annotations


class FileScanError(Exception):
    """Base class for errors that abort an entire scan or batch operation."""


class ScanError(FileScanError):
    """The scan root is empty, missing, not a directory, or unresolvable."""


class OperationError(FileScanError):
    """A batch operation cannot start, e.g. the copy target folder is invalid."""


class TrashError(Exception):
    """Moving a path to the trash failed."""
