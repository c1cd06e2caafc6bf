"""Scanning engine and batch file operations."""

from filescan.core.file_ops import copy_files, delete_files
from filescan.core.scanner import scan_directory
from filescan.core.walker import ScanOptions

__all__ = ["ScanOptions", "copy_files", "delete_files", "scan_directory"]
