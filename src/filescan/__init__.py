"""Filescan — directory scanning and batch file operations."""

__version__ = "0.1.0"
