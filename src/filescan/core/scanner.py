"""Scan orchestration: validate the root, walk it, assemble the result."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from filescan.core.walker import ProgressCallback, ScanOptions, TreeWalker, notify
from filescan.errors import ScanError
from filescan.models.scan_result import ScanProgress, ScanResult
from filescan.utils import elapsed_ms, utc_now_iso

log = logging.getLogger(__name__)

COMPLETED_SENTINEL = "Completed"


def scan_directory(
    root_path: str | Path,
    options: ScanOptions | None = None,
    on_progress: ProgressCallback | None = None,
) -> ScanResult:
    """Scan a directory tree and return every file and folder below it.

    An initial notification ``(0, root_path)`` is sent before the walk and a
    final ``(len(entries), "Completed", 100.0)`` after it, in addition to
    the throttled notifications emitted by the walker.

    Args:
        root_path: Directory to scan.
        options: Depth and symlink policy. Defaults to unlimited depth,
            symlinks not followed.
        on_progress: Optional observer for ``ScanProgress`` notifications.

    Returns:
        The scan result. Nodes that could not be read are listed in
        ``failed_entries``; they never fail the scan as a whole.

    Raises:
        ScanError: If the path is empty, missing, not a directory, or
            cannot be canonicalized.
    """
    start = time.monotonic()
    root = _validate_root(root_path)

    notify(on_progress, ScanProgress(0, str(root_path)))
    log.info("Scanning %s", root)

    outcome = TreeWalker(root, options, on_progress).walk()
    duration = elapsed_ms(start, time.monotonic())

    result = ScanResult(
        root_path=str(root),
        entries=outcome.entries,
        stats=outcome.stats,
        failed_entries=outcome.failed_entries,
        completed_at=utc_now_iso(),
        duration_ms=duration,
    )

    notify(on_progress, ScanProgress(len(result.entries), COMPLETED_SENTINEL, 100.0))
    log.info(
        "Scanned %s in %d ms: %d files, %d folders, %d failures",
        result.root_path,
        duration,
        result.stats.total_files,
        result.stats.total_folders,
        len(result.failed_entries),
    )
    return result


def _validate_root(root_path: str | Path) -> Path:
    """Check the scan root and return its canonical form."""
    if not str(root_path):
        raise ScanError("Path cannot be empty")

    path = Path(root_path)
    if not path.exists():
        raise ScanError(f"Path not found: {root_path}")
    if not path.is_dir():
        raise ScanError(f"Not a directory: {root_path}")

    try:
        return path.resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise ScanError(f"Failed to canonicalize path: {e}") from e
