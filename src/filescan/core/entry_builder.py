"""Build normalized entries from filesystem nodes."""

from __future__ import annotations

import os
import stat
from datetime import datetime, timezone
from pathlib import Path

from filescan.core.classifier import classify, get_extension
from filescan.models.entry import Category, Entry
from filescan.utils import utc_now_iso


def build_entry(path: Path, root: Path, *, follow_symlinks: bool = False) -> Entry:
    """Read the metadata of *path* and return its entry.

    *root* must be the canonical scan root; depth and parent are derived
    from it. Raises ``OSError`` when the metadata cannot be read.
    """
    st = os.stat(path) if follow_symlinks else os.lstat(path)
    is_directory = stat.S_ISDIR(st.st_mode)
    name = path.name

    if is_directory:
        extension = ""
        category = Category.FOLDER
    else:
        extension = get_extension(name)
        category = classify(extension)

    return Entry(
        path=str(path),
        name=name,
        is_directory=is_directory,
        size=0 if is_directory else st.st_size,
        modified_at=_modified_at(st),
        category=category,
        extension=extension,
        depth=relative_depth(path, root),
        parent_path=str(path.parent),
    )


def relative_depth(path: Path, root: Path) -> int:
    """Number of components of *path* below *root*, or 0 if not under it."""
    try:
        return len(path.relative_to(root).parts)
    except ValueError:
        return 0


def _modified_at(st: os.stat_result) -> str:
    try:
        return datetime.fromtimestamp(st.st_mtime, tz=timezone.utc).isoformat()
    except (OverflowError, OSError, ValueError):
        return utc_now_iso()
