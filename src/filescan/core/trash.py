"""Move files to the user's trash (freedesktop.org Trash specification).

Trashed items land in ``$XDG_DATA_HOME/Trash/files`` with a matching
``.trashinfo`` record in ``$XDG_DATA_HOME/Trash/info`` so that desktop
file managers can list and restore them.
"""

from __future__ import annotations

import errno
import logging
import os
import shutil
from datetime import datetime
from pathlib import Path
from urllib.parse import quote

from filescan.errors import TrashError
from filescan.utils import xdg_data_home

log = logging.getLogger(__name__)

_INFO_SUFFIX = ".trashinfo"


def trash_dir() -> Path:
    """Return the home trash directory."""
    return xdg_data_home() / "Trash"


def move_to_trash(path: str | Path) -> Path:
    """Move *path* into the home trash and return its new location.

    Raises:
        TrashError: If the trash cannot be prepared or the move fails.
            The message carries the underlying OS error text.
    """
    source = Path(os.path.abspath(path))
    files_dir = trash_dir() / "files"
    info_dir = trash_dir() / "info"

    try:
        files_dir.mkdir(parents=True, exist_ok=True, mode=0o700)
        info_dir.mkdir(parents=True, exist_ok=True, mode=0o700)
        name, info_path = _reserve_name(source, files_dir, info_dir)
    except OSError as e:
        raise TrashError(f"Cannot prepare trash for {source}: {e}") from e

    destination = files_dir / name
    try:
        _move(source, destination)
    except OSError as e:
        info_path.unlink(missing_ok=True)
        raise TrashError(f"Cannot move {source} to trash: {e}") from e

    log.debug("Trashed %s -> %s", source, destination)
    return destination


def _reserve_name(source: Path, files_dir: Path, info_dir: Path) -> tuple[str, Path]:
    """Pick a free name in the trash and claim it by creating its info file."""
    base = source.name
    counter = 1
    while True:
        name = base if counter == 1 else f"{base}.{counter}"
        info_path = info_dir / f"{name}{_INFO_SUFFIX}"
        if not os.path.lexists(files_dir / name):
            try:
                with open(info_path, "x", encoding="utf-8") as f:
                    f.write(_trash_info(source))
                return name, info_path
            except FileExistsError:
                pass
        counter += 1


def _trash_info(source: Path) -> str:
    deleted_at = datetime.now().strftime("%Y-%m-%dT%H:%M:%S")
    return f"[Trash Info]\nPath={quote(str(source))}\nDeletionDate={deleted_at}\n"


def _move(source: Path, destination: Path) -> None:
    try:
        os.rename(source, destination)
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise
        shutil.move(str(source), str(destination))
