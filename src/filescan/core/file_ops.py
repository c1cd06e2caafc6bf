"""Batch delete-to-trash and copy-to-folder operations.

Each item is processed independently. A failing item is recorded in the
result's ``failed_files`` and the batch carries on with the next one.
"""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import time
from pathlib import Path
from typing import Callable, Iterable

from filescan.core.failures import classify_io_error, classify_trash_error, failed
from filescan.core.trash import move_to_trash
from filescan.errors import OperationError, TrashError
from filescan.models.operation_result import FileOperationResult, OperationType
from filescan.models.scan_result import FailedEntry, FailureReason
from filescan.utils import elapsed_ms

log = logging.getLogger(__name__)

TrashFunc = Callable[[str], object]


def delete_files(paths: Iterable[str], *, trash: TrashFunc = move_to_trash) -> FileOperationResult:
    """Move every path to the trash.

    Args:
        paths: Files or folders to delete.
        trash: Trash facility, called once per existing path. It signals
            failure by raising ``TrashError`` or ``OSError``.

    Returns:
        Success and failure counts plus one ``FailedEntry`` per failed path.
    """
    start = time.monotonic()
    success = 0
    failures: list[FailedEntry] = []

    for path in paths:
        if not os.path.lexists(path):
            failures.append(failed(path, FailureReason.PATH_NOT_FOUND, f"File not found: {path}"))
            continue

        try:
            trash(path)
        except (TrashError, OSError) as e:
            reason, message = classify_trash_error(e)
            log.info("Could not trash %s: %s", path, message)
            failures.append(failed(path, reason, message))
            continue

        success += 1

    return _finish(OperationType.DELETE, success, failures, start)


def copy_files(source_paths: Iterable[str], target_folder: str) -> FileOperationResult:
    """Copy each source file into *target_folder*, never overwriting.

    Raises:
        OperationError: If the target folder does not exist or is not a
            directory. Nothing is copied in that case.
    """
    start = time.monotonic()
    target = Path(target_folder)

    if not target.exists():
        raise OperationError(f"Target folder not found: {target_folder}")
    if not target.is_dir():
        raise OperationError(f"Target path is not a directory: {target_folder}")

    resolved_target = target.resolve()
    success = 0
    failures: list[FailedEntry] = []

    for source_path in source_paths:
        failure = _copy_one(source_path, target, resolved_target)
        if failure is None:
            success += 1
        else:
            log.info("Could not copy %s: %s", source_path, failure.error_message)
            failures.append(failure)

    return _finish(OperationType.COPY, success, failures, start)


def _copy_one(source_path: str, target: Path, resolved_target: Path) -> FailedEntry | None:
    """Copy one source, returning its failure or ``None`` on success."""
    source = Path(source_path)

    if not source.exists():
        return failed(source_path, FailureReason.PATH_NOT_FOUND, f"Source file not found: {source_path}")

    if source.name in ("", ".", ".."):
        return failed(source_path, FailureReason.UNKNOWN, "Could not determine file name")

    destination = target / source.name

    if source.parent.resolve() == resolved_target:
        return failed(source_path, FailureReason.SAME_FOLDER, "Source and target folder are the same")

    if os.path.lexists(destination):
        return failed(source_path, FailureReason.FILE_EXISTS, f"File already exists: {destination}")

    try:
        _copy_exclusive(source, destination)
    except OSError as e:
        reason, message = classify_io_error(e)
        return failed(source_path, reason, message)
    return None


def _copy_exclusive(source: Path, destination: Path) -> None:
    """Byte copy *source* to a new file at *destination*, keeping its mode."""
    with open(source, "rb") as fsrc:
        fdst = open(destination, "xb")
        try:
            with fdst:
                shutil.copyfileobj(fsrc, fdst)
            shutil.copymode(source, destination)
        except OSError:
            with contextlib.suppress(OSError):
                destination.unlink()
            raise


def _finish(
    operation: OperationType,
    success: int,
    failures: list[FailedEntry],
    start: float,
) -> FileOperationResult:
    result = FileOperationResult(
        operation=operation,
        success_count=success,
        failed_count=len(failures),
        failed_files=failures,
        duration_ms=elapsed_ms(start, time.monotonic()),
    )
    log.info(
        "%s finished: %d succeeded, %d failed in %d ms",
        operation.value.capitalize(),
        result.success_count,
        result.failed_count,
        result.duration_ms,
    )
    return result
