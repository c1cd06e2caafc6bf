"""Tests for batch delete and copy operations."""

from __future__ import annotations

import errno
import os
import stat

import pytest

from filescan.core.failures import classify_io_error, classify_trash_error, scan_failure_reason
from filescan.core.file_ops import copy_files, delete_files
from filescan.errors import FileScanError, OperationError, TrashError
from filescan.models.operation_result import OperationType
from filescan.models.scan_result import FailureReason


def _failing_trash(message: str):
    def trash(path: str) -> None:
        raise TrashError(message)

    return trash


class TestDeleteFiles:
    def test_moves_file_to_trash(self, tmp_path, trash_home):
        victim = tmp_path / "test_delete.txt"
        victim.write_text("x")

        result = delete_files([str(victim)])

        assert result.operation == OperationType.DELETE
        assert result.success_count == 1
        assert result.failed_count == 0
        assert not victim.exists()
        assert (trash_home / "files" / "test_delete.txt").exists()

    def test_nonexistent_path(self, tmp_path):
        missing = str(tmp_path / "nonexistent" / "file.txt")
        result = delete_files([missing])

        assert result.success_count == 0
        assert result.failed_count == 1
        failure = result.failed_files[0]
        assert failure.path == missing
        assert failure.reason == FailureReason.PATH_NOT_FOUND
        assert "not found" in failure.error_message

    def test_empty_input(self):
        result = delete_files([])
        assert result.success_count == 0
        assert result.failed_count == 0
        assert result.failed_files == []

    def test_continues_after_failures(self, tmp_path, trash_home):
        keep_going = tmp_path / "second.txt"
        keep_going.write_text("x")

        result = delete_files([str(tmp_path / "first.txt"), str(keep_going), str(tmp_path / "third.txt")])

        assert result.success_count == 1
        assert result.failed_count == 2
        assert result.success_count + result.failed_count == 3
        assert not keep_going.exists()

    def test_broken_symlink_can_be_trashed(self, tmp_path, trash_home):
        link = tmp_path / "dangling"
        link.symlink_to(tmp_path / "missing")

        result = delete_files([str(link)])

        assert result.success_count == 1
        assert not os.path.lexists(link)

    @pytest.mark.parametrize(
        ("message", "reason"),
        [
            ("Permission denied: /x", FailureReason.PERMISSION_DENIED),
            ("Access is denied.", FailureReason.PERMISSION_DENIED),
            ("The file is locked by another process", FailureReason.FILE_LOCKED),
            ("file in use", FailureReason.FILE_LOCKED),
            ("something odd happened", FailureReason.UNKNOWN),
        ],
    )
    def test_trash_failure_classification(self, tmp_path, message, reason):
        victim = tmp_path / "f.txt"
        victim.write_text("x")

        result = delete_files([str(victim)], trash=_failing_trash(message))

        assert result.success_count == 0
        assert result.failed_count == 1
        assert result.failed_files[0].reason == reason
        assert result.failed_files[0].error_message == message
        assert victim.exists()

    def test_os_error_from_trash_is_captured(self, tmp_path):
        victim = tmp_path / "f.txt"
        victim.write_text("x")

        def trash(path):
            raise PermissionError(errno.EACCES, "Permission denied", path)

        result = delete_files([str(victim)], trash=trash)
        assert result.failed_files[0].reason == FailureReason.PERMISSION_DENIED

    def test_trash_called_once_per_existing_path(self, tmp_path):
        files = []
        for name in ("a.txt", "b.txt"):
            (tmp_path / name).write_text(name)
            files.append(str(tmp_path / name))
        calls = []

        result = delete_files(files + [str(tmp_path / "c.txt")], trash=calls.append)

        assert calls == files
        assert result.success_count == 2
        assert result.failed_count == 1

    def test_file_names_do_not_drive_classification(self, tmp_path, trash_home):
        trash_home.mkdir(parents=True)
        # a regular file where the trash expects its files/ folder
        (trash_home / "files").write_text("not a folder")
        names = ("locked_budget.xlsx", "permissions.txt", "file in use.doc")
        for name in names:
            (tmp_path / name).write_text("x")

        result = delete_files([str(tmp_path / name) for name in names])

        assert result.failed_count == 3
        assert [f.reason for f in result.failed_files] == [FailureReason.UNKNOWN] * 3
        assert all(str(tmp_path) in f.error_message for f in result.failed_files)

    def test_chained_busy_error_is_locked(self, tmp_path):
        victim = tmp_path / "f.txt"
        victim.write_text("x")

        def trash(path):
            try:
                raise OSError(errno.EBUSY, "Device or resource busy", path)
            except OSError as e:
                raise TrashError(f"Cannot move {path} to trash: {e}") from e

        result = delete_files([str(victim)], trash=trash)
        assert result.failed_files[0].reason == FailureReason.FILE_LOCKED
        assert result.failed_count == 1


class TestCopyFiles:
    @pytest.fixture
    def source_file(self, tmp_path):
        source_dir = tmp_path / "src"
        source_dir.mkdir()
        source = source_dir / "source.txt"
        source.write_text("test content")
        return source

    @pytest.fixture
    def target_dir(self, tmp_path):
        target = tmp_path / "target"
        target.mkdir()
        return target

    def test_copies_content(self, source_file, target_dir):
        result = copy_files([str(source_file)], str(target_dir))

        assert result.operation == OperationType.COPY
        assert result.success_count == 1
        assert result.failed_count == 0
        assert (target_dir / "source.txt").read_text() == "test content"
        assert source_file.exists()

    def test_preserves_mode(self, source_file, target_dir):
        source_file.chmod(0o640)
        copy_files([str(source_file)], str(target_dir))
        copied_mode = stat.S_IMODE((target_dir / "source.txt").stat().st_mode)
        assert copied_mode == 0o640

    def test_nonexistent_target(self, source_file, tmp_path):
        with pytest.raises(OperationError, match="Target folder not found"):
            copy_files([str(source_file)], str(tmp_path / "nonexistent"))

    def test_target_is_a_file(self, source_file, tmp_path):
        not_a_dir = tmp_path / "plain.txt"
        not_a_dir.write_text("x")
        with pytest.raises(OperationError, match="not a directory"):
            copy_files([str(source_file)], str(not_a_dir))

    def test_target_errors_are_file_scan_errors(self, tmp_path):
        with pytest.raises(FileScanError):
            copy_files([], str(tmp_path / "nonexistent"))

    def test_nonexistent_source(self, target_dir, tmp_path):
        result = copy_files([str(tmp_path / "nonexistent.txt")], str(target_dir))

        assert result.success_count == 0
        assert result.failed_count == 1
        assert result.failed_files[0].reason == FailureReason.PATH_NOT_FOUND

    def test_same_folder(self, source_file):
        result = copy_files([str(source_file)], str(source_file.parent))

        assert result.success_count == 0
        assert result.failed_count == 1
        assert result.failed_files[0].reason == FailureReason.SAME_FOLDER

    def test_same_folder_through_alias(self, source_file, tmp_path):
        alias = tmp_path / "alias"
        alias.symlink_to(source_file.parent)

        result = copy_files([str(source_file)], str(alias))
        assert result.failed_files[0].reason == FailureReason.SAME_FOLDER

    def test_existing_destination_untouched(self, source_file, target_dir):
        existing = target_dir / "source.txt"
        existing.write_text("existing content")

        result = copy_files([str(source_file)], str(target_dir))

        assert result.success_count == 0
        assert result.failed_files[0].reason == FailureReason.FILE_EXISTS
        assert existing.read_text() == "existing content"

    def test_duplicate_names_in_one_batch(self, source_file, target_dir, tmp_path):
        other_dir = tmp_path / "other"
        other_dir.mkdir()
        twin = other_dir / "source.txt"
        twin.write_text("twin")

        result = copy_files([str(source_file), str(twin)], str(target_dir))

        assert result.success_count == 1
        assert result.failed_count == 1
        assert result.failed_files[0].path == str(twin)
        assert result.failed_files[0].reason == FailureReason.FILE_EXISTS
        assert (target_dir / "source.txt").read_text() == "test content"

    def test_path_without_file_name(self, target_dir):
        result = copy_files(["/"], str(target_dir))
        assert result.failed_files[0].reason == FailureReason.UNKNOWN
        assert "file name" in result.failed_files[0].error_message

    def test_parent_reference_has_no_file_name(self, source_file, target_dir):
        result = copy_files([str(source_file.parent / "..")], str(target_dir))

        assert result.failed_count == 1
        assert result.failed_files[0].reason == FailureReason.UNKNOWN
        assert "file name" in result.failed_files[0].error_message
        assert list(target_dir.iterdir()) == []

    def test_directory_source_fails_without_leftovers(self, tmp_path, target_dir):
        folder = tmp_path / "folder"
        folder.mkdir()

        result = copy_files([str(folder)], str(target_dir))

        assert result.failed_count == 1
        assert result.failed_files[0].reason == FailureReason.UNKNOWN
        assert not (target_dir / "folder").exists()

    def test_empty_input(self, target_dir):
        result = copy_files([], str(target_dir))
        assert result.success_count == 0
        assert result.failed_count == 0

    def test_counts_cover_every_input(self, source_file, target_dir, tmp_path):
        sources = [str(source_file), str(tmp_path / "missing.txt"), str(source_file)]
        result = copy_files(sources, str(target_dir))

        assert result.success_count + result.failed_count == len(sources)
        assert [f.reason for f in result.failed_files] == [
            FailureReason.PATH_NOT_FOUND,
            FailureReason.FILE_EXISTS,
        ]


class TestClassification:
    def test_io_permission_denied(self):
        reason, _ = classify_io_error(OSError(errno.EACCES, "Access denied"))
        assert reason == FailureReason.PERMISSION_DENIED

    def test_io_not_found(self):
        reason, _ = classify_io_error(OSError(errno.ENOENT, "File not found"))
        assert reason == FailureReason.PATH_NOT_FOUND

    def test_io_exists(self):
        reason, _ = classify_io_error(OSError(errno.EEXIST, "File exists"))
        assert reason == FailureReason.FILE_EXISTS

    def test_io_locked_by_text(self):
        reason, message = classify_io_error(OSError(errno.EIO, "region is locked"))
        assert reason == FailureReason.FILE_LOCKED
        assert "locked" in message

    def test_io_unknown(self):
        reason, _ = classify_io_error(OSError(errno.ENOSPC, "No space left on device"))
        assert reason == FailureReason.UNKNOWN

    def test_io_text_ignores_path(self):
        error = OSError(errno.ENOSPC, "No space left on device", "/backup/locked in use.txt")
        reason, message = classify_io_error(error)
        assert reason == FailureReason.UNKNOWN
        assert "locked in use.txt" in message

    def test_io_busy_is_locked(self):
        reason, _ = classify_io_error(OSError(errno.EBUSY, "Device or resource busy"))
        assert reason == FailureReason.FILE_LOCKED

    def test_trash_uses_chained_error_not_message(self):
        error = TrashError("Cannot prepare trash for /home/u/permission_denied_locked.txt")
        error.__cause__ = OSError(errno.ENOTDIR, "Not a directory", "/trash/files")
        reason, _ = classify_trash_error(error)
        assert reason == FailureReason.UNKNOWN

    def test_trash_text_is_case_insensitive(self):
        reason, _ = classify_trash_error(TrashError("PERMISSION problem"))
        assert reason == FailureReason.PERMISSION_DENIED

    def test_scan_reason(self):
        assert scan_failure_reason(PermissionError(errno.EACCES, "no")) == FailureReason.PERMISSION_DENIED
        assert scan_failure_reason(OSError(errno.EIO, "io")) == FailureReason.UNKNOWN
