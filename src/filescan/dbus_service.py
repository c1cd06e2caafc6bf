"""D-Bus service for GUI communication.

D-Bus methods use PascalCase per D-Bus convention, and type signatures
like "as" and "s" are D-Bus protocol types, not Python syntax.
Results travel as JSON strings in the same camelCase shape produced by
the models' ``to_dict()``.
"""

from __future__ import annotations

import asyncio
import json
import logging

from dbus_next.aio import MessageBus
from dbus_next.service import ServiceInterface, method, signal
from dbus_next import BusType

from filescan.core.file_ops import copy_files, delete_files
from filescan.core.scanner import scan_directory
from filescan.core.walker import ScanOptions
from filescan.errors import FileScanError
from filescan.models.scan_result import ScanProgress
from filescan.settings import Settings

log = logging.getLogger(__name__)

_BUS_NAME = "io.github.filescan"
_OBJECT_PATH = "/io/github/filescan"
_INTERFACE = "io.github.filescan.Manager"


# noinspection PyPep8Naming
class FilescanDBusService(ServiceInterface):
    """D-Bus service interface for Filescan."""

    def __init__(self) -> None:
        super().__init__(_INTERFACE)

    @method()
    def Scan(self, path: "s") -> "s":  # type: ignore[override]
        """Scan a directory, returning the ScanResult as JSON."""
        options = ScanOptions.from_settings(Settings.instance())

        def progress(update: ScanProgress) -> None:
            self.ScanProgress(json.dumps(update.to_dict()))

        try:
            result = scan_directory(path, options, progress)
        except FileScanError as e:
            log.warning("Scan of %s failed: %s", path, e)
            return json.dumps({"error": str(e)})
        return json.dumps(result.to_dict())

    @method()
    def DeleteFiles(self, paths: "as") -> "s":  # type: ignore[override]
        """Move paths to the trash, returning a FileOperationResult as JSON."""
        return json.dumps(delete_files(list(paths)).to_dict())

    @method()
    def CopyFiles(self, source_paths: "as", target_folder: "s") -> "s":  # type: ignore[override]
        """Copy files into a folder, returning a FileOperationResult as JSON."""
        try:
            result = copy_files(list(source_paths), target_folder)
        except FileScanError as e:
            log.warning("Copy to %s failed: %s", target_folder, e)
            return json.dumps({"error": str(e)})
        return json.dumps(result.to_dict())

    @signal()
    def ScanProgress(self, progress_json: str) -> "s":  # type: ignore[override]
        return progress_json


async def run_service() -> None:
    """Start the D-Bus service."""
    bus = await MessageBus(bus_type=BusType.SESSION).connect()
    service = FilescanDBusService()
    bus.export(_OBJECT_PATH, service)
    await bus.request_name(_BUS_NAME)
    log.info("D-Bus service started on %s", _BUS_NAME)
    await bus.wait_for_disconnect()


def start_service() -> None:
    """Entry point to start the D-Bus service."""
    asyncio.run(run_service())
