"""Depth-first directory traversal with throttled progress reporting."""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Callable

from filescan.core.entry_builder import build_entry
from filescan.core.failures import failed, scan_failure_reason
from filescan.models.entry import Entry
from filescan.models.scan_result import FailedEntry, ScanProgress, ScanStats

if TYPE_CHECKING:
    from filescan.settings import Settings

log = logging.getLogger(__name__)

ProgressCallback = Callable[[ScanProgress], None]

# Minimum delay between two progress notifications (seconds).
PROGRESS_INTERVAL = 0.1


@dataclass(frozen=True, slots=True)
class ScanOptions:
    """Traversal policy for one scan.

    ``max_depth`` counts the root as depth 0 and is inclusive, so
    ``max_depth=1`` yields only the direct children of the root.
    ``None`` means unlimited.
    """

    max_depth: int | None = None
    follow_symlinks: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> ScanOptions:
        """Build options from the ``scan.*`` settings keys."""
        max_depth = settings.get("scan.max_depth")
        return cls(
            max_depth=int(max_depth) if max_depth is not None else None,
            follow_symlinks=bool(settings.get("scan.follow_symlinks", False)),
        )


@dataclass(slots=True)
class WalkOutcome:
    """Everything collected by one walk."""

    entries: list[Entry] = field(default_factory=list)
    stats: ScanStats = field(default_factory=ScanStats)
    failed_entries: list[FailedEntry] = field(default_factory=list)


def notify(on_progress: ProgressCallback | None, progress: ScanProgress) -> None:
    """Deliver a progress notification, swallowing observer errors."""
    if on_progress is None:
        return
    try:
        on_progress(progress)
    except Exception:
        log.debug("Progress observer raised, ignoring", exc_info=True)


class TreeWalker:
    """Walks one directory tree and builds an entry per node.

    The walk is pre-order depth first, children sorted by name. The root
    itself is never reported. A node whose metadata cannot be read, or a
    directory that cannot be listed, is recorded as a failure and the
    walk carries on.
    """

    def __init__(
        self,
        root: Path,
        options: ScanOptions | None = None,
        on_progress: ProgressCallback | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        interval: float = PROGRESS_INTERVAL,
    ) -> None:
        self.root = root
        self.options = options or ScanOptions()
        self._on_progress = on_progress
        self._clock = clock
        self._interval = interval
        self._next_emit = 0.0
        self._scanned = 0

    def walk(self) -> WalkOutcome:
        outcome = WalkOutcome()
        self._scanned = 0
        self._next_emit = self._clock() + self._interval

        stack: list[tuple[Path, int]] = []
        if self._within_depth(1):
            stack.extend(reversed(self._children(self.root, 1, outcome)))

        while stack:
            path, depth = stack.pop()
            self._maybe_emit(path)

            try:
                entry = build_entry(path, self.root, follow_symlinks=self.options.follow_symlinks)
            except OSError as e:
                self._record_failure(path, e, outcome)
                continue

            outcome.stats.add_entry(entry)
            outcome.entries.append(entry)
            self._scanned += 1

            if entry.is_directory and self._within_depth(depth + 1):
                stack.extend(reversed(self._children(path, depth + 1, outcome)))

        log.debug(
            "Walked %s: %d entries, %d failures",
            self.root,
            len(outcome.entries),
            len(outcome.failed_entries),
        )
        return outcome

    def _within_depth(self, depth: int) -> bool:
        max_depth = self.options.max_depth
        return max_depth is None or depth <= max_depth

    def _children(self, directory: Path, depth: int, outcome: WalkOutcome) -> list[tuple[Path, int]]:
        """List *directory*, recording a failure if it cannot be read."""
        try:
            with os.scandir(directory) as it:
                names = sorted(entry.name for entry in it)
        except OSError as e:
            self._record_failure(directory, e, outcome)
            return []
        return [(directory / name, depth) for name in names]

    def _record_failure(self, path: Path, error: OSError, outcome: WalkOutcome) -> None:
        log.debug("Cannot access: %s (%s)", path, error)
        outcome.failed_entries.append(failed(str(path), scan_failure_reason(error), str(error)))

    def _maybe_emit(self, current: Path) -> None:
        if self._on_progress is None:
            return
        now = self._clock()
        if now < self._next_emit:
            return
        notify(self._on_progress, ScanProgress(self._scanned, str(current)))
        # Fixed grid; resync only once a full interval behind.
        self._next_emit += self._interval
        if self._next_emit <= now:
            self._next_emit = now + self._interval
