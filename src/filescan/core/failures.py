"""Map OS and trash errors onto failure reasons.

Classification is best effort. Structured ``OSError`` subclasses and errno
values are used first; otherwise the OS error description (``strerror``,
which never contains the path) is searched for well-known phrases.
Anything unmatched is ``FailureReason.UNKNOWN``.
"""

from __future__ import annotations

import errno

from filescan.models.scan_result import FailedEntry, FailureReason

_PERMISSION_MARKERS = ("permission", "denied")
_LOCKED_MARKERS = ("locked", "in use")
_LOCKED_ERRNOS = frozenset({errno.EBUSY, errno.ETXTBSY})


def _mentions(message: str | None, markers: tuple[str, ...]) -> bool:
    if not message:
        return False
    lowered = message.lower()
    return any(marker in lowered for marker in markers)


def _os_error(error: BaseException) -> OSError | None:
    """Return *error* itself or the OSError it was raised from."""
    if isinstance(error, OSError):
        return error
    if isinstance(error.__cause__, OSError):
        return error.__cause__
    return None


def scan_failure_reason(error: OSError) -> FailureReason:
    """Reason for a node that could not be read during a walk."""
    if isinstance(error, PermissionError):
        return FailureReason.PERMISSION_DENIED
    return FailureReason.UNKNOWN


def classify_trash_error(error: Exception) -> tuple[FailureReason, str]:
    """Classify a trash facility failure.

    When the facility chained an ``OSError`` only that error is inspected.
    A bare facility error is matched on its own message.
    """
    message = str(error)
    os_error = _os_error(error)
    if os_error is not None:
        if isinstance(os_error, PermissionError):
            return FailureReason.PERMISSION_DENIED, message
        if os_error.errno in _LOCKED_ERRNOS:
            return FailureReason.FILE_LOCKED, message
        text = os_error.strerror
    else:
        text = message

    if _mentions(text, _PERMISSION_MARKERS):
        return FailureReason.PERMISSION_DENIED, message
    if _mentions(text, _LOCKED_MARKERS):
        return FailureReason.FILE_LOCKED, message
    return FailureReason.UNKNOWN, message


def classify_io_error(error: OSError) -> tuple[FailureReason, str]:
    """Classify a copy failure by error kind, then by its description."""
    message = str(error)
    if isinstance(error, PermissionError):
        return FailureReason.PERMISSION_DENIED, message
    if isinstance(error, FileNotFoundError):
        return FailureReason.PATH_NOT_FOUND, message
    if isinstance(error, FileExistsError):
        return FailureReason.FILE_EXISTS, message
    if error.errno in _LOCKED_ERRNOS or _mentions(error.strerror, _LOCKED_MARKERS):
        return FailureReason.FILE_LOCKED, message
    return FailureReason.UNKNOWN, message


def failed(path: str, reason: FailureReason, message: str) -> FailedEntry:
    return FailedEntry(path=path, reason=reason, error_message=message)
