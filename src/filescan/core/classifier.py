"""File type classification based on extension."""

from __future__ import annotations

from pathlib import PurePath

from filescan.models.entry import Category

_EXTENSION_TABLE: dict[Category, frozenset[str]] = {
    Category.DOCUMENT: frozenset({
        "pdf", "doc", "docx", "txt", "xls", "xlsx", "ppt", "pptx", "odt",
        "ods", "odp", "rtf", "csv", "md", "json", "xml", "html", "htm",
    }),
    Category.IMAGE: frozenset({
        "jpg", "jpeg", "png", "gif", "bmp", "svg", "webp", "ico", "tiff",
        "tif", "raw", "heic", "heif",
    }),
    Category.VIDEO: frozenset({
        "mp4", "avi", "mkv", "mov", "wmv", "flv", "webm", "m4v", "mpeg",
        "mpg", "3gp", "ts",
    }),
    Category.AUDIO: frozenset({
        "mp3", "wav", "flac", "aac", "ogg", "m4a", "wma", "aiff", "alac", "opus",
    }),
}

_LOOKUP: dict[str, Category] = {
    ext: category for category, extensions in _EXTENSION_TABLE.items() for ext in extensions
}


def classify(extension: str) -> Category:
    """Map an extension (without the dot, any case) to its category.

    Unknown extensions, including the empty string, are ``Category.OTHER``.
    """
    return _LOOKUP.get(extension.lower(), Category.OTHER)


def get_extension(name: str) -> str:
    """Return the lowercase final extension of a file name, without the dot.

    ``archive.tar.gz`` gives ``gz``, ``README`` gives ``""`` and a dotfile
    such as ``.bashrc`` is treated as having the extension ``bashrc``.
    """
    if name.startswith(".") and name.count(".") == 1 and len(name) > 1:
        return name[1:].lower()
    return PurePath(name).suffix[1:].lower()
