"""Utility functions for Gorgon.

Key functions:
    ensure_clean_dir: Ensure a directory exists and is empty.
    write_output: Write bytes to a file, creating parent directories.
    content_type_for: Content-Type header value for a path.
"""

from __future__ import annotations

import mimetypes
import shutil
from pathlib import Path

from .context import is_text_mime

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def ensure_clean_dir(path: Path) -> None:
    """Ensure a directory exists and is empty.

    If the directory exists, removes all contents. Creates the
    directory if it doesn't exist.

    Args:
        path: Directory path to clean or create.
    """
    if path.exists():
        shutil.rmtree(str(path), ignore_errors=True)
        if path.exists():
            # Fallback for stubborn directories
            for item in path.rglob("*"):
                if item.is_file():
                    item.unlink()
            for item in sorted(
                [p for p in path.rglob("*") if p.is_dir()], reverse=True
            ):
                item.rmdir()
            path.rmdir()
    path.mkdir(parents=True, exist_ok=True)


def write_output(path: Path, content: bytes) -> Path:
    """Write ``content`` to ``path``, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return path


def content_type_for(path: str) -> str:
    """Return the Content-Type header value for ``path`` based on its extension.

    Examples:
        >>> content_type_for("index.html")
        'text/html; charset=utf-8'
        >>> content_type_for("logo.png")
        'image/png'
    """
    mime_type, _ = mimetypes.guess_type(path)
    if not mime_type:
        return DEFAULT_CONTENT_TYPE
    if is_text_mime(mime_type):
        return f"{mime_type}; charset=utf-8"
    return mime_type
