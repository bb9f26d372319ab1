"""Content-hash output naming.

Digest pages are written under a filename that embeds the SHA-1 of their
rendered bytes, so a changed asset always gets a new URL.

Functions:
    fullextname: Every extension of a path, starting at the first dot.
    content_digest: SHA-1 hex digest of rendered bytes.
    digest_path: Cache-busted sitemap path for rendered bytes.
"""

from __future__ import annotations

import hashlib
import posixpath


def fullextname(path: str) -> str:
    """Return all extensions of ``path``, starting at the first dot of its name.

    Args:
        path: A slash separated path.

    Returns:
        The full extension including the leading dot, or an empty string when
        the file name has no dot.

    Examples:
        >>> fullextname("images/thing.gif")
        '.gif'
        >>> fullextname("page/index.html.erb")
        '.html.erb'
        >>> fullextname("index..html.erb")
        '..html.erb'
    """
    name = posixpath.basename(path)
    _, dot, rest = name.partition(".")
    return f".{rest}" if dot else ""


def content_digest(content: bytes) -> str:
    """Return the SHA-1 hex digest of ``content``."""
    return hashlib.sha1(content).hexdigest()


def digest_path(path: str, content: bytes) -> str:
    """Return the digest-tagged version of ``path`` for ``content``.

    ``css/main.min.css`` becomes ``css/main-<sha1>.min.css``.
    """
    ext = fullextname(path)
    name = posixpath.basename(path)
    base = name[: len(name) - len(ext)] if ext else name
    directory = posixpath.dirname(path)
    digest_name = f"{base}-{content_digest(content)}{ext}"
    return posixpath.join(directory, digest_name) if directory else digest_name
