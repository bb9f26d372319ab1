"""Sitemap and page descriptors for Gorgon.

The sitemap maps every output path of the site to a Page that says how to
produce it. Pages are added by the site's setup code, by hooks and by the
prebuilt asset indexer; they are never removed.

Key classes:
- Page: One sitemap entry and its declared attributes.
- Sitemap: Ordered mapping from output path to Page.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from .errors import ConfigurationError, DigestPendingError, GorgonError
from .indifferent import IndifferentDict

# Attributes that tell the build how to produce a page, in dispatch order.
SOURCE_KINDS = ("template", "json", "file")


class Page:
    """A sitemap entry.

    Attribute values are readable with ``page["title"]`` or ``page.get("title")``
    so templates can use ``page.title``.

    Attributes:
        path: Sitemap path, relative to the output directory.
        attrs: Declared attributes (template, json, file, layout, digest, ...).
    """

    def __init__(self, path: str, attrs: Mapping[str, Any] | None = None):
        self.path = path
        self.attrs = IndifferentDict(attrs or {})
        self._digest_path: str | None = None

    def __getitem__(self, key: Any) -> Any:
        return self.attrs[key]

    def __contains__(self, key: object) -> bool:
        return key in self.attrs

    def get(self, key: Any, default: Any = None) -> Any:
        return self.attrs.get(key, default)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Page):
            return NotImplemented
        return self.path == other.path and self.attrs == other.attrs

    def __repr__(self) -> str:
        return f"Page({self.path!r}, {dict(self.attrs)!r})"

    @property
    def digest(self) -> bool:
        return self.attrs.get("digest") is True

    @property
    def has_layout(self) -> bool:
        """True when the page declares its own layout, even an empty one."""
        return "layout" in self.attrs

    @property
    def layout(self) -> str | None:
        return self.attrs.get("layout")

    def source_kind(self) -> str:
        """Return which source attribute this page is built from.

        Raises:
            ConfigurationError: Unless exactly one of template, json or file
                is set.
        """
        present = [kind for kind in SOURCE_KINDS if self.attrs.get(kind) is not None]
        if len(present) != 1:
            raise ConfigurationError(
                f"Page '{self.path}' must have exactly one of the attributes: "
                f"{', '.join(repr(kind) for kind in SOURCE_KINDS)}."
            )
        return present[0]

    def reset_digest(self) -> None:
        """Forget the digest path of a previous build."""
        self._digest_path = None

    @property
    def has_digest_path(self) -> bool:
        return self._digest_path is not None

    @property
    def digest_path(self) -> str:
        """Digest-tagged output path, available once the page has been built.

        Raises:
            DigestPendingError: If the page has not been built yet.
        """
        if self._digest_path is None:
            raise DigestPendingError(self.path)
        return self._digest_path

    @digest_path.setter
    def digest_path(self, value: str) -> None:
        if self._digest_path is not None and self._digest_path != value:
            raise GorgonError(
                f"Digest path for '{self.path}' is already set to {self._digest_path}"
            )
        self._digest_path = value


class Sitemap(Mapping[str, Page]):
    """Ordered mapping from output path to Page.

    Adding a page at an existing path replaces the old entry in place.
    """

    def __init__(self) -> None:
        self._pages: dict[str, Page] = {}

    def __getitem__(self, path: str) -> Page:
        return self._pages[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._pages)

    def __len__(self) -> int:
        return len(self._pages)

    def add(self, path: str, attrs: Mapping[str, Any] | None = None) -> Page:
        page = Page(path, attrs)
        self._pages[path] = page
        return page

    def digested(self) -> list[Page]:
        """Pages whose output name carries a content hash, in sitemap order."""
        return [page for page in self._pages.values() if page.digest]

    def undigested(self) -> list[Page]:
        """All other pages, in sitemap order."""
        return [page for page in self._pages.values() if not page.digest]
