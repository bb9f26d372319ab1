"""Prebuilt asset indexing.

Files in the project's ``prebuild/`` directory are copied through to the
output as digest pages. Files whose name starts with an underscore are
partials meant for inclusion and are skipped, as are hidden files.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import Config
    from .sitemap import Page


def is_partial(name: str) -> bool:
    return name.startswith("_")


def index_prebuilt(config: Config) -> list[Page]:
    """Register every prebuilt asset as a digest page.

    Args:
        config: Site config whose sitemap receives the pages.

    Returns:
        The pages that were added, in path order.
    """
    prebuild_dir = config.prebuild_dir
    if not prebuild_dir.is_dir():
        return []
    pages = []
    for path in sorted(prebuild_dir.rglob("*")):
        if not path.is_file() or is_partial(path.name) or path.name.startswith("."):
            continue
        rel = path.relative_to(prebuild_dir).as_posix()
        source = path.relative_to(config.root).as_posix()
        config.add_page(rel, file=source, digest=True)
        pages.append(config.sitemap[rel])
    return pages
