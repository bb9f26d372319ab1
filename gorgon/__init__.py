"""Gorgon static site builder.

A site is a sitemap of pages rendered from Jinja2 templates, JSON values or
plain files, with data loaded from ``data/``. Prebuilt assets in ``prebuild/``
are published under content-hashed names so they can be cached forever.
``gorgon build`` writes the site to ``build/``; ``gorgon serve`` renders pages
on request for development.
"""

from .config import Config
from .errors import (
    AssetNotFoundError,
    ConfigurationError,
    DigestPendingError,
    GorgonError,
    NotConfiguredError,
    ResolutionError,
    UnresolvedNameError,
    UnsupportedIncludeError,
)
from .helpers import HelperSet, Mode, Target
from .site import Site

__all__ = [
    "AssetNotFoundError",
    "Config",
    "ConfigurationError",
    "DigestPendingError",
    "GorgonError",
    "HelperSet",
    "Mode",
    "NotConfiguredError",
    "ResolutionError",
    "Site",
    "Target",
    "UnresolvedNameError",
    "UnsupportedIncludeError",
    "__version__",
]
__version__ = "0.1.0"
