"""Error types for Gorgon.

Every error raised on purpose by Gorgon derives from GorgonError so the CLI can
report it without a traceback. Resolution errors are the ones raised while a
template is being rendered; during a build they abort the build, while the dev
server turns them into a 500 response.
"""

from __future__ import annotations


class GorgonError(Exception):
    """Base class for all Gorgon errors."""


class ConfigurationError(GorgonError, ValueError):
    """The site was configured with something Gorgon cannot use."""


class NotConfiguredError(GorgonError, RuntimeError):
    """A request arrived before the site finished configuring."""


class ResolutionError(GorgonError):
    """A template referenced something that could not be resolved."""


class AssetNotFoundError(ResolutionError):
    """Raised when an asset path is not a page in the sitemap.

    Attributes:
        asset_path: The sitemap path that was requested.
    """

    def __init__(self, asset_path: str):
        self.asset_path = asset_path
        super().__init__(f"Missing asset {asset_path}")


class DigestPendingError(ResolutionError):
    """Raised when a digest page is referenced before it has been built.

    Attributes:
        asset_path: The sitemap path of the digest page.
    """

    def __init__(self, asset_path: str):
        self.asset_path = asset_path
        super().__init__(f"Missing digest for {asset_path}")


class UnresolvedNameError(ResolutionError):
    """Raised when a name is not found in any scope of a template context."""


class UnsupportedIncludeError(ResolutionError):
    """Raised when a file cannot be inlined into a template.

    Attributes:
        file_path: Path of the file that was requested.
        mime_type: Guessed MIME type, or None when unknown.
    """

    def __init__(self, file_path: str, mime_type: str | None):
        self.file_path = file_path
        self.mime_type = mime_type
        super().__init__(
            f"File '{file_path}' of type '{mime_type}' can't be included as text"
        )
