"""Site building functionality for Gorgon.

This module renders every page of the sitemap into the ``build/`` directory.

Builds happen in two phases. Digest pages (prebuilt assets and any page
declared with ``digest: True``) are built first, so that their content-hashed
paths are known by the time the remaining pages render and call asset_path.

Key classes:
- BuildPipeline: Renders pages and writes them to the output directory.
- BuildResult: What a build produced.
- BuildError: Failure while building one page.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from jinja2 import TemplateNotFound, TemplateSyntaxError

from .context import TemplateContext
from .digest import digest_path
from .errors import GorgonError
from .prebuilt import index_prebuilt
from .utils import ensure_clean_dir, write_output

if TYPE_CHECKING:
    from .config import Config
    from .rendering import TemplateRenderer
    from .sitemap import Page


class BuildError(GorgonError):
    """Error during site build with page context.

    Attributes:
        source_path: Sitemap path of the page that failed.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        source_path: str,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}")


@dataclass
class BuildResult:
    """Result of a site build operation.

    Attributes:
        pages: Pages in the order they were built.
        output_dir: Directory where the site was built.
        written: Sitemap path to the file written for it.
    """

    pages: list[Page]
    output_dir: Path
    written: dict[str, Path] = field(default_factory=dict)


def _format_error_message(exc: Exception) -> str:
    """Format an exception into a user-friendly error message.

    Args:
        exc: The exception to format.

    Returns:
        A human-readable error message.
    """
    if isinstance(exc, TemplateSyntaxError):
        return f"Template syntax error on line {exc.lineno}: {exc.message}"
    if isinstance(exc, TemplateNotFound):
        return f"Template not found: {exc.name}"
    return f"{type(exc).__name__}: {exc}"


class BuildPipeline:
    """Renders sitemap pages and writes them to the build directory.

    Attributes:
        config: Site config holding the sitemap.
        renderer: Template renderer used for template pages.
        output_dir: Directory pages are written to.
    """

    def __init__(self, config: Config, renderer: TemplateRenderer):
        self.config = config
        self.renderer = renderer
        self.output_dir = config.build_dir

    def new_context(self, page: Page | None = None) -> TemplateContext:
        return TemplateContext(self.config, self.renderer, page)

    def run(self, silent: bool = False, clean_output: bool = True) -> BuildResult:
        """Build every page of the sitemap.

        Args:
            silent: Suppress per-page progress output.
            clean_output: Whether to wipe the output directory before building.

        Returns:
            BuildResult describing the written files.
        """
        if clean_output:
            ensure_clean_dir(self.output_dir)
        index_prebuilt(self.config)
        for page in self.config.sitemap.digested():
            page.reset_digest()

        result = BuildResult(pages=[], output_dir=self.output_dir)
        sitemap = self.config.sitemap
        for phase in (sitemap.digested(), sitemap.undigested()):
            for page in phase:
                result.written[page.path] = self.build_page(page.path, silent=silent)
                result.pages.append(page)
        return result

    def build_page(self, path: str, silent: bool = False) -> Path:
        """Render one page and write it to the output directory.

        Digest pages are written under their content-hashed name, which is
        also recorded as the page's digest_path.

        Returns:
            Path of the written file.
        """
        page = self.config.sitemap[path]
        if not silent:
            print(f"Rendering {self.output_dir / path}...")
        content = self.render_page(path, self.new_context(page))
        out_path = path
        if page.digest:
            page.digest_path = digest_path(path, content)
            out_path = page.digest_path
        return write_output(self.output_dir / out_path, content)

    def render_page(self, path: str, ctx: TemplateContext) -> bytes:
        """Produce the bytes of a page without writing them.

        Raises:
            ConfigurationError: If the page lacks exactly one source attribute.
            BuildError: If rendering fails for a reason other than a Gorgon error.
        """
        page = self.config.sitemap[path]
        ctx.page = page
        kind = page.source_kind()
        try:
            if kind == "template":
                return self._render_template(page, ctx).encode("utf-8")
            if kind == "json":
                return json.dumps(page["json"], separators=(",", ":")).encode("utf-8")
            return (self.config.root / page["file"]).read_bytes()
        except GorgonError:
            raise
        except Exception as exc:
            raise BuildError(path, _format_error_message(exc), exc) from exc

    def _render_template(self, page: Page, ctx: TemplateContext) -> str:
        layout = page.layout if page.has_layout else self.config.get("layout")
        if layout:
            # The page body renders first, in its own scope, then the layout.
            return ctx.render(layout, content=lambda: ctx.render(page["template"]))
        return ctx.render(page["template"])
