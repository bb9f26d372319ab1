"""The Site object, Gorgon's entry point.

A site is defined in a Python file, usually ``site.py`` at the project root::

    from gorgon import Site

    site = Site({"title": "Election results"})

    @site.setup
    def configure(config):
        config.set("layout", "templates/layout.html")
        config.add_page("index.html", template="templates/index.html")

``gorgon build`` then writes the site to ``build/`` and ``gorgon serve`` runs
the dev server.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from .build import BuildPipeline, BuildResult
from .config import Config
from .data import load_data
from .handler import RequestHandler, Response
from .helpers import Mode, ModeHelpers, Target, TemplateHelpers
from .hooks import AFTER_LOAD_DATA
from .indifferent import IndifferentDict
from .rendering import JinjaRenderer, TemplateRenderer
from .server import DEFAULT_HOST, DEFAULT_PORT, DevServerController
from .sitemap import Sitemap

SetupFunction = Callable[[Config], Any]


class Site:
    """A configurable static site.

    Attributes:
        config: Settings, data, sitemap, hooks and helpers of the site.
        renderer: Template renderer.
        pipeline: Build pipeline, also used to render pages on request.
    """

    def __init__(
        self,
        settings: Mapping[str, Any] | None = None,
        setup: SetupFunction | None = None,
        root: Path | str | None = None,
        renderer: TemplateRenderer | None = None,
    ):
        """Create a site.

        Args:
            settings: Initial settings.
            setup: Function called with the Config while configuring.
            root: Project root, defaults to the current directory.
            renderer: Template renderer, defaults to Jinja2.
        """
        self.config = Config(settings, root=Path(root) if root is not None else None)
        self.config.helpers(ModeHelpers)
        self.config.helpers(TemplateHelpers, scope="template")
        self.renderer = renderer or JinjaRenderer(self.config.root)
        self.pipeline = BuildPipeline(self.config, self.renderer)
        self._setup = setup
        self._configured = False

    @property
    def sitemap(self) -> Sitemap:
        return self.config.sitemap

    @property
    def data(self) -> IndifferentDict:
        return self.config.data

    @property
    def configured(self) -> bool:
        return self._configured

    def setup(self, fn: SetupFunction) -> SetupFunction:
        """Decorator registering the site's setup function."""
        self._setup = fn
        return fn

    def configure(self, **settings: Any) -> Site:
        """Finish configuring the site. Only the first call has any effect.

        Merges ``settings``, loads data, runs the setup function, then runs the
        after_load_data hooks again so hooks added by setup see the data.
        """
        if self._configured:
            return self
        if settings:
            self.config.update(settings)
        self.reload_data()
        if self._setup is not None:
            self._setup(self.config)
        self.config.hooks.run(AFTER_LOAD_DATA, self.config)
        self._configured = True
        return self

    def reload_data(self) -> Site:
        """Reload the files in ``data/`` and run every after_load_data hook.

        Hooks run on every reload, not only the first time.
        """
        self.config.data.update(load_data(self.config.data_dir))
        self.config.hooks.run(AFTER_LOAD_DATA, self.config)
        return self

    def build(self, silent: bool = False) -> BuildResult:
        """Build every page of the site into ``build/``."""
        self.configure(mode=Mode.BUILD, target=Target.PRODUCTION)
        return self.pipeline.run(silent=silent)

    def handle(self, method: str, path: str) -> Response:
        """Answer one request the way the dev server does."""
        return RequestHandler(self).handle(method, path)

    def serve(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> int:
        """Run the dev server until it is asked to reload or exit.

        Returns:
            The exit code for the process; RELOAD_EXIT_CODE asks the
            supervisor for a restart.
        """
        self.configure(mode=Mode.SERVER, target=Target.DEVELOPMENT)
        return DevServerController(self, host=host, port=port).run()
