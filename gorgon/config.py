"""Site configuration for Gorgon.

Config is the one object threaded through every part of a site: it holds the
settings, the data bags, the sitemap, the hooks and the registered helpers.
Its methods form the small DSL used by a site's setup function::

    def setup(config):
        config.set("layout", "layout.html")
        config.add_page("index.html", template="index.html")

Every DSL method returns the Config so calls can be chained.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from .errors import ConfigurationError, UnresolvedNameError
from .helpers import HelperSet
from .hooks import AFTER_LOAD_DATA, HookCallback, HookRegistry
from .indifferent import IndifferentDict
from .sitemap import Sitemap

BUILD_DIR = "build"
PREBUILT_DIR = "prebuild"
DATA_DIR = "data"

HELPER_SCOPES = ("config", "template")


class Config:
    """Settings, data, sitemap, hooks and helpers of one site.

    Attributes:
        root: Project root; the data, prebuild and build directories live here.
        settings: Site wide settings.
        data: Data bags loaded from ``data/`` or added with add_data.
        sitemap: Output path to Page mapping.
        hooks: Lifecycle callbacks.
        template_helpers: Helper sets bound into every template context.
    """

    def __init__(self, settings: Mapping[str, Any] | None = None, root: Path | None = None):
        self.root = Path(root) if root is not None else Path.cwd()
        self.settings = IndifferentDict(settings or {})
        self.data = IndifferentDict()
        self.sitemap = Sitemap()
        self.hooks = HookRegistry()
        self.template_helpers: list[HelperSet] = []
        self._config_helpers: dict[str, Callable[..., Any]] = {}

    @property
    def data_dir(self) -> Path:
        return self.root / DATA_DIR

    @property
    def prebuild_dir(self) -> Path:
        return self.root / PREBUILT_DIR

    @property
    def build_dir(self) -> Path:
        return self.root / BUILD_DIR

    def __getitem__(self, key: Any) -> Any:
        return self.settings[key]

    def __contains__(self, key: object) -> bool:
        return key in self.settings

    def get(self, key: Any, default: Any = None) -> Any:
        return self.settings.get(key, default)

    def update(self, *args: Any, **kwargs: Any) -> Config:
        self.settings.update(*args, **kwargs)
        return self

    def add_page(self, path: str, attrs: Mapping[str, Any] | None = None, **kwargs: Any) -> Config:
        """Add a page to the sitemap, replacing any page at the same path."""
        merged = dict(attrs or {})
        merged.update(kwargs)
        self.sitemap.add(path, merged)
        return self

    def add_data(self, key: Any, value: Any) -> Config:
        """Add or replace a data bag."""
        self.data[key] = value
        return self

    def set(self, key: Any, value: Any) -> Config:
        """Set a site wide setting."""
        self.settings[key] = value
        return self

    def set_default(self, key: Any, value: Any) -> Config:
        """Set a site wide setting unless it is already set."""
        if key not in self.settings:
            self.set(key, value)
        return self

    def hook(self, name: Any, callback: HookCallback | None = None):
        """Add a callback to the hook ``name``.

        Without a callback, returns a decorator that registers the decorated
        function and returns it unchanged.
        """
        if callback is None:
            def decorator(fn: HookCallback) -> HookCallback:
                self.hooks.add(name, fn)
                return fn

            return decorator
        self.hooks.add(name, callback)
        return self

    def after_load_data(self, callback: HookCallback | None = None):
        """Add a callback that runs every time data is loaded or reloaded."""
        return self.hook(AFTER_LOAD_DATA, callback)

    def helpers(self, *helper_sets: Any, scope: str | None = None) -> Config:
        """Register helper sets.

        Args:
            *helper_sets: HelperSet instances or subclasses.
            scope: "config" to make them callable through helper(),
                "template" to expose them in templates, None for both.

        Raises:
            ConfigurationError: If an item is not a helper set or the scope is
                unknown.
        """
        if scope is not None and scope not in HELPER_SCOPES:
            raise ConfigurationError(
                f"Unknown helper scope '{scope}', expected one of {HELPER_SCOPES}"
            )
        new_sets: list[HelperSet] = []
        for item in helper_sets:
            if isinstance(item, type) and issubclass(item, HelperSet):
                item = item()
            if not isinstance(item, HelperSet):
                raise ConfigurationError(
                    f"Helpers must be HelperSet instances or subclasses, got {item!r}"
                )
            new_sets.append(item)

        for helper_set in new_sets:
            if scope in (None, "config"):
                self._config_helpers.update(helper_set.bind(self))
            if scope in (None, "template"):
                self.template_helpers.append(helper_set)
        return self

    def helper(self, name: str) -> Callable[..., Any]:
        """Return the config helper ``name`` bound to this config.

        Raises:
            UnresolvedNameError: If no config helper has that name.
        """
        try:
            return self._config_helpers[name]
        except KeyError:
            raise UnresolvedNameError(f"No config helper named '{name}'") from None
