"""Helper function sets for Gorgon.

Helpers are plain functions grouped in a HelperSet. A set is registered on the
site Config with a scope: config helpers are callable from setup code through
``config.helper(name)``, template helpers become names inside every template.
Each function receives the context it is bound to (the Config or a
TemplateContext) as its first argument; both expose ``settings``, ``sitemap``,
``data`` and ``root``.

Key classes:
- HelperSet: Base class and ad-hoc container for helper functions.
- ModeHelpers: Build/server and production/development checks.
- TemplateHelpers: URL and asset helpers for templates.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from enum import Enum
from typing import Any

import mistune
from markupsafe import Markup

from .errors import AssetNotFoundError, DigestPendingError


class Mode(str, Enum):
    """How the site is being run."""

    BUILD = "build"
    SERVER = "server"


class Target(str, Enum):
    """Which environment the output is meant for."""

    PRODUCTION = "production"
    DEVELOPMENT = "development"


class HelperSet:
    """A named table of helper functions.

    Subclasses define helpers as public methods taking the bound context as
    their first argument::

        class Greetings(HelperSet):
            def greet(self, ctx, name):
                return f"Hello {name} from {ctx.settings['title']}"

    Plain functions can be grouped without a subclass with HelperSet.of().
    """

    def __init__(self, **functions: Callable[..., Any]):
        self._functions = functions

    @classmethod
    def of(cls, **functions: Callable[..., Any]) -> HelperSet:
        return cls(**functions)

    def functions(self) -> dict[str, Callable[..., Any]]:
        """Return the helper functions of this set by name."""
        table: dict[str, Callable[..., Any]] = {}
        for name in dir(type(self)):
            if name.startswith("_") or hasattr(HelperSet, name):
                continue
            attr = getattr(self, name)
            if callable(attr):
                table[name] = attr
        table.update(getattr(self, "_functions", {}))
        return table

    def bind(self, ctx: Any) -> dict[str, Callable[..., Any]]:
        """Return the helper functions with ``ctx`` bound as first argument."""
        return {
            name: functools.partial(fn, ctx) for name, fn in self.functions().items()
        }


def _setting(ctx: Any, key: str) -> Any:
    return ctx.settings.get(key)


class ModeHelpers(HelperSet):
    """Checks for the current mode and target, usable everywhere."""

    def is_server(self, ctx: Any) -> bool:
        return _setting(ctx, "mode") == Mode.SERVER

    def is_build(self, ctx: Any) -> bool:
        return _setting(ctx, "mode") == Mode.BUILD

    def is_production(self, ctx: Any) -> bool:
        return _setting(ctx, "target") == Target.PRODUCTION

    def is_development(self, ctx: Any) -> bool:
        return _setting(ctx, "target") == Target.DEVELOPMENT


_modes = ModeHelpers()


def _with_trailing_slash(prefix: str) -> str:
    return prefix if prefix.endswith("/") else f"{prefix}/"


class TemplateHelpers(HelperSet):
    """URL helpers available inside templates."""

    def http_prefix(self, ctx: Any) -> str:
        """Return the URL of the site root, always ending with a slash."""
        if _modes.is_server(ctx) and _modes.is_development(ctx):
            return "/"
        return _with_trailing_slash(_setting(ctx, "http_prefix") or "/")

    def asset_http_prefix(self, ctx: Any) -> str:
        """Return the URL assets are served from, defaulting to http_prefix."""
        if _modes.is_server(ctx) and _modes.is_development(ctx):
            return "/"
        return _with_trailing_slash(
            _setting(ctx, "asset_http_prefix") or self.http_prefix(ctx)
        )

    def asset_path(self, ctx: Any, *segments: Any) -> str:
        """Return the URL of a sitemap asset.

        In production the path must be in the sitemap, and digest pages are
        replaced by their digest-tagged path.

        Raises:
            AssetNotFoundError: The path is not in the sitemap (production).
            DigestPendingError: The asset is a digest page that has not been
                built yet (production).
        """
        path = "/".join(str(segment) for segment in segments)
        if _modes.is_production(ctx):
            page = ctx.sitemap.get(path)
            if page is None:
                raise AssetNotFoundError(path)
            if page.digest:
                if not page.has_digest_path:
                    raise DigestPendingError(path)
                path = page.digest_path
        return self.asset_http_prefix(ctx) + path

    def canonical_url(self, ctx: Any, *segments: Any) -> str:
        return self.http_prefix(ctx) + "/".join(str(segment) for segment in segments)

    def markdown(self, ctx: Any, text: str) -> Markup:
        """Render Markdown text to HTML."""
        return Markup(mistune.html(text or ""))
