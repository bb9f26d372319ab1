"""Template contexts for Gorgon.

A TemplateContext is created for every page that is built and for every page
served by the dev server. Templates see three scopes, searched in order:

1. the context itself: ``page``, ``data``, ``sitemap``, ``config``,
   ``render``, ``include_file``, ``content`` and the template helpers;
2. the locals passed to the innermost render call;
3. the site settings.

A name found in none of them is an error rather than an empty string.

Key classes:
- ScopeChain: Ordered, named scopes with explicit lookup.
- TemplateContext: Render entry point bound to one page.
"""

from __future__ import annotations

import base64
import mimetypes
from collections.abc import Callable, Iterator, Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any, Union

from markupsafe import Markup

from .errors import UnresolvedNameError, UnsupportedIncludeError
from .indifferent import IndifferentDict

if TYPE_CHECKING:
    from .config import Config
    from .rendering import TemplateRenderer
    from .sitemap import Page, Sitemap

Content = Union[str, Callable[[], str], None]

_TEXT_MIME_TYPES = {
    "application/json",
    "application/javascript",
    "application/xml",
}


def is_text_mime(mime_type: str | None) -> bool:
    """Return True for MIME types whose content can be inlined as text."""
    if not mime_type:
        return False
    return (
        mime_type.startswith("text/")
        or mime_type in _TEXT_MIME_TYPES
        or mime_type.endswith(("+xml", "+json"))
    )


class ScopeChain(Mapping[str, Any]):
    """Named scopes searched in order; the first scope holding a name wins.

    Attributes:
        scopes: (label, mapping) pairs, innermost first.
    """

    def __init__(self, scopes: Sequence[tuple[str, Mapping[str, Any]]]):
        self.scopes = list(scopes)

    def resolve(self, name: str) -> Any:
        """Return the value of ``name`` from the first scope that has it.

        Raises:
            UnresolvedNameError: If no scope has the name.
        """
        for _label, scope in self.scopes:
            if name in scope:
                return scope[name]
        labels = ", ".join(label for label, _scope in self.scopes)
        raise UnresolvedNameError(f"'{name}' is not defined in any scope ({labels})")

    def __getitem__(self, name: str) -> Any:
        for _label, scope in self.scopes:
            if name in scope:
                return scope[name]
        raise KeyError(name)

    def __contains__(self, name: object) -> bool:
        return any(name in scope for _label, scope in self.scopes)

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for _label, scope in self.scopes:
            for name in scope:
                if name not in seen:
                    seen.add(name)
                    yield name

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def flatten(self) -> dict[str, Any]:
        """Return a plain dict of every visible name and its resolved value."""
        flat: dict[str, Any] = {}
        for _label, scope in reversed(self.scopes):
            flat.update(scope)
        return flat


class TemplateContext:
    """Renders templates for one page.

    Attributes:
        config: The site Config (shared).
        page: The page being rendered, if any.
    """

    def __init__(self, config: Config, renderer: TemplateRenderer, page: Page | None = None):
        self.config = config
        self.page = page
        self._renderer = renderer
        self._locals: list[IndifferentDict] = []
        self._helpers: dict[str, Callable[..., Any]] = {}
        for helper_set in config.template_helpers:
            self._helpers.update(helper_set.bind(self))

    @property
    def settings(self) -> IndifferentDict:
        return self.config.settings

    @property
    def data(self) -> IndifferentDict:
        return self.config.data

    @property
    def sitemap(self) -> Sitemap:
        return self.config.sitemap

    @property
    def root(self) -> Path:
        return self.config.root

    @property
    def locals(self) -> IndifferentDict:
        """The innermost locals scope."""
        return self._locals[-1] if self._locals else IndifferentDict()

    def helper(self, name: str) -> Callable[..., Any]:
        try:
            return self._helpers[name]
        except KeyError:
            raise UnresolvedNameError(f"No template helper named '{name}'") from None

    def scopes(self, content: str | None = None) -> ScopeChain:
        """Return the scope chain for the current render call."""
        members: dict[str, Any] = dict(self._helpers)
        members.update(
            page=self.page,
            data=self.data,
            sitemap=self.sitemap,
            config=self.settings,
            render=self.render,
            include_file=self.include_file,
        )
        if content is not None:
            members["content"] = content
        return ScopeChain(
            [("context", members), ("locals", self.locals), ("config", self.settings)]
        )

    def resolve(self, name: str) -> Any:
        """Resolve ``name`` the way a template would."""
        return self.scopes().resolve(name)

    def render(
        self,
        template_path: str,
        locals: Mapping[str, Any] | None = None,
        content: Content = None,
    ) -> Markup:
        """Render a template and return its output.

        Args:
            template_path: Template path relative to the project root.
            locals: Names visible only to this render call.
            content: Output to expose as ``content``, typically a page body
                wrapped by a layout. A callable is evaluated before this
                call's locals are pushed.

        Returns:
            The rendered output, marked safe for inclusion in other templates.
        """
        body = content() if callable(content) else content
        if body is not None:
            body = Markup(body)
        self._locals.append(IndifferentDict(locals or {}))
        try:
            return Markup(self._renderer.render(template_path, self.scopes(body)))
        finally:
            self._locals.pop()

    def include_file(self, file_path: str) -> str:
        """Return the contents of a file for inlining into a template.

        Text files are returned as-is, images base64 encoded.

        Raises:
            UnsupportedIncludeError: For any other type of file.
        """
        mime_type, _ = mimetypes.guess_type(file_path)
        path = self.root / file_path
        if is_text_mime(mime_type):
            return Markup(path.read_text(encoding="utf-8"))
        if mime_type and mime_type.startswith("image/"):
            return base64.b64encode(path.read_bytes()).decode("ascii")
        raise UnsupportedIncludeError(file_path, mime_type)
