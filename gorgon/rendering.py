"""Template rendering backend for Gorgon.

The rest of Gorgon only needs one capability from a template language: render
the template at a path with a chain of name scopes. JinjaRenderer provides it
with Jinja2, loading templates relative to the project root.
"""

from __future__ import annotations

from abc import abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from jinja2.utils import missing

from .errors import UnresolvedNameError

if TYPE_CHECKING:
    from .context import ScopeChain


class UnresolvedName(StrictUndefined):
    """Jinja2 undefined value that fails with UnresolvedNameError when used."""

    __slots__ = ()

    def __init__(self, hint=None, obj=missing, name=None, exc=UnresolvedNameError):
        super().__init__(hint=hint, obj=obj, name=name, exc=exc)


@runtime_checkable
class TemplateRenderer(Protocol):
    """Protocol for template rendering engines."""

    @abstractmethod
    def render(self, template_path: str, scopes: ScopeChain) -> str:
        """Render a template.

        Args:
            template_path: Template path relative to the project root.
            scopes: Names visible to the template, innermost scope first.

        Returns:
            Rendered string.
        """
        ...


class JinjaRenderer:
    """Renders templates with Jinja2.

    Attributes:
        root: Directory template paths are relative to.
        env: Jinja2 environment.
    """

    def __init__(self, root: Path):
        self.root = root
        self.env = Environment(
            loader=FileSystemLoader(str(root)),
            autoescape=select_autoescape(["html", "xml"]),
            undefined=UnresolvedName,
            trim_blocks=True,
            keep_trailing_newline=True,
        )

    def render(self, template_path: str, scopes: ScopeChain) -> str:
        template = self.env.get_template(template_path)
        return template.render(scopes.flatten())
