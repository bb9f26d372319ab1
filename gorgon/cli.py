"""Command-line interface for Gorgon.

This module defines the CLI commands using Click framework.

Commands:
- build: Build the site into the build directory.
- serve: Run the development server.

Both commands load the site from a Python file, ``site.py`` by default, which
must define a Site named ``site``. ``--app path/to/file.py:name`` picks another
file or variable.
"""

from __future__ import annotations

import runpy
from pathlib import Path

import click

from . import __version__
from .errors import GorgonError
from .server import DEFAULT_HOST, DEFAULT_PORT
from .site import Site
from .supervisor import is_supervised, supervise, worker_command

DEFAULT_APP = "site.py"
DEFAULT_APP_ATTR = "site"


def load_site(app: str) -> Site:
    """Execute a site file and return the Site it defines.

    Args:
        app: ``path`` or ``path:attribute``.
    """
    file_part, _, attr = app.partition(":")
    attr = attr or DEFAULT_APP_ATTR
    path = Path(file_part).resolve()
    if not path.is_file():
        raise click.ClickException(f"Site file not found: {file_part}")
    namespace = runpy.run_path(str(path))
    site = namespace.get(attr)
    if not isinstance(site, Site):
        raise click.ClickException(f"{file_part} does not define a Site named '{attr}'")
    return site


@click.group()
@click.version_option(version=__version__, prog_name="gorgon")
@click.option(
    "--app",
    default=DEFAULT_APP,
    show_default=True,
    help="Site file, optionally followed by :variable",
)
@click.pass_context
def cli(ctx: click.Context, app: str):
    """Gorgon static site builder."""
    ctx.obj = {"app": app}


@cli.command()
@click.option("--silent", is_flag=True, help="Do not list pages as they render")
@click.pass_context
def build(ctx: click.Context, silent: bool):
    """Build the site into the build directory."""
    site = load_site(ctx.obj["app"])
    try:
        result = site.build(silent=silent)
    except GorgonError as exc:
        click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
        source_path = getattr(exc, "source_path", None)
        if source_path:
            click.echo(click.style(f"  Page: {source_path}", fg="yellow"), err=True)
        message = getattr(exc, "message", None) or str(exc)
        click.echo(click.style(f"  Error: {message}", fg="white"), err=True)
        raise SystemExit(1) from None
    click.echo(f"Built {len(result.pages)} pages into {result.output_dir}")


@cli.command()
@click.option("--host", default=DEFAULT_HOST, show_default=True, help="Interface to bind")
@click.option("--port", type=int, default=DEFAULT_PORT, show_default=True, help="Port to bind")
@click.option(
    "--no-supervise",
    is_flag=True,
    help="Serve in this process; a reload request then just exits",
)
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, no_supervise: bool):
    """Run the dev server. Ctrl-C once reloads, twice exits."""
    if not no_supervise and not is_supervised():
        raise SystemExit(supervise(worker_command()))
    site = load_site(ctx.obj["app"])
    raise SystemExit(site.serve(host=host, port=port))


def main():
    """Entry point for the CLI application."""
    cli()

