"""poptags CLI Main Entry Point

Usage:
    poptags render page -t templates -c content.yaml    # render to stdout
    poptags render page -o out.html                     # render to a file
    poptags check page about -t templates               # compile and report
    poptags inspect page -t templates                   # dump the Node Tree
    poptags --version
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
import yaml

from poptags._version import __version__
from poptags.ast import dump
from poptags.exceptions import TemplateError
from poptags.loaders import DataDirectory, DirectoryReader, load_content
from poptags.template import Template

from .utils import console, handle_error, setup_logging

log = logging.getLogger(__name__)

typer_app = typer.Typer(help="Compile and render <pop:...> templates.")


def _version(value: bool) -> None:
    if value:
        typer.echo(f"poptags {__version__}")
        raise typer.Exit()


@typer_app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Compile and render <pop:...> templates."""


@typer_app.command()
def render(
    name: str = typer.Argument(..., help="Template name, relative to the templates directory."),
    templates: Path = typer.Option(Path("."), "-t", "--templates", help="Templates directory."),
    content: Optional[Path] = typer.Option(
        None, "-c", "--content", help="YAML or JSON content file."
    ),
    extensions: Optional[Path] = typer.Option(
        None, "-e", "--extensions", help="Directory of YAML/JSON extension objects."
    ),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Write the result to a file instead of stdout."
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging."),
) -> None:
    """Render a template against a content file."""
    setup_logging(verbose)
    try:
        data = load_content(content) if content is not None else {}
        template = Template(
            name=name,
            read=DirectoryReader(templates),
            require=DataDirectory(extensions) if extensions is not None else None,
        )
        result = template.render(data)
    except (TemplateError, OSError, yaml.YAMLError) as exc:
        handle_error(exc)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(result, encoding="utf-8")
        log.info(f"Wrote {name} to {output}")
    else:
        typer.echo(result, nl=False)


@typer_app.command()
def check(
    names: List[str] = typer.Argument(..., help="Template names to compile."),
    templates: Path = typer.Option(Path("."), "-t", "--templates", help="Templates directory."),
) -> None:
    """Compile templates, with their layouts and includes, and report errors."""
    setup_logging()
    reader = DirectoryReader(templates)
    failed = 0
    for name in names:
        try:
            Template(name=name, read=reader).compile()
        except TemplateError as exc:
            failed += 1
            console.print(f"[red]✗[/red] {name}: {exc}")
        else:
            console.print(f"[green]✓[/green] {name}")

    if failed:
        raise typer.Exit(code=1)


@typer_app.command()
def inspect(
    name: str = typer.Argument(..., help="Template name."),
    templates: Path = typer.Option(Path("."), "-t", "--templates", help="Templates directory."),
) -> None:
    """Print the compiled Node Tree as JSON."""
    setup_logging()
    try:
        nodes = Template(name=name, read=DirectoryReader(templates)).nodes
    except TemplateError as exc:
        handle_error(exc)
    typer.echo(dump(nodes).decode())


def app(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI."""
    typer_app(args=argv)


if __name__ == "__main__":
    app()
