"""CLI entry point: inspect a registry built from a definition manifest."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from . import __version__
from .config import load_config
from .exceptions import DocObjectsError
from .export import entity_to_dict, registry_to_dict, render_registry
from .loader import load_manifest
from .logging_config import setup_logging
from .objects.registry import Registry

app = typer.Typer(
    name="docobjects",
    help="docobjects - inspect documentation object registries",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()


def _build_registry(
    manifest: Path, config_file: Optional[Path], verbose: bool, as_json: bool = False
) -> Registry:
    try:
        config = load_config(config_file=config_file, verbose=verbose)
        setup_logging(config)
        try:
            data = json.loads(manifest.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise DocObjectsError(f"Cannot read manifest '{manifest}': {e}")
        return load_manifest(data, Registry(config))
    except DocObjectsError as e:
        if as_json:
            console.print_json(data={"error": e.to_dict()})
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def inspect(
    manifest: Path = typer.Argument(..., help="JSON definition manifest"),
    entity_type: Optional[List[str]] = typer.Option(None, "--type", "-t", help="Only show this entity type"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="TOML config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log registry operations"),
):
    """List every registered entity."""
    registry = _build_registry(manifest, config, verbose, as_json)
    types = tuple(entity_type or ())
    if as_json:
        console.print_json(data=registry_to_dict(registry, types))
    else:
        console.print(render_registry(registry, types))


@app.command()
def lookup(
    manifest: Path = typer.Argument(..., help="JSON definition manifest"),
    path: str = typer.Argument(..., help="Canonical path, e.g. 'Foo#bar'"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="TOML config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log registry operations"),
):
    """Show one entity by canonical path."""
    registry = _build_registry(manifest, config, verbose)
    entity = registry.lookup(path)
    if entity is None:
        console.print(f"[yellow]Not found:[/yellow] {path}")
        raise typer.Exit(1)
    console.print_json(data=entity_to_dict(entity))


@app.command()
def version():
    """Show the installed version."""
    console.print(f"docobjects {__version__}")


def main():
    app()
