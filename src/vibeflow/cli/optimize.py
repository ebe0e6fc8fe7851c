"""CLI command: vibeflow optimize -- resolve CSS, rewrite classes, extract repeats."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from vibeflow.errors import ConfigError
from vibeflow.extractor import ExtractorOptions
from vibeflow.pipeline import OptimizeOptions, optimize as run_optimize
from vibeflow.theme import ThemeConfig


@click.command()
@click.argument("markup", type=click.Path(exists=True, dir_okay=False))
@click.argument("css", type=click.Path(exists=True, dir_okay=False))
@click.option("--theme", "theme_file", type=click.Path(exists=True, dir_okay=False),
              help="JSON theme configuration")
@click.option("--prefix", default="ExtractedItem", show_default=True,
              help="Name prefix for generated components")
@click.option("--collapse", is_flag=True, help="Prefer one .map() over a data table for contiguous runs")
@click.option("--no-extract", is_flag=True, help="Skip repetition extraction")
@click.option("--out-dir", type=click.Path(file_okay=False), help="Write the markup and CSS files here")
def optimize(markup: str, css: str, theme_file: str | None, prefix: str, collapse: bool,
             no_extract: bool, out_dir: str | None) -> None:
    """Optimize a rendered component (MARKUP) and its stylesheet (CSS).

    Engine failures are reported as warnings; the affected output is left
    as it was.
    """
    try:
        options = OptimizeOptions(
            theme=ThemeConfig.from_file(theme_file) if theme_file else None,
            extractor=ExtractorOptions(generated_name_prefix=prefix, prefer_collapsed_iteration=collapse),
            extract=not no_extract,
        )
    except ConfigError as exc:
        click.echo(f"Config error: {exc}", err=True)
        sys.exit(1)

    markup_path, css_path = Path(markup), Path(css)
    result = run_optimize(
        markup_path.read_text(encoding="utf-8"), css_path.read_text(encoding="utf-8"), options
    )
    for warning in result.warnings:
        click.echo(f"Warning: {warning}", err=True)

    if out_dir is None:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    target = Path(out_dir)
    target.mkdir(parents=True, exist_ok=True)
    (target / markup_path.name).write_text(result.markup, encoding="utf-8")
    (target / css_path.name).write_text(result.css, encoding="utf-8")
    click.echo(f"Wrote {target / markup_path.name} and {target / css_path.name}")
