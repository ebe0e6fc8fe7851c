"""CLI command: vibeflow extract -- fold repeated JSX into components."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from vibeflow.errors import ConfigError, ParseError
from vibeflow.extractor import ExtractorOptions, extract_repetitions


@click.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.option("--prefix", default="ExtractedItem", show_default=True,
              help="Name prefix for generated components")
@click.option("--collapse", is_flag=True, help="Prefer one .map() over a data table for contiguous runs")
@click.option("--min-repeats", default=2, show_default=True, type=int,
              help="Minimum number of identical siblings to extract")
@click.option("--untyped", is_flag=True, help="Omit the ': any' annotation on generated props")
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Write the result here instead of stdout")
def extract(source: str, prefix: str, collapse: bool, min_repeats: int, untyped: bool,
            output: str | None) -> None:
    """Extract repeated sibling markup in SOURCE into generated components."""
    try:
        options = ExtractorOptions(
            generated_name_prefix=prefix,
            prefer_collapsed_iteration=collapse,
            minimum_repeat_count=min_repeats,
            typed_parameters=not untyped,
        )
    except ConfigError as exc:
        click.echo(f"Config error: {exc}", err=True)
        sys.exit(1)

    try:
        result = extract_repetitions(Path(source).read_text(encoding="utf-8"), options)
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    if output:
        Path(output).write_text(result.transformed_source, encoding="utf-8")
        names = ", ".join(t.name for t in result.templates) or "nothing extracted"
        click.echo(f"Wrote {output} ({names})")
    else:
        click.echo(result.transformed_source, nl=False)
