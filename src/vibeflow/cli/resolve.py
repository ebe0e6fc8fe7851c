"""CLI command: vibeflow resolve -- map CSS rules onto utility classes."""

from __future__ import annotations

import json
import sys
from dataclasses import replace
from pathlib import Path

import click

from vibeflow.errors import ConfigError, ParseError
from vibeflow.resolver import UtilityResolver
from vibeflow.theme import ThemeConfig


@click.command()
@click.argument("cssfile", type=click.Path(exists=True, dir_okay=False))
@click.option("--theme", "theme_file", type=click.Path(exists=True, dir_okay=False),
              help="JSON theme configuration")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.option("--no-arbitrary", is_flag=True, help="Never emit arbitrary-value utilities")
def resolve(cssfile: str, theme_file: str | None, as_json: bool, no_arbitrary: bool) -> None:
    """Resolve the rules in CSSFILE to utility classes.

    Prints one line per selector followed by the fallback CSS for
    declarations that have no utility equivalent.
    """
    try:
        theme = ThemeConfig.from_file(theme_file) if theme_file else ThemeConfig()
    except ConfigError as exc:
        click.echo(f"Config error: {exc}", err=True)
        sys.exit(1)
    if no_arbitrary:
        theme = replace(theme, arbitrary_values_enabled=False)

    try:
        result = UtilityResolver(theme).resolve(Path(cssfile).read_text(encoding="utf-8"))
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    for selector, classes in result.per_selector_classes.items():
        click.echo(f"{selector}: {' '.join(classes) if classes else '(none)'}")
    if result.fallback_css:
        click.echo()
        click.echo(result.fallback_css)
