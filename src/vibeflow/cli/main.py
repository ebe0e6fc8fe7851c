"""vibeflow CLI entry point: Click group with subcommands."""

import click

from vibeflow import __version__
from vibeflow.log import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="vibeflow")
@click.option("--log-level", default="warning", help="Logging level (debug, info, warning, error)")
def cli(log_level: str) -> None:
    """vibeflow - turn generated CSS into utility classes and fold repeated JSX."""
    configure_logging(log_level)


# Import and register subcommands
from vibeflow.cli.extract import extract  # noqa: E402
from vibeflow.cli.optimize import optimize  # noqa: E402
from vibeflow.cli.resolve import resolve  # noqa: E402
from vibeflow.cli.serve import serve  # noqa: E402

cli.add_command(resolve)
cli.add_command(extract)
cli.add_command(optimize)
cli.add_command(serve)
