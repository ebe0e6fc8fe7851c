"""CLI command: vibeflow serve -- run the HTTP API."""

from __future__ import annotations

import sys
from dataclasses import replace

import click

from vibeflow.config import VibeflowConfig
from vibeflow.errors import ConfigError


@click.command()
@click.option("--host", default=None, help="Host to bind to (default: VIBEFLOW_HOST or 127.0.0.1)")
@click.option("--port", default=None, type=int, help="Port to bind to (default: VIBEFLOW_PORT or 3000)")
@click.option("--debug/--no-debug", default=False, help="Enable debug mode")
def serve(host: str | None, port: int | None, debug: bool) -> None:
    """Start the vibeflow web server."""
    from vibeflow.web.app import create_app

    try:
        config = VibeflowConfig.from_env()
        overrides = {k: v for k, v in (("host", host), ("port", port)) if v is not None}
        config = replace(config, **overrides)
        app = create_app(config)
    except ConfigError as exc:
        click.echo(f"Config error: {exc}", err=True)
        sys.exit(1)

    click.echo(f"Starting vibeflow on {config.host}:{config.port}")
    app.run(host=config.host, port=config.port, debug=debug)
