"""Local weather collector CLI application.

This module provides the command-line interface for the collector:
running the periodic job, running a single cycle, and validating
configuration files.
"""

from __future__ import annotations

import logging
import sys
import time
from pathlib import Path
from typing import Final

import typer

from localweather.errors import ConfigurationError
from localweather.manager import WeatherApiManager
from localweather.service import WeatherApiService
from localweather.settings import UserSettings

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="Local weather collector CLI", add_completion=False)
config_app = typer.Typer(help="Config helpers")
app.add_typer(config_app, name="config")

logger: Final = logging.getLogger(__name__)  # Will be "localweather.cli"

# Options shared by the commands
CONFIG_OPTION = typer.Option(..., "--config", "-c", exists=True, dir_okay=False)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")


def _create_manager(config: Path, debug: bool) -> WeatherApiManager:
    try:
        service = WeatherApiService.from_config(config, debug=debug)
        return WeatherApiManager(service, service.settings.source, service.settings.api_key)
    except ConfigurationError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@app.command()
def run(
    config: Path = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Collect local weather on the configured interval until interrupted."""
    manager = _create_manager(config, debug)
    with manager:
        manager.start()
        typer.echo(
            f"Collecting {manager.name} weather every {manager.query_interval}s"
            " - press Ctrl+C to quit"
        )
        try:
            while True:
                time.sleep(1)
        except KeyboardInterrupt:
            logger.info("Interrupted, shutting down")


@app.command()
def once(
    config: Path = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Run a single collection cycle and exit."""
    manager = _create_manager(config, debug)
    with manager:
        outcome = manager.job.run()

    if outcome.observation is None:
        typer.secho(f"Cycle skipped: {outcome.error}", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)
    typer.echo(outcome.observation.model_dump_json())


# ───────────────────────── config sub-commands ───────────────────────────────
@config_app.command("validate")
def validate_config(file: Path):
    """Validate a YAML config file against the schema."""
    try:
        UserSettings.load(file)
        typer.echo("✅ Config valid")
    except (ConfigurationError, FileNotFoundError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)
