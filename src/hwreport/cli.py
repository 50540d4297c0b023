"""Command-line interface for hwreport."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

import typer

from .config import AppSettings, ReportConfig, TemperatureUnit, get_settings
from .logger import configure_logging, get_logger
from .report import print_chips
from .sensors import HwmonBackend, SensorsBackend, SensorsError, load_snapshot

app = typer.Typer(add_completion=False, help="Hardware sensor monitoring report.")


def _open_backend(settings: AppSettings, snapshot: Optional[Path], sysfs_root: Optional[Path]) -> SensorsBackend:
    """Pick the snapshot file when one is given, sysfs otherwise."""

    snapshot = snapshot or settings.snapshot_path
    if snapshot is not None:
        return load_snapshot(snapshot)
    return HwmonBackend(sysfs_root or settings.sysfs_root)


@app.callback()
def _root_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log info and debug records to stderr."),
) -> None:
    """hwreport command group."""

    configure_logging(get_settings(), verbose=verbose, force=True)


@app.command()
def report(
    chips: Optional[List[str]] = typer.Argument(None, help="Chip prefixes or full chip names; shell wildcards are allowed."),
    fahrenheit: Optional[bool] = typer.Option(None, "--fahrenheit/--celsius", "-f", help="Show temperatures in degrees Fahrenheit."),
    raw: bool = typer.Option(False, "--raw", "-u", help="List raw subfeature values instead of the formatted report."),
    ascii_degrees: Optional[bool] = typer.Option(None, "--ascii/--unicode", "-A", help="Omit the degree sign."),
    snapshot: Optional[Path] = typer.Option(None, "--snapshot", help="Report on a JSON snapshot instead of sysfs."),
    sysfs_root: Optional[Path] = typer.Option(None, "--sysfs-root", help="Directory holding the hwmon devices."),
) -> None:
    """Print the sensor report for every detected chip."""

    settings = get_settings()
    logger = get_logger(__name__)

    unit = settings.temperature_unit
    if fahrenheit is not None:
        unit = TemperatureUnit.FAHRENHEIT if fahrenheit else TemperatureUnit.CELSIUS
    config = ReportConfig.create(unit, settings.ascii_degrees if ascii_degrees is None else ascii_degrees)
    logger.debug("Report configuration: %s", config)

    try:
        backend = _open_backend(settings, snapshot, sysfs_root)
        printed = print_chips(backend, config, sys.stdout, names=chips or (), raw=raw)
    except SensorsError as exc:
        logger.error("Cannot produce report: %s", exc)
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if not printed:
        message = "Specified sensor(s) not found!" if chips else "No sensors found!"
        typer.echo(message, err=True)
        raise typer.Exit(code=1)


@app.command("chips")
def list_chips(
    snapshot: Optional[Path] = typer.Option(None, "--snapshot", help="Read chips from a JSON snapshot."),
    sysfs_root: Optional[Path] = typer.Option(None, "--sysfs-root", help="Directory holding the hwmon devices."),
) -> None:
    """List the detected chip names."""

    settings = get_settings()
    try:
        backend = _open_backend(settings, snapshot, sysfs_root)
    except SensorsError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    for chip in backend.chips():
        typer.echo(f"{chip}\t{chip.adapter or ''}".rstrip())


def main() -> None:
    """Entrypoint for the ``hwreport`` console script."""

    logger = get_logger(__name__)
    logger.debug("Invoked hwreport CLI entrypoint")
    app()
