"""Console commands for scanning capture directories."""

import json
import logging
from pathlib import Path

import click

from kismetprobe.capture.models import DeviceRecord
from kismetprobe.capture.navigator import manufacturer
from kismetprobe.capture.scanner import CaptureResult, collect_probes, scan_captures
from kismetprobe.config import Settings, load_config, resolve_base_path


def _root(cfg: Settings, root: str | None) -> Path:
    return Path(root) if root else resolve_base_path(cfg)


def _parse_types(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _processing(result: CaptureResult) -> bool:
    click.echo(f"Processing: {result.path}")
    if not result.ok:
        click.echo(f"Error processing {result.path}: {result.error}", err=True)
        return False
    return True


def _summary(device: DeviceRecord) -> str:
    parts = [
        device.identifier,
        device.device_type,
        device.first_time.isoformat(),
        device.last_time.isoformat(),
    ]
    manuf = manufacturer(device)
    if manuf:
        parts.append(manuf)
    return "  " + "  ".join(parts)


@click.group()
@click.option("--log-level", "log_level", default=None, help="Override the configured log level")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """Extract devices and probed SSIDs from Kismet capture files."""
    cfg = load_config()
    logging.basicConfig(level=(log_level or cfg.log_level).upper())
    ctx.obj = cfg


@cli.command()
@click.argument("root", required=False, type=click.Path(file_okay=False))
@click.pass_obj
def probes(cfg: Settings, root: str | None) -> None:
    """Print every SSID probed for by client devices, one per line."""
    for result in scan_captures(_root(cfg, root), cfg.station_types, cfg.capture_extension):
        if _processing(result):
            for ssid in collect_probes(result):
                click.echo(ssid)


@cli.command("access-points")
@click.argument("root", required=False, type=click.Path(file_okay=False))
@click.pass_obj
def access_points(cfg: Settings, root: str | None) -> None:
    """Print the metadata document of every access point."""
    for result in scan_captures(
        _root(cfg, root), cfg.access_point_types, cfg.capture_extension
    ):
        if _processing(result):
            for device in result.devices:
                click.echo(f"  {json.dumps(device.metadata)}")


@cli.command()
@click.argument("root", required=False, type=click.Path(file_okay=False))
@click.option("--types", "types", default="", help="Comma-separated device types (default: all)")
@click.pass_obj
def devices(cfg: Settings, root: str | None, types: str) -> None:
    """Print a one-line summary of each device."""
    device_types = _parse_types(types) or None
    for result in scan_captures(_root(cfg, root), device_types, cfg.capture_extension):
        if _processing(result):
            for device in result.devices:
                click.echo(_summary(device))


@cli.command()
def serve() -> None:
    """Run the HTTP API."""
    from kismetprobe.main import main

    main()


if __name__ == "__main__":
    cli()
