"""Per-file scan loop over a directory of capture files."""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError

from kismetprobe.capture.discovery import iter_capture_files
from kismetprobe.capture.mapper import RowShapeError
from kismetprobe.capture.models import DeviceRecord
from kismetprobe.capture.navigator import probed_ssids
from kismetprobe.capture.store import query_devices

logger = logging.getLogger(__name__)


@dataclass
class CaptureResult:
    """Outcome of loading one capture file."""

    path: Path
    devices: list[DeviceRecord] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def scan_file(path: Path, device_types: Iterable[str] | None = None) -> CaptureResult:
    """Load one capture file. Query and row errors are captured, not raised."""
    logger.debug("Scanning %s", path)
    try:
        devices = query_devices(path, device_types)
    except (SQLAlchemyError, RowShapeError) as e:
        logger.error("Error processing %s: %s", path, e)
        return CaptureResult(path=path, error=str(e))
    return CaptureResult(path=path, devices=devices)


def scan_captures(
    root: Path,
    device_types: Iterable[str] | None = None,
    extension: str = ".kismet",
) -> Iterator[CaptureResult]:
    """Yield a CaptureResult for every capture file under ``root``."""
    types = list(device_types) if device_types is not None else None
    for path in iter_capture_files(root, extension):
        yield scan_file(path, types)


def collect_probes(result: CaptureResult) -> list[str]:
    """All probed SSIDs from one file's devices, device by device."""
    probes: list[str] = []
    for device in result.devices:
        probes.extend(probed_ssids(device))
    return probes
