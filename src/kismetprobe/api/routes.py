"""REST API endpoints."""

from datetime import datetime
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from kismetprobe.capture.discovery import iter_capture_files
from kismetprobe.capture.models import DeviceRecord
from kismetprobe.capture.navigator import advertised_ssids, manufacturer, probed_ssids
from kismetprobe.capture.scanner import CaptureResult, collect_probes, scan_file
from kismetprobe.config import Settings, resolve_base_path, settings

router = APIRouter(prefix="/api")


def get_settings() -> Settings:
    """Settings dependency (overridden in tests)."""
    return settings


# Response models
class DeviceOut(BaseModel):
    identifier: str
    first_time: datetime
    last_time: datetime
    device_type: str
    manufacturer: str | None = None
    probed_ssids: list[str] = []
    advertised_ssids: list[str] = []
    metadata: Any = None


class CaptureReport(BaseModel):
    path: str
    devices: list[DeviceOut]
    error: str | None = None


class ProbeReport(BaseModel):
    path: str
    probes: list[str]
    error: str | None = None


def _device_out(device: DeviceRecord, include_metadata: bool) -> DeviceOut:
    return DeviceOut(
        identifier=device.identifier,
        first_time=device.first_time,
        last_time=device.last_time,
        device_type=device.device_type,
        manufacturer=manufacturer(device),
        probed_ssids=probed_ssids(device),
        advertised_ssids=advertised_ssids(device),
        metadata=device.metadata if include_metadata else None,
    )


def _capture_path(relative: str, cfg: Settings) -> Path:
    """Resolve a capture path under the base path, 404 if outside it or missing."""
    base = resolve_base_path(cfg).resolve()
    candidate = (base / relative).resolve()
    if (
        not candidate.is_relative_to(base)
        or candidate.suffix != cfg.capture_extension
        or not candidate.is_file()
    ):
        raise HTTPException(status_code=404, detail="Capture file not found")
    return candidate


def _report(path: str, result: CaptureResult, include_metadata: bool) -> CaptureReport:
    return CaptureReport(
        path=path,
        devices=[_device_out(d, include_metadata) for d in result.devices],
        error=result.error,
    )


@router.get("/captures")
def list_captures(cfg: Settings = Depends(get_settings)) -> list[str]:
    base = resolve_base_path(cfg)
    return [
        path.relative_to(base).as_posix()
        for path in iter_capture_files(base, cfg.capture_extension)
    ]


@router.get("/probes")
def capture_probes(path: str, cfg: Settings = Depends(get_settings)) -> ProbeReport:
    result = scan_file(_capture_path(path, cfg), cfg.station_types)
    return ProbeReport(path=path, probes=collect_probes(result), error=result.error)


@router.get("/access-points")
def capture_access_points(
    path: str,
    include_metadata: bool = False,
    cfg: Settings = Depends(get_settings),
) -> CaptureReport:
    result = scan_file(_capture_path(path, cfg), cfg.access_point_types)
    return _report(path, result, include_metadata)


@router.get("/stations")
def capture_stations(
    path: str,
    include_metadata: bool = False,
    cfg: Settings = Depends(get_settings),
) -> CaptureReport:
    result = scan_file(_capture_path(path, cfg), cfg.station_types)
    return _report(path, result, include_metadata)


@router.get("/devices")
def capture_devices(
    path: str,
    device_type: list[str] | None = Query(default=None, alias="type"),
    include_metadata: bool = False,
    cfg: Settings = Depends(get_settings),
) -> CaptureReport:
    result = scan_file(_capture_path(path, cfg), device_type)
    return _report(path, result, include_metadata)
