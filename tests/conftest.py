"""Shared test fixtures."""

import itertools
import json
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, create_engine

from kismetprobe.api.routes import get_settings
from kismetprobe.capture.models import DevicesTable
from kismetprobe.config import Settings
from kismetprobe.main import app

_devkeys = itertools.count(1)


def _make_device(
    mac: str,
    device_type: str,
    first_time: int = 1_700_000_000,
    last_time: int = 1_700_000_600,
    device: bytes | dict[str, Any] | None = None,
) -> DevicesTable:
    """Build a devices row. ``device`` dicts are serialized to JSON bytes."""
    if isinstance(device, dict):
        device = json.dumps(device).encode()
    return DevicesTable(
        first_time=first_time,
        last_time=last_time,
        devkey=f"4202770D00000000_{next(_devkeys):012X}",
        phyname="IEEE802.11",
        devmac=mac,
        type=device_type,
        device=device if device is not None else b"{}",
    )


def write_capture(path: Path, rows: list[DevicesTable]) -> Path:
    """Create a capture file holding a devices table with ``rows``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    eng = create_engine(f"sqlite:///{path}")
    SQLModel.metadata.create_all(eng, tables=[DevicesTable.__table__])
    with eng.begin() as conn:
        if rows:
            conn.execute(DevicesTable.__table__.insert(), [row.model_dump() for row in rows])
    eng.dispose()
    return path


@pytest.fixture
def make_device() -> Callable[..., DevicesTable]:
    return _make_device


@pytest.fixture
def capture_factory(tmp_path) -> Callable[..., Path]:
    def _make(name: str, rows: list[DevicesTable]) -> Path:
        return write_capture(tmp_path / name, rows)

    return _make


@pytest.fixture
def probing_client() -> DevicesTable:
    return _make_device(
        "AA:BB:CC:00:00:01",
        "Wi-Fi Client",
        device={
            "kismet.device.base.manuf": "Apple",
            "dot11.device": {
                "dot11.device.probed_ssid_map": {
                    "0": {"dot11.probedssid.ssid": "HomeNet"},
                    "1": {"dot11.probedssid.ssid": ""},
                    "2": {"dot11.probedssid.ssid": "CafeWifi"},
                }
            },
        },
    )


@pytest.fixture
def access_point() -> DevicesTable:
    return _make_device(
        "AA:BB:CC:00:00:02",
        "Wi-Fi AP",
        device={
            "dot11.device": {
                "dot11.device.advertised_ssid_map": [
                    {"dot11.advertisedssid.ssid": "HomeNet"},
                ]
            }
        },
    )


@pytest.fixture
def settings_for(tmp_path) -> Settings:
    """Settings rooted at tmp_path, ignoring any pathconfig.txt in the cwd."""
    return Settings(base_path=tmp_path, path_config_file=tmp_path / "pathconfig.txt")


@pytest.fixture
def client(settings_for) -> Generator[TestClient, None, None]:
    """FastAPI TestClient with settings rooted at tmp_path."""
    app.dependency_overrides[get_settings] = lambda: settings_for
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
