"""Read-only queries against Kismet capture databases."""

import logging
import sqlite3
from collections.abc import Iterable
from pathlib import Path

from sqlalchemy import Engine, bindparam, text
from sqlmodel import create_engine

from kismetprobe.capture.mapper import map_row
from kismetprobe.capture.models import ACCESS_POINT_TYPES, STATION_TYPES, DeviceRecord

logger = logging.getLogger(__name__)

_ALL_DEVICES = text("SELECT * FROM devices")
_DEVICES_BY_TYPE = text("SELECT * FROM devices WHERE type IN :types").bindparams(
    bindparam("types", expanding=True)
)


def open_capture(path: str | Path) -> Engine:
    """Create an engine for a capture file.

    The file is opened in read-only mode, so a missing path fails on
    connect instead of creating an empty database.
    """
    uri = Path(path).resolve().as_uri() + "?mode=ro"
    return create_engine(
        "sqlite://",
        creator=lambda: sqlite3.connect(uri, uri=True, check_same_thread=False),
    )


def query_devices(
    path: str | Path, device_types: Iterable[str] | None = None
) -> list[DeviceRecord]:
    """Load and map device rows, optionally restricted to some device types.

    Raises SQLAlchemyError if the file cannot be queried and RowShapeError
    if a row cannot be mapped. Nothing is returned for a file that fails.
    """
    engine = open_capture(path)
    try:
        with engine.connect() as conn:
            if device_types is None:
                result = conn.execute(_ALL_DEVICES)
            else:
                result = conn.execute(_DEVICES_BY_TYPE, {"types": [str(t) for t in device_types]})
            devices = [map_row(row) for row in result]
    finally:
        engine.dispose()

    logger.debug("Loaded %d devices from %s", len(devices), path)
    return devices


def get_access_points(path: str | Path) -> list[DeviceRecord]:
    return query_devices(path, ACCESS_POINT_TYPES)


def get_stations(path: str | Path) -> list[DeviceRecord]:
    return query_devices(path, STATION_TYPES)
