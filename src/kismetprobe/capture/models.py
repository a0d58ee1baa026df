"""Device record, device type vocabulary and the Kismet devices table layout."""

import enum
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from sqlmodel import Field, SQLModel

EPOCH = datetime.fromtimestamp(0, UTC)


class DeviceType(enum.StrEnum):
    access_point = "Wi-Fi AP"
    bridged = "Wi-Fi Bridged"
    client = "Wi-Fi Client"
    device = "Wi-Fi Device"
    ad_hoc = "Wi-Fi Ad-Hoc"


ACCESS_POINT_TYPES: tuple[str, ...] = (DeviceType.access_point, DeviceType.bridged)
STATION_TYPES: tuple[str, ...] = (DeviceType.client, DeviceType.device)


# Positions in a ``SELECT * FROM devices`` row (kismetdb schema v5+).
# Must stay in step with DevicesTable below.
COL_FIRST_TIME = 0
COL_LAST_TIME = 1
COL_DEVMAC = 4
COL_TYPE = 13
COL_DEVICE = 14
COLUMN_COUNT = 15


class DevicesTable(SQLModel, table=True):
    """Column order of the ``devices`` table Kismet writes.

    Read access is positional (see the COL_* constants); this model only
    describes the layout.
    """

    __tablename__ = "devices"

    first_time: int
    last_time: int
    devkey: str = Field(primary_key=True)
    phyname: str
    devmac: str
    strongest_signal: int = 0
    min_lat: float = 0
    min_lon: float = 0
    max_lat: float = 0
    max_lon: float = 0
    avg_lat: float = 0
    avg_lon: float = 0
    bytes_data: int = 0
    type: str
    device: bytes | None = None


@dataclass(frozen=True)
class DeviceRecord:
    """A single device row from a capture file, decoded."""

    identifier: str
    first_time: datetime
    last_time: datetime
    device_type: str
    metadata: Any  # decoded JSON value, {} when undecodable
