"""Map raw ``devices`` rows to DeviceRecord instances.

Decode problems inside a row (bad epoch values, undecodable JSON) fall back to
defaults. Only a row of the wrong shape is an error.
"""

import json
import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

from kismetprobe.capture.models import (
    COL_DEVICE,
    COL_DEVMAC,
    COL_FIRST_TIME,
    COL_LAST_TIME,
    COL_TYPE,
    COLUMN_COUNT,
    EPOCH,
    DeviceRecord,
)

logger = logging.getLogger(__name__)


class RowShapeError(ValueError):
    """A devices row does not have the expected columns."""


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def decode_timestamp(value: object) -> datetime:
    """Convert epoch seconds to an aware UTC datetime, EPOCH if impossible."""
    try:
        return datetime.fromtimestamp(int(value), UTC)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError, OSError):
        logger.warning("Unusable timestamp %r, using epoch", value)
        return EPOCH


def normalize_device_type(value: str) -> str:
    """Trim whitespace, then one layer of single quotes on each side."""
    value = value.strip()
    if value.startswith("'"):
        value = value[1:]
    if value.endswith("'"):
        value = value[:-1]
    return value


def decode_metadata(blob: object) -> Any:
    """Decode a device JSON blob. Anything unparseable becomes ``{}``."""
    if isinstance(blob, bytes | bytearray | memoryview):
        text = bytes(blob).decode("utf-8", errors="replace")
    elif isinstance(blob, str):
        text = blob
    else:
        return {}

    try:
        return json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return {}


def map_row(row: Sequence[Any]) -> DeviceRecord:
    """Build a DeviceRecord from one positional ``devices`` row.

    Raises RowShapeError if the row is too short or the MAC or type
    column is not text.
    """
    if len(row) < COLUMN_COUNT:
        raise RowShapeError(f"expected {COLUMN_COUNT} columns, got {len(row)}")

    mac = row[COL_DEVMAC]
    device_type = row[COL_TYPE]
    if not isinstance(mac, str):
        raise RowShapeError(f"devmac column is {type(mac).__name__}, expected text")
    if not isinstance(device_type, str):
        raise RowShapeError(f"type column is {type(device_type).__name__}, expected text")

    return DeviceRecord(
        identifier=mac,
        first_time=decode_timestamp(row[COL_FIRST_TIME]),
        last_time=decode_timestamp(row[COL_LAST_TIME]),
        device_type=normalize_device_type(device_type),
        metadata=decode_metadata(row[COL_DEVICE]),
    )
