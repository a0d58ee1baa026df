"""Derived facts from device metadata documents.

Kismet's per-device JSON is deeply nested and not validated. Every extractor
here treats a missing key or an unexpected type as "no data" and never raises.
"""

from collections.abc import Iterable
from typing import Any

from kismetprobe.capture.models import DeviceRecord

DOT11_DEVICE = "dot11.device"
PROBED_SSID_MAP = "dot11.device.probed_ssid_map"
PROBED_SSID = "dot11.probedssid.ssid"
LAST_PROBED_SSID_RECORD = "dot11.device.last_probed_ssid_record"
ADVERTISED_SSID_MAP = "dot11.device.advertised_ssid_map"
ADVERTISED_SSID = "dot11.advertisedssid.ssid"
BASE_MANUF = "kismet.device.base.manuf"


def lookup(document: Any, *path: str) -> Any | None:
    """Follow ``path`` through nested objects, None on any mismatch."""
    node = document
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
        if node is None:
            return None
    return node


def _non_empty_str(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def _collect(entries: Iterable[Any], key: str) -> list[str]:
    found = []
    for entry in entries:
        value = _non_empty_str(lookup(entry, key))
        if value is not None:
            found.append(value)
    return found


def probed_ssids(record: DeviceRecord) -> list[str]:
    """SSIDs the device has sent probe requests for, in map order."""
    probe_map = lookup(record.metadata, DOT11_DEVICE, PROBED_SSID_MAP)
    if not isinstance(probe_map, dict):
        return []
    return _collect(probe_map.values(), PROBED_SSID)


def last_probed_ssid(record: DeviceRecord) -> str | None:
    return _non_empty_str(
        lookup(record.metadata, DOT11_DEVICE, LAST_PROBED_SSID_RECORD, PROBED_SSID)
    )


def advertised_ssids(record: DeviceRecord) -> list[str]:
    """SSIDs an access point has beaconed.

    Older Kismet releases write the advertised map as an object keyed by
    checksum, newer ones as a list, so both are accepted.
    """
    ssid_map = lookup(record.metadata, DOT11_DEVICE, ADVERTISED_SSID_MAP)
    if isinstance(ssid_map, dict):
        return _collect(ssid_map.values(), ADVERTISED_SSID)
    if isinstance(ssid_map, list):
        return _collect(ssid_map, ADVERTISED_SSID)
    return []


def manufacturer(record: DeviceRecord) -> str | None:
    return _non_empty_str(lookup(record.metadata, BASE_MANUF))
