"""
irdevices Device Inventory

Ordered device records as handed to the encoder.

This module provides:
- Device: Protocol for anything the encoder can read a device from
- DeviceInventory: Protocol for an ordered device collection
- DeviceRecord: Frozen device record with a validated full name
- DeviceSet: Ordered, duplicate-free collection of DeviceRecords
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Protocol, Sequence, runtime_checkable

from irdevices.device_name import (
    ParsedName,
    canonicalize,
    parse_full_name,
    parsed_name_to_string,
)
from irdevices.exceptions import DuplicateDeviceError, InvalidDeviceNameError

logger = logging.getLogger(__name__)


@runtime_checkable
class Device(Protocol):
    """A single device as seen by the encoder."""

    @property
    def full_name(self) -> str:
        """Fully-qualified device name."""
        ...

    @property
    def description(self) -> str:
        """Free-text physical device description."""
        ...


@runtime_checkable
class DeviceInventory(Protocol):
    """An ordered collection of devices."""

    @property
    def devices(self) -> Sequence[Device]:
        """Devices in inventory order."""
        ...


@dataclass(frozen=True, slots=True)
class DeviceRecord:
    """Device record.

    Attributes:
        full_name: Fully-qualified device name
        description: Physical device description (e.g. "compute capability: 7.0")
        parsed_name: Parsed form of full_name
    """

    full_name: str
    description: str = ""
    parsed_name: ParsedName = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "parsed_name", parse_full_name(self.full_name))

    @property
    def device_type(self) -> Optional[str]:
        return self.parsed_name.type

    @property
    def canonical_name(self) -> str:
        return parsed_name_to_string(self.parsed_name)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.full_name, "description": self.description}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> DeviceRecord:
        return cls(full_name=d["name"], description=d.get("description") or "")


class DeviceSet:
    """Ordered collection of devices.

    Devices keep the order in which they were added. A device whose
    canonical name is already present is rejected.

    Example:
        >>> ds = DeviceSet()
        >>> ds.add_device(DeviceRecord("/job:worker/replica:0/task:0/device:CPU:0"))
        >>> len(ds)
        1
    """

    def __init__(self, devices: Optional[Sequence[DeviceRecord]] = None) -> None:
        self._devices: list[DeviceRecord] = []
        self._by_name: dict[str, DeviceRecord] = {}
        for device in devices or ():
            self.add_device(device)

    def add_device(self, device: DeviceRecord) -> None:
        """Append a device.

        Raises:
            DuplicateDeviceError: If a device with the same canonical name exists.
        """
        key = device.canonical_name
        if key in self._by_name:
            raise DuplicateDeviceError(key)
        self._devices.append(device)
        self._by_name[key] = device
        logger.debug("Added device %s", key)

    @property
    def devices(self) -> tuple[DeviceRecord, ...]:
        return tuple(self._devices)

    def find_device_by_name(self, name: str) -> Optional[DeviceRecord]:
        """Return the device named ``name`` (any spelling), or None."""
        try:
            key = canonicalize(name)
        except InvalidDeviceNameError:
            return None
        return self._by_name.get(key)

    def devices_of_type(self, device_type: str) -> list[DeviceRecord]:
        return [d for d in self._devices if d.device_type == device_type]

    def __len__(self) -> int:
        return len(self._devices)

    def __iter__(self) -> Iterator[DeviceRecord]:
        return iter(list(self._devices))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find_device_by_name(name) is not None

    def __repr__(self) -> str:
        return f"DeviceSet({[d.full_name for d in self._devices]!r})"

    def to_dict(self) -> dict[str, Any]:
        return {"devices": [d.to_dict() for d in self._devices]}
