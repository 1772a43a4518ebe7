"""
Runtime device roster.

Decoded view of a module's devices: the ordered device names plus the
GPU metadata recorded for each GPU, looked up by parsed name.
"""
from __future__ import annotations

from typing import Optional

from irdevices.device_name import ParsedName, parsed_name_to_string
from irdevices.ir.attributes import GpuDeviceMetadata


class RuntimeDevices:
    """Ordered device names with per-device GPU metadata."""

    def __init__(self) -> None:
        self._names: list[ParsedName] = []
        self._gpu_metadata: dict[str, GpuDeviceMetadata] = {}

    def add_device(self, name: ParsedName) -> None:
        self._names.append(name)

    def add_gpu_device(self, name: ParsedName, metadata: GpuDeviceMetadata) -> None:
        self._names.append(name)
        self._gpu_metadata[parsed_name_to_string(name)] = metadata

    def device_names(self) -> list[ParsedName]:
        return list(self._names)

    def num_devices(self) -> int:
        return len(self._names)

    def get_gpu_device_metadata(self, name: ParsedName) -> Optional[GpuDeviceMetadata]:
        """Return the GPU metadata recorded for ``name``, or None."""
        return self._gpu_metadata.get(parsed_name_to_string(name))

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        names = [parsed_name_to_string(n) for n in self._names]
        return f"RuntimeDevices({names!r}, gpus={sorted(self._gpu_metadata)!r})"
