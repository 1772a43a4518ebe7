"""
irdevices Device Codec

Attaches a device roster to a module under the reserved ``tf.devices``
attribute and reads it back.

This module provides:
- parse_compute_capability(): Recognise "compute capability: X.Y" in a description
- attach_devices(): Encode a device inventory onto a module
- extract_devices(): Decode the ordered device names of a module
- extract_runtime_devices(): Decode names and GPU metadata in one pass
- lookup_gpu_metadata(): GPU metadata of a single device, if recorded

Encoded form::

    tf.devices = {
      "/job:worker/replica:0/task:0/device:CPU:0" = {},
      "/job:worker/replica:0/task:0/device:GPU:0" =
          #tf.gpu_device_metadata<cc_major = 7, cc_minor = 0>
    }

Dictionary keys are the inventory's full device names, kept as spelled.
lookup_gpu_metadata() formats its ParsedName canonically, so only
devices recorded under canonical names can be looked up.
"""
from __future__ import annotations

import logging
import re
from typing import Final, Optional

from irdevices.config import get_config
from irdevices.constants import DEVICES_ATTR, GPU_DEVICE_TYPE
from irdevices.device_name import (
    ParsedName,
    parse_full_name,
    parsed_name_to_string,
    try_parse_full_name,
)
from irdevices.exceptions import (
    DuplicateDeviceError,
    InvalidAttributeTypeError,
    InvalidDeviceNameError,
)
from irdevices.inventory.device_set import DeviceInventory
from irdevices.ir.attributes import (
    INT32_MAX,
    Attribute,
    DictionaryAttr,
    GpuDeviceMetadata,
)
from irdevices.ir.module import ModuleOp
from irdevices.runtime_devices import RuntimeDevices

logger = logging.getLogger(__name__)

_COMPUTE_CAPABILITY_RE: Final = re.compile(r"compute capability: (\d+)\.(\d+)")


def parse_compute_capability(description: str) -> Optional[tuple[int, int]]:
    """Extract the compute capability from a device description.

    Args:
        description: Free-text physical device description.

    Returns:
        (major, minor), or None when no int32 "compute capability: X.Y"
        token is present.

    Example:
        >>> parse_compute_capability("device: 0, name: V100, compute capability: 7.0")
        (7, 0)
        >>> parse_compute_capability("") is None
        True
    """
    match = _COMPUTE_CAPABILITY_RE.search(description)
    if match is None:
        return None
    major, minor = int(match.group(1)), int(match.group(2))
    if major > INT32_MAX or minor > INT32_MAX:
        return None
    return major, minor


def _device_metadata(
    parsed_name: ParsedName, description: str, derive_gpu_metadata: bool
) -> Attribute:
    if derive_gpu_metadata and parsed_name.type == GPU_DEVICE_TYPE:
        cc = parse_compute_capability(description)
        if cc is not None:
            return GpuDeviceMetadata(cc_major=cc[0], cc_minor=cc[1])
    return DictionaryAttr()


def attach_devices(module: ModuleOp, device_set: Optional[DeviceInventory]) -> None:
    """Record a device inventory on ``module``.

    Replaces any previous ``tf.devices`` attribute. With ``device_set``
    None the module is left untouched.

    Args:
        module: Module to annotate.
        device_set: Ordered devices, or None when no devices are known.

    Raises:
        InvalidDeviceNameError: If a device name does not parse. The
            module is left unchanged.
        DuplicateDeviceError: If two devices share a canonical name.
    """
    if device_set is None:
        logger.debug("No device set provided; leaving %s unset", DEVICES_ATTR)
        return

    derive = get_config().derive_gpu_metadata
    entries: list[tuple[str, Attribute]] = []
    seen: set[str] = set()
    num_gpu_metadata = 0

    for device in device_set.devices:
        parsed = parse_full_name(device.full_name)
        canonical = parsed_name_to_string(parsed)
        if canonical in seen:
            raise DuplicateDeviceError(canonical)
        seen.add(canonical)

        metadata = _device_metadata(parsed, device.description, derive)
        if isinstance(metadata, GpuDeviceMetadata):
            num_gpu_metadata += 1
        entries.append((device.full_name, metadata))

    module.set_attr(DEVICES_ATTR, DictionaryAttr(tuple(entries)))
    logger.debug(
        "Attached %d devices (%d with GPU metadata) to module",
        len(entries),
        num_gpu_metadata,
    )


def _devices_dict(module: ModuleOp) -> Optional[DictionaryAttr]:
    """Return the reserved attribute, None if absent, raise if misshapen."""
    attr = module.get_attr(DEVICES_ATTR)
    match attr:
        case None:
            return None
        case DictionaryAttr():
            return attr
        case _:
            raise InvalidAttributeTypeError(DEVICES_ATTR, attr.kind.value)


def _parse_device_key(key: str) -> ParsedName:
    parsed = try_parse_full_name(key)
    if parsed is None:
        raise InvalidDeviceNameError(
            key, f"invalid device name in '{DEVICES_ATTR}' attribute"
        )
    return parsed


def extract_devices(module: ModuleOp) -> list[ParsedName]:
    """Read the ordered device names recorded on ``module``.

    Args:
        module: Module to read.

    Returns:
        Parsed device names in stored order; empty if no devices are recorded.

    Raises:
        InvalidAttributeTypeError: If ``tf.devices`` is not a dictionary.
        InvalidDeviceNameError: On the first key that is not a device name.
    """
    devices_attr = _devices_dict(module)
    if devices_attr is None:
        return []

    devices = [_parse_device_key(key) for key in devices_attr]
    logger.debug("Extracted %d devices from module", len(devices))
    return devices


def extract_runtime_devices(module: ModuleOp) -> RuntimeDevices:
    """Read device names and GPU metadata recorded on ``module``.

    Unlike extract_devices(), entry values are validated too: each must
    be an (empty) dictionary or GPU metadata.

    Raises:
        InvalidAttributeTypeError: If ``tf.devices`` or one of its values
            has an unexpected shape.
        InvalidDeviceNameError: On the first key that is not a device name.
    """
    runtime_devices = RuntimeDevices()
    devices_attr = _devices_dict(module)
    if devices_attr is None:
        return runtime_devices

    for key, value in devices_attr.items():
        parsed = _parse_device_key(key)
        match value:
            case GpuDeviceMetadata():
                runtime_devices.add_gpu_device(parsed, value)
            case DictionaryAttr():
                runtime_devices.add_device(parsed)
            case _:
                raise InvalidAttributeTypeError(DEVICES_ATTR, value.kind.value, key=key)

    return runtime_devices


def lookup_gpu_metadata(
    module: ModuleOp, parsed_name: ParsedName
) -> Optional[GpuDeviceMetadata]:
    """Return the GPU metadata recorded for one device.

    Never raises: a missing or misshapen attribute, an unknown device,
    and a device without GPU metadata all give None.

    Args:
        module: Module to read.
        parsed_name: Device to look up.

    Returns:
        GpuDeviceMetadata, or None.
    """
    devices_attr = module.get_attr(DEVICES_ATTR)
    if not isinstance(devices_attr, DictionaryAttr):
        return None

    match devices_attr.get(parsed_name_to_string(parsed_name)):
        case GpuDeviceMetadata() as metadata:
            return metadata
        case _:
            return None
