"""
Device inventory loader.

Loads a static device inventory from YAML, for offline compilation
and tests where no live device manager is available.

YAML format::

    devices:
      - name: /job:worker/replica:0/task:0/device:CPU:0
      - name: /job:worker/replica:0/task:0/device:GPU:0
        description: "compute capability: 8.0"
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Union

import yaml

from irdevices.exceptions import ConfigurationError
from irdevices.inventory.device_set import DeviceRecord, DeviceSet

logger = logging.getLogger(__name__)


def device_set_from_dict(data: Any, source: str = "<dict>") -> DeviceSet:
    """Build a DeviceSet from parsed YAML/JSON data.

    Args:
        data: Mapping with a 'devices' list.
        source: Name used in error messages.

    Returns:
        DeviceSet in document order.

    Raises:
        ConfigurationError: If the document has the wrong shape.
        InvalidDeviceNameError: If a device name does not parse.
        DuplicateDeviceError: If a device is listed twice.
    """
    if not isinstance(data, dict) or not isinstance(data.get("devices"), list):
        raise ConfigurationError(
            f"Invalid device inventory in {source}: expected a 'devices' list",
            config_key="devices",
            expected="list",
            got=type(data.get("devices") if isinstance(data, dict) else data).__name__,
        )

    device_set = DeviceSet()
    for i, entry in enumerate(data["devices"]):
        if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
            raise ConfigurationError(
                f"Invalid device entry #{i} in {source}: expected a mapping with 'name'",
                config_key=f"devices[{i}]",
                expected="mapping",
                got=entry,
            )
        description = entry.get("description", "")
        if not isinstance(description, str):
            raise ConfigurationError(
                f"Invalid description for device entry #{i} in {source}",
                config_key=f"devices[{i}].description",
                expected="str",
                got=description,
            )
        device_set.add_device(DeviceRecord.from_dict(entry))
    return device_set


def load_device_set(path: Union[str, Path]) -> DeviceSet:
    """Load a device inventory from a YAML file.

    Args:
        path: Path to the YAML file.

    Returns:
        DeviceSet in document order.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ConfigurationError: If the file is not a valid inventory.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Device inventory not found: {path}")

    with open(path, "r") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    device_set = device_set_from_dict(data, source=str(path))
    logger.debug("Loaded %d devices from %s", len(device_set), path)
    return device_set
