"""
irdevices Device Inventory

Device records, ordered device sets, local detection, and YAML loading.
"""
from irdevices.inventory.detect import (
    detect_local_devices,
    format_gpu_description,
    local_device_name,
)
from irdevices.inventory.device_set import (
    Device,
    DeviceInventory,
    DeviceRecord,
    DeviceSet,
)
from irdevices.inventory.loader import device_set_from_dict, load_device_set

__all__ = [
    "Device",
    "DeviceInventory",
    "DeviceRecord",
    "DeviceSet",
    "detect_local_devices",
    "device_set_from_dict",
    "format_gpu_description",
    "load_device_set",
    "local_device_name",
]
