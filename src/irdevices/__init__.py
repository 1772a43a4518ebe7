"""
irdevices - Device Metadata Codec for Compiler IR

Records the available execution devices on an IR module as a
structured attribute and recovers them during later passes.

Main APIs:
- irdevices.attach_devices(): Encode a device inventory onto a module
- irdevices.extract_devices(): Decode the ordered device names
- irdevices.lookup_gpu_metadata(): GPU compute capability of one device
- irdevices.extract_runtime_devices(): Names and GPU metadata in one pass
- irdevices.detect_local_devices(): Inventory of the devices on this host
"""

__version__ = "0.1.0"

from irdevices.codec import (
    attach_devices,
    extract_devices,
    extract_runtime_devices,
    lookup_gpu_metadata,
    parse_compute_capability,
)
from irdevices.config import (
    CodecConfig,
    configure,
    get_config,
    load_config,
)
from irdevices.constants import DEVICES_ATTR
from irdevices.device_name import (
    ParsedName,
    canonicalize,
    device_ordinal,
    parse_full_name,
    parsed_name_to_string,
    try_parse_full_name,
)
from irdevices.enums import AttrKind, ErrorKind
from irdevices.exceptions import (
    ConfigurationError,
    DuplicateDeviceError,
    InvalidAttributeTypeError,
    InvalidDeviceNameError,
    IRDevicesError,
)
from irdevices.inventory import (
    DeviceRecord,
    DeviceSet,
    detect_local_devices,
    load_device_set,
)
from irdevices.ir import (
    DictionaryAttr,
    GpuDeviceMetadata,
    ModuleOp,
)
from irdevices.runtime_devices import RuntimeDevices

__all__ = [
    # Version
    "__version__",
    # Codec
    "DEVICES_ATTR",
    "attach_devices",
    "extract_devices",
    "extract_runtime_devices",
    "lookup_gpu_metadata",
    "parse_compute_capability",
    "RuntimeDevices",
    # Device names
    "ParsedName",
    "canonicalize",
    "device_ordinal",
    "parse_full_name",
    "parsed_name_to_string",
    "try_parse_full_name",
    # Inventory
    "DeviceRecord",
    "DeviceSet",
    "detect_local_devices",
    "load_device_set",
    # IR
    "DictionaryAttr",
    "GpuDeviceMetadata",
    "ModuleOp",
    # Enums
    "AttrKind",
    "ErrorKind",
    # Configuration
    "CodecConfig",
    "configure",
    "get_config",
    "load_config",
    # Exceptions
    "IRDevicesError",
    "InvalidAttributeTypeError",
    "InvalidDeviceNameError",
    "DuplicateDeviceError",
    "ConfigurationError",
]
