"""
irdevices Constants

Names shared by the encoder and the decoders. The reserved attribute
name is part of the IR interchange format and must not change.
"""
from __future__ import annotations

from typing import Final

# Module attribute holding the device roster.
DEVICES_ATTR: Final[str] = "tf.devices"

# Device type whose descriptions carry a compute capability.
GPU_DEVICE_TYPE: Final[str] = "GPU"
CPU_DEVICE_TYPE: Final[str] = "CPU"

# Mnemonic used when printing GpuDeviceMetadata attributes.
GPU_METADATA_MNEMONIC: Final[str] = "tf.gpu_device_metadata"
