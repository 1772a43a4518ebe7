"""
Local device detection.

Builds a DeviceSet describing the devices visible to this process,
using torch to enumerate CUDA devices. GPU descriptions follow the
``device: <i>, name: <name>, compute capability: <major>.<minor>``
layout so the encoder can recover the compute capability.
"""
from __future__ import annotations

import logging
from typing import Optional

from irdevices.config import get_config
from irdevices.constants import CPU_DEVICE_TYPE, GPU_DEVICE_TYPE
from irdevices.device_name import ParsedName, parsed_name_to_string
from irdevices.inventory.device_set import DeviceRecord, DeviceSet

logger = logging.getLogger(__name__)


def format_gpu_description(index: int, name: str, major: int, minor: int) -> str:
    """Format a physical GPU description.

    Example:
        >>> format_gpu_description(0, "Tesla V100-SXM2-16GB", 7, 0)
        'device: 0, name: Tesla V100-SXM2-16GB, compute capability: 7.0'
    """
    return f"device: {index}, name: {name}, compute capability: {major}.{minor}"


def local_device_name(
    device_type: str,
    device_id: int,
    job: Optional[str] = None,
    replica: Optional[int] = None,
    task: Optional[int] = None,
) -> str:
    """Full name of a local device, defaulting job/replica/task from config."""
    config = get_config()
    return parsed_name_to_string(
        ParsedName(
            job=config.local_job if job is None else job,
            replica=config.local_replica if replica is None else replica,
            task=config.local_task if task is None else task,
            type=device_type,
            id=device_id,
        )
    )


def detect_local_devices(include_gpus: bool = True) -> DeviceSet:
    """Detect the devices visible to this process.

    Args:
        include_gpus: If False, only the host CPU is reported.

    Returns:
        DeviceSet with one CPU device followed by one device per CUDA GPU.
    """
    import torch

    device_set = DeviceSet()
    device_set.add_device(DeviceRecord(local_device_name(CPU_DEVICE_TYPE, 0)))

    if not include_gpus or not torch.cuda.is_available():
        logger.debug("No CUDA devices reported; detected CPU only")
        return device_set

    for index in range(torch.cuda.device_count()):
        props = torch.cuda.get_device_properties(index)
        description = format_gpu_description(index, props.name, props.major, props.minor)
        device_set.add_device(
            DeviceRecord(local_device_name(GPU_DEVICE_TYPE, index), description)
        )
        logger.debug("Detected GPU %d: %s", index, description)

    return device_set
