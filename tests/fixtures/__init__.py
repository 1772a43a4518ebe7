"""
irdevices Test Fixtures

Reusable test fixtures for irdevices tests.
"""
from tests.fixtures.devices import (
    CPU0,
    GPU0,
    GPU1,
    LOCAL_GPU0,
    LOCAL_GPU1,
    RawDevice,
    RawInventory,
    fake_cuda,
    make_device_set,
)

__all__ = [
    "CPU0",
    "GPU0",
    "GPU1",
    "LOCAL_GPU0",
    "LOCAL_GPU1",
    "RawDevice",
    "RawInventory",
    "fake_cuda",
    "make_device_set",
]
