"""
irdevices Core Enumerations

Type-safe enums for attribute kinds and error kinds.
All enums inherit from (str, Enum) for JSON serialization compatibility.

This module provides:
- AttrKind: Tag of every attribute value in the attribute tree
- ErrorKind: Classification of codec failures
"""
from __future__ import annotations

from enum import Enum, unique


@unique
class AttrKind(str, Enum):
    """Attribute value kinds.

    The attribute tree is a closed set of variants. Read sites match
    on this tag instead of probing types.

    Members:
        DICTIONARY: Ordered string-keyed mapping of attributes
        ARRAY: Ordered sequence of attributes
        INTEGER: Fixed-width signed integer
        BOOL: Boolean flag
        STRING: UTF-8 string
        GPU_DEVICE_METADATA: GPU compute capability record
    """

    DICTIONARY = "dictionary"
    ARRAY = "array"
    INTEGER = "integer"
    BOOL = "bool"
    STRING = "string"
    GPU_DEVICE_METADATA = "gpu_device_metadata"


@unique
class ErrorKind(str, Enum):
    """Codec error classification.

    Members:
        INVALID_ATTRIBUTE_TYPE: Reserved attribute (or one of its entries) has the wrong shape
        INVALID_DEVICE_NAME: A device name does not follow the full-name grammar
        DUPLICATE_DEVICE: A device was added twice to an inventory
        CONFIGURATION: Configuration or inventory file is malformed
    """

    INVALID_ATTRIBUTE_TYPE = "invalid_attribute_type"
    INVALID_DEVICE_NAME = "invalid_device_name"
    DUPLICATE_DEVICE = "duplicate_device"
    CONFIGURATION = "configuration"
