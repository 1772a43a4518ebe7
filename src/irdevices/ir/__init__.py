"""
irdevices IR Primitives

Attribute tree values and the module op that owns them.
"""
from irdevices.ir.attributes import (
    ArrayAttr,
    Attribute,
    BoolAttr,
    DictionaryAttr,
    GpuDeviceMetadata,
    IntegerAttr,
    StringAttr,
    attribute_from_dict,
    attribute_from_json,
    bool_attr,
    dictionary_attr,
    empty_dictionary_attr,
    i32_array_attr,
    i32_attr,
    string_attr,
)
from irdevices.ir.module import ModuleOp

__all__ = [
    "ArrayAttr",
    "Attribute",
    "BoolAttr",
    "DictionaryAttr",
    "GpuDeviceMetadata",
    "IntegerAttr",
    "ModuleOp",
    "StringAttr",
    "attribute_from_dict",
    "attribute_from_json",
    "bool_attr",
    "dictionary_attr",
    "empty_dictionary_attr",
    "i32_array_attr",
    "i32_attr",
    "string_attr",
]
