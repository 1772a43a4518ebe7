"""
irdevices Attribute Tree

Immutable attribute values used for IR metadata. The set of kinds is
closed; every value carries an AttrKind tag so read sites can match
on it exhaustively.

This module provides:
- Attribute: Base class of all attribute values
- DictionaryAttr, ArrayAttr, IntegerAttr, BoolAttr, StringAttr
- GpuDeviceMetadata: Compute capability record attached to GPU devices
- Builder helpers: bool_attr(), i32_attr(), i32_array_attr(), ...
- attribute_from_dict(): Inverse of Attribute.to_dict()
"""
from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, ClassVar, Final, Iterable, Iterator, Mapping, Optional, Union

from irdevices.constants import GPU_METADATA_MNEMONIC
from irdevices.enums import AttrKind

INT32_MIN: Final[int] = -(2 ** 31)
INT32_MAX: Final[int] = 2 ** 31 - 1


def _check_int_range(value: int, width: int) -> None:
    lo = -(2 ** (width - 1))
    hi = 2 ** (width - 1) - 1
    if not lo <= value <= hi:
        raise ValueError(f"{value} does not fit in a signed {width}-bit integer")


class Attribute(ABC):
    """Base class of all attribute values.

    Subclasses are frozen dataclasses and set the ``kind`` class
    attribute.
    """

    __slots__ = ()

    kind: ClassVar[AttrKind]

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """Serialize to a tagged, JSON-compatible dictionary."""
        ...

    def to_json(self) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict())


@dataclass(frozen=True, slots=True)
class IntegerAttr(Attribute):
    """Signed fixed-width integer.

    Attributes:
        value: Integer value
        width: Bit width (value must fit)
    """

    kind: ClassVar[AttrKind] = AttrKind.INTEGER

    value: int
    width: int = 64

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"IntegerAttr value must be int, got {type(self.value).__name__}")
        if self.width <= 0:
            raise ValueError(f"Invalid integer width: {self.width}")
        _check_int_range(self.value, self.width)

    def __str__(self) -> str:
        return f"{self.value} : i{self.width}"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "value": self.value, "width": self.width}


@dataclass(frozen=True, slots=True)
class BoolAttr(Attribute):
    """Boolean flag."""

    kind: ClassVar[AttrKind] = AttrKind.BOOL

    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "value": self.value}


@dataclass(frozen=True, slots=True)
class StringAttr(Attribute):
    """UTF-8 string."""

    kind: ClassVar[AttrKind] = AttrKind.STRING

    value: str

    def __str__(self) -> str:
        return json.dumps(self.value)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "value": self.value}


@dataclass(frozen=True, slots=True)
class ArrayAttr(Attribute):
    """Ordered sequence of attributes."""

    kind: ClassVar[AttrKind] = AttrKind.ARRAY

    elements: tuple[Attribute, ...] = ()

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[Attribute]:
        return iter(self.elements)

    def __getitem__(self, index: int) -> Attribute:
        return self.elements[index]

    def __str__(self) -> str:
        return "[" + ", ".join(str(e) for e in self.elements) + "]"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "elements": [e.to_dict() for e in self.elements],
        }


@dataclass(frozen=True, slots=True)
class DictionaryAttr(Attribute):
    """Ordered, string-keyed mapping of attributes.

    Entries keep their insertion order. Keys are unique.

    Attributes:
        entries: Tuple of (name, value) pairs
    """

    kind: ClassVar[AttrKind] = AttrKind.DICTIONARY

    entries: tuple[tuple[str, Attribute], ...] = ()
    _index: Mapping[str, Attribute] = field(
        init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        index: dict[str, Attribute] = {}
        for name, value in self.entries:
            if name in index:
                raise ValueError(f"Duplicate dictionary key: {name!r}")
            index[name] = value
        object.__setattr__(self, "_index", MappingProxyType(index))

    @classmethod
    def from_pairs(
        cls, pairs: Union[Mapping[str, Attribute], Iterable[tuple[str, Attribute]]]
    ) -> DictionaryAttr:
        """Build a dictionary from a mapping or an iterable of pairs."""
        if isinstance(pairs, Mapping):
            pairs = pairs.items()
        return cls(tuple((name, value) for name, value in pairs))

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self.entries)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def get(self, name: str) -> Optional[Attribute]:
        """Return the value stored under ``name``, or None."""
        return self._index.get(name)

    def keys(self) -> list[str]:
        return [name for name, _ in self.entries]

    def items(self) -> tuple[tuple[str, Attribute], ...]:
        return self.entries

    def empty(self) -> bool:
        return not self.entries

    def __str__(self) -> str:
        body = ", ".join(f"{json.dumps(name)} = {value}" for name, value in self.entries)
        return "{" + body + "}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "entries": [[name, value.to_dict()] for name, value in self.entries],
        }


@dataclass(frozen=True, slots=True)
class GpuDeviceMetadata(Attribute):
    """GPU compute capability attached to a device entry.

    Attributes:
        cc_major: Compute capability major version (int32)
        cc_minor: Compute capability minor version (int32)
    """

    kind: ClassVar[AttrKind] = AttrKind.GPU_DEVICE_METADATA

    cc_major: int
    cc_minor: int

    def __post_init__(self) -> None:
        _check_int_range(self.cc_major, 32)
        _check_int_range(self.cc_minor, 32)

    @property
    def compute_capability(self) -> tuple[int, int]:
        """Return (major, minor)."""
        return (self.cc_major, self.cc_minor)

    def __str__(self) -> str:
        return (
            f"#{GPU_METADATA_MNEMONIC}<cc_major = {self.cc_major}, "
            f"cc_minor = {self.cc_minor}>"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "cc_major": self.cc_major,
            "cc_minor": self.cc_minor,
        }


# =============================================================================
# Builder helpers
# =============================================================================

def bool_attr(value: bool) -> BoolAttr:
    return BoolAttr(bool(value))


def i32_attr(value: int) -> IntegerAttr:
    return IntegerAttr(value, width=32)


def i32_array_attr(values: Iterable[int]) -> ArrayAttr:
    return ArrayAttr(tuple(i32_attr(v) for v in values))


def string_attr(value: str) -> StringAttr:
    return StringAttr(value)


def dictionary_attr(
    pairs: Union[Mapping[str, Attribute], Iterable[tuple[str, Attribute]]] = (),
) -> DictionaryAttr:
    return DictionaryAttr.from_pairs(pairs)


def empty_dictionary_attr() -> DictionaryAttr:
    return DictionaryAttr()


def attribute_from_dict(d: Mapping[str, Any]) -> Attribute:
    """Deserialize an attribute produced by ``Attribute.to_dict``.

    Args:
        d: Tagged dictionary.

    Returns:
        Attribute instance.

    Raises:
        ValueError: If the tag is unknown or the payload is malformed.
    """
    try:
        kind = AttrKind(d["kind"])
    except (KeyError, ValueError) as e:
        raise ValueError(f"Unknown attribute payload: {d!r}") from e

    try:
        match kind:
            case AttrKind.DICTIONARY:
                return DictionaryAttr(
                    tuple((name, attribute_from_dict(v)) for name, v in d["entries"])
                )
            case AttrKind.ARRAY:
                return ArrayAttr(tuple(attribute_from_dict(e) for e in d["elements"]))
            case AttrKind.INTEGER:
                return IntegerAttr(d["value"], width=d.get("width", 64))
            case AttrKind.BOOL:
                return BoolAttr(bool(d["value"]))
            case AttrKind.STRING:
                return StringAttr(d["value"])
            case AttrKind.GPU_DEVICE_METADATA:
                return GpuDeviceMetadata(d["cc_major"], d["cc_minor"])
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed {kind.value} attribute payload: {d!r}") from e


def attribute_from_json(json_str: str) -> Attribute:
    """Deserialize an attribute from its JSON form."""
    return attribute_from_dict(json.loads(json_str))
