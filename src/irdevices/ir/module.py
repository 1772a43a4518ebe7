"""
irdevices Module Op

A compilation unit owning a mutable, ordered attribute table.
Attribute values themselves are immutable; replacing an attribute
swaps the value stored under its name.
"""
from __future__ import annotations

import json
from typing import Any, Iterator, Optional

from irdevices.ir.attributes import Attribute, attribute_from_dict


class ModuleOp:
    """Top-level IR container with named attributes.

    Example:
        >>> from irdevices.ir import i32_attr
        >>> module = ModuleOp.create()
        >>> module.set_attr("tf.versions", i32_attr(1))
        >>> module.has_attr("tf.versions")
        True
    """

    __slots__ = ("_name", "_attrs")

    def __init__(self, name: Optional[str] = None) -> None:
        self._name = name
        self._attrs: dict[str, Attribute] = {}

    @classmethod
    def create(cls, name: Optional[str] = None) -> ModuleOp:
        """Create an empty module."""
        return cls(name)

    @property
    def name(self) -> Optional[str]:
        return self._name

    def get_attr(self, name: str) -> Optional[Attribute]:
        """Return the attribute stored under ``name``, or None."""
        return self._attrs.get(name)

    def set_attr(self, name: str, value: Attribute) -> None:
        """Set ``name`` to ``value``, replacing any previous value.

        Raises:
            ValueError: If the name is empty.
            TypeError: If the value is not an Attribute.
        """
        if not name:
            raise ValueError("Attribute name must be a non-empty string")
        if not isinstance(value, Attribute):
            raise TypeError(
                f"Attribute '{name}' must be an Attribute, got {type(value).__name__}"
            )
        self._attrs[name] = value

    def remove_attr(self, name: str) -> Optional[Attribute]:
        """Remove ``name`` and return its previous value, if any."""
        return self._attrs.pop(name, None)

    def has_attr(self, name: str) -> bool:
        return name in self._attrs

    def attributes(self) -> Iterator[tuple[str, Attribute]]:
        """Iterate (name, value) pairs in insertion order."""
        return iter(list(self._attrs.items()))

    def __str__(self) -> str:
        header = "module"
        if self._name is not None:
            header += f" @{self._name}"
        if self._attrs:
            body = ", ".join(f"{n} = {v}" for n, v in self._attrs.items())
            header += f" attributes {{{body}}}"
        return header + " {\n}"

    def __repr__(self) -> str:
        return f"ModuleOp(name={self._name!r}, attrs={list(self._attrs)!r})"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON compatibility.

        Returns:
            Dict with 'name' and ordered 'attributes' pairs.
        """
        return {
            "name": self._name,
            "attributes": [[n, v.to_dict()] for n, v in self._attrs.items()],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ModuleOp:
        """Deserialize from dictionary.

        Args:
            d: Dict produced by ``to_dict``.

        Returns:
            New ModuleOp instance.
        """
        module = cls(d.get("name"))
        for name, value in d.get("attributes", []):
            module.set_attr(name, attribute_from_dict(value))
        return module

    @classmethod
    def from_json(cls, json_str: str) -> ModuleOp:
        return cls.from_dict(json.loads(json_str))
