"""
irdevices Device Name Grammar

Parses and formats fully-qualified device names such as
``/job:worker/replica:0/task:0/device:GPU:1``.

This module provides:
- ParsedName: Structured decomposition of a device name
- parse_full_name(): Parse a device name, raising on malformed input
- try_parse_full_name(): Parse a device name, returning None on failure
- parsed_name_to_string(): Canonical formatting of a ParsedName
- device_ordinal(): Device id of a device string

Grammar (each component optional, in this order, repeatable):
    /job:<name>|*  /replica:<int>|*  /task:<int>|*
    /device:<type>[:<int>|:*]  or  /device:*
    /cpu:<int>|*   /gpu:<int>|*     (legacy, either case)
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final, Optional

from irdevices.constants import CPU_DEVICE_TYPE, GPU_DEVICE_TYPE
from irdevices.exceptions import InvalidDeviceNameError

_NAME_RE: Final = re.compile(r"[a-zA-Z][_a-zA-Z0-9]*")
_NUMBER_RE: Final = re.compile(r"[0-9]+")

_LEGACY_PREFIXES: Final[tuple[tuple[str, str], ...]] = (
    ("/cpu:", CPU_DEVICE_TYPE),
    ("/CPU:", CPU_DEVICE_TYPE),
    ("/gpu:", GPU_DEVICE_TYPE),
    ("/GPU:", GPU_DEVICE_TYPE),
)


@dataclass(frozen=True, slots=True)
class ParsedName:
    """Structured device name.

    A component is None when it was omitted or given as a wildcard.

    Attributes:
        job: Job name (e.g. "worker")
        replica: Replica index
        task: Task index
        type: Device type (e.g. "CPU", "GPU")
        id: Device index within its type
    """

    job: Optional[str] = None
    replica: Optional[int] = None
    task: Optional[int] = None
    type: Optional[str] = None
    id: Optional[int] = None

    @property
    def has_job(self) -> bool:
        return self.job is not None

    @property
    def has_replica(self) -> bool:
        return self.replica is not None

    @property
    def has_task(self) -> bool:
        return self.task is not None

    @property
    def has_type(self) -> bool:
        return self.type is not None

    @property
    def has_id(self) -> bool:
        return self.id is not None

    def __str__(self) -> str:
        """Return canonical device name."""
        return parsed_name_to_string(self)


class _Cursor:
    """Consumes a device name left to right."""

    __slots__ = ("text", "pos")

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def done(self) -> bool:
        return self.pos >= len(self.text)

    def consume(self, prefix: str) -> bool:
        if self.text.startswith(prefix, self.pos):
            self.pos += len(prefix)
            return True
        return False

    def consume_re(self, pattern: re.Pattern[str]) -> Optional[str]:
        match = pattern.match(self.text, self.pos)
        if match is None:
            return None
        self.pos = match.end()
        return match.group(0)

    def consume_number(self) -> Optional[int]:
        digits = self.consume_re(_NUMBER_RE)
        return int(digits) if digits is not None else None


def try_parse_full_name(fullname: str) -> Optional[ParsedName]:
    """Parse a device full name.

    Args:
        fullname: Device name string.

    Returns:
        ParsedName, or None when the string does not follow the grammar.

    Example:
        >>> try_parse_full_name("/job:worker/replica:0/task:0/device:CPU:0")
        ParsedName(job='worker', replica=0, task=0, type='CPU', id=0)
        >>> try_parse_full_name("bad_device") is None
        True
    """
    fields: dict[str, object] = {}
    if fullname == "/":
        return ParsedName()

    cur = _Cursor(fullname)
    while not cur.done():
        progress = False

        if cur.consume("/job:"):
            if cur.consume("*"):
                fields["job"] = None
            else:
                job = cur.consume_re(_NAME_RE)
                if job is None:
                    return None
                fields["job"] = job
            progress = True

        for component in ("replica", "task"):
            if cur.consume(f"/{component}:"):
                if cur.consume("*"):
                    fields[component] = None
                else:
                    number = cur.consume_number()
                    if number is None:
                        return None
                    fields[component] = number
                progress = True

        if cur.consume("/device:"):
            if cur.consume("*"):
                fields["type"] = None
            else:
                device_type = cur.consume_re(_NAME_RE)
                if device_type is None:
                    return None
                fields["type"] = device_type
            fields["id"] = None
            if cur.consume(":") and not cur.consume("*"):
                number = cur.consume_number()
                if number is None:
                    return None
                fields["id"] = number
            progress = True

        for prefix, device_type in _LEGACY_PREFIXES:
            if cur.consume(prefix):
                fields["type"] = device_type
                fields["id"] = None
                if not cur.consume("*"):
                    number = cur.consume_number()
                    if number is None:
                        return None
                    fields["id"] = number
                progress = True
                break

        if not progress:
            return None

    return ParsedName(**fields)  # type: ignore[arg-type]


def parse_full_name(fullname: str) -> ParsedName:
    """Parse a device full name.

    Args:
        fullname: Device name string.

    Returns:
        ParsedName.

    Raises:
        InvalidDeviceNameError: If the string does not follow the grammar.
    """
    parsed = try_parse_full_name(fullname)
    if parsed is None:
        raise InvalidDeviceNameError(fullname)
    return parsed


def parsed_name_to_string(pn: ParsedName) -> str:
    """Format a ParsedName in canonical form.

    Absent components are skipped; a typed device without an id is
    written with a ``*`` id.

    Args:
        pn: Parsed device name.

    Returns:
        Canonical device name string.

    Example:
        >>> parsed_name_to_string(parse_full_name("/job:w/replica:0/task:1/gpu:2"))
        '/job:w/replica:0/task:1/device:GPU:2'
    """
    parts: list[str] = []
    if pn.has_job:
        parts.append(f"/job:{pn.job}")
    if pn.has_replica:
        parts.append(f"/replica:{pn.replica}")
    if pn.has_task:
        parts.append(f"/task:{pn.task}")
    if pn.has_type:
        device_id = str(pn.id) if pn.has_id else "*"
        parts.append(f"/device:{pn.type}:{device_id}")
    return "".join(parts)


def canonicalize(fullname: str) -> str:
    """Return the canonical spelling of a device name.

    Raises:
        InvalidDeviceNameError: If the string does not follow the grammar.
    """
    return parsed_name_to_string(parse_full_name(fullname))


def device_ordinal(device_name: str) -> int:
    """Return the device id of a device string.

    Args:
        device_name: Device name, e.g. "/job:worker/replica:0/task:0/device:GPU:3".

    Returns:
        The device id (3 in the example above).

    Raises:
        InvalidDeviceNameError: If the name does not parse or has no id.
    """
    parsed = parse_full_name(device_name)
    if parsed.id is None:
        raise InvalidDeviceNameError(device_name, "device has no ordinal")
    return parsed.id
