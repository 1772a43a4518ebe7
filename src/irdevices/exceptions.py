"""
irdevices Exception Hierarchy

Custom exceptions raised by the device codec, the device name grammar,
and the inventory and configuration loaders.
"""
from __future__ import annotations

from typing import Any, Optional

from irdevices.enums import ErrorKind


class IRDevicesError(Exception):
    """Base exception for all irdevices errors.

    All irdevices-specific exceptions inherit from this class,
    allowing callers to catch every codec failure with a single
    except clause.

    Attributes:
        message: Human-readable error description.
        context: Optional dict of additional context for debugging.
        kind: ErrorKind classifying the failure, if any.
    """

    kind: Optional[ErrorKind] = None

    def __init__(
        self,
        message: str,
        *,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        """Initialize IRDevicesError.

        Args:
            message: Error message.
            context: Optional context dict.
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        ctx_str = f", context={self.context}" if self.context else ""
        return f"{self.__class__.__name__}({self.message!r}{ctx_str})"


class InvalidAttributeTypeError(IRDevicesError):
    """Raised when the devices attribute has an unexpected shape.

    This occurs when:
    - The reserved attribute is present but is not a dictionary
    - A dictionary entry holds neither an empty record nor GPU metadata
      (strict runtime decoding only)

    Attributes:
        attr_name: Name of the offending attribute.
        got: AttrKind value that was found.
        key: Dictionary key of the offending entry, if any.
    """

    kind = ErrorKind.INVALID_ATTRIBUTE_TYPE

    def __init__(
        self,
        attr_name: str,
        got: str,
        *,
        key: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        """Initialize InvalidAttributeTypeError.

        Args:
            attr_name: Attribute name.
            got: Kind of the attribute actually found.
            key: Dictionary key of the bad entry.
            message: Optional custom message.
        """
        self.attr_name = attr_name
        self.got = got
        self.key = key

        if message is None:
            if key is None:
                message = f"bad {attr_name} attribute: expected dictionary, got {got}"
            else:
                message = (
                    f"bad {attr_name} attribute: entry '{key}' has unsupported "
                    f"metadata of kind {got}"
                )

        super().__init__(
            message,
            context={"attr_name": attr_name, "got": got, "key": key},
        )


class InvalidDeviceNameError(IRDevicesError):
    """Raised when a string is not a valid device full name.

    Attributes:
        device_name: The string that failed to parse.
        reason: Why it was rejected.
    """

    kind = ErrorKind.INVALID_DEVICE_NAME

    def __init__(
        self,
        device_name: str,
        reason: str = "does not match the device name grammar",
        *,
        message: Optional[str] = None,
    ) -> None:
        """Initialize InvalidDeviceNameError.

        Args:
            device_name: Rejected device name.
            reason: Rejection reason.
            message: Optional custom message.
        """
        self.device_name = device_name
        self.reason = reason

        if message is None:
            message = f"bad device name '{device_name}': {reason}"

        super().__init__(
            message,
            context={"device_name": device_name, "reason": reason},
        )


class DuplicateDeviceError(IRDevicesError):
    """Raised when a device is added twice to a DeviceSet.

    Attributes:
        device_name: Canonical name of the duplicated device.
    """

    kind = ErrorKind.DUPLICATE_DEVICE

    def __init__(self, device_name: str) -> None:
        """Initialize DuplicateDeviceError.

        Args:
            device_name: Canonical device name.
        """
        self.device_name = device_name
        super().__init__(
            f"Device '{device_name}' is already in the device set",
            context={"device_name": device_name},
        )


class ConfigurationError(IRDevicesError):
    """Raised when a configuration or inventory file is invalid."""

    kind = ErrorKind.CONFIGURATION

    def __init__(
        self,
        message: str,
        *,
        config_key: Optional[str] = None,
        expected: Optional[Any] = None,
        got: Optional[Any] = None,
    ) -> None:
        """Initialize ConfigurationError.

        Args:
            message: Error message.
            config_key: The configuration key with the error.
            expected: Expected value or type.
            got: Actual value received.
        """
        self.config_key = config_key
        self.expected = expected
        self.got = got

        super().__init__(
            message,
            context={
                "config_key": config_key,
                "expected": expected,
                "got": got,
            },
        )
