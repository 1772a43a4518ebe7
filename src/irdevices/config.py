"""irdevices Configuration.

Process-wide settings for the device codec:
- configure() - Set global configuration
- get_config() - Get current configuration
- load_config() - Load configuration from a YAML file
"""
from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass, field, replace
from typing import Any, Optional

import yaml

from irdevices.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class CodecConfig:
    """Global codec configuration.

    Attributes:
        derive_gpu_metadata: If True, the encoder parses compute capability
            out of GPU descriptions. If False, every device gets an empty record.
        local_job: Job name used for locally detected devices.
        local_replica: Replica index used for locally detected devices.
        local_task: Task index used for locally detected devices.
    """
    derive_gpu_metadata: bool = True
    local_job: str = "localhost"
    local_replica: int = 0
    local_task: int = 0


@dataclass
class GlobalState:
    """Global state for irdevices."""
    config: CodecConfig = field(default_factory=CodecConfig)
    _lock: threading.Lock = field(default_factory=threading.Lock)


_global_state: Optional[GlobalState] = None
_state_lock = threading.Lock()

_FIELD_TYPES: dict[str, type] = {
    "derive_gpu_metadata": bool,
    "local_job": str,
    "local_replica": int,
    "local_task": int,
}


def _get_global_state() -> GlobalState:
    """Get or create global state."""
    global _global_state
    if _global_state is None:
        with _state_lock:
            if _global_state is None:
                _global_state = GlobalState()
    return _global_state


def _check_type(key: str, value: Any) -> None:
    expected = _FIELD_TYPES[key]
    # bool is an int subclass; keep the two apart
    if expected is int and isinstance(value, bool):
        ok = False
    else:
        ok = isinstance(value, expected)
    if not ok:
        raise ConfigurationError(
            f"Invalid value for '{key}': expected {expected.__name__}, "
            f"got {type(value).__name__}",
            config_key=key,
            expected=expected.__name__,
            got=value,
        )


def configure(
    derive_gpu_metadata: Optional[bool] = None,
    local_job: Optional[str] = None,
    local_replica: Optional[int] = None,
    local_task: Optional[int] = None,
    reset: bool = False,
) -> None:
    """Configure irdevices global settings.

    Settings persist for the lifetime of the process unless reset.

    Args:
        derive_gpu_metadata: Parse compute capability from GPU descriptions.
        local_job: Job name for locally detected devices.
        local_replica: Replica index for locally detected devices.
        local_task: Task index for locally detected devices.
        reset: If True, reset all settings to defaults first.

    Raises:
        ConfigurationError: If a value has the wrong type or is negative.

    Example:
        >>> import irdevices
        >>> irdevices.configure(local_job="worker", local_task=3)
        >>> irdevices.configure(reset=True)
    """
    updates = {
        "derive_gpu_metadata": derive_gpu_metadata,
        "local_job": local_job,
        "local_replica": local_replica,
        "local_task": local_task,
    }
    updates = {k: v for k, v in updates.items() if v is not None}
    for key, value in updates.items():
        _check_type(key, value)
    for key in ("local_replica", "local_task"):
        if key in updates and updates[key] < 0:
            raise ConfigurationError(
                f"'{key}' must be non-negative, got {updates[key]}",
                config_key=key,
                expected=">= 0",
                got=updates[key],
            )

    state = _get_global_state()
    with state._lock:
        if reset:
            state.config = CodecConfig()
        state.config = replace(state.config, **updates)

    if updates:
        logger.debug("Updated codec configuration: %s", updates)


def get_config() -> CodecConfig:
    """Get current irdevices configuration.

    Returns:
        Current configuration object (copy for safety).
    """
    state = _get_global_state()
    with state._lock:
        return replace(state.config)


def load_config(path: str) -> None:
    """Load configuration from YAML file.

    Args:
        path: Path to YAML configuration file.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ConfigurationError: If config file is invalid.

    YAML format::

        derive_gpu_metadata: true
        local_job: worker
        local_replica: 0
        local_task: 2
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in config file {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid config file format: {path}",
            expected="mapping",
            got=type(data).__name__,
        )

    unknown = sorted(set(data) - set(_FIELD_TYPES))
    if unknown:
        raise ConfigurationError(
            f"Unknown configuration keys in {path}: {unknown}",
            config_key=unknown[0],
        )

    configure(
        derive_gpu_metadata=data.get("derive_gpu_metadata"),
        local_job=data.get("local_job"),
        local_replica=data.get("local_replica"),
        local_task=data.get("local_task"),
    )
