"""
PyTest Configuration for irdevices Tests

Provides fixtures, markers, and test setup.
"""
import sys
from pathlib import Path

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

# Add repository root to path for tests.fixtures
root_path = Path(__file__).parent.parent
sys.path.insert(0, str(root_path))


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "gpu: mark test as requiring GPU")
    config.addinivalue_line("markers", "property: mark test as property-based")


@pytest.fixture(autouse=True)
def reset_codec_config():
    """Restore default codec configuration around every test."""
    from irdevices.config import configure

    configure(reset=True)
    yield
    configure(reset=True)


@pytest.fixture
def module():
    """Create an empty module."""
    from irdevices.ir import ModuleOp

    return ModuleOp.create()


@pytest.fixture
def three_device_set():
    """CPU:0, GPU:0 (compute capability 7.0) and GPU:1 (no description)."""
    from tests.fixtures.devices import CPU0, GPU0, GPU1, make_device_set

    return make_device_set(
        [(CPU0, ""), (GPU0, "compute capability: 7.0"), (GPU1, "")]
    )
