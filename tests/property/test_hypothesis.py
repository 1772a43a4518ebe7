"""Property-based tests using Hypothesis for irdevices.

Tests codec invariants across generated device inventories.
"""
from __future__ import annotations

from hypothesis import HealthCheck, given, settings, strategies as st

from irdevices import (
    DEVICES_ATTR,
    ModuleOp,
    attach_devices,
    extract_devices,
    lookup_gpu_metadata,
    parse_compute_capability,
    parse_full_name,
    parsed_name_to_string,
)
from irdevices.device_name import ParsedName
from irdevices.inventory import DeviceRecord, DeviceSet

# the autouse config reset fixture runs once per test, not per example
settings.register_profile(
    "irdevices", suppress_health_check=[HealthCheck.function_scoped_fixture]
)
settings.load_profile("irdevices")

_identifiers = st.from_regex(r"[a-zA-Z][_a-zA-Z0-9]{0,8}", fullmatch=True)
_indices = st.integers(min_value=0, max_value=1000)
_versions = st.integers(min_value=0, max_value=2 ** 31 - 1)

parsed_names = st.builds(
    ParsedName,
    job=st.none() | _identifiers,
    replica=st.none() | _indices,
    task=st.none() | _indices,
    type=st.none() | st.sampled_from(["CPU", "GPU", "TPU"]) | _identifiers,
    id=st.none() | _indices,
).filter(lambda pn: pn.type is not None or pn.id is None)


@st.composite
def device_sets(draw) -> DeviceSet:
    """Inventories of distinct fully-specified devices."""
    names = draw(
        st.lists(
            st.tuples(_identifiers, _indices, _indices, st.sampled_from(["CPU", "GPU"]), _indices),
            unique=True,
            max_size=8,
        )
    )
    records = []
    for job, replica, task, device_type, device_id in names:
        cc = draw(st.none() | st.tuples(_versions, _versions))
        desc = "" if cc is None else f"compute capability: {cc[0]}.{cc[1]}"
        records.append(
            DeviceRecord(f"/job:{job}/replica:{replica}/task:{task}/device:{device_type}:{device_id}", desc)
        )
    return DeviceSet(records)


class TestNameProperties:
    """Device name grammar invariants."""

    @given(parsed_names)
    def test_format_then_parse(self, pn: ParsedName) -> None:
        """Formatting and re-parsing yields the same name."""
        assert parse_full_name(parsed_name_to_string(pn)) == pn

    @given(parsed_names)
    def test_format_is_idempotent(self, pn: ParsedName) -> None:
        """Canonical form is a fixed point."""
        text = parsed_name_to_string(pn)
        assert parsed_name_to_string(parse_full_name(text)) == text


class TestComputeCapabilityProperties:
    """Compute capability parsing invariants."""

    @given(_versions, _versions, st.text(max_size=20), st.text(max_size=20))
    def test_embedded_token(self, major: int, minor: int, prefix: str, suffix: str) -> None:
        """A token surrounded by text is recognised."""
        desc = f"{prefix}, compute capability: {major}.{minor}, {suffix}"
        # the prefix may itself contain an earlier token
        if "compute capability:" not in prefix:
            assert parse_compute_capability(desc) == (major, minor)


class TestCodecProperties:
    """Encoder/decoder invariants."""

    @settings(max_examples=50)
    @given(device_sets())
    def test_round_trip_names(self, device_set: DeviceSet) -> None:
        """Decoded names equal parsed inventory names, in order."""
        module = ModuleOp.create()
        attach_devices(module, device_set)

        assert extract_devices(module) == [parse_full_name(d.full_name) for d in device_set]
        assert module.get_attr(DEVICES_ATTR).keys() == [d.full_name for d in device_set]

    @settings(max_examples=50)
    @given(device_sets())
    def test_metadata_only_for_gpus(self, device_set: DeviceSet) -> None:
        """Lookup returns metadata exactly for GPUs with a compute capability."""
        module = ModuleOp.create()
        attach_devices(module, device_set)

        for device in device_set:
            meta = lookup_gpu_metadata(module, device.parsed_name)
            expected = (
                parse_compute_capability(device.description)
                if device.device_type == "GPU"
                else None
            )
            if expected is None:
                assert meta is None
            else:
                assert meta is not None
                assert meta.compute_capability == expected
