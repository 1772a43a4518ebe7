"""
Test suite for the attribute tree

Tests attribute kinds, immutability, dictionary ordering, integer
ranges, textual form and tagged serialization.
"""
import dataclasses

import pytest


class TestAttributeKinds:
    """Each attribute class carries its AttrKind tag."""

    def test_kinds(self):
        """Kind tags match classes."""
        from irdevices.enums import AttrKind
        from irdevices.ir import (
            ArrayAttr,
            BoolAttr,
            DictionaryAttr,
            GpuDeviceMetadata,
            IntegerAttr,
            StringAttr,
        )

        assert DictionaryAttr().kind is AttrKind.DICTIONARY
        assert ArrayAttr().kind is AttrKind.ARRAY
        assert IntegerAttr(1).kind is AttrKind.INTEGER
        assert BoolAttr(True).kind is AttrKind.BOOL
        assert StringAttr("x").kind is AttrKind.STRING
        assert GpuDeviceMetadata(7, 0).kind is AttrKind.GPU_DEVICE_METADATA

    def test_attributes_are_frozen(self):
        """Attribute values cannot be mutated."""
        from irdevices.ir import GpuDeviceMetadata, i32_attr

        with pytest.raises(dataclasses.FrozenInstanceError):
            i32_attr(1).value = 2  # type: ignore[misc]
        with pytest.raises(dataclasses.FrozenInstanceError):
            GpuDeviceMetadata(7, 0).cc_major = 8  # type: ignore[misc]

    def test_attributes_are_hashable(self):
        """Equal attributes hash equal."""
        from irdevices.ir import GpuDeviceMetadata, dictionary_attr

        a = dictionary_attr({"k": GpuDeviceMetadata(7, 0)})
        b = dictionary_attr({"k": GpuDeviceMetadata(7, 0)})
        assert a == b
        assert hash(a) == hash(b)


class TestDictionaryAttr:
    """Test ordered dictionaries."""

    def test_insertion_order(self):
        """Keys keep insertion order."""
        from irdevices.ir import dictionary_attr, i32_attr

        d = dictionary_attr([("b", i32_attr(1)), ("a", i32_attr(2))])
        assert d.keys() == ["b", "a"]
        assert list(d) == ["b", "a"]

    def test_get_and_contains(self):
        """Lookup by key."""
        from irdevices.ir import dictionary_attr, i32_attr

        d = dictionary_attr({"a": i32_attr(2)})
        assert "a" in d
        assert "b" not in d
        assert d.get("a") == i32_attr(2)
        assert d.get("b") is None

    def test_duplicate_keys_rejected(self):
        """Duplicate keys raise ValueError."""
        from irdevices.ir import dictionary_attr, i32_attr

        with pytest.raises(ValueError, match="Duplicate"):
            dictionary_attr([("a", i32_attr(1)), ("a", i32_attr(2))])

    def test_empty(self):
        """Empty dictionary reports empty()."""
        from irdevices.ir import empty_dictionary_attr

        assert empty_dictionary_attr().empty()
        assert len(empty_dictionary_attr()) == 0

    def test_order_matters_for_equality(self):
        """Dictionaries with different order are different values."""
        from irdevices.ir import dictionary_attr, i32_attr

        a = dictionary_attr([("x", i32_attr(1)), ("y", i32_attr(2))])
        b = dictionary_attr([("y", i32_attr(2)), ("x", i32_attr(1))])
        assert a != b


class TestIntegerAttr:
    """Test fixed-width integers."""

    def test_i32_bounds(self):
        """i32 accepts the int32 range only."""
        from irdevices.ir import i32_attr
        from irdevices.ir.attributes import INT32_MAX, INT32_MIN

        assert i32_attr(INT32_MAX).value == INT32_MAX
        assert i32_attr(INT32_MIN).value == INT32_MIN
        with pytest.raises(ValueError):
            i32_attr(INT32_MAX + 1)
        with pytest.raises(ValueError):
            i32_attr(INT32_MIN - 1)

    def test_rejects_bool(self):
        """bool is not accepted as an integer payload."""
        from irdevices.ir import IntegerAttr

        with pytest.raises(TypeError):
            IntegerAttr(True)

    def test_gpu_metadata_range(self):
        """GPU metadata components are int32."""
        from irdevices.ir import GpuDeviceMetadata

        with pytest.raises(ValueError):
            GpuDeviceMetadata(2 ** 31, 0)


class TestTextualForm:
    """Test the printed form of attributes."""

    @pytest.mark.parametrize(
        "factory, expected",
        [
            (lambda ir: ir.i32_attr(8), "8 : i32"),
            (lambda ir: ir.bool_attr(False), "false"),
            (lambda ir: ir.string_attr("a\"b"), '"a\\"b"'),
            (lambda ir: ir.i32_array_attr([1, 2]), "[1 : i32, 2 : i32]"),
            (lambda ir: ir.empty_dictionary_attr(), "{}"),
            (
                lambda ir: ir.GpuDeviceMetadata(8, 6),
                "#tf.gpu_device_metadata<cc_major = 8, cc_minor = 6>",
            ),
        ],
    )
    def test_str(self, factory, expected):
        """Attributes print in MLIR-like syntax."""
        import irdevices.ir as ir

        assert str(factory(ir)) == expected

    def test_dictionary_str(self):
        """Dictionary keys are quoted."""
        from irdevices.ir import dictionary_attr, empty_dictionary_attr

        d = dictionary_attr({"/job:w/device:CPU:0": empty_dictionary_attr()})
        assert str(d) == '{"/job:w/device:CPU:0" = {}}'


class TestSerialization:
    """Test tagged JSON serialization."""

    def test_nested_round_trip(self):
        """Nested attributes survive to_json/attribute_from_json."""
        from irdevices.ir import (
            GpuDeviceMetadata,
            attribute_from_json,
            bool_attr,
            dictionary_attr,
            i32_array_attr,
            string_attr,
        )

        attr = dictionary_attr(
            [
                ("gpu", GpuDeviceMetadata(9, 0)),
                ("flags", i32_array_attr([1, 2, 3])),
                ("on", bool_attr(True)),
                ("name", string_attr("x")),
            ]
        )
        restored = attribute_from_json(attr.to_json())
        assert restored == attr
        assert restored.keys() == ["gpu", "flags", "on", "name"]

    def test_to_dict_shape(self):
        """GPU metadata serializes to a tagged dict."""
        from irdevices.ir import GpuDeviceMetadata

        assert GpuDeviceMetadata(7, 5).to_dict() == {
            "kind": "gpu_device_metadata",
            "cc_major": 7,
            "cc_minor": 5,
        }

    def test_unknown_kind(self):
        """Unknown tags raise ValueError."""
        from irdevices.ir import attribute_from_dict

        with pytest.raises(ValueError):
            attribute_from_dict({"kind": "float", "value": 1.0})
        with pytest.raises(ValueError):
            attribute_from_dict({"value": 1})

    @pytest.mark.parametrize(
        "payload",
        [
            {"kind": "dictionary"},
            {"kind": "dictionary", "entries": 3},
            {"kind": "array", "elements": None},
            {"kind": "integer"},
            {"kind": "gpu_device_metadata", "cc_major": 7},
            {"kind": "gpu_device_metadata", "cc_major": "seven", "cc_minor": 0},
        ],
    )
    def test_malformed_payload(self, payload):
        """Tagged payloads with missing or mistyped fields raise ValueError."""
        from irdevices.ir import attribute_from_dict

        with pytest.raises(ValueError, match="Malformed"):
            attribute_from_dict(payload)

    def test_malformed_module_json(self):
        """ModuleOp.from_json reports malformed attributes as ValueError."""
        import json

        from irdevices.ir import ModuleOp

        payload = json.dumps(
            {"name": "main", "attributes": [["tf.devices", {"kind": "dictionary"}]]}
        )
        with pytest.raises(ValueError):
            ModuleOp.from_json(payload)


class TestAttributeBase:
    """Test the abstract attribute base."""

    def test_base_is_abstract(self):
        """Attribute cannot be instantiated."""
        from irdevices.ir import Attribute

        with pytest.raises(TypeError):
            Attribute()  # type: ignore[abstract]

    def test_subclass_without_to_dict_fails_on_creation(self):
        """A subclass missing to_dict fails when instantiated."""
        from irdevices.ir import Attribute

        class Incomplete(Attribute):
            __slots__ = ()

        with pytest.raises(TypeError):
            Incomplete()  # type: ignore[abstract]
