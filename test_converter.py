"""Tests for the Map Editor / Spooner -> YMAP converter"""

import pytest

from conftest import MAP_EDITOR_XML, SPOONER_XML
from ymap_modules.converter import (
    CARGEN_SCALE,
    convert_document,
    convert_spooner,
    create_car_generator,
    create_entity,
    resolve_model_name,
)
from ymap_modules.geometry import IDENTITY, Quaternion, Vector3
from ymap_modules.model_names import ModelNameTable
from ymap_modules.source_models import PositionRotation, SpoonerPlacement, SpoonerPlacements
from ymap_modules.source_xml import read_source_bytes
from ymap_modules.ymap import STATIC_FLAGS, YMapDocument


def _convert(xml: str, table: ModelNameTable = None) -> YMapDocument:
    _, doc = read_source_bytes(xml.encode("utf-8"))
    return convert_document(doc, table.lookup if table else None)


class TestEntityRule:
    def test_negative_w_is_flipped(self):
        ent = create_entity("prop", Vector3(), Quaternion(0.1, 0.2, 0.3, -0.5), static=True)
        assert ent.rotation == Quaternion(0.1, 0.2, 0.3, 0.5)

    def test_positive_w_is_conjugated(self):
        ent = create_entity("prop", Vector3(), Quaternion(0.1, 0.2, 0.3, 0.5), static=True)
        assert ent.rotation == Quaternion(-0.1, -0.2, -0.3, 0.5)

    def test_rotation_copied_when_not_conjugating(self):
        q = Quaternion(0.1, 0.2, 0.3, -0.5)
        ent = create_entity("prop", Vector3(), q, static=True, conjugate_rotation=False)
        assert ent.rotation == q

    def test_static_flag(self):
        assert create_entity("prop", Vector3(), IDENTITY, static=True).flags == STATIC_FLAGS
        dynamic = create_entity("prop", Vector3(), IDENTITY, static=False)
        assert dynamic.flags is None
        assert not dynamic.static_flag_present

    def test_position_copied(self):
        ent = create_entity("prop", Vector3(1.0, 2.0, 3.0), IDENTITY, static=False)
        assert ent.position == Vector3(1.0, 2.0, 3.0)
        assert ent.archetype_name == "prop"


class TestCarGeneratorRule:
    def test_identity_rotation(self):
        cg = create_car_generator("adder", Vector3(1.0, 2.0, 3.0), IDENTITY)
        assert cg.orient_x == 0.0
        assert cg.orient_y == 1.5
        assert cg.perpendicular_length == 1.5
        assert cg.position == Vector3(1.0, 2.0, 3.0)
        assert cg.car_model == "adder"

    def test_custom_scale(self):
        cg = create_car_generator("adder", Vector3(), IDENTITY, scale=2.0)
        assert (cg.orient_y, cg.perpendicular_length) == (2.0, 2.0)


class TestNaming:
    def test_fallback_hex(self):
        assert resolve_model_name(0x1A2B) == "0x1a2b"

    def test_lookup_wins(self):
        table = ModelNameTable({0x1A2B: "prop_a"})
        assert resolve_model_name(0x1A2B, table.lookup, "other") == "prop_a"

    def test_dialect_name_before_hex(self):
        assert resolve_model_name(0x1A2B, None, "prop_b") == "prop_b"

    def test_missing_hash_and_name(self):
        assert resolve_model_name(None, None, "prop_c") == "prop_c"
        with pytest.raises(ValueError):
            resolve_model_name(None)

    def test_spooner_model_name_used_directly(self):
        placements = SpoonerPlacements([
            SpoonerPlacement(model_hash=None, type=3, model_name="prop_bench_01a"),
            SpoonerPlacement(model_hash=None, type=2, hash_name="other", model_name="adder"),
        ])
        ymap = convert_spooner(placements)
        assert ymap.entities[0].archetype_name == "prop_bench_01a"
        assert ymap.car_generators[0].car_model == "adder"

        xml = "<SpoonerPlacements><Placement><ModelHash>prop_bench_01a</ModelHash><Type>3</Type></Placement></SpoonerPlacements>"
        assert _convert(xml).entities[0].archetype_name == "prop_bench_01a"


class TestMapEditor:
    def test_classification_and_order(self):
        ymap = _convert(MAP_EDITOR_XML)
        assert [e.archetype_name for e in ymap.entities] == ["0x1a2b", "0xffffffff", "0x64"]
        assert [c.car_model for c in ymap.car_generators] == ["0xb779a091"]

    def test_entity_rotations(self):
        ymap = _convert(MAP_EDITOR_XML)
        assert ymap.entities[0].rotation == Quaternion(0.5, 0.5, 0.5, 0.5)
        assert ymap.entities[1].rotation == Quaternion(-0.25, -0.5, 0.25, 0.5)

    def test_dynamic_or_door_is_not_static(self):
        ymap = _convert(MAP_EDITOR_XML)
        assert [e.flags for e in ymap.entities] == [STATIC_FLAGS, None, None]

    def test_lookup_names(self):
        ymap = _convert(MAP_EDITOR_XML, ModelNameTable.from_names(["adder"]))
        assert ymap.car_generators[0].car_model == "adder"

    def test_extents_recomputed(self):
        ymap = _convert(MAP_EDITOR_XML)
        assert ymap.streaming_extents_min == Vector3(-10000.0, -10000.0, -1000.0)
        assert ymap.streaming_extents_max == Vector3(10000.0, 10000.0, 5000.0)
        assert ymap.entities_extents_min == ymap.streaming_extents_min
        assert ymap.entities_extents_max == ymap.streaming_extents_max


class TestSpooner:
    def test_classification(self):
        ymap = _convert(SPOONER_XML)
        assert [e.archetype_name for e in ymap.entities] == ["0x1a2b", "prop_bench_01a"]
        assert [c.car_model for c in ymap.car_generators] == ["adder"]

    def test_rotation_not_conjugated(self):
        ymap = _convert(SPOONER_XML)
        assert ymap.entities[0].rotation == IDENTITY
        assert ymap.entities[0].position == Vector3(3.0, 6.0, 9.0)

    def test_only_dynamic_flag_counts(self):
        ymap = _convert(SPOONER_XML)
        assert [e.flags for e in ymap.entities] == [STATIC_FLAGS, None]

    def test_car_generator_orientation_follows_yaw(self):
        cg = _convert(SPOONER_XML).car_generators[0]
        assert cg.orient_x == pytest.approx(-CARGEN_SCALE)
        assert cg.orient_y == pytest.approx(0.0, abs=1e-9)
        assert cg.perpendicular_length == CARGEN_SCALE

    def test_lookup_precedes_hash_name(self):
        ymap = _convert(SPOONER_XML, ModelNameTable({0xDEADBEEF: "prop_resolved"}))
        assert ymap.entities[1].archetype_name == "prop_resolved"

    def test_unrecognised_type_is_skipped(self):
        placements = SpoonerPlacements([SpoonerPlacement(model_hash=0x1234, type=5)])
        ymap = convert_spooner(placements)
        assert ymap.entities == []
        assert ymap.car_generators == []
        assert ymap.streaming_extents_min == Vector3()

    def test_euler_position_rotation(self):
        placement = SpoonerPlacement(
            model_hash=1, type=3, position_rotation=PositionRotation(x=1.0, y=2.0, z=3.0, yaw=90.0)
        )
        ent = convert_spooner(SpoonerPlacements([placement])).entities[0]
        assert ent.position == Vector3(1.0, 2.0, 3.0)
        assert ent.rotation.z == pytest.approx(0.7071067811865476)


def test_conversion_replaces_document():
    first = _convert(MAP_EDITOR_XML)
    second = _convert(SPOONER_XML)
    assert first is not second
    assert len(first.entities) == 3
    assert len(second.entities) == 2


def test_ymap_passes_through():
    ymap = YMapDocument(name="x")
    assert convert_document(ymap) is ymap


def test_unknown_document_type():
    with pytest.raises(TypeError):
        convert_document(object())
