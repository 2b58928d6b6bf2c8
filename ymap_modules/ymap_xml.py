"""
YMAP XML (de)serialisation
--------------------------
Reads and writes the CodeWalker .ymap.xml layout (root <CMapData>).

Output is UTF-8, indented, without namespace declarations, and starts with
`<?xml version="1.0" encoding="utf-8"?>`.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import List

import numpy as np

from .errors import ParseError
from .geometry import Quaternion, Vector3
from .source_xml import parse_xml_bytes
from .ymap import CarGenerator, Entity, YMapDocument

logger = logging.getLogger(__name__)

XML_DECLARATION = b'<?xml version="1.0" encoding="utf-8"?>\n'

# Written empty, kept for CodeWalker compatibility
_EMPTY_MAP_SECTIONS = (
    "containerLods",
    "boxOccluders",
    "occludeModels",
    "physicsDictionaries",
)


def format_float(value: float) -> str:
    """Shortest text that round-trips the single-precision value (1.5, 0, -10000)."""
    v = np.float32(value)
    if v == 0:
        v = np.float32(0.0)  # no "-0"
    return np.format_float_positional(v, trim="-")


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------

def _text_el(parent: ET.Element, tag: str, text: str = "") -> ET.Element:
    el = ET.SubElement(parent, tag)
    if text:
        el.text = text
    return el


def _value_el(parent: ET.Element, tag: str, value) -> ET.Element:
    if isinstance(value, float):
        value = format_float(value)
    return ET.SubElement(parent, tag, {"value": str(value)})


def _vector_el(parent: ET.Element, tag: str, v: Vector3) -> ET.Element:
    return ET.SubElement(parent, tag, {"x": format_float(v.x), "y": format_float(v.y), "z": format_float(v.z)})


def _quaternion_el(parent: ET.Element, tag: str, q: Quaternion) -> ET.Element:
    return ET.SubElement(
        parent,
        tag,
        {"x": format_float(q.x), "y": format_float(q.y), "z": format_float(q.z), "w": format_float(q.w)},
    )


def _entity_el(parent: ET.Element, entity: Entity) -> None:
    item = ET.SubElement(parent, "Item", {"type": "CEntityDef"})
    _text_el(item, "archetypeName", entity.archetype_name)
    if entity.flags is not None:
        _value_el(item, "flags", int(entity.flags))
    _value_el(item, "guid", int(entity.guid))
    _vector_el(item, "position", entity.position)
    _quaternion_el(item, "rotation", entity.rotation)
    _value_el(item, "scaleXY", float(entity.scale_xy))
    _value_el(item, "scaleZ", float(entity.scale_z))
    _value_el(item, "parentIndex", int(entity.parent_index))
    _value_el(item, "lodDist", float(entity.lod_dist))
    _value_el(item, "childLodDist", float(entity.child_lod_dist))
    _text_el(item, "lodLevel", entity.lod_level)
    _value_el(item, "numChildren", int(entity.num_children))
    _text_el(item, "priorityLevel", entity.priority_level)
    _text_el(item, "extensions")
    _value_el(item, "ambientOcclusionMultiplier", int(entity.ambient_occlusion_multiplier))
    _value_el(item, "artificialAmbientOcclusion", int(entity.artificial_ambient_occlusion))
    _value_el(item, "tintValue", int(entity.tint_value))


def _car_generator_el(parent: ET.Element, car_gen: CarGenerator) -> None:
    item = ET.SubElement(parent, "Item")
    _vector_el(item, "position", car_gen.position)
    _value_el(item, "orientX", float(car_gen.orient_x))
    _value_el(item, "orientY", float(car_gen.orient_y))
    _value_el(item, "perpendicularLength", float(car_gen.perpendicular_length))
    _text_el(item, "carModel", car_gen.car_model)
    _value_el(item, "flags", int(car_gen.flags))
    for i, remap in enumerate(car_gen.body_color_remap[:4], start=1):
        _value_el(item, f"bodyColorRemap{i}", int(remap))
    _text_el(item, "popGroup", car_gen.pop_group)
    _value_el(item, "livery", int(car_gen.livery))


def ymap_to_element(ymap: YMapDocument) -> ET.Element:
    root = ET.Element("CMapData")
    _text_el(root, "name", ymap.name)
    _text_el(root, "parent", ymap.parent)
    _value_el(root, "flags", int(ymap.flags))
    _value_el(root, "contentFlags", int(ymap.content_flags))
    _vector_el(root, "streamingExtentsMin", ymap.streaming_extents_min)
    _vector_el(root, "streamingExtentsMax", ymap.streaming_extents_max)
    _vector_el(root, "entitiesExtentsMin", ymap.entities_extents_min)
    _vector_el(root, "entitiesExtentsMax", ymap.entities_extents_max)

    entities = _text_el(root, "entities")
    for entity in ymap.entities:
        _entity_el(entities, entity)

    for tag in _EMPTY_MAP_SECTIONS:
        _text_el(root, tag)
    instanced = _text_el(root, "instancedData")
    _text_el(instanced, "ImapLink")
    _text_el(instanced, "PropInstanceList")
    _text_el(instanced, "GrassInstanceList")
    _text_el(root, "timeCycleModifiers")

    car_gens = _text_el(root, "carGenerators")
    for car_gen in ymap.car_generators:
        _car_generator_el(car_gens, car_gen)

    _text_el(root, "LODLightsSOA")
    _text_el(root, "DistantLODLightsSOA")
    block = _text_el(root, "block")
    _value_el(block, "version", 0)
    _value_el(block, "flags", 0)
    _text_el(block, "name", ymap.name)
    _text_el(block, "exportedBy")
    _text_el(block, "owner")
    _text_el(block, "time")
    return root


def serialize_ymap(ymap: YMapDocument) -> bytes:
    root = ymap_to_element(ymap)
    ET.indent(root, space="  ")
    return XML_DECLARATION + ET.tostring(root, encoding="unicode").encode("utf-8") + b"\n"


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------

def _find_text(el: ET.Element, tag: str, default: str = "") -> str:
    c = el.find(tag)
    if c is None or c.text is None:
        return default
    return c.text.strip()


def _find_value(el: ET.Element, tag: str, cast, default):
    c = el.find(tag)
    if c is None or c.get("value") is None:
        return default
    return cast(c.get("value"))


def _find_vector(el: ET.Element, tag: str) -> Vector3:
    c = el.find(tag)
    if c is None:
        return Vector3()
    return Vector3(float(c.get("x", 0)), float(c.get("y", 0)), float(c.get("z", 0)))


def _find_quaternion(el: ET.Element, tag: str) -> Quaternion:
    c = el.find(tag)
    if c is None:
        return Quaternion()
    return Quaternion(float(c.get("x", 0)), float(c.get("y", 0)), float(c.get("z", 0)), float(c.get("w", 1)))


def _read_entity(item: ET.Element) -> Entity:
    defaults = Entity(archetype_name="")
    return Entity(
        archetype_name=_find_text(item, "archetypeName"),
        position=_find_vector(item, "position"),
        rotation=_find_quaternion(item, "rotation"),
        flags=_find_value(item, "flags", int, None),
        guid=_find_value(item, "guid", int, defaults.guid),
        scale_xy=_find_value(item, "scaleXY", float, defaults.scale_xy),
        scale_z=_find_value(item, "scaleZ", float, defaults.scale_z),
        parent_index=_find_value(item, "parentIndex", int, defaults.parent_index),
        lod_dist=_find_value(item, "lodDist", float, defaults.lod_dist),
        child_lod_dist=_find_value(item, "childLodDist", float, defaults.child_lod_dist),
        lod_level=_find_text(item, "lodLevel", defaults.lod_level),
        num_children=_find_value(item, "numChildren", int, defaults.num_children),
        priority_level=_find_text(item, "priorityLevel", defaults.priority_level),
        ambient_occlusion_multiplier=_find_value(
            item, "ambientOcclusionMultiplier", int, defaults.ambient_occlusion_multiplier
        ),
        artificial_ambient_occlusion=_find_value(
            item, "artificialAmbientOcclusion", int, defaults.artificial_ambient_occlusion
        ),
        tint_value=_find_value(item, "tintValue", int, defaults.tint_value),
    )


def _read_car_generator(item: ET.Element) -> CarGenerator:
    defaults = CarGenerator(car_model="")
    return CarGenerator(
        car_model=_find_text(item, "carModel"),
        position=_find_vector(item, "position"),
        orient_x=_find_value(item, "orientX", float, 0.0),
        orient_y=_find_value(item, "orientY", float, 0.0),
        perpendicular_length=_find_value(item, "perpendicularLength", float, 0.0),
        flags=_find_value(item, "flags", int, defaults.flags),
        body_color_remap=[
            _find_value(item, f"bodyColorRemap{i}", int, -1) for i in range(1, 5)
        ],
        pop_group=_find_text(item, "popGroup"),
        livery=_find_value(item, "livery", int, defaults.livery),
    )


def _items(root: ET.Element, section: str) -> List[ET.Element]:
    el = root.find(section)
    return [] if el is None else el.findall("Item")


def element_to_ymap(root: ET.Element, path=None) -> YMapDocument:
    if root.tag != "CMapData":
        raise ParseError(f"Expected <CMapData> root, found <{root.tag}>", path)
    try:
        return YMapDocument(
            name=_find_text(root, "name"),
            parent=_find_text(root, "parent"),
            flags=_find_value(root, "flags", int, 0),
            content_flags=_find_value(root, "contentFlags", int, 0),
            streaming_extents_min=_find_vector(root, "streamingExtentsMin"),
            streaming_extents_max=_find_vector(root, "streamingExtentsMax"),
            entities_extents_min=_find_vector(root, "entitiesExtentsMin"),
            entities_extents_max=_find_vector(root, "entitiesExtentsMax"),
            entities=[_read_entity(item) for item in _items(root, "entities")],
            car_generators=[_read_car_generator(item) for item in _items(root, "carGenerators")],
        )
    except ValueError as e:
        raise ParseError(f"Invalid YMAP value: {e}", path) from e


def deserialize_ymap(data: bytes, path=None) -> YMapDocument:
    ymap = element_to_ymap(parse_xml_bytes(data, path), path)
    logger.debug(f"Read YMAP with {len(ymap.entities)} entities, {len(ymap.car_generators)} car generators")
    return ymap
