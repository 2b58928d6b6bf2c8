"""
Source dialect readers
----------------------
Parses Map Editor and Menyoo Spooner XML into `source_models` objects.

Each reader returns None when the XML tree doesn't match its schema. `detect_dialect`
tries the readers in a fixed order and picks the first success, so a file that is valid
Map Editor XML always resolves to Map Editor even if it was meant as Spooner input.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Callable, List, Optional, Tuple

from .errors import ParseError
from .geometry import IDENTITY, Quaternion, Vector3
from .hash_utils import try_coerce_u32
from .source_models import (
    MapEditorMap,
    MapEditorObject,
    MapObjectType,
    PositionRotation,
    SourceDocument,
    SpoonerPlacement,
    SpoonerPlacements,
)

logger = logging.getLogger(__name__)

MAP_EDITOR = "map_editor"
SPOONER = "spooner"


def parse_xml_bytes(data: bytes, path=None) -> ET.Element:
    """Parse raw bytes into an element tree, wrapping syntax errors in ParseError."""
    try:
        return ET.fromstring(data)
    except ET.ParseError as e:
        raise ParseError(f"Malformed XML: {e}", path) from e


def _local(tag: str) -> str:
    # Drop any "{namespace}" prefix
    return tag.rsplit("}", 1)[-1]


def _child(el: ET.Element, name: str) -> Optional[ET.Element]:
    for c in el:
        if _local(c.tag) == name:
            return c
    return None


def _children(el: ET.Element, name: str) -> List[ET.Element]:
    return [c for c in el if _local(c.tag) == name]


def _text(el: ET.Element, name: str, default: str = "") -> str:
    c = _child(el, name)
    if c is None or c.text is None:
        return default
    return c.text.strip()


def _float(el: ET.Element, name: str, default: float = 0.0) -> float:
    s = _text(el, name)
    if not s:
        return default
    return float(s)


def _bool(el: ET.Element, name: str, default: bool = False) -> bool:
    s = _text(el, name).lower()
    if not s:
        return default
    if s in ("true", "1"):
        return True
    if s in ("false", "0"):
        return False
    raise ValueError(f"Invalid boolean for <{name}>: {s!r}")


def _vector3(el: Optional[ET.Element]) -> Vector3:
    if el is None:
        return Vector3()
    return Vector3(_float(el, "X"), _float(el, "Y"), _float(el, "Z"))


def _quaternion(el: Optional[ET.Element]) -> Quaternion:
    if el is None:
        return IDENTITY
    return Quaternion(_float(el, "X"), _float(el, "Y"), _float(el, "Z"), _float(el, "W", 1.0))


def _read_map_object(el: ET.Element) -> MapEditorObject:
    hash_text = _text(el, "Hash")
    model_hash = try_coerce_u32(hash_text, allow_hex=False)
    if model_hash is None:
        raise ValueError(f"Invalid <Hash>: {hash_text!r}")
    return MapEditorObject(
        hash=model_hash,
        type=MapObjectType.parse(_text(el, "Type")),
        position=_vector3(_child(el, "Position")),
        quaternion=_quaternion(_child(el, "Quaternion")),
        dynamic=_bool(el, "Dynamic"),
        door=_bool(el, "Door"),
    )


def read_map_editor(root: ET.Element) -> Optional[MapEditorMap]:
    """Read a Map Editor <Map> document, or None if the tree isn't one."""
    if _local(root.tag) != "Map":
        logger.debug(f"Not a Map Editor document (root <{_local(root.tag)}>)")
        return None
    objects_el = _child(root, "Objects")
    objects: List[MapEditorObject] = []
    if objects_el is not None:
        try:
            for obj_el in _children(objects_el, "MapObject"):
                objects.append(_read_map_object(obj_el))
        except ValueError as e:
            logger.debug(f"Map Editor schema mismatch: {e}")
            return None
    return MapEditorMap(objects=objects)


def _read_position_rotation(el: Optional[ET.Element]) -> PositionRotation:
    if el is None:
        return PositionRotation()
    return PositionRotation(
        x=_float(el, "X"),
        y=_float(el, "Y"),
        z=_float(el, "Z"),
        pitch=_float(el, "Pitch"),
        roll=_float(el, "Roll"),
        yaw=_float(el, "Yaw"),
    )


def _read_placement(el: ET.Element) -> SpoonerPlacement:
    type_text = _text(el, "Type")
    try:
        type_code = int(type_text, 10)
    except ValueError:
        # Unresolvable type codes are skipped by the converter
        type_code = 0
    model_text = _text(el, "ModelHash")
    model_hash = try_coerce_u32(model_text)
    hash_name = _text(el, "HashName")
    if model_hash is None and not model_text and not hash_name:
        raise ValueError("Placement has neither <ModelHash> nor <HashName>")
    return SpoonerPlacement(
        model_hash=model_hash,
        type=type_code,
        position_rotation=_read_position_rotation(_child(el, "PositionRotation")),
        hash_name=hash_name,
        dynamic=_bool(el, "Dynamic"),
        model_name=model_text if model_hash is None else "",
    )


def read_spooner(root: ET.Element) -> Optional[SpoonerPlacements]:
    """Read a Spooner <SpoonerPlacements> document, or None if the tree isn't one."""
    if _local(root.tag) != "SpoonerPlacements":
        logger.debug(f"Not a Spooner document (root <{_local(root.tag)}>)")
        return None
    try:
        placements = [_read_placement(el) for el in _children(root, "Placement")]
    except ValueError as e:
        logger.debug(f"Spooner schema mismatch: {e}")
        return None
    return SpoonerPlacements(placements=placements)


# Ordered: the first reader that accepts the tree wins.
DIALECT_READERS: List[Tuple[str, Callable[[ET.Element], Optional[SourceDocument]]]] = [
    (MAP_EDITOR, read_map_editor),
    (SPOONER, read_spooner),
]


def detect_dialect(root: ET.Element) -> Optional[Tuple[str, SourceDocument]]:
    """Return (dialect name, document) for the first matching reader, or None."""
    for name, reader in DIALECT_READERS:
        doc = reader(root)
        if doc is not None:
            logger.info(f"Detected {name} document")
            return name, doc
    return None


def read_source_bytes(data: bytes, path=None) -> Tuple[str, SourceDocument]:
    """Parse bytes as either dialect; raises ParseError if neither matches."""
    root = parse_xml_bytes(data, path)
    found = detect_dialect(root)
    if found is None:
        raise ParseError("Failed to read file: not a Map Editor or Spooner document", path)
    return found
