"""
Source -> YMAP converter
------------------------
Maps a parsed Map Editor / Spooner document onto a fresh YMapDocument, one placement at
a time, then recomputes the extents.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Union

from .extents import calc_extents
from .geometry import Quaternion, Vector3, conjugate, positive_w, rotate
from .hash_utils import hash_fallback_name
from .source_models import MapEditorMap, MapObjectType, SourceDocument, SpoonerPlacements, SpoonerType
from .ymap import STATIC_FLAGS, CarGenerator, Entity, YMapDocument

logger = logging.getLogger(__name__)

CARGEN_SCALE = 1.5

NameLookup = Callable[[int], Optional[str]]


def _no_lookup(model_hash: int) -> Optional[str]:
    return None


def resolve_model_name(
    model_hash: Optional[int],
    lookup: Optional[NameLookup] = None,
    hash_name: str = "",
) -> str:
    """
    Pick the archetype name for a placement.

    Order: name table lookup, then the dialect's own name field, then "0x<hash>".
    Never returns an empty string; raises ValueError when there is neither a hash nor a name.
    """
    lookup = lookup or _no_lookup
    if model_hash is not None:
        name = lookup(model_hash)
        if name:
            return name
    if hash_name:
        return hash_name
    if model_hash is None:
        raise ValueError("Placement has no model hash or name")
    return hash_fallback_name(model_hash)


def create_entity(
    model: str,
    position: Vector3,
    rotation: Quaternion,
    static: bool,
    conjugate_rotation: bool = True,
) -> Entity:
    """
    Build a CEntityDef.

    With conjugate_rotation, a negative w is flipped positive (x/y/z kept); otherwise the
    quaternion is conjugated. Static entities get flags=32.
    """
    if conjugate_rotation:
        rotation = positive_w(rotation) if rotation.w < 0 else conjugate(rotation)

    return Entity(
        archetype_name=model,
        position=position,
        rotation=rotation,
        flags=STATIC_FLAGS if static else None,
    )


def create_car_generator(
    model: str,
    position: Vector3,
    rotation: Quaternion,
    scale: float = CARGEN_SCALE,
) -> CarGenerator:
    """Build a CCarGen facing along the rotated (0, scale, 0) vector."""
    direction = rotate(rotation, Vector3(0.0, scale, 0.0))
    return CarGenerator(
        car_model=model,
        position=position,
        orient_x=direction.x,
        orient_y=direction.y,
        perpendicular_length=scale,
    )


def convert_map_editor(
    map_data: MapEditorMap,
    lookup: Optional[NameLookup] = None,
    scale: float = CARGEN_SCALE,
) -> YMapDocument:
    ymap = YMapDocument()
    skipped = 0

    for obj in map_data.objects:
        model = resolve_model_name(obj.hash, lookup)

        if obj.type is MapObjectType.VEHICLE:
            ymap.car_generators.append(create_car_generator(model, obj.position, obj.quaternion, scale))
        elif obj.type is MapObjectType.PROP:
            ymap.entities.append(create_entity(model, obj.position, obj.quaternion, obj.is_static))
        else:
            skipped += 1
            logger.debug(f"Skipping {obj.type.value} object {model}")

    return _finish(ymap, skipped)


def convert_spooner(
    placements: SpoonerPlacements,
    lookup: Optional[NameLookup] = None,
    scale: float = CARGEN_SCALE,
) -> YMapDocument:
    ymap = YMapDocument()
    skipped = 0

    for placement in placements.placements:
        model = resolve_model_name(placement.model_hash, lookup, placement.model_name or placement.hash_name)

        if placement.type == SpoonerType.VEHICLE:
            ymap.car_generators.append(
                create_car_generator(model, placement.position, placement.quaternion, scale)
            )
        elif placement.type == SpoonerType.PROP:
            ymap.entities.append(
                create_entity(model, placement.position, placement.quaternion, placement.is_static,
                              conjugate_rotation=False)
            )
        else:
            skipped += 1
            logger.debug(f"Skipping placement type {placement.type} ({model})")

    return _finish(ymap, skipped)


def _finish(ymap: YMapDocument, skipped: int) -> YMapDocument:
    if skipped:
        logger.warning(f"Skipped {skipped} placement(s) that are neither props nor vehicles")
    calc_extents(ymap)
    logger.info(f"Converted {len(ymap.entities)} entities and {len(ymap.car_generators)} car generators")
    return ymap


def convert_document(
    source: Union[SourceDocument, YMapDocument],
    lookup: Optional[NameLookup] = None,
    scale: float = CARGEN_SCALE,
) -> YMapDocument:
    """Convert any supported source document; YMAP documents pass through unchanged."""
    if isinstance(source, YMapDocument):
        return source
    if isinstance(source, MapEditorMap):
        return convert_map_editor(source, lookup, scale)
    if isinstance(source, SpoonerPlacements):
        return convert_spooner(source, lookup, scale)
    raise TypeError(f"Unsupported source document: {type(source).__name__}")
