"""
Canonical YMAP model
--------------------
In-memory form of a CodeWalker .ymap.xml document (CMapData): placed entities, car
generators and the streaming / entities extents.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from .geometry import IDENTITY, Quaternion, Vector3

# Entity flag marking a non-dynamic (frozen) placement
STATIC_FLAGS = 32

DEFAULT_LOD_DIST = 500.0
DEFAULT_CARGEN_FLAGS = 3680


@dataclass
class Entity:
    """CEntityDef"""
    archetype_name: str
    position: Vector3 = Vector3()
    rotation: Quaternion = IDENTITY
    flags: Optional[int] = None  # only written when set
    guid: int = 0
    scale_xy: float = 1.0
    scale_z: float = 1.0
    parent_index: int = -1
    lod_dist: float = DEFAULT_LOD_DIST
    child_lod_dist: float = 0.0
    lod_level: str = "LODTYPES_DEPTH_ORPHANHD"
    num_children: int = 0
    priority_level: str = "PRI_REQUIRED"
    ambient_occlusion_multiplier: int = 255
    artificial_ambient_occlusion: int = 255
    tint_value: int = 0

    @property
    def static_flag_present(self) -> bool:
        return self.flags is not None


@dataclass
class CarGenerator:
    """CCarGen"""
    car_model: str
    position: Vector3 = Vector3()
    orient_x: float = 0.0
    orient_y: float = 0.0
    perpendicular_length: float = 0.0
    flags: int = DEFAULT_CARGEN_FLAGS
    body_color_remap: List[int] = field(default_factory=lambda: [-1, -1, -1, -1])
    pop_group: str = ""
    livery: int = -1


@dataclass
class YMapDocument:
    """CMapData root"""
    name: str = ""
    parent: str = ""
    flags: int = 0
    content_flags: int = 0
    streaming_extents_min: Vector3 = Vector3()
    streaming_extents_max: Vector3 = Vector3()
    entities_extents_min: Vector3 = Vector3()
    entities_extents_max: Vector3 = Vector3()
    entities: List[Entity] = field(default_factory=list)
    car_generators: List[CarGenerator] = field(default_factory=list)

    @property
    def placement_count(self) -> int:
        return len(self.entities) + len(self.car_generators)

    def positions(self) -> Iterator[Vector3]:
        """Entity positions followed by car generator positions"""
        for entity in self.entities:
            yield entity.position
        for car_gen in self.car_generators:
            yield car_gen.position

    def archetype_names(self) -> List[str]:
        return [e.archetype_name for e in self.entities] + [c.car_model for c in self.car_generators]

    def summary(self) -> dict:
        """JSON-friendly overview of the document"""
        def _vec(v: Vector3) -> List[float]:
            return [v.x, v.y, v.z]

        return {
            "name": self.name,
            "counts": {
                "entities": len(self.entities),
                "carGenerators": len(self.car_generators),
                "static": sum(1 for e in self.entities if e.static_flag_present),
            },
            "streamingExtentsMin": _vec(self.streaming_extents_min),
            "streamingExtentsMax": _vec(self.streaming_extents_max),
            "entitiesExtentsMin": _vec(self.entities_extents_min),
            "entitiesExtentsMax": _vec(self.entities_extents_max),
            "archetypes": sorted(set(self.archetype_names())),
        }
