"""
Source placement models
-----------------------
Typed representations of the two supported input dialects: Map Editor maps and Menyoo
Spooner placement files. Instances are produced by `source_xml` and consumed once by
the converter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Optional, Union

from .geometry import IDENTITY, Quaternion, Vector3, quaternion_from_euler


class MapObjectType(Enum):
    """Map Editor object types"""
    PROP = "Prop"
    VEHICLE = "Vehicle"
    PED = "Ped"
    PICKUP = "Pickup"
    OTHER = "Other"

    @classmethod
    def parse(cls, text: Optional[str]) -> "MapObjectType":
        s = str(text or "").strip().lower()
        for member in cls:
            if member.value.lower() == s:
                return member
        return cls.OTHER


class SpoonerType(IntEnum):
    """Spooner placement type codes"""
    PED = 1
    VEHICLE = 2
    PROP = 3


@dataclass(frozen=True)
class MapEditorObject:
    """One <MapObject> of a Map Editor file"""
    hash: int
    type: MapObjectType
    position: Vector3 = Vector3()
    quaternion: Quaternion = IDENTITY
    dynamic: bool = False
    door: bool = False

    @property
    def is_static(self) -> bool:
        return not (self.dynamic or self.door)


@dataclass
class MapEditorMap:
    """Map Editor document (<Map>)"""
    objects: List[MapEditorObject] = field(default_factory=list)


@dataclass(frozen=True)
class PositionRotation:
    """Spooner <PositionRotation>: position plus Euler angles in degrees"""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    pitch: float = 0.0
    roll: float = 0.0
    yaw: float = 0.0

    def get_position(self) -> Vector3:
        return Vector3(self.x, self.y, self.z)

    def get_quaternion(self) -> Quaternion:
        return quaternion_from_euler(self.pitch, self.roll, self.yaw)


@dataclass(frozen=True)
class SpoonerPlacement:
    """One <Placement> of a Spooner file"""
    model_hash: Optional[int]
    type: int
    position_rotation: PositionRotation = PositionRotation()
    hash_name: str = ""
    dynamic: bool = False
    # <ModelHash> text that is a model name rather than a hash
    model_name: str = ""

    @property
    def position(self) -> Vector3:
        return self.position_rotation.get_position()

    @property
    def quaternion(self) -> Quaternion:
        return self.position_rotation.get_quaternion()

    @property
    def is_static(self) -> bool:
        return not self.dynamic


@dataclass
class SpoonerPlacements:
    """Spooner document (<SpoonerPlacements>)"""
    placements: List[SpoonerPlacement] = field(default_factory=list)


SourceDocument = Union[MapEditorMap, SpoonerPlacements]
