"""
Vector / quaternion helpers
---------------------------
Small value types used by the converter. Quaternion math follows CodeWalker's
implementation (x, y, z, w component order, unit quaternions assumed).
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Vector3:
    """Three float components"""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: "Vector3") -> "Vector3":
        return add(self, other)

    def __truediv__(self, scalar: float) -> "Vector3":
        return scale_divide(self, scalar)

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    @classmethod
    def from_array(cls, arr) -> "Vector3":
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))


@dataclass(frozen=True)
class Quaternion:
    """Rotation quaternion (x, y, z, w)"""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z, self.w], dtype=np.float64)


IDENTITY = Quaternion(0.0, 0.0, 0.0, 1.0)


def add(a: Vector3, b: Vector3) -> Vector3:
    return Vector3(a.x + b.x, a.y + b.y, a.z + b.z)


def scale_divide(v: Vector3, scalar: float) -> Vector3:
    # Callers guarantee scalar != 0
    return Vector3(v.x / scalar, v.y / scalar, v.z / scalar)


def conjugate(q: Quaternion) -> Quaternion:
    return Quaternion(-q.x, -q.y, -q.z, q.w)


def positive_w(q: Quaternion) -> Quaternion:
    """Negate w only, leaving x/y/z untouched."""
    return Quaternion(q.x, q.y, q.z, -q.w)


def multiply(q1: Quaternion, q2: Quaternion) -> Quaternion:
    """Hamilton product q1 * q2"""
    return Quaternion(
        q1.w * q2.x + q1.x * q2.w + q1.y * q2.z - q1.z * q2.y,
        q1.w * q2.y - q1.x * q2.z + q1.y * q2.w + q1.z * q2.x,
        q1.w * q2.z + q1.x * q2.y - q1.y * q2.x + q1.z * q2.w,
        q1.w * q2.w - q1.x * q2.x - q1.y * q2.y - q1.z * q2.z,
    )


def rotate(q: Quaternion, v: Vector3) -> Vector3:
    """
    Rotate a vector by a unit quaternion (v' = q * v * q^-1).

    Expanded form of CodeWalker's Quaternion.Multiply(Vector3).
    """
    axx = q.x * 2.0
    ayy = q.y * 2.0
    azz = q.z * 2.0
    awxx = q.w * axx
    awyy = q.w * ayy
    awzz = q.w * azz
    axxx = q.x * axx
    axyy = q.x * ayy
    axzz = q.x * azz
    ayyy = q.y * ayy
    ayzz = q.y * azz
    azzz = q.z * azz

    return Vector3(
        ((v.x * ((1.0 - ayyy) - azzz)) + (v.y * (axyy - awzz))) + (v.z * (axzz + awyy)),
        ((v.x * (axyy + awzz)) + (v.y * ((1.0 - axxx) - azzz))) + (v.z * (ayzz - awxx)),
        ((v.x * (axzz - awyy)) + (v.y * (ayzz + awxx))) + (v.z * ((1.0 - axxx) - ayyy)),
    )


def _axis_angle(axis: Vector3, degrees: float) -> Quaternion:
    half = math.radians(degrees) / 2.0
    s = math.sin(half)
    return Quaternion(axis.x * s, axis.y * s, axis.z * s, math.cos(half))


def quaternion_from_euler(pitch: float, roll: float, yaw: float) -> Quaternion:
    """
    Build a rotation from Spooner-style Euler angles in degrees.

    Intrinsic Z-X-Y order: q = yaw(Z) * pitch(X) * roll(Y).
    """
    qz = _axis_angle(Vector3(0.0, 0.0, 1.0), yaw)
    qx = _axis_angle(Vector3(1.0, 0.0, 0.0), pitch)
    qy = _axis_angle(Vector3(0.0, 1.0, 0.0), roll)
    return multiply(multiply(qz, qx), qy)
