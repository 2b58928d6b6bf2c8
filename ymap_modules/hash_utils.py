"""
Shared hash / u32 parsing helpers.

Design goals:
- Map Editor writes model hashes as signed ints, Spooner as "0x..." hex strings;
  both normalise to the same uint32.
- Avoid pulling in heavy dependencies.
"""

from __future__ import annotations

from typing import Any, Optional


def try_coerce_u32(x: Any, *, allow_hex: bool = True) -> Optional[int]:
    """
    Best-effort conversion to unsigned 32-bit int.

    Behavior:
    - None -> None
    - int -> masked
    - str -> parsed (decimal by default; if allow_hex=True supports "0x..." etc via int(s, 0))
    - returns None if parsing fails
    """
    if x is None or isinstance(x, bool):
        return None

    if isinstance(x, int):
        return x & 0xFFFFFFFF

    s = str(x).strip()
    if not s:
        return None
    try:
        if allow_hex:
            return int(s, 0) & 0xFFFFFFFF
        # strict-ish decimal string
        if not s.lstrip("-").isdigit():
            return None
        return int(s, 10) & 0xFFFFFFFF
    except ValueError:
        # int(s, 0) rejects leading zeros ("0123"); retry as plain decimal
        if s.lstrip("-").isdigit():
            return int(s, 10) & 0xFFFFFFFF
        return None


def joaat(s: str, *, lower: bool = False) -> int:
    """
    GTA "joaat" hash (Jenkins one-at-a-time).

    Model names are case-insensitive in game, so name tables opt in via lower=True.
    """
    t = str(s or "")
    if lower:
        t = t.lower()
    h = 0
    for ch in t:
        h = (h + ord(ch)) & 0xFFFFFFFF
        h = (h + ((h << 10) & 0xFFFFFFFF)) & 0xFFFFFFFF
        h ^= (h >> 6)
    h = (h + ((h << 3) & 0xFFFFFFFF)) & 0xFFFFFFFF
    h ^= (h >> 11)
    h = (h + ((h << 15) & 0xFFFFFFFF)) & 0xFFFFFFFF
    return h & 0xFFFFFFFF


def hash_fallback_name(model_hash: int) -> str:
    """Name used when a hash has no table entry, e.g. 0x1A2B -> "0x1a2b"."""
    return f"0x{int(model_hash) & 0xFFFFFFFF:x}"
