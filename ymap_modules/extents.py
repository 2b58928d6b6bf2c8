"""
Extents calculation for YMAP documents.
"""

import logging

import numpy as np

from .geometry import Vector3

logger = logging.getLogger(__name__)

# Padding around the placement centre; the vertical range is deliberately asymmetric.
EXTENTS_PAD_MIN = np.array([10000.0, 10000.0, 1000.0])
EXTENTS_PAD_MAX = np.array([10000.0, 10000.0, 5000.0])


def calc_centre(ymap) -> Vector3:
    """Mean position of all entities and car generators (document must not be empty)."""
    total = Vector3()
    for position in ymap.positions():
        total = total + position
    return total / ymap.placement_count


def calc_extents(ymap) -> bool:
    """
    Recompute streaming and entities extents in place.

    Both extents get the same box around the centre of all placements. Documents with no
    entities and no car generators are left untouched.

    Returns:
        bool: True if the extents were recomputed
    """
    if ymap.placement_count == 0:
        logger.debug("No placements; extents left unchanged")
        return False

    centre = calc_centre(ymap).as_array()
    ext_min = Vector3.from_array(centre - EXTENTS_PAD_MIN)
    ext_max = Vector3.from_array(centre + EXTENTS_PAD_MAX)

    ymap.streaming_extents_min = ext_min
    ymap.streaming_extents_max = ext_max
    ymap.entities_extents_min = ext_min
    ymap.entities_extents_max = ext_max

    logger.debug(f"Extents recomputed around centre {centre.tolist()}")
    return True
