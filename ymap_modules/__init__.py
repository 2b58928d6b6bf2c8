"""
YMap Modules
-----------
Modules for converting Map Editor / Menyoo Spooner placements into GTA5 .ymap.xml files.
"""

__version__ = "0.1.0"
__all__ = [
    # Intentionally empty: consumers should import concrete modules directly, e.g.
    # `from ymap_modules.converter import convert_document`
]
