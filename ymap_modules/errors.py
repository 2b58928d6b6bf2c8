"""
Error types raised while opening, converting and saving map files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class YmapError(Exception):
    """Base class for all load/save failures."""


class ParseError(YmapError):
    """Input bytes don't match any schema expected on the current path."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else None
        if self.path is not None:
            message = f"{self.path}: {message}"
        super().__init__(message)


class UnsupportedExtension(YmapError, ValueError):
    """File extension is neither .ymap.xml nor .xml."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"This is not a valid type: {self.path.name}")
