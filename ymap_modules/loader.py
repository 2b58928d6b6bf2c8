"""
File open / save routing.

- *.ymap.xml -> read directly as a YMAP document
- *.xml      -> Map Editor, then Spooner (first match wins), then converted
- anything else is rejected before any parsing
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

from .converter import CARGEN_SCALE, NameLookup, convert_document
from .errors import UnsupportedExtension
from .source_models import SourceDocument
from .source_xml import read_source_bytes
from .ymap import YMapDocument
from .ymap_xml import deserialize_ymap, serialize_ymap

logger = logging.getLogger(__name__)

YMAP_SUFFIX = ".ymap.xml"
XML_SUFFIX = ".xml"

YMAP = "ymap"

PathLike = Union[str, Path]


def file_kind(path: PathLike) -> str:
    """Return "ymap" or "xml" for a supported path, raise UnsupportedExtension otherwise."""
    name = Path(path).name.lower()
    if name.endswith(YMAP_SUFFIX):
        return YMAP
    if name.endswith(XML_SUFFIX):
        return "xml"
    raise UnsupportedExtension(path)


def ymap_stem(path: PathLike) -> str:
    """File name without .ymap.xml / .xml"""
    name = Path(path).name
    for suffix in (YMAP_SUFFIX, XML_SUFFIX):
        if name.lower().endswith(suffix):
            return name[: -len(suffix)]
    return Path(path).stem


def _read_bytes(path: Path) -> bytes:
    with open(path, "rb") as f:
        return f.read()


def read_document(path: PathLike) -> Tuple[str, Union[SourceDocument, YMapDocument]]:
    """
    Read a file without converting it.

    Returns:
        (kind, document): kind is "ymap", "map_editor" or "spooner"
    """
    path = Path(path)
    kind = file_kind(path)
    data = _read_bytes(path)
    if kind == YMAP:
        return YMAP, deserialize_ymap(data, path)
    return read_source_bytes(data, path)


def open_file(
    path: PathLike,
    lookup: Optional[NameLookup] = None,
    scale: float = CARGEN_SCALE,
) -> YMapDocument:
    """Open any supported file as a YMapDocument, converting source dialects."""
    kind, doc = read_document(path)
    logger.info(f"Opened {path} ({kind})")
    return convert_document(doc, lookup, scale)


def save_ymap(path: PathLike, ymap: YMapDocument) -> Path:
    path = Path(path)
    data = serialize_ymap(ymap)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        f.write(data)
    logger.info(f"Saved {len(ymap.entities)} entities and {len(ymap.car_generators)} car generators to {path}")
    return path
