"""
Model hash -> name table.

The converter only needs `lookup(hash) -> name | None`; a miss is a normal outcome and
callers fall back to the hex form of the hash.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional, Union

from .hash_utils import joaat, try_coerce_u32

logger = logging.getLogger(__name__)


class ModelNameTable:
    """Static lookup of model names by uint32 hash"""

    def __init__(self, names: Optional[Mapping[int, str]] = None):
        self._names: Dict[int, str] = {}
        for h, name in (names or {}).items():
            u = try_coerce_u32(h)
            if u is not None and name:
                # Prefer first-seen; keep stable.
                self._names.setdefault(u, str(name))

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, model_hash: object) -> bool:
        return self.lookup(model_hash) is not None

    def lookup(self, model_hash: object) -> Optional[str]:
        h = try_coerce_u32(model_hash)
        if h is None:
            return None
        return self._names.get(h)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "ModelNameTable":
        table: Dict[int, str] = {}
        for name in names:
            s = str(name or "").strip()
            if not s:
                continue
            table.setdefault(joaat(s, lower=True), s)
        return cls(table)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "ModelNameTable":
        """
        Load a table from disk.

        Args:
            path: `.json` object of {hash: name} (decimal or 0x hex keys), or a plain text
                  file with one model name per line (`#` starts a comment)

        Returns:
            ModelNameTable
        """
        path = Path(path)
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() == ".json":
            doc = json.loads(text)
            if not isinstance(doc, dict):
                raise ValueError(f"Expected a JSON object of hash -> name in {path}")
            table = cls(doc)
        else:
            names = []
            for line in text.splitlines():
                line = line.split("#", 1)[0].strip()
                if line:
                    names.append(line)
            table = cls.from_names(names)
        logger.info(f"Loaded {len(table)} model names from {path}")
        return table
