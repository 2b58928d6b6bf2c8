"""
Environment-driven settings.

Values come from `.env` / `env.local` (via python-dotenv) and can be overridden by
command-line flags:
- ymap_model_names   path to a model name table (.json or one name per line)
- ymap_log_level     logging level name (default INFO)
- ymap_cargen_scale  car generator spacing (default 1.5)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import dotenv

from .converter import CARGEN_SCALE
from .model_names import ModelNameTable

logger = logging.getLogger(__name__)


def _repo_root() -> Path:
    return Path(__file__).resolve().parent.parent


@dataclass
class Settings:
    model_names_path: Optional[Path] = None
    log_level: str = "INFO"
    cargen_scale: float = CARGEN_SCALE

    def load_name_table(self) -> ModelNameTable:
        """Name table from model_names_path, or an empty table when unset."""
        if self.model_names_path is None:
            return ModelNameTable()
        return ModelNameTable.load(self.model_names_path)


def _env_path(key: str) -> Optional[Path]:
    v = (os.getenv(key) or "").strip().strip('"\'')
    return Path(v).expanduser() if v else None


def _env_float(key: str, default: float) -> float:
    v = (os.getenv(key) or "").strip()
    if not v:
        return default
    try:
        return float(v)
    except ValueError:
        logger.warning(f"Ignoring invalid {key}={v!r}; using {default}")
        return default


def load_settings(load_env: bool = True) -> Settings:
    if load_env:
        dotenv.load_dotenv()
        dotenv.load_dotenv(dotenv_path=_repo_root() / "env.local", override=False)

    return Settings(
        model_names_path=_env_path("ymap_model_names"),
        log_level=(os.getenv("ymap_log_level") or "INFO").strip().upper(),
        cargen_scale=_env_float("ymap_cargen_scale", CARGEN_SCALE),
    )
