"""
Configuration for the dish catalog ingestion pipeline.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class IngestionConfig:
    """
    Locations of the raw dish list and the processed catalog.
    """

    raw_data_dir: Path = _DATA_DIR / "raw"
    processed_data_dir: Path = _DATA_DIR / "processed"
    raw_filename: str = "dishes.csv"
    processed_filename: str = "dishes.csv"

    @property
    def raw_path(self) -> Path:
        return self.raw_data_dir / self.raw_filename

    @property
    def processed_path(self) -> Path:
        return self.processed_data_dir / self.processed_filename


def catalog_path(config: IngestionConfig | None = None) -> Path:
    """Processed catalog location, overridable with ``CAIFAN_CATALOG_PATH``."""
    override = os.getenv("CAIFAN_CATALOG_PATH", "").strip()
    if override:
        return Path(override)
    return (config or DEFAULT_INGESTION_CONFIG).processed_path


DEFAULT_INGESTION_CONFIG = IngestionConfig()
