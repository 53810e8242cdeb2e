from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_PACKAGE_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class CatalogConfig:
    """
    Where the catalogue lives and how long category lookups stay cached.
    """

    data_dir: Path = Path(os.getenv("LOCALSEARCH_DATA_DIR", str(_PACKAGE_DATA_DIR)))
    businesses_filename: str = "businesses.json"
    categories_filename: str = "categories.json"
    category_cache_ttl: float = float(os.getenv("LOCALSEARCH_CATEGORY_CACHE_TTL", "600"))

    @property
    def businesses_path(self) -> Path:
        return self.data_dir / self.businesses_filename

    @property
    def categories_path(self) -> Path:
        return self.data_dir / self.categories_filename


DEFAULT_CATALOG_CONFIG = CatalogConfig()
