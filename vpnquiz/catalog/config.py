from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class CatalogConfig:
    """
    Where the provider catalog is read from.

    ``override_path`` points at a catalog exported from the content database.
    When it is unset or unreadable the bundled CSV is used instead.
    """

    static_path: Path = Path(__file__).resolve().parent.parent / "data" / "providers.csv"
    override_path: str = os.getenv("VPNQUIZ_CATALOG_PATH", "")

    @property
    def override(self) -> Path | None:
        return Path(self.override_path) if self.override_path else None


DEFAULT_CATALOG_CONFIG = CatalogConfig()
