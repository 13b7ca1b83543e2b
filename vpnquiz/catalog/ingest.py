from __future__ import annotations

import sys
from pathlib import Path
from typing import List

import pandas as pd

from .config import DEFAULT_CATALOG_CONFIG


CANONICAL_COLUMNS: List[str] = [
    "id",
    "name",
    "slug",
    "overallRating",
    "speedScore",
    "securityScore",
    "streamingScore",
    "priceMonthly",
    "priceYearly",
    "priceTwoYear",
    "maxDevices",
    "countries",
    "freeTier",
    "torrentSupport",
    "netflixSupport",
    "killSwitch",
    "noLogs",
    "affiliateUrl",
    "shortDescription",
    "sortOrder",
]

# Database exports serialise decimals as strings ("4.99")
_DECIMAL_COLUMNS: List[str] = ["overallRating", "priceMonthly", "priceYearly", "priceTwoYear"]


def run_ingestion(source: Path, output: Path = DEFAULT_CATALOG_CONFIG.static_path) -> Path:
    """
    Convert a raw provider export into the canonical catalog CSV.

    Steps:
    - Read the JSON export (a list of provider rows).
    - Parse decimal columns; a zero or empty two-year price means no such plan.
    - Keep the canonical columns in order and write the CSV.

    Missing columns are written empty so the catalog loader reports them
    against the offending provider instead of guessing values.
    """
    df = pd.read_json(source, dtype={"id": str, "slug": str}, convert_dates=False)

    canonical = pd.DataFrame(index=df.index)
    for col in CANONICAL_COLUMNS:
        canonical[col] = df[col] if col in df.columns else pd.NA

    for col in _DECIMAL_COLUMNS:
        canonical[col] = pd.to_numeric(canonical[col], errors="coerce")

    canonical["priceTwoYear"] = canonical["priceTwoYear"].where(canonical["priceTwoYear"] > 0)

    output.parent.mkdir(parents=True, exist_ok=True)
    canonical.to_csv(output, index=False)
    return output


if __name__ == "__main__":
    if len(sys.argv) < 2:
        sys.exit("usage: python -m vpnquiz.catalog.ingest <export.json> [output.csv]")
    target = Path(sys.argv[2]) if len(sys.argv) > 2 else DEFAULT_CATALOG_CONFIG.static_path
    path = run_ingestion(Path(sys.argv[1]), target)
    print(f"Ingestion complete. Catalog saved to: {path}")
