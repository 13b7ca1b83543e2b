from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from ..errors import CatalogError, QuizError
from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig
from .models import ProviderRecord, coerce_provider

logger = logging.getLogger(__name__)

_providers: list[ProviderRecord] | None = None


def _to_python(value: Any) -> Any:
    if value is None or (np.isscalar(value) and pd.isna(value)):
        return None
    if isinstance(value, np.generic):
        return value.item()
    return value


def _read_rows(path: Path) -> list[dict[str, Any]]:
    df = pd.read_csv(path, dtype={"id": str, "slug": str})
    if "sortOrder" in df.columns:
        df = df.sort_values("sortOrder", kind="stable")
    return [
        {key: _to_python(value) for key, value in row.items()}
        for row in df.to_dict(orient="records")
    ]


def load_catalog(path: Path) -> list[ProviderRecord]:
    """Read a canonical catalog CSV into validated provider records."""
    providers = [coerce_provider(row) for row in _read_rows(path)]

    seen: set[str] = set()
    for provider in providers:
        if provider.id in seen:
            raise CatalogError(f"Duplicate provider id {provider.id!r} in {path}")
        seen.add(provider.id)

    return providers


def _load(config: CatalogConfig) -> list[ProviderRecord]:
    override = config.override
    if override is not None:
        try:
            providers = load_catalog(override)
            if providers:
                logger.info("Loaded %d providers from %s", len(providers), override)
                return providers
            logger.warning("Catalog override %s is empty, using bundled catalog", override)
        except (OSError, ValueError, QuizError):
            logger.warning(
                "Catalog override %s unavailable, using bundled catalog", override, exc_info=True
            )

    providers = load_catalog(config.static_path)
    logger.info("Loaded %d providers from %s", len(providers), config.static_path)
    return providers


def get_providers(config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> list[ProviderRecord]:
    """Return the provider catalog, loading it on first call."""
    global _providers
    if _providers is None:
        _providers = _load(config)
    return list(_providers)


def get_provider_by_slug(
    slug: str, config: CatalogConfig = DEFAULT_CATALOG_CONFIG,
) -> ProviderRecord | None:
    for provider in get_providers(config):
        if provider.slug == slug:
            return provider
    return None


def reset_catalog() -> None:
    global _providers
    _providers = None
