from __future__ import annotations

from typing import Any, Mapping

from pydantic import ConfigDict, Field, ValidationError

from ..errors import MalformedProviderError
from ..schema import CamelModel


class ProviderRecord(CamelModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    slug: str = Field(..., min_length=1)
    overall_rating: float = Field(..., ge=0.0, le=5.0)
    speed_score: int = Field(..., ge=0, le=100)
    security_score: int = Field(..., ge=0, le=100)
    streaming_score: int = Field(..., ge=0, le=100)
    price_monthly: float = Field(..., ge=0.0)
    price_yearly: float = Field(..., ge=0.0)
    price_two_year: float | None = Field(default=None, ge=0.0)
    max_devices: int = Field(..., ge=1, description="100 or more means unlimited")
    countries: int = Field(..., ge=0)
    free_tier: bool
    torrent_support: bool
    netflix_support: bool
    kill_switch: bool
    no_logs: bool
    affiliate_url: str
    short_description: str | None = None
    sort_order: int = 0

    @property
    def price_per_month(self) -> float:
        """Two-year plan price when the provider has one, else the yearly plan."""
        return self.price_two_year or self.price_yearly


def _field_name(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc) or "record"


def coerce_provider(raw: ProviderRecord | Mapping[str, Any]) -> ProviderRecord:
    """Validate a raw catalog row, naming the provider when it is unusable."""
    if isinstance(raw, ProviderRecord):
        return raw
    try:
        return ProviderRecord.model_validate(raw)
    except ValidationError as exc:
        provider_id = raw.get("id") if isinstance(raw, Mapping) else None
        fields = sorted({_field_name(err["loc"]) for err in exc.errors()})
        raise MalformedProviderError(str(provider_id or "<unknown>"), fields) from exc
