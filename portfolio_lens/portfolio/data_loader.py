"""Conversion of raw caller payloads into typed portfolio inputs."""

from __future__ import annotations

import math
from typing import Any, Mapping, Sequence

import pandas as pd

from portfolio_lens.portfolio.constants import DEFAULT_CATEGORY_BY_TYPE
from portfolio_lens.portfolio.models import Asset, AssetCategory, AssetType, Region, ScenarioImpact

REQUIRED_FIELDS = ["symbol", "name", "asset_type", "allocation_percentage", "dollar_amount"]
NUMERIC_FIELDS = {"allocation_percentage", "dollar_amount"}
OPTIONAL_FIELDS = [
    "asset_category",
    "geographic_region",
    "sector",
    "credit_rating",
    "volatility",
    "expense_ratio",
    "dividend_yield",
    "duration",
    "beta",
    "shares",
    "avg_purchase_price",
]
OPTIONAL_NUMERIC_FIELDS = [
    "volatility",
    "expense_ratio",
    "dividend_yield",
    "duration",
    "beta",
    "shares",
    "avg_purchase_price",
]
ALL_FIELDS = REQUIRED_FIELDS + OPTIONAL_FIELDS
SCENARIO_META_KEYS = {"name", "description"}

FIELD_ALIASES = {
    "assetType": "asset_type",
    "assetCategory": "asset_category",
    "category": "asset_category",
    "geographicRegion": "geographic_region",
    "region": "geographic_region",
    "allocationPercentage": "allocation_percentage",
    "allocation": "allocation_percentage",
    "dollarAmount": "dollar_amount",
    "creditRating": "credit_rating",
    "expenseRatio": "expense_ratio",
    "dividendYield": "dividend_yield",
    "avgPurchasePrice": "avg_purchase_price",
    "avgPrice": "avg_purchase_price",
}


def _normalize_keys(record: Mapping[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in record.items():
        out.setdefault(FIELD_ALIASES.get(key, key), value)
    # Canonical snake_case keys win over aliases.
    out.update({key: value for key, value in record.items() if key in ALL_FIELDS})
    return out


def records_to_frame(records: Sequence[Mapping[str, Any]]) -> pd.DataFrame:
    rows = [_normalize_keys(record) for record in records]
    frame = pd.DataFrame(rows)
    return frame.reindex(columns=ALL_FIELDS).astype(object)


def _optional_text(value: Any) -> str | None:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return None
    text = str(value).strip()
    return text or None


def _optional_float(value: Any) -> float | None:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return float(value)


def _row_to_asset(row: Mapping[str, Any]) -> Asset:
    asset_type = AssetType.parse(row["asset_type"])
    category_token = _optional_text(row.get("asset_category"))
    region_token = _optional_text(row.get("geographic_region"))
    return Asset(
        symbol=str(row["symbol"]).strip().upper(),
        name=str(row["name"]).strip(),
        asset_type=asset_type,
        asset_category=(
            AssetCategory.parse(category_token) if category_token else DEFAULT_CATEGORY_BY_TYPE[asset_type]
        ),
        geographic_region=Region.parse(region_token) if region_token else Region.US,
        allocation_percentage=float(row["allocation_percentage"]),
        dollar_amount=float(row["dollar_amount"]),
        sector=_optional_text(row.get("sector")),
        credit_rating=_optional_text(row.get("credit_rating")),
        **{name: _optional_float(row.get(name)) for name in OPTIONAL_NUMERIC_FIELDS},
    )


def frame_to_assets(frame: pd.DataFrame) -> list[Asset]:
    assets: list[Asset] = []
    for idx, row in enumerate(frame.to_dict(orient="records")):
        try:
            assets.append(_row_to_asset(row))
        except (KeyError, TypeError, ValueError) as error:
            raise ValueError(f"Row {idx + 1}: {error}") from error
    return assets


def load_assets(records: Sequence[Mapping[str, Any]]) -> list[Asset]:
    """Parse caller records into assets; raises ValueError on malformed rows."""
    return frame_to_assets(records_to_frame(records))


def _parse_range(raw: Any) -> tuple[float, float]:
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise ValueError(f"Impact range must be a [min, max] pair, received {raw!r}")
    low, high = float(raw[0]), float(raw[1])
    return (low, high) if low <= high else (high, low)


def parse_scenario(payload: Mapping[str, Any]) -> dict[AssetCategory, ScenarioImpact]:
    """Build per-category impacts from a scenario definition.

    Accepts either ``{"impacts": [{"asset_category": ..., "impact_range": [lo, hi], ...}]}``
    or a plain ``{category: [lo, hi]}`` mapping.
    """
    impacts: dict[AssetCategory, ScenarioImpact] = {}
    entries = payload.get("impacts")
    if entries is None:
        for category, raw_range in payload.items():
            if category in SCENARIO_META_KEYS:
                continue
            parsed = AssetCategory.parse(category)
            impacts[parsed] = ScenarioImpact(asset_category=parsed, impact_range=_parse_range(raw_range))
        return impacts

    for entry in entries:
        entry = _normalize_scenario_keys(entry)
        category = AssetCategory.parse(entry["asset_category"])
        impacts[category] = ScenarioImpact(
            asset_category=category,
            impact_range=_parse_range(entry.get("impact_range")),
            primary_drivers=tuple(str(item) for item in entry.get("primary_drivers") or ()),
            volatility_multiplier=float(entry.get("volatility_multiplier", 1.0)),
            correlation_adjustment=float(entry.get("correlation_adjustment", 0.0)),
        )
    return impacts


def _normalize_scenario_keys(entry: Mapping[str, Any]) -> dict[str, Any]:
    aliases = {
        "assetCategory": "asset_category",
        "impactRange": "impact_range",
        "primaryDrivers": "primary_drivers",
        "volatilityMultiplier": "volatility_multiplier",
        "correlationAdjustment": "correlation_adjustment",
    }
    return {aliases.get(key, key): value for key, value in entry.items()}
