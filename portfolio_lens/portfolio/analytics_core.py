"""Core allocation helpers shared by the risk and scenario analytics."""

from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd

from portfolio_lens.portfolio.models import AllocationSummary, Asset

ASSET_FRAME_COLUMNS = [
    "Symbol",
    "Asset_Type",
    "Asset_Category",
    "Region",
    "Sector",
    "Allocation",
    "Dollar_Amount",
]


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def allocation_weights(assets: Sequence[Asset]) -> np.ndarray:
    """Allocation fractions (percent / 100) in holding order."""
    return np.array([asset.allocation_percentage / 100.0 for asset in assets], dtype=float)


def assets_to_frame(assets: Sequence[Asset]) -> pd.DataFrame:
    rows = [
        [
            asset.symbol,
            asset.asset_type.value,
            asset.asset_category.value,
            asset.geographic_region.value,
            asset.sector or None,
            float(asset.allocation_percentage),
            float(asset.dollar_amount),
        ]
        for asset in assets
    ]
    frame = pd.DataFrame(rows, columns=ASSET_FRAME_COLUMNS)
    frame["Allocation"] = frame["Allocation"].astype(float)
    frame["Dollar_Amount"] = frame["Dollar_Amount"].astype(float)
    return frame


def allocation_by(frame: pd.DataFrame, column: str) -> dict[str, float]:
    """Summed allocation percentage per distinct value of ``column``.

    Rows whose key is missing are left out of every bucket.
    """
    if frame.empty:
        return {}
    totals = frame.groupby(column, dropna=True)["Allocation"].sum()
    return {str(key): float(value) for key, value in totals.to_dict().items()}


def distinct_count(frame: pd.DataFrame, column: str) -> int:
    if frame.empty:
        return 0
    return int(frame[column].dropna().nunique())


def calculate_total_dollar_value(assets: Sequence[Asset]) -> float:
    return float(sum(asset.dollar_amount for asset in assets))


def calculate_allocation_summary(assets: Sequence[Asset]) -> AllocationSummary:
    frame = assets_to_frame(assets)
    return AllocationSummary(
        total_assets=len(assets),
        total_value=calculate_total_dollar_value(assets),
        asset_type_breakdown=allocation_by(frame, "Asset_Type"),
        category_breakdown=allocation_by(frame, "Asset_Category"),
        region_breakdown=allocation_by(frame, "Region"),
    )
