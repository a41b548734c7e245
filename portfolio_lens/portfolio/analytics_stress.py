"""Scenario impact analytics."""

from __future__ import annotations

from typing import Mapping, Sequence

from portfolio_lens.portfolio.analytics_core import clamp
from portfolio_lens.portfolio.models import (
    Asset,
    AssetCategory,
    AssetImpactDetail,
    ScenarioImpact,
    ScenarioResult,
)

ImpactRange = tuple[float, float]


def calculate_asset_impact(asset: Asset, impact_range: ImpactRange, volatility_multiplier: float = 1.0) -> float:
    """Midpoint of the range scaled by the multiplier, kept inside the range."""
    low, high = impact_range
    base = (low + high) / 2.0
    return clamp(base * volatility_multiplier, low, high)


def calculate_portfolio_impact(assets: Sequence[Asset], impact_map: Mapping[AssetCategory, ImpactRange]) -> float:
    total = 0.0
    for asset in assets:
        impact_range = impact_map.get(asset.asset_category)
        if impact_range is None:
            continue
        total += calculate_asset_impact(asset, impact_range) * asset.allocation_percentage / 100.0
    return total


def build_impact_map(impacts: Mapping[AssetCategory, ScenarioImpact]) -> dict[AssetCategory, ImpactRange]:
    return {category: impact.impact_range for category, impact in impacts.items()}


def run_scenario(
    assets: Sequence[Asset],
    impacts: Mapping[AssetCategory, ScenarioImpact],
    total_value: float,
) -> ScenarioResult:
    impact_map = build_impact_map(impacts)
    details: list[AssetImpactDetail] = []
    uncovered: list[AssetCategory] = []
    for asset in assets:
        impact = impacts.get(asset.asset_category)
        if impact is None:
            if asset.asset_category not in uncovered:
                uncovered.append(asset.asset_category)
            continue
        percentage = calculate_asset_impact(asset, impact.impact_range)
        details.append(
            AssetImpactDetail(
                symbol=asset.symbol,
                name=asset.name,
                asset_category=asset.asset_category,
                impact_percentage=percentage,
                impact_dollar=percentage * asset.dollar_amount / 100.0,
                primary_drivers=impact.primary_drivers,
            )
        )

    total_percentage = calculate_portfolio_impact(assets, impact_map)
    total_dollar = total_percentage * total_value / 100.0
    return ScenarioResult(
        total_impact_percentage=total_percentage,
        total_impact_dollar=total_dollar,
        portfolio_value=float(total_value),
        stressed_value=float(total_value) + total_dollar,
        asset_impacts=details,
        uncovered_categories=uncovered,
    )
