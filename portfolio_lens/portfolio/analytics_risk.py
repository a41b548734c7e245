"""Risk profile and diversification analytics."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from portfolio_lens.portfolio.analytics_core import (
    allocation_by,
    allocation_weights,
    assets_to_frame,
    clamp,
    distinct_count,
)
from portfolio_lens.portfolio.constants import RISK_LEVEL_BANDS
from portfolio_lens.portfolio.models import Asset, AssetType, DiversificationAnalysis, RiskProfile

DEFAULT_VOLATILITY_PERCENT = 15.0
VOLATILITY_SCALE_DIVISOR = 3.0

# Most specific first: "A" is contained in "AA" and "AAA".
CREDIT_RATING_RULES: tuple[tuple[str, float], ...] = (
    ("AAA", 1.0),
    ("AA+", 1.0),
    ("AA", 2.0),
    ("A+", 2.0),
    ("A", 3.0),
    ("BBB+", 3.0),
    ("BBB", 4.0),
    ("BB", 6.0),
    ("B", 8.0),
)
UNRECOGNIZED_RATING_SCORE = 10.0
UNRATED_BOND_SCORE = 3.0
EQUITY_CREDIT_SCORE = 2.0
CASH_CREDIT_SCORE = 1.0
OTHER_CREDIT_SCORE = 3.0
EQUITY_LIKE_TYPES = {AssetType.STOCK, AssetType.ETF, AssetType.MUTUAL_FUND}

OVERALL_WEIGHTS = {"concentration": 0.4, "volatility": 0.4, "credit": 0.2}

ASSET_TYPE_POINTS = 2.0
SECTOR_POINTS = 1.5
REGION_POINTS = 2.5
RECOMMENDATION_THRESHOLD = 6.0
ASSET_TYPE_RECOMMENDATION = "Consider diversifying across more asset types"
SECTOR_RECOMMENDATION = "Add exposure to different sectors"
GEOGRAPHIC_RECOMMENDATION = "Consider international diversification"


def calculate_concentration_risk(assets: Sequence[Asset]) -> float:
    # Herfindahl-Hirschman Index scaled to 0-10
    weights = allocation_weights(assets)
    hhi = float(np.sum(np.square(weights)))
    return min(10.0, hhi * 10.0)


def calculate_sector_concentration(assets: Sequence[Asset]) -> float:
    sectors = allocation_by(assets_to_frame(assets), "Sector")
    return max(sectors.values()) if sectors else 0.0


def calculate_geographic_risk(assets: Sequence[Asset]) -> float:
    regions = allocation_by(assets_to_frame(assets), "Region")
    total = sum(regions.values())
    if not regions or total <= 0:
        return 0.0
    return max(regions.values()) / total * 100.0


def calculate_volatility_score(assets: Sequence[Asset]) -> float:
    vols = np.array(
        [DEFAULT_VOLATILITY_PERCENT if asset.volatility is None else asset.volatility for asset in assets],
        dtype=float,
    )
    weighted = float(np.dot(vols, allocation_weights(assets))) if len(vols) else 0.0
    return clamp(weighted / VOLATILITY_SCALE_DIVISOR, 1.0, 10.0)


def credit_rating_score(rating: str | None) -> float:
    """Score a bond's credit rating on the 1-10 scale.

    A missing (or blank) rating assumes investment grade; a rating that
    matches none of the known tiers is treated as the worst case.
    """
    if rating is None or not rating.strip():
        return UNRATED_BOND_SCORE
    normalized = rating.strip().upper()
    for token, score in CREDIT_RATING_RULES:
        if token in normalized:
            return score
    return UNRECOGNIZED_RATING_SCORE


def asset_credit_score(asset: Asset) -> float:
    if asset.asset_type is AssetType.BOND:
        return credit_rating_score(asset.credit_rating)
    if asset.asset_type in EQUITY_LIKE_TYPES:
        return EQUITY_CREDIT_SCORE
    if asset.asset_type is AssetType.CASH:
        return CASH_CREDIT_SCORE
    return OTHER_CREDIT_SCORE


def calculate_credit_risk(assets: Sequence[Asset]) -> float:
    scores = np.array([asset_credit_score(asset) for asset in assets], dtype=float)
    exposure = float(np.dot(scores, allocation_weights(assets))) if len(scores) else 0.0
    return min(10.0, exposure)


def calculate_overall_risk_score(concentration: float, volatility: float, credit: float) -> float:
    blended = (
        OVERALL_WEIGHTS["concentration"] * concentration
        + OVERALL_WEIGHTS["volatility"] * volatility
        + OVERALL_WEIGHTS["credit"] * credit
    )
    return clamp(blended, 1.0, 10.0)


def compute_risk_profile(assets: Sequence[Asset]) -> RiskProfile:
    """Compute every risk sub-score for one portfolio.

    Sector and geographic concentration are reported as percentages and are
    not part of the overall blend. An empty portfolio scores zero concentration
    and credit exposure with volatility and overall at their floor of 1.
    """
    concentration = calculate_concentration_risk(assets)
    volatility = calculate_volatility_score(assets)
    credit = calculate_credit_risk(assets)
    return RiskProfile(
        overall_risk_score=calculate_overall_risk_score(concentration, volatility, credit),
        concentration_risk=concentration,
        sector_concentration=calculate_sector_concentration(assets),
        geographic_risk=calculate_geographic_risk(assets),
        volatility_score=volatility,
        credit_risk=credit,
    )


def classify_risk_level(overall_risk_score: float) -> str:
    for upper, label in RISK_LEVEL_BANDS:
        if overall_risk_score <= upper:
            return label
    return RISK_LEVEL_BANDS[-1][1]


def compute_diversification_analysis(assets: Sequence[Asset]) -> DiversificationAnalysis:
    frame = assets_to_frame(assets)
    asset_type_score = min(10.0, ASSET_TYPE_POINTS * distinct_count(frame, "Asset_Type"))
    sector_score = min(10.0, SECTOR_POINTS * distinct_count(frame, "Sector"))
    geographic_score = min(10.0, REGION_POINTS * distinct_count(frame, "Region"))
    overall = (asset_type_score + sector_score + geographic_score) / 3.0

    recommendations: list[str] = []
    if asset_type_score < RECOMMENDATION_THRESHOLD:
        recommendations.append(ASSET_TYPE_RECOMMENDATION)
    if sector_score < RECOMMENDATION_THRESHOLD:
        recommendations.append(SECTOR_RECOMMENDATION)
    if geographic_score < RECOMMENDATION_THRESHOLD:
        recommendations.append(GEOGRAPHIC_RECOMMENDATION)

    return DiversificationAnalysis(
        asset_type_diversification=asset_type_score,
        sector_diversification=sector_score,
        geographic_diversification=geographic_score,
        overall_diversification=overall,
        recommendations=recommendations,
    )
