"""Portfolio risk and scenario analytics domain package."""

from portfolio_lens.portfolio.analytics_risk import compute_diversification_analysis, compute_risk_profile
from portfolio_lens.portfolio.analytics_stress import calculate_asset_impact, calculate_portfolio_impact
from portfolio_lens.portfolio.models import Asset, AssetCategory, AssetType, Region
from portfolio_lens.portfolio.portfolio_service import PortfolioService

__all__ = [
    "Asset",
    "AssetCategory",
    "AssetType",
    "PortfolioService",
    "Region",
    "calculate_asset_impact",
    "calculate_portfolio_impact",
    "compute_diversification_analysis",
    "compute_risk_profile",
]
