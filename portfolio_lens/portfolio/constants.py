"""Reference data and policy limits for portfolio analytics."""

from __future__ import annotations

from dataclasses import dataclass

from portfolio_lens.portfolio.models import AssetCategory, AssetType, Region


@dataclass(frozen=True)
class ValidationLimits:
    max_assets: int = 50
    min_assets: int = 1
    max_single_asset_allocation: float = 80.0
    max_cash_allocation: float = 50.0
    allocation_tolerance: float = 0.01
    dollar_tolerance: float = 0.01


DEFAULT_LIMITS = ValidationLimits()


@dataclass(frozen=True)
class CategoryInfo:
    name: str
    description: str
    typical_volatility: float
    risk_level: int


ASSET_CATEGORY_INFO: dict[AssetCategory, CategoryInfo] = {
    AssetCategory.US_LARGE_CAP: CategoryInfo("US Large Cap", "Large capitalization US stocks", 15.0, 6),
    AssetCategory.US_MID_CAP: CategoryInfo("US Mid Cap", "Mid capitalization US stocks", 18.0, 7),
    AssetCategory.US_SMALL_CAP: CategoryInfo("US Small Cap", "Small capitalization US stocks", 22.0, 8),
    AssetCategory.INTERNATIONAL_DEVELOPED: CategoryInfo(
        "International Developed", "Developed market international stocks", 17.0, 7
    ),
    AssetCategory.EMERGING_MARKETS: CategoryInfo("Emerging Markets", "Emerging market stocks", 25.0, 9),
    AssetCategory.GOVERNMENT_BONDS: CategoryInfo("Government Bonds", "US Treasury and government bonds", 3.0, 2),
    AssetCategory.CORPORATE_BONDS: CategoryInfo("Corporate Bonds", "Investment grade corporate bonds", 5.0, 3),
    AssetCategory.HIGH_YIELD_BONDS: CategoryInfo(
        "High Yield Bonds", "Below investment grade corporate bonds", 12.0, 6
    ),
    AssetCategory.INTERNATIONAL_BONDS: CategoryInfo(
        "International Bonds", "Non-US government and corporate bonds", 6.0, 4
    ),
    AssetCategory.INFLATION_PROTECTED: CategoryInfo(
        "Inflation Protected", "TIPS and inflation-protected securities", 4.0, 2
    ),
    AssetCategory.REAL_ESTATE: CategoryInfo("Real Estate", "REITs and real estate investments", 16.0, 6),
    AssetCategory.COMMODITIES: CategoryInfo("Commodities", "Physical commodities and commodity funds", 20.0, 7),
    AssetCategory.CASH_EQUIVALENTS: CategoryInfo("Cash Equivalents", "Money market funds and cash", 0.5, 1),
}


@dataclass(frozen=True)
class RegionInfo:
    name: str
    currency: str
    risk_level: int


REGION_INFO: dict[Region, RegionInfo] = {
    Region.US: RegionInfo("United States", "USD", 3),
    Region.DEVELOPED_INTERNATIONAL: RegionInfo("Developed International", "Mixed", 4),
    Region.EMERGING_MARKETS: RegionInfo("Emerging Markets", "Mixed", 7),
    Region.GLOBAL: RegionInfo("Global", "Mixed", 5),
}

# Used when a raw record omits its category.
DEFAULT_CATEGORY_BY_TYPE: dict[AssetType, AssetCategory] = {
    AssetType.STOCK: AssetCategory.US_LARGE_CAP,
    AssetType.ETF: AssetCategory.US_LARGE_CAP,
    AssetType.MUTUAL_FUND: AssetCategory.US_LARGE_CAP,
    AssetType.BOND: AssetCategory.GOVERNMENT_BONDS,
    AssetType.REIT: AssetCategory.REAL_ESTATE,
    AssetType.COMMODITY: AssetCategory.COMMODITIES,
    AssetType.CASH: AssetCategory.CASH_EQUIVALENTS,
}

# Upper bounds of each overall-risk band on the 1-10 scale.
RISK_LEVEL_BANDS: tuple[tuple[float, str], ...] = (
    (3.0, "conservative"),
    (6.0, "moderate"),
    (10.0, "aggressive"),
)

ECONOMIC_SCENARIOS: dict[str, dict[str, str]] = {
    "recession": {
        "name": "Economic Recession",
        "description": "Period of economic decline with falling GDP and rising unemployment",
        "duration": "12-24 months",
        "frequency": "Every 7-10 years",
    },
    "inflation": {
        "name": "High Inflation",
        "description": "Rapid increase in general price levels",
        "duration": "6-18 months",
        "frequency": "Occasional periods",
    },
    "interest-rates": {
        "name": "Rising Interest Rates",
        "description": "Federal Reserve increasing benchmark rates",
        "duration": "12-36 months",
        "frequency": "Cyclical",
    },
    "market-crash": {
        "name": "Market Crash",
        "description": "Sharp, sudden decline in stock prices",
        "duration": "3-12 months",
        "frequency": "Every 10-15 years",
    },
    "credit-crunch": {
        "name": "Credit Crunch",
        "description": "Reduction in availability of credit",
        "duration": "6-24 months",
        "frequency": "Occasional",
    },
}
