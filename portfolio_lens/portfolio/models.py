"""Typed portfolio models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class AssetType(str, Enum):
    STOCK = "stock"
    ETF = "etf"
    MUTUAL_FUND = "mutual_fund"
    BOND = "bond"
    REIT = "reit"
    COMMODITY = "commodity"
    CASH = "cash"

    @classmethod
    def parse(cls, token: str) -> AssetType:
        """Case-insensitive lookup; raises ValueError for unknown tokens."""
        return cls(str(token).strip().lower())


class AssetCategory(str, Enum):
    US_LARGE_CAP = "us_large_cap"
    US_MID_CAP = "us_mid_cap"
    US_SMALL_CAP = "us_small_cap"
    INTERNATIONAL_DEVELOPED = "international_developed"
    EMERGING_MARKETS = "emerging_markets"
    GOVERNMENT_BONDS = "government_bonds"
    CORPORATE_BONDS = "corporate_bonds"
    HIGH_YIELD_BONDS = "high_yield_bonds"
    INTERNATIONAL_BONDS = "international_bonds"
    INFLATION_PROTECTED = "inflation_protected"
    REAL_ESTATE = "real_estate"
    COMMODITIES = "commodities"
    CASH_EQUIVALENTS = "cash_equivalents"

    @classmethod
    def parse(cls, token: str) -> AssetCategory:
        return cls(str(token).strip().lower())


class Region(str, Enum):
    US = "us"
    DEVELOPED_INTERNATIONAL = "developed_international"
    EMERGING_MARKETS = "emerging_markets"
    GLOBAL = "global"

    @classmethod
    def parse(cls, token: str) -> Region:
        return cls(str(token).strip().lower())


class ValidationErrorKind(str, Enum):
    INVALID_ALLOCATION_SUM = "INVALID_ALLOCATION_SUM"
    INVALID_ALLOCATION_VALUE = "INVALID_ALLOCATION_VALUE"
    INVALID_DOLLAR_CONSISTENCY = "INVALID_DOLLAR_CONSISTENCY"
    INVALID_ASSET_COUNT = "INVALID_ASSET_COUNT"
    UNSUPPORTED_ASSET_TYPE = "UNSUPPORTED_ASSET_TYPE"
    INVALID_SYMBOL_FORMAT = "INVALID_SYMBOL_FORMAT"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    INVALID_NUMERIC_VALUE = "INVALID_NUMERIC_VALUE"
    CONCENTRATION_WARNING = "CONCENTRATION_WARNING"


@dataclass(frozen=True)
class Asset:
    symbol: str
    name: str
    asset_type: AssetType
    asset_category: AssetCategory
    geographic_region: Region
    allocation_percentage: float
    dollar_amount: float
    sector: str | None = None
    credit_rating: str | None = None
    volatility: float | None = None
    expense_ratio: float | None = None
    dividend_yield: float | None = None
    duration: float | None = None
    beta: float | None = None
    shares: float | None = None
    avg_purchase_price: float | None = None


@dataclass(frozen=True)
class ValidationIssue:
    kind: ValidationErrorKind
    message: str
    field: str | None = None
    row: int | None = None
    suggested_fix: str | None = None

    @property
    def is_advisory(self) -> bool:
        return self.kind is ValidationErrorKind.CONCENTRATION_WARNING


@dataclass(frozen=True)
class RiskProfile:
    overall_risk_score: float
    concentration_risk: float
    sector_concentration: float
    geographic_risk: float
    volatility_score: float
    credit_risk: float


@dataclass(frozen=True)
class DiversificationAnalysis:
    asset_type_diversification: float
    sector_diversification: float
    geographic_diversification: float
    overall_diversification: float
    recommendations: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class AllocationSummary:
    total_assets: int
    total_value: float
    asset_type_breakdown: dict[str, float]
    category_breakdown: dict[str, float]
    region_breakdown: dict[str, float]


@dataclass(frozen=True)
class ScenarioImpact:
    """Expected move for one asset category under a scenario.

    ``impact_range`` is ``(min, max)`` in percent, e.g. ``(-35.0, -15.0)``.
    The remaining fields are descriptive metadata carried through to results.
    """

    asset_category: AssetCategory
    impact_range: tuple[float, float]
    primary_drivers: tuple[str, ...] = ()
    volatility_multiplier: float = 1.0
    correlation_adjustment: float = 0.0


@dataclass(frozen=True)
class AssetImpactDetail:
    symbol: str
    name: str
    asset_category: AssetCategory
    impact_percentage: float
    impact_dollar: float
    primary_drivers: tuple[str, ...] = ()


@dataclass(frozen=True)
class ScenarioResult:
    total_impact_percentage: float
    total_impact_dollar: float
    portfolio_value: float
    stressed_value: float
    asset_impacts: list[AssetImpactDetail] = field(default_factory=list)
    uncovered_categories: list[AssetCategory] = field(default_factory=list)
