import pytest

from portfolio_lens.portfolio.analytics_risk import (
    calculate_concentration_risk,
    calculate_credit_risk,
    calculate_geographic_risk,
    calculate_overall_risk_score,
    calculate_sector_concentration,
    calculate_volatility_score,
    classify_risk_level,
    compute_risk_profile,
    credit_rating_score,
)
from portfolio_lens.portfolio.models import Asset, AssetCategory, AssetType, Region


def _asset(
    symbol: str,
    allocation: float,
    asset_type: AssetType = AssetType.STOCK,
    region: Region = Region.US,
    sector: str | None = None,
    volatility: float | None = None,
    credit_rating: str | None = None,
) -> Asset:
    return Asset(
        symbol=symbol,
        name=symbol,
        asset_type=asset_type,
        asset_category=AssetCategory.US_LARGE_CAP,
        geographic_region=region,
        allocation_percentage=allocation,
        dollar_amount=allocation * 100.0,
        sector=sector,
        volatility=volatility,
        credit_rating=credit_rating,
    )


def test_single_asset_concentration_is_ten() -> None:
    assert calculate_concentration_risk([_asset("AAPL", 100.0)]) == 10.0


@pytest.mark.parametrize("count", [2, 4, 5, 10])
def test_equal_weight_concentration(count: int) -> None:
    assets = [_asset(f"S{idx}", 100.0 / count) for idx in range(count)]
    assert calculate_concentration_risk(assets) == pytest.approx(10.0 / count)


def test_four_equal_assets_exact_value() -> None:
    assets = [_asset(f"S{idx}", 25.0) for idx in range(4)]
    assert calculate_concentration_risk(assets) == 2.5


def test_sector_concentration_uses_largest_sector_bucket() -> None:
    assets = [
        _asset("AAPL", 30.0, sector="Technology"),
        _asset("MSFT", 20.0, sector="Technology"),
        _asset("JPM", 25.0, sector="Financials"),
        _asset("BND", 25.0, asset_type=AssetType.BOND),
    ]
    assert calculate_sector_concentration(assets) == pytest.approx(50.0)


def test_sector_concentration_without_sectors_is_zero() -> None:
    assert calculate_sector_concentration([_asset("VTI", 100.0)]) == 0.0


def test_geographic_risk() -> None:
    assets = [
        _asset("VTI", 70.0, region=Region.US),
        _asset("VXUS", 20.0, region=Region.DEVELOPED_INTERNATIONAL),
        _asset("VWO", 10.0, region=Region.EMERGING_MARKETS),
    ]
    assert calculate_geographic_risk(assets) == pytest.approx(70.0)
    assert calculate_geographic_risk([_asset("A", 40.0), _asset("B", 60.0)]) == pytest.approx(100.0)


def test_volatility_defaults_and_clamping() -> None:
    # 15% default volatility maps to 5 on the 1-10 scale.
    assert calculate_volatility_score([_asset("VTI", 100.0)]) == pytest.approx(5.0)
    assert calculate_volatility_score([_asset("MEME", 100.0, volatility=90.0)]) == 10.0
    assert calculate_volatility_score([_asset("SHV", 100.0, volatility=0.5)]) == 1.0
    mixed = [_asset("A", 50.0, volatility=12.0), _asset("B", 50.0, volatility=24.0)]
    assert calculate_volatility_score(mixed) == pytest.approx(6.0)


@pytest.mark.parametrize(
    ("rating", "expected"),
    [
        ("AAA", 1.0),
        ("aa+", 1.0),
        ("AA", 2.0),
        ("AA-", 2.0),
        ("A+", 2.0),
        ("A", 3.0),
        ("A-", 3.0),
        ("BBB+", 3.0),
        ("BBB", 4.0),
        ("BBB-", 4.0),
        ("BB", 6.0),
        ("B", 8.0),
        ("CCC", 10.0),
        ("junk", 10.0),
        (None, 3.0),
        ("", 3.0),
    ],
)
def test_credit_rating_tiers(rating: str | None, expected: float) -> None:
    assert credit_rating_score(rating) == expected


def test_credit_risk_by_portfolio_type() -> None:
    assert calculate_credit_risk([_asset("CASH", 100.0, asset_type=AssetType.CASH)]) == pytest.approx(1.0)
    assert calculate_credit_risk([_asset("BND", 100.0, asset_type=AssetType.BOND)]) == pytest.approx(3.0)
    unrecognized = [_asset("BND", 100.0, asset_type=AssetType.BOND, credit_rating="NR")]
    assert calculate_credit_risk(unrecognized) == pytest.approx(10.0)
    assert calculate_credit_risk([_asset("VTI", 100.0, asset_type=AssetType.ETF)]) == pytest.approx(2.0)
    assert calculate_credit_risk([_asset("GLD", 100.0, asset_type=AssetType.COMMODITY)]) == pytest.approx(3.0)
    mixed = [
        _asset("VTI", 50.0, asset_type=AssetType.ETF),
        _asset("HYG", 50.0, asset_type=AssetType.BOND, credit_rating="BB"),
    ]
    assert calculate_credit_risk(mixed) == pytest.approx(4.0)


@pytest.mark.parametrize(
    ("concentration", "volatility", "credit"),
    [(0.0, 0.0, 0.0), (10.0, 10.0, 10.0), (50.0, 50.0, 50.0), (-5.0, 1.0, 0.0)],
)
def test_overall_score_is_clamped(concentration: float, volatility: float, credit: float) -> None:
    score = calculate_overall_risk_score(concentration, volatility, credit)
    assert 1.0 <= score <= 10.0


def test_compute_risk_profile_blend_and_diagnostics() -> None:
    assets = [
        _asset("VTI", 60.0, asset_type=AssetType.ETF, sector="Broad Market", volatility=18.0),
        _asset("BND", 40.0, asset_type=AssetType.BOND, credit_rating="AA", volatility=6.0),
    ]
    profile = compute_risk_profile(assets)
    assert profile.concentration_risk == pytest.approx(5.2)
    assert profile.volatility_score == pytest.approx((0.6 * 18.0 + 0.4 * 6.0) / 3.0)
    assert profile.credit_risk == pytest.approx(0.6 * 2.0 + 0.4 * 2.0)
    expected = 0.4 * 5.2 + 0.4 * profile.volatility_score + 0.2 * profile.credit_risk
    assert profile.overall_risk_score == pytest.approx(expected)
    assert profile.sector_concentration == pytest.approx(60.0)
    assert profile.geographic_risk == pytest.approx(100.0)


def test_compute_risk_profile_empty_portfolio() -> None:
    profile = compute_risk_profile([])
    assert profile.concentration_risk == 0.0
    assert profile.credit_risk == 0.0
    assert profile.sector_concentration == 0.0
    assert profile.geographic_risk == 0.0
    assert profile.volatility_score == 1.0
    assert profile.overall_risk_score == 1.0


def test_compute_risk_profile_is_deterministic() -> None:
    assets = (
        _asset("AAPL", 33.3, sector="Technology", volatility=27.0),
        _asset("XOM", 33.3, sector="Energy", region=Region.GLOBAL),
        _asset("TLT", 33.4, asset_type=AssetType.BOND, credit_rating="AAA", volatility=14.0),
    )
    assert compute_risk_profile(assets) == compute_risk_profile(assets)


@pytest.mark.parametrize(("score", "label"), [(1.0, "conservative"), (3.0, "conservative"), (4.5, "moderate"), (9.9, "aggressive")])
def test_classify_risk_level(score: float, label: str) -> None:
    assert classify_risk_level(score) == label
