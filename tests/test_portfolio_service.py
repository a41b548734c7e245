import pytest

from portfolio_lens.portfolio.constants import ValidationLimits
from portfolio_lens.portfolio.portfolio_service import PortfolioService


def _records() -> list[dict]:
    return [
        {
            "symbol": "VTI",
            "name": "Vanguard Total Stock Market",
            "asset_type": "etf",
            "asset_category": "us_large_cap",
            "geographic_region": "us",
            "allocation_percentage": 60,
            "dollar_amount": 60000,
            "sector": "Broad Market",
            "volatility": 18,
        },
        {
            "symbol": "BND",
            "name": "Vanguard Total Bond Market",
            "asset_type": "bond",
            "asset_category": "government_bonds",
            "geographic_region": "us",
            "allocation_percentage": 40,
            "dollar_amount": 40000,
            "credit_rating": "AA",
            "volatility": 6,
        },
    ]


def test_validate_assets_ok() -> None:
    result = PortfolioService().validate_assets(_records(), total_value=100000.0)
    assert result["ok"] is True
    assert result["rows"] == 2
    assert result["warnings"] == []


def test_validate_assets_stops_at_record_errors() -> None:
    records = _records()
    records[0]["symbol"] = "BAD SYMBOL"
    records[1]["allocation_percentage"] = 10
    result = PortfolioService().validate_assets(records)
    assert result["ok"] is False
    assert result["error"]["type"] == "validation_error"
    kinds = {error["kind"] for error in result["error"]["errors"]}
    assert kinds == {"INVALID_SYMBOL_FORMAT"}


def test_validate_assets_after_parse_reports_combined_errors() -> None:
    records = _records()
    records[1]["allocation_percentage"] = 10
    result = PortfolioService().validate_assets(records, total_value=1.0)
    kinds = {error["kind"] for error in result["error"]["errors"]}
    assert kinds == {"INVALID_ALLOCATION_SUM", "INVALID_DOLLAR_CONSISTENCY"}


def test_analyze_payload_and_snapshot() -> None:
    updates: list[str] = []
    service = PortfolioService(resource_updated_callback=updates.append)
    payload = service.analyze(_records())
    assert payload["ok"] is True
    assert payload["portfolio_value"] == pytest.approx(100000.0)
    assert payload["risk_profile"]["concentration_risk"] == pytest.approx(5.2)
    assert payload["risk_level"] in {"conservative", "moderate", "aggressive"}
    assert payload["allocation_summary"]["total_assets"] == 2
    assert payload["diversification"]["recommendations"]
    assert updates == ["portfolio://current"]
    assert service.get_current_resource_snapshot()["report_type"] == "analysis"
    assert service.get_resource_snapshot("ANALYSIS")["payload"] is payload
    assert service.get_resource_snapshot("unknown") is None


def test_analyze_concentration_warning_is_not_blocking() -> None:
    records = _records()
    records[0]["allocation_percentage"] = 90
    records[1]["allocation_percentage"] = 10
    payload = PortfolioService().analyze(records)
    assert payload["ok"] is True
    assert [warning["kind"] for warning in payload["warnings"]] == ["CONCENTRATION_WARNING"]


def test_analyze_rejects_invalid_portfolio_without_snapshot() -> None:
    service = PortfolioService()
    records = _records()
    records[0]["asset_type"] = "crypto"
    payload = service.analyze(records)
    assert payload["ok"] is False
    assert payload["error"]["errors"][0]["row"] == 1
    assert service.get_current_resource_snapshot() is None


def test_custom_limits_apply() -> None:
    service = PortfolioService(limits=ValidationLimits(max_assets=1))
    payload = service.analyze(_records())
    assert payload["error"]["errors"][0]["kind"] == "INVALID_ASSET_COUNT"


def test_diversification() -> None:
    service = PortfolioService()
    payload = service.diversification(_records())
    assert payload["diversification"]["asset_type_diversification"] == 4.0
    assert service.get_resource_snapshot("diversification") is not None


def test_scenario_analysis() -> None:
    service = PortfolioService()
    scenario = {
        "name": "recession",
        "impacts": [
            {"asset_category": "us_large_cap", "impact_range": [-35, -15]},
            {"asset_category": "government_bonds", "impact_range": [5, 15]},
        ],
    }
    payload = service.scenario_analysis(_records(), scenario)
    assert payload["ok"] is True
    assert payload["scenario_name"] == "recession"
    assert payload["scenario"]["total_impact_percentage"] == pytest.approx(-11.0)
    assert payload["scenario"]["total_impact_dollar"] == pytest.approx(-11000.0)
    assert payload["scenario"]["asset_impacts"][0]["asset_category"] == "us_large_cap"


def test_scenario_analysis_rejects_bad_definition() -> None:
    payload = PortfolioService().scenario_analysis(_records(), {"impacts": [{"asset_category": "crypto"}]})
    assert payload["ok"] is False
    assert payload["error"]["errors"][0]["field"] == "scenario"


def test_risk_report_text() -> None:
    service = PortfolioService()
    report = service.risk_report(_records())
    assert report.startswith("Portfolio Risk Report")
    assert "Portfolio value: $100,000.00" in report
    assert "Concentration risk: 5.2/10" in report
    assert "Holdings: 2" in report
    assert "not financial advice" in report

    records = _records()
    records[0]["allocation_percentage"] = 10
    failed = service.risk_report(records)
    assert "Warning: Portfolio failed validation." in failed
    assert "INVALID_ALLOCATION_SUM" in failed


def test_list_scenarios() -> None:
    scenarios = PortfolioService.list_scenarios()
    assert [item["id"] for item in scenarios][:2] == ["recession", "inflation"]
    assert all("description" in item for item in scenarios)


def test_analyze_names_bad_optional_metric() -> None:
    records = _records()
    records[1]["volatility"] = "high"
    payload = PortfolioService().analyze(records)
    assert payload["ok"] is False
    (error,) = payload["error"]["errors"]
    assert error["kind"] == "INVALID_NUMERIC_VALUE"
    assert error["field"] == "volatility"
    assert error["row"] == 2
