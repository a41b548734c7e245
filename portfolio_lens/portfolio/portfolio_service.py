"""Portfolio analytics orchestration service."""

from __future__ import annotations

import logging
from threading import Lock
from typing import Any, Callable, Mapping, Sequence

from portfolio_lens.lib.calculations import round_to
from portfolio_lens.lib.formatters import format_response, line_money, line_number, line_percent, line_score
from portfolio_lens.portfolio.analytics_core import calculate_allocation_summary, calculate_total_dollar_value
from portfolio_lens.portfolio.analytics_risk import (
    classify_risk_level,
    compute_diversification_analysis,
    compute_risk_profile,
)
from portfolio_lens.portfolio.analytics_stress import run_scenario
from portfolio_lens.portfolio.constants import DEFAULT_LIMITS, ECONOMIC_SCENARIOS, ValidationLimits
from portfolio_lens.portfolio.data_loader import load_assets, parse_scenario
from portfolio_lens.portfolio.models import Asset, ValidationErrorKind, ValidationIssue
from portfolio_lens.portfolio.validation import has_blocking_issues, validate_asset_records, validate_portfolio
from portfolio_lens.runtime.response import convert_data

LOGGER = logging.getLogger(__name__)
REPORT_TYPES = {"analysis", "diversification", "scenario"}
CURRENT_RESOURCE_URI = "portfolio://current"


def issue_to_dict(issue: ValidationIssue) -> dict[str, Any]:
    return {
        "kind": issue.kind.value,
        "message": issue.message,
        "field": issue.field,
        "row": issue.row,
        "suggested_fix": issue.suggested_fix,
    }


def _json_validation_error(issues: Sequence[ValidationIssue]) -> dict[str, Any]:
    return {"ok": False, "error": {"type": "validation_error", "errors": [issue_to_dict(i) for i in issues]}}


class PortfolioService:
    """Runs validation, risk scoring and scenario analysis for caller payloads.

    The service holds no portfolio state beyond the latest successful payload per
    report type, which backs the ``portfolio://`` resources.
    """

    def __init__(
        self,
        limits: ValidationLimits = DEFAULT_LIMITS,
        resource_updated_callback: Callable[[str], None] | None = None,
    ) -> None:
        self.limits = limits
        self._resource_updated_callback = resource_updated_callback
        self._snapshots: dict[str, dict[str, Any]] = {}
        self._current: dict[str, Any] | None = None
        self._lock = Lock()

    def _store_snapshot(self, report_type: str, payload: dict[str, Any]) -> None:
        snapshot = {"uri": CURRENT_RESOURCE_URI, "report_type": report_type, "payload": payload}
        with self._lock:
            self._snapshots[report_type] = snapshot
            self._current = snapshot
        if self._resource_updated_callback is not None:
            self._resource_updated_callback(CURRENT_RESOURCE_URI)

    def get_current_resource_snapshot(self) -> dict[str, Any] | None:
        with self._lock:
            return self._current

    def get_resource_snapshot(self, report_type: str) -> dict[str, Any] | None:
        normalized = report_type.strip().lower()
        if normalized not in REPORT_TYPES:
            return None
        with self._lock:
            return self._snapshots.get(normalized)

    def _load(self, records: Sequence[Mapping[str, Any]]) -> tuple[list[Asset], list[ValidationIssue]]:
        issues = validate_asset_records(records)
        if issues:
            return [], issues
        try:
            return load_assets(records), []
        except ValueError as error:
            return [], [
                ValidationIssue(
                    kind=ValidationErrorKind.UNSUPPORTED_ASSET_TYPE,
                    field="assets",
                    message=str(error),
                    suggested_fix="Check asset category and region values",
                )
            ]

    def _checked_assets(
        self,
        records: Sequence[Mapping[str, Any]],
        total_value: float | None,
    ) -> tuple[list[Asset], list[ValidationIssue], list[ValidationIssue]]:
        assets, issues = self._load(records)
        if not issues:
            issues = validate_portfolio(assets, total_value=total_value, limits=self.limits)
        warnings = [issue for issue in issues if issue.is_advisory]
        if not has_blocking_issues(issues):
            return assets, [], warnings
        return assets, [issue for issue in issues if not issue.is_advisory], warnings

    def validate_assets(self, records: Sequence[Mapping[str, Any]], total_value: float | None = None) -> dict[str, Any]:
        _, blocking, warnings = self._checked_assets(records, total_value)
        if blocking:
            LOGGER.info("portfolio validation rejected: errors=%d", len(blocking))
            payload = _json_validation_error(blocking)
            payload["warnings"] = [issue_to_dict(issue) for issue in warnings]
            return payload
        return {
            "ok": True,
            "message": "Portfolio assets validated.",
            "rows": len(records),
            "warnings": [issue_to_dict(issue) for issue in warnings],
        }

    def analyze(self, records: Sequence[Mapping[str, Any]], total_value: float | None = None) -> dict[str, Any]:
        assets, blocking, warnings = self._checked_assets(records, total_value)
        if blocking:
            LOGGER.info("portfolio analysis rejected: errors=%d", len(blocking))
            return _json_validation_error(blocking)

        profile = compute_risk_profile(assets)
        diversification = compute_diversification_analysis(assets)
        payload = {
            "ok": True,
            "portfolio_value": total_value if total_value is not None else calculate_total_dollar_value(assets),
            "risk_profile": convert_data(profile),
            "risk_level": classify_risk_level(profile.overall_risk_score),
            "diversification": convert_data(diversification),
            "allocation_summary": convert_data(calculate_allocation_summary(assets)),
            "warnings": [issue_to_dict(issue) for issue in warnings],
        }
        LOGGER.info(
            "portfolio analysis completed: assets=%d overall_risk=%.2f diversification=%.2f",
            len(assets),
            profile.overall_risk_score,
            diversification.overall_diversification,
        )
        self._store_snapshot("analysis", payload)
        return payload

    def diversification(self, records: Sequence[Mapping[str, Any]]) -> dict[str, Any]:
        assets, blocking, _ = self._checked_assets(records, None)
        if blocking:
            return _json_validation_error(blocking)
        payload = {"ok": True, "diversification": convert_data(compute_diversification_analysis(assets))}
        self._store_snapshot("diversification", payload)
        return payload

    def scenario_analysis(
        self,
        records: Sequence[Mapping[str, Any]],
        scenario: Mapping[str, Any],
        total_value: float | None = None,
    ) -> dict[str, Any]:
        assets, blocking, _ = self._checked_assets(records, total_value)
        if blocking:
            return _json_validation_error(blocking)
        try:
            impacts = parse_scenario(scenario)
        except (KeyError, TypeError, ValueError) as error:
            return _json_validation_error(
                [
                    ValidationIssue(
                        kind=ValidationErrorKind.MISSING_REQUIRED_FIELD,
                        field="scenario",
                        message=f"Invalid scenario definition: {error}",
                    )
                ]
            )

        value = total_value if total_value is not None else calculate_total_dollar_value(assets)
        result = run_scenario(assets, impacts, value)
        payload = {"ok": True, "scenario": convert_data(result)}
        if scenario.get("name"):
            payload["scenario_name"] = str(scenario["name"])
        LOGGER.info(
            "scenario computed: assets=%d categories=%d impact_pct=%.4f",
            len(assets),
            len(impacts),
            result.total_impact_percentage,
        )
        self._store_snapshot("scenario", payload)
        return payload

    def risk_report(self, records: Sequence[Mapping[str, Any]], total_value: float | None = None) -> str:
        payload = self.analyze(records, total_value=total_value)
        if not payload.get("ok"):
            errors = payload["error"]["errors"]
            return format_response(
                "Portfolio Risk Report",
                [f"- {error['kind']}: {error['message']}" for error in errors],
                warning="Portfolio failed validation.",
                include_disclaimer=False,
            )
        profile = payload["risk_profile"]
        diversification = payload["diversification"]
        lines = [
            line_money("Portfolio value", payload["portfolio_value"]),
            line_number("Holdings", payload["allocation_summary"]["total_assets"], decimals=0),
            f"Risk level: {payload['risk_level']}",
            line_score("Overall risk", profile["overall_risk_score"]),
            line_score("Concentration risk", profile["concentration_risk"]),
            line_score("Volatility score", profile["volatility_score"]),
            line_score("Credit risk", profile["credit_risk"]),
            line_percent("Largest sector", round_to(profile["sector_concentration"])),
            line_percent("Largest region", round_to(profile["geographic_risk"])),
            line_score("Overall diversification", diversification["overall_diversification"]),
        ]
        lines.extend(f"- {item}" for item in diversification["recommendations"])
        warning = "; ".join(item["message"] for item in payload["warnings"]) or None
        return format_response("Portfolio Risk Report", lines, warning=warning)

    @staticmethod
    def list_scenarios() -> list[dict[str, str]]:
        return [{"id": key, **meta} for key, meta in ECONOMIC_SCENARIOS.items()]
