"""Portfolio-domain MCP tools."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mcp.server.fastmcp import FastMCP

from portfolio_lens.tools.common import run_tool

if TYPE_CHECKING:
    from portfolio_lens.tools.registry import ToolServices


def register_portfolio_tools(mcp: FastMCP, services: ToolServices) -> None:
    metrics = getattr(services, "metrics", None)

    @mcp.tool(description="Validate portfolio holdings: allocation sum, symbols, asset types and limits.")
    def validate_portfolio_assets(assets: list[dict[str, Any]], total_value: float | None = None) -> str:
        return run_tool(
            "validate_portfolio_assets",
            len(assets),
            lambda: services.portfolio.validate_assets(assets, total_value=total_value),
            metrics,
        )

    @mcp.tool(description="Compute the risk profile, diversification and allocation summary of a portfolio.")
    def analyze_portfolio_risk(assets: list[dict[str, Any]], total_value: float | None = None) -> str:
        return run_tool(
            "analyze_portfolio_risk",
            len(assets),
            lambda: services.portfolio.analyze(assets, total_value=total_value),
            metrics,
        )

    @mcp.tool(description="Score asset-type, sector and geographic diversification with recommendations.")
    def analyze_portfolio_diversification(assets: list[dict[str, Any]]) -> str:
        return run_tool(
            "analyze_portfolio_diversification",
            len(assets),
            lambda: services.portfolio.diversification(assets),
            metrics,
        )

    @mcp.tool(description="Apply per-category scenario impact ranges and return weighted portfolio impact.")
    def run_portfolio_scenario(
        assets: list[dict[str, Any]],
        scenario: dict[str, Any],
        total_value: float | None = None,
    ) -> str:
        return run_tool(
            "run_portfolio_scenario",
            len(assets),
            lambda: services.portfolio.scenario_analysis(assets, scenario, total_value=total_value),
            metrics,
        )

    @mcp.tool(description="Plain-text risk report for a portfolio.")
    def portfolio_risk_report(assets: list[dict[str, Any]], total_value: float | None = None) -> str:
        return run_tool(
            "portfolio_risk_report",
            len(assets),
            lambda: services.portfolio.risk_report(assets, total_value=total_value),
            metrics,
        )

    @mcp.tool(description="List the catalogue of economic scenarios.")
    def list_economic_scenarios() -> str:
        return run_tool(
            "list_economic_scenarios",
            None,
            lambda: {"ok": True, "scenarios": services.portfolio.list_scenarios()},
            metrics,
        )
