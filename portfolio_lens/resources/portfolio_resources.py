"""Portfolio resource definitions."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from mcp.server.fastmcp import FastMCP

from portfolio_lens.portfolio.constants import ASSET_CATEGORY_INFO, REGION_INFO

if TYPE_CHECKING:
    from portfolio_lens.tools.registry import ToolServices

CURRENT_PORTFOLIO_URI = "portfolio://current"
PORTFOLIO_SNAPSHOT_TEMPLATE_URI = "portfolio://snapshot/{report_type}"
ASSET_CATEGORIES_URI = "portfolio://asset-categories"
REGIONS_URI = "portfolio://regions"


def register_portfolio_resources(mcp: FastMCP, services: "ToolServices") -> None:
    @mcp.resource(
        CURRENT_PORTFOLIO_URI,
        name="current-portfolio",
        title="Current Portfolio Snapshot",
        description="Latest successful analytics payload (analysis, diversification or scenario).",
        mime_type="application/json",
    )
    def current_portfolio_resource() -> str:
        snapshot = services.portfolio.get_current_resource_snapshot()
        if not snapshot:
            raise ValueError("Portfolio resource not found. Run a portfolio analysis first.")
        return json.dumps(snapshot, ensure_ascii=True)

    @mcp.resource(
        PORTFOLIO_SNAPSHOT_TEMPLATE_URI,
        name="portfolio-snapshot",
        title="Portfolio Snapshot By Report Type",
        description="Returns the latest snapshot for a report type (analysis, diversification, scenario).",
        mime_type="application/json",
    )
    def portfolio_snapshot_by_type(report_type: str) -> str:
        snapshot = services.portfolio.get_resource_snapshot(report_type)
        if not snapshot:
            raise ValueError("Portfolio resource not found for the given report_type.")
        return json.dumps(snapshot, ensure_ascii=True)

    @mcp.resource(
        ASSET_CATEGORIES_URI,
        name="asset-categories",
        title="Asset Category Reference",
        description="Supported asset categories with typical volatility and risk level.",
        mime_type="application/json",
    )
    def asset_categories() -> str:
        payload = {
            category.value: {
                "name": info.name,
                "description": info.description,
                "typical_volatility": info.typical_volatility,
                "risk_level": info.risk_level,
            }
            for category, info in ASSET_CATEGORY_INFO.items()
        }
        return json.dumps(payload, ensure_ascii=True)

    @mcp.resource(
        REGIONS_URI,
        name="regions",
        title="Geographic Region Reference",
        description="Supported geographic regions with currency exposure and risk level.",
        mime_type="application/json",
    )
    def regions() -> str:
        payload = {
            region.value: {"name": info.name, "currency": info.currency, "risk_level": info.risk_level}
            for region, info in REGION_INFO.items()
        }
        return json.dumps(payload, ensure_ascii=True)
