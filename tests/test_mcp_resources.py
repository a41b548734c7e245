import asyncio
import json
from types import SimpleNamespace

import pytest
from mcp.server.fastmcp import FastMCP

from portfolio_lens.resources.portfolio_resources import register_portfolio_resources


class _MockPortfolioService:
    def __init__(self) -> None:
        self.snapshot: dict[str, object] | None = None

    def get_current_resource_snapshot(self) -> dict[str, object] | None:
        return self.snapshot

    def get_resource_snapshot(self, report_type: str) -> dict[str, object] | None:
        if not self.snapshot:
            return None
        if self.snapshot.get("report_type") != report_type:
            return None
        return self.snapshot


def test_resources_list_and_read_happy_path() -> None:
    mcp = FastMCP(name="test-resources")
    portfolio_service = _MockPortfolioService()
    portfolio_service.snapshot = {
        "uri": "portfolio://current",
        "report_type": "analysis",
        "payload": {"ok": True},
    }
    register_portfolio_resources(mcp, SimpleNamespace(portfolio=portfolio_service))

    resources = asyncio.run(mcp.list_resources())
    uris = {str(resource.uri) for resource in resources}
    assert {"portfolio://current", "portfolio://asset-categories", "portfolio://regions"} <= uris

    contents = asyncio.run(mcp.read_resource("portfolio://current"))
    assert len(contents) == 1
    assert contents[0].mime_type == "application/json"
    data = json.loads(contents[0].content)
    assert data["report_type"] == "analysis"

    templates = asyncio.run(mcp.list_resource_templates())
    assert any(template.uriTemplate == "portfolio://snapshot/{report_type}" for template in templates)

    by_type = asyncio.run(mcp.read_resource("portfolio://snapshot/analysis"))
    assert json.loads(by_type[0].content)["payload"] == {"ok": True}


def test_reference_data_resources() -> None:
    mcp = FastMCP(name="test-resources-categories")
    register_portfolio_resources(mcp, SimpleNamespace(portfolio=_MockPortfolioService()))
    contents = asyncio.run(mcp.read_resource("portfolio://asset-categories"))
    data = json.loads(contents[0].content)
    assert len(data) == 13
    assert data["cash_equivalents"]["risk_level"] == 1

    regions = json.loads(asyncio.run(mcp.read_resource("portfolio://regions"))[0].content)
    assert set(regions) == {"us", "developed_international", "emerging_markets", "global"}
    assert regions["us"]["currency"] == "USD"


def test_resource_invalid_uri() -> None:
    mcp = FastMCP(name="test-resources-invalid-uri")
    register_portfolio_resources(mcp, SimpleNamespace(portfolio=_MockPortfolioService()))

    with pytest.raises(Exception):
        asyncio.run(mcp.read_resource("portfolio://unknown"))


def test_resource_not_found() -> None:
    mcp = FastMCP(name="test-resources-not-found")
    register_portfolio_resources(mcp, SimpleNamespace(portfolio=_MockPortfolioService()))

    with pytest.raises(Exception) as exc:
        asyncio.run(mcp.read_resource("portfolio://current"))
    assert "Portfolio resource not found" in str(exc.value)
