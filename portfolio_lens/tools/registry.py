"""Domain tool registry entrypoint."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from mcp.server.fastmcp import FastMCP

from portfolio_lens.config.settings import Settings
from portfolio_lens.portfolio.portfolio_service import PortfolioService
from portfolio_lens.runtime.monitoring import ServerMetrics
from portfolio_lens.tools.portfolio_tools import register_portfolio_tools


@dataclass
class ToolServices:
    portfolio: PortfolioService
    metrics: ServerMetrics | None = None


def build_tool_services(
    settings: Settings,
    metrics: ServerMetrics | None = None,
    resource_updated_callback: Callable[[str], None] | None = None,
) -> ToolServices:
    return ToolServices(
        portfolio=PortfolioService(
            limits=settings.validation_limits(),
            resource_updated_callback=resource_updated_callback,
        ),
        metrics=metrics,
    )


def register_all_tools(mcp: FastMCP, services: ToolServices) -> None:
    register_portfolio_tools(mcp, services)
