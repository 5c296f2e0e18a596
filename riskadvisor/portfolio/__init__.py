"""Risk Advisor – Portfolio snapshot package.

This package exposes the position and summary types, the Portfolio
Provider protocol, and pure helpers for annotating snapshots.
"""

from .types import PortfolioPosition, PortfolioSummary, RiskLevel, Sector
from .provider import InMemoryPortfolioProvider, PortfolioProvider
from .snapshot import annotate_positions, summarise_portfolio, total_portfolio_value

__all__ = [
    "PortfolioPosition",
    "PortfolioSummary",
    "RiskLevel",
    "Sector",
    "InMemoryPortfolioProvider",
    "PortfolioProvider",
    "annotate_positions",
    "summarise_portfolio",
    "total_portfolio_value",
]
