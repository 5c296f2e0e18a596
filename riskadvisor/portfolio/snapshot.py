"""Risk Advisor – Portfolio snapshot helpers.

Pure transforms over a list of :class:`PortfolioPosition` records:

- :func:`total_portfolio_value` – current value of all holdings.
- :func:`annotate_positions` – derive allocation percentages and
  unrealised gains on fresh position objects.
- :func:`summarise_portfolio` – totals, ROI and risk distribution.

None of these functions mutate their input.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Sequence, Tuple

import numpy as np

from riskadvisor.portfolio.types import PortfolioPosition, PortfolioSummary, RiskLevel


def total_portfolio_value(positions: Sequence[PortfolioPosition]) -> float:
    """Return ``sum(holding_amount * current_price)`` over ``positions``."""

    if not positions:
        return 0.0
    amounts = np.fromiter((p.holding_amount for p in positions), dtype=float, count=len(positions))
    prices = np.fromiter((p.current_price for p in positions), dtype=float, count=len(positions))
    return float(np.dot(amounts, prices))


def annotate_positions(positions: Sequence[PortfolioPosition]) -> Tuple[PortfolioPosition, ...]:
    """Return a new snapshot with derived fields filled in.

    ``percentage_of_portfolio`` is each position's current value divided
    by the total current value, times 100. When the total is zero every
    percentage is ``0.0``, so the percentages sum to 100 for any funded
    portfolio and to 0 otherwise.
    """

    total_value = total_portfolio_value(positions)

    annotated = []
    for position in positions:
        current_value = position.current_value
        percentage = (current_value / total_value) * 100.0 if total_value > 0.0 else 0.0
        annotated.append(
            replace(
                position,
                percentage_of_portfolio=percentage,
                unrealized_gains=current_value - float(position.investment_value or 0.0),
            )
        )
    return tuple(annotated)


def summarise_portfolio(positions: Sequence[PortfolioPosition]) -> PortfolioSummary:
    """Compute aggregate totals and the risk-level distribution."""

    total_value = total_portfolio_value(positions)
    total_investment = float(sum(float(p.investment_value or 0.0) for p in positions))
    total_gains = total_value - total_investment
    total_roi = (total_gains / total_investment) * 100.0 if total_investment > 0.0 else 0.0

    distribution: Dict[RiskLevel, float] = {level: 0.0 for level in RiskLevel}
    if total_value > 0.0:
        for position in positions:
            distribution[position.risk_level] += (position.current_value / total_value) * 100.0

    return PortfolioSummary(
        total_value=total_value,
        total_investment=total_investment,
        total_unrealized_gains=total_gains,
        total_roi=total_roi,
        risk_distribution=distribution,
        num_positions=len(positions),
    )
