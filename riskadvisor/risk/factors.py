"""Risk Advisor – Risk factor scorers.

Six independent, pure scoring functions, each mapping an annotated
portfolio snapshot (see :func:`riskadvisor.portfolio.annotate_positions`)
to a score in [0, 100]. Every scorer returns ``0.0`` for an empty
portfolio.

The step thresholds used by the concentration, geographic and sector
scorers are part of the public behaviour and must not be smoothed.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Callable, Dict, Hashable, Sequence, Tuple

import numpy as np

from riskadvisor.portfolio.types import PortfolioPosition, RiskLevel
from riskadvisor.risk.types import RiskFactorScores


# Reference counts for the diversification sub-scores.
MAX_SECTORS = 5
MAX_GEOGRAPHIES = 10
MAX_RISK_LEVELS = 3

VOLATILITY_BY_RISK_LEVEL: Dict[RiskLevel, float] = {
    RiskLevel.HIGH: 80.0,
    RiskLevel.MEDIUM: 50.0,
    RiskLevel.LOW: 20.0,
}

# (volume_24h strictly above, penalty); anything at or below the last
# threshold gets LIQUIDITY_FLOOR_PENALTY.
LIQUIDITY_THRESHOLDS: Tuple[Tuple[float, float], ...] = (
    (1_000_000.0, 20.0),
    (500_000.0, 40.0),
)
LIQUIDITY_FLOOR_PENALTY = 70.0

# (max exposure in percent strictly above, score), checked top-down.
CONCENTRATION_STEPS: Tuple[Tuple[float, float], ...] = ((30.0, 80.0), (20.0, 60.0), (15.0, 40.0))
CONCENTRATION_FLOOR = 20.0

GEOGRAPHIC_STEPS: Tuple[Tuple[float, float], ...] = ((60.0, 80.0), (40.0, 50.0))
GEOGRAPHIC_FLOOR = 20.0

SECTOR_STEPS: Tuple[Tuple[float, float], ...] = ((70.0, 70.0), (50.0, 40.0))
SECTOR_FLOOR = 20.0


def _step(value: float, steps: Tuple[Tuple[float, float], ...], floor: float) -> float:
    for threshold, score in steps:
        if value > threshold:
            return score
    return floor


def _weights(positions: Sequence[PortfolioPosition]) -> np.ndarray:
    return np.fromiter(
        (p.percentage_of_portfolio / 100.0 for p in positions), dtype=float, count=len(positions)
    )


def _max_group_exposure(
    positions: Sequence[PortfolioPosition],
    key: Callable[[PortfolioPosition], Hashable],
) -> float:
    exposure: Dict[Hashable, float] = defaultdict(float)
    for position in positions:
        exposure[key(position)] += position.percentage_of_portfolio
    return max(exposure.values())


def diversification_score(positions: Sequence[PortfolioPosition]) -> float:
    """Spread across sectors, geographies and risk levels (higher is safer)."""

    if not positions:
        return 0.0

    sector_count = len({p.sector for p in positions})
    geography_count = len({p.geography for p in positions})
    risk_level_count = len({p.risk_level for p in positions})

    sector_score = min(100.0, sector_count / MAX_SECTORS * 100.0)
    geography_score = min(100.0, geography_count / MAX_GEOGRAPHIES * 100.0)
    risk_score = min(100.0, risk_level_count / MAX_RISK_LEVELS * 100.0)

    return (sector_score + geography_score + risk_score) / 3.0


def volatility_risk(positions: Sequence[PortfolioPosition]) -> float:
    """Allocation-weighted volatility proxy from each position's risk level."""

    if not positions:
        return 0.0

    level_scores = np.fromiter(
        (VOLATILITY_BY_RISK_LEVEL[p.risk_level] for p in positions), dtype=float, count=len(positions)
    )
    return min(100.0, float(np.dot(level_scores, _weights(positions))))


def liquidity_penalty(volume_24h: float) -> float:
    """Return the per-position liquidity penalty for a 24h volume."""

    return _step(volume_24h, LIQUIDITY_THRESHOLDS, LIQUIDITY_FLOOR_PENALTY)


def liquidity_risk(positions: Sequence[PortfolioPosition]) -> float:
    """Allocation-weighted liquidity penalty derived from trading volume."""

    if not positions:
        return 0.0

    penalties = np.fromiter(
        (liquidity_penalty(p.volume_24h) for p in positions), dtype=float, count=len(positions)
    )
    return min(100.0, float(np.dot(penalties, _weights(positions))))


def concentration_risk(positions: Sequence[PortfolioPosition]) -> float:
    """Step score of the single largest allocation.

    >30% -> 80, >20% -> 60, >15% -> 40, otherwise 20.
    """

    if not positions:
        return 0.0

    max_position = max(p.percentage_of_portfolio for p in positions)
    return _step(max_position, CONCENTRATION_STEPS, CONCENTRATION_FLOOR)


def geographic_risk(positions: Sequence[PortfolioPosition]) -> float:
    """Step score of the largest combined allocation to one geography."""

    if not positions:
        return 0.0

    return _step(_max_group_exposure(positions, lambda p: p.geography), GEOGRAPHIC_STEPS, GEOGRAPHIC_FLOOR)


def sector_risk(positions: Sequence[PortfolioPosition]) -> float:
    """Step score of the largest combined allocation to one sector."""

    if not positions:
        return 0.0

    return _step(_max_group_exposure(positions, lambda p: p.sector), SECTOR_STEPS, SECTOR_FLOOR)


def score_risk_factors(positions: Sequence[PortfolioPosition]) -> RiskFactorScores:
    """Run all six scorers over an annotated snapshot."""

    return RiskFactorScores(
        diversification_score=diversification_score(positions),
        volatility_risk=volatility_risk(positions),
        liquidity_risk=liquidity_risk(positions),
        concentration_risk=concentration_risk(positions),
        geographic_risk=geographic_risk(positions),
        sector_risk=sector_risk(positions),
    )
