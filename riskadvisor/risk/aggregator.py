"""Risk Advisor – Overall risk score aggregation.

Combines the six factor scores into a single integer score on a 1–10
scale using a fixed weight table. Diversification is inverted first
because it is the only higher-is-safer factor.
"""

from __future__ import annotations

import math
from typing import Dict

from riskadvisor.risk.types import RiskFactorScores


MIN_OVERALL_SCORE = 1
MAX_OVERALL_SCORE = 10

AGGREGATION_WEIGHTS: Dict[str, float] = {
    "diversification_risk": 0.25,
    "volatility_risk": 0.25,
    "concentration_risk": 0.20,
    "geographic_risk": 0.15,
    "liquidity_risk": 0.10,
    "sector_risk": 0.05,
}


def _check_weights(weights: Dict[str, float]) -> None:
    total = math.fsum(weights.values())
    if not math.isclose(total, 1.0, rel_tol=0.0, abs_tol=1e-9):
        raise ValueError(f"Aggregation weights must sum to 1.0, got {total!r}")


_check_weights(AGGREGATION_WEIGHTS)


def weighted_risk(factors: RiskFactorScores) -> float:
    """Return the weighted 0–100 risk before bucketing."""

    components = {
        "diversification_risk": 100.0 - factors.diversification_score,
        "volatility_risk": factors.volatility_risk,
        "concentration_risk": factors.concentration_risk,
        "geographic_risk": factors.geographic_risk,
        "liquidity_risk": factors.liquidity_risk,
        "sector_risk": factors.sector_risk,
    }
    return math.fsum(components[name] * weight for name, weight in AGGREGATION_WEIGHTS.items())


def overall_risk_score(factors: RiskFactorScores) -> int:
    """Map the factor scores onto the 1–10 overall scale.

    Halves round up. The result never drops below 1, even for an empty
    portfolio: every profile carries baseline risk.
    """

    score = math.floor(weighted_risk(factors) / 10.0 + 0.5)
    return int(min(MAX_OVERALL_SCORE, max(MIN_OVERALL_SCORE, score)))
