"""Risk Advisor – Risk engine package.

This package implements the rule-based portfolio risk engine:

- :mod:`riskadvisor.risk.factors` – the six factor scorers.
- :mod:`riskadvisor.risk.aggregator` – 1–10 overall score.
- :mod:`riskadvisor.risk.recommendations` / :mod:`riskadvisor.risk.alerts`
  – rule outputs.
- :mod:`riskadvisor.risk.stress` – fixed-scenario stress tests.
"""

from __future__ import annotations

from riskadvisor.risk.types import (
    Alert,
    AlertLevel,
    Priority,
    Recommendation,
    RecommendationType,
    RiskAssessment,
    RiskFactorScores,
    StressTestScenario,
)
from riskadvisor.risk.factors import score_risk_factors
from riskadvisor.risk.aggregator import overall_risk_score
from riskadvisor.risk.recommendations import generate_recommendations
from riskadvisor.risk.alerts import generate_alerts
from riskadvisor.risk.stress import SCENARIO_CATALOGUE, run_stress_tests

__all__ = [
    "Alert",
    "AlertLevel",
    "Priority",
    "Recommendation",
    "RecommendationType",
    "RiskAssessment",
    "RiskFactorScores",
    "StressTestScenario",
    "score_risk_factors",
    "overall_risk_score",
    "generate_recommendations",
    "generate_alerts",
    "SCENARIO_CATALOGUE",
    "run_stress_tests",
]
