"""Risk Advisor – Risk assessment output types.

This module defines the records produced by the risk engine:

- :class:`RiskFactorScores` – the six 0–100 sub-scores.
- :class:`Recommendation` / :class:`Alert` – rule outputs.
- :class:`RiskAssessment` – the full, immutable assessment for a user.
- :class:`StressTestScenario` – a projected loss under a fixed scenario.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Tuple


class RecommendationType(str, Enum):
    REBALANCE = "rebalance"
    DIVERSIFY = "diversify"
    REDUCE_POSITION = "reduce_position"
    INCREASE_POSITION = "increase_position"
    ADD_ASSET = "add_asset"
    EDUCATIONAL = "educational"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class AlertLevel(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class RiskFactorScores:
    """Per-dimension risk scores for one portfolio snapshot.

    All values lie in [0, 100]. ``diversification_score`` is the only
    higher-is-safer score; every other field is higher-is-riskier.
    """

    diversification_score: float
    volatility_risk: float
    liquidity_risk: float
    concentration_risk: float
    geographic_risk: float
    sector_risk: float


@dataclass(frozen=True)
class Recommendation:
    """A prioritised suggestion emitted by the recommendation rules.

    Attributes:
        type: Kind of action suggested.
        priority: Urgency bucket.
        title: Short headline.
        description: One-sentence explanation.
        narrative: Plain-language explanation from the Narrative Provider,
            or the fixed fallback text when the provider failed.
        action_required: Whether the user is expected to act.
        estimated_impact: Expected reduction of the overall score in
            points (>= 0).
    """

    type: RecommendationType
    priority: Priority
    title: str
    description: str
    narrative: str
    action_required: bool
    estimated_impact: float


@dataclass(frozen=True)
class Alert:
    """A severity-tagged alert emitted by the alert rules."""

    level: AlertLevel
    title: str
    message: str
    narrative: str
    timestamp: datetime
    actionable: bool


@dataclass(frozen=True)
class RiskAssessment:
    """Complete risk assessment for a user at a point in time.

    Attributes:
        user_id: Owner of the assessed portfolio.
        overall_risk_score: Integer score in [1, 10].
        factors: The six sub-scores the overall score was derived from.
        recommendations: Fired recommendations in rule order.
        alerts: Fired alerts in rule order.
        total_portfolio_value: Current value of the assessed snapshot.
        assessed_at: Time at which the assessment was computed.
    """

    user_id: str
    overall_risk_score: int
    factors: RiskFactorScores
    recommendations: Tuple[Recommendation, ...]
    alerts: Tuple[Alert, ...]
    total_portfolio_value: float
    assessed_at: datetime

    @property
    def diversification_score(self) -> float:
        return self.factors.diversification_score

    @property
    def volatility_risk(self) -> float:
        return self.factors.volatility_risk

    @property
    def liquidity_risk(self) -> float:
        return self.factors.liquidity_risk

    @property
    def concentration_risk(self) -> float:
        return self.factors.concentration_risk

    @property
    def geographic_risk(self) -> float:
        return self.factors.geographic_risk

    @property
    def sector_risk(self) -> float:
        return self.factors.sector_risk


@dataclass(frozen=True)
class StressTestScenario:
    """Projected loss for the current portfolio under a fixed scenario."""

    name: str
    description: str
    potential_loss: float
    probability: float
    timeframe: str
    mitigation_strategies: Tuple[str, ...]
