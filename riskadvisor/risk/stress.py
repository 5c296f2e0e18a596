"""Risk Advisor – Stress test simulator.

Applies a fixed catalogue of macro scenarios to the current value of a
portfolio. Each scenario is a constant loss fraction; the projected loss
is ``total_portfolio_value * loss_fraction``. This is a deterministic
what-if table, not a simulation of price paths.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from riskadvisor.portfolio.snapshot import total_portfolio_value
from riskadvisor.portfolio.types import PortfolioPosition
from riskadvisor.risk.types import StressTestScenario


@dataclass(frozen=True)
class ScenarioDefinition:
    """Catalogue entry describing a stress scenario.

    Attributes:
        name: Display name.
        description: What the scenario represents.
        loss_fraction: Fraction of current value lost, in [0, 1].
        probability: Rough likelihood over ``timeframe``, in [0, 1].
        timeframe: Free-text horizon.
        mitigation_strategies: Static list of suggested mitigations.
    """

    name: str
    description: str
    loss_fraction: float
    probability: float
    timeframe: str
    mitigation_strategies: Tuple[str, ...]


SCENARIO_CATALOGUE: Tuple[ScenarioDefinition, ...] = (
    ScenarioDefinition(
        name="Market Correction",
        description="General healthcare market decline of 20%",
        loss_fraction=0.20,
        probability=0.15,
        timeframe="6-12 months",
        mitigation_strategies=(
            "Maintain diversification across healthcare subsectors",
            "Keep emergency fund separate from investments",
            "Consider dollar-cost averaging for new investments",
        ),
    ),
    ScenarioDefinition(
        name="Regulatory Changes",
        description="New healthcare regulations affecting tokenized assets",
        loss_fraction=0.35,
        probability=0.08,
        timeframe="3-6 months",
        mitigation_strategies=(
            "Stay informed about regulatory developments",
            "Diversify across different regulatory jurisdictions",
            "Consider traditional healthcare investments as hedge",
        ),
    ),
    ScenarioDefinition(
        name="Technology Disruption",
        description="Major breakthrough making current solutions obsolete",
        loss_fraction=0.50,
        probability=0.05,
        timeframe="1-2 years",
        mitigation_strategies=(
            "Include innovative early-stage projects in portfolio",
            "Regularly review and update investment thesis",
            "Maintain exposure to established healthcare companies",
        ),
    ),
)


def run_stress_tests(
    positions: Sequence[PortfolioPosition],
    catalogue: Sequence[ScenarioDefinition] = SCENARIO_CATALOGUE,
) -> List[StressTestScenario]:
    """Project the loss of ``positions`` under every catalogue scenario."""

    total_value = total_portfolio_value(positions)

    return [
        StressTestScenario(
            name=definition.name,
            description=definition.description,
            potential_loss=total_value * definition.loss_fraction,
            probability=definition.probability,
            timeframe=definition.timeframe,
            mitigation_strategies=definition.mitigation_strategies,
        )
        for definition in catalogue
    ]
