"""Risk Advisor – Risk profile subsystem package.

This package contains the user risk profile types and the keyed store
that holds one profile per user.
"""

from riskadvisor.profiles.types import (
    FinancialKnowledge,
    InvestmentGoal,
    InvestmentHorizon,
    RiskProfile,
    RiskTolerance,
)
from riskadvisor.profiles.store import RiskProfileStore

__all__ = [
    "FinancialKnowledge",
    "InvestmentGoal",
    "InvestmentHorizon",
    "RiskProfile",
    "RiskTolerance",
    "RiskProfileStore",
]
