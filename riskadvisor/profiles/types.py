"""Risk Advisor – Risk profile types.

This module defines the in-memory representation of a user's declared
risk preferences. A profile is immutable; users change it by replacing
it wholesale through the service facade.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable

from riskadvisor.core.errors import ValidationError
from riskadvisor.core.types import RawRecord
from riskadvisor.core.validation import (
    coerce_enum,
    pick,
    require_int,
    require_non_negative,
)


class RiskTolerance(str, Enum):
    CONSERVATIVE = "conservative"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"


class InvestmentHorizon(str, Enum):
    """Declared holding horizon: short (<1yr), medium (1-5yr), long (>5yr)."""

    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class FinancialKnowledge(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class InvestmentGoal(str, Enum):
    WEALTH_BUILDING = "wealth_building"
    INCOME_GENERATION = "income_generation"
    CAPITAL_PRESERVATION = "capital_preservation"
    SOCIAL_IMPACT = "social_impact"


@dataclass(frozen=True)
class RiskProfile:
    """Risk preferences declared by a single user.

    Attributes:
        risk_tolerance: Appetite for drawdowns.
        investment_horizon: Expected holding period bucket.
        monthly_income: Net monthly income in currency units.
        monthly_expenses: Monthly expenses in currency units.
        emergency_fund: Liquid savings kept outside the portfolio.
        age: Age in years (positive).
        dependents: Number of financial dependents.
        financial_knowledge: Self-assessed investing experience.
        primary_goals: Set of investment goals.
    """

    risk_tolerance: RiskTolerance
    investment_horizon: InvestmentHorizon
    monthly_income: float
    monthly_expenses: float
    emergency_fund: float
    age: int
    dependents: int = 0
    financial_knowledge: FinancialKnowledge = FinancialKnowledge.BEGINNER
    primary_goals: FrozenSet[InvestmentGoal] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        # Normalise enum strings and check ranges. object.__setattr__ is
        # needed because the dataclass is frozen.
        object.__setattr__(
            self, "risk_tolerance", coerce_enum(RiskTolerance, self.risk_tolerance, "risk_tolerance")
        )
        object.__setattr__(
            self,
            "investment_horizon",
            coerce_enum(InvestmentHorizon, self.investment_horizon, "investment_horizon"),
        )
        object.__setattr__(
            self,
            "financial_knowledge",
            coerce_enum(FinancialKnowledge, self.financial_knowledge, "financial_knowledge"),
        )
        for name in ("monthly_income", "monthly_expenses", "emergency_fund"):
            object.__setattr__(self, name, require_non_negative(getattr(self, name), name))
        object.__setattr__(self, "age", require_int(self.age, "age", minimum=1))
        object.__setattr__(self, "dependents", require_int(self.dependents, "dependents", minimum=0))
        object.__setattr__(self, "primary_goals", _coerce_goals(self.primary_goals))

    @property
    def emergency_fund_months(self) -> float:
        """Months of expenses covered by the emergency fund.

        Infinite when the user declares no monthly expenses.
        """

        if self.monthly_expenses == 0.0:
            return float("inf")
        return self.emergency_fund / self.monthly_expenses

    @classmethod
    def from_mapping(cls, data: RawRecord) -> "RiskProfile":
        """Build a profile from a parsed JSON record.

        Keys may be snake_case or camelCase (``riskTolerance``).
        """

        return cls(
            risk_tolerance=pick(data, "risk_tolerance", "riskTolerance"),
            investment_horizon=pick(data, "investment_horizon", "investmentHorizon"),
            monthly_income=pick(data, "monthly_income", "monthlyIncome"),
            monthly_expenses=pick(data, "monthly_expenses", "monthlyExpenses"),
            emergency_fund=pick(data, "emergency_fund", "emergencyFund"),
            age=pick(data, "age", "age"),
            dependents=pick(data, "dependents", "dependents", 0),
            financial_knowledge=pick(
                data, "financial_knowledge", "financialKnowledge", FinancialKnowledge.BEGINNER
            ),
            primary_goals=pick(data, "primary_goals", "primaryGoals", ()),
        )


def _coerce_goals(goals: Iterable[object]) -> FrozenSet[InvestmentGoal]:
    if isinstance(goals, (str, bytes)):
        raise ValidationError("primary_goals must be a collection of goal tags", field="primary_goals")
    try:
        items = list(goals)
    except TypeError as exc:
        raise ValidationError(
            f"primary_goals must be iterable, got {goals!r}", field="primary_goals"
        ) from exc
    return frozenset(coerce_enum(InvestmentGoal, g, "primary_goals") for g in items)
