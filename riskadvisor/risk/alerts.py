"""Risk Advisor – Alert rules.

Three independent rules, evaluated in a fixed order:

1. Overall score >= 8: critical "High Portfolio Risk Detected".
2. Emergency fund covers fewer than 3 months of expenses: warning
   "Low Emergency Fund". Skipped when expenses are zero.
3. Beginner investing more than 10% of annual income: warning
   "Consider Investment Pace".
"""

from __future__ import annotations

from datetime import datetime
from typing import List

from riskadvisor.profiles.types import FinancialKnowledge, RiskProfile
from riskadvisor.risk.types import Alert, AlertLevel


HIGH_RISK_SCORE_THRESHOLD = 8
MIN_EMERGENCY_FUND_MONTHS = 3.0
MAX_BEGINNER_INVESTMENT_TO_INCOME = 0.1


def investment_to_income_ratio(total_portfolio_value: float, monthly_income: float) -> float:
    """Portfolio value as a fraction of annual income.

    With no declared income the ratio is infinite for a funded portfolio
    and zero otherwise.
    """

    annual_income = monthly_income * 12.0
    if annual_income == 0.0:
        return float("inf") if total_portfolio_value > 0.0 else 0.0
    return total_portfolio_value / annual_income


def generate_alerts(
    overall_risk_score: int,
    profile: RiskProfile,
    total_portfolio_value: float,
    timestamp: datetime,
) -> List[Alert]:
    """Evaluate the alert rules for one assessment."""

    alerts: List[Alert] = []

    if overall_risk_score >= HIGH_RISK_SCORE_THRESHOLD:
        alerts.append(
            Alert(
                level=AlertLevel.CRITICAL,
                title="High Portfolio Risk Detected",
                message="Your portfolio risk score is very high. Consider rebalancing.",
                narrative=(
                    "Your investment risk is quite high. We recommend reviewing your portfolio."
                ),
                timestamp=timestamp,
                actionable=True,
            )
        )

    # emergency_fund_months is infinite for zero expenses, so the rule
    # never fires in that case.
    if profile.emergency_fund_months < MIN_EMERGENCY_FUND_MONTHS:
        alerts.append(
            Alert(
                level=AlertLevel.WARNING,
                title="Low Emergency Fund",
                message="Consider building your emergency fund before increasing investments",
                narrative="Build your emergency savings before investing more money",
                timestamp=timestamp,
                actionable=True,
            )
        )

    if (
        profile.financial_knowledge is FinancialKnowledge.BEGINNER
        and investment_to_income_ratio(total_portfolio_value, profile.monthly_income)
        > MAX_BEGINNER_INVESTMENT_TO_INCOME
    ):
        alerts.append(
            Alert(
                level=AlertLevel.WARNING,
                title="Consider Investment Pace",
                message="As a new investor, consider starting with smaller amounts",
                narrative="Start with small investments to learn and gain experience",
                timestamp=timestamp,
                actionable=False,
            )
        )

    return alerts
