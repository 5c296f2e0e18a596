"""Risk Advisor – Recommendation rules.

Four independent rules, evaluated in a fixed order. Any subset may fire.
Rule guards are evaluated synchronously by :func:`select_rules`; only
then does :func:`generate_recommendations` request narrative text for the
fired rules, so a slow or failing Narrative Provider never affects which
recommendations are produced.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from riskadvisor.narrative.provider import NarrativeProvider, explain_with_fallback, get_prompt
from riskadvisor.profiles.types import FinancialKnowledge, RiskProfile, RiskTolerance
from riskadvisor.risk.types import Priority, Recommendation, RecommendationType, RiskFactorScores


@dataclass(frozen=True)
class RecommendationRule:
    """Static definition of a recommendation and the guard that fires it."""

    type: RecommendationType
    priority: Priority
    title: str
    description: str
    prompt_key: str
    action_required: bool
    estimated_impact: float
    guard: Callable[[RiskFactorScores, RiskProfile], bool]


RULES: Tuple[RecommendationRule, ...] = (
    RecommendationRule(
        type=RecommendationType.DIVERSIFY,
        priority=Priority.HIGH,
        title="Improve Portfolio Diversification",
        description=(
            "Your portfolio could benefit from more diversification across sectors and regions"
        ),
        prompt_key="diversification",
        action_required=True,
        estimated_impact=2.0,
        guard=lambda f, p: f.diversification_score < 60.0,
    ),
    RecommendationRule(
        type=RecommendationType.REDUCE_POSITION,
        priority=Priority.HIGH,
        title="Reduce Position Concentration",
        description="Consider reducing your largest position to limit concentration risk",
        prompt_key="concentration",
        action_required=True,
        estimated_impact=1.5,
        guard=lambda f, p: f.concentration_risk > 60.0,
    ),
    RecommendationRule(
        type=RecommendationType.EDUCATIONAL,
        priority=Priority.MEDIUM,
        title="Healthcare Investment Fundamentals",
        description="Learn about healthcare investment basics and risk management",
        prompt_key="education",
        action_required=False,
        estimated_impact=0.0,
        guard=lambda f, p: p.financial_knowledge is FinancialKnowledge.BEGINNER,
    ),
    RecommendationRule(
        type=RecommendationType.REBALANCE,
        priority=Priority.HIGH,
        title="Align Risk with Profile",
        description="Your investments are riskier than your stated risk tolerance",
        prompt_key="risk_alignment",
        action_required=True,
        estimated_impact=2.5,
        guard=lambda f, p: (
            p.risk_tolerance is RiskTolerance.CONSERVATIVE and f.volatility_risk > 60.0
        ),
    ),
)


def select_rules(factors: RiskFactorScores, profile: RiskProfile) -> List[RecommendationRule]:
    """Return the rules whose guards fire, in rule order."""

    return [rule for rule in RULES if rule.guard(factors, profile)]


async def generate_recommendations(
    factors: RiskFactorScores,
    profile: RiskProfile,
    narrative_provider: Optional[NarrativeProvider] = None,
    *,
    language: str = "en",
    timeout_seconds: float = 5.0,
) -> List[Recommendation]:
    """Build recommendations for the fired rules.

    Narrative requests for all fired rules run concurrently; each one
    falls back independently.
    """

    fired = select_rules(factors, profile)
    if not fired:
        return []

    narratives = await asyncio.gather(
        *(
            explain_with_fallback(
                narrative_provider,
                get_prompt(rule.prompt_key),
                profile,
                language=language,
                timeout_seconds=timeout_seconds,
            )
            for rule in fired
        )
    )

    return [
        Recommendation(
            type=rule.type,
            priority=rule.priority,
            title=rule.title,
            description=rule.description,
            narrative=narrative,
            action_required=rule.action_required,
            estimated_impact=rule.estimated_impact,
        )
        for rule, narrative in zip(fired, narratives)
    ]
