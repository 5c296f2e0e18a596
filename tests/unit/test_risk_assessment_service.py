"""Risk Advisor: Tests for the RiskAssessmentService façade.

These tests verify that the service orchestrates the profile store, the
portfolio provider and the risk rules correctly, and that the per-user
cache follows the NoProfile -> Assessed lifecycle.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from typing import List

import pytest

from riskadvisor.core.errors import ProfileNotFoundError, ValidationError
from riskadvisor.narrative.provider import NarrativePrompt
from riskadvisor.portfolio import InMemoryPortfolioProvider, PortfolioPosition, RiskLevel
from riskadvisor.profiles import RiskProfile
from riskadvisor.risk.explanations import EXPLANATIONS, NO_ASSESSMENT_MESSAGE, RiskBucket
from riskadvisor.service import RiskAssessmentService


FIXED_NOW = datetime(2025, 12, 1, 9, 30, tzinfo=timezone.utc)


def _profile(**overrides: object) -> RiskProfile:
    fields: dict = dict(
        risk_tolerance="moderate",
        investment_horizon="long",
        monthly_income=6000.0,
        monthly_expenses=3000.0,
        emergency_fund=18000.0,
        age=45,
        financial_knowledge="advanced",
    )
    fields.update(overrides)
    return RiskProfile(**fields)


def _diversified_positions() -> List[PortfolioPosition]:
    sectors = ["pharmaceuticals", "medical_devices", "telemedicine", "health_insurance", "biotechnology"]
    levels = ["low", "medium", "low", "low", "medium"]
    return [
        PortfolioPosition(
            asset_id=f"A{i}",
            sector=sectors[i % 5],
            geography=f"Region {i}",
            risk_level=levels[i % 5],
            holding_amount=10.0,
            current_price=10.0,
            volume_24h=5_000_000.0,
        )
        for i in range(10)
    ]


def _service(positions: List[PortfolioPosition] | None = None, **kwargs: object) -> RiskAssessmentService:
    provider = InMemoryPortfolioProvider(positions=list(positions or []))
    return RiskAssessmentService(portfolio_provider=provider, clock=lambda: FIXED_NOW, **kwargs)


class _CountingProvider:
    def __init__(self) -> None:
        self.calls = 0

    async def generate_explanation(self, prompt: NarrativePrompt, profile: RiskProfile, language: str) -> str:
        self.calls += 1
        return f"narrative-{self.calls}"


class _SlowProvider:
    """Narrative provider that yields to the loop while producing text."""

    def __init__(self, events: List[str]) -> None:
        self.events = events

    async def generate_explanation(self, prompt: NarrativePrompt, profile: RiskProfile, language: str) -> str:
        self.events.append("narrate")
        await asyncio.sleep(0.01)
        self.events.append("done")
        return prompt.key


class _TickingClock:
    """Clock that records each call and advances one second per call."""

    def __init__(self, events: List[str]) -> None:
        self.events = events
        self.ticks = 0

    def __call__(self) -> datetime:
        self.events.append("enter")
        self.ticks += 1
        return FIXED_NOW + timedelta(seconds=self.ticks)


class TestProfileLifecycle:
    def test_assess_without_profile_raises(self) -> None:
        service = _service(_diversified_positions())

        with pytest.raises(ProfileNotFoundError) as excinfo:
            asyncio.run(service.assess_portfolio_risk("ghost"))

        assert excinfo.value.user_id == "ghost"
        assert service.get_cached_assessment("ghost") is None

    def test_stress_test_without_profile_raises(self) -> None:
        service = _service(_diversified_positions())

        with pytest.raises(ProfileNotFoundError):
            service.perform_stress_test("ghost")

    def test_create_profile_assesses_and_caches(self) -> None:
        service = _service(_diversified_positions())

        assessment = asyncio.run(service.create_risk_profile("u1", _profile()))

        assert service.get_risk_profile("u1") == _profile()
        assert service.get_cached_assessment("u1") is assessment
        assert assessment.user_id == "u1"
        assert assessment.assessed_at == FIXED_NOW
        assert assessment.total_portfolio_value == pytest.approx(1000.0)

    def test_create_profile_from_mapping(self) -> None:
        service = _service()

        asyncio.run(
            service.create_risk_profile(
                "u1",
                {
                    "riskTolerance": "aggressive",
                    "investmentHorizon": "short",
                    "monthlyIncome": 1000,
                    "monthlyExpenses": 500,
                    "emergencyFund": 0,
                    "age": 22,
                    "financialKnowledge": "intermediate",
                },
            )
        )

        assert service.get_risk_profile("u1").risk_tolerance.value == "aggressive"

    def test_invalid_profile_is_rejected_and_not_stored(self) -> None:
        service = _service()

        with pytest.raises(ValidationError):
            asyncio.run(
                service.create_risk_profile(
                    "u1",
                    {
                        "riskTolerance": "moderate",
                        "investmentHorizon": "long",
                        "monthlyIncome": -100,
                        "monthlyExpenses": 500,
                        "emergencyFund": 0,
                        "age": 22,
                    },
                )
            )

        assert service.get_risk_profile("u1") is None

    def test_non_profile_object_is_rejected(self) -> None:
        service = _service()

        with pytest.raises(ValidationError):
            asyncio.run(service.create_risk_profile("u1", ["not", "a", "profile"]))  # type: ignore[arg-type]


class TestAssessPortfolioRisk:
    def test_recompute_reflects_latest_snapshot(self) -> None:
        provider = InMemoryPortfolioProvider(positions=_diversified_positions())
        service = RiskAssessmentService(portfolio_provider=provider, clock=lambda: FIXED_NOW)
        first = asyncio.run(service.create_risk_profile("u1", _profile()))

        provider.set_positions(
            [PortfolioPosition("SOLO", "biotechnology", "Asia", "high", 100.0, 10.0, volume_24h=1000.0)]
        )
        second = asyncio.run(service.assess_portfolio_risk("u1"))

        assert second is not first
        assert second.overall_risk_score > first.overall_risk_score
        assert service.get_cached_assessment("u1") is second
        # The earlier object is never mutated.
        assert first.total_portfolio_value == pytest.approx(1000.0)

    def test_numeric_fields_are_idempotent(self) -> None:
        service = _service(_diversified_positions(), narrative_provider=_CountingProvider())
        asyncio.run(service.create_risk_profile("u1", _profile()))

        first = asyncio.run(service.assess_portfolio_risk("u1"))
        second = asyncio.run(service.assess_portfolio_risk("u1"))

        assert first.factors == second.factors
        assert first.overall_risk_score == second.overall_risk_score

    def test_diversified_low_risk_portfolio(self) -> None:
        service = _service(_diversified_positions())

        assessment = asyncio.run(service.create_risk_profile("u1", _profile()))

        assert assessment.concentration_risk == 20.0
        assert assessment.geographic_risk == 20.0
        assert assessment.sector_risk == 20.0
        assert assessment.liquidity_risk == pytest.approx(20.0)
        assert assessment.recommendations == ()
        assert assessment.alerts == ()
        assert 1 <= assessment.overall_risk_score <= 3

    def test_empty_portfolio(self) -> None:
        service = _service([])

        assessment = asyncio.run(service.create_risk_profile("u1", _profile()))

        assert assessment.total_portfolio_value == 0.0
        assert assessment.diversification_score == 0.0
        assert assessment.overall_risk_score >= 1

    def test_zero_expenses_and_fund_do_not_raise(self) -> None:
        service = _service(_diversified_positions())

        assessment = asyncio.run(
            service.create_risk_profile("u1", _profile(emergency_fund=0.0, monthly_expenses=0.0))
        )

        assert "Low Emergency Fund" not in [a.title for a in assessment.alerts]

    def test_narratives_come_from_provider(self) -> None:
        provider = _CountingProvider()
        service = _service(
            [PortfolioPosition("SOLO", "biotechnology", "Asia", "high", 1.0, 1.0)],
            narrative_provider=provider,
        )

        assessment = asyncio.run(service.create_risk_profile("u1", _profile()))

        assert provider.calls == len(assessment.recommendations) > 0
        assert all(r.narrative.startswith("narrative-") for r in assessment.recommendations)

    def test_concurrent_assessments_for_same_user_are_serialised(self) -> None:
        events: List[str] = []
        service = _service(
            [PortfolioPosition("SOLO", "biotechnology", "Asia", "high", 1.0, 1.0)],
            narrative_provider=_SlowProvider(events),
        )
        service.clock = _TickingClock(events)
        asyncio.run(service.create_risk_profile("u1", _profile()))
        events.clear()

        async def _run_many() -> list:
            return await asyncio.gather(*(service.assess_portfolio_risk("u1") for _ in range(3)))

        results = asyncio.run(_run_many())

        assert events.count("enter") == 3
        pending = 0
        for event in events:
            if event == "enter":
                assert pending == 0
            elif event == "narrate":
                pending += 1
            else:
                pending -= 1
        assert pending == 0
        assert all(r.recommendations for r in results)

        latest = max(results, key=lambda r: r.assessed_at)
        assert service.get_cached_assessment("u1") is latest

    def test_overlapping_assessments_across_event_loops(self) -> None:
        events: List[str] = []
        service = _service(
            [PortfolioPosition("SOLO", "biotechnology", "Asia", "high", 1.0, 1.0)],
            narrative_provider=_SlowProvider(events),
        )
        asyncio.run(service.create_risk_profile("u1", _profile()))

        async def _overlap() -> list:
            results = await asyncio.gather(
                service.assess_portfolio_risk("u1"),
                service.assess_portfolio_risk("u1"),
            )
            # Idle locks are dropped once nobody holds or awaits them.
            assert "u1" not in service._locks.get(asyncio.get_running_loop(), {})
            return results

        first = asyncio.run(_overlap())
        second = asyncio.run(_overlap())

        assert len(first) == len(second) == 2
        assert service.get_cached_assessment("u1") in second


class TestSimplifiedExplanation:
    def test_no_assessment_sentinel(self) -> None:
        service = _service()

        assert service.get_simplified_risk_explanation("ghost") == NO_ASSESSMENT_MESSAGE

    def test_bucket_text_and_language_fallback(self) -> None:
        service = _service(_diversified_positions())
        asyncio.run(service.create_risk_profile("u1", _profile()))

        text = service.get_simplified_risk_explanation("u1")

        assert text == EXPLANATIONS["en"][RiskBucket.LOW]
        assert service.get_simplified_risk_explanation("u1", language="xx") == text

    def test_missing_language_uses_english(self) -> None:
        service = _service(_diversified_positions())
        asyncio.run(service.create_risk_profile("u1", _profile()))

        assert service.get_simplified_risk_explanation("u1", language=None) == EXPLANATIONS["en"][RiskBucket.LOW]


class TestPerformStressTest:
    def test_uses_current_portfolio(self) -> None:
        service = _service(_diversified_positions())
        asyncio.run(service.create_risk_profile("u1", _profile()))

        scenarios = service.perform_stress_test("u1")

        assert [s.potential_loss for s in scenarios] == pytest.approx([200.0, 350.0, 500.0])


class TestPortfolioSummary:
    def test_reflects_current_snapshot(self) -> None:
        positions = [
            PortfolioPosition("A", "pharmaceuticals", "EU", "low", 10.0, 12.0, entry_price=10.0),
            PortfolioPosition("B", "telemedicine", "US", "high", 5.0, 8.0, entry_price=8.0),
        ]
        service = _service(positions)

        summary = service.get_portfolio_summary()

        assert summary.total_value == pytest.approx(160.0)
        assert summary.total_investment == pytest.approx(140.0)
        assert summary.total_unrealized_gains == pytest.approx(20.0)
        assert summary.total_roi == pytest.approx(100.0 * 20.0 / 140.0)
        assert summary.risk_distribution[RiskLevel.LOW] == pytest.approx(75.0)
        assert summary.risk_distribution[RiskLevel.HIGH] == pytest.approx(25.0)
        assert summary.num_positions == 2
