"""Risk Advisor: Tests for the narrative fallback policy."""

from __future__ import annotations

import asyncio

import pytest

from riskadvisor.core.errors import NarrativeProviderError
from riskadvisor.narrative import (
    DEFAULT_FALLBACK,
    PROMPTS,
    NarrativePrompt,
    StaticNarrativeProvider,
    explain_with_fallback,
    get_prompt,
)
from riskadvisor.profiles import RiskProfile


PROFILE = RiskProfile(
    risk_tolerance="moderate",
    investment_horizon="medium",
    monthly_income=3000.0,
    monthly_expenses=1500.0,
    emergency_fund=9000.0,
    age=28,
)


class _SlowProvider:
    async def generate_explanation(self, prompt: NarrativePrompt, profile: RiskProfile, language: str) -> str:
        await asyncio.sleep(1.0)
        return "too late"


class _BlankProvider:
    async def generate_explanation(self, prompt: NarrativePrompt, profile: RiskProfile, language: str) -> str:
        return "   "


class TestPrompts:
    def test_unknown_key_uses_education_prompt(self) -> None:
        assert get_prompt("nope") is PROMPTS["education"]

    def test_every_prompt_has_fallback(self) -> None:
        for prompt in PROMPTS.values():
            assert prompt.fallback


class TestExplainWithFallback:
    def test_static_provider_returns_canned_text(self) -> None:
        provider = StaticNarrativeProvider(texts={"concentration": "Spread your bets."})

        text = asyncio.run(explain_with_fallback(provider, PROMPTS["concentration"], PROFILE))

        assert text == "Spread your bets."

    def test_static_provider_missing_key_raises(self) -> None:
        provider = StaticNarrativeProvider()

        with pytest.raises(NarrativeProviderError):
            asyncio.run(provider.generate_explanation(PROMPTS["education"], PROFILE, "en"))

    def test_missing_key_falls_back(self) -> None:
        text = asyncio.run(explain_with_fallback(StaticNarrativeProvider(), PROMPTS["education"], PROFILE))

        assert text == DEFAULT_FALLBACK

    def test_timeout_falls_back(self) -> None:
        text = asyncio.run(
            explain_with_fallback(_SlowProvider(), PROMPTS["diversification"], PROFILE, timeout_seconds=0.01)
        )

        assert text == DEFAULT_FALLBACK

    def test_blank_response_falls_back(self) -> None:
        text = asyncio.run(explain_with_fallback(_BlankProvider(), PROMPTS["risk_alignment"], PROFILE))

        assert text == DEFAULT_FALLBACK

    def test_none_provider_returns_fallback(self) -> None:
        text = asyncio.run(explain_with_fallback(None, PROMPTS["education"], PROFILE))

        assert text == DEFAULT_FALLBACK
