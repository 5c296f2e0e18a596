"""Risk Advisor – Narrative Provider capability.

Recommendation text is humanised by an external Narrative Provider (an
LLM gateway, a translation service, ...). The engine talks to it through
the small :class:`NarrativeProvider` protocol and never lets a provider
failure reach the caller: :func:`explain_with_fallback` bounds every
request with a timeout and substitutes the call site's fallback text on
timeout or error.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Protocol, runtime_checkable

from riskadvisor.core.errors import NarrativeProviderError
from riskadvisor.core.logging import get_logger
from riskadvisor.profiles.types import RiskProfile


logger = get_logger(__name__)


@dataclass(frozen=True)
class NarrativePrompt:
    """A prompt sent to the Narrative Provider and its local fallback."""

    key: str
    text: str
    fallback: str


DEFAULT_FALLBACK = (
    "Consider consulting our educational resources or speaking with a financial advisor."
)

PROMPTS: Dict[str, NarrativePrompt] = {
    "diversification": NarrativePrompt(
        key="diversification",
        text="Explain portfolio diversification to a first-time investor in simple terms",
        fallback=DEFAULT_FALLBACK,
    ),
    "concentration": NarrativePrompt(
        key="concentration",
        text="Explain why having too much money in one investment is risky",
        fallback=DEFAULT_FALLBACK,
    ),
    "education": NarrativePrompt(
        key="education",
        text="Recommend healthcare investment learning resources for beginners",
        fallback=DEFAULT_FALLBACK,
    ),
    "risk_alignment": NarrativePrompt(
        key="risk_alignment",
        text="Explain how to match investments with personal risk tolerance",
        fallback=DEFAULT_FALLBACK,
    ),
}


def get_prompt(key: str) -> NarrativePrompt:
    """Return the prompt for ``key``; unknown keys use the education prompt."""

    return PROMPTS.get(key, PROMPTS["education"])


@runtime_checkable
class NarrativeProvider(Protocol):
    """Protocol for services that turn a prompt into user-facing text."""

    async def generate_explanation(  # pragma: no cover - interface
        self,
        prompt: NarrativePrompt,
        profile: RiskProfile,
        language: str,
    ) -> str:
        """Return an explanation for ``prompt`` tailored to ``profile``."""


@dataclass
class StaticNarrativeProvider:
    """Narrative provider returning canned text per prompt key.

    Used as the default provider when no external service is configured.
    Keys missing from ``texts`` raise :class:`NarrativeProviderError`, so
    the caller's fallback text is used.
    """

    texts: Mapping[str, str] = field(default_factory=dict)

    async def generate_explanation(
        self,
        prompt: NarrativePrompt,
        profile: RiskProfile,
        language: str,
    ) -> str:
        try:
            return self.texts[prompt.key]
        except KeyError as exc:
            raise NarrativeProviderError(f"No canned narrative for {prompt.key!r}") from exc


async def explain_with_fallback(
    provider: Optional[NarrativeProvider],
    prompt: NarrativePrompt,
    profile: RiskProfile,
    *,
    language: str = "en",
    timeout_seconds: float = 5.0,
) -> str:
    """Request an explanation, returning ``prompt.fallback`` on any failure.

    The request is abandoned after ``timeout_seconds``. Empty responses
    are treated as failures.
    """

    if provider is None:
        return prompt.fallback

    try:
        text = await asyncio.wait_for(
            provider.generate_explanation(prompt, profile, language),
            timeout=timeout_seconds,
        )
    except asyncio.TimeoutError:
        logger.warning(
            "explain_with_fallback: narrative request timed out key=%s timeout=%.2fs",
            prompt.key,
            timeout_seconds,
        )
        return prompt.fallback
    except Exception:
        logger.warning(
            "explain_with_fallback: narrative provider failed key=%s",
            prompt.key,
            exc_info=True,
        )
        return prompt.fallback

    if not isinstance(text, str) or not text.strip():
        logger.warning("explain_with_fallback: empty narrative for key=%s", prompt.key)
        return prompt.fallback
    return text
