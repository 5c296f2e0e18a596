"""Risk Advisor – Narrative Provider package."""

from .provider import (
    DEFAULT_FALLBACK,
    PROMPTS,
    NarrativePrompt,
    NarrativeProvider,
    StaticNarrativeProvider,
    explain_with_fallback,
    get_prompt,
)

__all__ = [
    "DEFAULT_FALLBACK",
    "PROMPTS",
    "NarrativePrompt",
    "NarrativeProvider",
    "StaticNarrativeProvider",
    "explain_with_fallback",
    "get_prompt",
]
