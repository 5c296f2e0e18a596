"""Risk Advisor – Simplified risk explanations.

Short canned explanations keyed by risk bucket and language. Unknown
languages fall back to English.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional


NO_ASSESSMENT_MESSAGE = "No risk assessment available"
DEFAULT_LANGUAGE = "en"


class RiskBucket(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


EXPLANATIONS: Dict[str, Dict[RiskBucket, str]] = {
    "en": {
        RiskBucket.LOW: (
            "Your portfolio has low risk. This means steady, predictable returns but slower growth."
        ),
        RiskBucket.MEDIUM: (
            "Your portfolio has moderate risk. This balances growth potential with stability."
        ),
        RiskBucket.HIGH: (
            "Your portfolio has high risk. This means potential for high returns but also "
            "significant losses."
        ),
    },
}


def risk_bucket(overall_risk_score: int) -> RiskBucket:
    """Bucket an overall score: <=3 Low, <=6 Medium, otherwise High."""

    if overall_risk_score <= 3:
        return RiskBucket.LOW
    if overall_risk_score <= 6:
        return RiskBucket.MEDIUM
    return RiskBucket.HIGH


def simplified_explanation(overall_risk_score: int, language: Optional[str] = DEFAULT_LANGUAGE) -> str:
    texts = EXPLANATIONS.get((language or DEFAULT_LANGUAGE).lower(), EXPLANATIONS[DEFAULT_LANGUAGE])
    return texts[risk_bucket(overall_risk_score)]
