"""Risk Advisor – Error taxonomy.

Callers can catch :class:`RiskAdvisorError` to handle every failure the
engine raises deliberately. Narrative provider failures are defined here
for provider implementations but are always absorbed by the engine.
"""

from __future__ import annotations

from typing import Optional


class RiskAdvisorError(Exception):
    """Base class for all Risk Advisor errors."""


class ProfileNotFoundError(RiskAdvisorError, LookupError):
    """Raised when an operation needs a risk profile the user has not created."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"Risk profile not found for user {user_id!r}")
        self.user_id = user_id


class ValidationError(RiskAdvisorError, ValueError):
    """Raised for out-of-range or malformed profile and position fields."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class NarrativeProviderError(RiskAdvisorError):
    """Raised by narrative providers that cannot produce an explanation."""
