"""Risk Advisor – Risk profile store.

This module provides a small keyed store holding exactly one
:class:`RiskProfile` per user for the lifetime of the process.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from riskadvisor.core.logging import get_logger
from riskadvisor.profiles.types import RiskProfile


logger = get_logger(__name__)


@dataclass
class RiskProfileStore:
    """In-memory store of user risk profiles.

    Saving a profile replaces any previous profile for the same user
    wholesale; fields are never merged.
    """

    _profiles: Dict[str, RiskProfile] = field(default_factory=dict, init=False, repr=False)

    def save_profile(self, user_id: str, profile: RiskProfile) -> None:
        """Insert or replace the profile for ``user_id``."""

        replaced = user_id in self._profiles
        self._profiles[user_id] = profile

        logger.debug(
            "RiskProfileStore.save_profile: user_id=%s replaced=%s",
            user_id,
            replaced,
        )

    def load_profile(self, user_id: str) -> Optional[RiskProfile]:
        """Return the profile for ``user_id`` if present."""

        return self._profiles.get(user_id)

    def has_profile(self, user_id: str) -> bool:
        return user_id in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)
