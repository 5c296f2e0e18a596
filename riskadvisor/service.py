"""Risk Advisor – Risk assessment service façade.

This module defines :class:`RiskAssessmentService`, the public entry point
of the engine. It orchestrates the profile store, the Portfolio Provider,
the factor scorers, the aggregator, the recommendation and alert rules
and the stress test simulator, and caches the latest assessment per user.

Per-user state machine::

    NoProfile --create_risk_profile--> Assessed
    Assessed  --assess_portfolio_risk--> Assessed (cache overwritten)

Assessments are always full recomputes against the latest portfolio
snapshot. Concurrent assessments for the same user are serialised; the
last one to finish wins the cache slot. Different users never contend.
"""

from __future__ import annotations

import asyncio
import weakref
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Union

from riskadvisor.core.config import NarrativeConfig
from riskadvisor.core.errors import ProfileNotFoundError, ValidationError
from riskadvisor.core.logging import get_logger
from riskadvisor.core.types import Clock, RawRecord
from riskadvisor.narrative.provider import NarrativeProvider
from riskadvisor.portfolio.provider import PortfolioProvider
from riskadvisor.portfolio.snapshot import annotate_positions, summarise_portfolio, total_portfolio_value
from riskadvisor.portfolio.types import PortfolioSummary
from riskadvisor.profiles.store import RiskProfileStore
from riskadvisor.profiles.types import RiskProfile
from riskadvisor.risk.aggregator import overall_risk_score
from riskadvisor.risk.alerts import generate_alerts
from riskadvisor.risk.explanations import NO_ASSESSMENT_MESSAGE, simplified_explanation
from riskadvisor.risk.factors import score_risk_factors
from riskadvisor.risk.recommendations import generate_recommendations
from riskadvisor.risk.stress import run_stress_tests
from riskadvisor.risk.types import RiskAssessment, StressTestScenario


logger = get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class _UserLock:
    """Per-user lock plus the number of callers holding or awaiting it."""

    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    users: int = 0


@dataclass
class RiskAssessmentService:
    """Orchestrator and per-user cache for portfolio risk assessments.

    Instances are created by the application's composition root and
    passed to callers explicitly; there is no module-level singleton.

    Attributes:
        portfolio_provider: Source of the current holdings snapshot.
        narrative_provider: Optional provider for recommendation text.
            When ``None`` every recommendation uses its fallback text.
        profile_store: Store holding one risk profile per user.
        narrative_config: Timeout and language for narrative requests.
        clock: Time source for assessment and alert timestamps.
    """

    portfolio_provider: PortfolioProvider
    narrative_provider: Optional[NarrativeProvider] = None
    profile_store: RiskProfileStore = field(default_factory=RiskProfileStore)
    narrative_config: NarrativeConfig = field(default_factory=NarrativeConfig)
    clock: Clock = _utc_now

    _assessments: Dict[str, RiskAssessment] = field(default_factory=dict, init=False, repr=False)
    # Locks are scoped to the event loop that created them; a service may
    # outlive many ``asyncio.run`` calls.
    _locks: weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, Dict[str, _UserLock]] = field(
        default_factory=weakref.WeakKeyDictionary, init=False, repr=False
    )

    # ------------------------------------------------------------------
    # Profiles
    # ------------------------------------------------------------------

    async def create_risk_profile(
        self,
        user_id: str,
        profile: Union[RiskProfile, RawRecord],
    ) -> RiskAssessment:
        """Store ``profile`` for ``user_id`` and compute a first assessment.

        ``profile`` may be a :class:`RiskProfile` or a raw mapping, which
        is validated via :meth:`RiskProfile.from_mapping`. An existing
        profile is replaced wholesale.

        Raises:
            ValidationError: If the profile is malformed or out of range.
        """

        if not user_id:
            raise ValidationError("user_id must be a non-empty string", field="user_id")

        if isinstance(profile, RiskProfile):
            validated = profile
        elif isinstance(profile, Mapping):
            validated = RiskProfile.from_mapping(profile)
        else:
            raise ValidationError(
                f"profile must be a RiskProfile or mapping, got {type(profile).__name__}",
                field="profile",
            )

        self.profile_store.save_profile(user_id, validated)
        logger.info(
            "RiskAssessmentService.create_risk_profile: user_id=%s tolerance=%s knowledge=%s",
            user_id,
            validated.risk_tolerance.value,
            validated.financial_knowledge.value,
        )

        return await self.assess_portfolio_risk(user_id)

    def get_risk_profile(self, user_id: str) -> Optional[RiskProfile]:
        """Return the stored profile for ``user_id`` if any."""

        return self.profile_store.load_profile(user_id)

    def _require_profile(self, user_id: str) -> RiskProfile:
        profile = self.profile_store.load_profile(user_id)
        if profile is None:
            raise ProfileNotFoundError(user_id)
        return profile

    # ------------------------------------------------------------------
    # Assessments
    # ------------------------------------------------------------------

    def _acquire_user_lock(self, user_id: str) -> _UserLock:
        loop = asyncio.get_running_loop()
        loop_locks = self._locks.get(loop)
        if loop_locks is None:
            loop_locks = {}
            self._locks[loop] = loop_locks

        entry = loop_locks.get(user_id)
        if entry is None:
            entry = _UserLock()
            loop_locks[user_id] = entry
        entry.users += 1
        return entry

    def _release_user_lock(self, user_id: str, entry: _UserLock) -> None:
        entry.users -= 1
        if entry.users > 0:
            return
        loop_locks = self._locks.get(asyncio.get_running_loop())
        if loop_locks is not None and loop_locks.get(user_id) is entry:
            del loop_locks[user_id]

    async def assess_portfolio_risk(self, user_id: str) -> RiskAssessment:
        """Recompute and cache the risk assessment for ``user_id``.

        Numeric scoring, aggregation and alerts are computed before any
        narrative text is requested.

        Raises:
            ProfileNotFoundError: If the user has no risk profile.
        """

        self._require_profile(user_id)

        entry = self._acquire_user_lock(user_id)
        try:
            async with entry.lock:
                # Re-read inside the lock so a profile replaced while we were
                # waiting is the one assessed.
                profile = self._require_profile(user_id)
                snapshot = annotate_positions(self.portfolio_provider.get_user_portfolio())

                factors = score_risk_factors(snapshot)
                overall = overall_risk_score(factors)
                total_value = total_portfolio_value(snapshot)
                assessed_at = self.clock()
                alerts = generate_alerts(overall, profile, total_value, assessed_at)

                recommendations = await generate_recommendations(
                    factors,
                    profile,
                    self.narrative_provider,
                    language=self.narrative_config.language,
                    timeout_seconds=self.narrative_config.timeout_seconds,
                )

                assessment = RiskAssessment(
                    user_id=user_id,
                    overall_risk_score=overall,
                    factors=factors,
                    recommendations=tuple(recommendations),
                    alerts=tuple(alerts),
                    total_portfolio_value=total_value,
                    assessed_at=assessed_at,
                )
                self._assessments[user_id] = assessment
        finally:
            self._release_user_lock(user_id, entry)

        logger.info(
            "RiskAssessmentService.assess_portfolio_risk: user_id=%s positions=%d score=%d "
            "recommendations=%d alerts=%d",
            user_id,
            len(snapshot),
            overall,
            len(assessment.recommendations),
            len(assessment.alerts),
        )

        return assessment

    def get_cached_assessment(self, user_id: str) -> Optional[RiskAssessment]:
        """Return the most recent assessment for ``user_id`` if any."""

        return self._assessments.get(user_id)

    # ------------------------------------------------------------------
    # Stress tests, summaries and explanations
    # ------------------------------------------------------------------

    def perform_stress_test(self, user_id: str) -> List[StressTestScenario]:
        """Project losses for the current portfolio under each scenario.

        The profile does not enter the loss math but is still required,
        matching :meth:`assess_portfolio_risk`.

        Raises:
            ProfileNotFoundError: If the user has no risk profile.
        """

        self._require_profile(user_id)
        scenarios = run_stress_tests(self.portfolio_provider.get_user_portfolio())

        logger.info(
            "RiskAssessmentService.perform_stress_test: user_id=%s scenarios=%d",
            user_id,
            len(scenarios),
        )
        return scenarios

    def get_portfolio_summary(self) -> PortfolioSummary:
        """Return totals, ROI and risk distribution for the current snapshot."""

        return summarise_portfolio(self.portfolio_provider.get_user_portfolio())

    def get_simplified_risk_explanation(self, user_id: str, language: Optional[str] = "en") -> str:
        """Return a one-sentence explanation of the cached risk level.

        Never raises; returns a sentinel message when the user has no
        cached assessment.
        """

        assessment = self._assessments.get(user_id)
        if assessment is None:
            return NO_ASSESSMENT_MESSAGE
        return simplified_explanation(assessment.overall_risk_score, language)
