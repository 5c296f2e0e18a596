"""Risk Advisor – top-level package exports.

This module re-exports commonly used engine components for convenience.
"""

# Errors
from riskadvisor.core.errors import (
    NarrativeProviderError,
    ProfileNotFoundError,
    RiskAdvisorError,
    ValidationError,
)

# Profiles and portfolio snapshots
from riskadvisor.profiles import RiskProfile, RiskProfileStore
from riskadvisor.portfolio import InMemoryPortfolioProvider, PortfolioPosition, PortfolioProvider

# Narrative
from riskadvisor.narrative import NarrativeProvider, StaticNarrativeProvider

# Risk engine
from riskadvisor.risk import RiskAssessment, StressTestScenario
from riskadvisor.service import RiskAssessmentService

__version__ = "0.1.0"
