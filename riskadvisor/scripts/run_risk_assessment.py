"""Risk Advisor – Portfolio risk assessment CLI.

This script is the composition root for ad-hoc runs: it loads a risk
profile and a portfolio snapshot from YAML or JSON files, wires them into
a :class:`RiskAssessmentService`, runs an assessment and the stress
tests, and prints a plain-text report.

Example
-------

    python -m riskadvisor.scripts.run_risk_assessment \
        --profile profile.yaml \
        --portfolio portfolio.yaml \
        --user-id demo

The portfolio file holds either a list of positions or a mapping with a
``positions`` list. Keys may be snake_case or camelCase.
"""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Any, List, Optional, Sequence

import yaml

from riskadvisor.core.config import get_config
from riskadvisor.core.errors import RiskAdvisorError, ValidationError
from riskadvisor.core.logging import get_logger
from riskadvisor.portfolio import InMemoryPortfolioProvider, PortfolioPosition, PortfolioSummary
from riskadvisor.profiles import RiskProfile
from riskadvisor.risk.types import RiskAssessment, StressTestScenario
from riskadvisor.service import RiskAssessmentService


logger = get_logger(__name__)


def _read_document(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    # YAML is a superset of JSON, so one loader handles both formats.
    return yaml.safe_load(path.read_text())


def load_profile(path: Path) -> RiskProfile:
    raw = _read_document(path)
    if not isinstance(raw, dict):
        raise ValidationError(f"{path}: expected a mapping of profile fields", field="profile")
    return RiskProfile.from_mapping(raw)


def load_positions(path: Path) -> List[PortfolioPosition]:
    raw = _read_document(path)
    if isinstance(raw, dict):
        raw = raw.get("positions", [])
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValidationError(f"{path}: expected a list of positions", field="positions")
    return [PortfolioPosition.from_mapping(item) for item in raw]


def format_report(
    assessment: RiskAssessment,
    scenarios: Sequence[StressTestScenario],
    explanation: str,
    summary: Optional[PortfolioSummary] = None,
) -> str:
    """Render an assessment, portfolio summary and stress tests as plain text."""

    f = assessment.factors
    lines = [
        f"Risk assessment for {assessment.user_id}",
        f"  Overall risk score: {assessment.overall_risk_score}/10",
        f"  {explanation}",
        f"  Portfolio value:    {assessment.total_portfolio_value:,.2f}",
        "",
        "Factor scores (0-100)",
        f"  diversification: {f.diversification_score:6.2f}",
        f"  volatility:      {f.volatility_risk:6.2f}",
        f"  liquidity:       {f.liquidity_risk:6.2f}",
        f"  concentration:   {f.concentration_risk:6.2f}",
        f"  geographic:      {f.geographic_risk:6.2f}",
        f"  sector:          {f.sector_risk:6.2f}",
    ]

    if summary is not None:
        lines.append("")
        lines.append("Portfolio summary")
        lines.append(f"  Invested:         {summary.total_investment:,.2f}")
        lines.append(f"  Unrealised gains: {summary.total_unrealized_gains:,.2f}")
        lines.append(f"  ROI:              {summary.total_roi:.2f}%")
        distribution = ", ".join(
            f"{level.value} {share:.1f}%" for level, share in summary.risk_distribution.items()
        )
        lines.append(f"  Risk mix:         {distribution}")

    lines.append("")
    lines.append("Recommendations")
    if not assessment.recommendations:
        lines.append("  (none)")
    for rec in assessment.recommendations:
        lines.append(
            f"  [{rec.priority.value}] {rec.type.value}: {rec.title} "
            f"(impact -{rec.estimated_impact:.1f})"
        )
        lines.append(f"      {rec.narrative}")

    lines.append("")
    lines.append("Alerts")
    if not assessment.alerts:
        lines.append("  (none)")
    for alert in assessment.alerts:
        lines.append(f"  [{alert.level.value}] {alert.title}: {alert.message}")

    lines.append("")
    lines.append("Stress tests")
    for scenario in scenarios:
        lines.append(
            f"  {scenario.name:<22} loss {scenario.potential_loss:>12,.2f}  "
            f"p={scenario.probability:.2f}  {scenario.timeframe}"
        )

    return "\n".join(lines)


async def _run(service: RiskAssessmentService, user_id: str, profile: RiskProfile, language: str) -> str:
    assessment = await service.create_risk_profile(user_id, profile)
    scenarios = service.perform_stress_test(user_id)
    explanation = service.get_simplified_risk_explanation(user_id, language)
    summary = service.get_portfolio_summary()
    return format_report(assessment, scenarios, explanation, summary)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Assess portfolio risk for a profile and a holdings snapshot",
    )

    parser.add_argument(
        "--profile",
        type=Path,
        required=True,
        help="YAML/JSON file with the user's risk profile",
    )
    parser.add_argument(
        "--portfolio",
        type=Path,
        required=True,
        help="YAML/JSON file with the portfolio positions",
    )
    parser.add_argument(
        "--user-id",
        type=str,
        default="cli-user",
        help="User identifier used for the assessment (default: cli-user)",
    )
    parser.add_argument(
        "--language",
        type=str,
        default=None,
        help="Language for explanations (default: NARRATIVE_LANGUAGE)",
    )

    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    config = get_config()

    try:
        profile = load_profile(args.profile)
        positions = load_positions(args.portfolio)
    except (FileNotFoundError, RiskAdvisorError) as exc:
        logger.error("Could not load inputs: %s", exc)
        return 2

    service = RiskAssessmentService(
        portfolio_provider=InMemoryPortfolioProvider(positions=positions),
        narrative_config=config.narrative,
    )

    language = args.language or config.narrative_language
    report = asyncio.run(_run(service, args.user_id, profile, language))
    print(report)
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    raise SystemExit(main())
