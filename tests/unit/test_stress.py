"""Risk Advisor: Tests for the stress test simulator."""

from __future__ import annotations

from dataclasses import replace

import pytest

from riskadvisor.portfolio import PortfolioPosition
from riskadvisor.risk.stress import SCENARIO_CATALOGUE, run_stress_tests


def _positions() -> list:
    return [
        PortfolioPosition("A", "pharmaceuticals", "EU", "low", 10.0, 50.0),
        PortfolioPosition("B", "biotechnology", "US", "high", 4.0, 125.0),
    ]


class TestRunStressTests:
    def test_catalogue_losses(self) -> None:
        scenarios = run_stress_tests(_positions())

        assert [s.name for s in scenarios] == [
            "Market Correction",
            "Regulatory Changes",
            "Technology Disruption",
        ]
        # Total value is 10*50 + 4*125 = 1000.
        assert [s.potential_loss for s in scenarios] == pytest.approx([200.0, 350.0, 500.0])
        assert [s.probability for s in scenarios] == [0.15, 0.08, 0.05]
        assert [s.timeframe for s in scenarios] == ["6-12 months", "3-6 months", "1-2 years"]
        assert all(len(s.mitigation_strategies) == 3 for s in scenarios)

    def test_losses_use_current_price_not_entry_price(self) -> None:
        positions = [PortfolioPosition("A", "telemedicine", "EU", "low", 10.0, 20.0, entry_price=100.0)]

        scenarios = run_stress_tests(positions)

        assert scenarios[0].potential_loss == pytest.approx(40.0)

    def test_doubling_holdings_doubles_every_loss(self) -> None:
        base = run_stress_tests(_positions())
        doubled = run_stress_tests(
            [replace(p, holding_amount=p.holding_amount * 2, investment_value=None) for p in _positions()]
        )

        for before, after in zip(base, doubled):
            assert after.potential_loss == pytest.approx(2.0 * before.potential_loss)

    def test_empty_portfolio_has_zero_losses(self) -> None:
        scenarios = run_stress_tests([])

        assert len(scenarios) == len(SCENARIO_CATALOGUE)
        assert all(s.potential_loss == 0.0 for s in scenarios)

    def test_catalogue_fractions_are_valid(self) -> None:
        for definition in SCENARIO_CATALOGUE:
            assert 0.0 <= definition.loss_fraction <= 1.0
            assert 0.0 <= definition.probability <= 1.0
