"""Risk Advisor – Portfolio Provider protocol.

The engine holds no portfolio state of its own. Every assessment reads a
fresh snapshot from a :class:`PortfolioProvider`; the in-memory
implementation below backs the command-line tool and the tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Protocol, Sequence, runtime_checkable

from riskadvisor.portfolio.types import PortfolioPosition


@runtime_checkable
class PortfolioProvider(Protocol):
    """Source of the current portfolio snapshot."""

    def get_user_portfolio(self) -> Sequence[PortfolioPosition]:  # pragma: no cover - interface
        """Return the current holdings. Callers must not modify the result."""


@dataclass
class InMemoryPortfolioProvider:
    """Portfolio provider backed by a list of positions.

    :meth:`get_user_portfolio` returns a tuple copy so that later calls to
    :meth:`set_positions` do not affect a snapshot already handed out.
    """

    positions: List[PortfolioPosition] = field(default_factory=list)

    def get_user_portfolio(self) -> Sequence[PortfolioPosition]:
        return tuple(self.positions)

    def set_positions(self, positions: Iterable[PortfolioPosition]) -> None:
        self.positions = list(positions)

    def add_position(self, position: PortfolioPosition) -> None:
        self.positions.append(position)
