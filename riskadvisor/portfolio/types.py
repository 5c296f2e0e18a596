"""Risk Advisor – Portfolio snapshot types.

This module defines the in-memory representation of a user's holdings as
read from the Portfolio Provider. Positions are immutable; derived fields
(``percentage_of_portfolio`` and ``unrealized_gains``) are filled in by
:func:`riskadvisor.portfolio.snapshot.annotate_positions`, which returns
new objects rather than updating the provider's records.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from riskadvisor.core.types import RawRecord
from riskadvisor.core.validation import coerce_enum, pick, require_non_negative


class Sector(str, Enum):
    PHARMACEUTICALS = "pharmaceuticals"
    MEDICAL_DEVICES = "medical_devices"
    TELEMEDICINE = "telemedicine"
    HEALTH_INSURANCE = "health_insurance"
    BIOTECHNOLOGY = "biotechnology"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class PortfolioPosition:
    """A single holding in a portfolio snapshot.

    Attributes:
        asset_id: Identifier of the held asset.
        sector: Sector bucket of the asset.
        geography: Free-form region label (e.g. "North America").
        risk_level: Issuer-assigned risk bucket.
        holding_amount: Units held.
        current_price: Latest price per unit.
        volume_24h: Trailing 24h trading volume, used as a liquidity proxy.
        entry_price: Price per unit at acquisition. Defaults to
            ``current_price`` for positions added at the current quote.
        investment_value: Cost basis, ``holding_amount * entry_price`` at
            acquisition unless supplied explicitly.
        percentage_of_portfolio: Share of total current value in percent.
            Derived; ``0.0`` until the snapshot is annotated.
        unrealized_gains: Current value minus cost basis. Derived.
    """

    asset_id: str
    sector: Sector
    geography: str
    risk_level: RiskLevel
    holding_amount: float
    current_price: float
    volume_24h: float = 0.0
    entry_price: Optional[float] = None
    investment_value: Optional[float] = None
    percentage_of_portfolio: float = 0.0
    unrealized_gains: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "sector", coerce_enum(Sector, self.sector, "sector"))
        object.__setattr__(self, "risk_level", coerce_enum(RiskLevel, self.risk_level, "risk_level"))
        for name in ("holding_amount", "current_price", "volume_24h", "percentage_of_portfolio"):
            object.__setattr__(self, name, require_non_negative(getattr(self, name), name))

        if self.entry_price is None:
            object.__setattr__(self, "entry_price", self.current_price)
        else:
            object.__setattr__(self, "entry_price", require_non_negative(self.entry_price, "entry_price"))

        if self.investment_value is None:
            object.__setattr__(self, "investment_value", self.holding_amount * self.entry_price)
        else:
            object.__setattr__(
                self, "investment_value", require_non_negative(self.investment_value, "investment_value")
            )

    @property
    def current_value(self) -> float:
        return self.holding_amount * self.current_price

    @classmethod
    def from_mapping(cls, data: RawRecord) -> "PortfolioPosition":
        """Build a position from a parsed JSON record (snake_case or camelCase keys)."""

        return cls(
            asset_id=str(pick(data, "asset_id", "assetId")),
            sector=pick(data, "sector", "sector"),
            geography=str(pick(data, "geography", "geography")),
            risk_level=pick(data, "risk_level", "riskLevel"),
            holding_amount=pick(data, "holding_amount", "holdingAmount"),
            current_price=pick(data, "current_price", "currentPrice"),
            volume_24h=pick(data, "volume_24h", "volume24h", 0.0),
            entry_price=pick(data, "entry_price", "entryPrice", None),
            investment_value=pick(data, "investment_value", "investmentValue", None),
        )


@dataclass(frozen=True)
class PortfolioSummary:
    """Aggregate view of a portfolio snapshot.

    Attributes:
        total_value: Sum of current values.
        total_investment: Sum of cost bases.
        total_unrealized_gains: ``total_value - total_investment``.
        total_roi: Return on cost basis in percent; ``0.0`` when the cost
            basis is zero.
        risk_distribution: Percentage of current value per risk level.
            Every level is present; all zero for an empty portfolio.
        num_positions: Number of positions in the snapshot.
    """

    total_value: float
    total_investment: float
    total_unrealized_gains: float
    total_roi: float
    risk_distribution: Dict[RiskLevel, float] = field(default_factory=dict)
    num_positions: int = 0
