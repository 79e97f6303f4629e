"""Domain models for point-in-time snapshots."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from finance_rollups.domain.models.accounts import Account


@dataclass(frozen=True)
class Holding:
    """Position of one security inside one account."""

    account_id: str
    security_id: str
    quantity: Decimal
    cost_basis: Decimal | None = None
    institution_price: Decimal | None = None
    institution_value: Decimal | None = None

    @property
    def holding_id(self) -> str:
        return f"{self.account_id}_{self.security_id}"


@dataclass(frozen=True)
class Security:
    """Security reference data with its latest close price."""

    security_id: str
    close_price: Decimal | None = None
    close_price_as_of: date | None = None


@dataclass(frozen=True)
class AccountSnapshot:
    """Account state captured on ``date``."""

    snapshot_id: str
    date: date
    account: Account


@dataclass(frozen=True)
class HoldingSnapshot:
    """Holding state captured on ``date``."""

    snapshot_id: str
    date: date
    holding: Holding


@dataclass(frozen=True)
class SecuritySnapshot:
    """Security state captured on ``date``."""

    snapshot_id: str
    date: date
    security: Security


def is_newer_snapshot(candidate, existing) -> bool:
    """Return True when ``candidate`` should replace ``existing``.

    Later dates win; identical dates fall back to the larger snapshot id so
    the outcome never depends on iteration order.
    """
    if existing is None:
        return True
    if candidate.date != existing.date:
        return candidate.date > existing.date
    return candidate.snapshot_id > existing.snapshot_id


__all__ = [
    "Holding",
    "Security",
    "AccountSnapshot",
    "HoldingSnapshot",
    "SecuritySnapshot",
    "is_newer_snapshot",
]
