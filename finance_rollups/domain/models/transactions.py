"""Domain models for ledger, investment and split transactions."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum


@dataclass(frozen=True)
class TransactionLabel:
    """Budget assignment of a transaction."""

    budget_id: str | None = None
    category_id: str | None = None


@dataclass(frozen=True)
class Transaction:
    """Ledger transaction; expenses are positive, income negative."""

    transaction_id: str
    account_id: str
    amount: Decimal
    date: date
    authorized_date: date | None = None
    label: TransactionLabel = field(default_factory=TransactionLabel)

    @property
    def id(self) -> str:
        return self.transaction_id

    @property
    def effective_date(self) -> date:
        return self.authorized_date or self.date


class InvestmentTransactionType(str, Enum):
    """Investment transaction kinds relevant to cost basis."""

    BUY = "buy"
    SELL = "sell"
    CASH = "cash"
    FEE = "fee"
    TRANSFER = "transfer"
    CANCEL = "cancel"


@dataclass(frozen=True)
class InvestmentTransaction:
    """Brokerage transaction for a single security."""

    investment_transaction_id: str
    account_id: str
    security_id: str | None
    date: date
    type: InvestmentTransactionType
    price: Decimal = Decimal("0")
    quantity: Decimal = Decimal("0")
    fees: Decimal | None = None

    @property
    def id(self) -> str:
        return self.investment_transaction_id

    @property
    def effective_date(self) -> date:
        return self.date


@dataclass(frozen=True)
class SplitTransaction:
    """Carve-out of part of a parent transaction into another label."""

    split_transaction_id: str
    transaction_id: str
    account_id: str
    amount: Decimal
    date: date
    label: TransactionLabel = field(default_factory=TransactionLabel)

    @property
    def id(self) -> str:
        return self.split_transaction_id


@dataclass(frozen=True)
class Contribution:
    """Normalized spend record shared by transactions and splits.

    Attributes:
        source_id: Id of the transaction or split it came from.
        account_id: Owning account.
        date: Effective date (authorized date when present).
        amount: Signed amount before split subtraction.
        label: Budget assignment.
        is_split: True when the record comes from a split transaction.
    """

    source_id: str
    account_id: str
    date: date
    amount: Decimal
    label: TransactionLabel
    is_split: bool = False


__all__ = [
    "TransactionLabel",
    "Transaction",
    "InvestmentTransactionType",
    "InvestmentTransaction",
    "SplitTransaction",
    "Contribution",
]
