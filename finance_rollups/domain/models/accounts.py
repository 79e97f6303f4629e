"""Domain models for tracked accounts."""

from dataclasses import dataclass
from decimal import Decimal

INVESTMENT_ACCOUNT_TYPE = "investment"
CRYPTO_EXCHANGE_SUBTYPE = "crypto exchange"


@dataclass(frozen=True)
class Account:
    """Account state as reported by the upstream provider.

    Attributes:
        account_id: Provider account identifier.
        current_balance: Current reported balance, None when unknown.
        available_balance: Available balance, None when unknown.
        account_type: Provider account type (depository, credit, ...).
        subtype: Provider account subtype.
        hide: Excludes the account from budget totals.
        budget_id: Default budget for unlabeled transactions.
        use_transactions: Prefer transaction-derived balance history.
        use_snapshots: Prefer account-snapshot balance history.
        use_holding_snapshots: Prefer holding-snapshot balance history.
    """

    account_id: str
    current_balance: Decimal | None = None
    available_balance: Decimal | None = None
    account_type: str = "depository"
    subtype: str | None = None
    hide: bool = False
    budget_id: str | None = None
    use_transactions: bool = True
    use_snapshots: bool = True
    use_holding_snapshots: bool = True

    @property
    def id(self) -> str:
        return self.account_id


__all__ = ["Account", "INVESTMENT_ACCOUNT_TYPE", "CRYPTO_EXCHANGE_SUBTYPE"]
