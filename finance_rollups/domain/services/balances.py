"""Domain services for monthly account balance history."""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from logging import Logger

from finance_rollups.domain.models.accounts import (
    CRYPTO_EXCHANGE_SUBTYPE,
    INVESTMENT_ACCOUNT_TYPE,
    Account,
)
from finance_rollups.domain.models.ledger import MonthlyLedger
from finance_rollups.domain.models.snapshots import (
    AccountSnapshot,
    HoldingSnapshot,
    is_newer_snapshot,
)
from finance_rollups.domain.models.transactions import (
    InvestmentTransaction,
    Transaction,
)
from finance_rollups.utils.decimal_utils import coerce_decimal
from finance_rollups.utils.month_utils import (
    iter_months_backward,
    month_key,
    month_start,
    shift_months,
)


def get_account_balance(account: Account) -> Decimal:
    """Return the balance an account reports right now.

    Investment accounts report cash and positions separately, so their
    balance is ``current + available``; crypto exchanges only use
    ``current``. Missing values count as zero.
    """
    current = coerce_decimal(account.current_balance)
    available = coerce_decimal(account.available_balance)
    if (
        account.account_type == INVESTMENT_ACCOUNT_TYPE
        and account.subtype != CRYPTO_EXCHANGE_SUBTYPE
    ):
        return current + available
    return current


def compute_transaction_balances(
    accounts: Iterable[Account],
    transactions: Iterable[Transaction],
    investment_transactions: Iterable[InvestmentTransaction],
    *,
    today: date,
    logger: Logger,
) -> MonthlyLedger[Decimal]:
    """Derive monthly balances by replaying transactions backwards.

    Every account starts at its live balance in today's month. Each
    transaction amount is recorded in the month before its effective date
    and the months are then accumulated from today towards the past, so
    month ``m`` holds its own contributions plus the balance of ``m + 1``.
    Investment transactions contribute ``-(price * quantity)``.

    Args:
        accounts: Accounts to build histories for.
        transactions: Ledger transactions.
        investment_transactions: Brokerage transactions.
        today: Reference date; later transactions are ignored.
        logger: Logger used for diagnostics.

    Returns:
        MonthlyLedger[Decimal]: Balance per account and month.
    """
    accounts_by_id = {a.id: a for a in accounts}
    ledger = MonthlyLedger.of_amounts()
    for account in accounts_by_id.values():
        ledger.set(account.id, today, get_account_balance(account))

    skipped = 0
    for transaction in transactions:
        if not _is_replayable(transaction, accounts_by_id, today):
            skipped += 1
            continue
        ledger.add(
            transaction.account_id,
            shift_months(transaction.effective_date, -1),
            transaction.amount,
        )
    for transaction in investment_transactions:
        if not _is_replayable(transaction, accounts_by_id, today):
            skipped += 1
            continue
        ledger.add(
            transaction.account_id,
            shift_months(transaction.effective_date, -1),
            -(transaction.price * transaction.quantity),
        )
    if skipped:
        logger.debug(f"Skipped {skipped} transactions for balance history")

    for account_id in accounts_by_id:
        history = ledger.history(account_id)
        if history is None or history.start_month is None:
            continue
        for month in iter_months_backward(
            history.end_month,
            history.start_month,
        ):
            later = history.get(shift_months(month, 1)) or Decimal("0")
            own = history.get(month) or Decimal("0")
            history.set(month, own + later)

    return ledger


def _is_replayable(
    transaction: Transaction | InvestmentTransaction,
    accounts_by_id: dict[str, Account],
    today: date,
) -> bool:
    if transaction.account_id not in accounts_by_id:
        return False
    return transaction.effective_date <= today


def compute_snapshot_balances(
    accounts: Iterable[Account],
    account_snapshots: Iterable[AccountSnapshot],
    *,
    today: date,
    logger: Logger,
) -> MonthlyLedger[Decimal]:
    """Take the latest account snapshot per account and month.

    Snapshots without a current balance or dated after ``today`` are
    ignored. Today's month always holds the live balance.
    """
    accounts_by_id = {a.id: a for a in accounts}
    latest: dict[tuple[str, str], AccountSnapshot] = {}
    for snapshot in account_snapshots:
        account_id = snapshot.account.account_id
        if account_id not in accounts_by_id:
            continue
        if snapshot.account.current_balance is None:
            continue
        if snapshot.date > today:
            continue
        key = (account_id, month_key(snapshot.date))
        if is_newer_snapshot(snapshot, latest.get(key)):
            latest[key] = snapshot

    ledger = MonthlyLedger.of_amounts()
    for (account_id, _), snapshot in latest.items():
        ledger.set(
            account_id,
            snapshot.date,
            get_account_balance(snapshot.account),
        )
    for account in accounts_by_id.values():
        ledger.set(account.id, today, get_account_balance(account))
    logger.debug(f"Resolved {len(latest)} monthly account snapshots")
    return ledger


def compute_holding_snapshot_balances(
    accounts: Iterable[Account],
    holding_snapshots: Iterable[HoldingSnapshot],
    *,
    today: date,
    logger: Logger,
) -> MonthlyLedger[Decimal]:
    """Sum the latest holding values per account and month.

    For each holding only the most recent snapshot of a month counts; the
    account balance for that month is the sum of their
    ``institution_value``.
    """
    account_ids = {a.id for a in accounts}
    latest: dict[tuple[str, str, str], HoldingSnapshot] = {}
    for snapshot in holding_snapshots:
        holding = snapshot.holding
        if holding.account_id not in account_ids:
            continue
        if snapshot.date > today:
            continue
        key = (
            month_key(snapshot.date),
            holding.account_id,
            holding.holding_id,
        )
        if is_newer_snapshot(snapshot, latest.get(key)):
            latest[key] = snapshot

    ledger = MonthlyLedger.of_amounts()
    for snapshot in latest.values():
        ledger.add(
            snapshot.holding.account_id,
            snapshot.date,
            coerce_decimal(snapshot.holding.institution_value),
        )
    logger.debug(f"Resolved {len(latest)} monthly holding snapshots")
    return ledger


def compute_balance_history(
    accounts: Iterable[Account],
    transactions: Iterable[Transaction],
    investment_transactions: Iterable[InvestmentTransaction],
    account_snapshots: Iterable[AccountSnapshot],
    holding_snapshots: Iterable[HoldingSnapshot] = (),
    *,
    today: date,
    include_holding_snapshots: bool = True,
    logger: Logger,
) -> MonthlyLedger[Decimal]:
    """Blend transaction and snapshot histories into one balance per month.

    Months are resolved from today backwards. Per month the first
    available source wins: account snapshot (``use_snapshots``), holding
    snapshots (``use_holding_snapshots``), transactions
    (``use_transactions``). Otherwise the nearer-to-today balance is
    carried. Today's month is always the live balance.

    Args:
        accounts: Accounts to resolve.
        transactions: Ledger transactions.
        investment_transactions: Brokerage transactions.
        account_snapshots: Point-in-time account states.
        holding_snapshots: Point-in-time holding states.
        today: Reference date.
        include_holding_snapshots: Enables the holding snapshot source.
        logger: Logger used for diagnostics.

    Returns:
        MonthlyLedger[Decimal]: Balance per account and month.
    """
    accounts = list(accounts)
    from_transactions = compute_transaction_balances(
        accounts,
        transactions,
        investment_transactions,
        today=today,
        logger=logger,
    )
    from_snapshots = compute_snapshot_balances(
        accounts,
        account_snapshots,
        today=today,
        logger=logger,
    )
    from_holdings = (
        compute_holding_snapshot_balances(
            accounts,
            holding_snapshots,
            today=today,
            logger=logger,
        )
        if include_holding_snapshots
        else MonthlyLedger.of_amounts()
    )

    merged = MonthlyLedger.of_amounts()
    today_month = month_start(today)
    for account in accounts:
        starts = [
            history.start_month
            for history in (
                from_transactions.history(account.id),
                from_snapshots.history(account.id),
                from_holdings.history(account.id),
            )
            if history is not None and history.start_month is not None
        ]
        oldest = min(starts, default=today_month)
        carried = get_account_balance(account)
        for month in iter_months_backward(today_month, oldest):
            if month == today_month:
                balance = get_account_balance(account)
            else:
                balance = _pick_balance(
                    account,
                    from_snapshots.get(account.id, month),
                    from_holdings.get(account.id, month),
                    from_transactions.get(account.id, month),
                    carried,
                )
            merged.set(account.id, month, balance)
            carried = balance

    logger.debug(f"Merged balance history for {len(merged)} accounts")
    return merged


def _pick_balance(
    account: Account,
    snapshot_balance: Decimal | None,
    holding_balance: Decimal | None,
    transaction_balance: Decimal | None,
    carried: Decimal,
) -> Decimal:
    if account.use_snapshots and snapshot_balance is not None:
        return snapshot_balance
    if account.use_holding_snapshots and holding_balance is not None:
        return holding_balance
    if account.use_transactions and transaction_balance is not None:
        return transaction_balance
    return carried


__all__ = [
    "get_account_balance",
    "compute_transaction_balances",
    "compute_snapshot_balances",
    "compute_holding_snapshot_balances",
    "compute_balance_history",
]
