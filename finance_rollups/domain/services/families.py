"""Split transaction grouping and contribution normalization."""

from collections.abc import Iterable
from logging import Logger

from finance_rollups.domain.models.families import TransactionFamilies
from finance_rollups.domain.models.transactions import (
    Contribution,
    SplitTransaction,
    Transaction,
)


def build_transaction_families(
    transactions: Iterable[Transaction],
    split_transactions: Iterable[SplitTransaction],
    *,
    logger: Logger,
) -> TransactionFamilies:
    """Group split transactions under their existing parent transaction.

    Args:
        transactions: Ledger transactions that may have splits.
        split_transactions: Split carve-outs referencing a parent id.
        logger: Logger used for diagnostics.

    Returns:
        TransactionFamilies: Children keyed by parent transaction id.
    """
    parents = {t.id for t in transactions}
    families = TransactionFamilies()
    orphans = 0
    for split in split_transactions:
        if split.transaction_id not in parents:
            orphans += 1
            continue
        families.add(split.transaction_id, split)
    if orphans:
        logger.debug(f"Skipped {orphans} split transactions without parent")
    return families


def collect_contributions(
    transactions: Iterable[Transaction],
    split_transactions: Iterable[SplitTransaction],
    *,
    logger: Logger,
) -> tuple[list[Contribution], TransactionFamilies]:
    """Normalize transactions and splits into one contribution stream.

    A split contributes with its own id, amount and label but inherits the
    parent's account and effective date. Orphaned splits are dropped.

    Args:
        transactions: Ledger transactions.
        split_transactions: Split carve-outs.
        logger: Logger used for diagnostics.

    Returns:
        tuple[list[Contribution], TransactionFamilies]: Contributions in
        input order (transactions first) and the split families.
    """
    parents = {t.id: t for t in transactions}
    splits = list(split_transactions)
    families = build_transaction_families(
        parents.values(),
        splits,
        logger=logger,
    )
    contributions = [
        Contribution(
            source_id=t.id,
            account_id=t.account_id,
            date=t.effective_date,
            amount=t.amount,
            label=t.label,
        )
        for t in parents.values()
    ]
    for split in splits:
        parent = parents.get(split.transaction_id)
        if parent is None:
            continue
        contributions.append(
            Contribution(
                source_id=split.id,
                account_id=parent.account_id,
                date=parent.effective_date,
                amount=split.amount,
                label=split.label,
                is_split=True,
            )
        )
    return contributions, families


__all__ = ["build_transaction_families", "collect_contributions"]
