"""Tests for split transaction families and contributions."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from finance_rollups.domain.models import (
    SplitTransaction,
    Transaction,
    TransactionFamilies,
    TransactionLabel,
)
from finance_rollups.domain.services.families import (
    build_transaction_families,
    collect_contributions,
)


def _transaction(transaction_id: str, amount: str, **kwargs) -> Transaction:
    return Transaction(
        transaction_id=transaction_id,
        account_id=kwargs.pop("account_id", "acc-1"),
        amount=Decimal(amount),
        date=kwargs.pop("date", date(2026, 9, 5)),
        **kwargs,
    )


def _split(split_id: str, parent_id: str, amount: str, **kwargs):
    return SplitTransaction(
        split_transaction_id=split_id,
        transaction_id=parent_id,
        account_id=kwargs.pop("account_id", "acc-1"),
        amount=Decimal(amount),
        date=kwargs.pop("date", date(2026, 9, 5)),
        **kwargs,
    )


def test_children_amount_total_sums_splits() -> None:
    """Children totals should sum every split of a parent."""
    families = TransactionFamilies()
    families.add("t1", _split("s1", "t1", "30"))
    families.add("t1", _split("s2", "t1", "20"))

    assert families.get_children_amount_total("t1") == Decimal("50")
    assert families.get_children_amount_total("t2") == Decimal("0")
    assert [s.id for s in families.get("t1")] == ["s1", "s2"]


def test_build_families_skips_orphans() -> None:
    """Splits whose parent is missing should be ignored."""
    families = build_transaction_families(
        [_transaction("t1", "100")],
        [_split("s1", "t1", "40"), _split("s2", "gone", "10")],
        logger=MagicMock(),
    )

    assert families.parent_ids() == ["t1"]
    assert "gone" not in families


def test_parent_and_children_add_up_to_original_amount() -> None:
    """Amount after split plus the children should equal the original."""
    parent = _transaction("t1", "100")
    splits = [_split("s1", "t1", "30"), _split("s2", "t1", "25.50")]

    families = build_transaction_families(
        [parent],
        splits,
        logger=MagicMock(),
    )
    after_split = parent.amount - families.get_children_amount_total("t1")

    assert after_split + sum(s.amount for s in splits) == parent.amount


def test_split_contributions_inherit_parent_account_and_date() -> None:
    """Split contributions should reuse the parent's account and date."""
    parent = _transaction(
        "t1",
        "100",
        account_id="acc-9",
        date=date(2026, 8, 30),
        authorized_date=date(2026, 8, 28),
        label=TransactionLabel(category_id="food"),
    )
    split = _split(
        "s1",
        "t1",
        "40",
        account_id="acc-1",
        date=date(2026, 9, 2),
        label=TransactionLabel(category_id="fun"),
    )

    contributions, families = collect_contributions(
        [parent],
        [split, _split("s2", "missing", "5")],
        logger=MagicMock(),
    )

    assert [c.source_id for c in contributions] == ["t1", "s1"]
    split_contribution = contributions[1]
    assert split_contribution.account_id == "acc-9"
    assert split_contribution.date == date(2026, 8, 28)
    assert split_contribution.amount == Decimal("40")
    assert split_contribution.label.category_id == "fun"
    assert split_contribution.is_split is True
    assert families.get_children_amount_total("t1") == Decimal("40")
