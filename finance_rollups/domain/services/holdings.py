"""Domain services for holding valuation and cost basis inference."""

from collections import defaultdict
from collections.abc import Iterable, Mapping
from datetime import date
from decimal import Decimal
from logging import Logger

from finance_rollups.domain.models.calculations import (
    CostBasisEstimate,
    HoldingValueSummary,
    PriceResolution,
    PriceSource,
)
from finance_rollups.domain.models.holdings import HoldingsValuation
from finance_rollups.domain.models.snapshots import (
    Holding,
    HoldingSnapshot,
    SecuritySnapshot,
    is_newer_snapshot,
)
from finance_rollups.domain.models.transactions import (
    InvestmentTransaction,
    InvestmentTransactionType,
)
from finance_rollups.utils.decimal_utils import coerce_optional_decimal
from finance_rollups.utils.month_utils import (
    REFERENCE_DAY,
    month_key,
    parse_month_key,
)

SecurityPriceIndex = Mapping[str, Mapping[str, Decimal]]


def build_security_price_index(
    security_snapshots: Iterable[SecuritySnapshot],
    *,
    logger: Logger,
) -> dict[str, dict[str, Decimal]]:
    """Index close prices by security id and month key.

    The price month comes from ``close_price_as_of`` when present, else
    from the snapshot date. Within a month the most recent snapshot wins.

    Args:
        security_snapshots: Security snapshots with close prices.
        logger: Logger used for diagnostics.

    Returns:
        dict[str, dict[str, Decimal]]: ``security_id -> month -> price``.
    """
    latest: dict[tuple[str, str], SecuritySnapshot] = {}
    for snapshot in security_snapshots:
        security = snapshot.security
        if not security.security_id or security.close_price is None:
            continue
        priced_on = security.close_price_as_of or snapshot.date
        key = (security.security_id, month_key(priced_on))
        if is_newer_snapshot(snapshot, latest.get(key)):
            latest[key] = snapshot

    index: dict[str, dict[str, Decimal]] = defaultdict(dict)
    for (security_id, key), snapshot in latest.items():
        index[security_id][key] = snapshot.security.close_price
    logger.debug(f"Indexed prices for {len(index)} securities")
    return dict(index)


def resolve_holding_price(
    holding: Holding,
    price_index: SecurityPriceIndex,
    when: date,
) -> PriceResolution | None:
    """Resolve a holding's price for the month of ``when``.

    Tiers, first match wins: the institution price, the indexed market
    price, then ``institution_value / quantity``. Each must be positive.
    """
    institution_price = coerce_optional_decimal(holding.institution_price)
    if institution_price is not None and institution_price > 0:
        return PriceResolution(institution_price, PriceSource.INSTITUTION)

    if holding.security_id:
        market_price = price_index.get(holding.security_id, {}).get(
            month_key(when)
        )
        if market_price is not None and market_price > 0:
            return PriceResolution(market_price, PriceSource.MARKET)

    institution_value = coerce_optional_decimal(holding.institution_value)
    if holding.quantity and institution_value is not None:
        inferred_price = institution_value / holding.quantity
        if inferred_price > 0:
            return PriceResolution(inferred_price, PriceSource.INFERRED)

    return None


def infer_cost_basis(
    account_id: str,
    security_id: str,
    investment_transactions: Iterable[InvestmentTransaction],
    as_of: date,
) -> CostBasisEstimate | None:
    """Infer a cost basis with the average-cost method.

    Buys add ``price * quantity + fees``; sells remove the sold quantity
    at the running average cost. Other types are ignored. Totals are
    clamped at zero to absorb rounding.

    Args:
        account_id: Account holding the security.
        security_id: Security to infer for.
        investment_transactions: Candidate transactions.
        as_of: Only transactions dated on or before this date count.

    Returns:
        CostBasisEstimate | None: Estimate, or None when nothing is held.
    """
    relevant = sorted(
        (
            t
            for t in investment_transactions
            if t.account_id == account_id
            and t.security_id == security_id
            and t.date <= as_of
        ),
        key=lambda t: (t.date, t.id),
    )

    total_cost = Decimal("0")
    total_quantity = Decimal("0")
    for transaction in relevant:
        if transaction.type is InvestmentTransactionType.BUY:
            fees = transaction.fees or Decimal("0")
            total_cost += transaction.price * transaction.quantity + fees
            total_quantity += transaction.quantity
        elif transaction.type is InvestmentTransactionType.SELL:
            if total_quantity <= 0:
                continue
            sold = abs(transaction.quantity)
            average_cost = total_cost / total_quantity
            total_cost -= average_cost * sold
            total_quantity -= sold
            if total_quantity < 0:
                total_quantity = Decimal("0")
            if total_cost < 0:
                total_cost = Decimal("0")

    if total_quantity <= 0:
        return None
    return CostBasisEstimate(
        cost_basis=total_cost,
        total_quantity=total_quantity,
    )


def compute_holdings_valuation(
    holding_snapshots: Iterable[HoldingSnapshot],
    security_snapshots: Iterable[SecuritySnapshot],
    investment_transactions: Iterable[InvestmentTransaction],
    *,
    reference_day: int = REFERENCE_DAY,
    logger: Logger,
) -> HoldingsValuation:
    """Value every holding per month from its latest snapshot.

    Holding months without a resolvable price are omitted. A reported cost
    basis is kept unless it is missing, or zero while shares are held; then
    it is inferred from the investment transactions up to the month's
    reference date and flagged as estimated.

    Args:
        holding_snapshots: Holding snapshots.
        security_snapshots: Security snapshots for market prices.
        investment_transactions: Transactions used for inference.
        reference_day: Day of month used as each month's reference date.
        logger: Logger used for diagnostics.

    Returns:
        HoldingsValuation: Valuations keyed by holding id and month.
    """
    price_index = build_security_price_index(
        security_snapshots,
        logger=logger,
    )

    latest: dict[tuple[str, str], HoldingSnapshot] = {}
    for snapshot in holding_snapshots:
        key = (snapshot.holding.holding_id, month_key(snapshot.date))
        if is_newer_snapshot(snapshot, latest.get(key)):
            latest[key] = snapshot

    by_position: dict[tuple[str, str], list[InvestmentTransaction]] = (
        defaultdict(list)
    )
    for transaction in investment_transactions:
        by_position[(transaction.account_id, transaction.security_id)].append(
            transaction
        )

    valuation = HoldingsValuation()
    unpriced = 0
    for (holding_id, key), snapshot in latest.items():
        holding = snapshot.holding
        reference_date = parse_month_key(key, reference_day)
        resolution = resolve_holding_price(
            holding,
            price_index,
            reference_date,
        )
        if resolution is None:
            unpriced += 1
            continue

        cost_basis = coerce_optional_decimal(holding.cost_basis)
        inferred = False
        if (cost_basis is None or cost_basis == 0) and holding.quantity != 0:
            estimate = infer_cost_basis(
                holding.account_id,
                holding.security_id,
                by_position.get((holding.account_id, holding.security_id), ()),
                reference_date,
            )
            if estimate is not None:
                cost_basis = estimate.cost_basis
                inferred = True

        valuation.set(
            holding_id,
            reference_date,
            HoldingValueSummary(
                value=resolution.price * holding.quantity,
                price=resolution.price,
                quantity=holding.quantity,
                security_id=holding.security_id,
                account_id=holding.account_id,
                cost_basis=cost_basis,
                cost_basis_inferred=inferred,
                price_source=resolution.source,
            ),
        )

    if unpriced:
        logger.debug(f"Skipped {unpriced} holding months without a price")
    return valuation


__all__ = [
    "SecurityPriceIndex",
    "build_security_price_index",
    "resolve_holding_price",
    "infer_cost_basis",
    "compute_holdings_valuation",
]
