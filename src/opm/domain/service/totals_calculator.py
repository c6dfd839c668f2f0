"""Domain service: order totals.

Pure function of the current rows.  Recomputed by the editor every time
the store broadcasts a new snapshot; nothing is cached beyond the last
result the editor keeps.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from opm.domain.model.line_item import LineItem
from opm.domain.model.value_objects import Money

TAX_RATE = Decimal("0.07")


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Money
    taxes: Money
    discounts: Money
    total: Money

    @staticmethod
    def zero() -> OrderTotals:
        nothing = Money.of(0)
        return OrderTotals(subtotal=nothing, taxes=nothing, discounts=nothing, total=nothing)


def calculate_totals(
    items: Iterable[LineItem],
    tax_rate: Decimal = TAX_RATE,
    discounts: Money | None = None,
) -> OrderTotals:
    """Subtotal, taxes and grand total for *items*.

    ``total = subtotal + taxes - discounts``: discounts always reduce the
    amount owed.
    """
    if discounts is None:
        discounts = Money.of(0)

    subtotal = Money.of(0)
    for item in items:
        subtotal = subtotal + Money(item.total_price or Decimal("0"))

    taxes = subtotal * tax_rate
    return OrderTotals(
        subtotal=subtotal,
        taxes=taxes,
        discounts=discounts,
        total=subtotal + taxes - discounts,
    )
