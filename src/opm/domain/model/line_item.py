"""LineItem: one product row of an order being edited.

Rows are immutable snapshots.  Every change produces a new instance via
``updated()``, which recomputes ``total_price`` in the same step so that
no consumer can ever observe a total that disagrees with its inputs.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal

UNSAVED_PREFIX = "unsaved_"

_ZERO = Decimal("0")


def compute_total(
    unit_price: Decimal | None,
    qty: int | None,
    handling_price: Decimal | None,
) -> Decimal:
    """``unit_price * qty + handling_price`` with missing values counted as 0."""
    return (unit_price or _ZERO) * (qty or 0) + (handling_price or _ZERO)


@dataclass(frozen=True)
class LineItem:
    """A single order line as shown in the editor grid.

    ``qty`` and ``unit_price`` are deliberately loose (nullable, unbounded)
    because the user types into them freely; the validator decides whether
    the row can be saved.
    """

    unique_id: str
    product_id: str | None = None
    qty: int | None = 1
    unit_price: Decimal | None = _ZERO
    handling_price: Decimal = _ZERO
    depth: Decimal | None = None
    width: Decimal | None = None
    height: Decimal | None = None
    delivery_type: str | None = None
    total_price: Decimal = _ZERO

    # descriptive fields copied from the selected product
    name: str | None = None
    product_code: str | None = None
    product_sku: str | None = None
    description: str | None = None
    category: str | None = None
    finish: str | None = None
    is_active: bool | None = None

    # transient UI state
    is_deleting: bool = False
    is_disabled: bool = False
    is_valid: bool = True
    error_message: str | None = None

    def __post_init__(self) -> None:
        total = compute_total(self.unit_price, self.qty, self.handling_price)
        object.__setattr__(self, "total_price", total)

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def blank(unique_id: str) -> LineItem:
        """A fresh, unsaved row with default values."""
        return LineItem(unique_id=unique_id)

    # --- Derived --------------------------------------------------------------

    @property
    def is_new(self) -> bool:
        """True if the row has never been persisted."""
        return self.unique_id.startswith(UNSAVED_PREFIX)

    # --- Copy-on-write --------------------------------------------------------

    def updated(self, **changes) -> LineItem:
        """Return a copy with *changes* merged in and the total recomputed."""
        return replace(self, **changes)

    def mark_pending_delete(self) -> LineItem:
        return self.updated(is_deleting=True, is_disabled=True)

    def clear_pending_delete(self) -> LineItem:
        return self.updated(is_deleting=False, is_disabled=False)
