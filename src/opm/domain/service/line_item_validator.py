"""Domain service: pre-save validation of line items.

Each row is checked on its own and annotated with ``is_valid`` and a
human-readable ``error_message``.  Validation never blocks editing; it
only decides whether the batch may be sent to the persistence call.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from opm.domain.model.line_item import LineItem

PRODUCT_REQUIRED = "Product is required"
QTY_REQUIRED = "Qty is required and it must be a positive number"
UNIT_PRICE_REQUIRED = "Unit Price is required and it cannot be a negative amount"


@dataclass(frozen=True)
class ValidationOutcome:
    items: tuple[LineItem, ...]
    is_valid: bool

    @property
    def invalid_items(self) -> tuple[LineItem, ...]:
        return tuple(item for item in self.items if not item.is_valid)


def line_item_issues(item: LineItem) -> list[str]:
    """Every rule the row currently breaks, in display order."""
    issues: list[str] = []
    if not item.product_id:
        issues.append(PRODUCT_REQUIRED)
    if item.qty is None or item.qty < 1:
        issues.append(QTY_REQUIRED)
    if item.unit_price is None or item.unit_price < Decimal("0"):
        issues.append(UNIT_PRICE_REQUIRED)
    return issues


def validate_line_item(item: LineItem) -> LineItem:
    issues = line_item_issues(item)
    if issues:
        return item.updated(is_valid=False, error_message="\n".join(issues))
    return item.updated(is_valid=True, error_message=None)


def validate_line_items(items: Iterable[LineItem]) -> ValidationOutcome:
    """Annotate every row; the batch is valid only if every row is."""
    annotated = tuple(validate_line_item(item) for item in items)
    return ValidationOutcome(
        items=annotated,
        is_valid=all(item.is_valid for item in annotated),
    )
