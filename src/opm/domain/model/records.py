"""Platform record shapes exchanged with the persistence layer.

These mirror what the order store keeps for each order product row.
The editor maps them to and from ``LineItem``; transient UI state never
leaves the editor.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class LineItemRecord:
    """A persisted (or about to be persisted) order product row.

    ``id`` is ``None`` for rows that the persistence call must insert.
    """

    id: str | None
    product_id: str | None
    quantity: int | None
    unit_price: Decimal | None
    handling_price: Decimal = Decimal("0")
    depth: Decimal | None = None
    width: Decimal | None = None
    height: Decimal | None = None
    delivery_type: str | None = None
    total_price: Decimal | None = None


@dataclass(frozen=True)
class SaveRequest:
    """One write: rows to insert or update plus ids of rows to remove."""

    items_to_upsert: tuple[LineItemRecord, ...]
    items_to_delete: tuple[str, ...]
