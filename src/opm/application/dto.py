"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LineItemDTO:
    """Output: a single product row as displayed to the user."""

    row: int  # 1-based, as shown on screen
    unique_id: str
    product: str
    qty: str
    unit_price: str  # formatted, e.g. "$15.00"
    handling_price: str
    total_price: str
    status: str  # "", "new" or "pending delete"
    error_message: str | None


@dataclass(frozen=True)
class OrderProductsDTO:
    """Output: the editor screen of one order."""

    order_id: str
    title: str
    account_name: str
    state: str
    items: list[LineItemDTO]
    deleted_ids: list[str]
    subtotal: str
    taxes: str
    total: str
