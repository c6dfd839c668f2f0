"""Order header and the aggregate snapshot exchanged while editing.

The header is read-only context for the editor (title, account link).
``OrderDetails`` is the immutable snapshot the line-item store
broadcasts after every mutation; its owner replaces it wholesale and
never edits it in place.
"""

from __future__ import annotations

from dataclasses import dataclass

from opm.domain.model.line_item import LineItem


@dataclass(frozen=True)
class OrderHeader:
    order_id: str
    order_number: str | None = None
    account_id: str | None = None
    account_name: str | None = None

    @property
    def title(self) -> str:
        return f"Order #{self.order_number or ''}'s Products"

    @property
    def subtitle(self) -> str:
        return f'<a href="/{self.account_id or ""}">{self.account_name or ""}</a>'


@dataclass(frozen=True)
class OrderDetails:
    """Items currently on screen plus ids of persisted rows removed since load."""

    items: tuple[LineItem, ...] = ()
    deleted_ids: tuple[str, ...] = ()

    @staticmethod
    def of(items=(), deleted_ids=()) -> OrderDetails:
        return OrderDetails(items=tuple(items), deleted_ids=tuple(deleted_ids))

    @property
    def has_items(self) -> bool:
        return len(self.items) > 0
