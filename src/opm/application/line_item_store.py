"""Application service: the line-item store behind the product grid.

The store is the only owner of the live row list.  Every mutation
replaces the affected row with a new immutable ``LineItem`` and then
broadcasts an ``OrderDetails`` snapshot (all rows plus the ids deleted
so far) to every subscriber.  Subscribers never see the internal list.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from opm.application.notifications import Notifier, Toast, ToastMode, ToastVariant
from opm.domain.exceptions import DomainException, ValidationError
from opm.domain.model.edits import ApplyProduct, ClearProduct, FieldEdit
from opm.domain.model.line_item import UNSAVED_PREFIX, LineItem
from opm.domain.model.order import OrderDetails
from opm.domain.model.product import ProductDetails
from opm.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)

Listener = Callable[[OrderDetails], None]


@dataclass(frozen=True)
class _ProductRequest:
    """Tag of one product resolution; only the latest one may land."""

    sequence: int
    product_id: str
    index: int
    target_id: str  # unique_id of the row at request time


class LineItemStore:

    def __init__(
        self,
        product_repo: ProductRepository,
        notifier: Notifier | None = None,
    ) -> None:
        self._product_repo = product_repo
        self._notifier = notifier
        self._items: list[LineItem] = []
        self._deleted_ids: list[str] = []
        self._listeners: list[Listener] = []
        self._unsaved_sequence = 0

        # product resolution slot
        self._request_sequence = 0
        self._pending_product: _ProductRequest | None = None
        self._last_product: ProductDetails | None = None
        self.product_error: DomainException | None = None

        # bound "how many rows to add" field
        self.quantity_to_add = 1

        # create-product side flow
        self.is_new_product_panel_open = False
        self.new_product_request_index: int | None = None

    # --- Observation ----------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register for change snapshots.  Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def details(self) -> OrderDetails:
        return OrderDetails.of(self._items, self._deleted_ids)

    # --- Loading --------------------------------------------------------------

    def load(self, details: OrderDetails) -> None:
        """Replace the whole list (initial load, validation annotations).

        Loading is not a user edit, so subscribers are not notified.
        """
        self._items = list(details.items)
        self._deleted_ids = list(details.deleted_ids)

    # --- Adding ---------------------------------------------------------------

    def set_quantity_to_add(self, count: int) -> None:
        if count < 0:
            raise ValidationError("Number of products to add cannot be negative")
        self.quantity_to_add = count

    def add_new(self) -> LineItem:
        item = LineItem.blank(self._next_unique_id())
        self._items.append(item)
        logger.debug("Added line item %s", item.unique_id)
        self._publish()
        return item

    def add_many(self, count: int | None = None) -> list[LineItem]:
        """Add *count* blank rows; defaults to the bound quantity field.

        The bound field goes back to 1 once it has been used.
        """
        if count is None:
            count = self.quantity_to_add
            self.quantity_to_add = 1
        if count < 0:
            raise ValidationError("Number of products to add cannot be negative")
        return [self.add_new() for _ in range(count)]

    # --- Editing --------------------------------------------------------------

    def edit(self, index: int, *edits: FieldEdit) -> LineItem:
        """Merge *edits* into the row at *index* and recompute its total."""
        item = self._item_at(index)
        changes: dict = {}
        for edit in edits:
            changes.update(edit.changes())
        updated = item.updated(**changes)
        self._items[index] = updated
        logger.debug("Edited line item %s: %s", updated.unique_id, sorted(changes))
        self._publish()
        return updated

    # --- Deleting -------------------------------------------------------------

    def delete(self, index: int) -> None:
        """Remove an unsaved row at once; persisted rows await confirmation."""
        item = self._item_at(index)
        if item.is_new:
            del self._items[index]
            logger.debug("Removed unsaved line item %s", item.unique_id)
        else:
            self._items[index] = item.mark_pending_delete()
            logger.debug("Line item %s pending delete", item.unique_id)
        self._publish()

    def confirm_delete(self, index: int) -> None:
        item = self._item_at(index)
        if not item.is_new:
            self._deleted_ids.append(item.unique_id)
        del self._items[index]
        logger.debug("Deleted line item %s", item.unique_id)
        self._publish()

    def cancel_delete(self, index: int) -> None:
        self._items[index] = self._item_at(index).clear_pending_delete()
        self._publish()

    def resolve_delete(self, index: int, confirmed: bool) -> None:
        """Answer the confirmation prompt of a pending delete."""
        if confirmed:
            self.confirm_delete(index)
        else:
            self.cancel_delete(index)

    # --- Product selection ----------------------------------------------------

    def select_product(self, product_id: str | None, index: int) -> None:
        """Fill the row at *index* from the catalog, or clear its product.

        Resolution is asynchronous.  Only the most recent request is ever
        applied; a completion whose tag no longer matches is dropped.  If
        the product asked for is the one resolved last, its cached copy is
        applied right away and a forced re-fetch refreshes it.
        """
        if not product_id:
            # a lookup still in flight must not bring the product back
            self._pending_product = None
            self.edit(index, ClearProduct())
            return

        target = self._item_at(index)
        self._request_sequence += 1
        request = _ProductRequest(
            sequence=self._request_sequence,
            product_id=product_id,
            index=index,
            target_id=target.unique_id,
        )
        self._pending_product = request
        self.product_error = None

        cached = self._last_product
        force_refresh = cached is not None and cached.id == product_id
        if force_refresh:
            self._apply_product(request, cached)

        self._product_repo.fetch_product(
            product_id,
            on_success=lambda product: self._on_product_resolved(request, product),
            on_error=lambda exc: self._on_product_failed(request, exc),
            force_refresh=force_refresh,
        )

    def _on_product_resolved(self, request: _ProductRequest, product: ProductDetails) -> None:
        if request != self._pending_product:
            logger.debug(
                "Discarding stale product %s for line item %s",
                request.product_id,
                request.target_id,
            )
            return
        self._pending_product = None
        self._last_product = product
        self._apply_product(request, product)

    def _on_product_failed(self, request: _ProductRequest, exc: DomainException) -> None:
        if request != self._pending_product:
            return
        self._pending_product = None
        self.product_error = exc
        logger.warning("Could not load product %s: %s", request.product_id, exc)
        if self._notifier is not None:
            self._notifier.notify(
                Toast(
                    title="Product could not be loaded",
                    message=str(exc),
                    variant=ToastVariant.ERROR,
                    mode=ToastMode.STICKY,
                )
            )

    def _apply_product(self, request: _ProductRequest, product: ProductDetails) -> None:
        index = self._index_of(request.target_id)
        if index is None:
            logger.debug("Line item %s is gone; product not applied", request.target_id)
            return
        self.edit(index, ApplyProduct(product))

    # --- Create-product side flow ---------------------------------------------

    def open_new_product_panel(self, index: int) -> None:
        self._item_at(index)
        self.new_product_request_index = index
        self.is_new_product_panel_open = True

    def close_new_product_panel(self) -> None:
        self.is_new_product_panel_open = False

    def create_product_succeeded(self, product_id: str) -> None:
        """A product was created from the panel; select it like a lookup pick."""
        if self.new_product_request_index is None:
            raise ValidationError("No line item is waiting for a new product")
        self.select_product(product_id, self.new_product_request_index)
        self.close_new_product_panel()

    # --- Internal helpers -----------------------------------------------------

    def _item_at(self, index: int) -> LineItem:
        if not 0 <= index < len(self._items):
            raise IndexError(f"No line item at row {index}")
        return self._items[index]

    def _index_of(self, unique_id: str) -> int | None:
        for i, item in enumerate(self._items):
            if item.unique_id == unique_id:
                return i
        return None

    def _next_unique_id(self) -> str:
        taken = {item.unique_id for item in self._items}
        while True:
            self._unsaved_sequence += 1
            candidate = f"{UNSAVED_PREFIX}{self._unsaved_sequence}"
            if candidate not in taken:
                return candidate

    def _publish(self) -> None:
        snapshot = self.details
        for listener in list(self._listeners):
            listener(snapshot)
