"""Application service: the order products editor.

Composition root of the editing screen.  It loads the order header and
its product rows through the ``OrderRepository`` port, hands the rows to
the ``LineItemStore``, keeps the last snapshot the store broadcast,
recomputes totals on every change and runs validate-then-save.

Lifecycle::

    LOADING --items--> READY --save--> SAVING --ok--> SAVED
       |                 ^               |
       +--fail--> FAILED +--- invalid ---+
                         +-- SAVE_FAILED +
    LOADING/READY --cancel--> CANCELLED
"""

from __future__ import annotations

import logging
from decimal import Decimal
from enum import Enum

from opm.application.line_item_store import LineItemStore
from opm.application.notifications import (
    ContainerSignals,
    Notifier,
    Toast,
    ToastMode,
    ToastVariant,
)
from opm.domain.exceptions import DomainException, ValidationError
from opm.domain.model.line_item import LineItem
from opm.domain.model.order import OrderDetails, OrderHeader
from opm.domain.model.records import LineItemRecord, SaveRequest
from opm.domain.repository.order_repository import OrderRepository
from opm.domain.service.line_item_validator import validate_line_items
from opm.domain.service.totals_calculator import TAX_RATE, OrderTotals, calculate_totals

logger = logging.getLogger(__name__)


class EditorState(Enum):
    LOADING = "LOADING"
    READY = "READY"
    SAVING = "SAVING"
    SAVED = "SAVED"
    SAVE_FAILED = "SAVE_FAILED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


class OrderEditor:

    def __init__(
        self,
        order_id: str,
        order_repo: OrderRepository,
        store: LineItemStore,
        notifier: Notifier,
        signals: ContainerSignals,
        tax_rate: Decimal = TAX_RATE,
    ) -> None:
        self._order_id = order_id
        self._order_repo = order_repo
        self._store = store
        self._notifier = notifier
        self._signals = signals
        self._tax_rate = tax_rate

        self.state = EditorState.LOADING
        self.header: OrderHeader | None = None
        self.details = OrderDetails()
        self.totals = OrderTotals.zero()
        self.is_save_disabled = True
        self.last_error: DomainException | None = None

        self._store.subscribe(self._on_details_changed)

    # --- Read-only view -------------------------------------------------------

    @property
    def order_id(self) -> str:
        return self._order_id

    @property
    def store(self) -> LineItemStore:
        return self._store

    @property
    def title(self) -> str:
        return (self.header or OrderHeader(self._order_id)).title

    @property
    def subtitle(self) -> str:
        return (self.header or OrderHeader(self._order_id)).subtitle

    # --- Loading --------------------------------------------------------------

    def load(self) -> None:
        """Request the header and the product rows."""
        self._order_repo.fetch_header(
            self._order_id, self._on_header_loaded, self._on_header_failed
        )
        self._order_repo.fetch_line_items(
            self._order_id, self._on_items_loaded, self._on_items_failed
        )

    def _on_header_loaded(self, header: OrderHeader) -> None:
        self.header = header

    def _on_header_failed(self, exc: DomainException) -> None:
        logger.warning("Order %s header could not be loaded: %s", self._order_id, exc)
        self._notifier.notify(
            Toast(
                title="Order could not be loaded",
                message=str(exc),
                variant=ToastVariant.WARNING,
            )
        )

    def _on_items_loaded(self, records: list[LineItemRecord]) -> None:
        if self.state != EditorState.LOADING:
            logger.debug("Ignoring line items that arrived in state %s", self.state.value)
            return
        self._store.load(OrderDetails.of(self._to_line_item(r) for r in records))
        self.details = self._store.details
        self._recalculate_totals()
        self._transition(EditorState.READY)

    def _on_items_failed(self, exc: DomainException) -> None:
        if self.state != EditorState.LOADING:
            return
        logger.error("Order %s products could not be loaded: %s", self._order_id, exc)
        self.last_error = exc
        self._notifier.notify(
            Toast(
                title="Order products could not be loaded",
                message=str(exc),
                variant=ToastVariant.ERROR,
                mode=ToastMode.STICKY,
            )
        )
        self._transition(EditorState.FAILED)
        self._signals.cancel()

    # --- Editing --------------------------------------------------------------

    def _on_details_changed(self, details: OrderDetails) -> None:
        self.details = details
        self.is_save_disabled = False
        self._recalculate_totals()

    def _recalculate_totals(self) -> None:
        self.totals = calculate_totals(self.details.items, tax_rate=self._tax_rate)

    # --- Saving ---------------------------------------------------------------

    def save(self) -> bool:
        """Validate the latest rows and, if they pass, send them to be saved.

        Returns True if the persistence call was issued.  Invalid rows are
        annotated in the store and reported; nothing is sent.
        """
        if self.state != EditorState.READY:
            raise ValidationError(
                f"Cannot save while the editor is {self.state.value}"
            )
        if self.is_save_disabled:
            raise ValidationError("There are no changes to save")

        self._transition(EditorState.SAVING)
        latest = self._store.details
        outcome = validate_line_items(latest.items)
        self._store.load(OrderDetails.of(outcome.items, latest.deleted_ids))
        self.details = self._store.details

        if not outcome.is_valid:
            count = len(outcome.invalid_items)
            self._notifier.notify(
                Toast(
                    title="Some products are not valid",
                    message=f"{count} product(s) need attention before saving.",
                    variant=ToastVariant.WARNING,
                )
            )
            self._transition(EditorState.READY)
            return False

        self.is_save_disabled = True
        request = SaveRequest(
            items_to_upsert=tuple(self._to_record(item) for item in outcome.items),
            items_to_delete=tuple(latest.deleted_ids),
        )
        logger.info(
            "Saving order %s: %d upsert(s), %d delete(s)",
            self._order_id,
            len(request.items_to_upsert),
            len(request.items_to_delete),
        )
        self._order_repo.save_line_items(
            self._order_id, request, self._on_saved, self._on_save_failed
        )
        return True

    def _on_saved(self) -> None:
        self._notifier.notify(
            Toast(
                title="Products saved",
                message=f"{self.title} were saved successfully.",
                variant=ToastVariant.SUCCESS,
            )
        )
        self._transition(EditorState.SAVED)
        self._signals.cancel()
        self._signals.close()

    def _on_save_failed(self, exc: DomainException) -> None:
        logger.error("Saving order %s failed: %s", self._order_id, exc)
        self.last_error = exc
        self._notifier.notify(
            Toast(
                title="Products could not be saved",
                message=str(exc),
                variant=ToastVariant.ERROR,
                mode=ToastMode.STICKY,
            )
        )
        self._transition(EditorState.SAVE_FAILED)
        self.is_save_disabled = False
        self._transition(EditorState.READY)

    # --- Cancel ---------------------------------------------------------------

    def cancel(self) -> None:
        """Leave without saving."""
        if self.state not in (EditorState.LOADING, EditorState.READY):
            raise ValidationError(
                f"Cannot cancel while the editor is {self.state.value}"
            )
        self._transition(EditorState.CANCELLED)
        self._signals.cancel()
        self._signals.close()

    # --- Internal helpers -----------------------------------------------------

    def _transition(self, new_state: EditorState) -> None:
        logger.info(
            "Order %s editor: %s -> %s",
            self._order_id,
            self.state.value,
            new_state.value,
        )
        self.state = new_state

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_line_item(record: LineItemRecord) -> LineItem:
        return LineItem(
            unique_id=record.id,  # type: ignore[arg-type]
            product_id=record.product_id,
            qty=record.quantity,
            unit_price=record.unit_price,
            handling_price=record.handling_price or Decimal("0"),
            depth=record.depth,
            width=record.width,
            height=record.height,
            delivery_type=record.delivery_type,
        )

    @staticmethod
    def _to_record(item: LineItem) -> LineItemRecord:
        return LineItemRecord(
            id=None if item.is_new else item.unique_id,
            product_id=item.product_id,
            quantity=item.qty,
            unit_price=item.unit_price,
            handling_price=item.handling_price,
            depth=item.depth,
            width=item.width,
            height=item.height,
            delivery_type=item.delivery_type,
            total_price=item.total_price,
        )
