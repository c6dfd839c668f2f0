"""Application service: Show Order Products use case (query)."""

from __future__ import annotations

from opm.application.dto import LineItemDTO, OrderProductsDTO
from opm.application.line_item_store import LineItemStore
from opm.application.notifications import ContainerSignals, Notifier
from opm.application.order_editor import EditorState, OrderEditor
from opm.domain.exceptions import FetchError
from opm.domain.model.line_item import LineItem
from opm.domain.model.value_objects import Money
from opm.domain.repository.order_repository import OrderRepository
from opm.domain.repository.product_repository import ProductRepository


def open_editor(
    order_id: str,
    order_repo: OrderRepository,
    product_repo: ProductRepository,
    notifier: Notifier,
    signals: ContainerSignals,
) -> OrderEditor:
    """Build an editor for *order_id* and load it.

    Only usable with repositories that answer before returning (the JSON
    files and the test fakes); raises ``FetchError`` if the rows could
    not be loaded.
    """
    store = LineItemStore(product_repo, notifier)
    editor = OrderEditor(order_id, order_repo, store, notifier, signals)
    editor.load()
    if editor.state != EditorState.READY:
        raise FetchError(
            str(editor.last_error) if editor.last_error
            else f"Order '{order_id}' did not finish loading"
        )
    return editor


class ShowOrderProductsHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        notifier: Notifier,
        signals: ContainerSignals,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._notifier = notifier
        self._signals = signals

    def handle(self, order_id: str) -> OrderProductsDTO:
        editor = open_editor(
            order_id,
            self._order_repo,
            self._product_repo,
            self._notifier,
            self._signals,
        )
        return self.to_dto(editor)

    @staticmethod
    def to_dto(editor: OrderEditor) -> OrderProductsDTO:
        return OrderProductsDTO(
            order_id=editor.order_id,
            title=editor.title,
            account_name=(editor.header.account_name or "") if editor.header else "",
            state=editor.state.value,
            items=[
                ShowOrderProductsHandler._item_to_dto(row, item)
                for row, item in enumerate(editor.details.items, start=1)
            ],
            deleted_ids=list(editor.details.deleted_ids),
            subtotal=str(editor.totals.subtotal),
            taxes=str(editor.totals.taxes),
            total=str(editor.totals.total),
        )

    @staticmethod
    def _item_to_dto(row: int, item: LineItem) -> LineItemDTO:
        if item.is_deleting:
            status = "pending delete"
        elif item.is_new:
            status = "new"
        else:
            status = ""
        return LineItemDTO(
            row=row,
            unique_id=item.unique_id,
            product=item.name or item.product_id or "-",
            qty="" if item.qty is None else str(item.qty),
            unit_price="" if item.unit_price is None else str(Money(item.unit_price)),
            handling_price=str(Money(item.handling_price)),
            total_price=str(Money(item.total_price)),
            status=status,
            error_message=item.error_message,
        )
