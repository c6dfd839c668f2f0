"""In-memory fakes for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in memory.  By default every call answers before it
returns; with ``deferred=True`` the callbacks are parked so a test can
complete them later, in any order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable

from opm.application.notifications import ContainerSignals, Notifier, Toast
from opm.domain.exceptions import FetchError, SaveError, ValidationError
from opm.domain.model.order import OrderHeader
from opm.domain.model.product import ProductDetails
from opm.domain.model.records import LineItemRecord, SaveRequest
from opm.domain.repository.order_repository import OrderRepository
from opm.domain.repository.product_repository import ProductRepository


def make_record(
    record_id: str = "802-1",
    product_id: str | None = "01t-DESK",
    quantity: int | None = 2,
    unit_price: str | None = "10",
    handling_price: str = "1",
) -> LineItemRecord:
    return LineItemRecord(
        id=record_id,
        product_id=product_id,
        quantity=quantity,
        unit_price=None if unit_price is None else Decimal(unit_price),
        handling_price=Decimal(handling_price),
        delivery_type="Standard",
    )


def make_product(product_id: str = "01t-DESK", name: str = "Standing Desk", **kw) -> ProductDetails:
    defaults = dict(
        product_code="DSK-100",
        product_sku="SKU-DSK-100",
        description="Height-adjustable standing desk",
        category="Furniture",
        depth=Decimal("30"),
        width=Decimal("60"),
        height=Decimal("48"),
        finish="Walnut",
    )
    defaults.update(kw)
    return ProductDetails(id=product_id, name=name, **defaults)


@dataclass
class PendingCall:
    """A parked request; call ``succeed`` or ``fail`` to finish it."""

    args: tuple
    on_success: Callable
    on_error: Callable
    force_refresh: bool = False

    def succeed(self, *result) -> None:
        self.on_success(*result)

    def fail(self, exc) -> None:
        self.on_error(exc)


class FakeOrderRepository(OrderRepository):

    def __init__(
        self,
        headers: list[OrderHeader] | None = None,
        items: dict[str, list[LineItemRecord]] | None = None,
        save_error: str | None = None,
        deferred_save: bool = False,
    ) -> None:
        self._headers = {h.order_id: h for h in headers or []}
        self._items = {k: list(v) for k, v in (items or {}).items()}
        self.save_error = save_error
        self.deferred_save = deferred_save
        self.save_requests: list[SaveRequest] = []
        self.pending_saves: list[PendingCall] = []

    def fetch_header(self, order_id, on_success, on_error) -> None:
        header = self._headers.get(order_id)
        if header is None:
            on_error(FetchError(f"Order '{order_id}' not found"))
        else:
            on_success(header)

    def fetch_line_items(self, order_id, on_success, on_error) -> None:
        if order_id not in self._items:
            on_error(FetchError(f"Order '{order_id}' not found"))
        else:
            on_success(list(self._items[order_id]))

    def save_line_items(self, order_id, request, on_success, on_error) -> None:
        self.save_requests.append(request)
        if self.deferred_save:
            self.pending_saves.append(PendingCall((order_id, request), on_success, on_error))
        elif self.save_error is not None:
            on_error(SaveError(self.save_error))
        else:
            on_success()


class FakeProductRepository(ProductRepository):

    def __init__(
        self,
        products: list[ProductDetails] | None = None,
        deferred: bool = False,
    ) -> None:
        self._store: dict[str, ProductDetails] = {p.id: p for p in products or []}
        self.deferred = deferred
        self.pending: list[PendingCall] = []
        self.requests: list[tuple[str, bool]] = []

    def fetch_product(self, product_id, on_success, on_error, force_refresh=False) -> None:
        self.requests.append((product_id, force_refresh))
        if self.deferred:
            self.pending.append(PendingCall((product_id,), on_success, on_error, force_refresh))
            return
        product = self._store.get(product_id)
        if product is None:
            on_error(FetchError(f"Product '{product_id}' not found"))
        else:
            on_success(product)

    def list_all(self) -> list[ProductDetails]:
        return list(self._store.values())

    def create_product(self, product: ProductDetails) -> ProductDetails:
        if product.id in self._store:
            raise ValidationError(f"Product '{product.id}' already exists")
        self._store[product.id] = product
        return product


class RecordingNotifier(Notifier):

    def __init__(self) -> None:
        self.toasts: list[Toast] = []

    def notify(self, toast: Toast) -> None:
        self.toasts.append(toast)

    @property
    def last(self) -> Toast:
        return self.toasts[-1]


@dataclass
class RecordingSignals(ContainerSignals):
    events: list[str] = field(default_factory=list)

    def cancel(self) -> None:
        self.events.append("cancel")

    def close(self) -> None:
        self.events.append("close")
