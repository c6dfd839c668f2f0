"""Abstract repository for orders and their product rows.

Defined in the domain layer so the domain never depends on
infrastructure.  Every call is asynchronous from the caller's point of
view: the result is delivered exactly once, either to ``on_success`` or
to ``on_error``, possibly before the call returns.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from opm.domain.exceptions import DomainException
from opm.domain.model.order import OrderHeader
from opm.domain.model.records import LineItemRecord, SaveRequest

ErrorCallback = Callable[[DomainException], None]


class OrderRepository(ABC):

    @abstractmethod
    def fetch_header(
        self,
        order_id: str,
        on_success: Callable[[OrderHeader], None],
        on_error: ErrorCallback,
    ) -> None:
        """Deliver the order number and account of *order_id*."""

    @abstractmethod
    def fetch_line_items(
        self,
        order_id: str,
        on_success: Callable[[list[LineItemRecord]], None],
        on_error: ErrorCallback,
    ) -> None:
        """Deliver the order's product rows in display order."""

    @abstractmethod
    def save_line_items(
        self,
        order_id: str,
        request: SaveRequest,
        on_success: Callable[[], None],
        on_error: ErrorCallback,
    ) -> None:
        """Upsert and delete rows in one write.

        Failures are reported as ``SaveError`` with a readable message.
        """
