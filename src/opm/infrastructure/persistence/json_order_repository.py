"""JSON-file-backed implementation of OrderRepository.

Every call answers before it returns.  File and decoding problems are
reported through the error callback as ``FetchError`` or ``SaveError``.
"""

from __future__ import annotations

import json
import logging
import uuid
from decimal import Decimal
from pathlib import Path

from opm.domain.exceptions import FetchError, SaveError
from opm.domain.model.order import OrderHeader
from opm.domain.model.records import LineItemRecord, SaveRequest
from opm.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- OrderRepository interface --------------------------------------------

    def fetch_header(self, order_id, on_success, on_error) -> None:
        try:
            raw = self._find_order(self._load_raw(), order_id)
        except FetchError as exc:
            on_error(exc)
            return
        on_success(
            OrderHeader(
                order_id=raw["id"],
                order_number=raw.get("order_number"),
                account_id=raw.get("account_id"),
                account_name=raw.get("account_name"),
            )
        )

    def fetch_line_items(self, order_id, on_success, on_error) -> None:
        try:
            raw = self._find_order(self._load_raw(), order_id)
            records = [self._to_record(i) for i in raw.get("items", [])]
        except FetchError as exc:
            on_error(exc)
            return
        except (KeyError, ArithmeticError, TypeError, ValueError) as exc:
            on_error(FetchError(f"Order '{order_id}' has a malformed line item: {exc}"))
            return
        on_success(records)

    def save_line_items(self, order_id, request: SaveRequest, on_success, on_error) -> None:
        try:
            orders = self._load_raw()
            raw = self._find_order(orders, order_id)
            raw["items"] = self._apply(order_id, raw.get("items", []), request)
            self._persist_raw(orders)
        except (FetchError, SaveError) as exc:
            on_error(SaveError(str(exc)))
            return
        except OSError as exc:
            on_error(SaveError(f"Could not write {self._file_path.name}: {exc}"))
            return
        logger.info(
            "Order %s saved: %d upsert(s), %d delete(s)",
            order_id,
            len(request.items_to_upsert),
            len(request.items_to_delete),
        )
        on_success()

    # --- Write helpers --------------------------------------------------------

    def _apply(self, order_id: str, items: list[dict], request: SaveRequest) -> list[dict]:
        """Validate the whole batch first, then build the new row list."""
        by_id = {i["id"]: i for i in items}

        for item_id in request.items_to_delete:
            if item_id not in by_id:
                raise SaveError(f"Line item '{item_id}' does not exist in order '{order_id}'")
        for record in request.items_to_upsert:
            if record.id is not None and record.id not in by_id:
                raise SaveError(f"Line item '{record.id}' does not exist in order '{order_id}'")
            if record.id in request.items_to_delete:
                raise SaveError(f"Line item '{record.id}' cannot be both saved and deleted")

        deleted = set(request.items_to_delete)
        result = [i for i in items if i["id"] not in deleted]
        positions = {i["id"]: n for n, i in enumerate(result)}

        for record in request.items_to_upsert:
            if record.id is None:
                record_id = f"li-{uuid.uuid4().hex[:12]}"
                result.append(self._to_raw(record, record_id))
            else:
                result[positions[record.id]] = self._to_raw(record, record.id)
        return result

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(record: LineItemRecord, record_id: str) -> dict:
        def dec(value: Decimal | None) -> str | None:
            return None if value is None else str(value)

        return {
            "id": record_id,
            "product_id": record.product_id,
            "quantity": record.quantity,
            "unit_price": dec(record.unit_price),
            "handling_price": dec(record.handling_price),
            "depth": dec(record.depth),
            "width": dec(record.width),
            "height": dec(record.height),
            "delivery_type": record.delivery_type,
            "total_price": dec(record.total_price),
        }

    @staticmethod
    def _to_record(raw: dict) -> LineItemRecord:
        def dec(key: str) -> Decimal | None:
            value = raw.get(key)
            if value is None:
                return None
            number = Decimal(str(value))
            if not number.is_finite():
                raise ValueError(f"{key} is not a finite number")
            return number

        return LineItemRecord(
            id=raw["id"],
            product_id=raw.get("product_id"),
            quantity=raw.get("quantity"),
            unit_price=dec("unit_price"),
            handling_price=dec("handling_price") or Decimal("0"),
            depth=dec("depth"),
            width=dec("width"),
            height=dec("height"),
            delivery_type=raw.get("delivery_type"),
            total_price=dec("total_price"),
        )

    # --- File helpers ---------------------------------------------------------

    @staticmethod
    def _find_order(orders: list[dict], order_id: str) -> dict:
        for raw in orders:
            if raw["id"] == order_id:
                return raw
        raise FetchError(f"Order '{order_id}' not found")

    def _load_raw(self) -> list[dict]:
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise FetchError(f"Could not read {self._file_path.name}: {exc}") from exc

    def _persist_raw(self, orders: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(orders, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
