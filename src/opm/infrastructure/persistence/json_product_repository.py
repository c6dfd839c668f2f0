"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

from opm.domain.exceptions import FetchError, ValidationError
from opm.domain.model.product import ProductDetails
from opm.domain.repository.product_repository import ProductRepository


class JsonProductRepository(ProductRepository):
    """Reads ``products.json``; remembers products it already served."""

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._cache: dict[str, ProductDetails] = {}
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    def fetch_product(self, product_id, on_success, on_error, force_refresh=False) -> None:
        if not force_refresh and product_id in self._cache:
            on_success(self._cache[product_id])
            return
        try:
            product = self._load().get(product_id)
        except (OSError, json.JSONDecodeError) as exc:
            on_error(FetchError(f"Could not read {self._file_path.name}: {exc}"))
            return
        except (KeyError, ArithmeticError, ValueError) as exc:
            on_error(FetchError(f"{self._file_path.name} has a malformed product: {exc}"))
            return
        if product is None:
            on_error(FetchError(f"Product '{product_id}' not found"))
            return
        self._cache[product_id] = product
        on_success(product)

    def list_all(self) -> list[ProductDetails]:
        return list(self._load().values())

    def create_product(self, product: ProductDetails) -> ProductDetails:
        if not product.id or not product.id.strip():
            raise ValidationError("Product ID is required")
        if not product.name or not product.name.strip():
            raise ValidationError("Product name is required")
        products = self._load()
        if product.id in products:
            raise ValidationError(f"Product '{product.id}' already exists")
        products[product.id] = product
        self._persist(products)
        return product

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, ProductDetails]:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))

        def dec(item: dict, key: str) -> Decimal | None:
            value = item.get(key)
            if value is None:
                return None
            number = Decimal(str(value))
            if not number.is_finite():
                raise ValueError(f"{key} of product {item.get('id')!r} is not a finite number")
            return number

        return {
            item["id"]: ProductDetails(
                id=item["id"],
                name=item["name"],
                product_code=item.get("product_code"),
                product_sku=item.get("product_sku"),
                description=item.get("description"),
                category=item.get("category"),
                depth=dec(item, "depth"),
                width=dec(item, "width"),
                height=dec(item, "height"),
                finish=item.get("finish"),
                is_active=item.get("is_active", True),
            )
            for item in raw
        }

    def _persist(self, products: dict[str, ProductDetails]) -> None:
        def dec(value: Decimal | None) -> str | None:
            return None if value is None else str(value)

        raw = [
            {
                "id": p.id,
                "name": p.name,
                "product_code": p.product_code,
                "product_sku": p.product_sku,
                "description": p.description,
                "category": p.category,
                "depth": dec(p.depth),
                "width": dec(p.width),
                "height": dec(p.height),
                "finish": p.finish,
                "is_active": p.is_active,
            }
            for p in products.values()
        ]
        self._file_path.write_text(
            json.dumps(raw, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
