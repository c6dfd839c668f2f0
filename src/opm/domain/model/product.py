"""Product details as returned by the product catalog.

Products live independently of orders.  Selecting one for a line item
copies its descriptive attributes and dimensions into the row; later
changes to the product do not touch rows that were already filled in.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class ProductDetails:
    """Read-only view of a catalog product."""

    id: str
    name: str
    product_code: str | None = None
    product_sku: str | None = None
    description: str | None = None
    category: str | None = None
    depth: Decimal | None = None
    width: Decimal | None = None
    height: Decimal | None = None
    finish: str | None = None
    is_active: bool = True

    def as_line_item_fields(self) -> dict:
        """Map the product onto the line-item field names it populates."""
        return {
            "product_id": self.id,
            "name": self.name,
            "product_code": self.product_code,
            "product_sku": self.product_sku,
            "description": self.description,
            "category": self.category,
            "depth": self.depth,
            "width": self.width,
            "height": self.height,
            "finish": self.finish,
            "is_active": self.is_active,
        }
