"""Typed edit operations for a single line item.

Each edit knows which fields it touches.  The store merges the result of
``changes()`` into the row and recomputes the total in the same step.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Union

from opm.domain.exceptions import ValidationError
from opm.domain.model.product import ProductDetails


@dataclass(frozen=True)
class SetQuantity:
    qty: int | None

    def changes(self) -> dict:
        return {"qty": self.qty}


@dataclass(frozen=True)
class SetUnitPrice:
    unit_price: Decimal | None

    def changes(self) -> dict:
        return {"unit_price": self.unit_price}


@dataclass(frozen=True)
class SetHandlingPrice:
    handling_price: Decimal | None

    def changes(self) -> dict:
        # an emptied handling field means "no handling charge"
        return {"handling_price": self.handling_price or Decimal("0")}


@dataclass(frozen=True)
class SetDepth:
    depth: Decimal | None

    def changes(self) -> dict:
        return {"depth": self.depth}


@dataclass(frozen=True)
class SetWidth:
    width: Decimal | None

    def changes(self) -> dict:
        return {"width": self.width}


@dataclass(frozen=True)
class SetHeight:
    height: Decimal | None

    def changes(self) -> dict:
        return {"height": self.height}


@dataclass(frozen=True)
class SetDeliveryType:
    delivery_type: str | None

    def changes(self) -> dict:
        return {"delivery_type": self.delivery_type}


@dataclass(frozen=True)
class ApplyProduct:
    """Copy a resolved product's attributes into the row."""

    product: ProductDetails

    def changes(self) -> dict:
        return self.product.as_line_item_fields()


@dataclass(frozen=True)
class ClearProduct:
    """The product lookup was emptied; only the reference is cleared."""

    def changes(self) -> dict:
        return {"product_id": None}


FieldEdit = Union[
    SetQuantity,
    SetUnitPrice,
    SetHandlingPrice,
    SetDepth,
    SetWidth,
    SetHeight,
    SetDeliveryType,
    ApplyProduct,
    ClearProduct,
]


# ---------------------------------------------------------------------------
# Parsing raw "field=value" input (CLI)
# ---------------------------------------------------------------------------


def _to_int(raw: str) -> int | None:
    if raw == "":
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValidationError(f"Invalid whole number: {raw!r}") from exc


def _to_decimal(raw: str) -> Decimal | None:
    if raw == "":
        return None
    try:
        value = Decimal(raw)
    except InvalidOperation as exc:
        raise ValidationError(f"Invalid number: {raw!r}") from exc
    if not value.is_finite():
        raise ValidationError(f"Invalid number: {raw!r}")
    return value


_PARSERS = {
    "qty": lambda raw: SetQuantity(_to_int(raw)),
    "unit_price": lambda raw: SetUnitPrice(_to_decimal(raw)),
    "handling_price": lambda raw: SetHandlingPrice(_to_decimal(raw)),
    "depth": lambda raw: SetDepth(_to_decimal(raw)),
    "width": lambda raw: SetWidth(_to_decimal(raw)),
    "height": lambda raw: SetHeight(_to_decimal(raw)),
    "delivery_type": lambda raw: SetDeliveryType(raw or None),
}

EDITABLE_FIELDS = tuple(_PARSERS)


def parse_edit(field_name: str, raw: str) -> FieldEdit:
    """Turn a ``field=value`` pair typed by the user into a typed edit.

    An empty value clears the field.
    """
    parser = _PARSERS.get(field_name.strip().lower().replace("-", "_"))
    if parser is None:
        raise ValidationError(
            f"Unknown field '{field_name}'. "
            f"Expected one of: {', '.join(EDITABLE_FIELDS)}"
        )
    return parser(raw.strip())
