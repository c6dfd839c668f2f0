"""Abstract repository for the product catalog."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from opm.domain.exceptions import DomainException
from opm.domain.model.product import ProductDetails


class ProductRepository(ABC):

    @abstractmethod
    def fetch_product(
        self,
        product_id: str,
        on_success: Callable[[ProductDetails], None],
        on_error: Callable[[DomainException], None],
        force_refresh: bool = False,
    ) -> None:
        """Deliver the details of one product.

        ``force_refresh`` bypasses any cache the implementation keeps.
        """

    @abstractmethod
    def list_all(self) -> list[ProductDetails]:
        """Return every product in the catalog."""

    @abstractmethod
    def create_product(self, product: ProductDetails) -> ProductDetails:
        """Add a product to the catalog and return it as stored."""
