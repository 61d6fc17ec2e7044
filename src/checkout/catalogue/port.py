"""Catalogue lookup port (abstract interface).

The checkout context never owns product data. It asks the catalogue for the
current price, title, image and vendor of a product at the moment a shopper
adds it to the cart, and copies those values onto the cart line.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ProductSnapshot:
    """Read-only view of a catalogue product."""

    product_id: str
    vendor_id: str
    title: str
    price: float
    image: str | None = None


class CatalogueLookup(ABC):
    """Abstract catalogue lookup interface."""

    @abstractmethod
    def get_product(self, product_id: str) -> ProductSnapshot | None:
        """Return the product, or None when it does not exist."""
        ...
