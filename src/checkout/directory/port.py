"""Shopper directory port (abstract interface).

Resolves the authenticated shopper's contact details and saved postal
addresses. Both are snapshotted onto carts and orders by value.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ContactSnapshot:
    user_id: str
    name: str
    email: str
    mobile: str | None = None


@dataclass(frozen=True)
class AddressSnapshot:
    address_id: str
    street: str
    city: str
    state: str | None = None
    landmark: str | None = None
    pincode: str | None = None


class ShopperDirectory(ABC):
    """Abstract shopper directory interface."""

    @abstractmethod
    def get_contact(self, user_id: str) -> ContactSnapshot | None:
        """Return the shopper's contact details, or None for unknown shoppers."""
        ...

    @abstractmethod
    def get_address(self, user_id: str, address_id: str) -> AddressSnapshot | None:
        """Return one of the shopper's saved addresses, or None."""
        ...
