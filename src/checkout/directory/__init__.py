"""Shopper directory factory: get_directory() / set_directory()."""

from checkout.directory.fake_adapter import FakeDirectory
from checkout.directory.port import ShopperDirectory

_current_directory: ShopperDirectory | None = None


def get_directory() -> ShopperDirectory:
    """Return the current shopper directory. Defaults to FakeDirectory."""
    global _current_directory
    if _current_directory is None:
        _current_directory = FakeDirectory()
    return _current_directory


def set_directory(directory: ShopperDirectory) -> None:
    global _current_directory
    _current_directory = directory


def reset_directory() -> None:
    global _current_directory
    _current_directory = None
