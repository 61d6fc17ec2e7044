"""Catalogue lookup factory.

Provides get_catalogue() / set_catalogue() to swap implementations.
FakeCatalogue is the default until a deployment installs a real adapter.
"""

from checkout.catalogue.fake_adapter import FakeCatalogue
from checkout.catalogue.port import CatalogueLookup

_current_catalogue: CatalogueLookup | None = None


def get_catalogue() -> CatalogueLookup:
    """Return the current catalogue lookup. Defaults to FakeCatalogue."""
    global _current_catalogue
    if _current_catalogue is None:
        _current_catalogue = FakeCatalogue()
    return _current_catalogue


def set_catalogue(catalogue: CatalogueLookup) -> None:
    """Override the active catalogue lookup (useful for tests)."""
    global _current_catalogue
    _current_catalogue = catalogue


def reset_catalogue() -> None:
    """Reset to default catalogue."""
    global _current_catalogue
    _current_catalogue = None
