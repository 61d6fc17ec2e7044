"""In-memory catalogue for development and testing.

Products are registered explicitly. The lookup can be configured to fail,
which simulates the catalogue service timing out.
"""

from checkout.catalogue.port import CatalogueLookup, ProductSnapshot
from checkout.exceptions import StoreUnavailable


class FakeCatalogue(CatalogueLookup):
    """Configurable in-memory catalogue."""

    def __init__(self) -> None:
        self.products: dict[str, ProductSnapshot] = {}
        self.should_succeed: bool = True
        self.lookups: list[str] = []

    def configure(self, should_succeed: bool) -> None:
        self.should_succeed = should_succeed

    def register(
        self,
        product_id: str,
        vendor_id: str,
        title: str,
        price: float,
        image: str | None = None,
    ) -> ProductSnapshot:
        product = ProductSnapshot(
            product_id=str(product_id),
            vendor_id=str(vendor_id),
            title=title,
            price=price,
            image=image,
        )
        self.products[product.product_id] = product
        return product

    def get_product(self, product_id: str) -> ProductSnapshot | None:
        self.lookups.append(str(product_id))
        if not self.should_succeed:
            raise StoreUnavailable("Catalogue lookup timed out")
        return self.products.get(str(product_id))
