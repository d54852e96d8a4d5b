"""Custom queries for the Product aggregate."""

from protean.exceptions import ObjectNotFoundError

from marketplace.catalogue.product.product import Product
from marketplace.domain import marketplace


@marketplace.repository(part_of=Product)
class ProductRepository:
    def get_owned(self, product_id, curator_id) -> Product:
        """Load a product, treating another curator's product as missing."""
        product = self.get(product_id)
        if str(product.curator_id) != str(curator_id):
            raise ObjectNotFoundError(f"Product with identifier {product_id} does not exist.")
        return product

    def for_curator(self, curator_id) -> list[Product]:
        return self._dao.query.filter(curator_id=str(curator_id)).all().items

    def find_by_slugs(self, curator_id, slugs) -> dict[str, Product]:
        """Map each slug in ``slugs`` owned by ``curator_id`` to its product."""
        wanted = set(slugs)
        return {p.slug: p for p in self.for_curator(curator_id) if p.slug in wanted}
