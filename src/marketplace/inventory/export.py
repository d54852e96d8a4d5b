"""Curator inventory listing and CSV export."""

import csv
import io

from protean.utils.globals import current_domain

from marketplace.catalogue.product.product import Product
from marketplace.inventory.importer import CSV_HEADER

TEMPLATE_ROWS = [
    ["example-product-slug", "S", "Red", "10", "SKU-001"],
    ["example-product-slug", "M", "Red", "15", "SKU-002"],
    ["example-product-slug", "L", "Blue", "8", ""],
]


def _curator_products(curator_id) -> list[Product]:
    repo = current_domain.repository_for(Product)
    return sorted(
        (repo.get(p.id) for p in repo.for_curator(curator_id)),
        key=lambda p: p.slug,
    )


def list_inventory(curator_id) -> list[dict]:
    """Every variant of the curator's products, grouped by product."""
    listing = []
    for product in _curator_products(curator_id):
        listing.append(
            {
                "product_id": str(product.id),
                "slug": product.slug,
                "title": product.title,
                "is_active": product.is_active,
                "stock_quantity": product.stock_quantity,
                "variants": [
                    {
                        "variant_id": str(v.id),
                        "size": v.size,
                        "color": v.color,
                        "stock_quantity": v.stock_quantity,
                        "sku": v.sku,
                    }
                    for v in product.variants
                ],
            }
        )
    return listing


def _to_csv(rows) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    writer.writerows(rows)
    return buffer.getvalue()


def export_inventory_csv(curator_id) -> str:
    """Export in the import format; re-importing the output is a no-op."""
    rows = [
        [product.slug, v.size, v.color, v.stock_quantity, v.sku or ""]
        for product in _curator_products(curator_id)
        for v in product.variants
    ]
    return _to_csv(rows)


def inventory_template() -> str:
    return _to_csv(TEMPLATE_ROWS)
