"""Bulk inventory import from a curator's CSV stock feed.

Three phases, all or nothing:

1. Validation. Every line is parsed and every structural problem is
   collected. Any problem rejects the whole file with the full list.
2. Resolution. Every referenced slug must name a product owned by the
   curator. Unknown or foreign slugs reject the whole file.
3. Apply. Each row upserts the variant keyed by (product, size, color)
   inside the handler's unit of work.
"""

import csv
from dataclasses import dataclass

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from marketplace.catalogue.product.product import Product
from marketplace.domain import marketplace

logger = structlog.get_logger(__name__)

CSV_HEADER = ["productSlug", "size", "color", "stock", "sku"]
MIN_COLUMNS = 4


@dataclass(frozen=True)
class InventoryRow:
    line: int
    product_slug: str
    size: str
    color: str
    stock: int
    sku: str | None = None


def _parse_stock(raw: str) -> int | None:
    try:
        value = int(raw)
    except ValueError:
        return None
    return value if value >= 0 else None


def parse_inventory_csv(payload: str) -> list[InventoryRow]:
    """Parse and validate a stock feed, raising one ValidationError listing every bad line."""
    lines = (payload or "").strip().splitlines()
    if len(lines) < 2:
        raise ValidationError({"csv_data": ["CSV must contain at least a header and one data row"]})

    rows: list[InventoryRow] = []
    errors: list[str] = []

    # Line 1 is the header
    for line_number, text in enumerate(lines[1:], start=2):
        if not text.strip():
            continue

        fields = [field.strip() for field in next(csv.reader([text]))]
        if len(fields) < MIN_COLUMNS:
            errors.append(f"Line {line_number}: Invalid format - expected at least {MIN_COLUMNS} columns")
            continue

        slug, size, color, stock_raw = fields[:MIN_COLUMNS]
        sku = fields[4] if len(fields) > 4 else ""

        if not (slug and size and color and stock_raw):
            errors.append(f"Line {line_number}: Missing required fields (productSlug, size, color, or stock)")
            continue

        stock = _parse_stock(stock_raw)
        if stock is None:
            errors.append(
                f"Line {line_number}: Invalid stock quantity '{stock_raw}' - must be a non-negative number"
            )
            continue

        rows.append(InventoryRow(line_number, slug, size, color, stock, sku or None))

    if errors:
        raise ValidationError({"rows": errors})
    if not rows:
        raise ValidationError({"csv_data": ["No valid data found in CSV"]})
    return rows


@marketplace.command(part_of="Product")
class ImportInventory:
    curator_id: Identifier(required=True)
    csv_data: Text(required=True)


@marketplace.command_handler(part_of=Product)
class ImportInventoryHandler:
    @handle(ImportInventory)
    def import_inventory(self, command):
        rows = parse_inventory_csv(command.csv_data)

        repo = current_domain.repository_for(Product)
        slugs = list(dict.fromkeys(row.product_slug for row in rows))
        owned = repo.find_by_slugs(command.curator_id, slugs)

        missing = [slug for slug in slugs if slug not in owned]
        if missing:
            raise ValidationError(
                {"products": [f"Products not found or not owned by you: {', '.join(missing)}"]}
            )

        products = {slug: repo.get(product.id) for slug, product in owned.items()}

        created = 0
        for row in rows:
            _, was_created = products[row.product_slug].upsert_variant(
                size=row.size,
                color=row.color,
                stock_quantity=row.stock,
                sku=row.sku,
            )
            created += int(was_created)

        for product in products.values():
            repo.add(product)

        summary = {
            "total_processed": len(rows),
            "created": created,
            "updated": len(rows) - created,
        }
        logger.info("Inventory imported", curator_id=str(command.curator_id), **summary)
        return summary
