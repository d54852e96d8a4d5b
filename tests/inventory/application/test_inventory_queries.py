"""Availability checks, inventory listing and CSV export."""

from protean import current_domain

from marketplace.inventory.availability import UNAVAILABLE, check_availability, stock_warning
from marketplace.inventory.export import export_inventory_csv, inventory_template, list_inventory
from marketplace.inventory.importer import ImportInventory, parse_inventory_csv


class TestCheckAvailability:
    def test_enough_stock(self, make_product):
        product_id = make_product(stock=4, sizes="S,M", colors="Red")
        result = check_availability(product_id, "S", "Red", 2)
        assert result.available is True
        assert result.stock_quantity == 2
        assert result.variant_id is not None

    def test_not_enough_stock(self, make_product):
        product_id = make_product(stock=4, sizes="S,M", colors="Red")
        result = check_availability(product_id, "M", "Red", 3)
        assert result.available is False
        assert result.stock_quantity == 2

    def test_missing_variant(self, make_product):
        product_id = make_product(stock=4, sizes="S", colors="Red")
        assert check_availability(product_id, "S", "Blue", 1) == UNAVAILABLE

    def test_missing_product(self):
        assert check_availability("nope", "S", "Red", 1) == UNAVAILABLE


class TestListing:
    def test_lists_only_the_curators_products_sorted_by_slug(self, make_product):
        make_product(slug="zebra-tee", stock=2, sizes="S", colors="Red")
        make_product(slug="alpha-tee", stock=1)
        make_product(curator_id="curator-2", slug="other", stock=1)

        listing = list_inventory("curator-1")

        assert [p["slug"] for p in listing] == ["alpha-tee", "zebra-tee"]
        assert listing[1]["variants"][0]["size"] == "S"
        assert listing[0]["variants"] == []


class TestExport:
    def test_export_uses_import_format(self, make_product):
        make_product(slug="tee", stock=3, sizes="S,M", colors="Red")

        exported = export_inventory_csv("curator-1")

        assert exported.splitlines() == [
            "productSlug,size,color,stock,sku",
            "tee,S,Red,2,",
            "tee,M,Red,1,",
        ]

    def test_reimporting_an_export_changes_nothing(self, make_product):
        make_product(slug="tee", stock=3, sizes="S,M", colors="Red")
        exported = export_inventory_csv("curator-1")

        result = current_domain.process(
            ImportInventory(curator_id="curator-1", csv_data=exported),
            asynchronous=False,
        )

        assert result == {"total_processed": 2, "created": 0, "updated": 2}
        assert export_inventory_csv("curator-1") == exported

    def test_template_parses(self):
        rows = parse_inventory_csv(inventory_template())
        assert len(rows) == 3


class TestStockWarning:
    def test_no_warning_when_stock_covers_quantity(self, make_product):
        product_id = make_product(stock=5)

        assert stock_warning(product_id, None, None, 5) is None

    def test_variant_line_exceeding_variant_stock(self, make_product):
        product_id = make_product(stock=4, sizes="S,M", colors="Red")

        assert stock_warning(product_id, "M", "Red", 3) == "Only 2 available"

    def test_missing_variant_is_out_of_stock(self, make_product):
        product_id = make_product(stock=4, sizes="S", colors="Red")

        assert stock_warning(product_id, "XL", "Red", 1) == "This item is out of stock"

    def test_missing_product(self):
        assert stock_warning("nope", None, None, 1) == "This item is no longer available"
