"""Application tests for product commands processed through the domain."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

from marketplace.catalogue.product.details import UpdateProduct
from marketplace.catalogue.product.lifecycle import ActivateProduct, DeactivateProduct
from marketplace.catalogue.product.product import Product
from marketplace.catalogue.product.variants import InitializeProductVariants, RemoveVariant, UpsertVariant


def _get(product_id):
    return current_domain.repository_for(Product).get(product_id)


class TestCreateProduct:
    def test_product_is_persisted_with_variants(self, make_product):
        product_id = make_product(stock=10, sizes="S,M", colors="Black,White")

        product = _get(product_id)
        assert product.curator_id == "curator-1"
        assert len(product.variants) == 4
        assert product.stock_quantity == 10

    def test_non_positive_price_is_rejected(self, make_product):
        with pytest.raises(ValidationError):
            make_product(price=0)


class TestUpdateProduct:
    def test_details_update(self, make_product):
        product_id = make_product()
        current_domain.process(
            UpdateProduct(product_id=product_id, curator_id="curator-1", title="Heavy Tee", price=30.0),
            asynchronous=False,
        )
        product = _get(product_id)
        assert product.title == "Heavy Tee"
        assert product.price == 30.0

    def test_option_change_keeps_surviving_variant_stock(self, make_product):
        product_id = make_product(stock=4, sizes="S,M", colors="Red")
        current_domain.process(
            UpsertVariant(product_id=product_id, curator_id="curator-1", size="S", color="Red", stock_quantity=1),
            asynchronous=False,
        )

        current_domain.process(
            UpdateProduct(product_id=product_id, curator_id="curator-1", sizes="S,L", stock_quantity=7),
            asynchronous=False,
        )

        product = _get(product_id)
        assert product.find_variant("S", "Red").stock_quantity == 1
        assert product.find_variant("M", "Red") is None
        assert product.find_variant("L", "Red").stock_quantity == 6
        assert product.stock_quantity == 7

    def test_adding_colors_later_uses_sizes_given_at_creation(self, make_product):
        product_id = make_product(stock=4, sizes="S,M")

        current_domain.process(
            UpdateProduct(product_id=product_id, curator_id="curator-1", colors="Red"),
            asynchronous=False,
        )

        product = _get(product_id)
        assert [v.key for v in product.variants] == [("S", "Red"), ("M", "Red")]
        assert [v.stock_quantity for v in product.variants] == [2, 2]
        assert product.stock_quantity == 4

    def test_stock_only_update_on_simple_product(self, make_product):
        product_id = make_product(stock=1)
        current_domain.process(
            UpdateProduct(product_id=product_id, curator_id="curator-1", stock_quantity=12),
            asynchronous=False,
        )
        assert _get(product_id).stock_quantity == 12

    def test_other_curator_sees_not_found(self, make_product):
        product_id = make_product()
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(
                UpdateProduct(product_id=product_id, curator_id="curator-2", title="Stolen"),
                asynchronous=False,
            )
        assert _get(product_id).title == "Tee"


class TestLifecycleCommands:
    def test_deactivate_and_activate(self, make_product):
        product_id = make_product()

        current_domain.process(DeactivateProduct(product_id=product_id, curator_id="curator-1"), asynchronous=False)
        assert _get(product_id).is_active is False

        current_domain.process(ActivateProduct(product_id=product_id, curator_id="curator-1"), asynchronous=False)
        assert _get(product_id).is_active is True


class TestVariantCommands:
    def test_upsert_reports_created_then_updated(self, make_product):
        product_id = make_product(stock=0)
        command = dict(product_id=product_id, curator_id="curator-1", size="M", color="Black")

        first = current_domain.process(UpsertVariant(stock_quantity=3, **command), asynchronous=False)
        second = current_domain.process(UpsertVariant(stock_quantity=8, **command), asynchronous=False)

        assert first["created"] is True
        assert second["created"] is False
        assert first["variant_id"] == second["variant_id"]
        product = _get(product_id)
        assert len(product.variants) == 1
        assert product.stock_quantity == 8

    def test_initialize_with_total_stock(self, make_product):
        product_id = make_product(stock=0)
        count = current_domain.process(
            InitializeProductVariants(
                product_id=product_id,
                curator_id="curator-1",
                sizes="S,M",
                colors="Red,Blue",
                total_stock=10,
            ),
            asynchronous=False,
        )
        assert count == 4
        assert [v.stock_quantity for v in _get(product_id).variants] == [4, 2, 2, 2]

    def test_initialize_with_stock_per_variant(self, make_product):
        product_id = make_product(stock=0)
        current_domain.process(
            InitializeProductVariants(
                product_id=product_id,
                curator_id="curator-1",
                sizes="S,M,L",
                colors="Red",
                stock_per_variant=2,
            ),
            asynchronous=False,
        )
        product = _get(product_id)
        assert [v.stock_quantity for v in product.variants] == [2, 2, 2]
        assert product.stock_quantity == 6

    def test_initialize_requires_exactly_one_stock_mode(self, make_product):
        product_id = make_product()
        with pytest.raises(ValidationError) as exc:
            current_domain.process(
                InitializeProductVariants(
                    product_id=product_id,
                    curator_id="curator-1",
                    sizes="S",
                    colors="Red",
                    stock_per_variant=1,
                    total_stock=1,
                ),
                asynchronous=False,
            )
        assert "stock" in exc.value.messages

    def test_remove_variant(self, make_product):
        product_id = make_product(stock=4, sizes="S,M", colors="Red")
        variant = _get(product_id).find_variant("M", "Red")

        current_domain.process(
            RemoveVariant(product_id=product_id, curator_id="curator-1", variant_id=variant.id),
            asynchronous=False,
        )

        product = _get(product_id)
        assert [v.key for v in product.variants] == [("S", "Red")]
        assert product.stock_quantity == 2
