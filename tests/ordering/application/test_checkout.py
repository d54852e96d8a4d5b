"""Checkout: splitting, commission, stock decrement and all-or-nothing behaviour."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

from marketplace.catalogue.product.lifecycle import DeactivateProduct
from marketplace.catalogue.product.product import Product
from marketplace.ordering.cart.cart import Cart
from marketplace.ordering.cart.items import AddToCart
from marketplace.ordering.checkout import placement
from marketplace.ordering.checkout.placement import PlaceOrder
from marketplace.ordering.order.order import Order, OrderStatus
from marketplace.payments.management import UpdatePaymentSettings
from marketplace.shared.errors import InsufficientStockError


def _product(product_id):
    return current_domain.repository_for(Product).get(product_id)


def _order(order_id):
    return current_domain.repository_for(Order).get(order_id)


def _orders_for(buyer_id):
    return current_domain.repository_for(Order).for_buyer(buyer_id)


class TestTwoCuratorCheckout:
    def test_one_order_per_curator(self, make_product, checkout):
        tee = make_product(curator_id="curator-a", slug="tee", price=20.0, stock=10, sizes="M", colors="Black")
        cap = make_product(curator_id="curator-b", slug="cap", title="Cap", price=15.5, stock=4)

        order_ids = checkout(
            [
                {"product_id": tee, "quantity": 2, "size": "M", "color": "Black"},
                {"product_id": cap, "quantity": 1},
            ]
        )

        assert len(order_ids) == 2
        first, second = (_order(order_id) for order_id in order_ids)
        assert (first.curator_id, second.curator_id) == ("curator-a", "curator-b")
        assert first.status == OrderStatus.PENDING.value
        assert first.total_amount == 40.0
        assert first.commission_amount == 4.0
        assert first.curator_amount == 36.0
        assert second.total_amount == 15.5
        assert second.commission_amount == 1.55
        assert second.curator_amount == 13.95

    def test_stock_is_decremented_at_both_levels(self, make_product, checkout):
        tee = make_product(stock=10, sizes="M,L", colors="Black")
        checkout([{"product_id": tee, "quantity": 3, "size": "M", "color": "Black"}])

        product = _product(tee)
        assert product.find_variant("M", "Black").stock_quantity == 2
        assert product.find_variant("L", "Black").stock_quantity == 5
        assert product.stock_quantity == 7

    def test_items_keep_the_price_paid(self, make_product, checkout):
        tee = make_product(price=20.0, stock=5)
        (order_id,) = checkout([{"product_id": tee, "quantity": 1}])

        product = _product(tee)
        product.update_details(price=99.0)
        current_domain.repository_for(Product).add(product)

        assert _order(order_id).items[0].unit_price == 20.0

    def test_commission_rate_comes_from_settings(self, make_product, checkout):
        current_domain.process(UpdatePaymentSettings(admin_id="admin-1", commission_rate=0.25), asynchronous=False)
        tee = make_product(price=10.0, stock=5)

        (order_id,) = checkout([{"product_id": tee, "quantity": 1}])

        order = _order(order_id)
        assert order.commission_rate == 0.25
        assert order.commission_amount == 2.5
        assert order.curator_amount == 7.5

    def test_cart_is_cleared(self, make_product, checkout):
        tee = make_product(stock=5)
        current_domain.process(AddToCart(buyer_id="buyer-1", product_id=tee, quantity=1), asynchronous=False)

        checkout([{"product_id": tee, "quantity": 1}])

        assert current_domain.repository_for(Cart).for_buyer("buyer-1").lines == []


class TestAllOrNothing:
    def test_second_bucket_short_of_stock_leaves_everything_untouched(self, make_product, checkout):
        tee = make_product(curator_id="curator-a", slug="tee", stock=10, sizes="M", colors="Black")
        cap = make_product(curator_id="curator-b", slug="cap", title="Cap", stock=1)
        current_domain.process(AddToCart(buyer_id="buyer-1", product_id=tee, quantity=2), asynchronous=False)

        with pytest.raises(InsufficientStockError) as exc:
            checkout(
                [
                    {"product_id": tee, "quantity": 2, "size": "M", "color": "Black"},
                    {"product_id": cap, "quantity": 3},
                ]
            )

        assert str(exc.value) == "Insufficient stock for product: Cap. Available: 1"
        assert _orders_for("buyer-1") == []
        assert _product(tee).find_variant("M", "Black").stock_quantity == 10
        assert _product(tee).stock_quantity == 10
        assert _product(cap).stock_quantity == 1
        assert len(current_domain.repository_for(Cart).for_buyer("buyer-1").lines) == 1

    def test_inactive_product_fails_the_whole_checkout(self, make_product, checkout):
        tee = make_product(stock=5)
        cap = make_product(slug="cap", stock=5)
        current_domain.process(DeactivateProduct(product_id=cap, curator_id="curator-1"), asynchronous=False)

        with pytest.raises(ObjectNotFoundError):
            checkout([{"product_id": tee, "quantity": 1}, {"product_id": cap, "quantity": 1}])

        assert _product(tee).stock_quantity == 5
        assert _orders_for("buyer-1") == []

    def test_missing_product(self, checkout):
        with pytest.raises(ObjectNotFoundError):
            checkout([{"product_id": "ghost", "quantity": 1}])


class TestStockRecheck:
    def test_sequential_checkouts_cannot_oversell(self, make_product, checkout):
        tee = make_product(stock=5, sizes="M", colors="Black")
        line = {"product_id": tee, "quantity": 3, "size": "M", "color": "Black"}

        checkout([line], buyer_id="buyer-1")
        with pytest.raises(InsufficientStockError) as exc:
            checkout([line], buyer_id="buyer-2")

        assert exc.value.available == 2
        assert _product(tee).find_variant("M", "Black").stock_quantity == 2
        assert len(_orders_for("buyer-2")) == 0

    def test_checkout_working_on_a_stale_read_reports_remaining_stock(self, make_product, checkout, monkeypatch):
        tee = make_product(stock=5, sizes="S", colors="Red")
        line = {"product_id": tee, "quantity": 3, "size": "S", "color": "Red"}
        stale = {tee: _product(tee)}

        checkout([line], buyer_id="buyer-1")
        # The second checkout read the product before the first one committed
        monkeypatch.setattr(placement, "_load_purchasable", lambda repo, lines: stale)
        with pytest.raises(InsufficientStockError) as exc:
            checkout([line], buyer_id="buyer-2")

        assert exc.value.available == 2
        assert str(exc.value) == "Insufficient stock for product: Tee. Available: 2"
        product = _product(tee)
        assert product.stock_quantity == 2
        assert product.find_variant("S", "Red").stock_quantity == 2
        assert len(_orders_for("buyer-2")) == 0

    def test_demand_is_aggregated_across_lines(self, make_product, checkout):
        tee = make_product(stock=3)
        with pytest.raises(InsufficientStockError):
            checkout([{"product_id": tee, "quantity": 2}, {"product_id": tee, "quantity": 2}])
        assert _product(tee).stock_quantity == 3

    def test_unknown_variant_has_no_stock(self, make_product, checkout):
        tee = make_product(stock=5, sizes="M", colors="Black")
        with pytest.raises(InsufficientStockError):
            checkout([{"product_id": tee, "quantity": 1, "size": "XL", "color": "Black"}])


class TestPaymentMethods:
    def test_disabled_wallet(self, make_product, checkout):
        tee = make_product(stock=5)
        with pytest.raises(ValidationError) as exc:
            checkout([{"product_id": tee, "quantity": 1}], payment_method="yape", transaction_code="YP-1")
        assert exc.value.messages == {"payment_method": ["Payment method yape is not enabled"]}

    def test_unknown_method(self, make_product, checkout):
        tee = make_product(stock=5)
        with pytest.raises(ValidationError) as exc:
            checkout([{"product_id": tee, "quantity": 1}], payment_method="cash")
        assert exc.value.messages == {"payment_method": ["Invalid payment method: cash"]}

    def test_wallet_needs_transaction_code(self, make_product, checkout, enable_wallets):
        enable_wallets()
        tee = make_product(stock=5)
        with pytest.raises(ValidationError) as exc:
            checkout([{"product_id": tee, "quantity": 1}], payment_method="plin", transaction_code="  ")
        assert "transaction_code" in exc.value.messages
        assert _product(tee).stock_quantity == 5

    def test_wallet_order_awaits_verification(self, make_product, checkout, enable_wallets):
        enable_wallets()
        tee = make_product(stock=5)

        (order_id,) = checkout([{"product_id": tee, "quantity": 1}], payment_method="yape", transaction_code="YP-1")

        order = _order(order_id)
        assert order.status == OrderStatus.PENDING_VERIFICATION.value
        assert order.transaction_code == "YP-1"


class TestRequestValidation:
    def test_empty_items(self, checkout):
        with pytest.raises(ValidationError) as exc:
            checkout([])
        assert "items" in exc.value.messages

    def test_zero_quantity(self, make_product, checkout):
        tee = make_product(stock=5)
        with pytest.raises(ValidationError):
            checkout([{"product_id": tee, "quantity": 0}])

    def test_incomplete_address(self, make_product, shipping_address):
        tee = make_product(stock=5)
        shipping_address.pop("city")
        with pytest.raises(ValidationError):
            current_domain.process(
                PlaceOrder(
                    buyer_id="buyer-1",
                    items=json.dumps([{"product_id": tee, "quantity": 1}]),
                    shipping_address=json.dumps(shipping_address),
                    payment_method="stripe",
                ),
                asynchronous=False,
            )
        assert _product(tee).stock_quantity == 5
