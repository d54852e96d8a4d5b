"""Checkout: turn a buyer's request into one order per curator.

Everything happens inside one command handler, so inside one unit of
work. Products are loaded fresh, every stock check is made against those
fresh aggregates, and nothing is handed to a repository until every check
has passed. A failure at any point leaves no order behind and no stock
decremented.
"""

import json
from collections import Counter

import structlog
from protean import handle
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.catalogue.product.product import Product
from marketplace.domain import marketplace
from marketplace.ordering.cart.cart import Cart
from marketplace.ordering.checkout.commission import calculate_commission
from marketplace.ordering.checkout.splitter import price_line, split_by_curator
from marketplace.ordering.order.order import Order, OrderItem, ShippingAddress
from marketplace.payments.settings import MANUAL_METHODS, PaymentMethod, get_payment_settings

logger = structlog.get_logger(__name__)

_ADDRESS_FIELDS = ("name", "email", "address", "city", "state", "zip_code", "country", "phone")


@marketplace.command(part_of="Order")
class PlaceOrder:
    buyer_id = Identifier(required=True)
    items = Text(required=True)  # JSON array of {product_id, quantity, size?, color?}
    shipping_address = Text(required=True)  # JSON object
    payment_method = String(required=True, max_length=20)
    transaction_code = String(max_length=100)
    payment_proof = String(max_length=500)


def _clean(value):
    value = (str(value).strip() if value is not None else "")
    return value or None


def parse_checkout_lines(raw) -> list[dict]:
    try:
        data = json.loads(raw) if isinstance(raw, str) else raw
    except json.JSONDecodeError:
        raise ValidationError({"items": ["Items must be a JSON array"]}) from None

    if not isinstance(data, list) or not data:
        raise ValidationError({"items": ["At least one item is required"]})

    lines = []
    for position, entry in enumerate(data, start=1):
        if not isinstance(entry, dict) or not entry.get("product_id"):
            raise ValidationError({"items": [f"Item {position}: product_id is required"]})
        quantity = entry.get("quantity")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValidationError({"items": [f"Item {position}: quantity must be a whole number of at least 1"]})
        lines.append(
            {
                "product_id": str(entry["product_id"]),
                "quantity": quantity,
                "size": _clean(entry.get("size")),
                "color": _clean(entry.get("color")),
            }
        )
    return lines


def parse_shipping_address(raw) -> ShippingAddress:
    try:
        data = json.loads(raw) if isinstance(raw, str) else raw
    except json.JSONDecodeError:
        raise ValidationError({"shipping_address": ["Shipping address must be a JSON object"]}) from None
    if not isinstance(data, dict):
        raise ValidationError({"shipping_address": ["Shipping address must be a JSON object"]})
    return ShippingAddress(**{name: _clean(data.get(name)) for name in _ADDRESS_FIELDS})


def validate_payment_method(settings, method, transaction_code):
    if method not in {m.value for m in PaymentMethod}:
        raise ValidationError({"payment_method": [f"Invalid payment method: {method}"]})
    if not settings.is_enabled(method):
        raise ValidationError({"payment_method": [f"Payment method {method} is not enabled"]})
    if method in MANUAL_METHODS and not _clean(transaction_code):
        raise ValidationError({"transaction_code": [f"Transaction code is required for {method} payments"]})


def _load_purchasable(repo, lines) -> dict[str, Product]:
    products, missing = {}, []
    for product_id in dict.fromkeys(line["product_id"] for line in lines):
        try:
            product = repo.get(product_id)
        except ObjectNotFoundError:
            missing.append(product_id)
            continue
        if not product.is_active:
            missing.append(product_id)
            continue
        products[product_id] = product

    if missing:
        raise ObjectNotFoundError(f"Products not found or inactive: {', '.join(missing)}")
    return products


def _recheck_stock(products, lines):
    """Check aggregated demand against the freshly loaded products."""
    per_product = Counter()
    per_variant = Counter()
    for line in lines:
        per_product[line["product_id"]] += line["quantity"]
        if line["size"] and line["color"]:
            per_variant[(line["product_id"], line["size"], line["color"])] += line["quantity"]

    for product_id, quantity in per_product.items():
        products[product_id].ensure_stock(quantity)
    for (product_id, size, color), quantity in per_variant.items():
        products[product_id].ensure_variant_stock(size, color, quantity)


def _save_products(repo, products, lines):
    """Persist the decremented products.

    A concurrent checkout that committed first makes the write fail on the
    aggregate version. The loser re-reads the products and reports the stock
    that is actually left.
    """
    try:
        for product in products.values():
            repo.add(product)
    except ExpectedVersionError:
        fresh = {product_id: repo.get(product_id) for product_id in products}
        logger.info("Checkout lost a concurrent stock update", product_ids=list(products))
        _recheck_stock(fresh, lines)
        raise


@marketplace.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        lines = parse_checkout_lines(command.items)
        address = parse_shipping_address(command.shipping_address)

        settings = get_payment_settings()
        validate_payment_method(settings, command.payment_method, command.transaction_code)

        product_repo = current_domain.repository_for(Product)
        products = _load_purchasable(product_repo, lines)
        _recheck_stock(products, lines)

        priced = [
            price_line(products[line["product_id"]], line["quantity"], line["size"], line["color"])
            for line in lines
        ]

        orders = []
        for bucket in split_by_curator(priced):
            commission = calculate_commission(bucket.subtotal, settings.commission_rate)
            items = [
                OrderItem(
                    product_id=line.product_id,
                    title=line.title,
                    quantity=line.quantity,
                    unit_price=float(line.unit_price),
                    size=line.size,
                    color=line.color,
                )
                for line in bucket.lines
            ]
            orders.append(
                Order.place(
                    buyer_id=command.buyer_id,
                    curator_id=bucket.curator_id,
                    items=items,
                    commission=commission,
                    payment_method=command.payment_method,
                    shipping_address=address,
                    transaction_code=_clean(command.transaction_code),
                    payment_proof=_clean(command.payment_proof),
                )
            )

        for line in lines:
            products[line["product_id"]].reserve_stock(line["quantity"], line["size"], line["color"])

        cart_repo = current_domain.repository_for(Cart)
        cart = cart_repo.for_buyer(command.buyer_id)
        if cart is not None:
            cart.clear()

        # Nothing reaches a repository before every check above has passed
        _save_products(product_repo, products, lines)
        order_repo = current_domain.repository_for(Order)
        for order in orders:
            order_repo.add(order)
        if cart is not None:
            cart_repo.add(cart)

        logger.info(
            "Checkout completed",
            buyer_id=str(command.buyer_id),
            order_ids=[str(o.id) for o in orders],
            payment_method=command.payment_method,
        )
        return [str(order.id) for order in orders]
