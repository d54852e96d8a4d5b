"""BDD tests for multi-curator checkout."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, scenarios, then, when

from marketplace.catalogue.product.product import Product
from marketplace.ordering.order.order import Order
from marketplace.shared.errors import ConflictError

scenarios("features/checkout.feature")


@pytest.fixture
def catalogue():
    return {}


@pytest.fixture
def outcome():
    return {}


@given(
    parsers.cfparse(
        'curator "{curator_id}" sells "{title}" at {price:f} with {stock:d} units in sizes "{sizes}" and colors "{colors}"'
    )
)
def _(make_product, catalogue, curator_id, title, price, stock, sizes, colors):
    catalogue[title] = make_product(
        curator_id=curator_id, slug=title, title=title, price=price, stock=stock, sizes=sizes, colors=colors
    )


@given(parsers.cfparse('curator "{curator_id}" sells "{title}" at {price:f} with {stock:d} units'))
def _(make_product, catalogue, curator_id, title, price, stock):
    catalogue[title] = make_product(curator_id=curator_id, slug=title, title=title, price=price, stock=stock)


def _run(checkout, outcome, items, buyer_id, method="stripe"):
    try:
        outcome["order_ids"] = checkout(items, buyer_id=buyer_id, payment_method=method)
    except ConflictError as exc:
        outcome["error"] = exc


@when(parsers.cfparse('the buyer checks out by "{method}":'))
def _(checkout, catalogue, outcome, method, datatable):
    header, *rows = datatable
    items = []
    for row in rows:
        line = dict(zip(header, row))
        items.append(
            {
                "product_id": catalogue[line["product"]],
                "quantity": int(line["quantity"]),
                "size": line["size"] or None,
                "color": line["color"] or None,
            }
        )
    _run(checkout, outcome, items, buyer_id="buyer-1", method=method)


@when(parsers.cfparse('another buyer checks out {quantity:d} of "{title}" in "{size}" / "{color}"'))
def _(checkout, catalogue, outcome, quantity, title, size, color):
    items = [{"product_id": catalogue[title], "quantity": quantity, "size": size, "color": color}]
    _run(checkout, outcome, items, buyer_id="buyer-2")


def _orders(outcome):
    repo = current_domain.repository_for(Order)
    return [repo.get(order_id) for order_id in outcome.get("order_ids", [])]


@then(parsers.cfparse("{count:d} orders are created"))
def _(outcome, count):
    assert len(outcome["order_ids"]) == count


@then(
    parsers.cfparse(
        'the order for "{curator_id}" totals {total:f} with commission {commission:f} and payout {payout:f}'
    )
)
def _(outcome, curator_id, total, commission, payout):
    (order,) = [o for o in _orders(outcome) if o.curator_id == curator_id]
    assert order.total_amount == pytest.approx(total)
    assert order.commission_amount == pytest.approx(commission)
    assert order.curator_amount == pytest.approx(payout)


@then(parsers.cfparse('every order is "{status}"'))
def _(outcome, status):
    assert {o.status for o in _orders(outcome)} == {status}


@then(parsers.cfparse('"{title}" has {stock:d} units left'))
def _(catalogue, title, stock):
    assert current_domain.repository_for(Product).get(catalogue[title]).stock_quantity == stock


@then(parsers.cfparse('the checkout fails with "{message}"'))
def _(outcome, message):
    assert str(outcome["error"]) == message


@then("no orders exist")
def _():
    assert current_domain.repository_for(Order)._dao.query.all().items == []
