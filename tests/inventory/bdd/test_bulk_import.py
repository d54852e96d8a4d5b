"""BDD tests for the bulk inventory import."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, scenarios, then, when

from marketplace.catalogue.product.product import Product
from marketplace.inventory.importer import ImportInventory

scenarios("features/bulk_import.feature")


@pytest.fixture
def products():
    return {}


def _product(products, slug):
    return current_domain.repository_for(Product).get(products[slug])


@given(
    parsers.cfparse(
        'curator "{curator_id}" owns a product "{slug}" with {stock:d} units in sizes "{sizes}" and colors "{colors}"'
    )
)
def _(make_product, products, curator_id, slug, stock, sizes, colors):
    products[slug] = make_product(curator_id=curator_id, slug=slug, stock=stock, sizes=sizes, colors=colors)


@when(parsers.cfparse('curator "{curator_id}" imports:'), target_fixture="outcome")
def _(curator_id, docstring):
    try:
        result = current_domain.process(ImportInventory(curator_id=curator_id, csv_data=docstring), asynchronous=False)
        return {"result": result}
    except ValidationError as exc:
        return {"error": exc}


@then(parsers.cfparse("the import reports {processed:d} processed, {created:d} created and {updated:d} updated"))
def _(outcome, processed, created, updated):
    assert outcome["result"] == {"total_processed": processed, "created": created, "updated": updated}


@then(parsers.cfparse('the import is rejected with the single error "{message}"'))
def _(outcome, message):
    assert outcome["error"].messages == {"rows": [message]}


@then(parsers.cfparse('the import is rejected for products "{slugs}"'))
def _(outcome, slugs):
    assert outcome["error"].messages == {"products": [f"Products not found or not owned by you: {slugs}"]}


@then(parsers.cfparse('variant "{size}" / "{color}" of "{slug}" has {stock:d} units'))
def _(products, size, color, slug, stock):
    assert _product(products, slug).find_variant(size, color).stock_quantity == stock


@then(parsers.cfparse('"{slug}" has no variant "{size}" / "{color}"'))
def _(products, slug, size, color):
    assert _product(products, slug).find_variant(size, color) is None
