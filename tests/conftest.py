import json
import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config overlay before the domain module is imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(scope="session")
def marketplace_bed():
    from protean.integrations.pytest import DomainFixture

    from marketplace.domain import load_elements, marketplace

    load_elements()
    bed = DomainFixture(marketplace)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(marketplace_bed):
    from marketplace.notifications.channel import reset_channels
    from marketplace.payments.gateway import reset_gateway

    with marketplace_bed.domain_context():
        yield

    reset_gateway()
    reset_channels()


# ---------------------------------------------------------------------------
# Shared builders
# ---------------------------------------------------------------------------
@pytest.fixture
def make_product():
    """Create a product through the domain and return its id."""
    from protean import current_domain

    from marketplace.catalogue.product.creation import CreateProduct

    def _make(curator_id="curator-1", slug="tee", title="Tee", price=10.0, stock=5, sizes=None, colors=None):
        return current_domain.process(
            CreateProduct(
                curator_id=curator_id,
                slug=slug,
                title=title,
                price=price,
                stock_quantity=stock,
                sizes=sizes,
                colors=colors,
            ),
            asynchronous=False,
        )

    return _make


@pytest.fixture
def shipping_address():
    return {
        "name": "Ana Torres",
        "email": "ana@example.com",
        "address": "Av. Larco 123",
        "city": "Lima",
        "state": "Lima",
        "zip_code": "15074",
        "country": "PE",
    }


@pytest.fixture
def checkout(shipping_address):
    """Run a checkout and return the created order ids."""
    from protean import current_domain

    from marketplace.ordering.checkout.placement import PlaceOrder

    def _checkout(items, buyer_id="buyer-1", payment_method="stripe", transaction_code=None):
        return current_domain.process(
            PlaceOrder(
                buyer_id=buyer_id,
                items=json.dumps(items),
                shipping_address=json.dumps(shipping_address),
                payment_method=payment_method,
                transaction_code=transaction_code,
            ),
            asynchronous=False,
        )

    return _checkout


@pytest.fixture
def enable_wallets():
    """Turn on yape and plin with phone numbers."""
    from protean import current_domain

    from marketplace.payments.management import UpdatePaymentSettings

    def _enable():
        current_domain.process(
            UpdatePaymentSettings(
                admin_id="admin-1",
                yape_enabled=True,
                yape_phone_number="987654321",
                plin_enabled=True,
                plin_phone_number="912345678",
            ),
            asynchronous=False,
        )

    return _enable
