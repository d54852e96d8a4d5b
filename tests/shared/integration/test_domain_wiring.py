"""The domain assembled from a fresh interpreter, the way app.py and server.py build it."""

import os
import subprocess
import sys
import textwrap
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[3]


def _run(script: str) -> subprocess.CompletedProcess:
    env = {**os.environ, "PYTHONPATH": str(ROOT / "src"), "PROTEAN_ENV": "test"}
    return subprocess.run(
        [sys.executable, "-c", textwrap.dedent(script)],
        cwd=ROOT,
        env=env,
        capture_output=True,
        text=True,
        timeout=120,
    )


@pytest.mark.slow
def test_custom_repository_methods_are_registered():
    result = _run(
        """
        from marketplace.domain import load_elements, marketplace

        load_elements()
        marketplace.init()

        from marketplace.catalogue.product.product import Product
        from marketplace.ordering.cart.cart import Cart
        from marketplace.ordering.order.order import Order

        with marketplace.domain_context():
            assert marketplace.repository_for(Cart).for_buyer("buyer-1") is None
            assert marketplace.repository_for(Product).find_by_slugs("curator-1", ["tee"]) == {}
            assert marketplace.repository_for(Order).for_curator("curator-1") == []
        print("ok")
        """
    )

    assert result.returncode == 0, result.stderr
    assert result.stdout.strip().endswith("ok")


@pytest.mark.slow
def test_application_serves_requests_after_startup():
    result = _run(
        """
        from fastapi.testclient import TestClient

        from app import app

        client = TestClient(app)
        created = client.post(
            "/products",
            json={"curator_id": "curator-1", "slug": "tee", "title": "Tee", "price": 10.0, "stock_quantity": 3},
        )
        assert created.status_code == 201, created.text
        product_id = created.json()["product_id"]

        added = client.post("/carts/buyer-1/lines", json={"product_id": product_id, "quantity": 1})
        assert added.status_code == 201, added.text

        listing = client.get("/inventory/curator-1")
        assert listing.status_code == 200, listing.text
        print("ok")
        """
    )

    assert result.returncode == 0, result.stderr
    assert result.stdout.strip().endswith("ok")
