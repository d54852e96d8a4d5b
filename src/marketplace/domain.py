"""Domain initialization and configuration."""

import importlib
import pkgutil

from protean.domain import Domain

from marketplace.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
marketplace = Domain(name="marketplace")


def load_elements() -> None:
    """Import every module of the package so all domain elements are registered.

    ``Domain.init()`` only discovers modules beside this file and one folder
    below it. Aggregates, handlers and repositories live a folder deeper
    (``ordering/cart/cart.py``), so call this before ``marketplace.init()``.
    """
    import marketplace as package

    for module in pkgutil.walk_packages(package.__path__, f"{package.__name__}."):
        importlib.import_module(module.name)
