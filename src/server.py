"""Protean Engine runner for the marketplace domain.

Only needed when ``event_processing`` is ``async`` (the production
overlay): the Engine drains the outbox to the broker and runs the event
handlers, notifications among them, outside the request cycle.

Usage:
    PROTEAN_ENV=production python src/server.py
    PROTEAN_ENV=production python src/server.py --test-mode
"""

import argparse

from protean.server.engine import Engine


def main():
    parser = argparse.ArgumentParser(description="Marketplace Engine runner")
    parser.add_argument(
        "--test-mode",
        action="store_true",
        help="Process what is pending, then exit",
    )
    args = parser.parse_args()

    from marketplace.domain import load_elements, marketplace

    load_elements()
    marketplace.init()
    engine = Engine(marketplace, test_mode=args.test_mode)
    engine.run()


if __name__ == "__main__":
    main()
