"""Reset and bootstrap the SQLite database, optionally with demo orders for the dashboard."""

from __future__ import annotations

import argparse
import logging
import random
from datetime import datetime, timedelta
from pathlib import Path

from analytics import DISPLAY_STATUSES, FAILED_LEGACY_ALIAS, delivery_for_order
from config import get_settings
from database import CatalogDB, OrderDB, init_database

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

settings = get_settings()


def reset_database() -> None:
    """Delete the existing database (if any) and rebuild it using init_database()."""
    db_path: Path = settings.db_path

    if db_path.exists():
        logger.info("Removing existing database file: %s", db_path)
        db_path.unlink()
    else:
        logger.info("No existing database found, creating %s", db_path)

    db_path.parent.mkdir(parents=True, exist_ok=True)
    init_database()
    logger.info("Database initialised: %s", db_path)


def seed_demo_data(order_count: int = 120, seed: int = 7) -> int:
    """Insert a catalog and a year of randomised orders, including legacy rows."""
    rng = random.Random(seed)

    sizes = [CatalogDB.create_size(name) for name in ("S", "M", "L")]
    colors = [CatalogDB.create_color(name) for name in ("Black", "White")]
    variants = []
    for index, name in enumerate(("Classic Tee", "Hoodie", "Cap")):
        product_id = CatalogDB.create_product(name)
        for size_id in sizes:
            for color_id in colors:
                variants.append((
                    CatalogDB.create_variant(product_id, sku=f"SKU-{index}{len(variants):03d}", size_id=size_id, color_id=color_id),
                    rng.choice((1500, 2500, 4200)),
                ))

    statuses = list(DISPLAY_STATUSES) + [FAILED_LEGACY_ALIAS]
    now = datetime.now()
    for number in range(order_count):
        lines = [rng.choice(variants) for _ in range(rng.randint(1, 3))]
        quantities = [rng.randint(1, 3) for _ in lines]
        subtotal = sum(price * qty for (_, price), qty in zip(lines, quantities))
        discount = rng.choice((0, 0, 0, 200, 500))
        total = subtotal - discount + delivery_for_order(sum(quantities))
        created_at = now - timedelta(days=rng.randint(0, 365), minutes=rng.randint(0, 1440))

        order_id = OrderDB.create_order(
            status=rng.choice(statuses),
            # every tenth order mimics legacy rows without a stored total
            total_amount=None if number % 10 == 0 else f"{total:.2f}",
            discount_amount=discount,
            user_id=f"user_{rng.randint(1, 15)}",
            first_name=rng.choice(("Lina", "Omar", "Sara", "Yusuf")),
            second_name=rng.choice(("Haddad", "Nasser", "Khalil")),
            email=f"customer{number}@example.com",
            created_at=created_at.isoformat(timespec="seconds"),
        )
        for (variant_id, price), qty in zip(lines, quantities):
            OrderDB.add_order_item(order_id, price, qty, variant_id=variant_id)

    logger.info("Seeded %s demo orders", order_count)
    return order_count


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--demo", action="store_true", help="seed demo catalog and orders")
    parser.add_argument("--orders", type=int, default=120, help="number of demo orders")
    args = parser.parse_args()

    reset_database()
    if args.demo:
        seed_demo_data(args.orders)
