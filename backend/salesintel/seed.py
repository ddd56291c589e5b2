# Seed demo competitors and products (DEV ONLY).
#   python -m salesintel.seed

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from salesintel.core.database import SessionLocal, init_db
from salesintel.core.logging import configure_logging
from salesintel.core.seed import seed_users_if_empty
from salesintel.repositories.catalog_repository import CatalogRepository

logger = logging.getLogger(__name__)

COMPETITORS = [
    {"name": "Acme Analytics", "category": "Analytics", "website": "https://acme.example.com"},
    {"name": "Globex Insights", "category": "Analytics", "website": "https://globex.example.com"},
    {"name": "Initech CRM", "category": "CRM", "website": None},
]

PRODUCTS = [
    {"name": "Dashboard Pro", "category": "Analytics", "our_price": Decimal("49.99")},
    {"name": "Pipeline Tracker", "category": "CRM", "our_price": Decimal("29.00")},
    {"name": "Forecast Add-on", "category": "Analytics", "our_price": None},
]


def seed_demo_catalog(db: Session) -> dict:
    """Insert demo competitors/products that are not there yet (matched by name)."""
    repo = CatalogRepository(db)
    existing_competitors = {c.name for c in repo.list_competitors()}
    existing_products = {p.name for p in repo.list_products()}

    created = {"competitors": 0, "products": 0}
    with repo.transaction():
        for c in COMPETITORS:
            if c["name"] in existing_competitors:
                continue
            repo.create_competitor(**c)
            created["competitors"] += 1

        for p in PRODUCTS:
            if p["name"] in existing_products:
                continue
            repo.create_product(currency="USD", **p)
            created["products"] += 1

    return created


def main() -> None:
    configure_logging()
    init_db()

    db = SessionLocal()
    try:
        users = seed_users_if_empty(db)
        created = seed_demo_catalog(db)
    finally:
        db.close()

    logger.info(
        "Database seeded: %d users, %d competitors, %d products",
        users,
        created["competitors"],
        created["products"],
    )


if __name__ == "__main__":
    main()
