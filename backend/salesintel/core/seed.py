import logging

from sqlalchemy.orm import Session

from salesintel.core.security import hash_password
from salesintel.repositories.catalog_repository import CatalogRepository

logger = logging.getLogger(__name__)

# Demo credentials, one per role
DEMO_USERS = [
    {"username": "admin", "full_name": "Admin", "email": "admin@example.com", "role": "admin", "password": "admin123"},
    {"username": "manager", "full_name": "Sales Manager", "email": "manager@example.com", "role": "sales_manager", "password": "manager123"},
    {"username": "rep", "full_name": "Sales Rep", "email": "rep@example.com", "role": "sales_rep", "password": "rep12345"},
]


def seed_users_if_empty(db: Session) -> int:
    repo = CatalogRepository(db)
    if repo.count_users() > 0:
        return 0

    with repo.transaction():
        for u in DEMO_USERS:
            repo.create_user(
                username=u["username"],
                full_name=u["full_name"],
                email=u["email"],
                role=u["role"],
                password_hash=hash_password(u["password"]),
            )

    logger.info("Seeded %d demo users", len(DEMO_USERS))
    return len(DEMO_USERS)
