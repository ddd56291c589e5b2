from salesintel.core.security import verify_password
from salesintel.core.seed import DEMO_USERS, seed_users_if_empty
from salesintel.repositories.catalog_repository import CatalogRepository
from salesintel.seed import COMPETITORS, PRODUCTS, seed_demo_catalog


def test_demo_users_are_seeded_once(db_session):
    assert seed_users_if_empty(db_session) == len(DEMO_USERS)
    assert seed_users_if_empty(db_session) == 0

    repo = CatalogRepository(db_session)
    assert repo.count_users() == len(DEMO_USERS)

    manager = repo.get_user_by_username("manager")
    assert manager.role == "sales_manager"
    assert verify_password("manager123", manager.password_hash)


def test_demo_users_are_not_seeded_into_populated_table(db_session, users):
    assert seed_users_if_empty(db_session) == 0
    assert CatalogRepository(db_session).get_user_by_username("rep") is None


def test_demo_catalog_seeding_is_idempotent(db_session):
    assert seed_demo_catalog(db_session) == {"competitors": len(COMPETITORS), "products": len(PRODUCTS)}
    assert seed_demo_catalog(db_session) == {"competitors": 0, "products": 0}

    repo = CatalogRepository(db_session)
    assert len(repo.list_competitors()) == len(COMPETITORS)
    assert len(repo.list_products()) == len(PRODUCTS)


def test_demo_catalog_keeps_existing_rows(db_session, catalog):
    created = seed_demo_catalog(db_session)

    assert created["competitors"] == len(COMPETITORS)
    names = {c.name for c in CatalogRepository(db_session).list_competitors()}
    assert {"Acme", "Globex"} <= names
