"""
Shared fixtures: a throwaway SQLite database per test, seeded users per
role, bearer headers for each of them, and a TestClient wired to the test
database through dependency overrides.
"""
import os

# must be set before salesintel is imported
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["SEED_DEMO_USERS"] = "false"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-pytest")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from decimal import Decimal
from typing import Dict, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from salesintel.api.deps_auth import get_db
from salesintel.core.database import build_engine, init_db
from salesintel.core.security import create_access_token, hash_password
from salesintel.main import app
from salesintel.models.user import ROLES
from salesintel.repositories.catalog_repository import CatalogRepository

PASSWORD = "secret123"


@pytest.fixture
def engine(tmp_path):
    eng = build_engine(f"sqlite:///{tmp_path / 'salesintel_test.db'}")
    init_db(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def users(session_factory) -> Dict[str, int]:
    """One user per role; returns {role: user_id}."""
    db = session_factory()
    try:
        repo = CatalogRepository(db)
        with repo.transaction():
            created = {
                role: repo.create_user(
                    username=role,
                    email=f"{role}@example.com",
                    full_name=role.replace("_", " ").title(),
                    role=role,
                    password_hash=hash_password(PASSWORD),
                )
                for role in ROLES
            }
        return {role: u.id for role, u in created.items()}
    finally:
        db.close()


@pytest.fixture
def headers(users) -> Dict[str, Dict[str, str]]:
    return {
        role: {"Authorization": f"Bearer {create_access_token({'sub': str(uid), 'role': role})}"}
        for role, uid in users.items()
    }


@pytest.fixture
def catalog(session_factory) -> Dict[str, int]:
    """Two competitors and two products."""
    db = session_factory()
    try:
        repo = CatalogRepository(db)
        with repo.transaction():
            comp_a = repo.create_competitor(name="Acme", category="Analytics")
            comp_b = repo.create_competitor(name="Globex", category="CRM")
            prod_x = repo.create_product(name="Widget X", category="Analytics", our_price=Decimal("50.00"))
            prod_y = repo.create_product(name="Widget Y", category="CRM")
        return {
            "comp_a": comp_a.id,
            "comp_b": comp_b.id,
            "prod_x": prod_x.id,
            "prod_y": prod_y.id,
        }
    finally:
        db.close()


@pytest.fixture
def client(session_factory) -> Generator[TestClient, None, None]:
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()
