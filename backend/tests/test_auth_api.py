from fastapi import Depends

from salesintel.api.dependencies import get_catalog_repository
from salesintel.api.deps_auth import get_db
from salesintel.main import app
from salesintel.repositories.catalog_repository import CatalogRepository

PASSWORD = "secret123"


def _register(client, username="newbie", email="newbie@example.com"):
    return client.post(
        "/api/auth/register",
        json={"username": username, "password": "hunter22", "email": email, "fullName": "New Person"},
    )


def test_register_creates_sales_rep_and_returns_token(client):
    res = _register(client)

    assert res.status_code == 201
    body = res.json()
    assert body["tokenType"] == "bearer"
    assert body["user"]["role"] == "sales_rep"
    assert body["user"]["fullName"] == "New Person"

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['accessToken']}"})
    assert me.status_code == 200
    assert me.json()["username"] == "newbie"


def test_register_rejects_duplicate_username_and_email(client):
    assert _register(client).status_code == 201

    dup_user = _register(client, email="other@example.com")
    assert dup_user.status_code == 400
    assert dup_user.json()["message"] == "Username already exists"

    dup_email = _register(client, username="other", email="NEWBIE@example.com")
    assert dup_email.status_code == 400
    assert dup_email.json()["message"] == "Email already registered"


def test_register_validates_fields(client):
    res = client.post(
        "/api/auth/register",
        json={"username": "x", "password": "short", "email": "not-an-email", "fullName": ""},
    )
    assert res.status_code == 400
    fields = {tuple(d["loc"])[-1] for d in res.json()["details"]}
    assert {"username", "password", "email", "fullName"} <= fields


def test_json_login(client, users):
    ok = client.post("/api/auth/login", json={"username": "admin", "password": PASSWORD})
    assert ok.status_code == 200
    assert ok.json()["user"]["role"] == "admin"

    bad = client.post("/api/auth/login", json={"username": "admin", "password": "wrong"})
    assert bad.status_code == 401
    assert bad.json()["error_code"] == "NOT_AUTHENTICATED"

    unknown = client.post("/api/auth/login", json={"username": "ghost", "password": PASSWORD})
    assert unknown.status_code == 401


def test_form_token_login(client, users):
    res = client.post("/api/auth/token", data={"username": "sales_manager", "password": PASSWORD})
    assert res.status_code == 200
    token = res.json()["accessToken"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.json()["role"] == "sales_manager"


def test_me_rejects_missing_or_bad_token(client):
    assert client.get("/api/auth/me").status_code == 401
    res = client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"})
    assert res.status_code == 401
    assert res.headers["WWW-Authenticate"] == "Bearer"


class StaleLookupRepository(CatalogRepository):
    """First username/email lookups miss, as when a concurrent signup commits in between."""

    def __init__(self, db):
        super().__init__(db)
        self.misses = {"username": 1, "email": 1}

    def get_user_by_username(self, username):
        if self.misses["username"]:
            self.misses["username"] -= 1
            return None
        return super().get_user_by_username(username)

    def get_user_by_email(self, email):
        if self.misses["email"]:
            self.misses["email"] -= 1
            return None
        return super().get_user_by_email(email)


def test_register_race_on_unique_columns_returns_400(client, users):
    app.dependency_overrides[get_catalog_repository] = lambda db=Depends(get_db): StaleLookupRepository(db)

    dup_user = _register(client, username="sales_rep", email="fresh@example.com")
    assert dup_user.status_code == 400
    assert dup_user.json()["error_code"] == "VALIDATION_ERROR"
    assert dup_user.json()["message"] == "Username already exists"

    dup_email = _register(client, username="fresh", email="admin@example.com")
    assert dup_email.status_code == 400
    assert dup_email.json()["message"] == "Email already registered"

    # nothing half-written by either attempt
    del app.dependency_overrides[get_catalog_repository]
    assert _register(client, username="fresh", email="fresh@example.com").status_code == 201
