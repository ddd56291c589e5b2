from salesintel.api.dependencies import get_pricing_repository
from salesintel.core.errors import StorageError
from salesintel.main import app


def _submit(client, headers, catalog, price, **extra):
    body = {"competitorId": catalog["comp_a"], "productId": catalog["prod_x"], "price": price}
    body.update(extra)
    return client.post("/api/competitor-pricing", json=body, headers=headers)


def test_create_then_update_then_history_scenario(client, headers, catalog):
    rep = headers["sales_rep"]

    created = _submit(client, rep, catalog, "49.99", currency="USD")
    assert created.status_code == 201
    assert created.headers["X-Pricing-Action"] == "created"
    first = created.json()
    assert first["id"]
    assert first["price"] == "49.99"
    assert first["competitorId"] == catalog["comp_a"]
    assert first["productId"] == catalog["prod_x"]

    updated = _submit(client, rep, catalog, "54.99")
    assert updated.status_code == 201
    assert updated.headers["X-Pricing-Action"] == "updated"
    assert updated.json()["id"] == first["id"]
    assert updated.json()["price"] == "54.99"

    history = client.get(f"/api/price-history/{first['id']}", headers=rep)
    assert history.status_code == 200
    rows = history.json()
    assert len(rows) == 1
    assert rows[0]["oldPrice"] == "49.99"
    assert rows[0]["newPrice"] == "54.99"
    assert rows[0]["changePercentage"] == "10.00"
    assert rows[0]["updatedByUser"]["username"] == "sales_rep"
    assert "passwordHash" not in rows[0]["updatedByUser"]


def test_submit_accepts_numeric_price(client, headers, catalog):
    res = _submit(client, headers["sales_rep"], catalog, 12.5)
    assert res.status_code == 201
    assert res.json()["price"] == "12.50"


def test_submit_with_same_price_writes_no_history(client, headers, catalog):
    rep = headers["sales_rep"]
    pricing_id = _submit(client, rep, catalog, "100.00").json()["id"]

    res = _submit(client, rep, catalog, "100.00", notes="confirmed by phone")
    assert res.status_code == 201
    assert res.json()["notes"] == "confirmed by phone"

    assert client.get(f"/api/price-history/{pricing_id}", headers=rep).json() == []


def test_invalid_payloads_are_rejected_with_400(client, headers, catalog):
    rep = headers["sales_rep"]
    bad_bodies = [
        {"productId": catalog["prod_x"], "price": "10.00"},
        {"competitorId": catalog["comp_a"], "productId": catalog["prod_x"]},
        {"competitorId": catalog["comp_a"], "productId": catalog["prod_x"], "price": "-1.00"},
        {"competitorId": catalog["comp_a"], "productId": catalog["prod_x"], "price": "10.005"},
        {"competitorId": catalog["comp_a"], "productId": catalog["prod_x"], "price": "cheap"},
        {"competitorId": "not-an-id", "productId": catalog["prod_x"], "price": "10.00"},
    ]

    for body in bad_bodies:
        res = client.post("/api/competitor-pricing", json=body, headers=rep)
        assert res.status_code == 400, body
        assert res.json()["error_code"] == "VALIDATION_ERROR"

    assert client.get("/api/competitor-pricing", headers=rep).json() == []


def test_unknown_competitor_returns_404(client, headers, catalog):
    res = client.post(
        "/api/competitor-pricing",
        json={"competitorId": 9999, "productId": catalog["prod_x"], "price": "10.00"},
        headers=headers["sales_rep"],
    )
    assert res.status_code == 404
    assert res.json()["error_code"] == "NOT_FOUND"


def test_pricing_requires_authentication(client, catalog):
    assert client.get("/api/competitor-pricing").status_code == 401
    assert _submit(client, {}, catalog, "10.00").status_code == 401
    assert _submit(client, {"Authorization": "Bearer not-a-jwt"}, catalog, "10.00").status_code == 401


def test_list_returns_enriched_records_and_filters(client, headers, catalog):
    rep = headers["sales_rep"]
    _submit(client, rep, catalog, "10.00")
    client.post(
        "/api/competitor-pricing",
        json={"competitorId": catalog["comp_b"], "productId": catalog["prod_y"], "price": "20.00"},
        headers=rep,
    )

    everything = client.get("/api/competitor-pricing", headers=rep).json()
    assert len(everything) == 2
    # most recently updated first
    assert everything[0]["competitor"]["name"] == "Globex"
    assert everything[0]["product"]["name"] == "Widget Y"
    assert everything[0]["updatedByUser"]["role"] == "sales_rep"

    only_a = client.get(
        "/api/competitor-pricing", params={"competitorId": catalog["comp_a"]}, headers=rep
    ).json()
    assert [r["price"] for r in only_a] == ["10.00"]

    future = client.get(
        "/api/competitor-pricing", params={"startDate": "2999-01-01T00:00:00"}, headers=rep
    ).json()
    assert future == []


def test_get_single_pricing(client, headers, catalog):
    rep = headers["sales_rep"]
    pricing_id = _submit(client, rep, catalog, "10.00").json()["id"]

    res = client.get(f"/api/competitor-pricing/{pricing_id}", headers=rep)
    assert res.status_code == 200
    assert res.json()["competitor"]["name"] == "Acme"

    assert client.get("/api/competitor-pricing/999999", headers=rep).status_code == 404


def test_delete_requires_manager_role(client, headers, catalog):
    pricing_id = _submit(client, headers["sales_rep"], catalog, "10.00").json()["id"]

    res = client.delete(f"/api/competitor-pricing/{pricing_id}", headers=headers["sales_rep"])
    assert res.status_code == 403
    assert res.json()["error_code"] == "FORBIDDEN"


def test_delete_removes_pricing_and_history(client, headers, catalog):
    rep = headers["sales_rep"]
    pricing_id = _submit(client, rep, catalog, "10.00").json()["id"]
    _submit(client, rep, catalog, "11.00")
    assert len(client.get(f"/api/price-history/{pricing_id}", headers=rep).json()) == 1

    res = client.delete(f"/api/competitor-pricing/{pricing_id}", headers=headers["sales_manager"])
    assert res.status_code == 204

    assert client.get(f"/api/price-history/{pricing_id}", headers=rep).json() == []
    again = client.delete(f"/api/competitor-pricing/{pricing_id}", headers=headers["admin"])
    assert again.status_code == 404


class BrokenRepository:
    def list_pricing_filtered(self, **_):
        raise StorageError("connection refused by db-host:5432")


def test_storage_failure_returns_generic_500(client, headers):
    app.dependency_overrides[get_pricing_repository] = lambda: BrokenRepository()

    res = client.get("/api/competitor-pricing", headers=headers["sales_rep"])

    assert res.status_code == 500
    body = res.json()
    assert body["error_code"] == "STORAGE_ERROR"
    assert "db-host" not in body["message"]
