# tests/test_products_api.py
from fastapi.testclient import TestClient

import catalog.main
from catalog.main import app

client = TestClient(app)

PRODUCT_KEYS = {"id", "title", "category", "description", "price", "stock", "rating", "imageUrl"}


def _create(**fields):
    r = client.post("/api/products", json=fields)
    assert r.status_code == 201, r.json()
    return r.json()


def test_root_and_health():
    assert client.get("/").json()["status"] == "ok"
    assert client.get("/health").json() == {"status": "ok"}


def test_list_returns_seed_catalog():
    r = client.get("/api/products")
    assert r.status_code == 200
    body = r.json()
    assert len(body) == 10
    assert body[0]["id"] == "p1"
    assert set(body[0]) == PRODUCT_KEYS


def test_list_filters_by_category_and_title():
    drinks = client.get("/api/products", params={"category": "Drinks"}).json()
    assert {p["id"] for p in drinks} == {"p2", "p7", "p10"}
    found = client.get("/api/products", params={"q": "COFFEE"}).json()
    assert [p["id"] for p in found] == ["p10"]
    assert client.get("/api/products", params={"category": "Drinks", "q": "milk"}).json()[0]["id"] == "p2"


def test_categories_in_first_seen_order():
    cats = client.get("/api/products/categories").json()
    assert cats[:3] == ["Sweets", "Drinks", "Bakery"]
    assert len(cats) == len(set(cats))


def test_get_existing_product():
    r = client.get("/api/products/p3")
    assert r.status_code == 200
    assert r.json()["title"] == "Borodinsky Bread"


def test_get_missing_product():
    r = client.get("/api/products/doesnotexist")
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}


def test_create_applies_defaults():
    body = _create(title="Tea", category="Drinks", price=50)
    assert body["stock"] == 0
    assert body["rating"] == 0
    assert body["imageUrl"] == ""
    assert body["description"] == ""
    assert len(body["id"]) == 8
    assert client.get("/api/products").json()[-1]["id"] == body["id"]


def test_create_without_category_uses_default():
    body = _create(title="Mystery box", price=10)
    assert body["category"] == "Uncategorized"


def test_create_trims_and_coerces():
    body = _create(
        title="  Green Tea  ",
        category=" Drinks ",
        description="  loose leaf ",
        price="12.5",
        stock="7",
        rating="4",
        imageUrl=" http://img ",
    )
    assert body["title"] == "Green Tea"
    assert body["category"] == "Drinks"
    assert body["description"] == "loose leaf"
    assert body["price"] == 12.5
    assert body["stock"] == 7
    assert body["rating"] == 4
    assert body["imageUrl"] == "http://img"


def test_create_with_garbage_stock_falls_back_to_zero():
    assert _create(title="Tea", price=1, stock="plenty")["stock"] == 0


def test_create_then_get_round_trip():
    created = _create(title="Tea", category="Drinks", price=50, stock=3, rating=4.5, description="Black")
    fetched = client.get(f"/api/products/{created['id']}").json()
    assert fetched == created


def test_created_ids_are_unique():
    for i in range(20):
        _create(title=f"Item {i}", price=i)
    ids = [p["id"] for p in client.get("/api/products").json()]
    assert all(ids)
    assert len(ids) == len(set(ids)) == 30


def test_create_rejects_empty_title():
    r = client.post("/api/products", json={"title": "", "price": 50, "category": "Drinks"})
    assert r.status_code == 400
    errors = r.json()["errors"]
    assert any("title" in e for e in errors)


def test_create_reports_all_errors_at_once():
    r = client.post("/api/products", json={"price": "free", "rating": 9, "category": ""})
    assert r.status_code == 400
    errors = r.json()["errors"]
    assert len(errors) == 4
    assert len(client.get("/api/products").json()) == 10


def test_create_rejects_non_decimal_price_strings():
    for price in ("1_000", "١٢", "Infinity"):
        r = client.post("/api/products", json={"title": "X", "price": price})
        assert r.status_code == 400, price
        assert r.json() == {"errors": ["price must be a non-negative number"]}
    assert len(client.get("/api/products").json()) == 10


def test_create_without_body():
    r = client.post("/api/products")
    assert r.status_code == 400
    assert len(r.json()["errors"]) == 2


def test_create_with_non_object_body():
    r = client.post("/api/products", json=["title", "price"])
    assert r.status_code == 400
    assert r.json() == {"error": "Request body must be a JSON object"}


def test_patch_updates_only_supplied_fields():
    before = client.get("/api/products/p1").json()
    r = client.patch("/api/products/p1", json={"price": 85, "title": "  Jubilee Biscuits XL "})
    assert r.status_code == 200
    after = r.json()
    assert after["price"] == 85
    assert after["title"] == "Jubilee Biscuits XL"
    for key in PRODUCT_KEYS - {"price", "title"}:
        assert after[key] == before[key]
    assert client.get("/api/products/p1").json() == after


def test_patch_twice_with_same_values_is_stable():
    first = client.patch("/api/products/p2", json={"stock": 4, "rating": 3.5}).json()
    second = client.patch("/api/products/p2", json={"stock": 4, "rating": 3.5}).json()
    assert first == second


def test_patch_empty_body_is_bad_request():
    for pid in ("p1", "doesnotexist"):
        r = client.patch(f"/api/products/{pid}", json={})
        assert r.status_code == 400
        assert r.json() == {"error": "Nothing to update"}


def test_patch_missing_product():
    r = client.patch("/api/products/doesnotexist", json={"price": 1})
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}


def test_patch_negative_price_rejected():
    r = client.patch("/api/products/p1", json={"price": -5})
    assert r.status_code == 400
    assert r.json() == {"errors": ["price must be a non-negative number"]}
    assert client.get("/api/products/p1").json()["price"] == 79


def test_patch_invalid_fields_leave_product_untouched():
    r = client.patch("/api/products/p4", json={"title": "New", "stock": -1})
    assert r.status_code == 400
    assert client.get("/api/products/p4").json()["title"] == "Granny Smith Apples"


def test_patch_cannot_change_id():
    r = client.patch("/api/products/p5", json={"id": "hijack", "stock": 1})
    assert r.status_code == 200
    assert r.json()["id"] == "p5"
    assert client.get("/api/products/hijack").status_code == 404


def test_delete_is_not_idempotent():
    created = _create(title="Tea", category="Drinks", price=50)
    first = client.delete(f"/api/products/{created['id']}")
    assert first.status_code == 204
    assert first.content == b""
    second = client.delete(f"/api/products/{created['id']}")
    assert second.status_code == 404
    assert second.json() == {"error": "Product not found"}


def test_delete_keeps_order_of_remaining_products():
    client.delete("/api/products/p2")
    ids = [p["id"] for p in client.get("/api/products").json()]
    assert ids == ["p1", "p3", "p4", "p5", "p6", "p7", "p8", "p9", "p10"]


def test_unknown_route():
    r = client.get("/api/unknown")
    assert r.status_code == 404
    assert r.json() == {"error": "Not found"}


def test_unhandled_method_is_not_found():
    r = client.put("/api/products/p1", json={"price": 1})
    assert r.status_code == 404
    assert r.json() == {"error": "Not found"}
    r = client.delete("/api/products")
    assert r.status_code == 404
    assert r.json() == {"error": "Not found"}


def test_unexpected_error_is_hidden(monkeypatch, caplog):
    async def boom(**kwargs):
        raise RuntimeError("secret internals")

    monkeypatch.setattr(catalog.main, "list_products_logic", boom)
    quiet = TestClient(app, raise_server_exceptions=False)
    r = quiet.get("/api/products")
    assert r.status_code == 500
    assert r.json() == {"error": "Internal server error"}
    assert "secret" not in r.text
    records = [rec for rec in caplog.records if rec.name == "catalog.main" and rec.levelname == "ERROR"]
    assert len(records) == 1
    assert records[0].exc_info is None
