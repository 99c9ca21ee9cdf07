# tests/test_products.py
import math

import pytest
from fastapi.testclient import TestClient



def test_root_welcome(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/plain")
    assert "Welcome to the Product API" in r.text


def test_list_defaults(client):
    body = client.get("/api/products").json()
    assert body["total"] == 3
    assert body["page"] == 1
    assert body["pages"] == 1
    assert [p["name"] for p in body["products"]] == ["Laptop", "Smartphone", "Coffee Maker"]


def test_list_category_is_case_insensitive(client):
    body = client.get("/api/products", params={"category": "ELECTRONICS"}).json()
    assert body["total"] == 2
    assert all(p["category"] == "electronics" for p in body["products"])


def test_list_category_and_search_combined(client):
    body = client.get("/api/products", params={"category": "electronics", "search": "PHONE"}).json()
    assert body["total"] == 1
    assert body["products"][0]["name"] == "Smartphone"

    body = client.get("/api/products", params={"category": "kitchen", "search": "phone"}).json()
    assert body == {"total": 0, "page": 1, "pages": 0, "products": []}


def test_list_first_page_of_electronics(client):
    r = client.get("/api/products", params={"category": "electronics", "page": 1, "limit": 1})
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 2
    assert body["page"] == 1
    assert body["pages"] == 2
    assert [p["id"] for p in body["products"]] == ["1"]


def test_list_pagination_invariants(client):
    for i in range(9):
        client.post("/api/products", json={"name": f"Widget {i}", "price": i + 1})
    for limit in (1, 2, 5, 10):
        body = client.get("/api/products", params={"limit": limit, "page": 2}).json()
        assert body["total"] == 12
        assert body["pages"] == math.ceil(12 / limit)
        assert len(body["products"]) <= limit


def test_list_page_past_the_end_is_empty(client):
    body = client.get("/api/products", params={"page": 5, "limit": 2}).json()
    assert body == {"total": 3, "page": 5, "pages": 2, "products": []}


@pytest.mark.parametrize("page,limit", [("abc", "x"), ("0", "0"), ("-2", "-1")])
def test_list_unusable_paging_falls_back_to_defaults(client, page, limit):
    body = client.get("/api/products", params={"page": page, "limit": limit}).json()
    assert body["page"] == 1
    assert body["pages"] == 1
    assert len(body["products"]) == 3


def test_list_page_reads_leading_digits(client):
    body = client.get("/api/products", params={"page": "2abc", "limit": "1"}).json()
    assert body["page"] == 2
    assert [p["id"] for p in body["products"]] == ["2"]


def test_stats(client):
    r = client.get("/api/products/stats")
    assert r.status_code == 200
    assert r.json() == {
        "totalProducts": 3,
        "inStock": 2,
        "categories": {"electronics": 2, "kitchen": 1},
    }


def test_get_product(client):
    r = client.get("/api/products/3")
    assert r.status_code == 200
    assert r.json() == {
        "id": "3",
        "name": "Coffee Maker",
        "description": "Programmable coffee maker with timer",
        "price": 50,
        "category": "kitchen",
        "inStock": False,
    }


def test_get_missing_product(client):
    r = client.get("/api/products/nope")
    assert r.status_code == 404
    assert r.json() == {"error": {"name": "NotFoundError", "message": "Product not found", "status": 404}}


def test_create_applies_defaults(client):
    r = client.post("/api/products", json={"name": "Kettle", "price": 30})
    assert r.status_code == 201
    body = r.json()
    assert body["name"] == "Kettle"
    assert body["price"] == 30
    assert body["description"] == ""
    assert body["category"] == "uncategorized"
    assert body["inStock"] is True
    assert body["id"] not in {"1", "2", "3"}

    assert client.get(f"/api/products/{body['id']}").json() == body
    assert client.get("/api/products").json()["products"][-1] == body


def test_create_keeps_supplied_fields(client):
    payload = {"name": "Toaster", "price": 24.5, "description": "Two slots",
               "category": "kitchen", "inStock": False}
    body = client.post("/api/products", json=payload).json()
    assert {k: body[k] for k in payload} == payload


def test_created_ids_are_unique(client):
    ids = {client.post("/api/products", json={"name": f"P{i}", "price": 1}).json()["id"] for i in range(20)}
    assert len(ids) == 20
    assert not ids & {"1", "2", "3"}


@pytest.mark.parametrize("payload,message", [
    ({}, "Name and price are required"),
    ({"name": "Kettle"}, "Name and price are required"),
    ({"price": 30}, "Name and price are required"),
    ({"name": "", "price": 30}, "Name and price are required"),
    ({"name": "Kettle", "price": 0}, "Name and price are required"),
    ({"name": "Kettle", "price": -5}, "Price must be a positive number"),
    ({"name": "Kettle", "price": "30"}, "Price must be a positive number"),
    ({"name": "Kettle", "price": True}, "Price must be a positive number"),
    ({"name": 42, "price": 30}, "Name must be a non-empty string"),
    ({"name": "Kettle", "price": 30, "inStock": "yes"}, "inStock must be a boolean"),
    ({"name": "Kettle", "price": 30, "category": 7}, "Category must be a string"),
    ({"name": "Kettle", "price": 10 ** 400}, "Price must be a positive number"),
    ({"name": "Kettle", "price": 30, "inStock": None}, "inStock must be a boolean"),
    ({"name": "Kettle", "price": 30, "description": ["long"]}, "Description must be a string"),
])
def test_create_validation(client, store, payload, message):
    r = client.post("/api/products", json=payload)
    assert r.status_code == 400
    assert r.json() == {"error": {"name": "ValidationError", "message": message, "status": 400}}
    assert len(store) == 3


def test_create_with_malformed_json(client, store):
    r = client.post("/api/products", content=b"{not json", headers={"content-type": "application/json"})
    assert r.status_code == 400
    assert r.json()["error"]["name"] == "MalformedRequestError"
    assert len(store) == 3


def test_create_ignores_non_json_content_type(client, store):
    r = client.post("/api/products", content=b'{"name": "Kettle", "price": 30}',
                    headers={"content-type": "text/plain"})
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Name and price are required"
    assert len(store) == 3


def test_create_accepts_json_with_charset(client):
    r = client.post("/api/products", content=b'{"name": "Kettle", "price": 30}',
                    headers={"content-type": "application/json; charset=utf-8"})
    assert r.status_code == 201


def test_create_with_non_object_body(client):
    r = client.post("/api/products", json=[{"name": "Kettle", "price": 30}])
    assert r.status_code == 400
    assert r.json()["error"] == {
        "name": "MalformedRequestError",
        "message": "Request body must be a JSON object",
        "status": 400,
    }


def test_update_partial_price(client):
    r = client.put("/api/products/2", json={"price": 750})
    assert r.status_code == 200
    assert r.json() == {
        "id": "2",
        "name": "Smartphone",
        "description": "Latest model with 128GB storage",
        "price": 750,
        "category": "electronics",
        "inStock": True,
    }
    assert client.get("/api/products/2").json()["price"] == 750


def test_update_present_fields_overwrite_even_when_falsy(client):
    r = client.put("/api/products/1", json={"description": "", "inStock": False, "category": "computers"})
    assert r.status_code == 200
    body = r.json()
    assert body["description"] == ""
    assert body["inStock"] is False
    assert body["category"] == "computers"
    assert body["name"] == "Laptop"
    assert body["price"] == 1200


def test_update_cannot_change_id(client):
    body = client.put("/api/products/1", json={"id": "99", "name": "Notebook"}).json()
    assert body["id"] == "1"
    assert body["name"] == "Notebook"
    assert client.get("/api/products/99").status_code == 404


@pytest.mark.parametrize("payload", [
    {}, {"price": 0}, {"price": -1}, {"price": 10 ** 400}, {"price": None},
    {"name": ""}, {"inStock": "no"}, {"unknown": 1},
])
def test_update_validation(client, payload):
    r = client.put("/api/products/1", json=payload)
    assert r.status_code == 400
    assert r.json()["error"]["name"] == "ValidationError"
    assert client.get("/api/products/1").json()["price"] == 1200


def test_update_missing_product(client):
    r = client.put("/api/products/999", json={"price": 10})
    assert r.status_code == 404
    assert r.json()["error"]["message"] == "Product not found"


def test_delete_product(client):
    r = client.delete("/api/products/3")
    assert r.status_code == 204
    assert r.content == b""
    assert client.get("/api/products/3").status_code == 404
    assert client.get("/api/products").json()["total"] == 2
    assert client.get("/api/products/stats").json()["categories"] == {"electronics": 2}


def test_delete_missing_product(client):
    r = client.delete("/api/products/999")
    assert r.status_code == 404
    assert r.json() == {"error": {"name": "NotFoundError", "message": "Product not found", "status": 404}}


def test_unknown_route_uses_error_envelope(client):
    r = client.get("/api/orders")
    assert r.status_code == 404
    assert r.json()["error"]["status"] == 404


def test_unexpected_error_is_500(app):
    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    c = TestClient(app, raise_server_exceptions=False)
    r = c.get("/boom", headers={"x-api-key": "test-key"})
    assert r.status_code == 500
    assert r.json() == {"error": {"name": "InternalServerError", "message": "Internal server error", "status": 500}}
