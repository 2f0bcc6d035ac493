# tests/test_products_api.py
from fastapi.testclient import TestClient

from app.config import Settings
from app.database import ProductStore
from app.main import create_app

API_KEY = "demo-api-key-123"
AUTH = {"x-api-key": API_KEY}
NEW_PRODUCT = {
    "name": "Gaming Laptop",
    "description": "RGB keyboard and a loud fan",
    "price": 1999.5,
    "category": "electronics",
    "inStock": True,
}


def new_client(store=None, **kwargs):
    store = store if store is not None else ProductStore.seeded()
    return TestClient(create_app(Settings(api_key=API_KEY), store), **kwargs)


def test_index_lists_endpoints():
    r = new_client().get("/")
    assert r.status_code == 200
    assert "GET /api/products/stats" in r.json()["endpoints"]

def test_list_defaults_to_first_page_of_ten():
    r = new_client().get("/api/products")
    assert r.status_code == 200
    body = r.json()
    assert [p["id"] for p in body["products"]] == ["1", "2", "3", "4", "5"]
    assert body["pagination"] == {
        "currentPage": 1,
        "totalPages": 1,
        "totalProducts": 5,
        "hasNextPage": False,
        "hasPrevPage": False,
    }

def test_filter_by_category_is_case_insensitive():
    client = new_client()
    body = client.get("/api/products", params={"category": "Electronics"}).json()
    assert {p["category"] for p in body["products"]} == {"electronics"}
    assert body["pagination"]["totalProducts"] == 3

def test_category_and_in_stock_narrow_together():
    client = new_client()
    body = client.get("/api/products", params={"category": "kitchen", "inStock": "true"}).json()
    assert body["products"] == []
    body = client.get("/api/products", params={"category": "kitchen", "inStock": "false"}).json()
    assert [p["name"] for p in body["products"]] == ["Coffee Maker"]

def test_in_stock_false_filter():
    body = new_client().get("/api/products", params={"inStock": "false"}).json()
    assert [p["id"] for p in body["products"]] == ["3"]

def test_pagination_window():
    body = new_client().get("/api/products", params={"limit": 2, "page": 2}).json()
    assert [p["id"] for p in body["products"]] == ["3", "4"]
    assert body["pagination"]["totalPages"] == 3
    assert body["pagination"]["hasNextPage"] is True
    assert body["pagination"]["hasPrevPage"] is True

def test_last_page_has_no_next():
    body = new_client().get("/api/products", params={"limit": 2, "page": 3}).json()
    assert [p["id"] for p in body["products"]] == ["5"]
    assert body["pagination"]["hasNextPage"] is False

def test_bad_paging_params_fall_back_to_defaults():
    body = new_client().get("/api/products", params={"limit": "abc", "page": "0"}).json()
    assert body["pagination"]["currentPage"] == 1
    assert len(body["products"]) == 5

def test_get_by_id():
    r = new_client().get("/api/products/1")
    assert r.status_code == 200
    assert r.json()["name"] == "Laptop"
    assert r.json()["inStock"] is True

def test_get_missing_product_is_404():
    r = new_client().get("/api/products/nope")
    assert r.status_code == 404
    assert r.json() == {
        "error": "Not Found",
        "message": "Product with ID nope not found",
        "statusCode": 404,
    }

def test_create_then_fetch_returns_same_fields():
    client = new_client()
    r = client.post("/api/products", json=NEW_PRODUCT, headers=AUTH)
    assert r.status_code == 201
    assert r.json()["message"] == "Product created successfully"
    created = r.json()["product"]
    assert created["id"] not in {"1", "2", "3", "4", "5"}

    fetched = client.get(f"/api/products/{created['id']}").json()
    assert fetched == created
    for key, value in NEW_PRODUCT.items():
        assert fetched[key] == value

def test_create_trims_strings():
    client = new_client()
    payload = dict(NEW_PRODUCT, name="  Tablet  ", category=" electronics ")
    product = client.post("/api/products", json=payload, headers=AUTH).json()["product"]
    assert product["name"] == "Tablet"
    assert product["category"] == "electronics"

def test_created_products_are_appended():
    client = new_client()
    client.post("/api/products", json=NEW_PRODUCT, headers=AUTH)
    ids = [p["id"] for p in client.get("/api/products").json()["products"]]
    assert ids[:5] == ["1", "2", "3", "4", "5"]
    assert len(ids) == 6

def test_create_validation_error_reports_first_failure():
    client = new_client()
    r = client.post("/api/products", json={"name": "", "price": -1}, headers=AUTH)
    assert r.status_code == 400
    assert r.json() == {
        "error": "Validation Error",
        "message": "Name is required and must be a non-empty string",
        "statusCode": 400,
    }
    assert client.get("/api/products/stats").json()["totalProducts"] == 5

def test_create_rejects_non_json_body():
    r = new_client().post(
        "/api/products",
        content="not json",
        headers={**AUTH, "content-type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json()["message"] == "Request body must be a JSON object"

def test_create_rejects_price_too_large_for_a_float():
    body = '{"name":"A","description":"B","price":1' + "0" * 400 + ',"category":"c","inStock":true}'
    r = new_client().post(
        "/api/products",
        content=body,
        headers={**AUTH, "content-type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json()["message"] == "Price is required and must be a non-negative number"

def test_integer_prices_stay_integers():
    client = new_client()
    product = client.post("/api/products", json=dict(NEW_PRODUCT, price=25), headers=AUTH).json()["product"]
    assert type(product["price"]) is int
    assert type(client.get(f"/api/products/{product['id']}").json()["price"]) is int
    price_range = client.get("/api/products/stats").json()["priceRange"]
    assert type(price_range["min"]) is int
    assert type(price_range["max"]) is int

def test_update_replaces_all_fields():
    client = new_client()
    payload = dict(NEW_PRODUCT, name="Laptop Pro", inStock=False)
    r = client.put("/api/products/1", json=payload, headers=AUTH)
    assert r.status_code == 200
    assert r.json()["message"] == "Product updated successfully"
    product = client.get("/api/products/1").json()
    assert product["id"] == "1"
    assert product["name"] == "Laptop Pro"
    assert product["inStock"] is False
    assert product["price"] == 1999.5

def test_update_requires_every_field():
    client = new_client()
    r = client.put("/api/products/1", json={"name": "Only a name"}, headers=AUTH)
    assert r.status_code == 400
    assert client.get("/api/products/1").json()["name"] == "Laptop"

def test_update_missing_product_is_404_and_store_unchanged():
    client = new_client()
    before = client.get("/api/products").json()
    r = client.put("/api/products/999", json=NEW_PRODUCT, headers=AUTH)
    assert r.status_code == 404
    assert client.get("/api/products").json() == before

def test_delete_then_fetch_is_404():
    client = new_client()
    r = client.delete("/api/products/2", headers=AUTH)
    assert r.status_code == 200
    assert r.json()["product"]["name"] == "Smartphone"
    assert client.get("/api/products/2").status_code == 404
    assert client.get("/api/products/stats").json()["totalProducts"] == 4

def test_delete_missing_product_is_404():
    r = new_client().delete("/api/products/999", headers=AUTH)
    assert r.status_code == 404

def test_mutations_without_valid_key_are_401_and_change_nothing():
    client = new_client()
    before = client.get("/api/products").json()
    for headers in ({}, {"x-api-key": "wrong"}):
        assert client.post("/api/products", json=NEW_PRODUCT, headers=headers).status_code == 401
        assert client.put("/api/products/1", json=NEW_PRODUCT, headers=headers).status_code == 401
        r = client.delete("/api/products/1", headers=headers)
        assert r.status_code == 401
        assert r.json()["error"] == "Authentication Error"
    assert client.get("/api/products").json() == before

def test_auth_runs_before_validation():
    r = new_client().post("/api/products", json={"name": ""})
    assert r.status_code == 401

def test_search_requires_q():
    client = new_client()
    r = client.get("/api/products/search")
    assert r.status_code == 400
    assert r.json()["message"] == 'Search query parameter "q" is required'
    assert client.get("/api/products/search", params={"q": ""}).status_code == 400

def test_search_matches_name_or_description():
    client = new_client()
    body = client.get("/api/products/search", params={"q": "LAPTOP"}).json()
    assert body["query"] == "LAPTOP"
    assert body["count"] == 1
    assert body["results"][0]["id"] == "1"

    body = client.get("/api/products/search", params={"q": "wireless"}).json()
    assert [p["id"] for p in body["results"]] == ["4"]

    body = client.get("/api/products/search", params={"q": "with"}).json()
    assert [p["id"] for p in body["results"]] == ["1", "2", "3", "5"]

def test_stats_on_seed_data():
    stats = new_client().get("/api/products/stats").json()
    assert stats["totalProducts"] == 5
    assert stats["inStock"] == 4
    assert stats["outOfStock"] == 1
    assert stats["categories"] == {"electronics": 3, "kitchen": 1, "furniture": 1}
    assert stats["averagePrice"] == 510
    assert stats["priceRange"] == {"min": 50, "max": 1200}

def test_stats_on_empty_store():
    stats = new_client(ProductStore()).get("/api/products/stats").json()
    assert stats["totalProducts"] == 0
    assert stats["averagePrice"] == 0
    assert stats["priceRange"] == {"min": 0, "max": 0}

def test_unknown_route_is_404():
    r = new_client().get("/api/unknown", params={"x": "1"})
    assert r.status_code == 404
    assert r.json() == {
        "error": "Not Found",
        "message": "Route GET /api/unknown?x=1 not found",
        "statusCode": 404,
    }

def test_unsupported_method_is_404():
    r = new_client().patch("/api/products/1", json=NEW_PRODUCT, headers=AUTH)
    assert r.status_code == 404
    assert r.json()["message"] == "Route PATCH /api/products/1 not found"

class BrokenStore(ProductStore):
    def list(self):
        raise RuntimeError("disk on fire")

def test_unexpected_errors_are_500_without_detail():
    client = new_client(BrokenStore(), raise_server_exceptions=False)
    r = client.get("/api/products/stats")
    assert r.status_code == 500
    assert r.json() == {
        "error": "Internal Server Error",
        "message": "Something went wrong!",
        "statusCode": 500,
    }
    assert "disk on fire" not in r.text
