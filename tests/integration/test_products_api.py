def test_product_crud_and_search(client, manager_factory, auth_headers):
    headers = auth_headers(manager_factory())
    unit = client.post("/api/units", json={"name": "pcs"}, headers=headers).json()["data"]

    r = client.post(
        "/api/products",
        json={"name": "Steel Bolt", "sku": "BOLT-1", "price": "2.50", "unit_id": unit["unit_id"]},
        headers=headers,
    )
    assert r.status_code == 201, r.text
    bolt = r.json()["data"]
    assert bolt["price"] == 2.5
    assert bolt["unit"]["name"] == "pcs"
    assert bolt["stocks"] == []
    assert bolt["total_stock"] == 0
    client.post("/api/products", json={"name": "Copper Nut", "sku": "NUT-9"}, headers=headers)

    by_name = client.get("/api/products", params={"search": "bolt"}, headers=headers).json()["data"]
    assert [p["name"] for p in by_name] == ["Steel Bolt"]
    by_sku = client.get("/api/products", params={"search": "nut-9"}, headers=headers).json()["data"]
    assert [p["name"] for p in by_sku] == ["Copper Nut"]
    assert len(client.get("/api/products", headers=headers).json()["data"]) == 2

    r = client.put(f"/api/products/{bolt['product_id']}", json={"price": 3}, headers=headers)
    assert r.json()["data"]["price"] == 3.0

    r = client.delete(f"/api/products/{bolt['product_id']}", headers=headers)
    assert r.json()["message"] == "Product deleted successfully"
    assert client.get(f"/api/products/{bolt['product_id']}", headers=headers).status_code == 404


def test_duplicate_sku(client, manager_factory, product_factory, auth_headers):
    headers = auth_headers(manager_factory())
    product_factory("A", sku="SKU-1")
    other = product_factory("B", sku="SKU-2")

    r = client.post("/api/products", json={"name": "C", "sku": "SKU-1"}, headers=headers)
    assert r.status_code == 400
    assert r.json()["error"] == "Product with this SKU already exists"

    r = client.put(f"/api/products/{other.product_id}", json={"sku": "SKU-1"}, headers=headers)
    assert r.status_code == 400

    # Keeping its own SKU is not a conflict
    r = client.put(f"/api/products/{other.product_id}", json={"sku": "SKU-2", "name": "B2"}, headers=headers)
    assert r.status_code == 200


def test_negative_price_rejected(client, manager_factory, auth_headers):
    r = client.post("/api/products", json={"name": "Bad", "price": -1}, headers=auth_headers(manager_factory()))
    assert r.status_code == 400
    assert r.json()["success"] is False


def test_stock_upsert(client, manager_factory, product_factory, warehouse_factory, auth_headers):
    headers = auth_headers(manager_factory())
    product = product_factory()
    main = warehouse_factory("Main")
    spare = warehouse_factory("Spare")
    url = f"/api/products/{product.product_id}/stock"

    r = client.post(
        url,
        json={"stocks": [{"warehouse_id": main.warehouse_id, "quantity": 5}, {"warehouse_id": spare.warehouse_id, "quantity": 2}]},
        headers=headers,
    )
    assert r.status_code == 200, r.text
    assert [(s["warehouse_id"], s["quantity"]) for s in r.json()["data"]] == [(main.warehouse_id, 5), (spare.warehouse_id, 2)]

    client.post(url, json={"stocks": [{"warehouse_id": main.warehouse_id, "quantity": 9}]}, headers=headers)
    rows = client.get(url, headers=headers).json()["data"]
    assert [(s["warehouse_id"], s["quantity"]) for s in rows] == [(main.warehouse_id, 9), (spare.warehouse_id, 2)]
    assert rows[0]["warehouse"]["name"] == "Main"

    detail = client.get(f"/api/products/{product.product_id}", headers=headers).json()["data"]
    assert detail["total_stock"] == 11


def test_stock_errors(client, manager_factory, product_factory, auth_headers):
    headers = auth_headers(manager_factory())
    product = product_factory()

    r = client.post(f"/api/products/{product.product_id}/stock", json={"stocks": "lots"}, headers=headers)
    assert r.status_code == 400
    assert r.json()["error"] == "Stocks must be an array"

    r = client.post(f"/api/products/{product.product_id}/stock", json={"stocks": [{"quantity": 1}]}, headers=headers)
    assert r.status_code == 400

    r = client.post("/api/products/999/stock", json={"stocks": []}, headers=headers)
    assert r.status_code == 404
    assert client.get("/api/products/999/stock", headers=headers).status_code == 404
