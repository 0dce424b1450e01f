from bizcrm.db import models


def _stock(db_session, product, warehouse):
    db_session.expire_all()
    row = (
        db_session.query(models.ProductStock)
        .filter_by(product_id=product.product_id, warehouse_id=warehouse.warehouse_id)
        .one()
    )
    return row.quantity


def test_create_sale_totals_and_decrements_stock(
    client, db_session, monkeypatch, manager_factory, counterparty_factory, product_factory,
    service_factory, warehouse_factory, auth_headers,
):
    rep = manager_factory()
    headers = auth_headers(rep)
    cp = counterparty_factory(rep)
    laptop = product_factory("Laptop", price="1000.00")
    cable = product_factory("Cable", price="5.50")
    setup = service_factory("Setup", price="80.00")
    warehouse = warehouse_factory()
    monkeypatch.setenv("DEFAULT_WAREHOUSE_ID", str(warehouse.warehouse_id))
    client.post(
        f"/api/products/{laptop.product_id}/stock",
        json={"stocks": [{"warehouse_id": warehouse.warehouse_id, "quantity": 10}]},
        headers=headers,
    )

    r = client.post(
        "/api/sales",
        json={
            "counterparty_id": cp.counterparty_id,
            "status": "New",
            "products": [
                {"product_id": laptop.product_id, "quantity": 2},
                {"product_id": cable.product_id, "quantity": 4},
            ],
            "services": [{"service_id": setup.service_id}],
        },
        headers=headers,
    )
    assert r.status_code == 201, r.text
    sale = r.json()["data"]
    assert sale["responsible_manager_id"] == rep.manager_id
    assert sale["total_price"] == 2 * 1000 + 4 * 5.5 + 80
    assert sale["counterparty"]["name"] == "Acme"
    assert {line["product"]["name"] for line in sale["products"]} == {"Laptop", "Cable"}
    assert sale["services"][0]["service"]["name"] == "Setup"
    assert sale["sale_date"]

    # Only products with a stock row in the default warehouse are decremented
    assert _stock(db_session, laptop, warehouse) == 8


def test_update_replaces_lines_only_when_given(
    client, manager_factory, counterparty_factory, product_factory, service_factory, auth_headers
):
    rep = manager_factory()
    headers = auth_headers(rep)
    cp = counterparty_factory(rep)
    a = product_factory("A", price="10")
    b = product_factory("B", price="20")
    svc = service_factory(price="1")
    sale = client.post(
        "/api/sales",
        json={
            "counterparty_id": cp.counterparty_id,
            "status": "New",
            "products": [{"product_id": a.product_id, "quantity": 1}],
            "services": [{"service_id": svc.service_id}],
        },
        headers=headers,
    ).json()["data"]

    r = client.put(f"/api/sales/{sale['sale_id']}", json={"status": "Paid"}, headers=headers)
    assert r.json()["data"]["status"] == "Paid"
    assert r.json()["data"]["total_price"] == 11

    r = client.put(
        f"/api/sales/{sale['sale_id']}",
        json={"products": [{"product_id": b.product_id, "quantity": 3}]},
        headers=headers,
    )
    data = r.json()["data"]
    assert [line["product_id"] for line in data["products"]] == [b.product_id]
    assert data["total_price"] == 61


def test_sale_visibility_and_delete(client, admin, manager_factory, counterparty_factory, auth_headers):
    head = manager_factory("head")
    rep = manager_factory("manager", supervisors=[head])
    peer = manager_factory("manager")
    cp = counterparty_factory(rep)
    sale = client.post(
        "/api/sales", json={"counterparty_id": cp.counterparty_id, "status": "New"}, headers=auth_headers(rep)
    ).json()["data"]
    url = f"/api/sales/{sale['sale_id']}"

    assert client.get(url, headers=auth_headers(head)).status_code == 200
    assert client.get(url, headers=auth_headers(admin)).status_code == 200
    assert client.get(url, headers=auth_headers(peer)).status_code == 404
    assert client.get("/api/sales", headers=auth_headers(peer)).json()["data"] == []
    assert client.delete(url, headers=auth_headers(peer)).status_code == 404

    assert client.delete(url, headers=auth_headers(rep)).json()["message"] == "Sale deleted successfully"
    assert client.get(url, headers=auth_headers(rep)).status_code == 404


def test_sale_with_unknown_counterparty(client, manager_factory, auth_headers):
    r = client.post("/api/sales", json={"counterparty_id": 4242, "status": "New"}, headers=auth_headers(manager_factory()))
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid reference or duplicate value"


def test_product_sold_cannot_be_deleted(client, manager_factory, counterparty_factory, product_factory, auth_headers):
    rep = manager_factory()
    headers = auth_headers(rep)
    cp = counterparty_factory(rep)
    product = product_factory()
    client.post(
        "/api/sales",
        json={"counterparty_id": cp.counterparty_id, "status": "New", "products": [{"product_id": product.product_id}]},
        headers=headers,
    )
    r = client.delete(f"/api/products/{product.product_id}", headers=headers)
    assert r.status_code == 409
    assert r.json()["error"] == "Product is still referenced by other records"
