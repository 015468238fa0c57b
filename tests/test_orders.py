import pytest


@pytest.fixture
def product(client):
    res = client.post(
        "/products",
        json={"name": "Cast iron pan", "price": 24.5, "stock": 5, "category": "HOME"},
    )
    assert res.status_code == 201, res.text
    return res.json()


def test_product_crud(client, product):
    assert product["description"] == ""
    assert product["images"] == []

    client.post("/products", json={"name": "Lipstick", "price": 9.99, "category": "BEAUTY"})
    page = client.get("/products?pageSize=1&page=2").json()
    assert page["total"] == 2
    assert page["totalPages"] == 2
    assert page["items"][0]["name"] == "Lipstick"

    res = client.patch(f"/products/{product['id']}", json={"price": 19.0, "images": ["a.png"]})
    assert res.status_code == 200
    assert res.json()["price"] == 19.0
    assert res.json()["images"] == ["a.png"]
    assert res.json()["stock"] == 5

    assert client.delete(f"/products/{product['id']}").status_code == 200
    assert client.get(f"/products/{product['id']}").status_code == 404


def test_product_validation(client):
    res = client.post("/products", json={"name": "Toy", "price": -1, "category": "HOME"})
    assert res.status_code == 400
    res = client.post("/products", json={"name": "Toy", "price": 1, "category": "TOYS"})
    assert res.status_code == 400


def test_orders_require_auth(client):
    assert client.get("/orders").status_code == 401


def test_place_order(client, auth_headers, product):
    res = client.post(
        "/orders",
        json={"items": [{"productId": product["id"], "quantity": 2}]},
        headers=auth_headers,
    )
    assert res.status_code == 201, res.text
    order = res.json()
    assert order["status"] == "PENDING"
    assert order["totalAmount"] == 49.0
    assert order["items"][0]["price"] == 24.5

    assert client.get(f"/products/{product['id']}").json()["stock"] == 3
    assert client.get("/orders/current", headers=auth_headers).json()["id"] == order["id"]
    assert [o["id"] for o in client.get("/orders", headers=auth_headers).json()] == [order["id"]]


def test_order_stock_and_product_checks(client, auth_headers, product):
    res = client.post(
        "/orders",
        json={"items": [{"productId": product["id"], "quantity": 6}]},
        headers=auth_headers,
    )
    assert res.status_code == 400
    res = client.post(
        "/orders", json={"items": [{"productId": 999, "quantity": 1}]}, headers=auth_headers
    )
    assert res.status_code == 400
    assert client.get(f"/products/{product['id']}").json()["stock"] == 5


def test_orders_are_private(client, auth_headers, register_user, product):
    order = client.post(
        "/orders", json={"items": [{"productId": product["id"]}]}, headers=auth_headers
    ).json()

    other = register_user(email="other@example.com")
    other_headers = {"Authorization": f"Bearer {other['token']}"}
    assert client.get(f"/orders/{order['id']}", headers=other_headers).status_code == 404
    assert client.get("/orders", headers=other_headers).json() == []
    assert client.get("/orders/current", headers=other_headers).status_code == 404


def test_update_and_delete_order(client, auth_headers, product):
    order = client.post(
        "/orders", json={"items": [{"productId": product["id"]}]}, headers=auth_headers
    ).json()

    res = client.patch(
        f"/orders/{order['id']}", json={"status": "SHIPPED"}, headers=auth_headers
    )
    assert res.status_code == 200
    assert res.json()["status"] == "SHIPPED"
    assert client.get("/orders/current", headers=auth_headers).status_code == 404

    assert client.delete(f"/orders/{order['id']}", headers=auth_headers).status_code == 200
    assert client.get(f"/orders/{order['id']}", headers=auth_headers).status_code == 404
