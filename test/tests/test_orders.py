from models import Order, OrderItem


def _place(client, customer, restaurant, lines):
    return client.post("/api/orders", json={"restaurant_id": restaurant["id"], "items": lines},
                       headers=customer["headers"])


def test_total_uses_server_prices(client, customer, restaurant, menu_item):
    r = _place(client, customer, restaurant,
               [{"menu_item_id": menu_item["id"], "quantity": 3, "price": 0.01}])
    assert r.status_code == 201
    order = r.get_json()
    assert order["total_amount"] == 29.97
    assert order["status"] == "pending"
    assert order["customer_id"] == customer["user"]["id"]
    assert order["items"] == [{"id": order["items"][0]["id"], "order_id": order["id"],
                               "menu_item_id": menu_item["id"], "name": "Lasagna",
                               "price": 9.99, "quantity": 3}]
    assert order["restaurant"]["id"] == restaurant["id"]


def test_price_change_leaves_history_alone(client, owner, customer, restaurant, menu_item):
    order = _place(client, customer, restaurant, [{"menu_item_id": menu_item["id"], "quantity": 3}]).get_json()
    client.put(f"/api/menu-items/{menu_item['id']}", json={"price": 15, "name": "Big Lasagna"},
               headers=owner["headers"])

    history = client.get(f"/api/users/{customer['user']['id']}/orders", headers=customer["headers"]).get_json()
    assert history[0]["id"] == order["id"]
    assert history[0]["total_amount"] == 29.97
    assert history[0]["items"][0]["price"] == 9.99
    assert history[0]["items"][0]["name"] == "Lasagna"


def test_unknown_menu_item_writes_nothing(client, app, customer, restaurant, menu_item):
    r = _place(client, customer, restaurant, [
        {"menu_item_id": menu_item["id"], "quantity": 1},
        {"menu_item_id": 9999, "quantity": 1},
    ])
    assert r.status_code == 422
    assert "items.1.menu_item_id" in r.get_json()["errors"]
    with app.app_context():
        assert Order.query.count() == 0
        assert OrderItem.query.count() == 0


def test_order_validation(client, customer, restaurant, menu_item):
    assert _place(client, customer, restaurant, []).status_code == 422
    r = _place(client, customer, restaurant, [{"menu_item_id": menu_item["id"], "quantity": 0}])
    assert r.status_code == 422
    assert "items.0.quantity" in r.get_json()["errors"]


def test_only_customers_order(client, owner, restaurant, menu_item):
    r = _place(client, owner, restaurant, [{"menu_item_id": menu_item["id"], "quantity": 1}])
    assert r.status_code == 403


def test_status_any_to_any(client, owner, admin_headers, customer, restaurant, menu_item):
    order = _place(client, customer, restaurant, [{"menu_item_id": menu_item["id"], "quantity": 1}]).get_json()
    url = f"/api/orders/{order['id']}/status"

    assert client.post(url, json={"status": "delivered"}, headers=owner["headers"]).get_json()["status"] == "delivered"
    assert client.post(url, json={"status": "cancelled"}, headers=admin_headers).get_json()["status"] == "cancelled"
    assert client.post(url, json={"status": "pending"}, headers=owner["headers"]).get_json()["status"] == "pending"

    assert client.post(url, json={"status": "lost"}, headers=owner["headers"]).status_code == 422
    assert client.post(url, json={"status": "ready"}, headers=customer["headers"]).status_code == 403
    assert client.post("/api/orders/999/status", json={"status": "ready"}, headers=owner["headers"]).status_code == 404


def test_order_queries(client, owner, admin_headers, customer, restaurant, menu_item):
    _place(client, customer, restaurant, [{"menu_item_id": menu_item["id"], "quantity": 2}])

    by_restaurant = client.get(f"/api/restaurants/{restaurant['id']}/orders", headers=owner["headers"]).get_json()
    assert len(by_restaurant) == 1
    assert by_restaurant[0]["customer"]["email"] == "jane@example.com"

    everything = client.get("/api/orders", headers=admin_headers).get_json()
    assert len(everything) == 1
    assert client.get("/api/orders", headers=customer["headers"]).status_code == 403


def test_statistics(client, owner, admin_headers, customer, restaurant, menu_item):
    first = _place(client, customer, restaurant, [{"menu_item_id": menu_item["id"], "quantity": 3}]).get_json()
    second = _place(client, customer, restaurant, [{"menu_item_id": menu_item["id"], "quantity": 1}]).get_json()
    client.post(f"/api/orders/{second['id']}/status", json={"status": "cancelled"}, headers=owner["headers"])

    stats = client.get("/api/admin/statistics", headers=admin_headers).get_json()
    assert stats["total_orders"] == 2
    assert stats["total_restaurants"] == 1
    assert stats["total_revenue"] == first["total_amount"]
    assert stats["top_restaurants"][0]["customers"] == 1

    mine = client.get(f"/api/restaurants/{restaurant['id']}/statistics", headers=owner["headers"]).get_json()
    assert mine["total_orders"] == 2
    assert mine["total_customers"] == 1
    assert sum(row["amount"] for row in mine["yearly_sales"]) == 29.97


def test_oversized_numbers_are_rejected(client, app, customer, restaurant, menu_item):
    r = _place(client, customer, restaurant, [{"menu_item_id": menu_item["id"], "quantity": 10 ** 20}])
    assert r.status_code == 422
    assert "items.0.quantity" in r.get_json()["errors"]

    r = _place(client, customer, restaurant, [{"menu_item_id": 10 ** 20, "quantity": 1}])
    assert r.status_code == 422
    assert "items.0.menu_item_id" in r.get_json()["errors"]

    r = client.post("/api/orders", json={"restaurant_id": 10 ** 20,
                                         "items": [{"menu_item_id": menu_item["id"], "quantity": 1}]},
                    headers=customer["headers"])
    assert r.status_code == 422
    with app.app_context():
        assert Order.query.count() == 0
