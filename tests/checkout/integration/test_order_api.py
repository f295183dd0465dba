"""Integration tests for the order endpoints."""

import pytest


def _checkout(client, headers, variant_id, address_id, quantity=2, payment_method="PAGO_MOVIL"):
    client.post("/cart", json={"variant_id": variant_id, "quantity": quantity}, headers=headers)
    return client.post(
        "/orders",
        json={"address_id": address_id, "payment_method": payment_method},
        headers=headers,
    )


@pytest.fixture()
def order(client, shopper_headers, variant_id, address_id):
    response = _checkout(client, shopper_headers, variant_id, address_id)
    assert response.status_code == 201
    return response.json()


class TestPlaceOrder:
    def test_place(self, order, address_id):
        assert order["status"] == "PENDING_PAYMENT"
        assert order["total"] == 25.0
        assert order["address"]["id"] == address_id
        [item] = order["items"]
        assert item["product_name"] == "Camisa Básica"
        assert item["subtotal"] == 25.0

    def test_cart_is_empty_afterwards(self, client, shopper_headers, order):
        assert client.get("/cart", headers=shopper_headers).json()["items"] == []

    def test_empty_cart_is_bad_request(self, client, shopper_headers, address_id):
        response = client.post(
            "/orders", json={"address_id": address_id, "payment_method": "ZELLE"}, headers=shopper_headers
        )
        assert response.status_code == 400

    def test_unknown_payment_method_is_bad_request(self, client, shopper_headers, variant_id, address_id):
        response = _checkout(client, shopper_headers, variant_id, address_id, payment_method="BITCOIN")
        assert response.status_code == 400

    def test_unknown_address_is_not_found(self, client, shopper_headers, variant_id, address_id):
        client.post("/cart", json={"variant_id": variant_id, "quantity": 1}, headers=shopper_headers)
        response = client.post(
            "/orders",
            json={"address_id": "5b0f4c1e-0000-4000-8000-000000000000", "payment_method": "ZELLE"},
            headers=shopper_headers,
        )
        assert response.status_code == 404


class TestReadOrders:
    def test_my_orders(self, client, shopper_headers, order):
        response = client.get("/orders", headers=shopper_headers)

        assert response.status_code == 200
        data = response.json()
        assert [o["id"] for o in data["data"]] == [order["id"]]
        assert data["meta"] == {"total": 1, "page": 1, "limit": 10, "total_pages": 1}

    def test_my_orders_filtered_by_status(self, client, shopper_headers, order):
        response = client.get("/orders", params={"status": "ENTREGADO"}, headers=shopper_headers)
        assert response.json()["data"] == []

    def test_paging_is_clamped(self, client, shopper_headers, order):
        meta = client.get("/orders", params={"page": 0, "limit": 500}, headers=shopper_headers).json()["meta"]
        assert (meta["page"], meta["limit"]) == (1, 50)

    def test_get_own_order(self, client, shopper_headers, order):
        response = client.get(f"/orders/{order['id']}", headers=shopper_headers)
        assert response.status_code == 200
        assert response.json()["id"] == order["id"]

    def test_other_customers_order_is_forbidden(self, client, order):
        from protean.utils.globals import current_domain
        from storefront.auth.tokens import issue_access_token
        from storefront.user.registration import SignInWithGoogle
        from storefront.user.user import User

        other_id = current_domain.process(
            SignInWithGoogle(google_id="google-other", email="other@example.com"), asynchronous=False
        )
        token = issue_access_token(current_domain.repository_for(User).get(other_id))["access_token"]

        response = client.get(f"/orders/{order['id']}", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403

    def test_admin_sees_any_order(self, client, admin_headers, order):
        assert client.get(f"/orders/{order['id']}", headers=admin_headers).status_code == 200

    def test_unknown_order(self, client, shopper_headers):
        assert client.get("/orders/missing", headers=shopper_headers).status_code == 404


class TestAdminOrders:
    def test_all_orders_requires_admin(self, client, shopper_headers, order):
        assert client.get("/orders/all", headers=shopper_headers).status_code == 403

    def test_all_orders_include_customer(self, client, admin_headers, order, shopper_id):
        data = client.get("/orders/all", headers=admin_headers).json()

        [listed] = data["data"]
        assert listed["user"]["id"] == shopper_id
        assert listed["user"]["email"] == "shopper@example.com"

    def test_all_orders_filtered_by_user(self, client, admin_headers, admin_id, order):
        data = client.get("/orders/all", params={"user_id": admin_id}, headers=admin_headers).json()
        assert data["meta"]["total"] == 0

    def test_admin_updates_status(self, client, admin_headers, order):
        response = client.patch(
            f"/orders/{order['id']}/status",
            json={"status": "PAGO_CONFIRMADO", "admin_notes": "Referencia 0042"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "PAGO_CONFIRMADO"
        assert data["paid_at"] is not None
        assert data["admin_notes"] == "Referencia 0042"

    def test_customer_cannot_update_status(self, client, shopper_headers, order):
        response = client.patch(
            f"/orders/{order['id']}/status", json={"status": "CANCELADO"}, headers=shopper_headers
        )
        assert response.status_code == 403

    def test_unknown_status_is_bad_request(self, client, admin_headers, order):
        response = client.patch(f"/orders/{order['id']}/status", json={"status": "LOST"}, headers=admin_headers)
        assert response.status_code == 400
