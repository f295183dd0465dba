"""Integration tests for how handler errors surface over HTTP."""

from protean.exceptions import ExpectedVersionError
from storefront.variant.variant import ProductVariant


class TestConflictResponses:
    def test_duplicate_category_body(self, client, admin_headers, category_id):
        response = client.post("/categories", json={"name": "Camisas", "color": "#FF5733"}, headers=admin_headers)

        assert response.status_code == 409
        assert response.json() == {"error": {"slug": ["A category with slug 'camisas' already exists"]}}

    def test_duplicate_sku_body(self, client, admin_headers, product_id, variant_id):
        response = client.post(
            "/products/variants",
            json={
                "product_id": product_id,
                "gender": "MEN",
                "size": "L",
                "color": "Negro",
                "sku": "CAM-BAS-M-NEG",
                "stock": 1,
                "price": 12.5,
            },
            headers=admin_headers,
        )

        assert response.status_code == 409
        assert "sku" in response.json()["error"]

    def test_concurrent_modification_is_conflict(self, client, admin_headers, variant_id, monkeypatch):
        def stale_write(self, **changes):
            raise ExpectedVersionError("Wrong expected version: 0 (Aggregate: ProductVariant, Version: 1)")

        monkeypatch.setattr(ProductVariant, "update_details", stale_write)

        response = client.patch(f"/products/variants/{variant_id}", json={"stock": 4}, headers=admin_headers)

        assert response.status_code == 409
        assert response.json() == {"error": {"_entity": ["The record was modified concurrently, please retry"]}}


class TestForbiddenResponses:
    def test_customer_status_change_body(self, client, shopper_headers, variant_id, address_id):
        client.post("/cart", json={"variant_id": variant_id, "quantity": 1}, headers=shopper_headers)
        order = client.post(
            "/orders", json={"address_id": address_id, "payment_method": "ZELLE"}, headers=shopper_headers
        ).json()

        response = client.patch(f"/orders/{order['id']}/status", json={"status": "CANCELADO"}, headers=shopper_headers)

        assert response.status_code == 403
        assert response.json() == {"error": {"role": ["Only staff can change an order's status"]}}
