"""Application tests for variant handlers."""

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain
from storefront.shared.errors import ConflictError
from storefront.variant.management import CreateVariant, RemoveVariant, UpdateVariant
from storefront.variant.variant import ProductVariant


def _create_variant(product_id, **overrides):
    defaults = {
        "product_id": product_id,
        "gender": "KIDS",
        "size": "S",
        "color": "Azul",
        "sku": "CAM-KID-S-AZU",
        "stock": 4,
        "price": 8.75,
    }
    defaults.update(overrides)
    return current_domain.process(CreateVariant(**defaults), asynchronous=False)


class TestCreateVariant:
    def test_create(self, product_id):
        variant_id = _create_variant(product_id)

        variant = current_domain.repository_for(ProductVariant).get(variant_id)
        assert variant.product_id == product_id
        assert variant.stock == 4
        assert variant.price == 8.75
        assert variant.is_active is True

    def test_created_without_stock_is_inactive(self, product_id):
        variant_id = _create_variant(product_id, stock=0)
        assert current_domain.repository_for(ProductVariant).get(variant_id).is_active is False

    def test_duplicate_sku(self, product_id, variant_id):
        with pytest.raises(ConflictError):
            _create_variant(product_id, sku="CAM-BAS-M-NEG")

    def test_unknown_product(self):
        with pytest.raises(ObjectNotFoundError):
            _create_variant("missing")

    def test_invalid_gender(self, product_id):
        with pytest.raises(ValidationError):
            _create_variant(product_id, gender="UNISEX")


class TestUpdateVariant:
    def test_update_price_and_color(self, variant_id):
        command = UpdateVariant(variant_id=variant_id, price=14.0, color="Gris", color_hex="#808080")
        current_domain.process(command, asynchronous=False)

        variant = current_domain.repository_for(ProductVariant).get(variant_id)
        assert variant.price == 14.0
        assert variant.color == "Gris"
        assert variant.stock == 10

    def test_zero_stock_deactivates(self, variant_id):
        current_domain.process(UpdateVariant(variant_id=variant_id, stock=0), asynchronous=False)
        assert current_domain.repository_for(ProductVariant).get(variant_id).is_active is False

    def test_sku_taken_by_another_variant(self, product_id, variant_id):
        other = _create_variant(product_id)
        with pytest.raises(ConflictError):
            current_domain.process(UpdateVariant(variant_id=other, sku="CAM-BAS-M-NEG"), asynchronous=False)


class TestRemoveVariant:
    def test_remove_is_soft(self, product_id, variant_id):
        current_domain.process(RemoveVariant(variant_id=variant_id), asynchronous=False)

        repo = current_domain.repository_for(ProductVariant)
        assert repo.get(variant_id).is_active is False
        assert repo.active_for_product(product_id) == []

    def test_restocking_a_removed_variant_puts_it_back_on_sale(self, variant_id):
        current_domain.process(RemoveVariant(variant_id=variant_id), asynchronous=False)
        current_domain.process(UpdateVariant(variant_id=variant_id, stock=3), asynchronous=False)

        assert current_domain.repository_for(ProductVariant).get(variant_id).is_active is True
