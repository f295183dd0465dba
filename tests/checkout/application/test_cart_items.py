"""Application tests for the cart handlers."""

from datetime import datetime, timedelta

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain
from storefront.cart.cart import Cart
from storefront.cart.items import AddToCart, ClearCart, OpenCart, RemoveCartItem, UpdateCartItem
from storefront.product.details import DeactivateProduct
from storefront.variant.management import RemoveVariant


def _add(user_id, variant_id, quantity=1):
    return current_domain.process(
        AddToCart(user_id=user_id, variant_id=variant_id, quantity=quantity), asynchronous=False
    )


def _cart(user_id):
    return current_domain.repository_for(Cart).find_for_user(user_id)


def _expire(user_id, item_id):
    cart = _cart(user_id)
    cart.item(item_id).expires_at = datetime.now() - timedelta(minutes=1)
    current_domain.repository_for(Cart).add(cart)


class TestOpenCart:
    def test_creates_cart_on_first_access(self, shopper_id):
        cart_id = current_domain.process(OpenCart(user_id=shopper_id), asynchronous=False)

        cart = _cart(shopper_id)
        assert str(cart.id) == cart_id
        assert cart.items == []

    def test_one_cart_per_user(self, shopper_id):
        first = current_domain.process(OpenCart(user_id=shopper_id), asynchronous=False)
        second = current_domain.process(OpenCart(user_id=shopper_id), asynchronous=False)
        assert first == second

    def test_opening_drops_expired_items(self, shopper_id, variant_id):
        item_id = _add(shopper_id, variant_id)
        _expire(shopper_id, item_id)

        current_domain.process(OpenCart(user_id=shopper_id), asynchronous=False)

        assert _cart(shopper_id).items == []


class TestAddToCart:
    def test_add(self, shopper_id, variant_id):
        item_id = _add(shopper_id, variant_id, quantity=2)

        item = _cart(shopper_id).item(item_id)
        assert item.variant_id == variant_id
        assert item.quantity == 2

    def test_adding_again_merges(self, shopper_id, variant_id):
        first = _add(shopper_id, variant_id, quantity=2)
        second = _add(shopper_id, variant_id, quantity=3)

        assert first == second
        assert _cart(shopper_id).total_items == 5

    def test_more_than_stock(self, shopper_id, variant_id):
        with pytest.raises(ValidationError):
            _add(shopper_id, variant_id, quantity=11)

    def test_unknown_variant(self, shopper_id):
        with pytest.raises(ObjectNotFoundError):
            _add(shopper_id, "missing")

    def test_removed_variant(self, shopper_id, variant_id):
        current_domain.process(RemoveVariant(variant_id=variant_id), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            _add(shopper_id, variant_id)

    def test_inactive_product(self, shopper_id, product_id, variant_id):
        current_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            _add(shopper_id, variant_id)

    def test_expired_line_is_replaced_by_a_fresh_one(self, shopper_id, variant_id):
        stale = _add(shopper_id, variant_id, quantity=4)
        _expire(shopper_id, stale)

        fresh = _add(shopper_id, variant_id, quantity=1)

        cart = _cart(shopper_id)
        assert fresh != stale
        assert [(i.id, i.quantity) for i in cart.items] == [(fresh, 1)]


class TestChangeCart:
    def test_update_quantity(self, shopper_id, variant_id):
        item_id = _add(shopper_id, variant_id)
        current_domain.process(UpdateCartItem(user_id=shopper_id, item_id=item_id, quantity=7), asynchronous=False)
        assert _cart(shopper_id).item(item_id).quantity == 7

    def test_update_expired_item(self, shopper_id, variant_id):
        item_id = _add(shopper_id, variant_id)
        _expire(shopper_id, item_id)

        with pytest.raises(ValidationError):
            current_domain.process(
                UpdateCartItem(user_id=shopper_id, item_id=item_id, quantity=2), asynchronous=False
            )

    def test_update_beyond_stock(self, shopper_id, variant_id):
        item_id = _add(shopper_id, variant_id)
        with pytest.raises(ValidationError):
            current_domain.process(
                UpdateCartItem(user_id=shopper_id, item_id=item_id, quantity=11), asynchronous=False
            )

    def test_remove_item(self, shopper_id, variant_id):
        item_id = _add(shopper_id, variant_id)
        current_domain.process(RemoveCartItem(user_id=shopper_id, item_id=item_id), asynchronous=False)
        assert _cart(shopper_id).items == []

    def test_remove_unknown_item(self, shopper_id):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(RemoveCartItem(user_id=shopper_id, item_id="missing"), asynchronous=False)

    def test_clear(self, shopper_id, variant_id):
        _add(shopper_id, variant_id, quantity=3)
        current_domain.process(ClearCart(user_id=shopper_id), asynchronous=False)
        assert _cart(shopper_id).items == []
