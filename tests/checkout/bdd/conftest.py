"""Steps shared by the checkout features."""

import pytest
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers
from storefront.cart.items import AddToCart


@pytest.fixture()
def error():
    """Container for captured errors."""
    return {"exc": None}


@given(
    parsers.cfparse("a product variant priced at {price:f} with {stock:d} units in stock"),
    target_fixture="variant",
)
def stocked_variant(product_id, price, stock):
    from storefront.variant.management import CreateVariant

    command = CreateVariant(
        product_id=product_id,
        gender="WOMEN",
        size="S",
        color="Blanco",
        sku="CAM-BAS-S-BLA",
        stock=stock,
        price=price,
    )
    return current_domain.process(command, asynchronous=False)


@given("a shopper with a delivery address", target_fixture="shopper")
def shopper_with_address(shopper_id, address_id):
    return {"user_id": shopper_id, "address_id": address_id}


@given(parsers.cfparse("the shopper has {quantity:d} units in the cart"), target_fixture="cart_item_id")
def units_in_cart(shopper, variant, quantity):
    command = AddToCart(user_id=shopper["user_id"], variant_id=variant, quantity=quantity)
    return current_domain.process(command, asynchronous=False)
