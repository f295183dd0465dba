"""BDD tests for cart line expiry."""

from datetime import datetime, timedelta

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, scenarios, then, when
from storefront.cart.cart import CART_ITEM_TTL, Cart
from storefront.cart.items import OpenCart, UpdateCartItem

scenarios("features/cart_expiry.feature")


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse("the cart line lapsed {days:d} days ago"))
def line_lapsed(shopper, cart_item_id, days):
    repo = current_domain.repository_for(Cart)
    cart = repo.find_for_user(shopper["user_id"])
    # Added `days` ago, so the hold ran out `days - 5` days ago
    cart.item(cart_item_id).expires_at = datetime.now() - timedelta(days=days) + CART_ITEM_TTL
    repo.add(cart)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when("the shopper opens the cart")
def open_cart(shopper):
    current_domain.process(OpenCart(user_id=shopper["user_id"]), asynchronous=False)


@when(parsers.cfparse("the shopper changes the quantity to {quantity:d}"))
def change_quantity(shopper, cart_item_id, quantity, error):
    command = UpdateCartItem(user_id=shopper["user_id"], item_id=cart_item_id, quantity=quantity)
    try:
        current_domain.process(command, asynchronous=False)
    except ValidationError as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart holds {quantity:d} units"))
def cart_holds(shopper, quantity):
    assert current_domain.repository_for(Cart).find_for_user(shopper["user_id"]).total_items == quantity


@then("the change is rejected as expired")
def rejected_as_expired(error):
    assert isinstance(error["exc"], ValidationError)
    assert "item" in error["exc"].messages
