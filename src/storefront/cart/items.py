"""Cart item management: commands and handler.

Every command opens the user's cart first (creating it on demand) and drops
lines whose reservation window has lapsed, so expired items never survive a
read.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.domain import storefront
from storefront.product.product import Product
from storefront.variant.variant import ProductVariant

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Cart")
class OpenCart:
    user_id: Identifier(required=True)


@storefront.command(part_of="Cart")
class AddToCart:
    user_id: Identifier(required=True)
    variant_id: Identifier(required=True)
    quantity: Integer(required=True, min_value=1)


@storefront.command(part_of="Cart")
class UpdateCartItem:
    user_id: Identifier(required=True)
    item_id: Identifier(required=True)
    quantity: Integer(required=True, min_value=1)


@storefront.command(part_of="Cart")
class RemoveCartItem:
    user_id: Identifier(required=True)
    item_id: Identifier(required=True)


@storefront.command(part_of="Cart")
class ClearCart:
    user_id: Identifier(required=True)


def _open(user_id, purge=True):
    repo = current_domain.repository_for(Cart)
    cart = repo.find_for_user(user_id)
    if cart is None:
        return Cart(user_id=user_id)
    if not purge:
        return cart

    purged = cart.purge_expired()
    if purged:
        logger.info("cart_items_expired", cart_id=str(cart.id), user_id=str(user_id), purged=purged)
    return cart


def _sellable_variant(variant_id):
    """Load a variant that is on sale and whose product is on sale."""
    unavailable = ObjectNotFoundError({"variant_id": ["Product variant not found or unavailable"]})
    try:
        variant = current_domain.repository_for(ProductVariant).get(variant_id)
        product = current_domain.repository_for(Product).get(variant.product_id)
    except ObjectNotFoundError:
        raise unavailable from None

    if not (variant.is_active and product.is_active):
        raise unavailable
    return variant


@storefront.command_handler(part_of=Cart)
class CartItemsHandler:
    @handle(OpenCart)
    def open_cart(self, command):
        cart = _open(command.user_id)
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)

    @handle(AddToCart)
    def add_to_cart(self, command):
        variant = _sellable_variant(command.variant_id)
        cart = _open(command.user_id)
        item = cart.add_item(variant.id, command.quantity, available_stock=variant.stock)
        current_domain.repository_for(Cart).add(cart)
        return str(item.id)

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        cart = _open(command.user_id, purge=False)
        item = cart.item(command.item_id)
        variant = current_domain.repository_for(ProductVariant).get(item.variant_id)
        cart.update_item(item.id, command.quantity, available_stock=variant.stock)
        current_domain.repository_for(Cart).add(cart)

    @handle(RemoveCartItem)
    def remove_cart_item(self, command):
        cart = _open(command.user_id, purge=False)
        cart.remove_item(command.item_id)
        current_domain.repository_for(Cart).add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        cart = _open(command.user_id, purge=False)
        cart.clear()
        current_domain.repository_for(Cart).add(cart)
