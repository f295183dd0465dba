"""Checkout: turn the user's cart into an order.

The handler runs inside a single unit of work. Every precondition is checked
before anything is written, and the order, the stock decrements and the
emptied cart are committed together. Each touched aggregate carries a version,
so a concurrent checkout that drained the same variant first makes this one
fail with a version conflict instead of overselling.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.domain import storefront
from storefront.order.order import Order, PaymentMethod
from storefront.product.product import Product
from storefront.shared.errors import EmptyCartError, InsufficientStockError, ProductUnavailableError
from storefront.user.user import User
from storefront.variant.variant import ProductVariant

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id: Identifier(required=True)
    address_id: Identifier(required=True)
    payment_method: String(required=True, choices=PaymentMethod)
    customer_notes: String(max_length=500)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart_repo = current_domain.repository_for(Cart)
        variant_repo = current_domain.repository_for(ProductVariant)
        product_repo = current_domain.repository_for(Product)

        cart = cart_repo.find_for_user(command.user_id)
        if cart is None or not cart.items:
            raise EmptyCartError({"cart": ["Your cart is empty"]})

        user = current_domain.repository_for(User).get(command.user_id)
        address = user.address(command.address_id)

        lines = []
        for item in cart.items:
            variant = variant_repo.get(item.variant_id)
            product = product_repo.get(variant.product_id)
            if not (variant.is_active and product.is_active):
                raise ProductUnavailableError({"product": [f"The product {product.name} is no longer available"]})
            if item.quantity > variant.stock:
                raise InsufficientStockError(
                    {"stock": [f"Insufficient stock for {product.name}. Available: {variant.stock}"]}
                )
            lines.append((variant, product, item.quantity))

        order = Order.place(
            user_id=user.id,
            address_id=address.id,
            payment_method=command.payment_method,
            lines=lines,
            customer_notes=command.customer_notes,
        )
        current_domain.repository_for(Order).add(order)

        for variant, _, quantity in lines:
            variant.decrease_stock(quantity)
            variant_repo.add(variant)
            if not variant.is_active:
                logger.info("variant_stock_exhausted", variant_id=str(variant.id), sku=variant.sku)

        cart.clear()
        cart_repo.add(cart)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            user_id=str(user.id),
            total=order.total,
            lines=len(lines),
        )
        return str(order.id)
