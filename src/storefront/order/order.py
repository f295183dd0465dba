"""Order aggregate root with the OrderItem snapshot entity."""

from datetime import datetime
from enum import Enum

from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.domain import storefront


class OrderStatus(Enum):
    PENDING_PAYMENT = "PENDING_PAYMENT"
    PAGO_CONFIRMADO = "PAGO_CONFIRMADO"
    EN_CAMINO = "EN_CAMINO"
    ENTREGADO = "ENTREGADO"
    CANCELADO = "CANCELADO"


class PaymentMethod(Enum):
    TRANSFERENCIA = "TRANSFERENCIA"
    PAGO_MOVIL = "PAGO_MOVIL"
    ZELLE = "ZELLE"
    EFECTIVO = "EFECTIVO"
    MERCADO_PAGO = "MERCADO_PAGO"


# Moving into one of these statuses stamps the matching timestamp.
# Any status may be set from any other; this table is the only side effect.
_STATUS_TIMESTAMPS = {
    OrderStatus.PAGO_CONFIRMADO.value: "paid_at",
    OrderStatus.EN_CAMINO.value: "shipped_at",
    OrderStatus.ENTREGADO.value: "delivered_at",
    OrderStatus.CANCELADO.value: "cancelled_at",
}


@storefront.entity(part_of="Order")
class OrderItem:
    """What was bought, copied from the catalog at checkout time.

    Later edits to the product or variant never change these values.
    """

    variant_id: Identifier(required=True)
    product_name: String(required=True, max_length=200)
    variant_size: String(required=True, max_length=10)
    variant_color: String(required=True, max_length=50)
    variant_gender: String(required=True, max_length=10)
    price: Float(required=True, min_value=0.0)
    quantity: Integer(required=True, min_value=1)
    subtotal: Float(required=True, min_value=0.0)


@storefront.aggregate
class Order:
    user_id: Identifier(required=True)
    address_id: Identifier(required=True)
    items: HasMany(OrderItem)
    subtotal: Float(required=True, min_value=0.0)
    total: Float(required=True, min_value=0.0)
    status: String(choices=OrderStatus, default=OrderStatus.PENDING_PAYMENT.value)
    payment_method: String(required=True, choices=PaymentMethod)
    payment_proof: String(max_length=500)
    customer_notes: String(max_length=500)
    admin_notes: String(max_length=500)
    paid_at: DateTime()
    shipped_at: DateTime()
    delivered_at: DateTime()
    cancelled_at: DateTime()
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def place(cls, user_id, address_id, payment_method, lines, customer_notes=None):
        """Create a pending order from ``(variant, product, quantity)`` lines."""
        from storefront.order.events import OrderPlaced

        now = datetime.now()
        items = [
            OrderItem(
                variant_id=variant.id,
                product_name=product.name,
                variant_size=variant.size,
                variant_color=variant.color,
                variant_gender=variant.gender,
                price=variant.price,
                quantity=quantity,
                subtotal=round(variant.price * quantity, 2),
            )
            for variant, product, quantity in lines
        ]
        subtotal = round(sum(item.subtotal for item in items), 2)

        order = cls(
            user_id=user_id,
            address_id=address_id,
            items=items,
            subtotal=subtotal,
            total=subtotal,
            payment_method=payment_method,
            customer_notes=customer_notes,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=order.id,
                user_id=user_id,
                total=order.total,
                item_count=sum(item.quantity for item in items),
                placed_at=now,
            )
        )
        return order

    def change_status(self, status, admin_notes=None):
        from storefront.order.events import OrderStatusChanged

        previous = self.status
        now = datetime.now()

        self.status = status
        if admin_notes is not None:
            self.admin_notes = admin_notes
        stamp = _STATUS_TIMESTAMPS.get(status)
        if stamp:
            setattr(self, stamp, now)
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=self.id,
                previous_status=previous,
                new_status=status,
                changed_at=now,
            )
        )


@storefront.repository(part_of=Order)
class OrderRepository:
    def page(self, page, **filters):
        """Newest first; returns ``(orders, total)``."""
        criteria = {key: value for key, value in filters.items() if value is not None}
        result = (
            self._dao.query.filter(**criteria)
            .order_by("-created_at")
            .offset(page.offset)
            .limit(page.limit)
            .all()
        )
        return result.items, result.total
