"""Order status changes by staff: command and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order, OrderStatus
from storefront.shared.errors import ForbiddenError
from storefront.user.user import Role, User

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id: Identifier(required=True)
    changed_by: Identifier(required=True)
    status: String(required=True, choices=OrderStatus)
    admin_notes: String(max_length=500)


@storefront.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        staff = current_domain.repository_for(User).get(command.changed_by)
        if staff.role == Role.USER.value:
            raise ForbiddenError({"role": ["Only staff can change an order's status"]})

        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        previous = order.status
        order.change_status(command.status, admin_notes=command.admin_notes)
        repo.add(order)

        logger.info(
            "order_status_changed",
            order_id=str(order.id),
            previous_status=previous,
            new_status=order.status,
            changed_by=str(staff.id),
        )
