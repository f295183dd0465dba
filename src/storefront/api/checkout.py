"""FastAPI endpoints for the shopping cart and orders."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api import views
from storefront.api.schemas import (
    AddToCartRequest,
    CartResponse,
    OrderPageResponse,
    OrderResponse,
    PlaceOrderRequest,
    UpdateCartItemRequest,
    UpdateOrderStatusRequest,
)
from storefront.auth.dependencies import admin_user, authenticated_user
from storefront.cart.cart import Cart
from storefront.cart.items import AddToCart, ClearCart, OpenCart, RemoveCartItem, UpdateCartItem
from storefront.order.order import Order, OrderStatus
from storefront.order.placement import PlaceOrder
from storefront.order.status import UpdateOrderStatus
from storefront.shared.errors import ForbiddenError
from storefront.shared.pagination import paginate
from storefront.user.user import Role, User

cart_router = APIRouter(prefix="/cart", tags=["cart"])
order_router = APIRouter(prefix="/orders", tags=["orders"])

ORDERS_DEFAULT_LIMIT = 10
ORDERS_MAX_LIMIT = 50


def _cart(user) -> dict:
    return views.cart_view(current_domain.repository_for(Cart).find_for_user(user.id))


# --- Cart endpoints ---


@cart_router.get("", response_model=CartResponse)
async def get_cart(user: User = Depends(authenticated_user)):
    current_domain.process(OpenCart(user_id=str(user.id)), asynchronous=False)
    return _cart(user)


@cart_router.post("", status_code=201, response_model=CartResponse)
async def add_to_cart(body: AddToCartRequest, user: User = Depends(authenticated_user)):
    command = AddToCart(user_id=str(user.id), variant_id=str(body.variant_id), quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return _cart(user)


@cart_router.delete("", response_model=CartResponse)
async def clear_cart(user: User = Depends(authenticated_user)):
    current_domain.process(ClearCart(user_id=str(user.id)), asynchronous=False)
    return _cart(user)


@cart_router.patch("/items/{item_id}", response_model=CartResponse)
async def update_cart_item(item_id: str, body: UpdateCartItemRequest, user: User = Depends(authenticated_user)):
    command = UpdateCartItem(user_id=str(user.id), item_id=item_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return _cart(user)


@cart_router.delete("/items/{item_id}", response_model=CartResponse)
async def remove_cart_item(item_id: str, user: User = Depends(authenticated_user)):
    current_domain.process(RemoveCartItem(user_id=str(user.id), item_id=item_id), asynchronous=False)
    return _cart(user)


# --- Order endpoints ---


@order_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(body: PlaceOrderRequest, user: User = Depends(authenticated_user)):
    command = PlaceOrder(
        user_id=str(user.id),
        address_id=str(body.address_id),
        payment_method=body.payment_method.value,
        customer_notes=body.customer_notes,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return views.order_view(current_domain.repository_for(Order).get(order_id))


@order_router.get("", response_model=OrderPageResponse)
async def my_orders(
    status: OrderStatus | None = None,
    page: int = 1,
    limit: int = ORDERS_DEFAULT_LIMIT,
    user: User = Depends(authenticated_user),
):
    window = paginate(page, limit, default_limit=ORDERS_DEFAULT_LIMIT, max_limit=ORDERS_MAX_LIMIT)
    orders, total = current_domain.repository_for(Order).page(
        window, user_id=user.id, status=status.value if status else None
    )
    return {"data": [views.order_view(o) for o in orders], "meta": window.meta(total)}


@order_router.get("/all", response_model=OrderPageResponse, dependencies=[Depends(admin_user)])
async def all_orders(
    status: OrderStatus | None = None,
    user_id: str | None = None,
    page: int = 1,
    limit: int = ORDERS_DEFAULT_LIMIT,
):
    window = paginate(page, limit, default_limit=ORDERS_DEFAULT_LIMIT, max_limit=ORDERS_MAX_LIMIT)
    orders, total = current_domain.repository_for(Order).page(
        window, user_id=user_id, status=status.value if status else None
    )
    return {"data": [views.order_view(o, include_user=True) for o in orders], "meta": window.meta(total)}


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, user: User = Depends(authenticated_user)):
    order = current_domain.repository_for(Order).get(order_id)
    if str(order.user_id) != str(user.id) and user.role == Role.USER.value:
        raise ForbiddenError({"order": ["You do not have access to this order"]})
    return views.order_view(order)


@order_router.patch("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest, user: User = Depends(authenticated_user)):
    command = UpdateOrderStatus(
        order_id=order_id,
        changed_by=str(user.id),
        status=body.status.value,
        admin_notes=body.admin_notes,
    )
    current_domain.process(command, asynchronous=False)
    return views.order_view(current_domain.repository_for(Order).get(order_id), include_user=True)
