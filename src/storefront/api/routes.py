"""Every storefront router, in the order the app mounts them."""

from storefront.api.account import address_router, auth_router, favorite_router
from storefront.api.catalog import category_router, product_router, tag_router
from storefront.api.checkout import cart_router, order_router
from storefront.api.upload import upload_router

routers = [
    auth_router,
    address_router,
    category_router,
    product_router,
    tag_router,
    cart_router,
    order_router,
    favorite_router,
    upload_router,
]
