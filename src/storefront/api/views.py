"""Read-side helpers that turn aggregates into response payloads.

Each function returns a plain dict shaped like the matching schema in
``storefront.api.schemas``; related aggregates are loaded here so routes stay
thin.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.category.category import Category
from storefront.category.subcategory import Subcategory
from storefront.product.product import Product
from storefront.tag.tag import Tag
from storefront.user.user import User
from storefront.variant.variant import ProductVariant


def _get_or_none(aggregate_cls, identifier):
    if not identifier:
        return None
    try:
        return current_domain.repository_for(aggregate_cls).get(identifier)
    except ObjectNotFoundError:
        return None


def summary(record):
    return {"id": str(record.id), "name": record.name, "slug": record.slug}


def subcategory_view(subcategory):
    return {
        "id": str(subcategory.id),
        "category_id": str(subcategory.category_id),
        "name": subcategory.name,
        "slug": subcategory.slug,
        "description": subcategory.description,
        "icon": subcategory.icon,
        "order": subcategory.display_order,
        "is_active": subcategory.is_active,
    }


def category_view(category, active_subcategories_only=True):
    subcategories = current_domain.repository_for(Subcategory).for_category(
        category.id, active_only=active_subcategories_only
    )
    return {
        "id": str(category.id),
        "name": category.name,
        "slug": category.slug,
        "description": category.description,
        "color": category.color,
        "icon": category.icon,
        "order": category.display_order,
        "is_active": category.is_active,
        "subcategories": [subcategory_view(s) for s in subcategories],
    }


def category_detail_view(category):
    view = category_view(category, active_subcategories_only=False)
    products = current_domain.repository_for(Product).latest_active_in_category(category.id, limit=10)
    view["products"] = [summary(p) for p in products]
    return view


def variant_view(variant):
    return {
        "id": str(variant.id),
        "product_id": str(variant.product_id),
        "gender": variant.gender,
        "size": variant.size,
        "color": variant.color,
        "color_hex": variant.color_hex,
        "sku": variant.sku,
        "stock": variant.stock,
        "price": variant.price,
        "is_active": variant.is_active,
    }


def image_view(image):
    return {
        "id": str(image.id),
        "url": image.url,
        "alt": image.alt,
        "order": image.display_order,
    }


def tag_view(tag):
    return {
        "id": str(tag.id),
        "name": tag.name,
        "slug": tag.slug,
        "color": tag.color,
        "is_active": tag.is_active,
    }


def product_view(product, variants=None):
    """Full product payload with category, active variants, active images and tags."""
    if variants is None:
        variants = current_domain.repository_for(ProductVariant).active_for_product(product.id)
    category = _get_or_none(Category, product.category_id)
    subcategory = _get_or_none(Subcategory, product.subcategory_id)
    tags = [tag for tag in (_get_or_none(Tag, tag_id) for tag_id in product.tag_ids) if tag and tag.is_active]

    return {
        "id": str(product.id),
        "name": product.name,
        "slug": product.slug,
        "description": product.description,
        "category_id": str(product.category_id),
        "subcategory_id": str(product.subcategory_id) if product.subcategory_id else None,
        "meta_title": product.meta_title,
        "meta_description": product.meta_description,
        "is_featured": product.is_featured,
        "is_active": product.is_active,
        "created_at": product.created_at,
        "updated_at": product.updated_at,
        "category": summary(category) if category else None,
        "subcategory": summary(subcategory) if subcategory else None,
        "variants": [variant_view(v) for v in variants],
        "images": [image_view(i) for i in product.active_images],
        "tags": [tag_view(t) for t in tags],
    }


def cart_view(cart):
    """Cart with live variant data; ``subtotal`` is priced at current variant prices."""
    items = []
    subtotal = 0.0
    for item in sorted(cart.items, key=lambda i: i.created_at):
        variant = _get_or_none(ProductVariant, item.variant_id)
        variant_payload = None
        if variant is not None:
            product = _get_or_none(Product, variant.product_id)
            variant_payload = {**variant_view(variant), "product": summary(product)} if product else None
            subtotal += variant.price * item.quantity
        items.append(
            {
                "id": str(item.id),
                "variant_id": str(item.variant_id),
                "quantity": item.quantity,
                "expires_at": item.expires_at,
                "variant": variant_payload,
            }
        )

    return {
        "id": str(cart.id),
        "user_id": str(cart.user_id),
        "items": items,
        "subtotal": round(subtotal, 2),
        "total_items": cart.total_items,
    }


def address_view(address):
    return {
        "id": str(address.id),
        "alias": address.alias,
        "full_name": address.full_name,
        "phone": address.phone,
        "state": address.state,
        "city": address.city,
        "municipality": address.municipality,
        "address_line": address.address_line,
        "zip_code": address.zip_code,
        "reference": address.reference,
        "is_default": address.is_default,
        "is_active": address.is_active,
        "created_at": address.created_at,
    }


def order_view(order, include_user=False):
    """Order with its items and delivery address (shown even if since removed)."""
    user = _get_or_none(User, order.user_id)
    address = None
    if user is not None:
        address = next((a for a in user.addresses if a.id == order.address_id), None)

    view = {
        "id": str(order.id),
        "user_id": str(order.user_id),
        "address_id": str(order.address_id),
        "status": order.status,
        "payment_method": order.payment_method,
        "payment_proof": order.payment_proof,
        "customer_notes": order.customer_notes,
        "admin_notes": order.admin_notes,
        "subtotal": order.subtotal,
        "total": order.total,
        "paid_at": order.paid_at,
        "shipped_at": order.shipped_at,
        "delivered_at": order.delivered_at,
        "cancelled_at": order.cancelled_at,
        "created_at": order.created_at,
        "updated_at": order.updated_at,
        "items": [
            {
                "id": str(item.id),
                "variant_id": str(item.variant_id),
                "product_name": item.product_name,
                "variant_size": item.variant_size,
                "variant_color": item.variant_color,
                "variant_gender": item.variant_gender,
                "price": item.price,
                "quantity": item.quantity,
                "subtotal": item.subtotal,
            }
            for item in order.items
        ],
        "address": address_view(address) if address else None,
        "user": None,
    }
    if include_user and user is not None:
        view["user"] = {"id": str(user.id), "email": user.email, "name": user.name, "phone": user.phone}
    return view


def favorite_view(favorite, product):
    return {
        "id": str(favorite.id),
        "product_id": str(favorite.product_id),
        "created_at": favorite.created_at,
        "product": product_view(product),
    }


def profile_view(user):
    return {
        "id": str(user.id),
        "email": user.email,
        "name": user.name,
        "nickname": user.nickname,
        "avatar": user.avatar,
        "phone": user.phone,
        "role": user.role,
        "created_at": user.created_at,
    }
