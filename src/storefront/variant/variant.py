"""ProductVariant aggregate: one purchasable size/color/gender of a product."""

import re
from datetime import datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront
from storefront.shared.colors import ensure_hex_color
from storefront.shared.pagination import FETCH_ALL_LIMIT

_SKU_PATTERN = re.compile(r"^[A-Z0-9-]+$")


class Gender(Enum):
    MEN = "MEN"
    WOMEN = "WOMEN"
    KIDS = "KIDS"


class Size(Enum):
    S = "S"
    M = "M"
    L = "L"
    XL = "XL"


@storefront.aggregate
class ProductVariant:
    """Each variant carries its own stock and price.

    A variant is on sale exactly while it has stock: ``is_active`` is
    recomputed from ``stock`` on every create, update and stock movement.
    Removing a variant soft-deletes it by clearing ``is_active``.
    """

    product_id: Identifier(required=True)
    gender: String(required=True, choices=Gender)
    size: String(required=True, choices=Size)
    color: String(required=True, max_length=50)
    color_hex: String(max_length=7)
    sku: String(required=True, max_length=50)
    stock: Integer(default=0, min_value=0)
    price: Float(required=True, min_value=0.0)
    is_active: Boolean(default=True)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def sku_must_be_uppercase_alphanumeric(self):
        if not _SKU_PATTERN.match(self.sku or ""):
            raise ValidationError({"sku": ["SKU may only contain uppercase letters, digits and hyphens"]})

    @invariant.post
    def color_hex_must_be_valid(self):
        ensure_hex_color("color_hex", self.color_hex)

    @invariant.post
    def cannot_be_active_without_stock(self):
        if self.is_active and self.stock <= 0:
            raise ValidationError({"is_active": ["A variant without stock cannot be active"]})

    @classmethod
    def create(cls, product_id, gender, size, color, sku, price, stock=0, color_hex=None):
        from storefront.product.events import VariantCreated

        now = datetime.now()
        variant = cls(
            product_id=product_id,
            gender=gender,
            size=size,
            color=color,
            color_hex=color_hex,
            sku=sku,
            stock=stock,
            price=round(price, 2),
            is_active=stock > 0,
            created_at=now,
            updated_at=now,
        )
        variant.raise_(
            VariantCreated(
                variant_id=variant.id,
                product_id=product_id,
                sku=sku,
                price=variant.price,
                stock=stock,
            )
        )
        return variant

    def update_details(self, **changes):
        """Apply the supplied (non-None) fields and re-derive ``is_active``."""
        if changes.get("price") is not None:
            changes["price"] = round(changes["price"], 2)

        with atomic_change(self):
            for field, value in changes.items():
                if value is not None:
                    setattr(self, field, value)
            self._refresh_availability()

    def decrease_stock(self, quantity):
        from storefront.product.events import VariantStockExhausted

        if quantity > self.stock:
            raise ValidationError({"stock": [f"Only {self.stock} units of {self.sku} are available"]})

        with atomic_change(self):
            self.stock -= quantity
            self._refresh_availability()

        if self.stock == 0:
            self.raise_(
                VariantStockExhausted(
                    variant_id=self.id,
                    product_id=self.product_id,
                    sku=self.sku,
                    exhausted_at=self.updated_at,
                )
            )

    def remove(self):
        self.is_active = False
        self.updated_at = datetime.now()

    def _refresh_availability(self):
        self.is_active = self.stock > 0
        self.updated_at = datetime.now()


@storefront.repository(part_of=ProductVariant)
class ProductVariantRepository:
    def find_by_sku(self, sku):
        return self._dao.query.filter(sku=sku).all().first

    def active_for_product(self, product_id):
        return (
            self._dao.query.filter(product_id=product_id, is_active=True)
            .order_by("created_at")
            .limit(FETCH_ALL_LIMIT)
            .all()
            .items
        )
