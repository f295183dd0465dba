"""Cart aggregate root with the CartItem entity."""

from datetime import datetime, timedelta

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer

from storefront.domain import storefront

CART_ITEM_TTL = timedelta(days=5)


@storefront.entity(part_of="Cart")
class CartItem:
    """One line of the cart. Each line expires on its own schedule."""

    variant_id: Identifier(required=True)
    quantity: Integer(required=True, min_value=1)
    expires_at: DateTime(required=True)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    def is_expired(self, as_of=None):
        return self.expires_at < (as_of or datetime.now())


@storefront.aggregate
class Cart:
    """A user's shopping cart. There is exactly one cart per user."""

    user_id: Identifier(required=True, unique=True)
    items: HasMany(CartItem)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def one_line_per_variant(self):
        variant_ids = [item.variant_id for item in self.items]
        if len(variant_ids) != len(set(variant_ids)):
            raise ValidationError({"items": ["A variant can appear only once in the cart"]})

    @property
    def total_items(self):
        return sum(item.quantity for item in self.items)

    def item(self, item_id):
        item = next((i for i in self.items if i.id == item_id), None)
        if item is None:
            raise ObjectNotFoundError({"item": [f"Cart item {item_id} not found"]})
        return item

    def add_item(self, variant_id, quantity, available_stock):
        """Add ``quantity`` units, merging into an existing line for the same variant.

        Either way the line's expiry is pushed to now + 5 days.
        """
        now = datetime.now()
        existing = next((i for i in self.items if i.variant_id == variant_id), None)
        new_quantity = quantity + (existing.quantity if existing else 0)
        if new_quantity > available_stock:
            raise ValidationError({"quantity": [f"Only {available_stock} units available"]})

        if existing:
            existing.quantity = new_quantity
            existing.expires_at = now + CART_ITEM_TTL
            existing.updated_at = now
            item = existing
        else:
            item = CartItem(
                variant_id=variant_id,
                quantity=quantity,
                expires_at=now + CART_ITEM_TTL,
                created_at=now,
                updated_at=now,
            )
            self.add_items(item)

        self.updated_at = now
        return item

    def update_item(self, item_id, quantity, available_stock):
        now = datetime.now()
        item = self.item(item_id)
        if item.is_expired(now):
            raise ValidationError({"item": ["This cart item has expired"]})
        if quantity > available_stock:
            raise ValidationError({"quantity": [f"Only {available_stock} units available"]})

        item.quantity = quantity
        item.expires_at = now + CART_ITEM_TTL
        item.updated_at = now
        self.updated_at = now
        return item

    def remove_item(self, item_id):
        self.remove_items(self.item(item_id))
        self.updated_at = datetime.now()

    def clear(self):
        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now()

    def purge_expired(self, as_of=None):
        """Drop expired lines and return how many were removed."""
        as_of = as_of or datetime.now()
        expired = [item for item in self.items if item.is_expired(as_of)]
        for item in expired:
            self.remove_items(item)
        if expired:
            self.updated_at = as_of
        return len(expired)


@storefront.repository(part_of=Cart)
class CartRepository:
    def find_for_user(self, user_id):
        return self._dao.query.filter(user_id=user_id).all().first
