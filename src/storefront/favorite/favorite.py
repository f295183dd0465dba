"""Favorite aggregate: a product bookmarked by a user."""

from datetime import datetime

from protean.fields import DateTime, Identifier

from storefront.domain import storefront
from storefront.shared.pagination import FETCH_ALL_LIMIT


@storefront.aggregate
class Favorite:
    """Favorites are hard-deleted; a (user, product) pair appears at most once."""

    user_id: Identifier(required=True)
    product_id: Identifier(required=True)
    created_at: DateTime(default=datetime.now)


@storefront.repository(part_of=Favorite)
class FavoriteRepository:
    def find_for(self, user_id, product_id):
        return self._dao.query.filter(user_id=user_id, product_id=product_id).all().first

    def for_user(self, user_id):
        """Newest first."""
        return (
            self._dao.query.filter(user_id=user_id).order_by("-created_at").limit(FETCH_ALL_LIMIT).all().items
        )
