"""Favorite management: commands and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.favorite.favorite import Favorite
from storefront.product.product import Product
from storefront.shared.errors import ConflictError

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Favorite")
class AddFavorite:
    user_id: Identifier(required=True)
    product_id: Identifier(required=True)


@storefront.command(part_of="Favorite")
class RemoveFavorite:
    user_id: Identifier(required=True)
    favorite_id: Identifier(required=True)


@storefront.command(part_of="Favorite")
class ClearFavorites:
    user_id: Identifier(required=True)


@storefront.command_handler(part_of=Favorite)
class ManageFavoritesHandler:
    @handle(AddFavorite)
    def add_favorite(self, command):
        product = current_domain.repository_for(Product).get(command.product_id)
        if not product.is_active:
            raise ConflictError({"product_id": ["This product is no longer available"]})

        repo = current_domain.repository_for(Favorite)
        if repo.find_for(command.user_id, product.id) is not None:
            raise ConflictError({"product_id": ["Product is already in your favorites"]})

        favorite = Favorite(user_id=command.user_id, product_id=product.id)
        repo.add(favorite)
        return str(favorite.id)

    @handle(RemoveFavorite)
    def remove_favorite(self, command):
        repo = current_domain.repository_for(Favorite)
        favorite = repo.get(command.favorite_id)
        if favorite.user_id != command.user_id:
            raise ObjectNotFoundError({"favorite": [f"Favorite {command.favorite_id} not found"]})
        repo._dao.delete(favorite)

    @handle(ClearFavorites)
    def clear_favorites(self, command):
        repo = current_domain.repository_for(Favorite)
        favorites = repo.for_user(command.user_id)
        for favorite in favorites:
            repo._dao.delete(favorite)

        logger.info("favorites_cleared", user_id=str(command.user_id), count=len(favorites))
        return len(favorites)
