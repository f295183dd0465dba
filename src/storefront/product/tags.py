"""Product tagging: commands and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.product.product import Product
from storefront.tag.tag import Tag


@storefront.command(part_of="Product")
class TagProduct:
    product_id: Identifier(required=True)
    tag_id: Identifier(required=True)


@storefront.command(part_of="Product")
class UntagProduct:
    product_id: Identifier(required=True)
    tag_id: Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ProductTagsHandler:
    @handle(TagProduct)
    def tag_product(self, command):
        tag = current_domain.repository_for(Tag).get(command.tag_id)
        if not tag.is_active:
            raise ObjectNotFoundError({"tag_id": [f"Tag {command.tag_id} not found"]})

        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.tag(tag.id)
        repo.add(product)

    @handle(UntagProduct)
    def untag_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.untag(command.tag_id)
        repo.add(product)
