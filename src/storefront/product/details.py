"""Product details and soft delete: commands and handler."""

from protean import handle
from protean.fields import Boolean, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.product.creation import ensure_placement, ensure_slug_free
from storefront.product.product import Product


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=200)
    description: Text()
    category_id: Identifier()
    subcategory_id: Identifier()
    meta_title: String(max_length=60)
    meta_description: String(max_length=160)
    is_featured: Boolean()
    is_active: Boolean()


@storefront.command(part_of="Product")
class DeactivateProduct:
    product_id: Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ProductDetailsHandler:
    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        if command.name is not None and command.name != product.name:
            ensure_slug_free(command.name, exclude_id=product.id)
        if command.category_id is not None or command.subcategory_id is not None:
            ensure_placement(
                command.category_id or product.category_id,
                command.subcategory_id or product.subcategory_id,
            )

        product.update_details(
            name=command.name,
            description=command.description,
            category_id=command.category_id,
            subcategory_id=command.subcategory_id,
            meta_title=command.meta_title,
            meta_description=command.meta_description,
            is_featured=command.is_featured,
            is_active=command.is_active,
        )
        repo.add(product)

    @handle(DeactivateProduct)
    def deactivate_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.deactivate()
        repo.add(product)
