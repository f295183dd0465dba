"""Image management: commands and handler."""

from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.product.product import Product


@storefront.command(part_of="Product")
class AddProductImage:
    product_id: Identifier(required=True)
    url: String(required=True, max_length=500)
    alt: String(max_length=200)
    display_order: Integer(default=0, min_value=0, max_value=4)


@storefront.command(part_of="Product")
class RemoveProductImage:
    product_id: Identifier(required=True)
    image_id: Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ManageImagesHandler:
    @handle(AddProductImage)
    def add_image(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        image = product.add_image(
            url=command.url,
            alt=command.alt,
            display_order=command.display_order,
        )
        repo.add(product)
        return str(image.id)

    @handle(RemoveProductImage)
    def remove_image(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.remove_image(command.image_id)
        repo.add(product)
