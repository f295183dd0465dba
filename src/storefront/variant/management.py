"""Variant management: commands and handler."""

from protean import handle
from protean.fields import Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.product.product import Product
from storefront.shared.errors import ConflictError
from storefront.variant.variant import Gender, ProductVariant, Size


@storefront.command(part_of="ProductVariant")
class CreateVariant:
    product_id: Identifier(required=True)
    gender: String(required=True, choices=Gender)
    size: String(required=True, choices=Size)
    color: String(required=True, max_length=50)
    color_hex: String(max_length=7)
    sku: String(required=True, max_length=50)
    stock: Integer(default=0, min_value=0)
    price: Float(required=True, min_value=0.0)


@storefront.command(part_of="ProductVariant")
class UpdateVariant:
    variant_id: Identifier(required=True)
    gender: String(choices=Gender)
    size: String(choices=Size)
    color: String(max_length=50)
    color_hex: String(max_length=7)
    sku: String(max_length=50)
    stock: Integer(min_value=0)
    price: Float(min_value=0.0)


@storefront.command(part_of="ProductVariant")
class RemoveVariant:
    variant_id: Identifier(required=True)


def _ensure_sku_free(repo, sku, exclude_id=None):
    existing = repo.find_by_sku(sku)
    if existing is not None and existing.id != exclude_id:
        raise ConflictError({"sku": [f"SKU '{sku}' is already in use"]})


@storefront.command_handler(part_of=ProductVariant)
class ManageVariantsHandler:
    @handle(CreateVariant)
    def create_variant(self, command):
        product = current_domain.repository_for(Product).get(command.product_id)

        repo = current_domain.repository_for(ProductVariant)
        _ensure_sku_free(repo, command.sku)

        variant = ProductVariant.create(
            product_id=product.id,
            gender=command.gender,
            size=command.size,
            color=command.color,
            color_hex=command.color_hex,
            sku=command.sku,
            stock=command.stock,
            price=command.price,
        )
        repo.add(variant)
        return str(variant.id)

    @handle(UpdateVariant)
    def update_variant(self, command):
        repo = current_domain.repository_for(ProductVariant)
        variant = repo.get(command.variant_id)
        if command.sku is not None and command.sku != variant.sku:
            _ensure_sku_free(repo, command.sku, exclude_id=variant.id)

        variant.update_details(
            gender=command.gender,
            size=command.size,
            color=command.color,
            color_hex=command.color_hex,
            sku=command.sku,
            stock=command.stock,
            price=command.price,
        )
        repo.add(variant)

    @handle(RemoveVariant)
    def remove_variant(self, command):
        repo = current_domain.repository_for(ProductVariant)
        variant = repo.get(command.variant_id)
        variant.remove()
        repo.add(variant)
