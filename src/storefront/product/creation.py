"""Product creation: command and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.category.category import Category
from storefront.category.subcategory import Subcategory
from storefront.domain import storefront
from storefront.product.product import Product
from storefront.shared.errors import ConflictError
from storefront.shared.slug import slugify


@storefront.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=200)
    description: Text(required=True)
    category_id: Identifier(required=True)
    subcategory_id: Identifier()
    meta_title: String(max_length=60)
    meta_description: String(max_length=160)
    is_featured: Boolean(default=False)


def ensure_slug_free(name, exclude_id=None):
    slug = slugify(name)
    existing = current_domain.repository_for(Product).find_by_slug(slug)
    if existing is not None and existing.id != exclude_id:
        raise ConflictError({"slug": [f"A product with slug '{slug}' already exists"]})


def ensure_placement(category_id, subcategory_id=None):
    """The category must exist, and a subcategory (if given) must belong to it."""
    try:
        current_domain.repository_for(Category).get(category_id)
    except ObjectNotFoundError:
        raise ObjectNotFoundError({"category_id": [f"Category {category_id} not found"]}) from None

    if subcategory_id:
        try:
            subcategory = current_domain.repository_for(Subcategory).get(subcategory_id)
        except ObjectNotFoundError:
            raise ObjectNotFoundError({"subcategory_id": [f"Subcategory {subcategory_id} not found"]}) from None
        if subcategory.category_id != category_id:
            raise ValidationError({"subcategory_id": ["Subcategory does not belong to the given category"]})


@storefront.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        ensure_slug_free(command.name)
        ensure_placement(command.category_id, command.subcategory_id)

        product = Product.create(
            name=command.name,
            description=command.description,
            category_id=command.category_id,
            subcategory_id=command.subcategory_id,
            meta_title=command.meta_title,
            meta_description=command.meta_description,
            is_featured=command.is_featured,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)
