"""Category and subcategory management: commands and handlers."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.category.category import Category
from storefront.category.subcategory import Subcategory
from storefront.domain import storefront
from storefront.product.product import Product
from storefront.shared.errors import ConflictError
from storefront.shared.slug import slugify


@storefront.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)
    description: Text()
    color: String(required=True, max_length=7)
    icon: String(max_length=100)
    display_order: Integer(default=0, min_value=0)


@storefront.command(part_of="Category")
class UpdateCategory:
    category_id: Identifier(required=True)
    name: String(max_length=100)
    description: Text()
    color: String(max_length=7)
    icon: String(max_length=100)
    display_order: Integer(min_value=0)
    is_active: Boolean()


@storefront.command(part_of="Category")
class DeactivateCategory:
    category_id: Identifier(required=True)


@storefront.command(part_of="Subcategory")
class CreateSubcategory:
    category_id: Identifier(required=True)
    name: String(required=True, max_length=100)
    description: Text()
    icon: String(max_length=100)
    display_order: Integer(default=0, min_value=0)


@storefront.command(part_of="Subcategory")
class UpdateSubcategory:
    subcategory_id: Identifier(required=True)
    name: String(max_length=100)
    description: Text()
    icon: String(max_length=100)
    display_order: Integer(min_value=0)
    is_active: Boolean()


@storefront.command(part_of="Subcategory")
class DeactivateSubcategory:
    subcategory_id: Identifier(required=True)


def _ensure_category_slug_free(repo, name, exclude_id=None):
    slug = slugify(name)
    existing = repo.find_by_slug(slug)
    if existing is not None and existing.id != exclude_id:
        raise ConflictError({"slug": [f"A category with slug '{slug}' already exists"]})


def _ensure_subcategory_slug_free(repo, category_id, name, exclude_id=None):
    slug = slugify(name)
    existing = repo.find_by_slug(category_id, slug)
    if existing is not None and existing.id != exclude_id:
        raise ConflictError({"slug": [f"Subcategory '{slug}' already exists in this category"]})


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        repo = current_domain.repository_for(Category)
        _ensure_category_slug_free(repo, command.name)

        category = Category.create(
            name=command.name,
            color=command.color,
            description=command.description,
            icon=command.icon,
            display_order=command.display_order,
        )
        repo.add(category)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        if command.name is not None:
            _ensure_category_slug_free(repo, command.name, exclude_id=category.id)

        category.update_details(
            name=command.name,
            description=command.description,
            color=command.color,
            icon=command.icon,
            display_order=command.display_order,
            is_active=command.is_active,
        )
        repo.add(category)

    @handle(DeactivateCategory)
    def deactivate_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)

        active_products = current_domain.repository_for(Product).count_active(category_id=category.id)
        if active_products:
            raise ValidationError(
                {"category": [f"Category still has {active_products} active product(s) and cannot be deleted"]}
            )

        category.deactivate()
        repo.add(category)


@storefront.command_handler(part_of=Subcategory)
class ManageSubcategoryHandler:
    @handle(CreateSubcategory)
    def create_subcategory(self, command):
        category = current_domain.repository_for(Category).get(command.category_id)
        if not category.is_active:
            raise ObjectNotFoundError({"category": [f"Category {command.category_id} not found"]})

        repo = current_domain.repository_for(Subcategory)
        _ensure_subcategory_slug_free(repo, category.id, command.name)

        subcategory = Subcategory.create(
            category_id=category.id,
            name=command.name,
            description=command.description,
            icon=command.icon,
            display_order=command.display_order,
        )
        repo.add(subcategory)
        return str(subcategory.id)

    @handle(UpdateSubcategory)
    def update_subcategory(self, command):
        repo = current_domain.repository_for(Subcategory)
        subcategory = repo.get(command.subcategory_id)
        if command.name is not None:
            _ensure_subcategory_slug_free(repo, subcategory.category_id, command.name, exclude_id=subcategory.id)

        subcategory.update_details(
            name=command.name,
            description=command.description,
            icon=command.icon,
            display_order=command.display_order,
            is_active=command.is_active,
        )
        repo.add(subcategory)

    @handle(DeactivateSubcategory)
    def deactivate_subcategory(self, command):
        repo = current_domain.repository_for(Subcategory)
        subcategory = repo.get(command.subcategory_id)

        active_products = current_domain.repository_for(Product).count_active(subcategory_id=subcategory.id)
        if active_products:
            raise ValidationError(
                {"subcategory": [f"Subcategory still has {active_products} active product(s) and cannot be deleted"]}
            )

        subcategory.deactivate()
        repo.add(subcategory)
