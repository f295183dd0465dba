"""Domain events for the Category and Subcategory aggregates."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Category")
class CategoryCreated:
    """A new category was added to the storefront."""

    __version__ = 1

    category_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)
    created_at: DateTime(required=True)


@storefront.event(part_of="Category")
class CategoryDetailsUpdated:
    """A category's name, presentation or ordering changed."""

    __version__ = 1

    category_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)


@storefront.event(part_of="Category")
class CategoryDeactivated:
    """A category was soft-deleted and hidden from listings."""

    __version__ = 1

    category_id: Identifier(required=True)
    deactivated_at: DateTime(required=True)


@storefront.event(part_of="Subcategory")
class SubcategoryCreated:
    """A subcategory was added under a category."""

    __version__ = 1

    subcategory_id: Identifier(required=True)
    category_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)


@storefront.event(part_of="Subcategory")
class SubcategoryDeactivated:
    """A subcategory was soft-deleted."""

    __version__ = 1

    subcategory_id: Identifier(required=True)
    category_id: Identifier(required=True)
    deactivated_at: DateTime(required=True)
