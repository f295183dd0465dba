"""Category aggregate root for grouping products on the storefront."""

from datetime import datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Integer, String, Text

from storefront.domain import storefront
from storefront.shared.colors import ensure_hex_color
from storefront.shared.pagination import FETCH_ALL_LIMIT
from storefront.shared.slug import slugify


@storefront.aggregate
class Category:
    """A top-level grouping of products such as "Camisas" or "Accesorios".

    The slug is derived from the name and is unique across all categories,
    active or not. Categories are never deleted, only deactivated.
    """

    name: String(required=True, max_length=100)
    slug: String(required=True, max_length=120)
    description: Text()
    color: String(required=True, max_length=7)
    icon: String(max_length=100)
    display_order: Integer(default=0, min_value=0)
    is_active: Boolean(default=True)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def color_must_be_hex(self):
        ensure_hex_color("color", self.color)

    @classmethod
    def create(cls, name, color, description=None, icon=None, display_order=0):
        from storefront.category.events import CategoryCreated

        now = datetime.now()
        category = cls(
            name=name,
            slug=slugify(name),
            description=description,
            color=color,
            icon=icon,
            display_order=display_order or 0,
            created_at=now,
            updated_at=now,
        )
        category.raise_(
            CategoryCreated(
                category_id=category.id,
                name=name,
                slug=category.slug,
                created_at=now,
            )
        )
        return category

    def update_details(self, name=None, description=None, color=None, icon=None, display_order=None, is_active=None):
        from storefront.category.events import CategoryDetailsUpdated

        if name is not None:
            self.name = name
            self.slug = slugify(name)
        if description is not None:
            self.description = description
        if color is not None:
            self.color = color
        if icon is not None:
            self.icon = icon
        if display_order is not None:
            self.display_order = display_order
        if is_active is not None:
            self.is_active = is_active

        self.updated_at = datetime.now()

        self.raise_(
            CategoryDetailsUpdated(
                category_id=self.id,
                name=self.name,
                slug=self.slug,
            )
        )

    def deactivate(self):
        from storefront.category.events import CategoryDeactivated

        if not self.is_active:
            raise ValidationError({"category": ["Category is already inactive"]})

        self.is_active = False
        now = datetime.now()
        self.updated_at = now

        self.raise_(
            CategoryDeactivated(
                category_id=self.id,
                deactivated_at=now,
            )
        )


@storefront.repository(part_of=Category)
class CategoryRepository:
    def find_by_slug(self, slug):
        return self._dao.query.filter(slug=slug).all().first

    def list_active(self):
        return (
            self._dao.query.filter(is_active=True).order_by("display_order").limit(FETCH_ALL_LIMIT).all().items
        )
