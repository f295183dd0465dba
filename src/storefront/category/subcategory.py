"""Subcategory aggregate: a second-level grouping that belongs to one Category."""

from datetime import datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.shared.pagination import FETCH_ALL_LIMIT
from storefront.shared.slug import slugify


@storefront.aggregate
class Subcategory:
    """Slugs are unique within the parent category only."""

    category_id: Identifier(required=True)
    name: String(required=True, max_length=100)
    slug: String(required=True, max_length=120)
    description: Text()
    icon: String(max_length=100)
    display_order: Integer(default=0, min_value=0)
    is_active: Boolean(default=True)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def create(cls, category_id, name, description=None, icon=None, display_order=0):
        from storefront.category.events import SubcategoryCreated

        now = datetime.now()
        subcategory = cls(
            category_id=category_id,
            name=name,
            slug=slugify(name),
            description=description,
            icon=icon,
            display_order=display_order or 0,
            created_at=now,
            updated_at=now,
        )
        subcategory.raise_(
            SubcategoryCreated(
                subcategory_id=subcategory.id,
                category_id=category_id,
                name=name,
                slug=subcategory.slug,
            )
        )
        return subcategory

    def update_details(self, name=None, description=None, icon=None, display_order=None, is_active=None):
        if name is not None:
            self.name = name
            self.slug = slugify(name)
        if description is not None:
            self.description = description
        if icon is not None:
            self.icon = icon
        if display_order is not None:
            self.display_order = display_order
        if is_active is not None:
            self.is_active = is_active
        self.updated_at = datetime.now()

    def deactivate(self):
        from storefront.category.events import SubcategoryDeactivated

        if not self.is_active:
            raise ValidationError({"subcategory": ["Subcategory is already inactive"]})

        self.is_active = False
        now = datetime.now()
        self.updated_at = now

        self.raise_(
            SubcategoryDeactivated(
                subcategory_id=self.id,
                category_id=self.category_id,
                deactivated_at=now,
            )
        )


@storefront.repository(part_of=Subcategory)
class SubcategoryRepository:
    def find_by_slug(self, category_id, slug):
        return self._dao.query.filter(category_id=category_id, slug=slug).all().first

    def for_category(self, category_id, active_only=True):
        query = self._dao.query.filter(category_id=category_id)
        if active_only:
            query = query.filter(is_active=True)
        return query.order_by("display_order").limit(FETCH_ALL_LIMIT).all().items
