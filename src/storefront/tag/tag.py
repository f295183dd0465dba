"""Tag aggregate: free-form labels ("Nuevo", "Oferta") attached to products."""

from datetime import datetime

from protean import invariant
from protean.fields import Boolean, DateTime, String

from storefront.domain import storefront
from storefront.shared.colors import ensure_hex_color
from storefront.shared.pagination import FETCH_ALL_LIMIT
from storefront.shared.slug import slugify


@storefront.aggregate
class Tag:
    name: String(required=True, max_length=50)
    slug: String(required=True, max_length=60)
    color: String(max_length=7)
    is_active: Boolean(default=True)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def color_must_be_hex(self):
        ensure_hex_color("color", self.color)

    @classmethod
    def create(cls, name, color=None):
        now = datetime.now()
        return cls(name=name, slug=slugify(name), color=color, created_at=now, updated_at=now)

    def update_details(self, name=None, color=None, is_active=None):
        if name is not None:
            self.name = name
            self.slug = slugify(name)
        if color is not None:
            self.color = color
        if is_active is not None:
            self.is_active = is_active
        self.updated_at = datetime.now()

    def deactivate(self):
        self.is_active = False
        self.updated_at = datetime.now()


@storefront.repository(part_of=Tag)
class TagRepository:
    def find_by_name_or_slug(self, name, slug):
        return self._dao.query.filter(name=name).all().first or self._dao.query.filter(slug=slug).all().first

    def list_active(self):
        return self._dao.query.filter(is_active=True).order_by("name").limit(FETCH_ALL_LIMIT).all().items
