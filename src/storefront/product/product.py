"""Product aggregate root with ProductImage and ProductTag entities."""

from datetime import datetime

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, DateTime, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.shared.errors import ConflictError
from storefront.shared.pagination import FETCH_ALL_LIMIT
from storefront.shared.slug import slugify

MAX_ACTIVE_IMAGES = 5


@storefront.entity(part_of="Product")
class ProductImage:
    """A gallery image. ``display_order`` is a slot from 0 to 4."""

    url: String(required=True, max_length=500)
    alt: String(max_length=200)
    display_order: Integer(default=0, min_value=0, max_value=MAX_ACTIVE_IMAGES - 1)
    is_active: Boolean(default=True)
    created_at: DateTime(default=datetime.now)


@storefront.entity(part_of="Product")
class ProductTag:
    """Link between a product and a Tag."""

    tag_id: Identifier(required=True)
    created_at: DateTime(default=datetime.now)


@storefront.aggregate
class Product:
    """A sellable item. Purchasable configurations live in ProductVariant."""

    name: String(required=True, max_length=200)
    slug: String(required=True, max_length=220)
    description: Text(required=True)
    category_id: Identifier(required=True)
    subcategory_id: Identifier()
    meta_title: String(max_length=60)
    meta_description: String(max_length=160)
    is_featured: Boolean(default=False)
    is_active: Boolean(default=True)
    images: HasMany(ProductImage)
    tags: HasMany(ProductTag)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def active_images_cannot_exceed_maximum(self):
        if len(self.active_images) > MAX_ACTIVE_IMAGES:
            raise ValidationError({"images": [f"Cannot have more than {MAX_ACTIVE_IMAGES} active images"]})

    @invariant.post
    def active_image_slots_must_be_unique(self):
        slots = [image.display_order for image in self.active_images]
        if len(slots) != len(set(slots)):
            raise ValidationError({"images": ["Two active images cannot share the same order"]})

    @property
    def active_images(self):
        return sorted((i for i in self.images if i.is_active), key=lambda i: i.display_order)

    @property
    def tag_ids(self):
        return [link.tag_id for link in self.tags]

    @classmethod
    def create(
        cls,
        name,
        description,
        category_id,
        subcategory_id=None,
        meta_title=None,
        meta_description=None,
        is_featured=False,
    ):
        from storefront.product.events import ProductCreated

        now = datetime.now()
        product = cls(
            name=name,
            slug=slugify(name),
            description=description,
            category_id=category_id,
            subcategory_id=subcategory_id,
            meta_title=meta_title,
            meta_description=meta_description,
            is_featured=bool(is_featured),
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=name,
                slug=product.slug,
                category_id=category_id,
                subcategory_id=subcategory_id,
                created_at=now,
            )
        )
        return product

    def update_details(self, **changes):
        """Apply the supplied (non-None) fields; renaming re-derives the slug."""
        from storefront.product.events import ProductDetailsUpdated

        for field, value in changes.items():
            if value is not None:
                setattr(self, field, value)
        if changes.get("name") is not None:
            self.slug = slugify(changes["name"])

        self.updated_at = datetime.now()

        self.raise_(
            ProductDetailsUpdated(
                product_id=self.id,
                name=self.name,
                slug=self.slug,
                is_active=self.is_active,
            )
        )

    def deactivate(self):
        from storefront.product.events import ProductDeactivated

        self.is_active = False
        now = datetime.now()
        self.updated_at = now

        self.raise_(
            ProductDeactivated(
                product_id=self.id,
                deactivated_at=now,
            )
        )

    def add_image(self, url, alt=None, display_order=0):
        from storefront.product.events import ProductImageAdded

        active = self.active_images
        if len(active) >= MAX_ACTIVE_IMAGES:
            raise ValidationError({"images": [f"A product can have at most {MAX_ACTIVE_IMAGES} images"]})
        if any(image.display_order == display_order for image in active):
            raise ConflictError({"images": [f"An image already occupies order {display_order}"]})

        image = ProductImage(url=url, alt=alt, display_order=display_order)
        self.add_images(image)
        self.updated_at = datetime.now()

        self.raise_(
            ProductImageAdded(
                product_id=self.id,
                image_id=image.id,
                url=url,
                display_order=display_order,
            )
        )
        return image

    def remove_image(self, image_id):
        from storefront.product.events import ProductImageRemoved

        image = next((i for i in self.images if i.id == image_id and i.is_active), None)
        if image is None:
            raise ObjectNotFoundError({"images": [f"Image {image_id} not found"]})

        image.is_active = False
        self.updated_at = datetime.now()

        self.raise_(
            ProductImageRemoved(
                product_id=self.id,
                image_id=image_id,
            )
        )

    def tag(self, tag_id):
        if tag_id in self.tag_ids:
            raise ConflictError({"tags": ["Product already carries this tag"]})
        self.add_tags(ProductTag(tag_id=tag_id))
        self.updated_at = datetime.now()

    def untag(self, tag_id):
        link = next((t for t in self.tags if t.tag_id == tag_id), None)
        if link is None:
            raise ObjectNotFoundError({"tags": [f"Tag {tag_id} is not on this product"]})
        self.remove_tags(link)
        self.updated_at = datetime.now()


@storefront.repository(part_of=Product)
class ProductRepository:
    def find_by_slug(self, slug):
        return self._dao.query.filter(slug=slug).all().first

    def list_active(self, **filters):
        return self._dao.query.filter(is_active=True, **filters).limit(FETCH_ALL_LIMIT).all().items

    def count_active(self, **filters):
        return self._dao.query.filter(is_active=True, **filters).all().total

    def latest_active_in_category(self, category_id, limit=10):
        return (
            self._dao.query.filter(is_active=True, category_id=category_id)
            .order_by("-created_at")
            .limit(limit)
            .all()
            .items
        )
