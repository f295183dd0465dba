"""Domain events for the Product and ProductVariant aggregates."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    """A new product was added to the catalog."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)
    category_id: Identifier(required=True)
    subcategory_id: Identifier()
    created_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductDetailsUpdated:
    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)
    is_active: Boolean()


@storefront.event(part_of="Product")
class ProductDeactivated:
    """A product was soft-deleted and no longer appears in listings."""

    __version__ = 1

    product_id: Identifier(required=True)
    deactivated_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductImageAdded:
    __version__ = 1

    product_id: Identifier(required=True)
    image_id: Identifier(required=True)
    url: String(required=True)
    display_order: Integer(required=True)


@storefront.event(part_of="Product")
class ProductImageRemoved:
    __version__ = 1

    product_id: Identifier(required=True)
    image_id: Identifier(required=True)


@storefront.event(part_of="ProductVariant")
class VariantCreated:
    """A purchasable size/color/gender configuration was added to a product."""

    __version__ = 1

    variant_id: Identifier(required=True)
    product_id: Identifier(required=True)
    sku: String(required=True)
    price: Float(required=True)
    stock: Integer(required=True)


@storefront.event(part_of="ProductVariant")
class VariantStockExhausted:
    """A variant's stock reached zero and it was taken off sale."""

    __version__ = 1

    variant_id: Identifier(required=True)
    product_id: Identifier(required=True)
    sku: String(required=True)
    exhausted_at: DateTime(required=True)
