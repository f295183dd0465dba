"""FastAPI endpoints for categories, products, variants and tags.

Reads are public. Writes require an administrator token.
"""

from typing import Literal

from fastapi import APIRouter, Depends
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.api import views
from storefront.api.schemas import (
    AddProductImageRequest,
    CategoryDetailResponse,
    CategoryResponse,
    CreateCategoryRequest,
    CreateProductRequest,
    CreateSubcategoryRequest,
    CreateTagRequest,
    CreateVariantRequest,
    ImageResponse,
    ProductPageResponse,
    ProductResponse,
    StatusResponse,
    SubcategoryResponse,
    TagProductRequest,
    TagResponse,
    UpdateCategoryRequest,
    UpdateProductRequest,
    UpdateSubcategoryRequest,
    UpdateTagRequest,
    UpdateVariantRequest,
    VariantResponse,
)
from storefront.auth.dependencies import admin_user
from storefront.category.category import Category
from storefront.category.management import (
    CreateCategory,
    CreateSubcategory,
    DeactivateCategory,
    DeactivateSubcategory,
    UpdateCategory,
    UpdateSubcategory,
)
from storefront.category.subcategory import Subcategory
from storefront.product.creation import CreateProduct
from storefront.product.details import DeactivateProduct, UpdateProduct
from storefront.product.images import AddProductImage, RemoveProductImage
from storefront.product.product import Product
from storefront.product.search import ProductQuery, search_products
from storefront.product.tags import TagProduct, UntagProduct
from storefront.shared.pagination import paginate
from storefront.tag.management import CreateTag, DeactivateTag, UpdateTag
from storefront.tag.tag import Tag
from storefront.variant.management import CreateVariant, RemoveVariant, UpdateVariant
from storefront.variant.variant import Gender, ProductVariant, Size

category_router = APIRouter(prefix="/categories", tags=["categories"])
product_router = APIRouter(prefix="/products", tags=["products"])
tag_router = APIRouter(prefix="/tags", tags=["tags"])

_admin = [Depends(admin_user)]


def _optional(value):
    return str(value) if value is not None else None


# --- Category endpoints ---


@category_router.post("", status_code=201, response_model=CategoryResponse, dependencies=_admin)
async def create_category(body: CreateCategoryRequest):
    command = CreateCategory(
        name=body.name,
        description=body.description,
        color=body.color,
        icon=body.icon,
        display_order=body.order,
    )
    category_id = current_domain.process(command, asynchronous=False)
    return views.category_view(current_domain.repository_for(Category).get(category_id))


@category_router.get("", response_model=list[CategoryResponse])
async def list_categories():
    return [views.category_view(c) for c in current_domain.repository_for(Category).list_active()]


@category_router.post("/subcategories", status_code=201, response_model=SubcategoryResponse, dependencies=_admin)
async def create_subcategory(body: CreateSubcategoryRequest):
    command = CreateSubcategory(
        category_id=str(body.category_id),
        name=body.name,
        description=body.description,
        icon=body.icon,
        display_order=body.order,
    )
    subcategory_id = current_domain.process(command, asynchronous=False)
    return views.subcategory_view(current_domain.repository_for(Subcategory).get(subcategory_id))


@category_router.get("/subcategories/{subcategory_id}", response_model=SubcategoryResponse)
async def get_subcategory(subcategory_id: str):
    return views.subcategory_view(current_domain.repository_for(Subcategory).get(subcategory_id))


@category_router.patch("/subcategories/{subcategory_id}", response_model=SubcategoryResponse, dependencies=_admin)
async def update_subcategory(subcategory_id: str, body: UpdateSubcategoryRequest):
    command = UpdateSubcategory(
        subcategory_id=subcategory_id,
        name=body.name,
        description=body.description,
        icon=body.icon,
        display_order=body.order,
        is_active=body.is_active,
    )
    current_domain.process(command, asynchronous=False)
    return views.subcategory_view(current_domain.repository_for(Subcategory).get(subcategory_id))


@category_router.delete("/subcategories/{subcategory_id}", response_model=StatusResponse, dependencies=_admin)
async def delete_subcategory(subcategory_id: str):
    current_domain.process(DeactivateSubcategory(subcategory_id=subcategory_id), asynchronous=False)
    return StatusResponse()


@category_router.get("/{category_id}", response_model=CategoryDetailResponse)
async def get_category(category_id: str):
    return views.category_detail_view(current_domain.repository_for(Category).get(category_id))


@category_router.get("/{category_id}/subcategories", response_model=list[SubcategoryResponse])
async def list_subcategories(category_id: str):
    category = current_domain.repository_for(Category).get(category_id)
    subcategories = current_domain.repository_for(Subcategory).for_category(category.id)
    return [views.subcategory_view(s) for s in subcategories]


@category_router.patch("/{category_id}", response_model=CategoryResponse, dependencies=_admin)
async def update_category(category_id: str, body: UpdateCategoryRequest):
    command = UpdateCategory(
        category_id=category_id,
        name=body.name,
        description=body.description,
        color=body.color,
        icon=body.icon,
        display_order=body.order,
        is_active=body.is_active,
    )
    current_domain.process(command, asynchronous=False)
    return views.category_view(current_domain.repository_for(Category).get(category_id))


@category_router.delete("/{category_id}", response_model=StatusResponse, dependencies=_admin)
async def delete_category(category_id: str):
    current_domain.process(DeactivateCategory(category_id=category_id), asynchronous=False)
    return StatusResponse()


# --- Product endpoints ---


@product_router.post("", status_code=201, response_model=ProductResponse, dependencies=_admin)
async def create_product(body: CreateProductRequest):
    command = CreateProduct(
        name=body.name,
        description=body.description,
        category_id=str(body.category_id),
        subcategory_id=_optional(body.subcategory_id),
        meta_title=body.meta_title,
        meta_description=body.meta_description,
        is_featured=body.is_featured,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return views.product_view(current_domain.repository_for(Product).get(product_id))


@product_router.get("", response_model=ProductPageResponse)
async def list_products(
    search: str | None = None,
    category_id: str | None = None,
    subcategory_id: str | None = None,
    is_featured: bool | None = None,
    gender: Gender | None = None,
    size: Size | None = None,
    in_stock: bool | None = None,
    page: int = 1,
    limit: int = 12,
    sort_by: Literal["created_at", "updated_at", "name"] = "created_at",
    sort_order: Literal["asc", "desc"] = "desc",
):
    window = paginate(page, limit, default_limit=12, max_limit=100)
    query = ProductQuery(
        search=search,
        category_id=category_id,
        subcategory_id=subcategory_id,
        is_featured=is_featured,
        gender=gender.value if gender else None,
        size=size.value if size else None,
        in_stock=in_stock,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    rows, total = search_products(query, window)
    return {
        "data": [views.product_view(product, variants=variants) for product, variants in rows],
        "meta": window.meta(total),
    }


@product_router.post("/variants", status_code=201, response_model=VariantResponse, dependencies=_admin)
async def create_variant(body: CreateVariantRequest):
    command = CreateVariant(
        product_id=str(body.product_id),
        gender=body.gender.value,
        size=body.size.value,
        color=body.color,
        color_hex=body.color_hex,
        sku=body.sku,
        stock=body.stock,
        price=body.price,
    )
    variant_id = current_domain.process(command, asynchronous=False)
    return views.variant_view(current_domain.repository_for(ProductVariant).get(variant_id))


@product_router.patch("/variants/{variant_id}", response_model=VariantResponse, dependencies=_admin)
async def update_variant(variant_id: str, body: UpdateVariantRequest):
    command = UpdateVariant(
        variant_id=variant_id,
        gender=body.gender.value if body.gender else None,
        size=body.size.value if body.size else None,
        color=body.color,
        color_hex=body.color_hex,
        sku=body.sku,
        stock=body.stock,
        price=body.price,
    )
    current_domain.process(command, asynchronous=False)
    return views.variant_view(current_domain.repository_for(ProductVariant).get(variant_id))


@product_router.delete("/variants/{variant_id}", response_model=StatusResponse, dependencies=_admin)
async def delete_variant(variant_id: str):
    current_domain.process(RemoveVariant(variant_id=variant_id), asynchronous=False)
    return StatusResponse()


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str):
    """Look a product up by id, falling back to its slug."""
    repo = current_domain.repository_for(Product)
    try:
        product = repo.get(product_id)
    except ObjectNotFoundError:
        product = repo.find_by_slug(product_id)

    if product is None or not product.is_active:
        raise ObjectNotFoundError({"product": [f"Product {product_id} not found"]})
    return views.product_view(product)


@product_router.get("/{product_id}/variants", response_model=list[VariantResponse])
async def list_variants(product_id: str):
    product = current_domain.repository_for(Product).get(product_id)
    variants = current_domain.repository_for(ProductVariant).active_for_product(product.id)
    return [views.variant_view(v) for v in variants]


@product_router.patch("/{product_id}", response_model=ProductResponse, dependencies=_admin)
async def update_product(product_id: str, body: UpdateProductRequest):
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        category_id=_optional(body.category_id),
        subcategory_id=_optional(body.subcategory_id),
        meta_title=body.meta_title,
        meta_description=body.meta_description,
        is_featured=body.is_featured,
        is_active=body.is_active,
    )
    current_domain.process(command, asynchronous=False)
    return views.product_view(current_domain.repository_for(Product).get(product_id))


@product_router.delete("/{product_id}", response_model=StatusResponse, dependencies=_admin)
async def delete_product(product_id: str):
    current_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


@product_router.post("/{product_id}/images", status_code=201, response_model=ImageResponse, dependencies=_admin)
async def add_product_image(product_id: str, body: AddProductImageRequest):
    command = AddProductImage(
        product_id=product_id,
        url=body.url,
        alt=body.alt,
        display_order=body.order,
    )
    image_id = current_domain.process(command, asynchronous=False)
    product = current_domain.repository_for(Product).get(product_id)
    return views.image_view(next(i for i in product.images if str(i.id) == image_id))


@product_router.delete("/{product_id}/images/{image_id}", response_model=StatusResponse, dependencies=_admin)
async def remove_product_image(product_id: str, image_id: str):
    current_domain.process(RemoveProductImage(product_id=product_id, image_id=image_id), asynchronous=False)
    return StatusResponse()


@product_router.post("/{product_id}/tags", status_code=201, response_model=ProductResponse, dependencies=_admin)
async def tag_product(product_id: str, body: TagProductRequest):
    current_domain.process(TagProduct(product_id=product_id, tag_id=str(body.tag_id)), asynchronous=False)
    return views.product_view(current_domain.repository_for(Product).get(product_id))


@product_router.delete("/{product_id}/tags/{tag_id}", response_model=StatusResponse, dependencies=_admin)
async def untag_product(product_id: str, tag_id: str):
    current_domain.process(UntagProduct(product_id=product_id, tag_id=tag_id), asynchronous=False)
    return StatusResponse()


# --- Tag endpoints ---


@tag_router.post("", status_code=201, response_model=TagResponse, dependencies=_admin)
async def create_tag(body: CreateTagRequest):
    tag_id = current_domain.process(CreateTag(name=body.name, color=body.color), asynchronous=False)
    return views.tag_view(current_domain.repository_for(Tag).get(tag_id))


@tag_router.get("", response_model=list[TagResponse])
async def list_tags():
    return [views.tag_view(t) for t in current_domain.repository_for(Tag).list_active()]


@tag_router.patch("/{tag_id}", response_model=TagResponse, dependencies=_admin)
async def update_tag(tag_id: str, body: UpdateTagRequest):
    command = UpdateTag(tag_id=tag_id, name=body.name, color=body.color, is_active=body.is_active)
    current_domain.process(command, asynchronous=False)
    return views.tag_view(current_domain.repository_for(Tag).get(tag_id))


@tag_router.delete("/{tag_id}", response_model=StatusResponse, dependencies=_admin)
async def delete_tag(tag_id: str):
    current_domain.process(DeactivateTag(tag_id=tag_id), asynchronous=False)
    return StatusResponse()
