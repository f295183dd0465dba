"""Pydantic request/response schemas for the Storefront API."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from storefront.order.order import OrderStatus, PaymentMethod
from storefront.variant.variant import Gender, Size

HEX_COLOR = r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$"
SKU = r"^[A-Z0-9-]+$"

# --- Request Schemas: catalog ---


class CreateCategoryRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Camisas",
                    "description": "Camisas para toda ocasión",
                    "color": "#FF5733",
                    "icon": "shirt",
                    "order": 1,
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    color: str = Field(..., pattern=HEX_COLOR)
    icon: str | None = Field(None, max_length=100)
    order: int = Field(0, ge=0)


class UpdateCategoryRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None
    color: str | None = Field(None, pattern=HEX_COLOR)
    icon: str | None = Field(None, max_length=100)
    order: int | None = Field(None, ge=0)
    is_active: bool | None = None


class CreateSubcategoryRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "category_id": "1c6f3c1e-4f0a-4f7e-9d7c-0d6f8a1b2c3d",
                    "name": "Manga larga",
                    "order": 0,
                }
            ]
        }
    }

    category_id: UUID
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    icon: str | None = Field(None, max_length=100)
    order: int = Field(0, ge=0)


class UpdateSubcategoryRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None
    icon: str | None = Field(None, max_length=100)
    order: int | None = Field(None, ge=0)
    is_active: bool | None = None


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Camisa Básica",
                    "description": "Camisa de algodón 100%",
                    "category_id": "1c6f3c1e-4f0a-4f7e-9d7c-0d6f8a1b2c3d",
                    "meta_title": "Camisa Básica de Algodón",
                    "is_featured": True,
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    category_id: UUID
    subcategory_id: UUID | None = None
    meta_title: str | None = Field(None, max_length=60)
    meta_description: str | None = Field(None, max_length=160)
    is_featured: bool = False


class UpdateProductRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, min_length=1)
    category_id: UUID | None = None
    subcategory_id: UUID | None = None
    meta_title: str | None = Field(None, max_length=60)
    meta_description: str | None = Field(None, max_length=160)
    is_featured: bool | None = None
    is_active: bool | None = None


class CreateVariantRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "6a0e4b8e-2f4d-4a53-a3a8-5b1c9d2e7f10",
                    "gender": "MEN",
                    "size": "M",
                    "color": "Negro",
                    "color_hex": "#000000",
                    "sku": "CAM-BAS-M-NEG",
                    "stock": 25,
                    "price": 19.99,
                }
            ]
        }
    }

    product_id: UUID
    gender: Gender
    size: Size
    color: str = Field(..., min_length=1, max_length=50)
    color_hex: str | None = Field(None, pattern=HEX_COLOR)
    sku: str = Field(..., max_length=50, pattern=SKU)
    stock: int = Field(0, ge=0)
    price: float = Field(..., ge=0)


class UpdateVariantRequest(BaseModel):
    gender: Gender | None = None
    size: Size | None = None
    color: str | None = Field(None, min_length=1, max_length=50)
    color_hex: str | None = Field(None, pattern=HEX_COLOR)
    sku: str | None = Field(None, max_length=50, pattern=SKU)
    stock: int | None = Field(None, ge=0)
    price: float | None = Field(None, ge=0)


class AddProductImageRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"url": "https://res.cloudinary.com/demo/image/upload/camisa.jpg", "alt": "Frente", "order": 0}]
        }
    }

    url: str = Field(..., max_length=500)
    alt: str | None = Field(None, max_length=200)
    order: int = Field(0, ge=0, le=4)


class TagProductRequest(BaseModel):
    tag_id: UUID


class CreateTagRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"name": "Nuevo", "color": "#22C55E"}]}}

    name: str = Field(..., min_length=1, max_length=50)
    color: str | None = Field(None, pattern=HEX_COLOR)


class UpdateTagRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=50)
    color: str | None = Field(None, pattern=HEX_COLOR)
    is_active: bool | None = None


# --- Request Schemas: account ---


class GoogleTokenRequest(BaseModel):
    code: str = Field(..., min_length=1)


class UpdateProfileRequest(BaseModel):
    name: str | None = Field(None, max_length=150)
    nickname: str | None = Field(None, max_length=50)
    phone: str | None = Field(None, max_length=20)


class AddAddressRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "alias": "Casa",
                    "full_name": "María Pérez",
                    "phone": "+58 412-1234567",
                    "state": "Miranda",
                    "city": "Los Teques",
                    "municipality": "Guaicaipuro",
                    "address_line": "Calle 5, Edificio Sol, Apto 3B",
                    "zip_code": "1201",
                    "reference": "Frente a la plaza",
                    "is_default": True,
                }
            ]
        }
    }

    alias: str = Field(..., min_length=1, max_length=50)
    full_name: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., min_length=1, max_length=20)
    state: str = Field(..., min_length=1, max_length=100)
    city: str = Field(..., min_length=1, max_length=100)
    municipality: str | None = Field(None, max_length=100)
    address_line: str = Field(..., min_length=1, max_length=500)
    zip_code: str | None = Field(None, max_length=20)
    reference: str | None = Field(None, max_length=500)
    is_default: bool = False


class UpdateAddressRequest(BaseModel):
    alias: str | None = Field(None, min_length=1, max_length=50)
    full_name: str | None = Field(None, min_length=1, max_length=100)
    phone: str | None = Field(None, min_length=1, max_length=20)
    state: str | None = Field(None, min_length=1, max_length=100)
    city: str | None = Field(None, min_length=1, max_length=100)
    municipality: str | None = Field(None, max_length=100)
    address_line: str | None = Field(None, min_length=1, max_length=500)
    zip_code: str | None = Field(None, max_length=20)
    reference: str | None = Field(None, max_length=500)
    is_default: bool | None = None


class AddFavoriteRequest(BaseModel):
    product_id: UUID


# --- Request Schemas: checkout ---


class AddToCartRequest(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"variant_id": "0f8a2c44-91b7-4d0e-8a5e-3c2b1a0f9e8d", "quantity": 2}]}
    }

    variant_id: UUID
    quantity: int = Field(..., ge=1)


class UpdateCartItemRequest(BaseModel):
    quantity: int = Field(..., ge=1)


class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "address_id": "7d3b9a10-5c2e-4f8b-9a61-2e4d8c0b1f3a",
                    "payment_method": "PAGO_MOVIL",
                    "customer_notes": "Entregar en la tarde",
                }
            ]
        }
    }

    address_id: UUID
    payment_method: PaymentMethod
    customer_notes: str | None = Field(None, max_length=500)


class UpdateOrderStatusRequest(BaseModel):
    status: OrderStatus
    admin_notes: str | None = Field(None, max_length=500)


# --- Response Schemas ---


class StatusResponse(BaseModel):
    status: str = "ok"


class MessageResponse(BaseModel):
    message: str


class PageMeta(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int


class Summary(BaseModel):
    id: str
    name: str
    slug: str


class SubcategoryResponse(BaseModel):
    id: str
    category_id: str
    name: str
    slug: str
    description: str | None = None
    icon: str | None = None
    order: int
    is_active: bool


class CategoryResponse(BaseModel):
    id: str
    name: str
    slug: str
    description: str | None = None
    color: str
    icon: str | None = None
    order: int
    is_active: bool
    subcategories: list[SubcategoryResponse] = []


class CategoryDetailResponse(CategoryResponse):
    products: list[Summary] = []


class VariantResponse(BaseModel):
    id: str
    product_id: str
    gender: str
    size: str
    color: str
    color_hex: str | None = None
    sku: str
    stock: int
    price: float
    is_active: bool


class ImageResponse(BaseModel):
    id: str
    url: str
    alt: str | None = None
    order: int


class TagResponse(BaseModel):
    id: str
    name: str
    slug: str
    color: str | None = None
    is_active: bool


class ProductResponse(BaseModel):
    id: str
    name: str
    slug: str
    description: str
    category_id: str
    subcategory_id: str | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    is_featured: bool
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
    category: Summary | None = None
    subcategory: Summary | None = None
    variants: list[VariantResponse] = []
    images: list[ImageResponse] = []
    tags: list[TagResponse] = []


class ProductPageResponse(BaseModel):
    data: list[ProductResponse]
    meta: PageMeta


class CartVariantResponse(VariantResponse):
    product: Summary


class CartItemResponse(BaseModel):
    id: str
    variant_id: str
    quantity: int
    expires_at: datetime
    variant: CartVariantResponse | None = None


class CartResponse(BaseModel):
    id: str
    user_id: str
    items: list[CartItemResponse]
    subtotal: float
    total_items: int


class AddressResponse(BaseModel):
    id: str
    alias: str
    full_name: str
    phone: str
    state: str
    city: str
    municipality: str | None = None
    address_line: str
    zip_code: str | None = None
    reference: str | None = None
    is_default: bool
    is_active: bool
    created_at: datetime | None = None


class UserSummary(BaseModel):
    id: str
    email: str
    name: str | None = None
    phone: str | None = None


class OrderItemResponse(BaseModel):
    id: str
    variant_id: str
    product_name: str
    variant_size: str
    variant_color: str
    variant_gender: str
    price: float
    quantity: int
    subtotal: float


class OrderResponse(BaseModel):
    id: str
    user_id: str
    address_id: str
    status: str
    payment_method: str
    payment_proof: str | None = None
    customer_notes: str | None = None
    admin_notes: str | None = None
    subtotal: float
    total: float
    paid_at: datetime | None = None
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None
    cancelled_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    items: list[OrderItemResponse]
    address: AddressResponse | None = None
    user: UserSummary | None = None


class OrderPageResponse(BaseModel):
    data: list[OrderResponse]
    meta: PageMeta


class FavoriteResponse(BaseModel):
    id: str
    product_id: str
    created_at: datetime | None = None
    product: ProductResponse


class FavoritesResponse(BaseModel):
    total: int
    favorites: list[FavoriteResponse]


class FavoriteCheckResponse(BaseModel):
    is_favorite: bool


class ClearFavoritesResponse(BaseModel):
    message: str
    count: int


class ProfileResponse(BaseModel):
    id: str
    email: str
    name: str | None = None
    nickname: str | None = None
    avatar: str | None = None
    phone: str | None = None
    role: str
    created_at: datetime | None = None


class LoginUser(BaseModel):
    id: str
    email: str
    name: str | None = None
    avatar: str | None = None
    role: str


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "Bearer"
    expires_in: int
    user: LoginUser


class UploadResponse(BaseModel):
    url: str
    public_id: str
    format: str
    width: int
    height: int
    size: int
