"""Storefront product listing: filtering, sorting and paging of active products.

Equality filters are pushed down to the repository query. Free-text search and
the variant-level filters (gender, size, stock) look across aggregates, so they
are applied to the loaded rows before paging.
"""

from dataclasses import dataclass

from protean.utils.globals import current_domain

from storefront.product.product import Product
from storefront.shared.pagination import Page
from storefront.variant.variant import ProductVariant

SORTABLE_FIELDS = ("created_at", "updated_at", "name")


@dataclass(frozen=True)
class ProductQuery:
    search: str | None = None
    category_id: str | None = None
    subcategory_id: str | None = None
    is_featured: bool | None = None
    gender: str | None = None
    size: str | None = None
    in_stock: bool | None = None
    sort_by: str = "created_at"
    sort_order: str = "desc"

    @property
    def filters_variants(self) -> bool:
        return self.gender is not None or self.size is not None or bool(self.in_stock)


def _matches_text(product, needle):
    return needle in product.name.lower() or needle in (product.description or "").lower()


def _matches_variants(query, variants):
    candidates = [
        v
        for v in variants
        if (query.gender is None or v.gender == query.gender) and (query.size is None or v.size == query.size)
    ]
    if query.in_stock:
        return any(v.stock > 0 for v in candidates)
    return bool(candidates)


def _sort_key(field):
    if field == "name":
        return lambda pair: pair[0].name.lower()
    return lambda pair: getattr(pair[0], field)


def search_products(query: ProductQuery, page: Page) -> tuple[list[tuple[Product, list[ProductVariant]]], int]:
    """Return one page of ``(product, active_variants)`` pairs and the total match count."""
    exact = {
        "category_id": query.category_id,
        "subcategory_id": query.subcategory_id,
        "is_featured": query.is_featured,
    }
    products = current_domain.repository_for(Product).list_active(
        **{field: value for field, value in exact.items() if value is not None}
    )

    if query.search:
        needle = query.search.strip().lower()
        products = [p for p in products if _matches_text(p, needle)]

    variant_repo = current_domain.repository_for(ProductVariant)
    rows = [(product, variant_repo.active_for_product(product.id)) for product in products]
    if query.filters_variants:
        rows = [(product, variants) for product, variants in rows if _matches_variants(query, variants)]

    sort_by = query.sort_by if query.sort_by in SORTABLE_FIELDS else "created_at"
    rows.sort(key=_sort_key(sort_by), reverse=query.sort_order != "asc")

    return rows[page.offset : page.offset + page.limit], len(rows)
