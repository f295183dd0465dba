"""Application tests for category and subcategory handlers."""

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain
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
from storefront.product.details import DeactivateProduct
from storefront.shared.errors import ConflictError


def _create_category(**overrides):
    defaults = {"name": "Pantalones", "color": "#112233"}
    defaults.update(overrides)
    return current_domain.process(CreateCategory(**defaults), asynchronous=False)


def _create_subcategory(category_id, **overrides):
    defaults = {"category_id": category_id, "name": "Jeans"}
    defaults.update(overrides)
    return current_domain.process(CreateSubcategory(**defaults), asynchronous=False)


class TestCreateCategory:
    def test_create(self):
        category_id = _create_category(description="Largos y cortos", icon="pants", display_order=2)

        category = current_domain.repository_for(Category).get(category_id)
        assert category.name == "Pantalones"
        assert category.slug == "pantalones"
        assert category.display_order == 2

    def test_duplicate_slug_is_a_conflict(self):
        _create_category(name="Pantalones")
        with pytest.raises(ConflictError):
            _create_category(name="pantalones")

    def test_list_active_is_ordered(self):
        _create_category(name="Zapatos", display_order=2)
        _create_category(name="Gorras", display_order=1)
        hidden = _create_category(name="Ocultos", display_order=0)
        current_domain.process(DeactivateCategory(category_id=hidden), asynchronous=False)

        names = [c.name for c in current_domain.repository_for(Category).list_active()]
        assert names == ["Gorras", "Zapatos"]


class TestUpdateCategory:
    def test_rename(self):
        category_id = _create_category()
        current_domain.process(UpdateCategory(category_id=category_id, name="Pantalones Cortos"), asynchronous=False)

        category = current_domain.repository_for(Category).get(category_id)
        assert category.slug == "pantalones-cortos"

    def test_rename_to_existing_slug(self):
        _create_category(name="Camisas")
        category_id = _create_category(name="Pantalones")
        with pytest.raises(ConflictError):
            current_domain.process(UpdateCategory(category_id=category_id, name="Camisas"), asynchronous=False)

    def test_keeping_the_same_name_is_allowed(self):
        category_id = _create_category(name="Pantalones")
        current_domain.process(UpdateCategory(category_id=category_id, name="Pantalones"), asynchronous=False)

    def test_unknown_category(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(UpdateCategory(category_id="missing", name="X"), asynchronous=False)


class TestDeactivateCategory:
    def test_deactivate_empty_category(self):
        category_id = _create_category()
        current_domain.process(DeactivateCategory(category_id=category_id), asynchronous=False)

        assert current_domain.repository_for(Category).get(category_id).is_active is False

    def test_category_with_active_products_cannot_be_deactivated(self, category_id, product_id):
        with pytest.raises(ValidationError):
            current_domain.process(DeactivateCategory(category_id=category_id), asynchronous=False)

    def test_category_with_only_inactive_products(self, category_id, product_id):
        current_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)
        current_domain.process(DeactivateCategory(category_id=category_id), asynchronous=False)

        assert current_domain.repository_for(Category).get(category_id).is_active is False


class TestSubcategories:
    def test_create(self):
        category_id = _create_category()
        subcategory_id = _create_subcategory(category_id, display_order=1)

        subcategory = current_domain.repository_for(Subcategory).get(subcategory_id)
        assert subcategory.category_id == category_id
        assert subcategory.slug == "jeans"

    def test_slug_is_unique_within_category_only(self):
        first = _create_category(name="Hombre")
        second = _create_category(name="Mujer")
        _create_subcategory(first, name="Jeans")
        _create_subcategory(second, name="Jeans")

        with pytest.raises(ConflictError):
            _create_subcategory(first, name="JEANS")

    def test_parent_must_be_active(self):
        category_id = _create_category()
        current_domain.process(DeactivateCategory(category_id=category_id), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            _create_subcategory(category_id)

    def test_unknown_parent(self):
        with pytest.raises(ObjectNotFoundError):
            _create_subcategory("missing")

    def test_update(self):
        category_id = _create_category()
        subcategory_id = _create_subcategory(category_id)
        command = UpdateSubcategory(subcategory_id=subcategory_id, name="Jeans Slim", icon="jeans")
        current_domain.process(command, asynchronous=False)

        subcategory = current_domain.repository_for(Subcategory).get(subcategory_id)
        assert subcategory.slug == "jeans-slim"
        assert subcategory.icon == "jeans"

    def test_subcategory_with_active_products_cannot_be_deactivated(self, category_id):
        subcategory_id = _create_subcategory(category_id)
        command = CreateProduct(
            name="Jean Clásico",
            description="Denim",
            category_id=category_id,
            subcategory_id=subcategory_id,
        )
        current_domain.process(command, asynchronous=False)

        with pytest.raises(ValidationError):
            current_domain.process(DeactivateSubcategory(subcategory_id=subcategory_id), asynchronous=False)

    def test_listing_hides_inactive_subcategories(self, category_id):
        kept = _create_subcategory(category_id, name="Jeans", display_order=1)
        dropped = _create_subcategory(category_id, name="Shorts", display_order=0)
        current_domain.process(DeactivateSubcategory(subcategory_id=dropped), asynchronous=False)

        repo = current_domain.repository_for(Subcategory)
        assert [s.id for s in repo.for_category(category_id)] == [kept]
        assert len(repo.for_category(category_id, active_only=False)) == 2
