"""BDD tests for the product image gallery."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, scenarios, then, when
from storefront.product.product import MAX_ACTIVE_IMAGES, Product
from storefront.shared.errors import ConflictError

scenarios("features/product_images.feature")


@pytest.fixture()
def error():
    """Container for captured errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an active product", target_fixture="product")
def active_product():
    product = Product.create(name="Camisa Básica", description="Algodón", category_id="cat-001")
    product._events.clear()
    return product


@given(parsers.cfparse("the product has an image in slot {slot:d}"))
def product_with_image(product, slot):
    product.add_image(url=f"https://cdn.example.com/{slot}.jpg", display_order=slot)


@given("the product has images in every slot")
def product_with_full_gallery(product):
    for slot in range(MAX_ACTIVE_IMAGES):
        product.add_image(url=f"https://cdn.example.com/{slot}.jpg", display_order=slot)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('an image is added with URL "{url}" in slot {slot:d}'))
def add_image(product, url, slot, error):
    try:
        product.add_image(url=url, display_order=slot)
    except (ConflictError, ValidationError) as exc:
        error["exc"] = exc


@when(parsers.cfparse("the image in slot {slot:d} is removed"))
def remove_image(product, slot):
    image = next(i for i in product.active_images if i.display_order == slot)
    product.remove_image(image.id)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the product shows {count:d} image"))
def shows_one_image(product, count):
    assert len(product.active_images) == count


@then(parsers.cfparse("the product shows {count:d} images"))
def shows_images(product, count):
    assert len(product.active_images) == count


@then(parsers.cfparse('the first image shown is "{url}"'))
def first_image(product, url):
    assert product.active_images[0].url == url


@then("the image is rejected as a conflict")
def rejected_as_conflict(error):
    assert isinstance(error["exc"], ConflictError)


@then("the image is rejected as invalid")
def rejected_as_invalid(error):
    assert isinstance(error["exc"], ValidationError)
