import pytest
from storefront.shared.slug import slugify


@pytest.mark.parametrize(
    "name, slug",
    [
        ("Camisas", "camisas"),
        ("Camisa Básica", "camisa-basica"),
        ("Niño  &  Niña", "nino-nina"),
        ("  Zapatos -- Deportivos!  ", "zapatos-deportivos"),
        ("Talla XL 2024", "talla-xl-2024"),
    ],
)
def test_slugify(name, slug):
    assert slugify(name) == slug


def test_slugify_is_idempotent():
    assert slugify(slugify("Pantalón Corto")) == "pantalon-corto"
