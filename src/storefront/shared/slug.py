"""URL slugs derived from display names."""

import re
import unicodedata

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Lowercase, strip diacritics and collapse everything else into single hyphens.

    >>> slugify("Camisa Básica Niño")
    'camisa-basica-nino'
    """
    decomposed = unicodedata.normalize("NFD", text.lower())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _NON_ALPHANUMERIC.sub("-", stripped).strip("-")
