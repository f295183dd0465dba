"""Error kinds raised by storefront handlers beyond Protean's own.

``ValidationError`` (400) and ``ObjectNotFoundError`` (404) come from Protean.
The subclasses below keep order-placement failures distinguishable while still
surfacing as Bad Request.
"""

from protean.exceptions import ProteanExceptionWithMessage, ValidationError


class ConflictError(ProteanExceptionWithMessage):
    """A uniqueness rule was violated (slug, SKU, favorite, image slot)."""


class ForbiddenError(ProteanExceptionWithMessage):
    """The caller's role or ownership does not permit the operation."""


class EmptyCartError(ValidationError):
    """Checkout attempted with no items in the cart."""


class ProductUnavailableError(ValidationError):
    """A cart line refers to a variant or product that is no longer active."""


class InsufficientStockError(ValidationError):
    """A cart line asks for more units than the variant has in stock."""
