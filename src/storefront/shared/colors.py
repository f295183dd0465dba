import re

from protean.exceptions import ValidationError

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def ensure_hex_color(field_name, value):
    """Raise unless ``value`` is empty or a CSS hex color such as ``#FF5733``."""
    if value and not _HEX_COLOR.match(value):
        raise ValidationError({field_name: [f"'{value}' is not a hex color (e.g. #FF5733)"]})
