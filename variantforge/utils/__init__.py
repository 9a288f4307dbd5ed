"""Pure utility functions for variantforge.

Zero dependencies on variantforge models, so they can be imported from
anywhere without circular import risk.
"""

from .naming import (
    PYTHON_KEYWORDS,
    is_valid_identifier,
    positional_field_name,
    to_snake_case,
)

__all__ = [
    "PYTHON_KEYWORDS",
    "is_valid_identifier",
    "positional_field_name",
    "to_snake_case",
]
