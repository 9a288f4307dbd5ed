"""CLI commands for variantforge."""

from . import (
    validate,
    generate,
    inspect,
    config_cmd,
)

__all__ = [
    "validate",
    "generate",
    "inspect",
    "config_cmd",
]
