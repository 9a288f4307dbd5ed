"""Command-line interface for variantforge."""

from .app import app


def main() -> None:
    """Console script entry point."""
    app()


__all__ = ["app", "main"]
