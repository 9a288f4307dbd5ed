"""Core models and error types for variantforge."""
