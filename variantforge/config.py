"""Configuration management for variantforge.

Two sections:
- synthesis: switches that change what gets generated (deref, entity convention)
- output: rendering options for generated source

Config resolution order (highest priority first):
1. Programmatic (VariantForgeConfig constructed in code)
2. Environment variables (VARIANTFORGE_DEREF, VARIANTFORGE_ENTITY_FIELD, ...)
3. Config file (~/.config/variantforge/config.json, managed by `variantforge config`)
4. Hardcoded defaults
"""

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any


logger = logging.getLogger(__name__)


# =============================================================================
# Config file location
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "variantforge"
CONFIG_FILE = CONFIG_DIR / "config.json"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def parse_bool(value: str) -> bool:
    """Parse a boolean env/CLI string.

    Raises:
        ValueError: If the string is not a recognized boolean literal.
    """
    text = value.strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean: {value!r}. Expected one of true/false/1/0.")


# =============================================================================
# Config dataclasses
# =============================================================================


@dataclass
class SynthesisConfig:
    """Switches applied to every enum processed.

    - deref_enabled: build-time, all-or-nothing switch for deref-field synthesis
    - entity_field_name: conventional target field name for entity events
    - frozen_types: generate frozen (immutable, hashable) dataclasses
    """

    deref_enabled: bool = True
    entity_field_name: str = "entity"
    frozen_types: bool = False


@dataclass
class OutputConfig:
    """Options for rendered source."""

    header: str = "Generated by variantforge. Do not edit."
    indent: int = 4


@dataclass
class VariantForgeConfig:
    """Top-level variantforge configuration.

    Examples:
        # Package use, no files needed
        config = VariantForgeConfig(synthesis=SynthesisConfig(deref_enabled=False))

        # CLI use, loads from ~/.config/variantforge/config.json
        config = VariantForgeConfig.load()
    """

    synthesis: SynthesisConfig = field(default_factory=SynthesisConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    @classmethod
    def load(cls) -> "VariantForgeConfig":
        """Load config from file + env vars.

        Priority: env var values > config.json values > defaults.
        """
        config = cls()

        # Layer 1: config file
        if CONFIG_FILE.exists():
            try:
                with open(CONFIG_FILE) as f:
                    data = json.load(f)
                _apply_dict(config, data)
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning("Failed to load config from %s: %s", CONFIG_FILE, exc)

        # Layer 2: env var overrides
        if val := os.environ.get("VARIANTFORGE_DEREF"):
            try:
                config.synthesis.deref_enabled = parse_bool(val)
            except ValueError:
                logger.warning("Invalid VARIANTFORGE_DEREF=%r, ignoring", val)
        if val := os.environ.get("VARIANTFORGE_ENTITY_FIELD"):
            if val.isidentifier():
                config.synthesis.entity_field_name = val
            else:
                logger.warning("Invalid VARIANTFORGE_ENTITY_FIELD=%r, ignoring", val)
        if val := os.environ.get("VARIANTFORGE_FROZEN"):
            try:
                config.synthesis.frozen_types = parse_bool(val)
            except ValueError:
                logger.warning("Invalid VARIANTFORGE_FROZEN=%r, ignoring", val)

        return config

    def save(self) -> None:
        """Save config to ~/.config/variantforge/config.json."""
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for display."""
        return {
            "synthesis": asdict(self.synthesis),
            "output": asdict(self.output),
        }


# =============================================================================
# Config dict application
# =============================================================================


def _apply_dict(config: VariantForgeConfig, data: dict) -> None:
    """Apply a dict of values onto a VariantForgeConfig."""
    if "synthesis" in data and isinstance(data["synthesis"], dict):
        for k, v in data["synthesis"].items():
            if hasattr(config.synthesis, k):
                setattr(config.synthesis, k, v)
    if "output" in data and isinstance(data["output"], dict):
        for k, v in data["output"].items():
            if hasattr(config.output, k):
                if k == "indent":
                    v = int(v)
                setattr(config.output, k, v)


# =============================================================================
# Global config singleton
# =============================================================================

_config: VariantForgeConfig | None = None


def get_config() -> VariantForgeConfig:
    """Get the global VariantForgeConfig instance.

    First call loads from file + env vars. Subsequent calls return cached instance.
    Use configure() to replace the global config programmatically.
    """
    global _config
    if _config is None:
        _config = VariantForgeConfig.load()
    return _config


def configure(config: VariantForgeConfig) -> None:
    """Set the global VariantForgeConfig programmatically."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global config (forces reload on next get_config())."""
    global _config
    _config = None
