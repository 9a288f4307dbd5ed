"""Shared fixtures for variantforge tests."""

import pytest

from variantforge.config import VariantForgeConfig, configure, reset_config
from variantforge.core.models import EnumSchema


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the user's config file and env vars."""
    from variantforge import config as config_module

    monkeypatch.setattr(config_module, "CONFIG_DIR", tmp_path / "config")
    monkeypatch.setattr(
        config_module, "CONFIG_FILE", tmp_path / "config" / "config.json"
    )
    for var in ("VARIANTFORGE_DEREF", "VARIANTFORGE_ENTITY_FIELD", "VARIANTFORGE_FROZEN"):
        monkeypatch.delenv(var, raising=False)
    configure(VariantForgeConfig())
    yield
    reset_config()


@pytest.fixture
def game_event_schema() -> EnumSchema:
    """Global observer events: tuple, named and unit variants."""
    return EnumSchema.model_validate(
        {
            "name": "GameEvent",
            "variants": [
                {"name": "Victory", "fields": ["String"]},
                {
                    "name": "ScoreChanged",
                    "fields": [
                        {"name": "team", "type": "u32"},
                        {"name": "score", "type": "i32"},
                    ],
                },
                {"name": "GameOver"},
            ],
        }
    )


@pytest.fixture
def health_event_schema() -> EnumSchema:
    """Entity events that all follow the entity naming convention."""
    return EnumSchema.model_validate(
        {
            "name": "EntityHealthEvent",
            "variants": [
                {
                    "name": "Damaged",
                    "fields": [
                        {"name": "entity", "type": "Entity"},
                        {"name": "amount", "type": "u32"},
                    ],
                },
                {
                    "name": "Healed",
                    "fields": [
                        {"name": "entity", "type": "Entity"},
                        {"name": "amount", "type": "u32"},
                    ],
                },
                {"name": "Died", "fields": [{"name": "entity", "type": "Entity"}]},
            ],
        }
    )


@pytest.fixture
def schema_yaml(tmp_path):
    """Write YAML text to a schema file and return its path."""

    def _write(text: str, name: str = "events.yaml"):
        path = tmp_path / name
        path.write_text(text)
        return path

    return _write
