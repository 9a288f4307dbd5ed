"""Tests for configuration loading."""

import json

import pytest

from variantforge import config as config_module
from variantforge.config import (
    VariantForgeConfig,
    configure,
    get_config,
    parse_bool,
    reset_config,
)


class TestParseBool:
    @pytest.mark.parametrize("value", ["1", "true", "YES", " on "])
    def test_true(self, value):
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", ["0", "False", "no", "off"])
    def test_false(self, value):
        assert parse_bool(value) is False

    def test_invalid(self):
        with pytest.raises(ValueError, match="Invalid boolean"):
            parse_bool("maybe")


class TestLoad:
    def test_defaults(self):
        config = VariantForgeConfig.load()
        assert config.synthesis.deref_enabled is True
        assert config.synthesis.entity_field_name == "entity"
        assert config.synthesis.frozen_types is False
        assert config.output.indent == 4

    def test_file_values(self):
        config_module.CONFIG_DIR.mkdir(parents=True)
        config_module.CONFIG_FILE.write_text(
            json.dumps(
                {
                    "synthesis": {"deref_enabled": False, "unknown": 1},
                    "output": {"indent": "2"},
                }
            )
        )
        config = VariantForgeConfig.load()
        assert config.synthesis.deref_enabled is False
        assert config.output.indent == 2
        assert not hasattr(config.synthesis, "unknown")

    def test_env_overrides_file(self, monkeypatch):
        config_module.CONFIG_DIR.mkdir(parents=True)
        config_module.CONFIG_FILE.write_text(
            json.dumps({"synthesis": {"deref_enabled": False}})
        )
        monkeypatch.setenv("VARIANTFORGE_DEREF", "true")
        monkeypatch.setenv("VARIANTFORGE_ENTITY_FIELD", "owner")
        monkeypatch.setenv("VARIANTFORGE_FROZEN", "1")

        config = VariantForgeConfig.load()
        assert config.synthesis.deref_enabled is True
        assert config.synthesis.entity_field_name == "owner"
        assert config.synthesis.frozen_types is True

    def test_invalid_env_ignored(self, monkeypatch, caplog):
        monkeypatch.setenv("VARIANTFORGE_DEREF", "maybe")
        monkeypatch.setenv("VARIANTFORGE_ENTITY_FIELD", "not a name")
        config = VariantForgeConfig.load()
        assert config.synthesis.deref_enabled is True
        assert config.synthesis.entity_field_name == "entity"
        assert "VARIANTFORGE_DEREF" in caplog.text

    def test_corrupt_file_ignored(self, caplog):
        config_module.CONFIG_DIR.mkdir(parents=True)
        config_module.CONFIG_FILE.write_text("{not json")
        config = VariantForgeConfig.load()
        assert config.synthesis.deref_enabled is True
        assert "Failed to load config" in caplog.text


class TestSaveAndGlobal:
    def test_save_round_trip(self):
        config = VariantForgeConfig()
        config.synthesis.frozen_types = True
        config.save()

        saved = json.loads(config_module.CONFIG_FILE.read_text())
        assert saved == config.to_dict()
        assert VariantForgeConfig.load().synthesis.frozen_types is True

    def test_configure_and_reset(self, monkeypatch):
        custom = VariantForgeConfig()
        custom.synthesis.entity_field_name = "subject"
        configure(custom)
        assert get_config() is custom

        reset_config()
        monkeypatch.setenv("VARIANTFORGE_ENTITY_FIELD", "owner")
        assert get_config().synthesis.entity_field_name == "owner"
        assert get_config() is get_config()
