#!/usr/bin/env python3
"""
Tests for configuration management module.
"""

import json
import pytest
from unittest.mock import patch

from cmdctl.config import DEFAULTS, Config, ConfigManager


# ============================================================================
# Config Model Tests
# ============================================================================

class TestConfig:
    """Tests for Config model."""

    def test_create_empty_config(self):
        """Test creating config with all defaults."""
        cfg = Config()
        assert cfg.max_workers is None
        assert cfg.log_level is None
        assert cfg.log_file is None
        assert cfg.simple is None
        assert cfg.prompt is None

    def test_get_with_value(self):
        """Test get method when value exists."""
        cfg = Config(max_workers=8)
        assert cfg.get("max_workers") == 8

    def test_get_falls_back_to_defaults(self):
        """Test get method when value is None falls back to DEFAULTS."""
        cfg = Config()
        assert cfg.get("max_workers") == DEFAULTS["max_workers"]
        assert cfg.get("prompt") == "> "

    def test_get_unknown_key(self):
        """Test get with unknown key returns default."""
        cfg = Config()
        assert cfg.get("unknown_key") is None
        assert cfg.get("unknown_key", "default") == "default"

    def test_ignores_extra_fields(self):
        """Test unknown fields like _comment are ignored."""
        cfg = Config.model_validate({"_comment": "hi", "max_workers": 2})
        assert cfg.max_workers == 2

    def test_rejects_zero_workers(self):
        """Test max_workers must be positive."""
        with pytest.raises(ValueError):
            Config(max_workers=0)


# ============================================================================
# ConfigManager Tests
# ============================================================================

class TestConfigManager:
    """Tests for ConfigManager."""

    @pytest.fixture
    def manager(self, tmp_path):
        """ConfigManager pointed at a temporary directory."""
        config_dir = tmp_path / ".cmdctl"
        config_file = config_dir / "config.json"
        with patch.object(ConfigManager, "CONFIG_DIR", config_dir):
            with patch.object(ConfigManager, "CONFIG_FILE", config_file):
                yield ConfigManager()

    def test_load_nonexistent_config(self, manager):
        """Test loading config when file doesn't exist (without creating)."""
        cfg = manager.load(create_if_missing=False)
        assert cfg.max_workers is None
        assert not manager.CONFIG_FILE.exists()

    def test_load_creates_default_config(self, manager):
        """Test that load creates default config file if missing."""
        cfg = manager.load(create_if_missing=True)
        assert cfg.max_workers is None
        data = json.loads(manager.CONFIG_FILE.read_text())
        assert data["max_workers"] == DEFAULTS["max_workers"]
        assert "_comment" in data

    def test_load_invalid_json(self, manager):
        """Test invalid JSON falls back to defaults."""
        manager.CONFIG_DIR.mkdir(parents=True)
        manager.CONFIG_FILE.write_text("{not json")
        cfg = manager.load()
        assert cfg.max_workers is None

    def test_save_and_load_config(self, manager):
        """Test saving and loading config."""
        manager.save(Config(max_workers=8, log_level="DEBUG"))

        loaded = ConfigManager().load()
        assert loaded.max_workers == 8
        assert loaded.log_level == "DEBUG"

    def test_save_only_non_none_values(self, manager):
        """Test that save only writes non-None values."""
        manager.save(Config(max_workers=3))
        data = json.loads(manager.CONFIG_FILE.read_text())
        assert data == {"max_workers": 3}

    def test_set_value(self, manager):
        """Test setting a config value."""
        manager.set("max_workers", 6)
        assert ConfigManager().load().max_workers == 6

    def test_set_coerces_string(self, manager):
        """Test values from the command line are validated and coerced."""
        manager.set("max_workers", "5")
        manager.set("simple", "true")
        loaded = ConfigManager().load()
        assert loaded.max_workers == 5
        assert loaded.simple is True

    def test_set_invalid_value_raises(self, manager):
        """Test that an invalid value raises ValueError."""
        with pytest.raises(ValueError):
            manager.set("max_workers", "lots")

    def test_set_preserves_other_values(self, manager):
        """Test that setting one value preserves other existing values."""
        manager.set("max_workers", 8)
        ConfigManager().set("prompt", "$ ")

        final = ConfigManager().load(create_if_missing=False)
        assert final.max_workers == 8
        assert final.prompt == "$ "

    def test_set_unknown_key_raises(self, manager):
        """Test that setting unknown key raises ValueError."""
        with pytest.raises(ValueError, match="Unknown config key"):
            manager.set("unknown_key", "value")

    def test_unset_value(self, manager):
        """Test unsetting a config value."""
        manager.set("max_workers", 8)
        manager.set("log_level", "INFO")
        manager.unset("max_workers")

        loaded = ConfigManager().load()
        assert loaded.max_workers is None
        assert loaded.log_level == "INFO"

    def test_unset_unknown_key_raises(self, manager):
        """Test that unsetting unknown key raises ValueError."""
        with pytest.raises(ValueError, match="Unknown config key"):
            manager.unset("unknown_key")

    def test_list_settings(self, manager):
        """Test list_settings only shows values differing from defaults."""
        manager.save(Config(max_workers=DEFAULTS["max_workers"], log_level="DEBUG"))
        mgr = ConfigManager()
        assert mgr.list_settings() == {"log_level": "DEBUG"}

    def test_reset(self, manager):
        """Test reset removes the config file."""
        manager.set("max_workers", 2)
        manager.reset()
        assert not manager.CONFIG_FILE.exists()
        assert manager.config.max_workers is None
