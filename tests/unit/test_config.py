"""Tests for configuration and its persistence."""

import json
from pathlib import Path

import pytest

from nfwords.config import (
    ConfigManager,
    EarlyMasteryRule,
    NFWordsConfig,
    TierThresholds,
    create_default_config,
)


class TestNFWordsConfig:
    """Tests for NFWordsConfig."""

    def test_defaults(self):
        config = create_default_config()
        assert config.tier_thresholds == TierThresholds(1.0, 2.0, 3.5, 5.0)
        assert config.early_mastery == EarlyMasteryRule(3, 0.8, 2.0)
        assert config.new_word_exposures == 10
        assert config.review_word_exposures == 5
        assert config.buffer_cap == 3
        assert config.daily_review_cap == 20

    def test_overrides(self):
        config = create_default_config(buffer_cap=2, strict_invariants=True)
        assert config.buffer_cap == 2
        assert config.strict_invariants

    def test_frozen(self):
        config = create_default_config()
        with pytest.raises(AttributeError):
            config.buffer_cap = 5

    def test_string_paths_converted(self):
        config = NFWordsConfig(db_path="/tmp/x.db", word_pool_path="/tmp/pack.jsonl")
        assert config.db_path == Path("/tmp/x.db")
        assert isinstance(config.word_pool_path, Path)

    def test_nested_dicts_converted(self):
        config = NFWordsConfig(
            tier_thresholds={"very_familiar": 0.5, "familiar": 1.0, "unfamiliar": 2.0, "difficult": 3.0},
            early_mastery={"min_exposures": 2},
        )
        assert config.tier_thresholds.difficult == 3.0
        assert config.early_mastery.min_exposures == 2

    @pytest.mark.parametrize(
        "bounds",
        [(-1.0, 2.0, 3.5, 5.0), (1.0, 1.0, 3.5, 5.0), (1.0, 2.0, 6.0, 5.0)],
    )
    def test_invalid_thresholds(self, bounds):
        with pytest.raises(ValueError):
            TierThresholds(*bounds)

    def test_invalid_buffer_cap(self):
        with pytest.raises(ValueError):
            NFWordsConfig(buffer_cap=0)

    def test_invalid_exposure_bounds(self):
        with pytest.raises(ValueError):
            NFWordsConfig(min_word_exposures=20, max_word_exposures=15)


class TestConfigManager:
    """Tests for ConfigManager."""

    @pytest.fixture
    def manager(self, temp_dir):
        return ConfigManager(temp_dir / "settings" / "config.json")

    def test_missing_file_gives_defaults(self, manager):
        assert not manager.config_exists()
        assert manager.load_config() == create_default_config()

    def test_save_and_load(self, manager, temp_dir):
        config = create_default_config(
            db_path=temp_dir / "study.db",
            buffer_cap=2,
            tier_thresholds=TierThresholds(0.5, 1.5, 3.0, 4.0),
            deepseek_api_key="sk-test",
        )
        manager.save_config(config)

        assert manager.config_exists()
        assert manager.load_config() == config

    def test_saved_paths_are_strings(self, manager, temp_dir):
        manager.save_config(create_default_config(db_path=temp_dir / "study.db"))
        data = json.loads(manager.config_file.read_text(encoding="utf-8"))
        assert data["db_path"] == str(temp_dir / "study.db")
        assert data["tier_thresholds"]["difficult"] == 5.0

    def test_overrides_win(self, manager):
        manager.save_config(create_default_config(buffer_cap=2))
        assert manager.load_config(buffer_cap=4).buffer_cap == 4

    def test_invalid_json_falls_back(self, manager, caplog):
        manager.config_file.parent.mkdir(parents=True)
        manager.config_file.write_text("{not json", encoding="utf-8")
        assert manager.load_config() == create_default_config()
        assert "Invalid config file" in caplog.text

    def test_unknown_key_falls_back(self, manager):
        manager.config_file.parent.mkdir(parents=True)
        manager.config_file.write_text(json.dumps({"no_such_option": 1}), encoding="utf-8")
        assert manager.load_config(buffer_cap=2).buffer_cap == 2

    def test_delete(self, manager):
        manager.save_config(create_default_config())
        manager.delete_config()
        manager.delete_config()
        assert not manager.config_exists()
