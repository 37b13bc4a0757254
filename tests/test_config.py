"""
Unit tests for composer configuration loading.
"""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from comment_composer.composition import DEFAULT_MAX_LENGTH, EXTENDED_MAX_LENGTH
from comment_composer.config import ComposerConfig, LimitsConfig, load_config
from comment_composer.errors import ConfigError


class TestDefaults:
    """Tests for default configuration values."""

    def test_limits(self, default_config):
        assert default_config.limits.max_comment_length == 1000
        assert default_config.limits.extended_comment_length == 3000
        assert default_config.limits.max_final_comment_length == 3000
        assert default_config.limits.min_comment_length == 10
        assert default_config.search.fuzzy_threshold is None
        assert default_config.ratings.default_filter == 0

    def test_length_defaults_follow_composition_limits(self):
        limits = LimitsConfig()
        assert limits.max_comment_length == DEFAULT_MAX_LENGTH
        assert limits.extended_comment_length == EXTENDED_MAX_LENGTH
        assert limits.max_final_comment_length == EXTENDED_MAX_LENGTH

    def test_composition_limit(self):
        limits = LimitsConfig()
        assert limits.composition_limit == 1000
        limits.extended_mode = True
        assert limits.composition_limit == 3000


class TestFromDict:
    """Tests for ComposerConfig.from_dict."""

    def test_partial_sections(self):
        config = ComposerConfig.from_dict({"limits": {"extended_mode": True}, "search": {"fuzzy_threshold": 75}})
        assert config.limits.extended_mode is True
        assert config.limits.max_comment_length == 1000
        assert config.search.fuzzy_threshold == 75

    def test_empty_section(self):
        config = ComposerConfig.from_dict({"ratings": None})
        assert config.ratings.default_filter == 0

    def test_empty_dict(self):
        assert ComposerConfig.from_dict({}) == ComposerConfig()


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file_uses_defaults(self, tmp_path):
        assert load_config(tmp_path / "settings.yaml") == ComposerConfig()

    def test_no_path_uses_defaults(self):
        assert load_config(None) == ComposerConfig()

    def test_loads_yaml(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("limits:\n  max_comment_length: 500\nratings:\n  default_filter: 4\n", encoding="utf-8")
        config = load_config(path)
        assert config.limits.max_comment_length == 500
        assert config.ratings.default_filter == 4

    def test_empty_file(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == ComposerConfig()

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("limits: [unclosed", encoding="utf-8")
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        assert exc_info.value.path == path

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("- one\n- two\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Expected a mapping"):
            load_config(path)
