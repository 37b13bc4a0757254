"""Configuration for the final comment composer.

Settings are read from an optional YAML file:

    limits:
      max_comment_length: 1000
      extended_comment_length: 3000
      max_final_comment_length: 3000
      min_comment_length: 10
      extended_mode: false
    search:
      fuzzy_threshold: 80
    ratings:
      default_filter: 0

Missing sections and keys keep their defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
import yaml  # type: ignore[import-untyped]

from comment_composer.composition import DEFAULT_MAX_LENGTH, EXTENDED_MAX_LENGTH
from comment_composer.errors import ConfigError

logger = structlog.get_logger()


@dataclass
class LimitsConfig:
    """Character limits for comment text."""

    max_comment_length: int = DEFAULT_MAX_LENGTH
    extended_comment_length: int = EXTENDED_MAX_LENGTH
    max_final_comment_length: int = EXTENDED_MAX_LENGTH
    min_comment_length: int = 10
    extended_mode: bool = False

    @property
    def composition_limit(self) -> int:
        """Limit applied when composing a candidate draft."""
        if self.extended_mode:
            return self.extended_comment_length
        return self.max_comment_length


@dataclass
class SearchConfig:
    """Personalized comment search configuration."""

    fuzzy_threshold: Optional[int] = None  # 0-100, None disables fuzzy matching


@dataclass
class RatingsConfig:
    """Rating filter configuration."""

    default_filter: int = 0  # 0 shows every rating


@dataclass
class ComposerConfig:
    """Main configuration for the composer.

    Example:
        config = ComposerConfig()
        config.limits.extended_mode = True
        config.search.fuzzy_threshold = 80
    """

    limits: LimitsConfig = field(default_factory=LimitsConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    ratings: RatingsConfig = field(default_factory=RatingsConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ComposerConfig":
        """Create a ComposerConfig from a dictionary (e.g., from YAML).

        Args:
            data: Dictionary with configuration values.

        Returns:
            ComposerConfig instance with values from the dictionary.
        """
        config = cls()

        if "limits" in data:
            limits_data = data["limits"] or {}
            config.limits.max_comment_length = limits_data.get(
                "max_comment_length", config.limits.max_comment_length
            )
            config.limits.extended_comment_length = limits_data.get(
                "extended_comment_length", config.limits.extended_comment_length
            )
            config.limits.max_final_comment_length = limits_data.get(
                "max_final_comment_length", config.limits.max_final_comment_length
            )
            config.limits.min_comment_length = limits_data.get(
                "min_comment_length", config.limits.min_comment_length
            )
            config.limits.extended_mode = limits_data.get(
                "extended_mode", config.limits.extended_mode
            )

        if "search" in data:
            search_data = data["search"] or {}
            config.search.fuzzy_threshold = search_data.get(
                "fuzzy_threshold", config.search.fuzzy_threshold
            )

        if "ratings" in data:
            ratings_data = data["ratings"] or {}
            config.ratings.default_filter = ratings_data.get(
                "default_filter", config.ratings.default_filter
            )

        return config


def load_config(config_path: Path | None = None) -> ComposerConfig:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to the settings file; defaults are used when it is
            None or does not exist

    Returns:
        ComposerConfig

    Raises:
        ConfigError: If the file exists but is not a YAML mapping
    """
    if config_path is None or not config_path.exists():
        logger.warning("using_default_config")
        return ComposerConfig()

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}", path=config_path) from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {config_path}", path=config_path)

    logger.info("config_loaded", path=str(config_path))
    return ComposerConfig.from_dict(data)
