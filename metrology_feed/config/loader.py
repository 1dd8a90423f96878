"""
YAML configuration loader with validation.

Loads source definitions from YAML files with:
- Environment variable substitution
- Required field validation
- Default values
"""

import os
import re
from pathlib import Path
from typing import Optional

import yaml
import structlog

from metrology_feed.navigators.base import SourceConfig

logger = structlog.get_logger(__name__)


DEFAULT_SOURCE_ID = "samr_jls"

REQUIRED_FIELDS = ["source_id", "source_name", "root_url", "listing_url", "layouts"]


def substitute_env_vars(text: str) -> str:
    """
    Substitute environment variables in text.

    Supports formats:
    - ${VAR_NAME} - required, empty string and a warning if missing
    - ${VAR_NAME:-default} - optional with default

    Args:
        text: Text with env var placeholders

    Returns:
        Text with substituted values
    """
    def replace(match):
        var_expr = match.group(1)
        if ":-" in var_expr:
            var_name, default = var_expr.split(":-", 1)
            return os.getenv(var_name, default)
        else:
            value = os.getenv(var_expr)
            if value is None:
                logger.warning("env_var_not_set", var=var_expr)
                return ""
            return value

    return re.sub(r"\$\{([^}]+)\}", replace, text)


class ConfigLoader:
    """
    Configuration loader for feed sources.

    Loads YAML config files and validates required fields.
    """

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize config loader.

        Args:
            config_dir: Directory containing config files
                       (defaults to package config directory)
        """
        if config_dir:
            self.config_dir = Path(config_dir)
        else:
            self.config_dir = Path(__file__).parent

    def load_file(self, filename: str) -> dict:
        """
        Load YAML config file.

        Args:
            filename: Config file name (relative to config_dir)

        Returns:
            Parsed config dict
        """
        filepath = self.config_dir / filename

        if not filepath.exists():
            raise FileNotFoundError(f"Config file not found: {filepath}")

        logger.debug("loading_config", file=str(filepath))

        with open(filepath, "r", encoding="utf-8") as f:
            content = f.read()

        content = substitute_env_vars(content)
        config = yaml.safe_load(content)

        return config or {}

    def load_sources(self, filename: str = "sources.yml") -> list[SourceConfig]:
        """
        Load source definitions from YAML.

        Args:
            filename: Sources config file name

        Returns:
            List of SourceConfig objects

        Raises:
            ValueError: If a source misses required fields
        """
        config = self.load_file(filename)

        sources = []
        for source_data in config.get("sources", []):
            source = self.parse_source(source_data)
            sources.append(source)
            logger.debug("source_loaded", source_id=source.source_id)

        return sources

    def parse_source(self, data: dict) -> SourceConfig:
        """
        Parse source definition into SourceConfig.

        Args:
            data: Source definition dict

        Returns:
            SourceConfig object

        Raises:
            ValueError: If required fields missing
        """
        for field in REQUIRED_FIELDS:
            if not data.get(field):
                raise ValueError(f"Missing required field: {field}")

        for kind, entry in data["layouts"].items():
            if not isinstance(entry, dict) or "path" not in entry:
                raise ValueError(f"Layout {kind} needs a path")

        return SourceConfig.from_dict(data)


def load_sources(config_path: Optional[str] = None) -> list[SourceConfig]:
    """
    Convenience function to load source configs.

    Args:
        config_path: Optional path to sources.yml

    Returns:
        List of SourceConfig objects
    """
    if config_path:
        loader = ConfigLoader(str(Path(config_path).parent))
        return loader.load_sources(Path(config_path).name)

    return ConfigLoader().load_sources()


def load_source(
    source_id: str = DEFAULT_SOURCE_ID,
    config_path: Optional[str] = None,
) -> SourceConfig:
    """
    Load a single source by id.

    Raises:
        ValueError: If no source with that id is configured
    """
    for source in load_sources(config_path):
        if source.source_id == source_id:
            return source
    raise ValueError(f"Unknown source: {source_id}")
