"""
Configuration module for the feed source.

Provides:
- YAML config loading with validation
- Source definition
- Environment variable substitution
"""

from .loader import ConfigLoader, load_source, load_sources

__all__ = ["ConfigLoader", "load_source", "load_sources"]
