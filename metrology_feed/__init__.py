"""
Metrology Feed - SAMR Department of Metrology listing scraper.

Architecture:
- core/: Stable foundation (models, HTTP client, links, selectors, sanitizer)
- navigators/: Listing layouts (legal, science)
- parsers/: Detail page resolution
- config/: YAML-driven source definition
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
