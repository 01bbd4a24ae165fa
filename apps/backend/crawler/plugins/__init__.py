"""
Job board plugin system for JobLens.

Plugins provide board-specific extraction logic:
- Search URL construction
- Listing selectors (structural cards, generic links, text fallback)
- Detail-page description cascades
"""

from .base import BoardPlugin, ListingResult
from .generic import GenericDetailExtractor
from .registry import PluginRegistry, get_plugin_registry, resolve_board

__all__ = [
    'BoardPlugin',
    'ListingResult',
    'GenericDetailExtractor',
    'PluginRegistry',
    'get_plugin_registry',
    'resolve_board'
]
