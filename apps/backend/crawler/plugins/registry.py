"""
Plugin registry for managing job board plugins.
"""
import logging
from typing import List, Dict, Optional
from .base import BoardPlugin
from core.errors import MalformedInput

logger = logging.getLogger(__name__)

# Global registry instance
_registry: Optional['PluginRegistry'] = None

# Accepted spellings for each built-in board
BOARD_ALIASES = {
    'awign': 'awign',
    'a': 'awign',
    'board-a': 'awign',
    'indeed': 'indeed',
    'b': 'indeed',
    'board-b': 'indeed',
}


def resolve_board(name: Optional[str]) -> str:
    """Canonical board name for user input. Raises MalformedInput if unknown."""
    key = (name or '').strip().lower()
    if key not in BOARD_ALIASES:
        raise MalformedInput(f"Unknown job board: {name!r}")
    return BOARD_ALIASES[key]


class PluginRegistry:
    """Registry for board plugins"""

    def __init__(self):
        self._plugins: List[BoardPlugin] = []
        self._plugins_by_name: Dict[str, BoardPlugin] = {}

    def register(self, plugin: BoardPlugin):
        """Register a plugin"""
        if plugin.name in self._plugins_by_name:
            logger.warning(f"Plugin {plugin.name} already registered, replacing")
            self._plugins = [p for p in self._plugins if p.name != plugin.name]

        self._plugins_by_name[plugin.name] = plugin
        self._plugins.append(plugin)

        # Sort by priority (higher first)
        self._plugins.sort(key=lambda p: p.priority, reverse=True)

        logger.info(f"Registered plugin: {plugin.name} (priority={plugin.priority})")

    def get_plugin(self, name: str) -> Optional[BoardPlugin]:
        """Get plugin by name"""
        return self._plugins_by_name.get(name)

    def plugin_for(self, board: str) -> BoardPlugin:
        """
        Plugin for a board name or alias.

        Raises:
            MalformedInput: unknown or unregistered board
        """
        canonical = resolve_board(board)
        plugin = self._plugins_by_name.get(canonical)
        if plugin is None:
            raise MalformedInput(f"No plugin registered for board: {canonical}")
        return plugin

    def list_plugins(self) -> List[Dict]:
        """List all registered plugins"""
        return [
            {
                'name': plugin.name,
                'priority': plugin.priority,
                'class': plugin.__class__.__name__
            }
            for plugin in self._plugins
        ]


def get_plugin_registry() -> PluginRegistry:
    """Get or create the global plugin registry"""
    global _registry
    if _registry is None:
        _registry = PluginRegistry()
        # Auto-register built-in plugins
        _register_builtin_plugins(_registry)
    return _registry


def _register_builtin_plugins(registry: PluginRegistry):
    """Register all built-in plugins"""
    from .awign import AwignPlugin
    from .indeed import IndeedPlugin

    registry.register(AwignPlugin())
    registry.register(IndeedPlugin())
