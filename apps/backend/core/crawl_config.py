"""
Board-specific crawl configuration loader.
Reads from config/boards.yaml and provides per-board overrides.
"""
import os
import yaml
import logging
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

# Default configuration
DEFAULT_CONFIG = {
    'headless': True,
    'profile': 'default',
    'wait_until': 'networkidle',
    'listing_timeout_ms': 30000,
    'detail_timeout_ms': 20000,
    'listing_settle': [3.0, 5.0],
    'detail_settle': [1.5, 2.5],
    'request_delay': [1.5, 3.0],
    'max_jobs': 10,
    'description_cap': 5000,
    'body_fallback_cap': 3000,
}

# Built-in per-board values; config/boards.yaml may override any of them
BOARD_DEFAULTS = {
    'awign': {
        'base_url': 'https://www.awignexpert.com',
        'search_url': 'https://www.awignexpert.com/jobs/explore',
    },
    'indeed': {
        'base_url': 'https://www.indeed.com',
        'search_url': 'https://www.indeed.com/jobs',
        'profile': 'stealth',
        'listing_timeout_ms': 45000,
        'detail_timeout_ms': 30000,
        'listing_settle': [2.0, 4.0],
        'detail_settle': [1.0, 2.0],
    },
    'single': {
        'profile': 'stealth',
        'listing_timeout_ms': 45000,
        'listing_settle': [1.5, 3.0],
        'description_cap': 8000,
        'body_fallback_cap': 5000,
    },
}

# Cache for loaded config
_config_cache: Optional[Dict] = None


def _config_path() -> Path:
    override = os.getenv('JOBLENS_BOARDS_CONFIG')
    if override:
        return Path(override)
    return Path(__file__).parent.parent / 'config' / 'boards.yaml'


def load_board_config() -> Dict:
    """Load board configuration from YAML file."""
    global _config_cache

    if _config_cache is not None:
        return _config_cache

    config_path = _config_path()

    if not config_path.exists():
        logger.warning(f"Board config file not found: {config_path}. Using defaults.")
        _config_cache = {}
        return _config_cache

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            _config_cache = yaml.safe_load(f) or {}
        logger.info(f"Loaded board config from {config_path}")
    except Exception as e:
        logger.error(f"Error loading board config: {e}")
        _config_cache = {}

    return _config_cache


def reset_config_cache():
    """Drop the cached YAML so the next lookup re-reads it."""
    global _config_cache
    _config_cache = None


def _env_overrides() -> Dict:
    overrides = {}

    headless = os.getenv('JOBLENS_HEADLESS')
    if headless is not None:
        overrides['headless'] = headless.lower() not in ('0', 'false', 'no')

    nav_timeout = os.getenv('JOBLENS_NAV_TIMEOUT_MS')
    if nav_timeout:
        try:
            timeout_ms = int(nav_timeout)
            overrides['listing_timeout_ms'] = timeout_ms
            overrides['detail_timeout_ms'] = timeout_ms
        except ValueError:
            logger.warning(f"Ignoring invalid JOBLENS_NAV_TIMEOUT_MS: {nav_timeout}")

    return overrides


def get_board_config(board: str) -> Dict:
    """
    Get configuration for a board ('awign', 'indeed' or 'single').
    Returns defaults merged with built-in board values, YAML overrides and env.
    """
    config = load_board_config()

    merged = DEFAULT_CONFIG.copy()
    merged.update(BOARD_DEFAULTS.get(board, {}))

    # Check both root level and 'boards' key
    if 'boards' in config and isinstance(config['boards'], dict):
        merged.update(config['boards'].get(board) or {})
    else:
        merged.update(config.get(board) or {})

    merged.update(_env_overrides())
    return merged


def delays_disabled() -> bool:
    return os.getenv('JOBLENS_DISABLE_DELAYS', 'false').lower() == 'true'
