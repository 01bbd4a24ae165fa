"""
Shared fixtures. No test launches a real browser.
"""
import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.crawl_config import get_board_config, reset_config_cache
from core.pacing import NoDelayPacer
from crawler.navigation import Navigator
from crawler.plugins import GenericDetailExtractor, PluginRegistry
from crawler.plugins.awign import AwignPlugin
from crawler.plugins.indeed import IndeedPlugin


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep env overrides and the YAML cache from leaking between tests."""
    for var in ("JOBLENS_HEADLESS", "JOBLENS_NAV_TIMEOUT_MS", "JOBLENS_DISABLE_DELAYS",
                "JOBLENS_BOARDS_CONFIG", "JOBLENS_SCREENSHOT_DIR"):
        monkeypatch.delenv(var, raising=False)
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture
def pacer():
    return NoDelayPacer()


@pytest.fixture
def navigator(pacer):
    return Navigator(pacer=pacer)


@pytest.fixture
def awign():
    return AwignPlugin()


@pytest.fixture
def indeed():
    return IndeedPlugin()


@pytest.fixture
def registry(awign, indeed):
    registry = PluginRegistry()
    registry.register(awign)
    registry.register(indeed)
    return registry


@pytest.fixture
def single_config():
    return get_board_config("single")


@pytest.fixture
def detail_extractor(single_config):
    return GenericDetailExtractor(single_config)
