import os

from core.crawl_config import delays_disabled, get_board_config
from crawler.plugins import get_plugin_registry


class Capabilities:
    @staticmethod
    def is_headless() -> bool:
        return bool(get_board_config('single').get('headless', True))

    @staticmethod
    def delays_enabled() -> bool:
        """Paced navigation is on unless JOBLENS_DISABLE_DELAYS is set"""
        return not delays_disabled()

    @staticmethod
    def is_screenshot_enabled() -> bool:
        return bool(os.getenv("JOBLENS_SCREENSHOT_DIR"))

    @staticmethod
    def boards() -> list:
        return [plugin['name'] for plugin in get_plugin_registry().list_plugins()]

    @classmethod
    def get_status(cls) -> dict:
        boards = cls.boards()
        delays = cls.delays_enabled()

        # Running without pacing is fine for tests but gets a live crawl blocked
        if boards and delays:
            status = "green"
        else:
            status = "amber"

        return {
            "status": status,
            "components": {
                "boards": boards,
                "headless": cls.is_headless(),
                "delays": delays,
                "screenshots": cls.is_screenshot_enabled(),
            },
        }


def get_env_presence() -> dict:
    required_vars = [
        "JOBLENS_ENV",
        "JOBLENS_HEADLESS",
        "JOBLENS_NAV_TIMEOUT_MS",
        "JOBLENS_DISABLE_DELAYS",
        "JOBLENS_BOARDS_CONFIG",
        "JOBLENS_SCREENSHOT_DIR",
        "JOBLENS_CORS_ORIGINS",
        "RATE_LIMIT_CRAWL",
        "RATE_LIMIT_MANUAL",
    ]

    return {var: bool(os.getenv(var)) for var in required_vars}
