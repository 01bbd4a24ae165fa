"""
Tests for board configuration loading.
"""

from core.crawl_config import delays_disabled, get_board_config, reset_config_cache


class TestBoardConfig:
    """Defaults, YAML overrides and env overrides."""

    def test_awign_defaults(self):
        config = get_board_config("awign")

        assert config["profile"] == "default"
        assert config["max_jobs"] == 10
        assert config["wait_until"] == "networkidle"
        assert config["base_url"] == "https://www.awignexpert.com"

    def test_indeed_uses_stealth(self):
        config = get_board_config("indeed")

        assert config["profile"] == "stealth"
        assert config["listing_timeout_ms"] == 45000

    def test_single_url_caps(self):
        config = get_board_config("single")

        assert config["profile"] == "stealth"
        assert config["description_cap"] == 8000
        assert config["body_fallback_cap"] == 5000

    def test_yaml_override(self, tmp_path, monkeypatch):
        path = tmp_path / "boards.yaml"
        path.write_text("boards:\n  awign:\n    max_jobs: 5\n    display_name: Awign Expert\n")
        monkeypatch.setenv("JOBLENS_BOARDS_CONFIG", str(path))
        reset_config_cache()

        config = get_board_config("awign")

        assert config["max_jobs"] == 5
        assert config["display_name"] == "Awign Expert"

    def test_missing_yaml_falls_back_to_defaults(self, tmp_path, monkeypatch):
        monkeypatch.setenv("JOBLENS_BOARDS_CONFIG", str(tmp_path / "missing.yaml"))
        reset_config_cache()

        assert get_board_config("indeed")["detail_timeout_ms"] == 30000

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("JOBLENS_HEADLESS", "false")
        monkeypatch.setenv("JOBLENS_NAV_TIMEOUT_MS", "5000")

        config = get_board_config("indeed")

        assert config["headless"] is False
        assert config["listing_timeout_ms"] == 5000
        assert config["detail_timeout_ms"] == 5000

    def test_invalid_timeout_ignored(self, monkeypatch):
        monkeypatch.setenv("JOBLENS_NAV_TIMEOUT_MS", "soon")

        assert get_board_config("awign")["listing_timeout_ms"] == 30000

    def test_delays_disabled(self, monkeypatch):
        assert delays_disabled() is False
        monkeypatch.setenv("JOBLENS_DISABLE_DELAYS", "true")
        assert delays_disabled() is True
