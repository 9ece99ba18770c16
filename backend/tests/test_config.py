"""Tests for Settings and the logging setup."""

from unittest.mock import patch

import structlog

from mytrip.config import Settings
from mytrip.logging import configure_logging, is_production


class TestResolveTourApiKey:
    def test_server_key_wins(self):
        s = Settings(tour_api_key="server", next_public_tour_api_key="public")
        assert s.resolve_tour_api_key() == "server"

    def test_public_key_fallback(self):
        s = Settings(tour_api_key="", next_public_tour_api_key="public")
        assert s.resolve_tour_api_key() == "public"

    def test_neither_key(self):
        s = Settings(tour_api_key="", next_public_tour_api_key="")
        assert s.resolve_tour_api_key() is None

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("TOUR_API_KEY", "from-env")
        monkeypatch.setenv("TOUR_API_MAX_RETRIES", "5")
        s = Settings()
        assert s.resolve_tour_api_key() == "from-env"
        assert s.tour_api_max_retries == 5

    def test_defaults(self):
        s = Settings(_env_file=None)
        assert s.tour_api_base_url == "https://apis.data.go.kr/B551011/KorService2"
        assert s.tour_api_mobile_os == "ETC"
        assert s.tour_api_timeout_seconds == 10.0


class TestLogging:
    def test_is_production(self):
        with patch("mytrip.logging.settings") as mock_settings:
            mock_settings.environment = "Production"
            assert is_production() is True
            mock_settings.environment = "development"
            assert is_production() is False

    def test_json_renderer_outside_development(self):
        with patch("mytrip.logging.settings") as mock_settings:
            mock_settings.environment = "production"
            mock_settings.log_level = "WARNING"
            configure_logging()
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
        configure_logging()
