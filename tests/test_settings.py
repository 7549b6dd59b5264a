"""Tests for environment-driven configuration."""

from config.settings import AppConfig, BackendConfig, Config, DatabaseConfig


class TestSettings:
    def test_defaults(self):
        config = AppConfig()

        assert config.high_flowrate_threshold == 200.0
        assert config.medium_flowrate_threshold == 150.0
        assert config.efficiency_reference_flowrate == 250.0
        assert config.reapply_sort_on_filter is False

    def test_app_config_from_env(self, monkeypatch):
        monkeypatch.setenv("REAPPLY_SORT_ON_FILTER", "yes")
        monkeypatch.setenv("HISTORY_LIMIT", "10")

        config = AppConfig.from_env()

        assert config.reapply_sort_on_filter is True
        assert config.history_limit == 10

    def test_backend_url_strips_trailing_slash(self, monkeypatch):
        monkeypatch.setenv("BACKEND_URL", "http://backend:9000/api/")

        assert BackendConfig.from_env().base_url == "http://backend:9000/api"

    def test_connection_strings(self):
        assert DatabaseConfig(database="state.db").connection_string == "sqlite:///state.db"
        assert DatabaseConfig(
            database="app", driver="postgresql", username="u", password="p", host="db", port=5432,
        ).connection_string == "postgresql://u:p@db:5432/app"

    def test_load_is_cached_until_reset(self, monkeypatch):
        Config.reset()
        first = Config.load()
        assert Config.load() is first

        Config.reset()
        assert Config.load() is not first
        Config.reset()
