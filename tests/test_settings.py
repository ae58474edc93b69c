"""Tests for configuration loading."""

import pytest

from splitledger.config import (
    AppSettings,
    DataSourceSettings,
    LedgerSettings,
    get_settings,
    validate_all_settings,
)


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:

    def test_ledger_defaults(self, monkeypatch):
        monkeypatch.delenv("LEDGER_SETTLE_EPSILON", raising=False)
        settings = LedgerSettings()
        assert settings.settle_epsilon == 0.01
        assert settings.zero_sum_tolerance == 1e-9
        assert settings.currency_symbol == "$"

    def test_ledger_from_environment(self, monkeypatch):
        monkeypatch.setenv("LEDGER_CURRENCY_SYMBOL", "€")
        assert get_settings().ledger.currency_symbol == "€"

    def test_epsilon_bounds(self, monkeypatch):
        monkeypatch.setenv("LEDGER_SETTLE_EPSILON", "5")
        with pytest.raises(ValueError):
            LedgerSettings()

    def test_data_source_defaults(self):
        settings = DataSourceSettings()
        assert settings.fetch_attempts == 3
        assert settings.retry_wait_max == 10.0

    def test_log_level_normalized(self):
        assert AppSettings(log_level="debug").log_level == "DEBUG"

    def test_log_level_rejects_unknown(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            AppSettings(log_level="chatty")

    def test_validate_all_settings_reports_failures(self, monkeypatch):
        monkeypatch.setenv("DATA_SOURCE_FETCH_ATTEMPTS", "0")
        results = validate_all_settings()

        assert results["ledger"] is True
        assert results["app"] is True
        assert results["data_source"] is False
        assert "data_source_error" in results

    def test_debug_mode_forces_debug_logging(self):
        assert AppSettings(log_level="warning").effective_log_level == "WARNING"
        assert AppSettings(log_level="warning", debug_mode=True).effective_log_level == "DEBUG"
