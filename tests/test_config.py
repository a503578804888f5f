from __future__ import annotations

import pytest

from accident_analyzer import config


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    config.get_analysis_settings.cache_clear()
    yield
    config.get_analysis_settings.cache_clear()


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "ACCIDENT_LOG_VALIDATION_ERRORS",
        "ACCIDENT_MAX_LOGGED_ERRORS",
        "ACCIDENT_REPORT_FILENAME",
        "ACCIDENT_CSV_ENCODING",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = config.get_analysis_settings()

    assert settings == config.AnalysisSettings()


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ACCIDENT_LOG_VALIDATION_ERRORS", "off")
    monkeypatch.setenv("ACCIDENT_MAX_LOGGED_ERRORS", "-5")
    monkeypatch.setenv("ACCIDENT_REPORT_FILENAME", "  informe.json ")

    settings = config.get_analysis_settings()

    assert settings.log_validation_errors is False
    assert settings.max_logged_errors == 0
    assert settings.report_filename == "informe.json"


def test_invalid_int_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ACCIDENT_MAX_LOGGED_ERRORS", "many")

    assert config.get_analysis_settings().max_logged_errors == 200
