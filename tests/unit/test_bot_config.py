# -*- coding: utf-8 -*-
"""
Тесты для config/bot_config.py
"""
from config.bot_config import BotConfig


def test_defaults_without_env(monkeypatch):
    for name in ("TELEGRAM_BOT_TOKEN", "LOG_LEVEL", "GEOCODING_URL", "FORECAST_URL",
                 "SEARCH_DEBOUNCE_MS", "API_TIMEOUT_SEC", "SESSION_TTL_SEC", "MAX_SESSIONS"):
        monkeypatch.delenv(name, raising=False)

    config = BotConfig.load()
    assert config.telegram_token == ""
    assert config.forecast_url == "https://api.open-meteo.com/v1/forecast"
    assert config.search_debounce_sec == 0.3
    assert config.max_sessions == 1000


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "123:abc")
    monkeypatch.setenv("SEARCH_DEBOUNCE_MS", "50")
    monkeypatch.setenv("API_TIMEOUT_SEC", "2.5")

    config = BotConfig.load()
    assert config.telegram_token == "123:abc"
    assert config.search_debounce_sec == 0.05
    assert config.api_timeout_sec == 2.5
