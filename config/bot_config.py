# config/bot_config.py
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass
class BotConfig:
    telegram_token: str
    log_level: str = "INFO"
    geocoding_url: str = "https://geocoding-api.open-meteo.com/v1/search"
    forecast_url: str = "https://api.open-meteo.com/v1/forecast"
    search_debounce_ms: int = 300
    api_timeout_sec: float = 10
    session_ttl_sec: int = 3600
    max_sessions: int = 1000

    @property
    def search_debounce_sec(self) -> float:
        return self.search_debounce_ms / 1000

    @classmethod
    def load(cls):
        return cls(
            telegram_token=os.getenv("TELEGRAM_BOT_TOKEN", ""),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            geocoding_url=os.getenv("GEOCODING_URL", cls.geocoding_url),
            forecast_url=os.getenv("FORECAST_URL", cls.forecast_url),
            search_debounce_ms=int(os.getenv("SEARCH_DEBOUNCE_MS", "300")),
            api_timeout_sec=float(os.getenv("API_TIMEOUT_SEC", "10")),
            session_ttl_sec=int(os.getenv("SESSION_TTL_SEC", "3600")),
            max_sessions=int(os.getenv("MAX_SESSIONS", "1000")),
        )
