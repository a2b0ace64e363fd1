# -*- coding: utf-8 -*-
"""
Асинхронный клиент Open-Meteo (геокодинг + прогноз).

Поддерживает:
- Поиск мест по названию: search_places(query)
- Текущую погоду и почасовой прогноз: get_weather(lat, lon)
- Отмену: запросы выполняются в задачах asyncio, task.cancel() прерывает
  ожидание ответа, CancelledError наружу не оборачивается

Все ошибки сети, HTTP-статуса и формата ответа приводятся к APIError
(GeocodingError / WeatherFetchError), чтобы контроллерам хватало одного except.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from core.models.app_state import MAX_SUGGESTIONS
from core.models.weather_response import GeocodingResponse, Place, WeatherSnapshot
from core.utils.validator import validate_coordinates

logger = logging.getLogger("api_client")

# === КОНФИГУРАЦИЯ API ===
GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
API_TIMEOUT = 10  # секунд

SEARCH_LANGUAGE = "en"

CURRENT_FIELDS = [
    "temperature_2m",
    "apparent_temperature",
    "is_day",
    "weather_code",
    "wind_speed_10m",
    "wind_direction_10m",
    "relative_humidity_2m",
]
HOURLY_FIELDS = [
    "temperature_2m",
    "precipitation_probability",
    "relative_humidity_2m",
]


class APIError(Exception):
    """Базовая ошибка обращения к Open-Meteo."""


class GeocodingError(APIError):
    pass


class WeatherFetchError(APIError):
    pass


def build_search_params(query: str, count: int = MAX_SUGGESTIONS) -> Dict[str, Any]:
    """Параметры запроса геокодинга (name кодируется httpx)."""
    return {
        "name": query,
        "count": count,
        "language": SEARCH_LANGUAGE,
        "format": "json",
    }


def build_forecast_params(lat: float, lon: float) -> Dict[str, Any]:
    return {
        "latitude": str(lat),
        "longitude": str(lon),
        "current": ",".join(CURRENT_FIELDS),
        "hourly": ",".join(HOURLY_FIELDS),
        "timezone": "auto",
    }


class OpenMeteoClient:
    """Клиент для геокодинга и прогноза Open-Meteo."""

    def __init__(
        self,
        geocoding_url: str = GEOCODING_URL,
        forecast_url: str = FORECAST_URL,
        timeout: float = API_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.geocoding_url = geocoding_url
        self.forecast_url = forecast_url
        # Переданный снаружи httpx-клиент (например, с MockTransport) не закрываем
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    async def search_places(self, query: str, count: int = MAX_SUGGESTIONS) -> List[Place]:
        """
        Ищет места по названию.

        Args:
            query (str): Текст пользователя
            count (int): Максимум результатов

        Returns:
            List[Place]: Найденные места (пустой список, если results нет)

        Raises:
            GeocodingError: сеть, статус не 2xx или неожиданный формат
        """
        try:
            response = await self._client.get(
                self.geocoding_url, params=build_search_params(query, count)
            )
        except httpx.HTTPError as e:
            raise GeocodingError(str(e) or "Failed to fetch suggestions") from e

        if not response.is_success:
            logger.warning(f"⚠️ Геокодинг: статус {response.status_code} для '{query}'")
            raise GeocodingError("Failed to fetch suggestions")

        try:
            places = GeocodingResponse.model_validate(response.json()).places
        except ValueError as e:
            raise GeocodingError("Malformed geocoding response") from e

        logger.debug(f"🔎 Геокодинг: '{query}' → {len(places)} мест")
        return places[:count]

    async def get_weather(self, lat: float, lon: float) -> WeatherSnapshot:
        """
        Получает текущую погоду и почасовой прогноз.

        Raises:
            WeatherFetchError: сеть, статус не 2xx, неожиданный формат
                или координаты вне диапазона
        """
        if not validate_coordinates(lat, lon):
            logger.error(f"❌ Неверные координаты: lat={lat}, lon={lon}")
            raise WeatherFetchError("Invalid coordinates")

        try:
            response = await self._client.get(
                self.forecast_url, params=build_forecast_params(lat, lon)
            )
        except httpx.HTTPError as e:
            raise WeatherFetchError(str(e) or "Failed to fetch weather") from e

        if not response.is_success:
            logger.warning(f"⚠️ Open-Meteo: статус {response.status_code} для ({lat}, {lon})")
            raise WeatherFetchError("Failed to fetch weather")

        try:
            snapshot = WeatherSnapshot.model_validate(response.json())
        except ValueError as e:
            raise WeatherFetchError("Malformed weather response") from e

        logger.info(f"✅ Open-Meteo: прогноз получен для ({lat}, {lon})")
        return snapshot

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()
