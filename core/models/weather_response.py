# -*- coding: utf-8 -*-
"""
Pydantic-схемы ответов Open-Meteo (геокодинг + прогноз).

Все модели неизменяемые: снимок погоды заменяется целиком при каждом
новом запросе, частичных обновлений нет. Температуры хранятся в °C,
скорость ветра в км/ч, ровно как их отдаёт API.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class Unit(str, Enum):
    """Единица отображения температуры (только для представления)."""
    CELSIUS = "C"
    FAHRENHEIT = "F"


class Place(BaseModel):
    """Результат геокодинга."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    name: str
    admin1: Optional[str] = None
    country: Optional[str] = None
    latitude: float
    longitude: float

    @property
    def subtitle(self) -> str:
        """Регион и страна через запятую (пустые части пропускаются)."""
        return ", ".join(part for part in (self.admin1, self.country) if part)

    @property
    def label(self) -> str:
        subtitle = self.subtitle
        return f"{self.name}, {subtitle}" if subtitle else self.name


class GeocodingResponse(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    # Open-Meteo просто не присылает ключ, если ничего не найдено
    results: Optional[List[Place]] = None

    @property
    def places(self) -> List[Place]:
        return list(self.results or [])


class CurrentConditions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    temperature_2m: float
    apparent_temperature: float
    is_day: bool
    weather_code: int
    wind_speed_10m: float
    wind_direction_10m: float
    relative_humidity_2m: float


class HourlySeries(BaseModel):
    """
    Почасовой ряд: параллельные последовательности одной длины.

    Позиция i во всех рядах описывает один и тот же час. Длина любого
    присутствующего ряда обязана совпадать с длиной `time`.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    time: Tuple[datetime, ...]
    temperature_2m: Tuple[float, ...]
    precipitation_probability: Optional[Tuple[Optional[float], ...]] = None
    relative_humidity_2m: Optional[Tuple[Optional[float], ...]] = None

    @field_validator("time", mode="before")
    @classmethod
    def _parse_local_times(cls, value):
        # "2024-01-01T10:00": локальное время места без смещения (timezone=auto)
        return [datetime.fromisoformat(v) if isinstance(v, str) else v for v in value]

    @model_validator(mode="after")
    def _check_lengths(self):
        expected = len(self.time)
        for name in ("temperature_2m", "precipitation_probability", "relative_humidity_2m"):
            series = getattr(self, name)
            if series is not None and len(series) != expected:
                raise ValueError(
                    f"hourly.{name}: длина {len(series)} не совпадает с hourly.time ({expected})"
                )
        return self

    def precipitation_at(self, index: int) -> float:
        """Вероятность осадков для часа; отсутствующее значение → 0."""
        if self.precipitation_probability is None:
            return 0
        value = self.precipitation_probability[index]
        return 0 if value is None else value


class WeatherSnapshot(BaseModel):
    """Текущие условия + почасовой ряд, полученные одним запросом."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    current: CurrentConditions
    hourly: HourlySeries
    utc_offset_seconds: int = 0
    timezone: Optional[str] = None
