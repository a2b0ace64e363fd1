# -*- coding: utf-8 -*-
"""
Конвертация единиц и справочники для отображения погоды.

- celsius_to_fahrenheit: °C → °F без округления (округляет только шаблон)
- degrees_to_compass: градусы → одна из 16 румбов
- weather_code_to_label: код WMO → человекочитаемая подпись
"""

import math

from core.models.weather_response import Unit

# === РУМБЫ (по часовой стрелке от севера) ===
COMPASS_POINTS = [
    "N", "NNE", "NE", "ENE",
    "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW",
    "W", "WNW", "NW", "NNW",
]
SECTOR_DEG = 360 / len(COMPASS_POINTS)  # 22.5°

UNKNOWN_LABEL = "—"

# === КОДЫ WMO, которые отдаёт Open-Meteo ===
WEATHER_CODES = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    56: "Light freezing drizzle",
    57: "Dense freezing drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Light freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snow fall",
    73: "Moderate snow fall",
    75: "Heavy snow fall",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}

UNIT_SYMBOLS = {
    Unit.CELSIUS: "°C",
    Unit.FAHRENHEIT: "°F",
}


def celsius_to_fahrenheit(c: float) -> float:
    """Переводит градусы Цельсия в Фаренгейты."""
    return c * 9 / 5 + 32


def convert_temperature(c: float, unit: Unit) -> float:
    """
    Возвращает температуру в выбранной единице.

    Args:
        c (float): Температура в °C (как пришла из API)
        unit (Unit): Активная единица отображения

    Returns:
        float: Температура в нужной единице
    """
    if unit is Unit.FAHRENHEIT:
        return celsius_to_fahrenheit(c)
    return c


def unit_symbol(unit: Unit) -> str:
    return UNIT_SYMBOLS[unit]


def degrees_to_compass(deg: float) -> str:
    """
    Переводит направление ветра в градусах в румб.

    Круг делится на 16 секторов по 22.5°, индекс округляется до ближайшего.
    Входное значение нормализуется по модулю 360, поэтому 360° → "N",
    а -22.5° → "NNW".
    """
    normalized = deg % 360
    # Половина сектора округляется вверх (11.25° → NNE), а не к чётному как round()
    index = math.floor(normalized / SECTOR_DEG + 0.5) % len(COMPASS_POINTS)
    return COMPASS_POINTS[index]


def weather_code_to_label(code: int) -> str:
    """Подпись для кода погоды; неизвестный код → "—", без исключений."""
    return WEATHER_CODES.get(code, UNKNOWN_LABEL)
