# -*- coding: utf-8 -*-
"""
Производные представления снимка погоды: текущие условия и ближайшие часы.

Ничего не кэшируется: рядов не больше пары сотен точек, поэтому
представления пересчитываются при каждой отрисовке (смена единиц,
новый снимок или просто прошедшее время).
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from core.models.weather_response import Unit, WeatherSnapshot
from core.utils.units import (
    convert_temperature,
    degrees_to_compass,
    unit_symbol,
    weather_code_to_label,
)

UPCOMING_HOURS_LIMIT = 12


@dataclass(frozen=True)
class CurrentView:
    temp: float
    feels: float
    is_day: bool
    weather_code: int
    wind: float
    wind_dir: float
    humidity: float
    label: str
    unit_symbol: str

    @property
    def wind_compass(self) -> str:
        return degrees_to_compass(self.wind_dir)


@dataclass(frozen=True)
class HourView:
    time: datetime
    temp: float
    pop: float


def derive_current(snapshot: Optional[WeatherSnapshot], unit: Unit) -> Optional[CurrentView]:
    """
    Текущие условия в выбранной единице.

    Температуры конвертируются, ветер/влажность/день-ночь передаются как есть.
    """
    if snapshot is None:
        return None
    c = snapshot.current
    return CurrentView(
        temp=convert_temperature(c.temperature_2m, unit),
        feels=convert_temperature(c.apparent_temperature, unit),
        is_day=c.is_day,
        weather_code=c.weather_code,
        wind=c.wind_speed_10m,
        wind_dir=c.wind_direction_10m,
        humidity=c.relative_humidity_2m,
        label=weather_code_to_label(c.weather_code),
        unit_symbol=unit_symbol(unit),
    )


def to_place_local(now: datetime, utc_offset_seconds: int) -> datetime:
    """
    Приводит момент к локальному времени места (naive), как в hourly.time.

    Naive-значение считается уже локальным и возвращается без изменений.
    """
    if now.tzinfo is None:
        return now
    utc_now = now.astimezone(timezone.utc).replace(tzinfo=None)
    return utc_now + timedelta(seconds=utc_offset_seconds)


def derive_upcoming_hours(
    snapshot: Optional[WeatherSnapshot],
    unit: Unit,
    now: datetime,
    limit: int = UPCOMING_HOURS_LIMIT,
) -> List[HourView]:
    """
    Ближайшие часы начиная с `now` (включительно), не больше `limit`.

    Args:
        snapshot: Снимок погоды (None → пустой список)
        unit: Единица температуры
        now: Текущий момент (aware или локальное naive время места)
        limit: Максимум часов

    Returns:
        List[HourView]: в исходном хронологическом порядке
    """
    if snapshot is None:
        return []

    hourly = snapshot.hourly
    local_now = to_place_local(now, snapshot.utc_offset_seconds)
    items: List[HourView] = []
    for i, ts in enumerate(hourly.time):
        if len(items) >= limit:
            break
        if ts < local_now:
            continue
        items.append(HourView(
            time=ts,
            temp=convert_temperature(hourly.temperature_2m[i], unit),
            pop=hourly.precipitation_at(i),
        ))
    return items
