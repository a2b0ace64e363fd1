# -*- coding: utf-8 -*-
"""
Форматирование ответов бота (HTML для Telegram) через Jinja2-шаблоны.

Шаблоны лежат в scripts/weather/_io/templates, autoescape включён:
названия мест и сообщения об ошибках приходят извне.
"""

import logging
import math
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from jinja2 import Environment, FileSystemLoader

from core.models.app_state import AppState
from core.models.weather_response import Place
from core.utils.units import unit_symbol
from scripts.weather._processes.forecast_view import derive_current, derive_upcoming_hours

logger = logging.getLogger("formatter")

TEMPLATES_DIR = Path(__file__).parent.parent / "_io" / "templates"


def round_half_up(value: float) -> int:
    """Округление для отображения: 0.5 → 1, -0.5 → 0 (как на табло)."""
    return math.floor(value + 0.5)


_env = Environment(loader=FileSystemLoader(str(TEMPLATES_DIR)), autoescape=True)
_env.filters["whole"] = round_half_up


def format_weather_report(state: AppState, now: Optional[datetime] = None) -> str:
    """
    Полный отчёт по состоянию сессии.

    Args:
        state (AppState): Текущее состояние
        now (datetime): Момент отсчёта для почасового прогноза (по умолчанию — текущий aware-момент)

    Returns:
        str: HTML для parse_mode=HTML
    """
    if now is None:
        now = datetime.now().astimezone()
    current = derive_current(state.snapshot, state.unit)
    hours = derive_upcoming_hours(state.snapshot, state.unit, now)
    logger.debug(f"🖨️ Отчёт: place={state.selected_place.label if state.selected_place else None}, "
                 f"hours={len(hours)}, unit={state.unit.value}")
    return _env.get_template("weather_report.html.j2").render(
        error=state.error,
        loading=state.loading,
        place=state.selected_place,
        current=current,
        hours=hours,
        unit_symbol=unit_symbol(state.unit),
    ).strip()


def format_suggestions(query: str, suggestions: Sequence[Place]) -> str:
    return _env.get_template("suggestions.html.j2").render(
        query=query,
        suggestions=suggestions,
    ).strip()
