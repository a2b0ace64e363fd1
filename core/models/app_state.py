# -*- coding: utf-8 -*-
"""
Состояние интерфейса погоды и чистые функции переходов.

Состояние — неизменяемый dataclass. Контроллеры не меняют поля напрямую:
каждое событие (ввод текста, ответ API, выбор места, смена единиц)
превращается в новый AppState через функцию перехода. Благодаря этому
логику можно тестировать без Telegram и без сети.

Пример:
>>> state = query_changed(AppState(), "Lon")
>>> state.search_phase
<SearchPhase.DEBOUNCING: 'debouncing'>
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Sequence, Tuple

from core.models.weather_response import Place, Unit, WeatherSnapshot

MAX_SUGGESTIONS = 5
DEFAULT_ERROR_MESSAGE = "Something went wrong"


class SearchPhase(str, Enum):
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    IN_FLIGHT = "in_flight"
    SETTLED = "settled"
    FAILED = "failed"


class FetchPhase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class AppState:
    # === ПОИСК ===
    query: str = ""
    suggestions: Tuple[Place, ...] = ()
    search_phase: SearchPhase = SearchPhase.IDLE
    # === ПОГОДА ===
    selected_place: Optional[Place] = None
    snapshot: Optional[WeatherSnapshot] = None
    loading: bool = False
    error: str = ""
    fetch_phase: FetchPhase = FetchPhase.IDLE
    fetch_generation: int = 0
    # === ПРЕДСТАВЛЕНИЕ ===
    unit: Unit = Unit.CELSIUS


# === ПЕРЕХОДЫ ПОИСКА ===
def query_changed(state: AppState, query: str) -> AppState:
    """
    Новый текст запроса.

    Пустой запрос сразу очищает подсказки (Idle), иначе начинается
    ожидание debounce-таймера.
    """
    if not query.strip():
        return replace(state, query=query, suggestions=(), search_phase=SearchPhase.IDLE)
    return replace(state, query=query, search_phase=SearchPhase.DEBOUNCING)


def lookup_started(state: AppState) -> AppState:
    return replace(state, search_phase=SearchPhase.IN_FLIGHT)


def suggestions_received(state: AppState, places: Sequence[Place]) -> AppState:
    """Список подсказок заменяется целиком (не более MAX_SUGGESTIONS)."""
    return replace(
        state,
        suggestions=tuple(places[:MAX_SUGGESTIONS]),
        search_phase=SearchPhase.SETTLED,
    )


def lookup_failed(state: AppState) -> AppState:
    # Подсказки не трогаем: ошибка поиска видна только в логах
    return replace(state, search_phase=SearchPhase.FAILED)


# === ПЕРЕХОДЫ ПОГОДЫ ===
def place_selected(state: AppState, place: Place) -> AppState:
    """
    Пользователь выбрал место.

    Ошибка и прошлый снимок сбрасываются, поколение запроса растёт на 1:
    ответы с меньшим поколением будут отброшены.
    """
    return replace(
        state,
        selected_place=place,
        suggestions=(),
        search_phase=SearchPhase.IDLE,
        snapshot=None,
        error="",
        loading=True,
        fetch_phase=FetchPhase.LOADING,
        fetch_generation=state.fetch_generation + 1,
    )


def is_stale(state: AppState, generation: int) -> bool:
    return generation != state.fetch_generation


def weather_loaded(state: AppState, generation: int, snapshot: WeatherSnapshot) -> AppState:
    if is_stale(state, generation):
        return state
    return replace(
        state,
        snapshot=snapshot,
        error="",
        loading=False,
        fetch_phase=FetchPhase.READY,
    )


def weather_failed(state: AppState, generation: int, message: str) -> AppState:
    if is_stale(state, generation):
        return state
    return replace(
        state,
        snapshot=None,
        error=message or DEFAULT_ERROR_MESSAGE,
        loading=False,
        fetch_phase=FetchPhase.ERROR,
    )


# === ПРЕДСТАВЛЕНИЕ ===
def unit_changed(state: AppState, unit: Unit) -> AppState:
    """Меняется только единица; сырые данные в °C остаются как есть."""
    return replace(state, unit=unit)


class StateStore:
    """
    Держатель текущего AppState одной сессии.

    Контроллеры поиска и погоды работают с одним и тем же хранилищем,
    но каждый меняет только свои поля через функции переходов.
    """

    def __init__(self, state: Optional[AppState] = None):
        self.state = state or AppState()

    def apply(self, transition, *args) -> AppState:
        self.state = transition(self.state, *args)
        return self.state
