# -*- coding: utf-8 -*-
"""
Сессии погоды: одна на чат Telegram.

Сессия связывает общее состояние (StateStore) с контроллерами поиска и
погоды. Реестр держит сессии в TTLCache: неактивные чаты вытесняются
сами, размер реестра ограничен.
"""

import logging
from datetime import datetime
from typing import List, Optional

from cachetools import TTLCache

from core.models.app_state import AppState, StateStore, unit_changed
from core.models.weather_response import Unit
from scripts.weather._processes.forecast_view import (
    CurrentView,
    HourView,
    derive_current,
    derive_upcoming_hours,
)
from scripts.weather._services.place_search import DEBOUNCE_SEC, PlaceSearchController
from scripts.weather._services.weather_fetcher import WeatherFetchController

logger = logging.getLogger("session")

MAX_SESSIONS = 1000
SESSION_TTL_SEC = 3600


class WeatherSession:
    """Поиск + погода + единицы для одного чата."""

    def __init__(self, chat_id, client, debounce_sec: float = DEBOUNCE_SEC):
        self.chat_id = chat_id
        self.store = StateStore()
        self.search = PlaceSearchController(client, self.store, debounce_sec, chat_id=chat_id)
        self.weather = WeatherFetchController(client, self.store, chat_id=chat_id)

    @property
    def state(self) -> AppState:
        return self.store.state

    def update_query(self, query: str) -> None:
        self.search.update_query(query)

    async def pick(self, index: int) -> Optional[AppState]:
        """Выбор подсказки по индексу → запрос погоды. None, если индекса нет."""
        place = self.search.select(index)
        if place is None:
            return None
        return await self.weather.fetch(place)

    async def pick_place(self, place_id: int) -> Optional[AppState]:
        """
        Выбор подсказки по id места.

        Кнопки старого списка могли остаться в чате: по индексу они указали
        бы на другое место из нового списка, по id — нет.
        """
        for index, place in enumerate(self.state.suggestions):
            if place.id == place_id:
                return await self.pick(index)
        logger.info(f"⌛ chat={self.chat_id}: место {place_id} не среди текущих подсказок")
        return None

    async def pick_first(self) -> Optional[AppState]:
        """Выбор первой подсказки (дожидается незавершённого поиска)."""
        await self.search.wait_settled()
        return await self.pick(0)

    def set_unit(self, unit: Unit) -> AppState:
        return self.store.apply(unit_changed, unit)

    def current_view(self) -> Optional[CurrentView]:
        return derive_current(self.state.snapshot, self.state.unit)

    def upcoming_hours(self, now: datetime) -> List[HourView]:
        return derive_upcoming_hours(self.state.snapshot, self.state.unit, now)

    def close(self) -> None:
        self.search.cancel()


class SessionRegistry:

    def __init__(
        self,
        client,
        debounce_sec: float = DEBOUNCE_SEC,
        max_sessions: int = MAX_SESSIONS,
        ttl_sec: float = SESSION_TTL_SEC,
    ):
        self.client = client
        self.debounce_sec = debounce_sec
        self._sessions = TTLCache(maxsize=max_sessions, ttl=ttl_sec)

    def get(self, chat_id) -> WeatherSession:
        """Сессия чата; создаётся при первом обращении, TTL продлевается."""
        session = self._sessions.get(chat_id)
        if session is None:
            session = WeatherSession(chat_id, self.client, self.debounce_sec)
            logger.info(f"🆕 Новая сессия для chat={chat_id}")
        # Повторная запись обновляет время жизни в TTLCache
        self._sessions[chat_id] = session
        return session

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, chat_id) -> bool:
        return chat_id in self._sessions

    def close_all(self) -> None:
        for session in list(self._sessions.values()):
            session.close()
        self._sessions.clear()
