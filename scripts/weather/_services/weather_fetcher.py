# -*- coding: utf-8 -*-
"""
Контроллер получения погоды для выбранного места.

Состояния (FetchPhase): IDLE → LOADING → READY | ERROR.
Каждый запрос помечается поколением (fetch_generation); если пока шёл
ответ пользователь выбрал другое место, результат старого запроса
отбрасывается. Повторов нет: пользователь просто выбирает место снова.
"""

import logging

from core.event_bus import WEATHER_ERROR, WEATHER_LOADING, WEATHER_READY, emit_event
from core.models.app_state import (
    DEFAULT_ERROR_MESSAGE,
    AppState,
    StateStore,
    is_stale,
    place_selected,
    weather_failed,
    weather_loaded,
)
from core.models.weather_response import Place
from core.utils.error_handler import describe_error, log_exception

logger = logging.getLogger("weather_fetcher")


class WeatherFetchController:

    def __init__(self, client, store: StateStore, chat_id=None):
        self.client = client
        self.store = store
        self.chat_id = chat_id

    async def fetch(self, place: Place) -> AppState:
        """
        Запрашивает погоду для места и возвращает итоговое состояние.

        Ошибка запроса не выбрасывается: она попадает в state.error.
        """
        state = self.store.apply(place_selected, place)
        generation = state.fetch_generation
        logger.info(f"🌍 chat={self.chat_id}: погода для {place.label} "
                    f"({place.latitude}, {place.longitude}), поколение {generation}")
        await emit_event(WEATHER_LOADING, {"chat_id": self.chat_id, "place": place, "state": state})

        try:
            snapshot = await self.client.get_weather(place.latitude, place.longitude)
        except Exception as e:
            log_exception(e, "❌ Ошибка получения погоды",
                          context={"chat_id": self.chat_id, "place": place.label})
            return await self._finish(
                generation, weather_failed, describe_error(e, DEFAULT_ERROR_MESSAGE),
                event_type=WEATHER_ERROR,
            )

        return await self._finish(generation, weather_loaded, snapshot, event_type=WEATHER_READY)

    async def _finish(self, generation: int, transition, payload, event_type: str) -> AppState:
        if is_stale(self.store.state, generation):
            logger.debug(f"🗑️ chat={self.chat_id}: ответ поколения {generation} устарел "
                         f"(текущее {self.store.state.fetch_generation}), отброшен")
            return self.store.state

        state = self.store.apply(transition, generation, payload)
        await emit_event(event_type, {"chat_id": self.chat_id, "state": state})
        return state
