# -*- coding: utf-8 -*-
"""
Контроллер поиска мест: debounce + отмена устаревших запросов.

Состояния (SearchPhase): IDLE → DEBOUNCING → IN_FLIGHT → SETTLED | FAILED.

- Каждый новый текст сбрасывает таймер debounce И отменяет запрос в полёте,
  поэтому ответ для устаревшего текста никогда не попадает в подсказки.
- Пустой текст очищает подсказки сразу, без запроса.
- Отмена (CancelledError) — не ошибка: состояние не меняется.
- Ошибка геокодинга только пишется в лог, подсказки остаются как были.
"""

import asyncio
import logging
from typing import Optional

from core.event_bus import SUGGESTIONS_UPDATED, emit_event
from core.models.app_state import (
    SearchPhase,
    StateStore,
    lookup_failed,
    lookup_started,
    query_changed,
    suggestions_received,
)
from core.models.weather_response import Place
from core.utils.error_handler import log_exception

logger = logging.getLogger("place_search")

DEBOUNCE_SEC = 0.3


class PlaceSearchController:
    """Владеет таймером debounce и задачей запроса к геокодингу."""

    def __init__(self, client, store: StateStore, debounce_sec: float = DEBOUNCE_SEC, chat_id=None):
        self.client = client
        self.store = store
        self.debounce_sec = debounce_sec
        self.chat_id = chat_id
        self._timer: Optional[asyncio.TimerHandle] = None
        self._request: Optional[asyncio.Task] = None

    @property
    def phase(self) -> SearchPhase:
        return self.store.state.search_phase

    def update_query(self, query: str) -> None:
        """
        Обрабатывает новый текст запроса (каждое нажатие / сообщение).

        Должен вызываться из работающего event loop.
        """
        self.cancel()
        state = self.store.apply(query_changed, query)
        if state.search_phase is SearchPhase.IDLE:
            logger.debug(f"🧹 chat={self.chat_id}: пустой запрос, подсказки очищены")
            return

        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.debounce_sec, self._on_debounce_elapsed, query)

    def cancel(self) -> None:
        """Сбрасывает таймер и отменяет запрос в полёте (оба сразу)."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._request is not None and not self._request.done():
            self._request.cancel()
        self._request = None

    def select(self, index: int) -> Optional[Place]:
        """
        Возвращает подсказку по индексу и останавливает поиск.

        Подсказки очищает контроллер погоды при переходе place_selected.
        """
        suggestions = self.store.state.suggestions
        if not 0 <= index < len(suggestions):
            logger.warning(f"⚠️ chat={self.chat_id}: нет подсказки с индексом {index}")
            return None
        self.cancel()
        return suggestions[index]

    async def wait_settled(self) -> SearchPhase:
        """Ждёт срабатывания таймера и завершения текущего запроса."""
        while True:
            if self._request is not None and not self._request.done():
                await asyncio.wait([self._request])
            elif self._timer is not None:
                await asyncio.sleep(self.debounce_sec / 2)
            else:
                return self.phase

    def _on_debounce_elapsed(self, query: str) -> None:
        self._timer = None
        # Не больше одного живого запроса: новый вытесняет старый
        if self._request is not None and not self._request.done():
            self._request.cancel()
        self.store.apply(lookup_started)
        logger.debug(f"🔎 chat={self.chat_id}: запрос подсказок для '{query}'")
        self._request = asyncio.create_task(self._lookup(query))

    async def _lookup(self, query: str) -> None:
        try:
            places = await self.client.search_places(query)
        except asyncio.CancelledError:
            logger.debug(f"↩️ chat={self.chat_id}: запрос '{query}' отменён")
            raise
        except Exception as e:
            log_exception(e, "❌ Ошибка поиска мест", context={"chat_id": self.chat_id, "query": query})
            self.store.apply(lookup_failed)
            return

        state = self.store.apply(suggestions_received, places)
        logger.info(f"📍 chat={self.chat_id}: '{query}' → {len(state.suggestions)} подсказок")
        await emit_event(SUGGESTIONS_UPDATED, {
            "chat_id": self.chat_id,
            "query": query,
            "suggestions": list(state.suggestions),
        })
