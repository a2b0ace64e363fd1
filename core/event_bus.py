# -*- coding: utf-8 -*-
"""
Шина событий (Event Bus) между контроллерами погоды и Telegram-слоем.

Архитектурный принцип:
- Производители (контроллеры поиска и погоды) → публикуют события
- Потребители (bot.py через weather_handler) → подписываются на события
- event_bus.py НЕ импортирует bot.py и scripts/ — зависимости только в одну сторону

Использование:

# В weather_handler.py (потребитель):
from core.event_bus import subscribe_async, SUGGESTIONS_UPDATED

async def on_suggestions(event):
    await bot.send_message(event["chat_id"], ...)

subscribe_async(SUGGESTIONS_UPDATED, on_suggestions)

# В place_search.py (производитель):
await emit_event(SUGGESTIONS_UPDATED, {"chat_id": 123, "suggestions": [...]})
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List

logger = logging.getLogger("event_bus")

# === ТИПЫ СОБЫТИЙ ===
SUGGESTIONS_UPDATED = "suggestions_updated"
WEATHER_LOADING = "weather_loading"
WEATHER_READY = "weather_ready"
WEATHER_ERROR = "weather_error"

AsyncHandler = Callable[[Dict[str, Any]], Awaitable[None]]

# Реестр обработчиков
_async_handlers: Dict[str, List[AsyncHandler]] = {}


def subscribe_async(event_type: str, handler: AsyncHandler) -> None:
    """
    Подписка на событие с асинхронным обработчиком.

    Args:
        event_type (str): Тип события (например, SUGGESTIONS_UPDATED)
        handler (callable): Асинхронная функция, принимающая dict с данными события
    """
    if handler is None:
        logger.warning(f"⚠️ Попытка подписаться на событие {event_type} с handler=None. Игнорируем.")
        return
    _async_handlers.setdefault(event_type, []).append(handler)
    logger.debug("Зарегистрирован асинхронный обработчик для события: %s", event_type)


def unsubscribe_async(event_type: str, handler: AsyncHandler) -> None:
    if event_type in _async_handlers:
        try:
            _async_handlers[event_type].remove(handler)
            logger.debug("Обработчик удалён для события: %s", event_type)
        except ValueError:
            logger.warning("Обработчик не найден для события: %s", event_type)


async def emit_event(event_type: str, event_data: Dict[str, Any]) -> None:
    """
    Публикация события.

    Обработчики вызываются по порядку подписки. Ошибка в обработчике
    логируется и не мешает остальным (и не доходит до контроллера).
    """
    handlers = list(_async_handlers.get(event_type, ()))
    logger.debug("Публикация события: %s (chat_id=%s, обработчиков: %d)",
                 event_type, event_data.get("chat_id"), len(handlers))

    for handler in handlers:
        try:
            await handler(event_data)
        except Exception as e:
            logger.error("Ошибка в асинхронном обработчике события %s: %s", event_type, e, exc_info=True)


# Утилита для очистки (полезна в тестах)
def clear_all_handlers() -> None:
    """Очищает все зарегистрированные обработчики. Используется в тестах."""
    _async_handlers.clear()
    logger.info("Все обработчики событий очищены.")
