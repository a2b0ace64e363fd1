# -*- coding: utf-8 -*-
"""
Утилита для централизованной обработки ошибок.
"""

import logging
from typing import Optional

logger = logging.getLogger("error_handler")


def describe_error(exception: BaseException, fallback: str) -> str:
    """
    Текст ошибки для пользователя: сообщение исключения, если оно есть,
    иначе fallback.
    """
    message = str(exception).strip()
    return message or fallback


def log_exception(
    exception: Exception,
    message: str = "Необработанное исключение",
    context: Optional[dict] = None,
    level: int = logging.ERROR,
):
    """
    Логирует исключение без выбрасывания.

    Args:
        exception (Exception): Исключение
        message (str): Описание
        context (dict): Контекст (chat_id, query, lat/lon и т.п.)
        level (int): Уровень логирования
    """
    log_context = f" | Контекст: {context}" if context else ""
    logger.log(level, f"{message}{log_context} | Ошибка: {exception!r}", exc_info=True)
