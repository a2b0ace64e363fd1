# scripts/weather/weather_handler.py
# -*- coding: utf-8 -*-
"""
Telegram-обработчики погоды.

Обработчики только передают ввод в сессию чата. Ответы пользователю
отправляются подписчиками шины событий (register_event_handlers): так
контроллеры ничего не знают о Telegram.
"""
import logging

from telegram import Bot, Update
from telegram.constants import ParseMode
from telegram.ext import ContextTypes

from core.event_bus import (
    SUGGESTIONS_UPDATED,
    WEATHER_ERROR,
    WEATHER_LOADING,
    WEATHER_READY,
    subscribe_async,
)
from core.models.weather_response import Unit
from core.ui.navigation import (
    PICK_PREFIX,
    UNIT_PREFIX,
    get_suggestions_keyboard,
    get_unit_keyboard,
)
from process_manager import process_manager
from scripts.weather._processes.formatter import format_suggestions, format_weather_report

logger = logging.getLogger("weather_handler")

WELCOME_TEXT = (
    "🌤️ <b>Weather Now</b>\n\n"
    "Type a city or place name (e.g. <i>Hyderabad</i>) and pick it from the list.\n"
    "• /pick — take the first match\n"
    "• /units — switch °C / °F\n\n"
    "Search a city to see the weather."
)


def _session(update: Update):
    return process_manager.sessions.get(update.effective_chat.id)


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Приветствие и краткая справка."""
    await context.bot.send_message(
        chat_id=update.effective_chat.id,
        text=WELCOME_TEXT,
        parse_mode=ParseMode.HTML
    )


async def handle_query_text(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Любой текст (не команда) — это новый поисковый запрос."""
    query = process_manager.sanitize_user_input(update.message.text or "")
    logger.info(f"⌨️ chat={update.effective_chat.id}: запрос '{query}'")
    _session(update).update_query(query)


async def pick_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """/pick — первая подсказка (как Enter в строке поиска)."""
    state = await _session(update).pick_first()
    if state is None:
        await context.bot.send_message(
            chat_id=update.effective_chat.id,
            text="🤷 Nothing to pick yet. Type a place name first."
        )


async def pick_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Нажатие на подсказку: pick:<id места>."""
    query = update.callback_query
    await query.answer()
    try:
        place_id = int(query.data[len(PICK_PREFIX):])
    except ValueError:
        logger.warning(f"⚠️ Некорректный callback: {query.data!r}")
        return

    state = await _session(update).pick_place(place_id)
    if state is None:
        await context.bot.send_message(
            chat_id=update.effective_chat.id,
            text="⌛ That list is out of date. Search again."
        )


async def units_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """/units — показывает переключатель единиц."""
    unit = _session(update).state.unit
    await context.bot.send_message(
        chat_id=update.effective_chat.id,
        text="🌡️ Units:",
        reply_markup=get_unit_keyboard(unit)
    )


async def unit_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Нажатие на °C / °F: меняем единицу и перерисовываем отчёт."""
    query = update.callback_query
    await query.answer()
    try:
        unit = Unit(query.data[len(UNIT_PREFIX):])
    except ValueError:
        logger.warning(f"⚠️ Некорректный callback: {query.data!r}")
        return

    session = _session(update)
    state = session.set_unit(unit)
    if state.snapshot is None:
        await query.edit_message_reply_markup(reply_markup=get_unit_keyboard(unit))
        return

    await context.bot.send_message(
        chat_id=update.effective_chat.id,
        text=format_weather_report(state),
        reply_markup=get_unit_keyboard(unit),
        parse_mode=ParseMode.HTML
    )


# === ПОДПИСЧИКИ ШИНЫ СОБЫТИЙ ===
def register_event_handlers(bot: Bot) -> None:
    """Подписывает отправку сообщений на события контроллеров."""

    async def on_suggestions(event):
        suggestions = event["suggestions"]
        await bot.send_message(
            chat_id=event["chat_id"],
            text=format_suggestions(event["query"], suggestions),
            reply_markup=get_suggestions_keyboard(suggestions) if suggestions else None,
            parse_mode=ParseMode.HTML
        )

    async def on_weather(event):
        state = event["state"]
        await bot.send_message(
            chat_id=event["chat_id"],
            text=format_weather_report(state),
            reply_markup=None if state.loading else get_unit_keyboard(state.unit),
            parse_mode=ParseMode.HTML
        )

    subscribe_async(SUGGESTIONS_UPDATED, on_suggestions)
    subscribe_async(WEATHER_LOADING, on_weather)
    subscribe_async(WEATHER_READY, on_weather)
    subscribe_async(WEATHER_ERROR, on_weather)
