# bot.py
# -*- coding: utf-8 -*-
"""
Основной скрипт бота: поиск места → подсказки → погода.
"""
import logging
import sys

from telegram import Update
from telegram.ext import (
    Application,
    CallbackQueryHandler,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from process_manager import process_manager
from scripts.weather.weather_handler import (
    handle_query_text,
    pick_callback,
    pick_command,
    register_event_handlers,
    start,
    unit_callback,
    units_command,
)


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE):
    logging.error(f"⚠️ Исключение при обработке: {context.error}", exc_info=context.error)
    if update and hasattr(update, 'update_id'):
        logging.error(f"Update ID: {update.update_id}")


async def post_init(app: Application):
    register_event_handlers(app.bot)


def build_application() -> Application:
    app = (
        Application.builder()
        .token(process_manager.config.telegram_token)
        # Обработчики в разных чатах не ждут друг друга (запросы погоды долгие)
        .concurrent_updates(True)
        .post_init(post_init)
        .post_shutdown(process_manager.shutdown)
        .build()
    )

    # === РЕГИСТРАЦИЯ ОБРАБОТЧИКОВ (ПОРЯДОК ВАЖЕН!) ===

    # 1. Команды
    app.add_handler(CommandHandler("start", start))
    app.add_handler(CommandHandler("pick", pick_command))
    app.add_handler(CommandHandler("units", units_command))

    # 2. Callback-кнопки (только с pattern)
    app.add_handler(CallbackQueryHandler(pick_callback, pattern="^pick:"))
    app.add_handler(CallbackQueryHandler(unit_callback, pattern="^unit:"))

    # 3. Любой текст без команды: поисковый запрос
    app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, handle_query_text))

    # 4. Ошибки
    app.add_error_handler(error_handler)
    return app


def main():
    process_manager.initialize_sync()
    logging.info("🚀 Запуск бота")
    if not process_manager.config.telegram_token:
        logging.critical("❌ TELEGRAM_BOT_TOKEN не задан")
        raise ValueError("TELEGRAM_BOT_TOKEN не задан в .env!")

    app = build_application()
    print("🚀 Бот запущен. Отправьте название города.")
    print("Нажмите Ctrl+C для остановки.")
    app.run_polling(drop_pending_updates=True)
    print("✅ Бот завершил работу.")


if __name__ == "__main__":
    if sys.platform == "win32":
        import asyncio
        asyncio.set_event_loop_policy(asyncio.WindowsProactorEventLoopPolicy())
    main()
