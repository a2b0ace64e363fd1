# process_manager.py
# -*- coding: utf-8 -*-
"""
Глобальный координатор зависимостей.
Инициализирует все сервисы один раз и предоставляет к ним доступ.
"""

import logging
from typing import Optional

from config.bot_config import BotConfig
from config.logging_config import setup_logging
from core.utils.api_client import OpenMeteoClient
from core.utils.validator import sanitize_user_input
from scripts.weather._services.session import SessionRegistry

logger = logging.getLogger("process_manager")


class ProcessManager:
    """
    Единый контекст приложения. Все зависимости инициализируются здесь.
    """

    def __init__(self):
        self._initialized = False
        # Конфигурация
        self.config: Optional[BotConfig] = None
        # Клиент Open-Meteo (один httpx-пул на весь процесс)
        self.api_client: Optional[OpenMeteoClient] = None
        # Сессии чатов
        self.sessions: Optional[SessionRegistry] = None
        # Утилиты
        self.sanitize_user_input = sanitize_user_input

    def initialize_sync(self, config: Optional[BotConfig] = None):
        """Синхронная инициализация всех компонентов."""
        if self._initialized:
            return

        # 1. Загрузка конфигурации и логирования
        self.config = config or BotConfig.load()
        setup_logging(self.config.log_level)

        # 2. Клиент API
        self.api_client = OpenMeteoClient(
            geocoding_url=self.config.geocoding_url,
            forecast_url=self.config.forecast_url,
            timeout=self.config.api_timeout_sec,
        )

        # 3. Реестр сессий
        self.sessions = SessionRegistry(
            self.api_client,
            debounce_sec=self.config.search_debounce_sec,
            max_sessions=self.config.max_sessions,
            ttl_sec=self.config.session_ttl_sec,
        )

        self._initialized = True
        logger.info("✅ ProcessManager: initialized (api_client, sessions ready)")

    async def shutdown(self, *_):
        """Закрытие ресурсов (вызывается из post_shutdown приложения)."""
        if not self._initialized:
            return

        self.sessions.close_all()
        await self.api_client.aclose()
        self._initialized = False
        logger.info("🛑 ProcessManager: shut down")


# Глобальный экземпляр: точка доступа для всех модулей
process_manager = ProcessManager()
