# -*- coding: utf-8 -*-
import pytest

from core.event_bus import clear_all_handlers


@pytest.fixture(autouse=True)
def clean_event_bus():
    """Каждый тест начинает с пустой шиной событий."""
    clear_all_handlers()
    yield
    clear_all_handlers()
