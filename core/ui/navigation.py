# core/ui/navigation.py
from typing import Sequence

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from core.models.weather_response import Place, Unit

PICK_PREFIX = "pick:"
UNIT_PREFIX = "unit:"


def get_suggestions_keyboard(suggestions: Sequence[Place]) -> InlineKeyboardMarkup:
    """Кнопка на каждую подсказку: pick:<id места>."""
    return InlineKeyboardMarkup([
        [InlineKeyboardButton(f"📍 {place.label}"[:64], callback_data=f"{PICK_PREFIX}{place.id}")]
        for place in suggestions
    ])


def get_unit_keyboard(active: Unit) -> InlineKeyboardMarkup:
    """Переключатель °C / °F; активная единица отмечена галочкой."""
    buttons = []
    for unit, title in ((Unit.CELSIUS, "°C"), (Unit.FAHRENHEIT, "°F")):
        text = f"✅ {title}" if unit is active else title
        buttons.append(InlineKeyboardButton(text, callback_data=f"{UNIT_PREFIX}{unit.value}"))
    return InlineKeyboardMarkup([buttons])
