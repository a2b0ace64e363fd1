# core/utils/validator.py
import re

MAX_QUERY_LENGTH = 100

# Буквы любых алфавитов (São Paulo, Москва), цифры и обычная пунктуация названий
_UNSAFE_CHARS = re.compile(r"[^\w\s,.\-'()]")
_WHITESPACE = re.compile(r"\s+")


def sanitize_user_input(text: str) -> str:
    """Санитизация текста поиска: без служебных символов, пробелы схлопнуты."""
    if not isinstance(text, str):
        raise ValueError("Input must be a string")
    text = _UNSAFE_CHARS.sub("", text)
    text = _WHITESPACE.sub(" ", text).strip()
    return text[:MAX_QUERY_LENGTH]


def validate_coordinates(lat, lon) -> bool:
    """Широта -90..90, долгота -180..180; строки с числами допустимы."""
    try:
        lat, lon = float(lat), float(lon)
    except (TypeError, ValueError):
        return False
    return -90 <= lat <= 90 and -180 <= lon <= 180
