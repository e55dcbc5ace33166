"""
Вспомогательные функции
"""

from datetime import datetime, timezone


def get_now() -> datetime:
    """
    Получить текущее время в UTC

    Returns:
        datetime объект с timezone UTC
    """
    return datetime.now(timezone.utc)
