"""Вспомогательные функции"""

from tms.utils.helpers import get_now


__all__ = ["get_now"]
