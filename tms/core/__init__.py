"""Ядро приложения - конфигурация, константы и логирование"""

from tms.core.config import Config
from tms.core.constants import PriorityLevel, TransportOrderState


__all__ = [
    "Config",
    "PriorityLevel",
    "TransportOrderState",
]
