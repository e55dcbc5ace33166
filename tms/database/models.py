"""
Модели-значения, хранящиеся внутри сущностей
"""
from dataclasses import dataclass, field
from datetime import datetime

from tms.utils.helpers import get_now


@dataclass(frozen=True)
class Problem:
    """Последняя зафиксированная проблема транспортного заказа"""
    message: str
    number: int | None = None
    occurred: datetime = field(default_factory=get_now)
