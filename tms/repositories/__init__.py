"""
Repository layer для абстракции работы с базой данных
"""

from tms.repositories.base import BaseRepository
from tms.repositories.exceptions import (
    ConcurrentModificationError,
    EntityNotFoundError,
    RepositoryError,
)
from tms.repositories.transport_order_repository import TransportOrderRepository


__all__ = [
    "BaseRepository",
    "ConcurrentModificationError",
    "EntityNotFoundError",
    "RepositoryError",
    "TransportOrderRepository",
]
