"""
Базовый репозиторий для работы с базой данных
"""

import logging
from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession


logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Базовый класс для всех репозиториев
    Предоставляет общую функциональность для работы с БД
    """

    def __init__(self, session: AsyncSession):
        """
        Инициализация репозитория

        Args:
            session: Сессия SQLAlchemy (commit/rollback на стороне вызывающего)
        """
        self.session = session

    async def _fetch_one(self, stmt: Select[Any]) -> T | None:
        """
        Получение одной записи

        Args:
            stmt: SELECT запрос

        Returns:
            Объект или None
        """
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def _fetch_all(self, stmt: Select[Any]) -> Sequence[T]:
        """
        Получение всех записей

        Args:
            stmt: SELECT запрос

        Returns:
            Список объектов
        """
        result = await self.session.execute(stmt)
        return result.scalars().all()
