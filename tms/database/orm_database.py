"""
SQLAlchemy ORM Database класс
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import object_session

from tms.core.config import Config
from tms.database.orm_models import Base, TransportOrder


logger = logging.getLogger(__name__)


@event.listens_for(TransportOrder, "before_update")
def _refresh_date_updated(mapper, connection, target: TransportOrder) -> None:
    """Перед каждым UPDATE обновляем date_updated (версию увеличивает mapper)"""
    session = object_session(target)
    # before_update вызывается и для "грязных" объектов без реальных изменений
    if session is not None and session.is_modified(target, include_collections=False):
        target.touch()


class ORMDatabase:
    """Класс для работы с базой данных через SQLAlchemy ORM"""

    def __init__(self, database_url: str | None = None):
        """
        Инициализация ORM Database

        Args:
            database_url: URL базы данных (SQLite или PostgreSQL)
        """
        self.database_url = database_url or Config.get_database_url()
        self.engine: AsyncEngine | None = None
        self.session_factory: async_sessionmaker[AsyncSession] | None = None
        self._is_sqlite = self.database_url.startswith("sqlite")

    async def connect(self) -> None:
        """Подключение к базе данных"""
        try:
            logger.info("Инициализация подключения к БД...")
            logger.info(f"   Database URL: {self.database_url}")

            self.engine = create_async_engine(
                self.database_url,
                echo=Config.SQL_ECHO,
                pool_pre_ping=True,
                connect_args={"check_same_thread": False} if self._is_sqlite else {},
            )

            self.session_factory = async_sessionmaker(
                self.engine,
                class_=AsyncSession,
                expire_on_commit=False,  # Важно для async работы
            )

            logger.info(f"OK: Подключено к базе данных: {self.database_url}")
            logger.debug("Используйте 'alembic upgrade head' для применения миграций БД")

        except Exception as e:
            logger.error(f"ERROR: Ошибка подключения к БД: {e}")
            raise

    async def disconnect(self) -> None:
        """Отключение от базы данных"""
        if self.engine:
            await self.engine.dispose()
            self.engine = None
            self.session_factory = None
            logger.info("Отключено от базы данных")

    async def init_db(self) -> None:
        """
        Создание таблиц по ORM моделям

        Для тестов и локального запуска; в production используется alembic.
        """
        if not self.engine:
            raise RuntimeError("База данных не подключена")

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("OK: Таблицы созданы")

    @asynccontextmanager
    async def get_session(self) -> AsyncIterator[AsyncSession]:
        """
        Context manager для получения сессии

        Usage:
            async with db.get_session() as session:
                repo = TransportOrderRepository(session)
                order = await repo.get(order_id)
                # Автоматический commit/rollback
        """
        if not self.session_factory:
            raise RuntimeError("База данных не подключена")

        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
                logger.debug("OK: Транзакция успешно завершена (commit)")
            except Exception as e:
                await session.rollback()
                logger.error(f"ERROR: Транзакция отменена (rollback): {e}")
                raise
