"""
Pytest fixtures и конфигурация для тестов
"""
import logging
import sys
from collections.abc import AsyncGenerator, Callable, Generator
from pathlib import Path

import pytest
import pytest_asyncio


# Добавляем корневую директорию в PYTHONPATH
ROOT_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT_DIR))

from tms.core.constants import PriorityLevel, TransportOrderState
from tms.database import ORMDatabase, TransportOrder


@pytest_asyncio.fixture
async def db(tmp_path: Path) -> AsyncGenerator[ORMDatabase, None]:
    """
    Фикстура для тестовой базы данных (SQLite файл во временной директории)

    Файл, а не :memory:, чтобы разные сессии работали с одной БД.
    """
    database = ORMDatabase(f"sqlite+aiosqlite:///{tmp_path / 'tms_test.db'}")
    await database.connect()
    await database.init_db()
    yield database
    await database.disconnect()


@pytest.fixture
def make_order() -> Callable[..., TransportOrder]:
    """
    Фабрика заполненных заказов в нужном состоянии

    Заказ проходит до состояния только допустимыми переходами.
    """

    def _make(
        state: str = TransportOrderState.CREATED,
        transport_unit: str = "TU-0001",
        target_location: str | None = "STOCK/0001/0001",
        target_location_group: str | None = None,
        priority: int = PriorityLevel.NORMAL,
    ) -> TransportOrder:
        order = TransportOrder(
            transport_unit=transport_unit,
            target_location=target_location,
            target_location_group=target_location_group,
            priority=priority,
        )
        if state == TransportOrderState.CREATED:
            return order
        if state == TransportOrderState.CANCELED:
            order.set_state(TransportOrderState.CANCELED)
            return order

        order.set_state(TransportOrderState.INITIALIZED)
        if state in (
            TransportOrderState.INTERRUPTED,
            TransportOrderState.ONFAILURE,
            TransportOrderState.FINISHED,
        ):
            order.set_state(TransportOrderState.STARTED)
        if state != TransportOrderState.INITIALIZED:
            order.set_state(state)
        return order

    return _make


@pytest.fixture
def restore_root_logger() -> Generator[logging.Logger, None, None]:
    """Восстанавливает обработчики root logger после setup_logging()"""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    yield root
    for handler in root.handlers:
        if handler not in saved_handlers:
            handler.close()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
