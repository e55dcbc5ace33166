"""
Репозиторий для работы с транспортными заказами
"""

import logging
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.orm.exc import StaleDataError

from tms.core.constants import TransportOrderState
from tms.database.orm_models import TransportOrder
from tms.domain.transport_order_lifecycle import (
    TransportOrderLifecycle,
    TransportOrderStateError,
)
from tms.repositories.base import BaseRepository
from tms.repositories.exceptions import ConcurrentModificationError, EntityNotFoundError


logger = logging.getLogger(__name__)

# Состояния, из которых заказ может быть запущен
STARTABLE_STATES = (TransportOrderState.INITIALIZED, TransportOrderState.INTERRUPTED)


class TransportOrderRepository(BaseRepository[TransportOrder]):
    """Репозиторий для работы с транспортными заказами"""

    async def add(self, order: TransportOrder) -> TransportOrder:
        """
        Сохранение нового заказа

        Args:
            order: Новый заказ

        Returns:
            Тот же заказ с присвоенными id и version
        """
        self.session.add(order)
        await self.session.flush()
        logger.info(f"Создан транспортный заказ #{order.id} для {order.transport_unit}")
        return order

    async def get_by_id(self, order_id: int) -> TransportOrder | None:
        """
        Получение заказа по ID

        Args:
            order_id: ID заказа

        Returns:
            Заказ или None
        """
        return await self._fetch_one(select(TransportOrder).where(TransportOrder.id == order_id))

    async def get(self, order_id: int) -> TransportOrder:
        """
        Получение заказа по ID

        Raises:
            EntityNotFoundError: Если заказ не найден
        """
        order = await self.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(order_id)
        return order

    async def find_all(self) -> list[TransportOrder]:
        """Все транспортные заказы"""
        stmt = select(TransportOrder).order_by(TransportOrder.id)
        return list(await self._fetch_all(stmt))

    async def find_by_transport_unit(self, transport_unit: str) -> list[TransportOrder]:
        """
        Все заказы для транспортной единицы

        Args:
            transport_unit: Идентификатор транспортной единицы
        """
        stmt = (
            select(TransportOrder)
            .where(TransportOrder.transport_unit == transport_unit)
            .order_by(TransportOrder.id)
        )
        return list(await self._fetch_all(stmt))

    async def find_for_transport_unit_in_states(
        self, transport_unit: str, states: Iterable[str]
    ) -> list[TransportOrder]:
        """
        Заказы для транспортной единицы в указанных состояниях

        Args:
            transport_unit: Идентификатор транспортной единицы
            states: Список состояний
        """
        states = list(states)
        if not states:
            return []

        stmt = (
            select(TransportOrder)
            .where(
                TransportOrder.transport_unit == transport_unit,
                TransportOrder.state.in_(states),
            )
            .order_by(TransportOrder.id)
        )
        return list(await self._fetch_all(stmt))

    async def find_orders_to_start(self, transport_unit: str) -> list[TransportOrder]:
        """
        Заказы для транспортной единицы, которые можно запустить

        Готовые к запуску заказы находятся в INITIALIZED или INTERRUPTED.
        Сортировка: приоритет по убыванию, затем дата создания.

        Внимание: INTERRUPTED стоит после STARTED, поэтому set_state(STARTED)
        для прерванного заказа выбросит InvalidStateError. Такой заказ
        продолжают новым заказом для той же транспортной единицы,
        а прерванный переводят в CANCELED.

        Args:
            transport_unit: Идентификатор транспортной единицы
        """
        stmt = (
            select(TransportOrder)
            .where(
                TransportOrder.transport_unit == transport_unit,
                TransportOrder.state.in_(STARTABLE_STATES),
            )
            .order_by(
                TransportOrder.priority.desc(),
                TransportOrder.creation_date.asc(),
                TransportOrder.id.asc(),
            )
        )
        return list(await self._fetch_all(stmt))

    async def save(
        self, order: TransportOrder, expected_version: int | None = None
    ) -> TransportOrder:
        """
        Сохранение изменений заказа с optimistic locking

        Args:
            order: Изменённый заказ
            expected_version: Версия, на основе которой сделаны изменения

        Returns:
            Сохранённый заказ (version увеличена, если были изменения)

        Raises:
            ConcurrentModificationError: Если запись изменена другим процессом
        """
        order_id = order.id
        loaded_version = order.version

        if expected_version is not None and loaded_version != expected_version:
            logger.warning(
                f"Optimistic locking conflict for TransportOrder #{order_id}: "
                f"expected version {expected_version}, got {loaded_version}"
            )
            raise ConcurrentModificationError(order_id, expected_version, loaded_version)

        try:
            await self.session.flush()
        except StaleDataError as e:
            # После ошибки flush сессия ждёт rollback, атрибуты заказа читать нельзя
            logger.warning(
                f"Optimistic locking conflict for TransportOrder #{order_id}: "
                f"version {loaded_version} is stale"
            )
            raise ConcurrentModificationError(order_id, loaded_version) from e

        if order.version != loaded_version:
            logger.info(
                f"TransportOrder #{order.id} updated "
                f"(version: {loaded_version} → {order.version})"
            )
        return order

    async def change_state(
        self, order_id: int, new_state: str, expected_version: int | None = None
    ) -> TransportOrder:
        """
        Смена состояния заказа с optimistic locking

        Args:
            order_id: ID заказа
            new_state: Новое состояние
            expected_version: Ожидаемая версия (для проверки конкурентного доступа)

        Returns:
            Обновлённый заказ

        Raises:
            EntityNotFoundError: Если заказ не найден
            ConcurrentModificationError: Если версия не совпадает
            InvalidStateError, IncompleteOrderError: Если переход недопустим
        """
        order = await self.get(order_id)

        if expected_version is not None and order.version != expected_version:
            logger.warning(
                f"Optimistic locking conflict for TransportOrder #{order_id}: "
                f"expected version {expected_version}, got {order.version}"
            )
            raise ConcurrentModificationError(order_id, expected_version, order.version)

        old_state = order.state
        try:
            order.set_state(new_state)
        except TransportOrderStateError as e:
            logger.error(f"ERROR: Недопустимый переход состояния заказа #{order_id}: {e}")
            raise

        await self.save(order)

        logger.info(
            f"Состояние заказа #{order_id} изменено с {old_state} на {order.state} "
            f"({TransportOrderLifecycle.get_transition_description(old_state, order.state)})"
        )
        return order
