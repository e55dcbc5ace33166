"""
SQLAlchemy ORM модели для базы данных
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, Index, Integer, String, Text
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

from tms.core.constants import PriorityLevel, TransportOrderState
from tms.database.models import Problem
from tms.database.types import UTCDateTime
from tms.domain.transport_order_lifecycle import TransportOrderLifecycle
from tms.utils.helpers import get_now


# Базовый класс для всех моделей
Base = declarative_base()


class TransportOrder(Base):
    """
    Транспортный заказ

    Перемещение транспортной единицы из текущего места в целевое место
    или группу мест. Состояние меняется только через set_state(),
    версию и дату обновления ведёт слой хранения.
    """

    __tablename__ = "tms_transport_order"

    # Основные поля
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    transport_unit: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    source_location: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    target_location: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    target_location_group: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=PriorityLevel.NORMAL)

    # Поля только для чтения (см. hybrid свойства ниже)
    _state: Mapped[str] = mapped_column(
        "state", String(20), nullable=False, default=TransportOrderState.CREATED
    )
    _creation_date: Mapped[datetime] = mapped_column(
        "creation_date", UTCDateTime(), nullable=False
    )
    _date_updated: Mapped[datetime] = mapped_column(
        "date_updated", UTCDateTime(), nullable=False
    )
    _start_date: Mapped[Optional[datetime]] = mapped_column(
        "start_date", UTCDateTime(), nullable=True
    )
    _end_date: Mapped[Optional[datetime]] = mapped_column(
        "end_date", UTCDateTime(), nullable=True
    )
    _version: Mapped[int] = mapped_column("version", Integer, nullable=False)

    # Последняя проблема
    problem_message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    problem_number: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    problem_occurred: Mapped[Optional[datetime]] = mapped_column(
        UTCDateTime(), nullable=True
    )

    # Optimistic locking: UPDATE ... WHERE version = :old, version = old + 1
    __mapper_args__ = {"version_id_col": _version}

    # Индексы и ограничения
    __table_args__ = (
        Index("idx_transport_order_unit", "transport_unit"),
        Index("idx_transport_order_state", "state"),
        Index("idx_transport_order_unit_state", "transport_unit", "state"),
        CheckConstraint(
            "state IN ('CREATED', 'INITIALIZED', 'STARTED', 'INTERRUPTED', "
            "'ONFAILURE', 'CANCELED', 'FINISHED')",
            name="chk_transport_order_state",
        ),
        CheckConstraint("priority BETWEEN 1 AND 5", name="chk_transport_order_priority"),
    )

    def __init__(
        self,
        transport_unit: str | None = None,
        source_location: str | None = None,
        target_location: str | None = None,
        target_location_group: str | None = None,
        priority: int = PriorityLevel.NORMAL,
        problem: Problem | None = None,
    ):
        now = get_now()
        self.transport_unit = transport_unit
        self.source_location = source_location
        self.target_location = target_location
        self.target_location_group = target_location_group
        self.priority = priority
        self.problem = problem
        self._state = TransportOrderState.CREATED
        self._creation_date = now
        self._date_updated = now

    def __repr__(self) -> str:
        return (
            f"<TransportOrder id={self.id} unit={self.transport_unit!r} "
            f"state={self._state} version={self._version}>"
        )

    @hybrid_property
    def state(self) -> str:
        return self._state

    @hybrid_property
    def creation_date(self) -> datetime:
        return self._creation_date

    @hybrid_property
    def date_updated(self) -> datetime:
        return self._date_updated

    @hybrid_property
    def start_date(self) -> datetime | None:
        return self._start_date

    @hybrid_property
    def end_date(self) -> datetime | None:
        return self._end_date

    @hybrid_property
    def version(self) -> int | None:
        """Версия записи; None до первого сохранения"""
        return self._version

    @property
    def is_new(self) -> bool:
        """Заказ ещё не сохранён в БД"""
        return self.id is None

    @property
    def problem(self) -> Problem | None:
        if self.problem_message is None:
            return None
        return Problem(
            message=self.problem_message,
            number=self.problem_number,
            occurred=self.problem_occurred,
        )

    @problem.setter
    def problem(self, problem: Problem | None) -> None:
        if problem is None:
            self.problem_message = None
            self.problem_number = None
            self.problem_occurred = None
            return
        self.problem_message = problem.message
        self.problem_number = problem.number
        self.problem_occurred = problem.occurred

    def set_state(self, new_state: str) -> None:
        """
        Смена состояния заказа

        Args:
            new_state: Новое состояние

        Raises:
            InvalidStateError: Если
                - new_state не задан или неизвестен
                - new_state меньше текущего состояния
                - заказ в CREATED и переводится не в INITIALIZED / CANCELED
                - заказ в терминальном состоянии
            IncompleteOrderError: Если заказ в CREATED переводится в INITIALIZED,
                но не заполнен
        """
        result = TransportOrderLifecycle.validate_state_change(self, new_state)
        if result.is_noop:
            return

        if new_state == TransportOrderState.STARTED:
            self._start_date = get_now()
        if new_state == TransportOrderState.FINISHED:
            self._end_date = get_now()
        self._state = new_state

    def touch(self) -> None:
        """Обновление даты изменения (вызывается слоем хранения)"""
        self._date_updated = get_now()
