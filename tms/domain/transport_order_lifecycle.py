"""
Правила жизненного цикла транспортного заказа
"""

from dataclasses import dataclass
from typing import Any

from tms.core.constants import TransportOrderState


class TransportOrderStateError(Exception):
    """Базовое исключение при недопустимой смене состояния заказа"""

    def __init__(self, from_state: str | None, to_state: Any, reason: str = ""):
        self.from_state = from_state
        self.to_state = to_state
        self.reason = reason
        message = f"Недопустимый переход из '{from_state}' в '{to_state}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class InvalidStateError(TransportOrderStateError):
    """Новое состояние отсутствует, меньше текущего или недопустимо из текущего"""


class IncompleteOrderError(TransportOrderStateError):
    """Заказ не заполнен для перехода в INITIALIZED"""


@dataclass
class StateChangeResult:
    """Результат валидации смены состояния"""

    is_valid: bool
    is_noop: bool = False
    error_message: str | None = None


class TransportOrderLifecycle:
    """
    Валидация переходов состояний транспортного заказа

    Граф переходов (по порядку состояний):

    CREATED → INITIALIZED → STARTED → INTERRUPTED → ONFAILURE → CANCELED → FINISHED
       ↓
    CANCELED

    Из CREATED можно перейти только в INITIALIZED или CANCELED.
    Остальные переходы разрешены, если новое состояние не меньше текущего.
    FINISHED и CANCELED терминальные.
    """

    CREATED_EXITS: frozenset[str] = frozenset(
        {TransportOrderState.INITIALIZED, TransportOrderState.CANCELED}
    )
    TERMINAL_STATES: frozenset[str] = frozenset(
        {TransportOrderState.FINISHED, TransportOrderState.CANCELED}
    )

    @classmethod
    def is_complete(cls, order: Any) -> bool:
        """Заданы транспортная единица и хотя бы одна цель"""
        return bool(order.transport_unit) and bool(
            order.target_location or order.target_location_group
        )

    @classmethod
    def validate_initialization_condition(cls, order: Any) -> None:
        """
        Проверка готовности заказа к переходу в INITIALIZED

        Raises:
            IncompleteOrderError: Если не задана транспортная единица или цель
        """
        if not cls.is_complete(order):
            raise IncompleteOrderError(
                order.state,
                TransportOrderState.INITIALIZED,
                "не заданы транспортная единица или цель (место / группа мест)",
            )

    @classmethod
    def validate_state_change(
        cls, order: Any, new_state: Any, raise_exception: bool = True
    ) -> StateChangeResult:
        """
        Валидация смены состояния заказа

        Args:
            order: Транспортный заказ (нужны state, transport_unit и цели)
            new_state: Новое состояние
            raise_exception: Выбрасывать ли исключение при ошибке

        Returns:
            StateChangeResult; is_noop=True если состояние не меняется

        Raises:
            InvalidStateError: Состояние отсутствует, неизвестно, меньше текущего
                или недопустимо из текущего
            IncompleteOrderError: Переход CREATED → INITIALIZED для незаполненного заказа
        """
        try:
            is_noop = cls._check(order, new_state)
        except TransportOrderStateError as e:
            if raise_exception:
                raise
            return StateChangeResult(is_valid=False, error_message=str(e))
        return StateChangeResult(is_valid=True, is_noop=is_noop)

    @classmethod
    def _check(cls, order: Any, new_state: Any) -> bool:
        current = order.state

        if new_state is None:
            raise InvalidStateError(current, new_state, "новое состояние не задано")
        if not TransportOrderState.is_valid(new_state):
            raise InvalidStateError(current, new_state, "неизвестное состояние")

        if TransportOrderState.get_ordinal(current) > TransportOrderState.get_ordinal(new_state):
            raise InvalidStateError(current, new_state, "возврат в предыдущее состояние запрещён")

        if current == TransportOrderState.CREATED:
            if new_state not in cls.CREATED_EXITS:
                raise InvalidStateError(
                    current, new_state, "после создания заказ должен быть инициализирован"
                )
            if new_state == TransportOrderState.INITIALIZED:
                cls.validate_initialization_condition(order)
            return False

        if new_state == current:
            return True

        if current in cls.TERMINAL_STATES:
            raise InvalidStateError(
                current,
                new_state,
                f"состояние '{TransportOrderState.get_state_name(current)}' является терминальным",
            )
        return False

    @classmethod
    def can_transition(cls, order: Any, new_state: Any) -> bool:
        """Проверка возможности перехода без выбрасывания исключения"""
        return cls.validate_state_change(order, new_state, raise_exception=False).is_valid

    @classmethod
    def get_available_transitions(cls, from_state: str) -> list[str]:
        """
        Список состояний, в которые можно перейти из текущего

        Заполненность заказа не учитывается.
        """
        if from_state == TransportOrderState.CREATED:
            return [s for s in TransportOrderState.all_states() if s in cls.CREATED_EXITS]
        if cls.is_terminal_state(from_state):
            return []
        ordinal = TransportOrderState.get_ordinal(from_state)
        return [
            s
            for s in TransportOrderState.all_states()
            if TransportOrderState.get_ordinal(s) > ordinal
        ]

    @classmethod
    def is_terminal_state(cls, state: str) -> bool:
        """Проверка, является ли состояние терминальным"""
        return state in cls.TERMINAL_STATES

    @classmethod
    def get_transition_description(cls, from_state: str, to_state: str) -> str:
        """Описание перехода для логов"""
        descriptions = {
            (TransportOrderState.CREATED, TransportOrderState.INITIALIZED): "Инициализация заказа",
            (TransportOrderState.CREATED, TransportOrderState.CANCELED): "Отмена нового заказа",
            (TransportOrderState.INITIALIZED, TransportOrderState.STARTED): "Запуск заказа",
            (TransportOrderState.STARTED, TransportOrderState.FINISHED): "Завершение заказа",
            (TransportOrderState.STARTED, TransportOrderState.INTERRUPTED): "Прерывание заказа",
            (TransportOrderState.STARTED, TransportOrderState.ONFAILURE): "Ошибка выполнения",
        }
        return descriptions.get(
            (from_state, to_state),
            f"Переход из {TransportOrderState.get_state_name(from_state)} "
            f"в {TransportOrderState.get_state_name(to_state)}",
        )
