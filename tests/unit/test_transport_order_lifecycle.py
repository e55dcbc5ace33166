"""
Тесты для правил жизненного цикла транспортного заказа
"""
from itertools import combinations

import pytest

from tms.core.constants import TransportOrderState
from tms.database import TransportOrder
from tms.domain import (
    IncompleteOrderError,
    InvalidStateError,
    TransportOrderLifecycle,
)
from tms.utils.helpers import get_now


ALL_STATES = TransportOrderState.all_states()

# Пары (s1, s2), где s1 > s2 по естественному порядку
BACKWARD_PAIRS = [(high, low) for low, high in combinations(ALL_STATES, 2)]


class TestBackwardTransitions:
    """Возврат в предыдущее состояние запрещён"""

    @pytest.mark.parametrize("from_state,to_state", BACKWARD_PAIRS)
    def test_backward_transition_fails(self, make_order, from_state, to_state):
        order = make_order(from_state)

        with pytest.raises(InvalidStateError):
            order.set_state(to_state)

        assert order.state == from_state

    def test_interrupted_order_cannot_restart(self, make_order):
        """INTERRUPTED стоит после STARTED, поэтому повторный запуск запрещён"""
        order = make_order(TransportOrderState.INTERRUPTED)

        with pytest.raises(InvalidStateError):
            order.set_state(TransportOrderState.STARTED)


class TestCreatedState:
    """Выход из состояния CREATED"""

    def test_fresh_order_cannot_initialize(self):
        order = TransportOrder()

        with pytest.raises(IncompleteOrderError):
            order.set_state(TransportOrderState.INITIALIZED)

        assert order.state == TransportOrderState.CREATED

    def test_initialize_without_target_fails(self):
        order = TransportOrder(transport_unit="TU-0001")

        with pytest.raises(IncompleteOrderError):
            order.set_state(TransportOrderState.INITIALIZED)

    def test_initialize_without_transport_unit_fails(self):
        order = TransportOrder(target_location="STOCK/0001/0001")

        with pytest.raises(IncompleteOrderError):
            order.set_state(TransportOrderState.INITIALIZED)

    def test_initialize_with_unit_and_target_location(self):
        order = TransportOrder()
        order.transport_unit = "TU-0001"
        order.target_location = "STOCK/0001/0001"

        order.set_state(TransportOrderState.INITIALIZED)

        assert order.state == TransportOrderState.INITIALIZED

    def test_initialize_with_target_location_group(self):
        order = TransportOrder(transport_unit="TU-0001", target_location_group="STOCK")

        order.set_state(TransportOrderState.INITIALIZED)

        assert order.state == TransportOrderState.INITIALIZED

    def test_cancel_incomplete_order(self):
        order = TransportOrder()

        order.set_state(TransportOrderState.CANCELED)

        assert order.state == TransportOrderState.CANCELED
        assert order.start_date is None
        assert order.end_date is None

    @pytest.mark.parametrize(
        "new_state",
        [
            TransportOrderState.CREATED,
            TransportOrderState.STARTED,
            TransportOrderState.INTERRUPTED,
            TransportOrderState.ONFAILURE,
            TransportOrderState.FINISHED,
        ],
    )
    def test_created_only_exits_to_initialized_or_canceled(self, make_order, new_state):
        order = make_order(TransportOrderState.CREATED)

        with pytest.raises(InvalidStateError):
            order.set_state(new_state)

    def test_illegal_exit_checked_before_completeness(self):
        """Незаполненный заказ в STARTED - это InvalidStateError, а не IncompleteOrderError"""
        order = TransportOrder()

        with pytest.raises(InvalidStateError):
            order.set_state(TransportOrderState.STARTED)


class TestDates:
    """Даты запуска и завершения"""

    def test_start_sets_start_date(self, make_order):
        order = make_order(TransportOrderState.INITIALIZED)
        before = get_now()

        order.set_state(TransportOrderState.STARTED)

        assert order.state == TransportOrderState.STARTED
        assert order.start_date is not None
        assert order.start_date >= before
        assert order.end_date is None

    def test_finish_sets_end_date_and_keeps_start_date(self, make_order):
        order = make_order(TransportOrderState.STARTED)
        start_date = order.start_date
        before = get_now()

        order.set_state(TransportOrderState.FINISHED)

        assert order.state == TransportOrderState.FINISHED
        assert order.start_date == start_date
        assert order.end_date is not None
        assert order.end_date >= before

    def test_same_state_is_noop(self, make_order):
        order = make_order(TransportOrderState.STARTED)
        start_date = order.start_date

        order.set_state(TransportOrderState.STARTED)

        assert order.state == TransportOrderState.STARTED
        assert order.start_date == start_date

    def test_finished_again_keeps_end_date(self, make_order):
        order = make_order(TransportOrderState.FINISHED)
        end_date = order.end_date

        order.set_state(TransportOrderState.FINISHED)

        assert order.end_date == end_date

    def test_dates_unset_for_initialized(self, make_order):
        order = make_order(TransportOrderState.INITIALIZED)

        assert order.start_date is None
        assert order.end_date is None


class TestInvalidValues:
    """Отсутствующие и неизвестные состояния"""

    @pytest.mark.parametrize("state", ALL_STATES)
    def test_none_state_fails_from_any_state(self, make_order, state):
        order = make_order(state)

        with pytest.raises(InvalidStateError):
            order.set_state(None)

        assert order.state == state

    def test_unknown_state_fails(self, make_order):
        order = make_order(TransportOrderState.INITIALIZED)

        with pytest.raises(InvalidStateError):
            order.set_state("MOVING")

    def test_error_carries_states(self, make_order):
        order = make_order(TransportOrderState.STARTED)

        with pytest.raises(InvalidStateError) as exc_info:
            order.set_state(TransportOrderState.INITIALIZED)

        assert exc_info.value.from_state == TransportOrderState.STARTED
        assert exc_info.value.to_state == TransportOrderState.INITIALIZED
        assert "возврат" in str(exc_info.value)


class TestTerminalStates:
    """FINISHED и CANCELED терминальные"""

    def test_canceled_cannot_finish(self, make_order):
        order = make_order(TransportOrderState.CANCELED)

        with pytest.raises(InvalidStateError):
            order.set_state(TransportOrderState.FINISHED)

        assert order.end_date is None

    def test_is_terminal_state(self):
        assert TransportOrderLifecycle.is_terminal_state(TransportOrderState.FINISHED)
        assert TransportOrderLifecycle.is_terminal_state(TransportOrderState.CANCELED)
        assert not TransportOrderLifecycle.is_terminal_state(TransportOrderState.INTERRUPTED)


class TestTransportOrderLifecycle:
    """Вспомогательные методы TransportOrderLifecycle"""

    def test_validate_without_exception(self):
        order = TransportOrder()

        result = TransportOrderLifecycle.validate_state_change(
            order, TransportOrderState.INITIALIZED, raise_exception=False
        )

        assert result.is_valid is False
        assert result.error_message

    def test_validate_noop(self, make_order):
        order = make_order(TransportOrderState.STARTED)

        result = TransportOrderLifecycle.validate_state_change(order, TransportOrderState.STARTED)

        assert result.is_valid is True
        assert result.is_noop is True

    def test_can_transition(self, make_order):
        order = make_order(TransportOrderState.INITIALIZED)

        assert TransportOrderLifecycle.can_transition(order, TransportOrderState.STARTED)
        assert not TransportOrderLifecycle.can_transition(order, TransportOrderState.CREATED)

    def test_available_transitions(self):
        assert TransportOrderLifecycle.get_available_transitions(TransportOrderState.CREATED) == [
            TransportOrderState.INITIALIZED,
            TransportOrderState.CANCELED,
        ]
        assert TransportOrderLifecycle.get_available_transitions(TransportOrderState.STARTED) == [
            TransportOrderState.INTERRUPTED,
            TransportOrderState.ONFAILURE,
            TransportOrderState.CANCELED,
            TransportOrderState.FINISHED,
        ]
        assert TransportOrderLifecycle.get_available_transitions(TransportOrderState.FINISHED) == []

    def test_transition_description(self):
        description = TransportOrderLifecycle.get_transition_description(
            TransportOrderState.INITIALIZED, TransportOrderState.STARTED
        )
        assert description == "Запуск заказа"

        fallback = TransportOrderLifecycle.get_transition_description(
            TransportOrderState.INTERRUPTED, TransportOrderState.CANCELED
        )
        assert "Прерван" in fallback
