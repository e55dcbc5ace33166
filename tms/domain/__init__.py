"""
Domain layer для бизнес-логики
"""

from tms.domain.transport_order_lifecycle import (
    IncompleteOrderError,
    InvalidStateError,
    StateChangeResult,
    TransportOrderLifecycle,
    TransportOrderStateError,
)


__all__ = [
    "IncompleteOrderError",
    "InvalidStateError",
    "StateChangeResult",
    "TransportOrderLifecycle",
    "TransportOrderStateError",
]
