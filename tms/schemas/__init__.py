"""Pydantic schemas package"""
from tms.schemas.transport_order import (
    ProblemSchema,
    TransportOrderCreateSchema,
    TransportOrderReadSchema,
    TransportOrderUpdateSchema,
)


__all__ = [
    "ProblemSchema",
    "TransportOrderCreateSchema",
    "TransportOrderReadSchema",
    "TransportOrderUpdateSchema",
]
