"""Pydantic схемы для валидации транспортных заказов"""
import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tms.core.constants import PriorityLevel
from tms.database.models import Problem
from tms.database.orm_models import TransportOrder


# Баркод транспортной единицы: буквы, цифры, дефис
BARCODE_REGEX = re.compile(r"^[A-Za-z0-9\-]+$")
MAX_BARCODE_LENGTH = 20
MAX_LOCATION_LENGTH = 100


def _strip_or_none(v: str | None) -> str | None:
    if v is None:
        return None
    v = v.strip()
    return v or None


def _validate_priority(v: int) -> int:
    if v not in PriorityLevel.all_levels():
        levels = ", ".join(PriorityLevel.get_level_name(level) for level in PriorityLevel.all_levels())
        raise ValueError(f"Недопустимый приоритет. Допустимые: {levels}")
    return v


def _validate_barcode(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Транспортная единица не указана")
    if not BARCODE_REGEX.match(v):
        raise ValueError("Баркод транспортной единицы содержит недопустимые символы")
    return v


class ProblemSchema(BaseModel):
    """Схема проблемы транспортного заказа"""

    model_config = ConfigDict(from_attributes=True)

    message: str = Field(..., min_length=1, max_length=1000, description="Описание проблемы")
    number: int | None = Field(None, ge=0, description="Код проблемы")
    occurred: datetime | None = Field(None, description="Время возникновения")

    def to_problem(self) -> Problem:
        """Преобразование в объект-значение Problem"""
        if self.occurred is None:
            return Problem(message=self.message, number=self.number)
        return Problem(message=self.message, number=self.number, occurred=self.occurred)


class TransportOrderCreateSchema(BaseModel):
    """Схема для создания транспортного заказа"""

    transport_unit: str = Field(
        ..., min_length=1, max_length=MAX_BARCODE_LENGTH, description="Баркод транспортной единицы"
    )
    source_location: str | None = Field(
        None, max_length=MAX_LOCATION_LENGTH, description="Исходное место"
    )
    target_location: str | None = Field(
        None, max_length=MAX_LOCATION_LENGTH, description="Целевое место"
    )
    target_location_group: str | None = Field(
        None, max_length=MAX_LOCATION_LENGTH, description="Целевая группа мест"
    )
    priority: int = Field(PriorityLevel.NORMAL, description="Приоритет")

    @field_validator("transport_unit")
    @classmethod
    def validate_transport_unit(cls, v: str) -> str:
        """Валидация баркода транспортной единицы"""
        return _validate_barcode(v)

    @field_validator("source_location", "target_location", "target_location_group")
    @classmethod
    def validate_location(cls, v: str | None) -> str | None:
        """Пустые строки считаются отсутствующим значением"""
        return _strip_or_none(v)

    @field_validator("priority")
    @classmethod
    def validate_priority(cls, v: int) -> int:
        """Приоритет должен быть из списка уровней"""
        return _validate_priority(v)

    def to_entity(self) -> TransportOrder:
        """Создание нового заказа в состоянии CREATED"""
        return TransportOrder(
            transport_unit=self.transport_unit,
            source_location=self.source_location,
            target_location=self.target_location,
            target_location_group=self.target_location_group,
            priority=self.priority,
        )


class TransportOrderUpdateSchema(BaseModel):
    """Схема для изменения полей заказа (только переданные поля)"""

    transport_unit: str | None = Field(None, max_length=MAX_BARCODE_LENGTH)
    source_location: str | None = Field(None, max_length=MAX_LOCATION_LENGTH)
    target_location: str | None = Field(None, max_length=MAX_LOCATION_LENGTH)
    target_location_group: str | None = Field(None, max_length=MAX_LOCATION_LENGTH)
    priority: int | None = None
    problem: ProblemSchema | None = None

    @field_validator("transport_unit")
    @classmethod
    def validate_transport_unit(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return _validate_barcode(v)

    @field_validator("source_location", "target_location", "target_location_group")
    @classmethod
    def validate_location(cls, v: str | None) -> str | None:
        return _strip_or_none(v)

    @field_validator("priority")
    @classmethod
    def validate_priority(cls, v: int | None) -> int | None:
        if v is None:
            return None
        return _validate_priority(v)

    def apply(self, order: TransportOrder) -> TransportOrder:
        """
        Применение переданных полей к заказу

        Поля, явно переданные как None, очищаются (кроме приоритета).
        """
        for name in self.model_fields_set:
            value = getattr(self, name)
            if name == "problem":
                order.problem = value.to_problem() if value else None
            elif name == "priority" and value is None:
                continue
            else:
                setattr(order, name, value)
        return order


class TransportOrderReadSchema(BaseModel):
    """Представление транспортного заказа"""

    model_config = ConfigDict(from_attributes=True)

    id: int | None
    transport_unit: str | None
    source_location: str | None
    target_location: str | None
    target_location_group: str | None
    priority: int
    state: str
    problem: ProblemSchema | None
    creation_date: datetime
    date_updated: datetime
    start_date: datetime | None
    end_date: datetime | None
    version: int | None
