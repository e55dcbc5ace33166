"""
Database package: ORM модели и подключение к БД.

Импорт пакета регистрирует хук обновления date_updated для TransportOrder.
"""

from tms.database.models import Problem
from tms.database.orm_database import ORMDatabase
from tms.database.orm_models import Base, TransportOrder


Database = ORMDatabase


def get_database(database_url: str | None = None) -> ORMDatabase:
    """
    Фабрика для получения экземпляра БД.

    Используйте эту функцию вместо прямого вызова `ORMDatabase()`.
    """
    return ORMDatabase(database_url)


__all__ = ["Base", "Database", "ORMDatabase", "Problem", "TransportOrder", "get_database"]
