"""
Исключения слоя хранения транспортных заказов
"""


class RepositoryError(Exception):
    """Базовое исключение для репозиториев"""


class ConcurrentModificationError(RepositoryError):
    """
    Заказ изменён другим процессом (optimistic locking)

    Версия, на основе которой сделаны изменения, устарела.
    Вызывающий должен перечитать заказ и повторить операцию или отказаться от неё.
    """

    def __init__(
        self, order_id: int | None, expected_version: int | None, actual_version: int | None = None
    ):
        self.order_id = order_id
        self.expected_version = expected_version
        self.actual_version = actual_version
        message = (
            f"Транспортный заказ #{order_id} изменён другим процессом "
            f"(ожидалась версия {expected_version}"
        )
        if actual_version is not None:
            message += f", текущая {actual_version}"
        super().__init__(message + "). Перечитайте заказ и повторите операцию")


class EntityNotFoundError(RepositoryError):
    """Транспортный заказ не найден"""

    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__(f"Транспортный заказ #{order_id} не найден")
