"""
Константы приложения - состояния и приоритеты транспортных заказов
"""


class TransportOrderState:
    """Состояния транспортного заказа"""

    CREATED = "CREATED"  # Создан, ещё не заполнен
    INITIALIZED = "INITIALIZED"  # Заполнен и готов к запуску
    STARTED = "STARTED"  # Выполняется
    INTERRUPTED = "INTERRUPTED"  # Прерван
    ONFAILURE = "ONFAILURE"  # Ошибка при выполнении
    CANCELED = "CANCELED"  # Отменён
    FINISHED = "FINISHED"  # Завершён

    # Порядковые номера задают естественный порядок состояний.
    # Переход в состояние с меньшим номером запрещён.
    ORDINALS: dict[str, int] = {
        CREATED: 10,
        INITIALIZED: 20,
        STARTED: 30,
        INTERRUPTED: 31,
        ONFAILURE: 32,
        CANCELED: 40,
        FINISHED: 50,
    }

    @classmethod
    def all_states(cls) -> list[str]:
        """Список всех состояний в естественном порядке"""
        return sorted(cls.ORDINALS, key=cls.ORDINALS.__getitem__)

    @classmethod
    def is_valid(cls, state: object) -> bool:
        """Проверка, что значение является известным состоянием"""
        return isinstance(state, str) and state in cls.ORDINALS

    @classmethod
    def get_ordinal(cls, state: str) -> int:
        """
        Получение порядкового номера состояния

        Raises:
            KeyError: Если состояние неизвестно
        """
        return cls.ORDINALS[state]

    @classmethod
    def get_state_name(cls, state: str) -> str:
        """Получение названия состояния на русском"""
        names = {
            cls.CREATED: "Создан",
            cls.INITIALIZED: "Инициализирован",
            cls.STARTED: "Запущен",
            cls.INTERRUPTED: "Прерван",
            cls.ONFAILURE: "Ошибка выполнения",
            cls.CANCELED: "Отменён",
            cls.FINISHED: "Завершён",
        }
        return names.get(state, str(state))


class PriorityLevel:
    """Уровни приоритета. Чем больше значение, тем выше приоритет"""

    LOWEST = 1
    LOW = 2
    NORMAL = 3
    HIGH = 4
    HIGHEST = 5

    @classmethod
    def all_levels(cls) -> list[int]:
        """Список всех уровней по возрастанию"""
        return [cls.LOWEST, cls.LOW, cls.NORMAL, cls.HIGH, cls.HIGHEST]

    @classmethod
    def get_level_name(cls, level: int) -> str:
        """Получение названия уровня приоритета"""
        names = {
            cls.LOWEST: "LOWEST",
            cls.LOW: "LOW",
            cls.NORMAL: "NORMAL",
            cls.HIGH: "HIGH",
            cls.HIGHEST: "HIGHEST",
        }
        return names.get(level, str(level))
