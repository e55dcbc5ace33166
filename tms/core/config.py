"""
Конфигурация приложения из переменных окружения (.env)
"""

import os

from dotenv import load_dotenv


load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Настройки приложения"""

    # База данных
    DATABASE_URL: str | None = os.getenv("DATABASE_URL")
    DATABASE_PATH: str = os.getenv("DATABASE_PATH", "data/tms.db")
    SQL_ECHO: bool = _env_flag("SQL_ECHO")

    # Логирование
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOGS_DIR: str = os.getenv("LOGS_DIR", "logs")
    LOG_FILE_NAME: str = "tms.log"

    @classmethod
    def get_database_url(cls) -> str:
        """
        URL базы данных для async engine

        Если DATABASE_URL не задан, используется SQLite файл DATABASE_PATH
        """
        if cls.DATABASE_URL:
            return cls.DATABASE_URL
        return f"sqlite+aiosqlite:///{cls.DATABASE_PATH}"

    @classmethod
    def get_sync_database_url(cls) -> str:
        """URL базы данных для синхронного драйвера (alembic)"""
        return cls.get_database_url().replace("+aiosqlite", "").replace("+asyncpg", "")
