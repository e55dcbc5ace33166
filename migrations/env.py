"""
Alembic environment configuration
"""
from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool
from alembic import context

from tms.core.config import Config
from tms.database.orm_models import Base

# this is the Alembic Config object, which provides
# access to the values within the .ini file in use.
config = context.config

# URL базы данных из конфигурации приложения (синхронный драйвер)
config.set_main_option("sqlalchemy.url", Config.get_sync_database_url())

# Interpret the config file for Python logging.
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# ORM модели для автогенерации миграций
target_metadata = Base.metadata


def include_name(name, type_, parent_names):
    """Фильтр для игнорирования некоторых объектов при автогенерации"""
    # Игнорируем временные таблицы Alembic
    if type_ == "table" and name.startswith("_alembic"):
        return False
    return True


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode.

    Calls to context.execute() here emit the given string to the
    script output.
    """
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,  # Важно для SQLite при ALTER TABLE
        include_name=include_name,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=True,  # Важно для SQLite при ALTER TABLE
            include_name=include_name,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
