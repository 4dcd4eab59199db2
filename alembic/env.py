from sqlmodel import SQLModel
from logging.config import fileConfig

from sqlalchemy import engine_from_config
from sqlalchemy import pool

from alembic import context

from app.core.config.settings import settings
import app.models  # noqa: F401  registers the tables on SQLModel.metadata

sqlalchemy_url = settings.database.DATABASE_URL

# Alembic runs synchronously: use pymysql instead of aiomysql
if sqlalchemy_url.startswith("mysql+aiomysql://"):
    sqlalchemy_url = sqlalchemy_url.replace("mysql+aiomysql://", "mysql+pymysql://")
elif sqlalchemy_url.startswith("mysql://"):
    sqlalchemy_url = sqlalchemy_url.replace("mysql://", "mysql+pymysql://")

config = context.config
config.set_main_option("sqlalchemy.url", sqlalchemy_url)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = SQLModel.metadata


def run_migrations_offline() -> None:
    """Emit SQL for the subscriber/donation tables without a live connection."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
