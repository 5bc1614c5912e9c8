"""Alembic environment for the inkwell schema (users, RBAC tables, articles, tags, comments)."""

import logging
import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine
from sqlalchemy.pool import NullPool

os.environ.setdefault("APP_ENV", "dev")
from inkwell.core.config import get_settings
from inkwell.models import Base

# Registers every table on Base.metadata for autogenerate.
from inkwell.models import (  # noqa: F401
    Article,
    Comment,
    Permission,
    Role,
    RolePermission,
    Tag,
    User,
    UserRole,
)

config = context.config
if config.config_file_name is not None and config.file_config.has_section("formatters"):
    fileConfig(config.config_file_name)
else:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
logger = logging.getLogger("alembic.env")

target_metadata = Base.metadata


def database_url() -> str:
    """`alembic -x dburl=...` wins over DATABASE_URL from settings."""
    return context.get_x_argument(as_dictionary=True).get("dburl") or get_settings().DATABASE_URL


def _configure_options(url: str) -> dict:
    # SQLite cannot ALTER most constraints in place; batch mode rebuilds the table.
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        "render_as_batch": url.startswith("sqlite"),
    }


def run_migrations_offline() -> None:
    url = database_url()
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_configure_options(url),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    url = database_url()
    engine = create_engine(url, poolclass=NullPool)
    logger.info("Migrating %s", engine.url.render_as_string(hide_password=True))
    with engine.connect() as connection:
        context.configure(connection=connection, **_configure_options(url))
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
