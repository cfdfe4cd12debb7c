"""Migrations for the users/roles/stocks/comments/portfolios schema."""

import os
import sys
from logging.config import fileConfig

from sqlalchemy import create_engine, pool
from alembic import context

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from dotenv import load_dotenv

load_dotenv()

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# database.py refuses to import without DATABASE_URL; alembic.ini is the local fallback.
DB_URL = os.getenv("DATABASE_URL") or config.get_main_option("sqlalchemy.url")
os.environ.setdefault("DATABASE_URL", DB_URL)

from database import Base  # noqa: E402
import models  # noqa: E402, F401

target_metadata = Base.metadata

# upper(symbol) is not reflected consistently across backends, so autogenerate skips it.
EXPRESSION_INDEXES = {"ux_stocks_symbol_upper"}


def include_object(obj, name, type_, reflected, compare_to) -> bool:
    return not (type_ == "index" and name in EXPRESSION_INDEXES)


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        include_object=include_object,
        compare_type=True,
        **kwargs,
    )


def run_migrations_offline() -> None:
    _configure(
        url=DB_URL,
        literal_binds=True,
        render_as_batch=DB_URL.startswith("sqlite"),
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    # NullPool: one short-lived connection; the sqlite FK pragma from database.py still applies.
    connectable = create_engine(DB_URL, poolclass=pool.NullPool)
    with connectable.connect() as connection:
        _configure(connection=connection, render_as_batch=connection.dialect.name == "sqlite")
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
