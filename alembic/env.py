import sys
from logging.config import fileConfig
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import URL
from alembic import context

sys.path.append(str(Path(__file__).resolve().parent.parent))

from reading_tracker.config import get_settings

config = context.config

# Interpret the config file for Python logging.
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Connection details come from the same settings the storage backend uses
db_config = get_settings().db_config
sqlalchemy_url = URL.create(
    "postgresql+psycopg2",
    username=db_config["user"],
    password=db_config["password"],
    host=db_config["host"],
    port=db_config["port"],
    database=db_config["dbname"],
)

# Raw SQL migrations, nothing to autogenerate from
target_metadata = None


def run_migrations_offline():
    context.configure(
        url=sqlalchemy_url.render_as_string(hide_password=False),
        target_metadata=target_metadata,
        literal_binds=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    connectable = create_engine(sqlalchemy_url, future=True)

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
