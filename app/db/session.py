"""
session.py

Database engine and Session factory.

Creates the SQLAlchemy Engine and SessionLocal used across the application;
the get_db dependency opens and closes one session per request.

Related files:
- app.core.config        : DATABASE_URL
- app.core.deps          : get_db dependency

"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from app.core.config import settings


def engine_kwargs(url: str) -> dict:
    kwargs = {"pool_pre_ping": True}
    # SQLite connections are shared between the worker threads of the server
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
    return kwargs


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite ignores ON DELETE SET NULL unless foreign keys are switched on."""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _fk_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# pool_pre_ping=True:
#   detect connections dropped by the server after a long idle period
engine = create_engine(settings.DATABASE_URL, **engine_kwargs(settings.DATABASE_URL))
enable_sqlite_foreign_keys(engine)

# one session per request
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)
