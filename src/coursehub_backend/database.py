import logging
import os
from typing import Generator
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from coursehub_backend.settings import settings

logger = logging.getLogger(__name__)

ALEMBIC_INI = os.path.join(os.path.dirname(os.path.abspath(__file__)), "alembic.ini")

_postgres_options = {
    "pool_pre_ping": True,
    "pool_size": 10,
    "max_overflow": 5,
    "pool_timeout": 30,
    "pool_recycle": 300
}

def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()

def create_db_engine(url: str) -> Engine:
    """Create an engine for the given URL.

    SQLite is used for local development and the test suite; in-memory
    databases share one connection so every session sees the same data.
    """
    if url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
        engine = create_engine(url, **options)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine
    return create_engine(url, **_postgres_options)

_engine = create_db_engine(settings.database_url)
_SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_engine)

def get_db() -> Generator[Session, None, None]:

    db = _SessionLocal()

    try:
        yield db
    except OperationalError:
        logger.error("Database connection failed")
        db.rollback()
        raise
    finally:
        db.close()

def alembic_config() -> Config:
    """Alembic configuration of the packaged migrations."""
    config = Config(ALEMBIC_INI)
    config.attributes["configure_logger"] = False
    return config

def migrate_db(engine: Engine = None, revision: str = "head"):
    """Upgrade the schema to ``revision`` by running the Alembic migrations."""
    with (engine or _engine).begin() as connection:
        config = alembic_config()
        config.attributes["connection"] = connection
        command.upgrade(config, revision)
