"""
Pytest configuration and fixtures for all tests.
"""

import os

# must be set before coursehub_backend.database creates its engine
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from coursehub_backend.database import create_db_engine, get_db
from coursehub_backend.model import Base
from coursehub_backend.server import app


@pytest.fixture
def engine():
    """In-memory SQLite engine; all sessions share one connection."""
    engine = create_db_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory) -> Generator[TestClient, None, None]:
    """TestClient whose requests each get their own session on the test engine."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def file_session_factory(tmp_path):
    """Sessions on a file database, each with its own connection."""
    engine = create_db_engine(f"sqlite:///{tmp_path / 'coursehub.db'}")
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    finally:
        engine.dispose()
