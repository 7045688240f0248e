from __future__ import annotations

from typing import Iterator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.Models.BaseModel import Base


@pytest.fixture
def engine() -> Iterator[Engine]:
    """In-memory SQLite engine with every test model's table created."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(params=[True, False], ids=["expire_on_commit", "keep_loaded"])
def session_factory(engine: Engine, request: pytest.FixtureRequest) -> sessionmaker[Session]:
    """
    Sessions configured like the application's, with and without
    expire_on_commit, so model mixins are checked under both.
    """
    return sessionmaker(autoflush=False, bind=engine, expire_on_commit=request.param)


@pytest.fixture
def db(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()
