from __future__ import annotations

from typing import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from meeting_assistant.config import Settings
from meeting_assistant.main import create_app
from meeting_assistant.models.base import init_db
from meeting_assistant.repositories.meetings import MeetingsRepository
from meeting_assistant.services.analysis import TemplateAnalyzer
from meeting_assistant.services.processing_service import ProcessingService


@pytest.fixture
def engine() -> Iterator[Engine]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Iterator[Session]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def repo(session: Session) -> MeetingsRepository:
    return MeetingsRepository(session)


@pytest.fixture
def processing(repo: MeetingsRepository) -> ProcessingService:
    return ProcessingService(repo, analyzer=TemplateAnalyzer(delay_seconds=0))


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        data_dir=tmp_path / "data",
        logs_dir=tmp_path / "logs",
        database_url="sqlite://",
        processing_delay_seconds=0,
    )


@pytest.fixture
def app(settings: Settings, engine: Engine) -> FastAPI:
    return create_app(settings, engine=engine)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as client:
        yield client
