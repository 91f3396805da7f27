from __future__ import annotations

from sqlmodel import SQLModel, create_engine
from sqlalchemy.engine import Engine
from meeting_assistant.config import Settings


def make_engine(settings: Settings) -> Engine:
    url = settings.resolved_database_url()
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args)


def init_db(engine: Engine) -> None:
    # WAL only makes sense for file-backed SQLite
    if engine.url.get_backend_name() == "sqlite" and engine.url.database not in (None, "", ":memory:"):
        with engine.begin() as conn:
            conn.exec_driver_sql("PRAGMA journal_mode=WAL;")
            conn.exec_driver_sql("PRAGMA synchronous=NORMAL;")
    # Registers the table on SQLModel.metadata
    import meeting_assistant.models.meeting  # noqa: F401

    SQLModel.metadata.create_all(engine)
