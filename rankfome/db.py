# rankfome/db.py
from __future__ import annotations

from functools import lru_cache
from typing import Iterator

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from .config import get_settings


def _on_sqlite_connect(dbapi_conn, _conn_record):
    cur = dbapi_conn.cursor()
    # sem isso o SQLite ignora ON DELETE CASCADE
    cur.execute("PRAGMA foreign_keys = ON;")
    cur.execute("PRAGMA synchronous = NORMAL;")
    cur.close()


def make_engine(url: str) -> Engine:
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True)

    kwargs: dict = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        # banco em memória: uma única conexão compartilhada
        kwargs["poolclass"] = StaticPool
    engine = create_engine(url, **kwargs)
    event.listen(engine, "connect", _on_sqlite_connect)
    return engine


@lru_cache(maxsize=8)
def get_engine(url: str | None = None) -> Engine:
    return make_engine(url or get_settings().database_url)


def init_db(engine: Engine | None = None) -> None:
    from . import models  # noqa: F401  registra tabelas
    SQLModel.metadata.create_all(engine or get_engine())


def get_session() -> Iterator[Session]:
    """Dependency do FastAPI: uma Session por requisição."""
    with Session(get_engine()) as session:
        yield session
