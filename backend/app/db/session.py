"""
SQLAlchemy engine + session factory backing the review key-value store.
Import *get_db* as a FastAPI dependency in route handlers.
"""
from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings


def engine_options(database_url: str, echo: bool = False) -> dict:
    """
    Keyword arguments for ``create_engine`` given *database_url*.

    SQLite connections are shared across FastAPI's threadpool workers, so the
    same-thread check is turned off; server databases get a liveness ping.
    """
    options: dict = {"echo": echo}
    if make_url(database_url).get_backend_name() == "sqlite":
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_pre_ping"] = True
    return options


engine = create_engine(settings.DATABASE_URL, **engine_options(settings.DATABASE_URL, settings.is_dev))

SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
