from typing import Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from .core.config import get_settings

_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker[Session]] = None


def _normalize_database_url(url: str) -> str:
    """Use the psycopg 3 driver for bare postgres URLs.

    Hosting platforms hand out postgres:// or postgresql:// URLs.
    """
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


def get_engine() -> Engine:
    global _engine
    if _engine is not None:
        return _engine

    database_url = _normalize_database_url(get_settings().database_url)
    if database_url.startswith("sqlite"):
        _engine = create_engine(
            database_url, connect_args={"check_same_thread": False}, future=True
        )
    else:
        _engine = create_engine(
            database_url,
            pool_pre_ping=True,
            pool_size=5,
            max_overflow=5,
            future=True,
        )
    return _engine


class Base(DeclarativeBase):
    pass


def get_sessionmaker() -> sessionmaker[Session]:
    global _SessionLocal
    if _SessionLocal is not None:
        return _SessionLocal

    engine = get_engine()
    _SessionLocal = sessionmaker(bind=engine, expire_on_commit=False, future=True)
    return _SessionLocal


def check_database_health() -> dict:
    """Run a lightweight health check against the database."""
    engine = get_engine()
    try:
        with engine.connect() as connection:
            result = connection.execute(text("SELECT 1")).scalar()
            ok = bool(result == 1)
            return {"ok": ok, "details": "ok" if ok else "unexpected result"}
    except Exception as exc:  # noqa: BLE001 - reported on /health
        return {"ok": False, "details": str(exc)}
