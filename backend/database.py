# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
SQLAlchemy engine, session factory, declarative base, and the FastAPI
dependency that provides one DB session per request.

Every model module imports ``Base`` from here; the local protocol and the
routers only ever see the ``Session`` handed out by :func:`get_db`.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from core.config import settings


def make_engine(url: str):
    """
    Build an engine for *url*.

    SQLite needs ``check_same_thread=False`` because FastAPI runs sync
    handlers in a thread pool; everything else gets ``pool_pre_ping`` so idle
    connections survive MySQL's wait_timeout.
    """
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url, pool_pre_ping=True)


engine = make_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """
    FastAPI dependency.  Yields a session for the duration of the request,
    then closes it.  Use with Depends(get_db).

    Nothing is committed here: handlers (and the local protocol) commit
    explicitly once a unit of work is complete, so an exception part-way
    through leaves the database untouched.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
