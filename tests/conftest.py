"""
tests/conftest.py -- Shared fixtures for the Sitepress test suite.

This module provides:
  - engine / db: a fresh in-memory SQLite schema per test
  - site: the "example.com" tenant most tests register into
  - make_ctx: RequestContext factory for calling the protocols directly
  - registered_user: a user registered through the local protocol
  - client: TestClient whose get_db dependency points at the test engine

Design: StaticPool keeps exactly one connection for the in-memory database.
A plain ``sqlite://`` engine would hand each pooled connection (and each
TestClient worker thread) its own blank database.

Environment variables must be set before any application import because
core.config builds its Settings singleton at import time.
"""

from __future__ import annotations

import os
import tempfile

# CRITICAL: Set before any core/database import.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
# The production work factor makes every hash take ~0.5s.
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "1000")
os.environ.setdefault("SITEPRESS_LOG_DIR", tempfile.mkdtemp(prefix="sitepress-log-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from auth.context import RequestContext
from auth.protocols import local
from database import Base, get_db
from main import app
from models.site import Site
from models.validation import create_record

# Register every model on Base.metadata
import models.passport  # noqa: F401
import models.post      # noqa: F401
import models.user      # noqa: F401

USER_EMAIL = "user@example.com"
USER_NAME = "someuser"
USER_PASSWORD = "right-password"


@pytest.fixture()
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    Base.metadata.drop_all(eng)
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def site(db) -> Site:
    site = create_record(db, Site, name="Example", domain="example.com")
    db.commit()
    return site


@pytest.fixture()
def make_ctx():
    def _make(user=None, **params) -> RequestContext:
        return RequestContext(params=params, user=user)

    return _make


@pytest.fixture()
def registered_user(db, site, make_ctx):
    ctx = make_ctx(
        email=USER_EMAIL,
        password=USER_PASSWORD,
        username=USER_NAME,
        firstName="Ada",
        lastName="Lovelace",
        site=site.id,
    )
    return local.register(ctx, db)


@pytest.fixture()
def client(session_factory):
    """TestClient with get_db overridden to use the per-test engine."""

    def _get_test_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_test_db
    with TestClient(app, raise_server_exceptions=True) as c:
        yield c
    app.dependency_overrides.pop(get_db, None)
