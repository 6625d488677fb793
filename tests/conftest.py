from __future__ import annotations

import os
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

DATA_DIR = Path(__file__).resolve().parent / "data"
TEST_CREDENTIALS = DATA_DIR / "runtime_credentials.json"
TEST_ENDPOINTS = DATA_DIR / "endpoints.json"

os.environ.setdefault("JWT_SIGNING_KEY", "test-signing-key")
os.environ.setdefault("ADMIN_CREDENTIALS_PATH", str(TEST_CREDENTIALS))
os.environ.setdefault("ADMIN_JWT_TTL_HOURS", "168")
os.environ.setdefault("MASSACTION_ENDPOINTS_PATH", str(TEST_ENDPOINTS))
os.environ.setdefault("DATABASE_URL", "sqlite://")

from massaction.config import enable_sqlite_foreign_keys  # noqa: E402
from massaction.db.db_models import Base  # noqa: E402


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, expire_on_commit=False)
