"""Application configuration builder."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .db.db_init import init_db


@dataclass(slots=True)
class OrgSettings:
    base_url: str
    access_token: str
    api_version: str
    timeout_seconds: float


@dataclass(slots=True)
class AppConfig:
    database_url: str
    engine: Engine
    session_factory: sessionmaker[Session]
    namespace: str
    environment: str
    endpoints_path: Path
    test_endpoint_name: str
    org: OrgSettings
    admin_credentials_path: Path
    jwt_signing_key: str
    admin_jwt_ttl_hours: int
    log_level: str = "INFO"

    @property
    def is_test_environment(self) -> bool:
        return self.environment == "test"


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite ignores FK cascades unless the pragma is set per connection."""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, _record) -> None:  # pragma: no cover - driver hook
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def load_config() -> AppConfig:
    """Load configuration from environment (SQLite by default)."""
    database_url = os.getenv("DATABASE_URL", "sqlite:///massaction.db")
    engine = create_engine(database_url, future=True)
    enable_sqlite_foreign_keys(engine)
    session_factory: sessionmaker[Session] = sessionmaker(bind=engine, expire_on_commit=False)

    api_version = os.getenv("MASSACTION_API_VERSION", "58.0")
    org = OrgSettings(
        base_url=os.getenv("MASSACTION_ORG_BASE_URL", "http://localhost:8080"),
        access_token=os.getenv("MASSACTION_ORG_ACCESS_TOKEN", ""),
        api_version=api_version,
        timeout_seconds=float(os.getenv("MASSACTION_REQUEST_TIMEOUT_SECONDS", 30)),
    )

    signing_key = os.getenv("JWT_SIGNING_KEY", "")
    if not signing_key:
        raise RuntimeError("JWT_SIGNING_KEY is not configured")

    init_db(engine)

    return AppConfig(
        database_url=database_url,
        engine=engine,
        session_factory=session_factory,
        namespace=os.getenv("MASSACTION_NAMESPACE", ""),
        environment=os.getenv("MASSACTION_ENVIRONMENT", "production"),
        endpoints_path=Path(os.getenv("MASSACTION_ENDPOINTS_PATH", "config/endpoints.json")),
        test_endpoint_name=os.getenv(
            "MASSACTION_TEST_ENDPOINT_NAME", "Mass_Action_Test_Endpoint"
        ),
        org=org,
        admin_credentials_path=Path(
            os.getenv("ADMIN_CREDENTIALS_PATH", "config/runtime_credentials.json")
        ),
        jwt_signing_key=signing_key,
        admin_jwt_ttl_hours=int(os.getenv("ADMIN_JWT_TTL_HOURS", 24)),
        log_level=os.getenv("MASSACTION_LOG_LEVEL", "INFO"),
    )
