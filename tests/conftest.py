"""Shared fixtures for the JusCRM test-suite."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest

TEST_DB_PATH = Path(tempfile.gettempdir()) / "juscrm_api_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["APP_TIMEZONE"] = "America/Sao_Paulo"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)

from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from juscrm.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from juscrm.domain.entities import ROLE_ADMIN, ROLE_CLIENT, ROLE_LAWYER  # noqa: E402
from juscrm.infrastructure import models  # noqa: E402,F401
from juscrm.infrastructure.database import Base  # noqa: E402
from juscrm.infrastructure.repositories import RoleRepository  # noqa: E402
from juscrm.application.use_cases.users import create_user  # noqa: E402


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def session():
    """Yield a session bound to a private in-memory database."""

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = factory()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


_ROLE_NAMES = {ROLE_ADMIN: "Administrador", ROLE_LAWYER: "Advogado", ROLE_CLIENT: "Cliente"}


def _account_factory(db_session):
    def _create(email: str, *, alias: str = ROLE_LAWYER, password: str = "secret123"):
        role = RoleRepository(db_session).ensure(name=_ROLE_NAMES.get(alias, alias), alias=alias)
        return create_user(
            db_session,
            name=email.split("@", 1)[0].title(),
            role_id=role.id,
            email=email,
            password=password,
            must_change_password=False,
        )

    return _create


@pytest.fixture
def make_user(session):
    """Return a factory creating active users with the given role alias."""

    return _account_factory(session)


@pytest.fixture
def client():
    """Return a test client bound to a freshly created file database."""

    from fastapi.testclient import TestClient

    from juscrm.infrastructure.database import engine, initialize_database
    from main import create_app

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    with TestClient(create_app()) as test_client:
        yield test_client
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(client):
    """Session on the database used by ``client``."""

    from juscrm.infrastructure.database import SessionLocal

    with SessionLocal() as db_session:
        yield db_session


@pytest.fixture
def create_account(db):
    """Create an account directly in the API database."""

    return _account_factory(db)


@pytest.fixture
def login(client):
    """Return a helper producing bearer headers for ``email``/``password``."""

    def _login(email: str, password: str = "secret123") -> dict[str, str]:
        response = client.post("/auth/token", data={"username": email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _login
