import os

# Must be set before `courseapp` is imported: settings and the engine are read at import time.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ADMIN_EMAILS"] = "listed-admin@ucsb.edu"

import pytest
from sqlmodel import Session

from courseapp import services
from courseapp.database import create_db_and_tables, drop_db_and_tables, engine, get_session
from courseapp.main import app


@pytest.fixture(autouse=True)
def session():
    """Fresh in-memory tables per test; requests share this session."""
    drop_db_and_tables()
    create_db_and_tables()
    with Session(engine) as s:
        app.dependency_overrides[get_session] = lambda: s
        yield s
    app.dependency_overrides.clear()


def bearer(user) -> dict:
    return {"Authorization": f"Bearer {services.issue_token(user)}"}


@pytest.fixture
def regular_user(session):
    return services.AuthService(session).register("student@ucsb.edu", "pass123", "Regular Student")


@pytest.fixture
def admin_user(session):
    return services.AuthService(session).register("admin@ucsb.edu", "pass123", "Admin", admin=True)


@pytest.fixture
def user_headers(regular_user):
    return bearer(regular_user)


@pytest.fixture
def admin_headers(admin_user):
    return bearer(admin_user)
