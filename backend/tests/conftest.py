"""Test configuration and fixtures."""

import os
from datetime import datetime

# Must be set before app.database creates its engine
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("STATIC_DIR", "__no_static_dir__")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.auth import Account, AuthService, get_auth_service, hash_password
from app.models import AssignmentSubmission, SurveyRecord, User
from app.reports.router import get_agent_roster, get_teacher_allow_list


# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite:///:memory:"

TEST_ROSTER = {
    1001: "Agent One",
    1002: "Agent Two",
    1003: "Agent Three",
}

ADMIN = {"username": "admin", "password": "AdminPass1!", "role": "admin"}
VIEWER = {"username": "viewer", "password": "ViewerPass1!", "role": "viewer"}


@pytest.fixture(scope="function")
def engine():
    """Create a fresh in-memory database for each test."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine):
    """Create test database session."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db_session):
    """Factory adding a user; name parts default to empty."""
    def _make_user(first="", middle="", last="", role="teacher", gender="male", **kwargs):
        user = User(
            first_name=first,
            middle_name=middle,
            last_name=last,
            role=role,
            gender=gender,
            **kwargs,
        )
        db_session.add(user)
        db_session.commit()
        return user
    return _make_user


@pytest.fixture
def make_submission(db_session):
    """Factory adding an assignment submission."""
    def _make_submission(student, teacher, created_at, updated_at=None, status="passed",
                         feedback_files=None, feedback=None, attachments=None):
        submission = AssignmentSubmission(
            student_id=student.id,
            teacher_id=teacher.id,
            status=status,
            created_at=created_at,
            updated_at=updated_at or created_at,
            feedback_files=feedback_files if feedback_files is not None else [],
            feedback=feedback,
            attachments=attachments if attachments is not None else [],
        )
        db_session.add(submission)
        db_session.commit()
        return submission
    return _make_submission


@pytest.fixture
def make_survey(db_session):
    """Factory adding an install survey record."""
    def _make_survey(type, device_id, created_at=datetime(2024, 3, 10, 12, 0), agent_id=None):
        record = SurveyRecord(type=type, agent_id=agent_id, device_id=device_id, created_at=created_at)
        db_session.add(record)
        db_session.commit()
        return record
    return _make_survey


@pytest.fixture(scope="session")
def auth_service():
    """AuthService over two fixed accounts. Low bcrypt cost keeps tests fast."""
    accounts = [
        Account(username=user["username"], password=hash_password(user["password"], rounds=4), role=user["role"])
        for user in (ADMIN, VIEWER)
    ]
    return AuthService(accounts, secret_key="test-secret")


@pytest.fixture
def admin_headers(auth_service):
    token = auth_service.create_access_token(auth_service.accounts["admin"])
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def viewer_headers(auth_service):
    token = auth_service.create_access_token(auth_service.accounts["viewer"])
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def allow_list():
    """Teacher allow-list seen by the app; tests may append names."""
    return []


@pytest.fixture
def client(db_session, auth_service, allow_list):
    """TestClient with database, accounts and lookup tables overridden."""
    from app.main import app

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    app.dependency_overrides[get_agent_roster] = lambda: dict(TEST_ROSTER)
    app.dependency_overrides[get_teacher_allow_list] = lambda: tuple(allow_list)

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
