"""Shared fixtures: in-memory database, app client and bearer tokens."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AI_PROVIDER"] = "heuristic"
os.environ["SECRET_KEY"] = "test-secret-key"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mockprep import models  # noqa: F401
from mockprep.config.database import Base, get_db
from mockprep.main import app
from mockprep.models import InterviewSession
from mockprep.services.evaluator import HeuristicProvider, get_evaluator
from mockprep.services.token import create_token


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def evaluator():
    return HeuristicProvider()


@pytest.fixture
def client(session_factory, evaluator):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_evaluator] = lambda: evaluator
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def make(user_id: str = "user-1") -> dict[str, str]:
        return {"Authorization": f"Bearer {create_token(user_id)}"}

    return make


@pytest.fixture
def interview(db):
    """A persisted Java session owned by user-1 with two snapshot questions."""
    session = InterviewSession(
        user_id="user-1",
        domain="Java",
        questions=[
            {
                "question_id": "java-1",
                "question_text": "Explain the JVM memory model.",
                "category": "Core Java",
                "difficulty": "Medium",
            },
            {
                "question_id": "java-2",
                "question_text": "What is a HashMap?",
                "category": "Collections",
                "difficulty": "Easy",
            },
        ],
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    return session
