"""
Shared fixtures: in-memory SQLite database, API client and users
"""
import os

# Must be set before any app module reads settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["GEMINI_API_KEY"] = ""
os.environ["REDIS_URL"] = "redis://127.0.0.1:1/0"
os.environ["RATE_LIMIT_PER_MINUTE"] = "100000"
os.environ["RATE_LIMIT_PER_HOUR"] = "100000"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

from app.database import Base, SessionLocal, engine
from app.main import app
from app.models import Assessment, LearningModule, User, UserRole
from app.utils.rate_limiter import rate_limiter


@pytest.fixture(autouse=True)
def reset_database():
    """Fresh schema for every test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    rate_limiter.reset()
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


def auth(user):
    """Identity header for requests made as the given user"""
    return {"X-User-Id": str(user.id)}


@pytest.fixture
def make_user(db):
    def _make_user(role=UserRole.STUDENT, email=None, name=None):
        count = db.query(User).count()
        user = User(
            email=email or f"{role.value}{count}@example.com",
            name=name or f"{role.value.title()} {count}",
            role=role.value,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def student(make_user):
    return make_user(UserRole.STUDENT, email="student@example.com", name="Sam Student")


@pytest.fixture
def teacher(make_user):
    return make_user(UserRole.TEACHER, email="teacher@example.com", name="Tess Teacher")


@pytest.fixture
def admin(make_user):
    return make_user(UserRole.ADMIN, email="admin@example.com", name="Ada Admin")


def build_questions(count):
    """Question bank where the correct answer is always the first option"""
    return [
        {
            "id": f"q{i}",
            "question": f"Question {i}?",
            "options": [f"right{i}", f"wrong{i}"],
            "correct_answer": f"right{i}",
            "explanation": "",
        }
        for i in range(1, count + 1)
    ]


@pytest.fixture
def make_assessment(db):
    def _make_assessment(question_count=5, total_points=100.0, title="Digital Basics"):
        assessment = Assessment(
            title=title,
            description="Basic digital skills",
            skill_category="basic",
            questions=build_questions(question_count),
            total_points=total_points,
            time_limit=15,
        )
        db.add(assessment)
        db.commit()
        db.refresh(assessment)
        return assessment

    return _make_assessment


@pytest.fixture
def make_module(db):
    def _make_module(lesson_count=3, title="Getting Started", order=1):
        module = LearningModule(
            title=title,
            description="Computer basics",
            skill_level="basic",
            lessons=[
                {"id": f"lesson{i}", "title": f"Lesson {i}", "content": None,
                 "video_url": None, "resource_url": None}
                for i in range(1, lesson_count + 1)
            ],
            duration=60,
            order=order,
        )
        db.add(module)
        db.commit()
        db.refresh(module)
        return module

    return _make_module
