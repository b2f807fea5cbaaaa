import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from quizapp.main import app
from quizapp.database import get_db, Base
from quizapp.model.categories import Category
from quizapp.model.questions import Question, QuestionOption
from quizapp.model.quizzes import Quiz, QuizQuestion
from quizapp.model.users import User
from quizapp.router.auth_util import create_access_token, get_password_hash
from tests.utils import PASSWORD

# Test database (SQLite in-memory, one shared connection)
TEST_DATABASE_URL = "sqlite://"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def override_get_db(db_session):
    """Override the get_db dependency."""
    def _override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = _override_get_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client(override_get_db) -> TestClient:
    """Create a test client."""
    return TestClient(app)


def _make_user(db_session, user_id, username, is_admin=False) -> User:
    user = User(
        user_id=user_id,
        username=username,
        email=f"{username}@example.com",
        hashed_password=get_password_hash(PASSWORD),
        is_admin=is_admin,
        total_quizzes_taken=0,
        average_score=0.0,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def test_user(db_session) -> User:
    return _make_user(db_session, "100000000001", "student")


@pytest.fixture
def other_user(db_session) -> User:
    return _make_user(db_session, "100000000002", "another")


@pytest.fixture
def admin_user(db_session) -> User:
    return _make_user(db_session, "100000000003", "admin", is_admin=True)


@pytest.fixture
def auth_headers(test_user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(test_user.user_id)}"}


@pytest.fixture
def other_headers(other_user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(other_user.user_id)}"}


@pytest.fixture
def admin_headers(admin_user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(admin_user.user_id)}"}


@pytest.fixture
def category(db_session) -> Category:
    category = Category(name="Science", description="Physics, chemistry and biology")
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture
def make_quiz(db_session, admin_user, category):
    """Factory: a published quiz with `n` questions whose correct option is at `correct_index`."""
    def _make_quiz(n=5, correct_index=1, quiz_category=None, title="Basic Science Quiz", is_published=True) -> Quiz:
        quiz_category = quiz_category or category
        links = []
        for i in range(n):
            question = Question(
                text=f"Question {i + 1}?",
                category_id=quiz_category.category_id,
                options=[
                    QuestionOption(position=p, text=f"Option {p}", is_correct=(p == correct_index))
                    for p in range(4)
                ],
            )
            db_session.add(question)
            db_session.flush()
            links.append(QuizQuestion(question_id=question.question_id, position=i))
        quiz = Quiz(
            title=title,
            description="A quiz for tests",
            category_id=quiz_category.category_id,
            creator_id=admin_user.user_id,
            is_published=is_published,
            attempts=0,
            average_score=0.0,
            question_links=links,
        )
        db_session.add(quiz)
        db_session.commit()
        db_session.refresh(quiz)
        return quiz
    return _make_quiz
