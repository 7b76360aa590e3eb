"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from src.database import Base, get_db
from src.main import app
from src.models.family_recipe import FamilyRecipe
from src.models.recipe import UserRecipe
from src.models.user import User
from src.services.step_coordinator import StepCoordinator


class AuthHeaders(dict):
    """Dict subclass that also stores user_id and username."""

    def __init__(self, *args, user_id: int | None = None, username: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.username = username


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace(
        "/recipe_book", "/recipe_book_test"
    )
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        # For PostgreSQL, create the test database
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    # Don't drop database - just leave it for next run (each test cleans up after itself)


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def session_factory():
    """Factory for extra sessions (one per thread in concurrency tests)."""
    return TestingSessionLocal


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register(client, username: str, password: str = "pass1!") -> AuthHeaders:
    """Register a user through the API and return bearer headers."""
    response = client.post(
        "/api/v1/auth/register",
        json={
            "username": username,
            "first_name": "Test",
            "last_name": "User",
            "country": "Israel",
            "email": f"{username.lower()}@example.com",
            "password": password,
        },
    )
    assert response.status_code == 201, response.text
    data = response.json()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['access_token']}"},
        user_id=data["user"]["id"],
        username=username,
    )


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return register(client, "tester")


@pytest.fixture
def other_auth_headers(client):
    """A second user, for ownership checks."""
    return register(client, "intruder")


# --- Service-level fixtures (no HTTP) ---


@pytest.fixture
def make_user(db):
    """Create users directly in the database."""

    def _make_user(username: str = "cook") -> User:
        user = User(
            username=username,
            first_name="Home",
            last_name="Cook",
            country="Israel",
            email=f"{username}@example.com",
            password_hash="not-a-real-hash",
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def user(make_user):
    return make_user("cook")


@pytest.fixture
def other_user(make_user):
    return make_user("guest")


@pytest.fixture
def make_recipe(db):
    """Create a personal or family recipe with numbered steps and the author's progress."""

    def _make_recipe(owner: User, steps: list[str], family: bool = False):
        if family:
            recipe = FamilyRecipe(user_id=owner.id, title="Grandma's soup", owner_name="Grandma")
        else:
            recipe = UserRecipe(user_id=owner.id, title="Pasta")
        db.add(recipe)
        db.flush()
        StepCoordinator(db).author_steps(recipe.recipe_ref, steps, owner.id)
        db.commit()
        db.refresh(recipe)
        return recipe

    return _make_recipe
