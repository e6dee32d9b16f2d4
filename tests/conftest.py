"""
Test configuration and fixtures.

Each test gets a fresh in-memory SQLite database and a fake pizza factory.
"""
import os
import pytest
from typing import Generator

import httpx
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

# Configure the app before importing it
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "pizza-service-test-secret-key-0123456789abcdef"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"

from pizza_service.main import app
from pizza_service.db.base import Base
from pizza_service.db.session import get_db
from pizza_service.models.franchise import Franchise, Store
from pizza_service.models.menu import MenuItem
from pizza_service.models.user import Role, User, UserRole
from pizza_service.services.factory import FactoryClient, get_factory_client
from pizza_service.services.users import UserService


class FakeFactory:
    """Stands in for the pizza factory; records requests and replies as configured."""

    def __init__(self):
        self.status_code = 200
        self.body = {"jwt": "factory.header.signature", "reportUrl": "https://factory.test/report/1"}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.body)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a database session backed by a fresh in-memory schema."""
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def fake_factory() -> FakeFactory:
    return FakeFactory()


@pytest.fixture(scope="function")
def client(db: Session, fake_factory: FakeFactory) -> Generator[TestClient, None, None]:
    """Create test client with database session and factory overrides."""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_factory_client] = lambda: FactoryClient(
        base_url="https://factory.test",
        api_key="test-factory-key",
        transport=httpx.MockTransport(fake_factory),
    )

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def diner(db: Session) -> User:
    return UserService(db).add_user("pizza diner", "d@jwt.com", "diner")


@pytest.fixture
def other_diner(db: Session) -> User:
    return UserService(db).add_user("other diner", "o@jwt.com", "other")


@pytest.fixture
def admin(db: Session) -> User:
    return UserService(db).add_user("pizza admin", "a@jwt.com", "admin", roles=[(Role.ADMIN, None)])


@pytest.fixture
def franchise(db: Session) -> Franchise:
    """A franchise with one store."""
    franchise = Franchise(name="pizzaPocket")
    db.add(franchise)
    db.flush()
    db.add(Store(franchise_id=franchise.id, name="SLC"))
    db.commit()
    db.refresh(franchise)
    return franchise


@pytest.fixture
def store(franchise: Franchise) -> Store:
    return franchise.stores[0]


@pytest.fixture
def franchisee(db: Session, franchise: Franchise) -> User:
    """A user who administers `franchise`."""
    user = UserService(db).add_user("pizza franchisee", "f@jwt.com", "franchisee")
    db.add(UserRole(user_id=user.id, role=Role.FRANCHISEE.value, object_id=franchise.id))
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def menu_item(db: Session) -> MenuItem:
    item = MenuItem(title="Veggie", description="A garden of delight", image="pizza1.png", price=0.05)
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def login(client: TestClient, email: str, password: str) -> dict:
    """Log in and return the Authorization header for the new token."""
    response = client.put("/api/auth", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def diner_headers(client: TestClient, diner: User) -> dict:
    return login(client, "d@jwt.com", "diner")


@pytest.fixture
def admin_headers(client: TestClient, admin: User) -> dict:
    return login(client, "a@jwt.com", "admin")


@pytest.fixture
def franchisee_headers(client: TestClient, franchisee: User) -> dict:
    return login(client, "f@jwt.com", "franchisee")
