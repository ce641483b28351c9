import pytest
import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SECRET_KEY"] = "testing-secret-key"

from jobly.database import Base, configure_sqlite, get_db
from jobly.main import app
from fastapi.testclient import TestClient

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
configure_sqlite(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture(scope="session", autouse=True)
def setup_database():
    """Create tables once for the whole test session."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture(scope="function")
def db_session():
    """Get a clean database session for each test function with rollback safety."""
    connection = engine.connect()
    transaction = connection.begin()
    # Use sessionmaker with the active connection
    session = TestingSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()

@pytest.fixture(scope="function")
def companies(db_session):
    """Companies c1..c3 with 1..3 employees."""
    from jobly.models import Company

    rows = [
        Company(handle=f"c{i}", name=f"C{i}", description=f"Desc{i}",
                num_employees=i, logo_url=f"http://c{i}.img")
        for i in (1, 2, 3)
    ]
    db_session.add_all(rows)
    db_session.commit()
    return rows

@pytest.fixture(scope="function")
def jobs(db_session, companies):
    """Jobs j1 (c1, 100, 0.5), j2 (c2, no salary/equity), j3 (c3, 50, 0)."""
    from jobly.models import Job

    rows = [
        Job(title="j1", salary=100, equity=0.5, company_handle="c1"),
        Job(title="j2", salary=None, equity=None, company_handle="c2"),
        Job(title="j3", salary=50, equity=0, company_handle="c3"),
    ]
    db_session.add_all(rows)
    db_session.commit()
    return {job.title: job.id for job in rows}

@pytest.fixture(scope="function")
def users(db_session):
    """u1 is an admin, u2 a regular user; both use password 'password1'."""
    from jobly.repositories.user import UserRepository

    repo = UserRepository(db_session)
    for username, is_admin in (("u1", True), ("u2", False)):
        repo.register(
            {
                "username": username,
                "password": "password1",
                "firstName": username.upper(),
                "lastName": "Tester",
                "email": f"{username}@example.com",
            },
            is_admin=is_admin,
        )

@pytest.fixture(scope="function")
def admin_headers():
    from jobly.services.auth import create_token
    return {"Authorization": f"Bearer {create_token({'username': 'u1', 'isAdmin': True})}"}

@pytest.fixture(scope="function")
def user_headers():
    from jobly.services.auth import create_token
    return {"Authorization": f"Bearer {create_token({'username': 'u2', 'isAdmin': False})}"}

@pytest.fixture(scope="function")
def client(db_session):
    """Get a TestClient that uses the test database session via dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
