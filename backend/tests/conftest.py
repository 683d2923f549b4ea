import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from jobly.database import get_db, get_engine, init_db
from jobly.main import app
from jobly.services.auth_service import auth_service
from jobly.utils.sql import execute


def _seed(db):
    for n in (1, 2, 3):
        execute(
            db,
            """
            INSERT INTO companies (handle, name, num_employees, description, logo_url)
            VALUES (?1, ?2, ?3, ?4, ?5)
            """,
            [f"c{n}", f"C{n}", n, f"Desc{n}", f"http://c{n}.img"],
        )
    job_ids = []
    for title, salary, equity in [("j1", 100, "0.1"), ("j2", 200, "0.2"), ("j3", 300, "0")]:
        rows = execute(
            db,
            "INSERT INTO jobs (title, salary, equity, company_handle) VALUES (?1, ?2, ?3, 'c1') RETURNING id",
            [title, salary, equity],
        )
        job_ids.append(rows[0]["id"])
    db.commit()
    return job_ids


@pytest.fixture
def test_db(tmp_path):
    db_path = tmp_path / "jobly_test.sqlite"
    engine = get_engine(db_path)
    TestSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    init_db(db_path)

    def override_get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestSession
    app.dependency_overrides.clear()
    engine.dispose()


@pytest.fixture
def db(test_db):
    session = test_db()
    yield session
    session.close()


@pytest.fixture
def job_ids(db):
    return _seed(db)


@pytest.fixture
def fresh_auth_service():
    """Reset the token registry for each test."""
    auth_service.revoke_all()
    yield auth_service
    auth_service.revoke_all()


@pytest.fixture
def admin_token(db, fresh_auth_service):
    user = fresh_auth_service.register(db, "admin", "password-admin", "Ad", "Min", "admin@user.com", is_admin=True)
    return fresh_auth_service.issue_token(user)


@pytest.fixture
def u1_token(db, fresh_auth_service):
    user = fresh_auth_service.register(db, "u1", "password1", "U1F", "U1L", "user1@user.com")
    return fresh_auth_service.issue_token(user)


@pytest.fixture
def client(test_db, job_ids, fresh_auth_service):
    return TestClient(app)


@pytest.fixture
def dangling_job_id(db, job_ids):
    """j1 pointed at a company handle that does not exist."""
    execute(db, "PRAGMA foreign_keys=OFF")
    execute(db, "UPDATE jobs SET company_handle = 'ghost' WHERE id = ?1", [job_ids[0]])
    db.commit()
    return job_ids[0]
