"""Pytest configuration and fixtures."""
import itertools
import os

# Must be set before bloodconnect reads its settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from bloodconnect.core.security import create_access_token, hash_password
from bloodconnect.database.database import Base, get_db, init_db
from bloodconnect.main import app
from bloodconnect.models.user import User, UserRole
from bloodconnect.services.portal_store import PortalStore


@pytest.fixture
def engine():
    """Fresh in-memory schema per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db):
    return PortalStore(db)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _create_user(db, email, role, password="secret123"):
    user = User(
        email=email,
        hashed_password=hash_password(password),
        name=f"{role.value.title()} User",
        role=role,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def _auth_headers(user):
    token = create_access_token({"sub": str(user.id), "role": user.role.value})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_user(db):
    return _create_user(db, "admin@bloodconnect.com", UserRole.ADMIN)


@pytest.fixture
def admin_headers(admin_user):
    return _auth_headers(admin_user)


@pytest.fixture
def hospital_headers(db):
    return _auth_headers(_create_user(db, "hospital@bloodconnect.com", UserRole.HOSPITAL))


@pytest.fixture
def make_donor(store):
    """Register a donor (optionally approve/reject it) with sensible defaults."""
    counter = itertools.count(1)

    def _make(approval=None, **overrides):
        n = next(counter)
        data = {
            "name": f"Donor {n}",
            "email": f"donor{n}@gmail.com",
            "phone": "03001234567",
            "blood_group": "O+",
            "city": "Islamabad",
        }
        data.update(overrides)
        donor = store.create_donor(data)
        if approval:
            donor = store.set_donor_approval(donor.id, approval)
        return donor

    return _make


@pytest.fixture
def make_request(store):
    """Create a blood request, optionally approving it and moving its status."""
    counter = itertools.count(1)

    def _make(approval=None, status=None, **overrides):
        n = next(counter)
        data = {
            "patient_name": f"Patient {n}",
            "blood_group": "O+",
            "units_needed": 2,
            "urgency_level": "urgent",
            "location": "Islamabad",
            "hospital_name": "PIMS",
            "contact_person": "Dr. Khan",
            "contact_phone": "03007654321",
        }
        data.update(overrides)
        request = store.create_blood_request(data)
        if approval:
            request = store.set_request_approval(request.id, approval)
        if status:
            request = store.set_request_status(request.id, status)
        return request

    return _make
