"""
Pytest configuration and fixtures for all tests.
"""

import os
import sys
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Ensure edconnect_backend is importable
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))
os.environ.setdefault("DATABASE_URL", "sqlite://")

from edconnect_backend.interface.seed import SchoolSeed
from edconnect_backend.model import Base
from edconnect_backend.model.enums import UserRole
from edconnect_backend.tests.fixtures import make_principal
from edconnect_backend.seeder import seed_database
from edconnect_backend.settings import settings


@pytest.fixture
def engine():
    """Fresh in-memory database shared by every connection of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    """Create a new database session for a test."""
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def school(session):
    """
    Session holding the demo school from the packaged seed file.

    Lan is homeroom teacher of 1A (and teaches Toán there) and teaches
    Tiếng Anh in 2B; Hùng is homeroom teacher of 2B and teaches Tiếng Việt
    there; Mai teaches Tiếng Anh in 1A. Bình is the parent of An (1A) and
    Chi (2B), Hoa the parent of Đức (1A).
    """
    seed_database(session, SchoolSeed.read_seed_from_file(settings.SEED_FILE))
    return session


@pytest.fixture
def admin():
    return make_principal("admin01", UserRole.ADMIN)


@pytest.fixture
def lan():
    return make_principal("gv_lan", UserRole.TEACHER)


@pytest.fixture
def hung():
    return make_principal("gv_hung", UserRole.TEACHER)


@pytest.fixture
def mai():
    return make_principal("gv_mai", UserRole.TEACHER)


@pytest.fixture
def binh():
    return make_principal("ph_binh", UserRole.PARENT)


@pytest.fixture
def hoa():
    return make_principal("ph_hoa", UserRole.PARENT)
