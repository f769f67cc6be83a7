import logging
from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker, Session

from edconnect_backend.settings import settings

logger = logging.getLogger(__name__)

def _database_options(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,
        "pool_size": 10,
        "max_overflow": 5,
        "pool_timeout": 30,
        "pool_recycle": 300
    }

_engine = create_engine(settings.DATABASE_URL, **_database_options(settings.DATABASE_URL))
_SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_engine)

def init_db():
    """Create all tables on the configured engine."""
    from edconnect_backend.model import Base

    Base.metadata.create_all(bind=_engine)
    logger.info(f"Database schema ready at {_engine.url.render_as_string(hide_password=True)}")

def get_db() -> Generator[Session, None, None]:

    db = _SessionLocal()

    try:
        yield db
    except OperationalError:
        logger.error("Database connection failed")
        db.rollback()
        raise
    finally:
        db.close()
