import logging
from contextlib import contextmanager
from typing import Iterator
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from edconnect_backend.api.exceptions import ConflictException, NotFoundException
from edconnect_backend.model.academics import InvoiceTotalMismatch
from edconnect_backend.repositories.base import (
    ConstraintViolationError,
    DuplicateError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


@contextmanager
def unit_of_work(db: Session) -> Iterator[Session]:
    """
    Run a block as one transaction.

    Commits when the block completes, rolls back on any exception and
    re-raises repository failures as the matching HTTP exception.
    """
    try:
        yield db
        db.commit()
    except NotFoundError as e:
        db.rollback()
        raise NotFoundException(detail={"entity": e.entity_type, "id": e.entity_id}) from e
    except (ConstraintViolationError, DuplicateError, InvoiceTotalMismatch, IntegrityError) as e:
        db.rollback()
        logger.warning(f"Constraint violation: {e}")
        raise ConflictException(detail=str(e)) from e
    except Exception:
        db.rollback()
        raise
