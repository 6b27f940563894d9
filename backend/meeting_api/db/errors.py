"""
Typed store errors.

SQLAlchemy reports every constraint failure as `IntegrityError`; route
handlers need to tell a duplicate row from a dangling reference, so
collection functions re-raise them as the classes below (chained to the
original exception).
"""

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

# PostgreSQL SQLSTATE codes
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


class StoreError(Exception):
    """Base class for store failures that callers may map to a status."""

    default_message = "Store operation failed"

    def __init__(self, message: str = ""):
        super().__init__(message or self.default_message)


class DuplicateRecordError(StoreError):
    default_message = "Record already exists"


class ForeignKeyViolationError(StoreError):
    default_message = "Referenced record does not exist"


class RecordNotFoundError(StoreError):
    default_message = "Record not found"


def classify_integrity_error(exc: IntegrityError) -> Exception:
    """Map an IntegrityError onto a typed store error, or return it as is."""
    orig = exc.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    text = str(orig).lower()

    if code == UNIQUE_VIOLATION or "unique constraint" in text or "duplicate key" in text:
        return DuplicateRecordError()
    if code == FOREIGN_KEY_VIOLATION or "foreign key constraint" in text:
        return ForeignKeyViolationError()
    return exc


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """Commit on success; roll back and classify constraint failures."""
    try:
        yield db
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        classified = classify_integrity_error(exc)
        if classified is exc:
            raise
        raise classified from exc
    except Exception:
        db.rollback()
        raise
