"""
Store call guards — deadline checks and database error translation.
"""

from contextlib import contextmanager
from datetime import datetime

from django.db import DatabaseError, IntegrityError
from django.utils import timezone

from restockman.exceptions import PersistenceError


def check_deadline(deadline: datetime | None) -> None:
    """
    Refuse to start a store call after the caller's deadline.

    Raises:
        PersistenceError('DEADLINE_EXCEEDED'): If deadline is in the past
    """
    if deadline is not None and timezone.now() >= deadline:
        raise PersistenceError('DEADLINE_EXCEEDED', deadline=deadline)


@contextmanager
def persistence_guard(code: str, **data):
    """
    Translate database failures into PersistenceError(code).

    IntegrityError passes through untouched: uniqueness violations are
    handled (or turned into ConflictError) by the caller.
    """
    try:
        yield
    except IntegrityError:
        raise
    except DatabaseError as exc:
        raise PersistenceError(code, error=str(exc), **data) from exc
