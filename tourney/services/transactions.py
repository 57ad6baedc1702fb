from typing import Callable, TypeVar

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from tourney.core.exceptions import TransactionConflictError
from tourney.core.logger import setup_logger

logger = setup_logger(__name__)

T = TypeVar("T")

# Errors that mean "another writer got there first": the work is re-run on fresh reads.
# StaleDataError  - a version_id_col guarded UPDATE matched no row
# IntegrityError  - a concurrent insert took the same key
# OperationalError - transient driver failure, e.g. SQLite "database is locked"
RETRYABLE_ERRORS = (StaleDataError, IntegrityError, OperationalError)


def run_in_transaction(db: Session, work: Callable[[Session], T], max_attempts: int = 5, label: str = "transaction") -> T:
    """
    Run ``work(db)`` and commit it as one atomic unit, retrying on write conflicts.

    ``work`` must do all of its reads through ``db`` so that every attempt
    re-reads current state after a rollback. Domain errors (``WalletError``)
    roll back and propagate immediately. Conflicts roll back and retry up to
    ``max_attempts`` times, after which ``TransactionConflictError`` is raised.
    The caller sees either a committed result or exactly one error.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    last_error = None
    for attempt in range(1, max_attempts + 1):
        try:
            result = work(db)
            db.commit()
            if attempt > 1:
                logger.info(f"{label} committed after {attempt} attempts")
            return result
        except RETRYABLE_ERRORS as e:
            db.rollback()
            last_error = e
            logger.warning(f"{label} conflict on attempt {attempt}/{max_attempts}: {type(e).__name__}")
        except Exception:
            # WalletError and anything unexpected: undo this attempt and surface it
            db.rollback()
            raise

    logger.error(f"{label} gave up after {max_attempts} attempts: {last_error}", exc_info=last_error)
    raise TransactionConflictError() from last_error
